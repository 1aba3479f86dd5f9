# engagement_harness/__init__.py
"""Interactive test harness for a client engagement SDK."""

__version__ = "0.1.0"
