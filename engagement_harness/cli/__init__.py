# engagement_harness/cli/__init__.py
