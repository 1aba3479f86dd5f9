# engagement_harness/events/__init__.py
from .dispatcher import EventDispatcher

__all__ = ["EventDispatcher"]
