# engagement_harness/sessions/__init__.py
"""
SDK session lifecycle for the harness.

This module provides the session key model and the state machine that owns
the single current session and its engagement subscription.
"""

from .models import SessionKey, SessionState, SessionStatus
from .session_manager import SessionManager

__all__ = [
    "SessionKey",
    "SessionState",
    "SessionStatus",
    "SessionManager",
]
