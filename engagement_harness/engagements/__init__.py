# engagement_harness/engagements/__init__.py
from .bridge import EngagementBridge, EngagementPreview, EngagementSubscription

__all__ = ["EngagementBridge", "EngagementPreview", "EngagementSubscription"]
