# engagement_harness/sdk/__init__.py
"""
Engagement SDK collaborator.

The harness only talks to the SDK through the abstract contract defined in
`interfaces`; `build_sdk` picks a concrete backend from settings.
"""

import logging

from ..settings import Settings
from .http_client import HttpEngagementSDK, HttpEngagementSession
from .interfaces import (
    AbstractEngagementSDK,
    AbstractEngagementSession,
    EngagementCallback,
    SessionOptions,
    Unsubscribe,
)
from .loopback import LoopbackEngagementSDK, LoopbackEngagementSession, render_engagement

logger = logging.getLogger(__name__)


def build_sdk(settings: Settings) -> AbstractEngagementSDK:
    """Instantiate the SDK backend named by `settings.sdk_backend`."""
    backend = settings.sdk_backend.lower()
    if backend == "loopback":
        logger.info("Using loopback engagement SDK.")
        return LoopbackEngagementSDK(latency_seconds=settings.loopback_latency_seconds)
    if backend == "http":
        return HttpEngagementSDK(
            base_url=settings.sdk_base_url,
            timeout_seconds=settings.sdk_timeout_seconds,
            poll_interval_seconds=settings.sdk_poll_interval_seconds,
        )
    raise ValueError(f"Unsupported sdk_backend: {settings.sdk_backend}")


__all__ = [
    "AbstractEngagementSDK",
    "AbstractEngagementSession",
    "EngagementCallback",
    "SessionOptions",
    "Unsubscribe",
    "HttpEngagementSDK",
    "HttpEngagementSession",
    "LoopbackEngagementSDK",
    "LoopbackEngagementSession",
    "render_engagement",
    "build_sdk",
]
