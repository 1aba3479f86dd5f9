# engagement_harness/main.py
from fastapi import FastAPI
from contextlib import asynccontextmanager
import logging
from typing import Optional
from dotenv import load_dotenv
load_dotenv()

from .settings import Settings, settings as default_settings
from .harness import EngagementHarness
from .sdk import AbstractEngagementSDK
from .activity_log.endpoints import logs_router
from .engagements.endpoints import engagement_router
from .events.endpoints import events_router
from .forms.endpoints import form_router
from .sessions.endpoints import session_router

if not logging.getLogger().hasHandlers():
    logging.basicConfig(
        level=default_settings.effective_log_level,
        format='%(asctime)s - %(name)s [%(levelname)s] - %(message)s'
    )

logger = logging.getLogger(__name__)


def create_app(
    app_settings: Optional[Settings] = None,
    sdk: Optional[AbstractEngagementSDK] = None,
) -> FastAPI:
    """
    Build the harness HTTP surface.

    The lifespan owns exactly one harness instance; `sdk` lets callers inject
    a collaborator instead of the one named in settings.
    """
    app_settings = app_settings or default_settings

    @asynccontextmanager
    async def harness_lifespan(app_instance: FastAPI):
        logger.info("Application startup initiated.")
        harness = EngagementHarness(app_settings, sdk=sdk)
        await harness.start()
        app_instance.state.harness = harness
        logger.info(f"Harness started with SDK backend: {type(harness.sdk).__name__}")
        try:
            yield
        finally:
            logger.info("Application shutdown initiated.")
            app_instance.state.harness = None
            await harness.shutdown()

    app = FastAPI(
        title=app_settings.app_name,
        debug=app_settings.debug_mode,
        lifespan=harness_lifespan,
    )
    app.include_router(form_router)
    app.include_router(session_router)
    app.include_router(events_router)
    app.include_router(logs_router)
    app.include_router(engagement_router)

    @app.get("/health", tags=["Health"])
    async def health_check():
        return {"status": "ok", "app_name": app_settings.app_name}

    return app


app = create_app()
