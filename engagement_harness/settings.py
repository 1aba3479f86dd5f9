# engagement_harness/settings.py
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field
from typing import Optional
import logging
from pathlib import Path

logger = logging.getLogger(__name__)
if not logging.getLogger().hasHandlers():
    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s SETTINGS.PY - [%(levelname)s] - %(message)s'
    )

# settings.py lives at <project>/engagement_harness/settings.py
PROJECT_ROOT = Path(__file__).parent.parent.resolve()
DOTENV_PATH = PROJECT_ROOT / ".env"

if DOTENV_PATH.exists():
    logger.info(f"SETTINGS.PY: .env file FOUND at explicit path: {DOTENV_PATH}")
else:
    logger.info(
        f"SETTINGS.PY: .env file NOT FOUND at explicit path: {DOTENV_PATH}. "
        "Will rely on OS env vars or defaults."
    )


class Settings(BaseSettings):
    """Harness bootstrap settings, read once at process start."""

    app_name: str = "Engagement Harness"
    debug_mode: bool = False
    log_level: str = "INFO"

    # Static bootstrap inputs for the SDK session
    app_id: str = Field(default="", description="Default application identifier shown in the form.")
    api_key: Optional[str] = Field(default=None, description="API token handed to the SDK on session creation.")
    default_user_id: str = Field(default="", description="Default user identifier shown in the form.")
    deployment: Optional[str] = Field(default=None, description="SDK deployment name (e.g. dev, stage).")
    container_id: str = "engagement-placeholder"

    # SDK backend selection
    sdk_backend: str = Field(default="loopback", description="Either 'loopback' or 'http'.")
    sdk_base_url: str = "http://127.0.0.1:8090"
    sdk_timeout_seconds: float = 30.0
    sdk_poll_interval_seconds: float = 2.0
    loopback_latency_seconds: float = 0.05

    # Form debounce windows
    debounce_window_ms: int = 500
    identity_debounce_window_ms: int = 1000
    default_event_payload: str = "{}"

    model_config = SettingsConfigDict(
        env_file=DOTENV_PATH if DOTENV_PATH.exists() else None,
        extra="ignore",
        env_file_encoding='utf-8'
    )

    @property
    def effective_log_level(self) -> str:
        return "DEBUG" if self.debug_mode else self.log_level.upper()


settings = Settings()

logger.info(
    f"SETTINGS.PY: app_id: '{settings.app_id}', default_user_id: '{settings.default_user_id}', "
    f"api_key: {'********' if settings.api_key else 'None'}"
)
logger.info(
    f"SETTINGS.PY: sdk_backend: '{settings.sdk_backend}', deployment: '{settings.deployment}', "
    f"debounce: {settings.debounce_window_ms}ms / identity: {settings.identity_debounce_window_ms}ms"
)
