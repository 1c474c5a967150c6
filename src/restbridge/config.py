import logging

from pydantic import BaseModel
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    REDIS_URL: str = "redis://localhost:6379/0"
    APP_ENV: str = "development"
    LOG_LEVEL: str = "INFO"

    REST_API_EXECUTION_TIMEOUT_MS: int = 300_000
    REST_API_MAX_CONTENT_LENGTH_BYTES: int = 50 * 1024 * 1024
    REST_API_DEFAULT_USER_AGENT: str = "restbridge"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"


class PluginConfiguration(BaseModel):
    """Limits handed to a plugin when it is instantiated."""

    rest_api_execution_timeout_ms: int = 300_000
    rest_api_max_content_length_bytes: int = 50 * 1024 * 1024
    default_user_agent: str = "restbridge"

    @classmethod
    def from_settings(cls, source: "Settings" = None) -> "PluginConfiguration":
        source = source or settings
        return cls(
            rest_api_execution_timeout_ms=source.REST_API_EXECUTION_TIMEOUT_MS,
            rest_api_max_content_length_bytes=source.REST_API_MAX_CONTENT_LENGTH_BYTES,
            default_user_agent=source.REST_API_DEFAULT_USER_AGENT,
        )


def configure_logging(level: str = None) -> None:
    logging.basicConfig(
        level=(level or settings.LOG_LEVEL).upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


settings = Settings()
BROKER_URL = settings.REDIS_URL
RESULT_BACKEND = settings.REDIS_URL
