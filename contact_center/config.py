"""Application configuration."""

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # App
    app_name: str = "ContactCenterSamples"
    debug: bool = False
    log_level: str = "INFO"

    # Vendor services (mock by default)
    use_mock: bool = True

    # Workspace API
    api_key: str = "<apiKey>"
    api_url: str = "<apiUrl>"
    http_timeout_seconds: float = 30.0

    # Password grant
    client_id: str = "<clientId>"
    client_secret: str = "<clientSecret>"
    agent_username: str = "<agentUsername>"
    agent_password: str = "<agentPassword>"

    # Authorization code obtained elsewhere (target search)
    authorization_token: str = "<authorizationToken>"
    search_term: str = "<searchTerm>"

    # Call control
    completion_timeout_seconds: float | None = None

    # Engagement API (callback booking)
    engagement_api_key: str = "API_KEY"
    engagement_base_path: str = "API_BASEPATH"
    callback_service_name: str = "SERVICE_NAME"
    callback_phone_number: str = "PHONE_NUMBER"

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}

    @field_validator("api_url", "engagement_base_path", mode="after")
    @classmethod
    def strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")

    @field_validator("log_level", mode="after")
    @classmethod
    def normalize_log_level(cls, value: str) -> str:
        return value.upper()


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
