"""Global test fixtures for the contact center samples."""

from collections.abc import Iterator
from pathlib import Path

import pytest

from contact_center.config import Settings, get_settings


@pytest.fixture
def settings() -> Settings:
    """Settings with placeholder credentials and no .env lookup."""
    return Settings(
        _env_file=None,
        use_mock=True,
        api_key="test-api-key",
        api_url="https://api.example.test/",
        client_id="client",
        client_secret="secret",
        agent_username="agent",
        agent_password="password",
        authorization_token="auth-code-token",
        search_term="smith",
        completion_timeout_seconds=5.0,
        engagement_api_key="engagement-key",
        engagement_base_path="https://engage.example.test",
        callback_service_name="callback-service",
        callback_phone_number="+15551234567",
    )


@pytest.fixture(autouse=True)
def clear_settings_cache() -> Iterator[None]:
    """Never leak cached settings between tests."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    """Auto-apply test markers based on directory."""
    for item in items:
        path = Path(str(item.fspath))
        parts = path.parts
        if "tests" in parts:
            if "unit" in parts:
                item.add_marker(pytest.mark.unit)
            elif "e2e" in parts:
                item.add_marker(pytest.mark.e2e)
