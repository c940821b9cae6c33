"""Agent authentication against the vendor OAuth2 endpoint."""

import base64
import logging
from typing import Protocol

import httpx

from contact_center.config import Settings, get_settings
from contact_center.services.errors import AuthenticationError

logger = logging.getLogger(__name__)


def build_basic_authorization(client_id: str, client_secret: str) -> str:
    """Build the ``Authorization`` header value for the client credentials."""
    credentials = f"{client_id}:{client_secret}".encode()
    return "Basic " + base64.b64encode(credentials).decode("ascii")


class AuthServiceProtocol(Protocol):
    """Protocol for token providers."""

    async def retrieve_token(self, username: str, password: str) -> str:
        """
        Exchange agent credentials for an access token.

        Args:
            username: Agent user name
            password: Agent password

        Returns:
            The OAuth2 access token
        """
        ...


class AuthService(AuthServiceProtocol):
    """Password-grant token retrieval over HTTP."""

    def __init__(
        self,
        settings: Settings | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._settings = settings or get_settings()
        self._transport = transport

    async def retrieve_token(self, username: str, password: str) -> str:
        settings = self._settings
        headers = {
            "Authorization": build_basic_authorization(settings.client_id, settings.client_secret),
            "Accept": "application/json",
            "x-api-key": settings.api_key,
        }
        form = {
            "grant_type": "password",
            "scope": "*",
            "client_id": settings.client_id,
            "username": username,
            "password": password,
        }

        async with httpx.AsyncClient(
            base_url=f"{settings.api_url}/auth/v3",
            follow_redirects=False,
            timeout=settings.http_timeout_seconds,
            transport=self._transport,
        ) as client:
            try:
                resp = await client.post("/oauth/token", headers=headers, data=form)
            except httpx.HTTPError as exc:
                raise AuthenticationError(f"Token request failed: {exc}") from exc

        if resp.status_code >= 300:
            raise AuthenticationError(
                f"Token request rejected: {resp.text or resp.reason_phrase}",
                status_code=resp.status_code,
            )

        token = resp.json().get("access_token")
        if not token:
            raise AuthenticationError("Token response carried no access_token", resp.status_code)

        logger.info("Retrieved access token for %s", username)
        return token


class MockAuthService(AuthServiceProtocol):
    """Mock token provider for development and testing."""

    def __init__(self, token: str = "mock-access-token", fail: bool = False):
        self.token = token
        self.fail = fail
        self.requests: list[str] = []

    async def retrieve_token(self, username: str, password: str) -> str:
        self.requests.append(username)
        if self.fail:
            raise AuthenticationError("Invalid credentials", status_code=401)
        return self.token
