"""Real Workspace API service implementation."""

import inspect
import logging
from typing import Any

import httpx

from contact_center.config import Settings, get_settings
from contact_center.models.call import (
    Call,
    CallStateChanged,
    Dn,
    DnStateChanged,
    Target,
    User,
)
from contact_center.services.errors import WorkspaceApiError
from contact_center.services.workspace_protocol import (
    CallEventListener,
    DnEventListener,
    WorkspaceServiceProtocol,
)

logger = logging.getLogger(__name__)


class WorkspaceEventDispatcher:
    """Holds event listeners and delivers events to them in registration order."""

    def __init__(self) -> None:
        self._call_listeners: list[CallEventListener] = []
        self._dn_listeners: list[DnEventListener] = []

    def add_call_event_listener(self, listener: CallEventListener) -> None:
        """Register a listener for call state changes."""
        self._call_listeners.append(listener)

    def add_dn_event_listener(self, listener: DnEventListener) -> None:
        """Register a listener for DN state changes."""
        self._dn_listeners.append(listener)

    async def publish_call_event(self, event: CallStateChanged) -> None:
        logger.debug("Call %s is %s", event.call.id, event.call.state.value)
        for listener in list(self._call_listeners):
            await self._invoke(listener, event)

    async def publish_dn_event(self, event: DnStateChanged) -> None:
        logger.debug("DN %s work mode %s", event.dn.number, event.dn.work_mode.value)
        for listener in list(self._dn_listeners):
            await self._invoke(listener, event)

    async def _invoke(self, listener: Any, event: Any) -> None:
        # A failing listener must not stop delivery to the others.
        try:
            result = listener(event)
            if inspect.isawaitable(result):
                await result
        except Exception:
            logger.exception("Event listener %r failed on %s", listener, type(event).__name__)


class WorkspaceService(WorkspaceEventDispatcher, WorkspaceServiceProtocol):
    """
    Real Workspace API implementation.

    Issues REST requests with httpx. Events are not pulled by this class:
    whatever notification transport is in use hands each received message
    to :meth:`dispatch_event`, which turns it into typed events for the
    registered listeners.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """
        Initialize the client.

        Args:
            settings: Settings to read the API key and URL from
            transport: Optional httpx transport (used by tests)
        """
        super().__init__()
        self._settings = settings or get_settings()
        self._client = httpx.AsyncClient(
            base_url=f"{self._settings.api_url}/workspace/v3",
            headers={"x-api-key": self._settings.api_key},
            timeout=self._settings.http_timeout_seconds,
            transport=transport,
        )
        self.user: User | None = None

    async def _request(
        self,
        method: str,
        path: str,
        json: dict[str, Any] | None = None,
        params: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        try:
            resp = await self._client.request(method, path, json=json, params=params)
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            raise WorkspaceApiError(f"{method} {path} failed: {exc}") from exc

        body: Any = {}
        if resp.content:
            try:
                body = resp.json()
            except ValueError:
                body = {}

        status = body.get("status") if isinstance(body, dict) else None
        if not isinstance(status, dict):
            status = {}
        if resp.status_code >= 400:
            message = status.get("message") or resp.text or resp.reason_phrase
            raise WorkspaceApiError(message, status_code=resp.status_code)
        if not isinstance(body, dict):
            raise WorkspaceApiError(
                f"Unexpected response body for {method} {path}: {resp.text}",
                status_code=resp.status_code,
            )
        # 0 = done, 1 = accepted, completion reported by an event
        if status.get("code", 0) not in (0, 1):
            raise WorkspaceApiError(
                status.get("message", "Workspace request rejected"),
                status_code=status.get("code"),
            )
        return body

    async def initialize(self, access_token: str) -> User:
        """Start a session with the given token and fetch the agent identity."""
        self._client.headers["Authorization"] = f"Bearer {access_token}"
        await self._request("GET", "/initialize-workspace")
        body = await self._request("GET", "/current-session")
        try:
            self.user = User.from_dict(body["data"]["user"])
        except KeyError as exc:
            raise WorkspaceApiError("Session response carried no user") from exc
        logger.info("Workspace initialized for %s", self.user.agent_login)
        return self.user

    async def activate_channels(self, agent_id: str, dn: str) -> None:
        """Activate the voice channel."""
        await self._request(
            "POST",
            "/activate-channels",
            json={"data": {"agentId": agent_id, "dn": dn}},
        )

    async def answer_call(self, call_id: str) -> None:
        await self._request("POST", f"/voice/calls/{call_id}/answer", json={})

    async def hold_call(self, call_id: str) -> None:
        await self._request("POST", f"/voice/calls/{call_id}/hold", json={})

    async def retrieve_call(self, call_id: str) -> None:
        await self._request("POST", f"/voice/calls/{call_id}/retrieve", json={})

    async def release_call(self, call_id: str) -> None:
        await self._request("POST", f"/voice/calls/{call_id}/release", json={})

    async def set_agent_not_ready(
        self,
        work_mode: str | None = None,
        reason_code: str | None = None,
    ) -> None:
        data = {}
        if work_mode is not None:
            data["agentWorkMode"] = work_mode
        if reason_code is not None:
            data["reasonCode"] = reason_code
        await self._request("POST", "/voice/not-ready", json={"data": data})

    async def search_targets(self, search_term: str) -> list[Target]:
        """Search targets matching a term."""
        body = await self._request("GET", "/targets", params={"searchTerm": search_term})
        targets = (body.get("data") or {}).get("targets") or []
        return [Target.from_dict(t) for t in targets]

    async def destroy(self) -> None:
        """Log out of the session and close the HTTP client."""
        try:
            if "Authorization" in self._client.headers:
                await self._request("POST", "/logout")
        finally:
            await self._client.aclose()

    async def dispatch_event(self, message: dict[str, Any]) -> None:
        """
        Deliver one vendor notification message to the listeners.

        Args:
            message: Notification body, either bare or wrapped in ``data``
        """
        data = message.get("data", message)
        message_type = data.get("messageType")

        if message_type == "CallStateChanged":
            await self.publish_call_event(CallStateChanged(call=Call.from_dict(data["call"])))
        elif message_type == "DnStateChanged":
            await self.publish_dn_event(DnStateChanged(dn=Dn.from_dict(data["dn"])))
        else:
            logger.debug("Ignoring workspace message %s", message_type)
