"""Workspace service protocol definition."""

from collections.abc import Awaitable, Callable
from typing import Protocol

from contact_center.models.call import CallStateChanged, DnStateChanged, Target, User

CallEventListener = Callable[[CallStateChanged], Awaitable[None] | None]
DnEventListener = Callable[[DnStateChanged], Awaitable[None] | None]


class WorkspaceServiceProtocol(Protocol):
    """Protocol for Workspace API implementations."""

    def add_call_event_listener(self, listener: CallEventListener) -> None:
        """Register a listener for call state changes."""
        ...

    def add_dn_event_listener(self, listener: DnEventListener) -> None:
        """Register a listener for DN state changes."""
        ...

    async def initialize(self, access_token: str) -> User:
        """
        Start a workspace session.

        Args:
            access_token: OAuth2 access token for the agent

        Returns:
            The agent identity bound to the session
        """
        ...

    async def activate_channels(self, agent_id: str, dn: str) -> None:
        """
        Activate the voice channel for an agent.

        Args:
            agent_id: Agent login or employee id
            dn: DN (place/line) to log the agent in on
        """
        ...

    async def answer_call(self, call_id: str) -> None:
        """Answer a ringing call."""
        ...

    async def hold_call(self, call_id: str) -> None:
        """Place an established call on hold."""
        ...

    async def retrieve_call(self, call_id: str) -> None:
        """Retrieve a held call."""
        ...

    async def release_call(self, call_id: str) -> None:
        """Release (hang up) a call."""
        ...

    async def set_agent_not_ready(
        self,
        work_mode: str | None = None,
        reason_code: str | None = None,
    ) -> None:
        """
        Set the agent not ready.

        Args:
            work_mode: Agent work mode, e.g. ``AfterCallWork``
            reason_code: Optional not-ready reason code
        """
        ...

    async def search_targets(self, search_term: str) -> list[Target]:
        """Search for dialable targets."""
        ...

    async def destroy(self) -> None:
        """End the session and release resources."""
        ...
