"""Mock Workspace service for development and testing."""

import asyncio
import uuid
from dataclasses import dataclass, field

from contact_center.models.call import (
    AgentWorkMode,
    Call,
    CallState,
    CallStateChanged,
    Dn,
    DnStateChanged,
    Target,
    User,
)
from contact_center.services.errors import WorkspaceApiError
from contact_center.services.workspace_protocol import WorkspaceServiceProtocol
from contact_center.services.workspace_service import WorkspaceEventDispatcher


@dataclass
class MockCall:
    """Internal representation of a mock call."""

    call_id: str
    state: CallState = CallState.RINGING
    phone_number: str = "+15550100"


@dataclass
class MockDn:
    """Internal representation of the agent's DN."""

    number: str
    work_mode: AgentWorkMode = AgentWorkMode.UNKNOWN
    ready: bool = False
    history: list[AgentWorkMode] = field(default_factory=list)


class MockWorkspaceService(WorkspaceEventDispatcher, WorkspaceServiceProtocol):
    """
    Mock implementation of the Workspace API.

    Simulates the vendor session: a call rings after channels are activated
    and every control verb is followed by the state change event a real
    server would report. Failures can be injected per verb.
    """

    def __init__(
        self,
        agent_id: str = "agent-1",
        auto_ring: bool = True,
        ring_delay: float = 0.01,
        event_delay: float = 0.01,
        fail_on: set[str] | None = None,
        targets: list[Target] | None = None,
    ):
        """
        Initialize mock service.

        Args:
            agent_id: Agent login reported by initialize()
            auto_ring: Ring an inbound call once channels are activated
            ring_delay: Seconds before the inbound call rings
            event_delay: Seconds between a command and its state event
            fail_on: Names of verbs that raise WorkspaceApiError
            targets: Targets returned by search_targets()
        """
        super().__init__()
        self.agent_id = agent_id
        self.auto_ring = auto_ring
        self.ring_delay = ring_delay
        self.event_delay = event_delay
        self.fail_on = set(fail_on or ())
        self.targets = list(targets or [])

        self.commands: list[tuple[str, ...]] = []
        self.initialized = False
        self.destroyed = False
        self.dn = MockDn(number=agent_id)

        self._calls: dict[str, MockCall] = {}
        self._tasks: set[asyncio.Task] = set()

    def _record(self, name: str, *args: str) -> None:
        self.commands.append((name, *args))
        if name in self.fail_on:
            raise WorkspaceApiError(f"Simulated {name} failure", status_code=500)

    def _get_call(self, call_id: str) -> MockCall:
        call = self._calls.get(call_id)
        if not call:
            raise WorkspaceApiError(f"Call {call_id} not found", status_code=404)
        return call

    def _schedule(self, coro) -> None:
        task = asyncio.create_task(coro)
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def _transition(self, call_id: str, state: CallState) -> None:
        await asyncio.sleep(self.event_delay)
        call = self._calls.get(call_id)
        if not call or self.destroyed:
            return
        call.state = state
        await self.emit_call_state(call_id, state)

    async def _change_work_mode(self, work_mode: AgentWorkMode) -> None:
        await asyncio.sleep(self.event_delay)
        if self.destroyed:
            return
        await self.emit_work_mode(work_mode)

    async def initialize(self, access_token: str) -> User:
        self._record("initialize", access_token)
        self.initialized = True
        return User(
            agent_id=self.agent_id,
            employee_id=f"emp-{self.agent_id}",
            agent_login=self.agent_id,
        )

    async def activate_channels(self, agent_id: str, dn: str) -> None:
        if not self.initialized:
            raise WorkspaceApiError("Session not initialized", status_code=401)
        self._record("activate_channels", agent_id, dn)
        self.dn.number = dn
        if self.auto_ring:
            self._schedule(self._ring_later())

    async def _ring_later(self) -> None:
        await asyncio.sleep(self.ring_delay)
        if not self.destroyed:
            await self.ring()

    async def answer_call(self, call_id: str) -> None:
        self._get_call(call_id)
        self._record("answer_call", call_id)
        self._schedule(self._transition(call_id, CallState.ESTABLISHED))

    async def hold_call(self, call_id: str) -> None:
        self._get_call(call_id)
        self._record("hold_call", call_id)
        self._schedule(self._transition(call_id, CallState.HELD))

    async def retrieve_call(self, call_id: str) -> None:
        self._get_call(call_id)
        self._record("retrieve_call", call_id)
        self._schedule(self._transition(call_id, CallState.ESTABLISHED))

    async def release_call(self, call_id: str) -> None:
        self._get_call(call_id)
        self._record("release_call", call_id)
        self._schedule(self._transition(call_id, CallState.RELEASED))

    async def set_agent_not_ready(
        self,
        work_mode: str | None = None,
        reason_code: str | None = None,
    ) -> None:
        self._record("set_agent_not_ready", work_mode or "", reason_code or "")
        self.dn.ready = False
        mode = AgentWorkMode(work_mode) if work_mode else AgentWorkMode.UNKNOWN
        self._schedule(self._change_work_mode(mode))

    async def search_targets(self, search_term: str) -> list[Target]:
        self._record("search_targets", search_term)
        term = search_term.lower()
        return [t for t in self.targets if term in t.name.lower()]

    async def destroy(self) -> None:
        self._record("destroy")
        self.destroyed = True
        for task in list(self._tasks):
            task.cancel()

    # Test helper methods

    async def ring(self, call_id: str | None = None) -> str:
        """Simulate an inbound call ringing on the agent's DN."""
        call_id = call_id or uuid.uuid4().hex
        self._calls[call_id] = MockCall(call_id=call_id)
        await self.emit_call_state(call_id, CallState.RINGING)
        return call_id

    async def emit_call_state(self, call_id: str, state: CallState) -> None:
        """Report a call state, whether or not a command caused it."""
        call = self._calls.setdefault(call_id, MockCall(call_id=call_id, state=state))
        call.state = state
        await self.publish_call_event(
            CallStateChanged(call=Call(id=call_id, state=state, phone_number=call.phone_number))
        )

    async def emit_work_mode(self, work_mode: AgentWorkMode) -> None:
        """Report a DN work mode change."""
        self.dn.work_mode = work_mode
        self.dn.history.append(work_mode)
        await self.publish_dn_event(
            DnStateChanged(dn=Dn(number=self.dn.number, work_mode=work_mode))
        )

    def command_names(self) -> list[str]:
        """Names of the verbs issued so far, in order."""
        return [command[0] for command in self.commands]

    def reset(self) -> None:
        """Reset all mock data (for testing)."""
        for task in list(self._tasks):
            task.cancel()
        self._tasks.clear()
        self.commands.clear()
        self._calls.clear()
        self.dn = MockDn(number=self.agent_id)
        self.initialized = False
        self.destroyed = False
