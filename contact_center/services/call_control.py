"""Call control sequence: answer, hold, retrieve, release, after-call work."""

import asyncio
import logging

from contact_center.config import Settings, get_settings
from contact_center.models.call import AgentWorkMode, CallState, CallStateChanged, DnStateChanged
from contact_center.services.auth_service import AuthServiceProtocol
from contact_center.services.workspace_protocol import WorkspaceServiceProtocol

logger = logging.getLogger(__name__)

AFTER_CALL_WORK = AgentWorkMode.AFTER_CALL_WORK.value


class CompletionSignal:
    """
    One-shot completion signal.

    Resolved exactly once, by complete() or fail(); later calls are ignored.
    The main flow consumes it once with wait().
    """

    def __init__(self) -> None:
        self._event = asyncio.Event()
        self._error: BaseException | None = None
        self._consumed = False

    @property
    def done(self) -> bool:
        return self._event.is_set()

    @property
    def error(self) -> BaseException | None:
        return self._error

    def complete(self) -> bool:
        """Resolve successfully. Returns False if already resolved."""
        if self.done:
            return False
        self._event.set()
        return True

    def fail(self, error: BaseException) -> bool:
        """Resolve with an error. Returns False if already resolved."""
        if self.done:
            return False
        self._error = error
        self._event.set()
        return True

    async def wait(self, timeout: float | None = None) -> None:
        """
        Wait for resolution and re-raise the failure, if any.

        Raises:
            RuntimeError: If the signal was already consumed
            TimeoutError: If timeout elapses first
        """
        if self._consumed:
            raise RuntimeError("Completion signal already consumed")
        self._consumed = True
        await asyncio.wait_for(self._event.wait(), timeout)
        if self._error is not None:
            raise self._error


class CallControlSequencer:
    """
    Drives a single call through answer, hold, retrieve, release and ACW.

    The same instance handles both event streams. ``has_call_been_held``
    decides whether an established call is held (first time) or released
    (after it was retrieved), and gates completion on the DN stream.
    """

    def __init__(
        self,
        workspace: WorkspaceServiceProtocol,
        signal: CompletionSignal | None = None,
    ):
        self.workspace = workspace
        self.signal = signal or CompletionSignal()
        self.has_call_been_held = False
        self._answered: set[str] = set()
        self._after_call_work_requested = False

    def register(self) -> None:
        """Subscribe to call and DN events."""
        self.workspace.add_call_event_listener(self.on_call_state_changed)
        self.workspace.add_dn_event_listener(self.on_dn_state_changed)

    async def on_call_state_changed(self, event: CallStateChanged) -> None:
        if self.signal.done:
            return

        call = event.call
        try:
            if call.state == CallState.RINGING:
                if call.id in self._answered:
                    return
                self._answered.add(call.id)
                logger.info("Answering call...")
                await self.workspace.answer_call(call.id)

            elif call.state == CallState.ESTABLISHED:
                if not self.has_call_been_held:
                    logger.info("Putting call on hold...")
                    self.has_call_been_held = True
                    await self.workspace.hold_call(call.id)
                else:
                    logger.info("Releasing call...")
                    await self.workspace.release_call(call.id)

            elif call.state == CallState.HELD:
                logger.info("Retrieving call...")
                await self.workspace.retrieve_call(call.id)

            elif call.state == CallState.RELEASED:
                if self._after_call_work_requested:
                    return
                self._after_call_work_requested = True
                logger.info("Setting ACW...")
                await self.workspace.set_agent_not_ready(work_mode=AFTER_CALL_WORK)

        except Exception as exc:
            logger.error("Call %s control failed in state %s: %s", call.id, call.state.value, exc)
            self.signal.fail(exc)

    def on_dn_state_changed(self, event: DnStateChanged) -> None:
        if self.has_call_been_held and event.dn.work_mode == AgentWorkMode.AFTER_CALL_WORK:
            if self.signal.complete():
                logger.info("Agent %s is in after-call work", event.dn.number)


async def run_call_control(
    workspace: WorkspaceServiceProtocol,
    auth: AuthServiceProtocol,
    settings: Settings | None = None,
) -> CallControlSequencer:
    """
    Run the full sample: authenticate, start a session and wait for the
    sequencer to bring the agent into after-call work.

    The session is destroyed whether the sequence completes or fails.
    """
    settings = settings or get_settings()

    sequencer = CallControlSequencer(workspace)
    sequencer.register()

    try:
        token = await auth.retrieve_token(settings.agent_username, settings.agent_password)
        user = await workspace.initialize(token)
        await workspace.activate_channels(user.agent_id, user.agent_id)

        logger.info("Waiting for completion...")
        await sequencer.signal.wait(timeout=settings.completion_timeout_seconds)
    except BaseException:
        # Teardown errors must not mask the failure being raised.
        try:
            await workspace.destroy()
        except Exception:
            logger.exception("Session teardown failed")
        raise

    await workspace.destroy()

    return sequencer
