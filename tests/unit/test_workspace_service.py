"""Unit tests for the Workspace API client."""

import json

import httpx
import pytest

from contact_center.models.call import AgentWorkMode, CallState, Target
from contact_center.services.call_control import CallControlSequencer
from contact_center.services.errors import WorkspaceApiError
from contact_center.services.workspace_service import WorkspaceService

BASE = "https://api.example.test/workspace/v3"

SESSION = {
    "status": {"code": 0},
    "data": {
        "user": {
            "agentLogin": "agent-7",
            "employeeId": "emp-7",
            "userName": "agent",
        }
    },
}


class FakeWorkspaceApi:
    """Routes requests by path and records them."""

    def __init__(self, responses: dict[str, httpx.Response] | None = None):
        self.requests: list[httpx.Request] = []
        self.responses = responses or {}

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path.removeprefix("/workspace/v3")
        if path in self.responses:
            return self.responses[path]
        if path == "/current-session":
            return httpx.Response(200, json=SESSION)
        return httpx.Response(200, json={"status": {"code": 0}})

    def paths(self) -> list[str]:
        return [r.url.path.removeprefix("/workspace/v3") for r in self.requests]


@pytest.fixture
def api() -> FakeWorkspaceApi:
    return FakeWorkspaceApi()


@pytest.fixture
def service(settings, api) -> WorkspaceService:
    return WorkspaceService(settings, transport=httpx.MockTransport(api))


class TestSession:
    """Tests for session lifecycle requests."""

    @pytest.mark.asyncio
    async def test_initialize_returns_user_and_sends_token(self, service, api):
        user = await service.initialize("tok-1")

        assert user.agent_id == "agent-7"
        assert user.employee_id == "emp-7"
        assert api.paths() == ["/initialize-workspace", "/current-session"]
        assert all(r.headers["Authorization"] == "Bearer tok-1" for r in api.requests)
        assert all(r.headers["x-api-key"] == "test-api-key" for r in api.requests)

    @pytest.mark.asyncio
    async def test_activate_channels_body(self, service, api):
        await service.initialize("tok-1")
        await service.activate_channels("agent-7", "agent-7")

        request = api.requests[-1]
        assert str(request.url) == f"{BASE}/activate-channels"
        assert json.loads(request.content) == {"data": {"agentId": "agent-7", "dn": "agent-7"}}

    @pytest.mark.asyncio
    async def test_destroy_logs_out(self, service, api):
        await service.initialize("tok-1")
        await service.destroy()
        assert api.paths()[-1] == "/logout"

    @pytest.mark.asyncio
    async def test_destroy_without_session_skips_logout(self, service, api):
        await service.destroy()
        assert api.requests == []


class TestVoiceVerbs:
    """Tests for call control requests."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "verb,action",
        [
            ("answer_call", "answer"),
            ("hold_call", "hold"),
            ("retrieve_call", "retrieve"),
            ("release_call", "release"),
        ],
    )
    async def test_call_verbs_post_to_call_path(self, service, api, verb, action):
        await getattr(service, verb)("call-1")

        request = api.requests[-1]
        assert request.method == "POST"
        assert str(request.url) == f"{BASE}/voice/calls/call-1/{action}"

    @pytest.mark.asyncio
    async def test_not_ready_sends_work_mode(self, service, api):
        await service.set_agent_not_ready(work_mode="AfterCallWork")

        request = api.requests[-1]
        assert str(request.url) == f"{BASE}/voice/not-ready"
        assert json.loads(request.content) == {"data": {"agentWorkMode": "AfterCallWork"}}

    @pytest.mark.asyncio
    async def test_http_error_raises_with_status_code(self, settings):
        api = FakeWorkspaceApi({
            "/voice/calls/call-1/hold": httpx.Response(
                409, json={"status": {"code": 409, "message": "Call not established"}}
            ),
        })
        service = WorkspaceService(settings, transport=httpx.MockTransport(api))

        with pytest.raises(WorkspaceApiError) as exc_info:
            await service.hold_call("call-1")
        assert exc_info.value.status_code == 409
        assert exc_info.value.message == "Call not established"

    @pytest.mark.asyncio
    async def test_rejected_status_code_raises(self, settings):
        api = FakeWorkspaceApi({
            "/voice/calls/call-1/answer": httpx.Response(
                200, json={"status": {"code": 2, "message": "Invalid call"}}
            ),
        })
        service = WorkspaceService(settings, transport=httpx.MockTransport(api))

        with pytest.raises(WorkspaceApiError) as exc_info:
            await service.answer_call("call-1")
        assert exc_info.value.status_code == 2

    @pytest.mark.asyncio
    async def test_non_object_body_raises(self, settings):
        api = FakeWorkspaceApi({
            "/voice/calls/call-1/hold": httpx.Response(200, json=["accepted"]),
        })
        service = WorkspaceService(settings, transport=httpx.MockTransport(api))

        with pytest.raises(WorkspaceApiError) as exc_info:
            await service.hold_call("call-1")
        assert exc_info.value.status_code == 200

    @pytest.mark.asyncio
    async def test_non_object_body_fails_sequence(self, settings):
        api = FakeWorkspaceApi({
            "/voice/calls/call-1/hold": httpx.Response(200, json=["accepted"]),
        })
        service = WorkspaceService(settings, transport=httpx.MockTransport(api))
        sequencer = CallControlSequencer(service)
        sequencer.register()

        await service.dispatch_event({
            "messageType": "CallStateChanged",
            "call": {"id": "call-1", "state": "Established"},
        })

        assert sequencer.signal.done
        with pytest.raises(WorkspaceApiError):
            await sequencer.signal.wait(timeout=0.5)

    @pytest.mark.asyncio
    async def test_transport_error_raises(self, settings):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("unreachable", request=request)

        service = WorkspaceService(settings, transport=httpx.MockTransport(handler))
        with pytest.raises(WorkspaceApiError):
            await service.release_call("call-1")


class TestTargets:
    """Tests for target search."""

    @pytest.mark.asyncio
    async def test_search_parses_targets(self, settings):
        api = FakeWorkspaceApi({
            "/targets": httpx.Response(200, json={
                "status": {"code": 0},
                "data": {"targets": [
                    {"name": "Jane Smith", "number": "5002", "type": "agent"},
                    {
                        "name": "Support",
                        "type": "agent-group",
                        "availability": {"channels": [{"phoneNumber": "7000"}]},
                    },
                ]},
            }),
        })
        service = WorkspaceService(settings, transport=httpx.MockTransport(api))

        targets = await service.search_targets("smith")

        assert targets == [
            Target(name="Jane Smith", number="5002", type="agent"),
            Target(name="Support", number="7000", type="agent-group"),
        ]
        assert api.requests[-1].url.params["searchTerm"] == "smith"


class TestEventDispatch:
    """Tests for turning notifications into typed events."""

    @pytest.mark.asyncio
    async def test_call_state_message(self, service):
        received = []
        service.add_call_event_listener(received.append)

        await service.dispatch_event({"data": {
            "messageType": "CallStateChanged",
            "call": {"id": "call-1", "state": "Ringing", "phoneNumber": "5001"},
        }})

        assert len(received) == 1
        assert received[0].call.id == "call-1"
        assert received[0].call.state == CallState.RINGING

    @pytest.mark.asyncio
    async def test_dn_state_message(self, service):
        received = []

        async def listener(event):
            received.append(event)

        service.add_dn_event_listener(listener)
        await service.dispatch_event({
            "messageType": "DnStateChanged",
            "dn": {"number": "5001", "agentWorkMode": "AfterCallWork"},
        })

        assert received[0].dn.work_mode == AgentWorkMode.AFTER_CALL_WORK

    @pytest.mark.asyncio
    async def test_unknown_state_maps_to_unknown(self, service):
        received = []
        service.add_call_event_listener(received.append)

        await service.dispatch_event({
            "messageType": "CallStateChanged",
            "call": {"id": "call-1", "state": "Alerting"},
        })

        assert received[0].call.state == CallState.UNKNOWN

    @pytest.mark.asyncio
    async def test_failing_listener_does_not_stop_others(self, service):
        received = []

        def broken(event):
            raise ValueError("listener bug")

        service.add_call_event_listener(broken)
        service.add_call_event_listener(received.append)

        await service.dispatch_event({
            "messageType": "CallStateChanged",
            "call": {"id": "call-1", "state": "Held"},
        })

        assert len(received) == 1

    @pytest.mark.asyncio
    async def test_other_messages_are_ignored(self, service):
        received = []
        service.add_call_event_listener(received.append)
        await service.dispatch_event({"messageType": "EventSessionInfo"})
        assert received == []
