"""Unit tests for MockWorkspaceService."""

import asyncio

import pytest

from contact_center.models.call import AgentWorkMode
from contact_center.services.workspace_mock import MockWorkspaceService


class TestReset:
    """Tests for clearing mock state between scenarios."""

    @pytest.mark.asyncio
    async def test_reset_clears_dn_state(self):
        workspace = MockWorkspaceService(auto_ring=False)
        await workspace.emit_work_mode(AgentWorkMode.AFTER_CALL_WORK)

        workspace.reset()

        assert workspace.dn.history == []
        assert workspace.dn.work_mode == AgentWorkMode.UNKNOWN
        assert workspace.dn.number == "agent-1"

    @pytest.mark.asyncio
    async def test_reset_cancels_pending_events(self):
        workspace = MockWorkspaceService(ring_delay=10)
        await workspace.initialize("tok")
        await workspace.activate_channels("agent-1", "5001")
        pending = list(workspace._tasks)
        assert len(pending) == 1

        workspace.reset()
        await asyncio.sleep(0)

        assert pending[0].cancelled()
        assert workspace.commands == []
        assert workspace.initialized is False
