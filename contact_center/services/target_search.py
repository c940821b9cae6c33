"""Search workspace targets with an already obtained token."""

import logging

from contact_center.config import Settings, get_settings
from contact_center.models.call import Target
from contact_center.services.errors import EmptySearchError
from contact_center.services.workspace_protocol import WorkspaceServiceProtocol

logger = logging.getLogger(__name__)


async def run_target_search(
    workspace: WorkspaceServiceProtocol,
    settings: Settings | None = None,
    search_term: str | None = None,
) -> list[Target]:
    """
    Initialize a session, search targets and log each match.

    Raises:
        EmptySearchError: If nothing matched
    """
    settings = settings or get_settings()
    term = search_term if search_term is not None else settings.search_term

    try:
        user = await workspace.initialize(settings.authorization_token)
        await workspace.activate_channels(user.employee_id, user.agent_login)

        targets = await workspace.search_targets(term)
        if not targets:
            raise EmptySearchError(term)

        for target in targets:
            logger.info("Name: %s", target.name)
            logger.info("PhoneNumber: %s", target.number)
        return targets
    finally:
        await workspace.destroy()
