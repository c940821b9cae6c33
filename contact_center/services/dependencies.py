"""Service selection between the vendor API and local mocks."""

from contact_center.config import Settings, get_settings
from contact_center.services.auth_service import AuthService, AuthServiceProtocol, MockAuthService
from contact_center.services.callbacks_mock import MockCallbacksService
from contact_center.services.callbacks_protocol import CallbacksServiceProtocol
from contact_center.services.callbacks_service import CallbacksService
from contact_center.services.workspace_mock import MockWorkspaceService
from contact_center.services.workspace_protocol import WorkspaceServiceProtocol
from contact_center.services.workspace_service import WorkspaceService


def get_workspace_service(settings: Settings | None = None) -> WorkspaceServiceProtocol:
    """
    Get a Workspace service instance.

    Returns MockWorkspaceService in development or WorkspaceService against
    the real API, based on the USE_MOCK setting. A new instance is returned
    on every call since a session cannot be reused after destroy().
    """
    settings = settings or get_settings()

    if settings.use_mock:
        return MockWorkspaceService()
    else:
        return WorkspaceService(settings)


def get_auth_service(settings: Settings | None = None) -> AuthServiceProtocol:
    """Get a token provider instance."""
    settings = settings or get_settings()

    if settings.use_mock:
        return MockAuthService()
    else:
        return AuthService(settings)


def get_callbacks_service(settings: Settings | None = None) -> CallbacksServiceProtocol:
    """Get a callback booking service instance."""
    settings = settings or get_settings()

    if settings.use_mock:
        return MockCallbacksService()
    else:
        return CallbacksService(settings)
