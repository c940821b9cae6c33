"""Mock callback booking service for development and testing."""

import uuid

from contact_center.schemas.callback import CreateCallbackParams
from contact_center.services.callbacks_protocol import (
    CallbackCreated,
    CallbackFailed,
    CallbackOutcome,
    CallbacksServiceProtocol,
    ProgressObserver,
)


class MockCallbacksService(CallbacksServiceProtocol):
    """
    Mock implementation of the Engagement callbacks endpoint.

    Books every request unless a failure has been configured with
    set_next_outcome().
    """

    def __init__(self, expected_api_key: str | None = None):
        """
        Initialize mock service.

        Args:
            expected_api_key: When set, other keys are rejected with 401
        """
        self.expected_api_key = expected_api_key
        self.requests: list[CreateCallbackParams] = []
        self._next_failure: CallbackFailed | None = None

    def _generate_id(self) -> str:
        return uuid.uuid4().hex

    async def book_callback(
        self,
        params: CreateCallbackParams,
        api_key: str,
        progress: ProgressObserver | None = None,
    ) -> CallbackOutcome:
        self.requests.append(params)

        if self.expected_api_key is not None and api_key != self.expected_api_key:
            return CallbackFailed(status_code=401, message="Invalid API key")

        if self._next_failure is not None:
            failure, self._next_failure = self._next_failure, None
            return failure

        return CallbackCreated(callback_id=self._generate_id(), status_code=200)

    # Test helper methods

    def set_next_outcome(self, status_code: int, message: str) -> None:
        """Make the next booking fail with the given code and message."""
        self._next_failure = CallbackFailed(status_code=status_code, message=message)

    def reset(self) -> None:
        """Reset all mock data (for testing)."""
        self.requests.clear()
        self._next_failure = None
