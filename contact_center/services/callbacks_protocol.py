"""Callback booking service protocol definition."""

from dataclasses import dataclass
from typing import Protocol

from contact_center.schemas.callback import CreateCallbackParams


@dataclass(frozen=True)
class CallbackCreated:
    """Booking succeeded."""

    callback_id: str
    status_code: int = 200


@dataclass(frozen=True)
class CallbackFailed:
    """Booking failed. Terminal, never retried."""

    status_code: int
    message: str


CallbackOutcome = CallbackCreated | CallbackFailed


class ProgressObserver(Protocol):
    """Optional transfer progress notifications."""

    def on_upload_progress(self, bytes_written: int, content_length: int, done: bool) -> None:
        ...

    def on_download_progress(self, bytes_read: int, content_length: int, done: bool) -> None:
        ...


class CallbacksServiceProtocol(Protocol):
    """Protocol for callback booking implementations."""

    async def book_callback(
        self,
        params: CreateCallbackParams,
        api_key: str,
        progress: ProgressObserver | None = None,
    ) -> CallbackOutcome:
        """
        Book a callback.

        Args:
            params: Service name and phone number to call back
            api_key: Engagement API key
            progress: Optional observer for upload/download progress

        Returns:
            CallbackCreated with the new id, or CallbackFailed with code and message
        """
        ...
