"""Book a single callback and report the outcome."""

import logging
from collections.abc import Callable

from contact_center.config import Settings, get_settings
from contact_center.schemas.callback import CreateCallbackParams
from contact_center.services.callbacks_protocol import (
    CallbackCreated,
    CallbackFailed,
    CallbackOutcome,
    CallbacksServiceProtocol,
    ProgressObserver,
)

logger = logging.getLogger(__name__)


def log_callback_outcome(outcome: CallbackOutcome) -> None:
    """Log the created id, or the error message and status code."""
    if isinstance(outcome, CallbackCreated):
        logger.info("Callback created: %s", outcome.callback_id)
    elif isinstance(outcome, CallbackFailed):
        logger.error("Callback error: %s status code %s", outcome.message, outcome.status_code)


async def book_callback(
    service: CallbacksServiceProtocol,
    settings: Settings | None = None,
    on_outcome: Callable[[CallbackOutcome], None] = log_callback_outcome,
    progress: ProgressObserver | None = None,
) -> CallbackOutcome:
    """
    Submit one booking built from settings and hand the outcome to on_outcome.

    The submission is awaited here, so the caller does not return before
    the outcome has been delivered.
    """
    settings = settings or get_settings()

    params = CreateCallbackParams(
        service_name=settings.callback_service_name,
        phone_number=settings.callback_phone_number,
    )
    outcome = await service.book_callback(params, settings.engagement_api_key, progress=progress)
    on_outcome(outcome)
    return outcome
