"""Real Engagement API callback booking implementation."""

import json
import logging

import httpx
from pydantic import ValidationError

from contact_center.config import Settings, get_settings
from contact_center.schemas.callback import CreateCallbackParams, CreateCallbackResponse
from contact_center.services.callbacks_protocol import (
    CallbackCreated,
    CallbackFailed,
    CallbackOutcome,
    CallbacksServiceProtocol,
    ProgressObserver,
)

logger = logging.getLogger(__name__)

CALLBACKS_PATH = "/engagement/v3/callbacks"


def _error_message(resp: httpx.Response) -> str:
    try:
        body = resp.json()
    except ValueError:
        return resp.text or resp.reason_phrase
    if isinstance(body, dict):
        status = body.get("status")
        if isinstance(status, dict) and status.get("message"):
            return status["message"]
        if body.get("message"):
            return body["message"]
    return resp.text or resp.reason_phrase


class CallbacksService(CallbacksServiceProtocol):
    """
    Books callbacks through the Engagement API.

    One request per call. There is no retry, timeout override or
    idempotency key: a failure is reported once and left to the caller.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._settings = settings or get_settings()
        self._transport = transport

    async def book_callback(
        self,
        params: CreateCallbackParams,
        api_key: str,
        progress: ProgressObserver | None = None,
    ) -> CallbackOutcome:
        """Submit one booking request."""
        content = json.dumps(params.to_payload()).encode()
        headers = {
            "x-api-key": api_key,
            "Content-Type": "application/json",
            "Accept": "application/json",
        }

        async with httpx.AsyncClient(
            base_url=self._settings.engagement_base_path,
            timeout=self._settings.http_timeout_seconds,
            transport=self._transport,
        ) as client:
            try:
                resp = await client.post(CALLBACKS_PATH, content=content, headers=headers)
            except httpx.HTTPError as exc:
                logger.debug("Callback request transport error", exc_info=True)
                return CallbackFailed(status_code=0, message=str(exc))

        if progress is not None:
            progress.on_upload_progress(len(content), len(content), True)
            progress.on_download_progress(len(resp.content), len(resp.content), True)

        if resp.status_code >= 400:
            return CallbackFailed(status_code=resp.status_code, message=_error_message(resp))

        try:
            created = CreateCallbackResponse.model_validate(resp.json())
        except (ValueError, ValidationError):
            return CallbackFailed(
                status_code=resp.status_code,
                message=f"Unexpected booking response: {resp.text}",
            )
        return CallbackCreated(callback_id=created.data.id, status_code=resp.status_code)
