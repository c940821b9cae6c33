"""Engagement API callback schemas."""

from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_serializer


def format_timestamp(value: datetime) -> str:
    """
    Render a datetime the way the Engagement API expects.

    UTC, millisecond precision and a literal trailing ``Z`` (no offset).
    Naive datetimes are taken to already be in UTC.
    """
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    else:
        value = value.astimezone(timezone.utc)
    return value.strftime("%Y-%m-%dT%H:%M:%S.") + f"{value.microsecond // 1000:03d}Z"


class CreateCallbackParams(BaseModel):
    """Request body for booking a callback."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    service_name: str = Field(alias="serviceName", min_length=1)
    phone_number: str = Field(alias="phoneNumber", min_length=1)
    desired_time: datetime | None = Field(default=None, alias="desiredTime")
    callback_user_data: dict[str, Any] | None = Field(default=None, alias="callbackUserData")

    @field_serializer("desired_time")
    def serialize_desired_time(self, value: datetime | None) -> str | None:
        return None if value is None else format_timestamp(value)

    def to_payload(self) -> dict[str, Any]:
        """Serialize with vendor field names, dropping unset optionals."""
        return self.model_dump(by_alias=True, exclude_none=True)


class CreatedCallbackData(BaseModel):
    """The ``data`` member of a successful booking response."""

    id: str


class CreateCallbackResponse(BaseModel):
    """Successful booking response."""

    data: CreatedCallbackData
