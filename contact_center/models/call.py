"""Workspace voice domain model."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class CallState(str, Enum):
    """Call states reported by the workspace session."""

    RINGING = "Ringing"
    DIALING = "Dialing"
    ESTABLISHED = "Established"
    HELD = "Held"
    RELEASED = "Released"
    UNKNOWN = "Unknown"

    @classmethod
    def _missing_(cls, value: object) -> "CallState":
        return cls.UNKNOWN


class AgentWorkMode(str, Enum):
    """Agent work modes reported on a DN."""

    UNKNOWN = "Unknown"
    AUTO_IN = "AutoIn"
    MANUAL_IN = "ManualIn"
    AFTER_CALL_WORK = "AfterCallWork"
    AUX_WORK = "AuxWork"
    NO_CALL_DISCONNECT = "NoCallDisconnect"

    @classmethod
    def _missing_(cls, value: object) -> "AgentWorkMode":
        return cls.UNKNOWN


@dataclass(frozen=True)
class Call:
    """A voice call owned by the vendor session. Read-only here."""

    id: str
    state: CallState
    phone_number: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Call":
        return cls(
            id=data["id"],
            state=CallState(data.get("state", CallState.UNKNOWN.value)),
            phone_number=data.get("phoneNumber"),
        )


@dataclass(frozen=True)
class Dn:
    """A voice device/line and its agent work mode."""

    number: str
    work_mode: AgentWorkMode = AgentWorkMode.UNKNOWN
    agent_state: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Dn":
        return cls(
            number=data.get("number", ""),
            work_mode=AgentWorkMode(data.get("agentWorkMode", AgentWorkMode.UNKNOWN.value)),
            agent_state=data.get("agentState"),
        )


@dataclass(frozen=True)
class CallStateChanged:
    """Event: a call changed state."""

    call: Call


@dataclass(frozen=True)
class DnStateChanged:
    """Event: a DN changed state (work mode, agent state)."""

    dn: Dn


@dataclass(frozen=True)
class User:
    """Agent identity returned by session initialization."""

    agent_id: str
    employee_id: str
    agent_login: str
    user_name: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "User":
        return cls(
            agent_id=data.get("agentId") or data.get("agentLogin", ""),
            employee_id=data.get("employeeId", ""),
            agent_login=data.get("agentLogin", ""),
            user_name=data.get("userName"),
        )


@dataclass(frozen=True)
class Target:
    """A dialable target returned by a target search."""

    name: str
    number: str | None = None
    type: str | None = None
    extra: dict[str, Any] = field(default_factory=dict, compare=False)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Target":
        number = data.get("number")
        if number is None:
            availability = data.get("availability") or {}
            channels = availability.get("channels") or [{}]
            number = channels[0].get("phoneNumber")
        return cls(
            name=data.get("name", ""),
            number=number,
            type=data.get("type"),
            extra={k: v for k, v in data.items() if k not in {"name", "number", "type"}},
        )
