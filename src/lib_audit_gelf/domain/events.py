"""Domain events delivered by the identity platform.

Purpose
-------
Provide immutable representations of the two audit event shapes the host
hands to the listener: user/authentication events and administrative events.

Contents
--------
* :class:`OperationType` enum for administrative changes.
* :class:`AuthDetails` describing who performed an administrative change.
* :class:`AuthSessionLink` carrying the authentication-session linkage.
* :class:`UserEvent` and :class:`AdminEvent` dataclasses with ``from_dict``.

System Role
-----------
Sits in the domain layer. The record builders only read these already
materialised fields; nothing here talks to the host or the network.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping


def _pick(payload: Mapping[str, Any], snake: str, camel: str, default: Any = None) -> Any:
    """Return ``payload[snake]`` falling back to the camelCase spelling."""
    if snake in payload:
        return payload[snake]
    return payload.get(camel, default)


def _copy_details(details: Mapping[str, str | None] | None) -> dict[str, str]:
    """Copy ``details`` without the entries whose value is ``None``."""
    if not details:
        return {}
    return {key: value for key, value in details.items() if value is not None}


def _opaque(value: Any) -> str | None:
    """Return ``value`` as a pre-serialised JSON string."""
    if value is None or isinstance(value, str):
        return value
    return json.dumps(value, ensure_ascii=False, separators=(",", ":"))


class OperationType(Enum):
    """Kind of change recorded by an administrative event."""

    CREATE = "CREATE"
    UPDATE = "UPDATE"
    DELETE = "DELETE"
    ACTION = "ACTION"

    @classmethod
    def from_name(cls, name: str) -> "OperationType":
        normalized = name.strip().upper()
        try:
            return cls[normalized]
        except KeyError as exc:
            raise ValueError(f"Unknown operation type: {name!r}") from exc


@dataclass(slots=True, frozen=True)
class AuthDetails:
    """Identity of the administrator that triggered an :class:`AdminEvent`."""

    realm_id: str | None = None
    realm_name: str | None = None
    client_id: str | None = None
    user_id: str | None = None
    ip_address: str | None = None

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "AuthDetails":
        return cls(
            realm_id=_pick(payload, "realm_id", "realmId"),
            realm_name=_pick(payload, "realm_name", "realmName"),
            client_id=_pick(payload, "client_id", "clientId"),
            user_id=_pick(payload, "user_id", "userId"),
            ip_address=_pick(payload, "ip_address", "ipAddress"),
        )


@dataclass(slots=True, frozen=True)
class AuthSessionLink:
    """Authentication session bound to the request that produced an event.

    Attributes
    ----------
    parent_session_id:
        Identifier of the root authentication session.
    tab_id:
        Browser tab identifier inside the root session.
    """

    parent_session_id: str
    tab_id: str


@dataclass(slots=True, frozen=True)
class UserEvent:
    """Authentication event emitted on behalf of an end user.

    Attributes
    ----------
    type:
        Event type token such as ``LOGIN`` or ``LOGIN_ERROR``.
    time:
        Event time in milliseconds since the epoch.
    id:
        Identifier assigned by the host.
    realm_id, realm_name, client_id, user_id, session_id, ip_address:
        Optional request metadata; ``None`` when the host did not record it.
    error:
        Error token for failed operations.
    details:
        Free-form string pairs such as ``username`` or ``redirect_uri``.
    """

    type: str
    time: int
    id: str | None = None
    realm_id: str | None = None
    realm_name: str | None = None
    client_id: str | None = None
    user_id: str | None = None
    session_id: str | None = None
    ip_address: str | None = None
    error: str | None = None
    details: dict[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not str(self.type).strip():
            raise ValueError("type must not be empty")
        object.__setattr__(self, "details", _copy_details(self.details))

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "UserEvent":
        """Build an event from the JSON shape exported by the host.

        Examples
        --------
        >>> event = UserEvent.from_dict({"type": "LOGIN", "time": 1000, "realmName": "demo"})
        >>> event.realm_name, event.details
        ('demo', {})
        """
        return cls(
            type=payload["type"],
            time=int(payload["time"]),
            id=payload.get("id"),
            realm_id=_pick(payload, "realm_id", "realmId"),
            realm_name=_pick(payload, "realm_name", "realmName"),
            client_id=_pick(payload, "client_id", "clientId"),
            user_id=_pick(payload, "user_id", "userId"),
            session_id=_pick(payload, "session_id", "sessionId"),
            ip_address=_pick(payload, "ip_address", "ipAddress"),
            error=payload.get("error"),
            details=payload.get("details") or {},
        )


@dataclass(slots=True, frozen=True)
class AdminEvent:
    """Change performed through the administrative interface.

    Admin events carry no timestamp of their own; the record builder stamps
    them with the wall clock at build time.
    """

    operation_type: OperationType
    auth_details: AuthDetails
    id: str | None = None
    resource_path: str | None = None
    resource_type: str | None = None
    representation: str | None = None
    error: str | None = None
    details: dict[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if isinstance(self.operation_type, str):
            object.__setattr__(self, "operation_type", OperationType.from_name(self.operation_type))
        object.__setattr__(self, "details", _copy_details(self.details))

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "AdminEvent":
        """Build an admin event from the JSON shape exported by the host."""

        auth = _pick(payload, "auth_details", "authDetails") or {}
        operation = _pick(payload, "operation_type", "operationType")
        if operation is None:
            raise ValueError("operation_type is required")
        return cls(
            operation_type=OperationType.from_name(operation),
            auth_details=AuthDetails.from_dict(auth),
            id=payload.get("id"),
            resource_path=_pick(payload, "resource_path", "resourcePath"),
            resource_type=_pick(payload, "resource_type", "resourceType"),
            representation=_opaque(payload.get("representation")),
            error=payload.get("error"),
            details=payload.get("details") or {},
        )


__all__ = ["AdminEvent", "AuthDetails", "AuthSessionLink", "OperationType", "UserEvent"]
