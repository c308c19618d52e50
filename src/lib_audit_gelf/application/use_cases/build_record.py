"""Use cases turning audit events into GELF records.

Purpose
-------
Derive the flat GELF field mapping and its human-readable ``short_message``
from one :class:`UserEvent` or :class:`AdminEvent`.

Contents
--------
* :func:`build_user_record` / :func:`build_admin_record` - pure builders.
* :func:`render_user_event` / :func:`render_admin_event` - build and encode,
  returning ``""`` when anything goes wrong.

System Role
-----------
Application-layer logic invoked by :class:`GelfEventListener`. The builders
hold no state and can be called from any request thread.

Alignment Notes
---------------
Field order in the output is: protocol fields, fixed event fields, optional
fields, then ``details`` (which override any earlier key of the same name).
"""

from __future__ import annotations

import logging
from typing import Callable

from lib_audit_gelf.domain.errors import BuildError
from lib_audit_gelf.domain.events import AdminEvent, AuthSessionLink, UserEvent
from lib_audit_gelf.domain.record import GELF_VERSION, GelfRecord, encode_record, include, token, without_none

logger = logging.getLogger(__name__)


def build_user_record(
    event: UserEvent,
    hostname: str,
    auth_session: AuthSessionLink | None = None,
) -> GelfRecord:
    """Return the GELF record for a user/authentication event.

    Parameters
    ----------
    event:
        Event delivered by the host.
    hostname:
        Source label written to the ``host`` field.
    auth_session:
        Authentication-session linkage of the current request, if any.

    Examples
    --------
    >>> event = UserEvent(type="LOGIN", time=1699999999500, id="e1", realm_id="r1",
    ...                   realm_name="demo", ip_address="10.0.0.5")
    >>> record = build_user_record(event, "keycloak")
    >>> record["short_message"], record["timestamp"]
    ('LOGIN 10.0.0.5 demo', 1699999999)
    >>> "error" in record
    False
    """
    event_type = token(event.type)
    summary, optional = event_type, {}
    summary, optional = include(summary, optional, "ip_address", event.ip_address)
    summary, optional = include(summary, optional, "realm_name", event.realm_name)
    summary, optional = include(summary, optional, "client_id", event.client_id)
    summary, optional = include(summary, optional, "user_id", event.user_id)
    summary, optional = include(summary, optional, "username", event.details.get("username"))
    summary, optional = include(summary, optional, "session_id", event.session_id)
    summary, optional = include(summary, optional, "error", event.error)

    record = without_none(
        {
            "version": GELF_VERSION,
            "host": hostname,
            "short_message": summary,
            "timestamp": event.time // 1000,
            "event_id": event.id,
            "realm_id": event.realm_id,
            "event_type": event_type,
        }
    )
    record.update(optional)
    record.update(without_none(event.details))
    if auth_session is not None:
        record["auth_session_parent_id"] = auth_session.parent_session_id
        record["auth_session_tab_id"] = auth_session.tab_id
    return record


def build_admin_record(
    event: AdminEvent,
    hostname: str,
    *,
    timestamp: int,
    include_representation: bool = True,
) -> GelfRecord:
    """Return the GELF record for an administrative event.

    ``timestamp`` is the wall-clock time in seconds at which the caller handles
    the event; admin events carry no time of their own.

    Examples
    --------
    >>> from lib_audit_gelf.domain.events import AuthDetails, OperationType
    >>> event = AdminEvent(OperationType.DELETE, AuthDetails(realm_id="r1"), id="a1",
    ...                    resource_path="users/123", resource_type="USER")
    >>> record = build_admin_record(event, "keycloak", timestamp=1700000000)
    >>> record["short_message"], record["admin_event"], record["resource_path"]
    ('DELETE', 'true', 'users/123')
    """
    auth = event.auth_details
    if auth is None:
        raise BuildError(f"admin event {event.id!r} has no auth details")

    operation = token(event.operation_type)
    summary, optional = operation, {}
    summary, optional = include(summary, optional, "error", event.error)
    summary, optional = include(summary, optional, "realm_name", auth.realm_name)
    summary, optional = include(summary, optional, "client_id", auth.client_id)
    summary, optional = include(summary, optional, "user_id", auth.user_id)
    summary, optional = include(summary, optional, "ip_address", auth.ip_address)

    record = without_none(
        {
            "version": GELF_VERSION,
            "admin_event": "true",
            "host": hostname,
            "short_message": summary,
            "timestamp": int(timestamp),
            "event_id": event.id,
            "operation_type": operation,
            "resource_path": event.resource_path,
            "resource_type": event.resource_type,
            "realm_id": auth.realm_id,
            "representation": event.representation if include_representation else None,
        }
    )
    record.update(optional)
    record.update(without_none(event.details))
    return record


def _render(kind: str, event_id: str | None, build: Callable[[], GelfRecord]) -> str:
    """Encode the record produced by ``build`` or return ``""`` on failure."""
    try:
        payload = encode_record(build())
    except Exception:
        logger.exception("Error creating GELF message for %s %r", kind, event_id)
        return ""
    logger.debug("%s=%s", kind, payload)
    return payload


def render_user_event(
    event: UserEvent,
    hostname: str,
    auth_session: AuthSessionLink | None = None,
) -> str:
    """Return the JSON payload for ``event`` or ``""`` when it cannot be built."""

    return _render(
        "event",
        getattr(event, "id", None),
        lambda: build_user_record(event, hostname, auth_session),
    )


def render_admin_event(
    event: AdminEvent,
    hostname: str,
    *,
    timestamp: int,
    include_representation: bool = True,
) -> str:
    """Return the JSON payload for an admin ``event`` or ``""`` on failure."""

    return _render(
        "admin event",
        getattr(event, "id", None),
        lambda: build_admin_record(
            event,
            hostname,
            timestamp=timestamp,
            include_representation=include_representation,
        ),
    )


__all__ = [
    "build_admin_record",
    "build_user_record",
    "render_admin_event",
    "render_user_event",
]
