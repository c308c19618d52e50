"""Use case wiring event callbacks to the record builders and the transport.

Purpose
-------
Provide the listener object the host calls for every user and admin event:
build the GELF payload, then hand it to the transport.

System Role
-----------
Application-layer orchestrator created by :class:`GelfEventListenerFactory`.
Errors never leave the callbacks, so a failed delivery cannot fail the
audited operation.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from lib_audit_gelf.application.ports import ClockPort, GelfTransportPort, SessionContextPort
from lib_audit_gelf.domain.events import AdminEvent, AuthSessionLink, UserEvent

from .build_record import render_admin_event, render_user_event

logger = logging.getLogger(__name__)


class GelfEventListener:
    """Forward host events to a GELF collector.

    Parameters
    ----------
    transport:
        Adapter implementing :class:`GelfTransportPort`; owned by the listener.
    hostname:
        Source label written to the ``host`` field of every record.
    session_context:
        Optional accessor for the authentication session of the current request.
    clock:
        Provider of the wall-clock time stamped on admin events; the system
        clock when omitted.

    Examples
    --------
    >>> class Recorder:
    ...     def __init__(self):
    ...         self.payloads = []
    ...     def send(self, payload):
    ...         self.payloads.append(payload)
    ...         return True
    ...     def close(self):
    ...         pass
    >>> recorder = Recorder()
    >>> listener = GelfEventListener(recorder, "keycloak")
    >>> listener.on_event(UserEvent(type="LOGOUT", time=5000))
    >>> recorder.payloads[0]
    '{"version":"1.1","host":"keycloak","short_message":"LOGOUT","timestamp":5,"event_type":"LOGOUT"}'
    """

    def __init__(
        self,
        transport: GelfTransportPort,
        hostname: str,
        *,
        session_context: SessionContextPort | None = None,
        clock: ClockPort | None = None,
    ) -> None:
        self._transport = transport
        self._hostname = hostname
        self._session_context = session_context
        self._clock = clock

    @property
    def hostname(self) -> str:
        return self._hostname

    @property
    def transport(self) -> GelfTransportPort:
        return self._transport

    def on_event(self, event: UserEvent) -> None:
        """Handle a user/authentication event."""
        payload = render_user_event(event, self._hostname, self._auth_session())
        self._transport.send(payload)

    def on_admin_event(self, event: AdminEvent, include_representation: bool) -> None:
        """Handle an administrative event."""
        timestamp = self._admin_timestamp()
        if timestamp is None:
            return
        payload = render_admin_event(
            event,
            self._hostname,
            timestamp=timestamp,
            include_representation=include_representation,
        )
        self._transport.send(payload)

    def close(self) -> None:
        """Release the transport socket."""
        self._transport.close()

    def _admin_timestamp(self) -> int | None:
        try:
            now = self._clock.now() if self._clock is not None else datetime.now(timezone.utc)
            return int(now.timestamp())
        except Exception:
            logger.exception("Error reading wall clock for admin event")
            return None

    def _auth_session(self) -> AuthSessionLink | None:
        if self._session_context is None:
            return None
        try:
            return self._session_context.authentication_session()
        except Exception:
            logger.exception("Error reading authentication session from host context")
            return None


__all__ = ["GelfEventListener"]
