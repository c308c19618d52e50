"""Convert identity-platform audit events to GELF and ship them over UDP.

The public surface is the provider factory and listener used by hosts, plus
the pure record builders for callers that bring their own transport.
"""

from __future__ import annotations

from .adapters import UdpGelfTransport
from .application.use_cases import (
    GelfEventListener,
    build_admin_record,
    build_user_record,
    render_admin_event,
    render_user_event,
)
from .config import GelfSettings
from .domain import AdminEvent, AuthDetails, AuthSessionLink, OperationType, UserEvent
from .factory import PROVIDER_ID, GelfEventListenerFactory

__all__ = [
    "AdminEvent",
    "AuthDetails",
    "AuthSessionLink",
    "GelfEventListener",
    "GelfEventListenerFactory",
    "GelfSettings",
    "OperationType",
    "PROVIDER_ID",
    "UdpGelfTransport",
    "UserEvent",
    "build_admin_record",
    "build_user_record",
    "render_admin_event",
    "render_user_event",
]
