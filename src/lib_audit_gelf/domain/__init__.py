"""Domain entities and value objects for audit events and GELF records."""

from __future__ import annotations

from .errors import AuditGelfError, BuildError, ResourceError, SendError
from .events import AdminEvent, AuthDetails, AuthSessionLink, OperationType, UserEvent
from .record import GELF_VERSION, GelfRecord, encode_record, include

__all__ = [
    "AdminEvent",
    "AuditGelfError",
    "AuthDetails",
    "AuthSessionLink",
    "BuildError",
    "GELF_VERSION",
    "GelfRecord",
    "OperationType",
    "ResourceError",
    "SendError",
    "UserEvent",
    "encode_record",
    "include",
]
