"""Error taxonomy for the event-to-GELF pipeline.

Only :class:`ResourceError` ever reaches a caller: build and send failures are
logged where they happen and the event is dropped.
"""

from __future__ import annotations


class AuditGelfError(Exception):
    """Base class for all errors raised by :mod:`lib_audit_gelf`."""


class BuildError(AuditGelfError):
    """Deriving a GELF record from an event failed."""


class SendError(AuditGelfError):
    """Resolving the collector or transmitting the datagram failed."""


class ResourceError(AuditGelfError):
    """The UDP socket could not be opened or closed."""


__all__ = ["AuditGelfError", "BuildError", "ResourceError", "SendError"]
