"""Port exposing host request context to the listener."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from lib_audit_gelf.domain.events import AuthSessionLink


@runtime_checkable
class SessionContextPort(Protocol):
    """Look up the authentication session bound to the current request."""

    def authentication_session(self) -> AuthSessionLink | None:
        """Return the active linkage, or ``None`` outside an authentication flow."""


__all__ = ["SessionContextPort"]
