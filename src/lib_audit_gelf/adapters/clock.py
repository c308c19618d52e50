"""System clock adapter."""

from __future__ import annotations

from datetime import datetime, timezone

from lib_audit_gelf.application.ports.time import ClockPort


class SystemClock(ClockPort):
    """Return timezone-aware UTC timestamps from the host clock."""

    def now(self) -> datetime:
        return datetime.now(timezone.utc)


__all__ = ["SystemClock"]
