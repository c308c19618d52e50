"""Protocols the application layer depends on."""

from __future__ import annotations

from .session import SessionContextPort
from .time import ClockPort
from .transport import GelfTransportPort

__all__ = ["ClockPort", "GelfTransportPort", "SessionContextPort"]
