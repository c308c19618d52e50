"""Concrete adapters implementing the application ports."""

from __future__ import annotations

from .clock import SystemClock
from .gelf_udp import UdpGelfTransport

__all__ = ["SystemClock", "UdpGelfTransport"]
