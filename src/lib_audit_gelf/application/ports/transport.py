"""Port describing the GELF datagram transport."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class GelfTransportPort(Protocol):
    """Deliver rendered GELF payloads to a collector."""

    def send(self, payload: str | bytes) -> bool:
        """Send ``payload`` as one message; return ``True`` when handed off."""

    def close(self) -> None:
        """Release the underlying socket."""


__all__ = ["GelfTransportPort"]
