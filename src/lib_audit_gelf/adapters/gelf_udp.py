"""GELF-over-UDP transport adapter.

Purpose
-------
Ship rendered GELF payloads to a collector as single, uncompressed UDP
datagrams.

Contents
--------
* :class:`UdpGelfTransport` - concrete :class:`GelfTransportPort`.

System Role
-----------
Owns the sockets of one listener. Delivery is fire-and-forget: there is no
acknowledgement, retry, or chunking. Payloads larger than one GELF chunk are
still sent whole and may be dropped by the network.

Alignment Notes
---------------
The collector host is resolved with ``getaddrinfo`` on every send, so address
changes of the collector are picked up without recreating the transport and
both IPv4 and IPv6 destinations work.
"""

from __future__ import annotations

import logging
import socket
from types import TracebackType

from lib_audit_gelf.application.ports.transport import GelfTransportPort
from lib_audit_gelf.domain.errors import ResourceError, SendError
from lib_audit_gelf.domain.record import GELF_UDP_CHUNK_SIZE

logger = logging.getLogger(__name__)


class UdpGelfTransport(GelfTransportPort):
    """Send GELF payloads over long-lived UDP sockets.

    An IPv4 socket is bound at construction. The first IPv6 destination opens
    a second socket for that family, so a collector reachable only over IPv6
    is served too.

    Parameters
    ----------
    host:
        Collector hostname or IP address (IPv4 or IPv6).
    port:
        Collector UDP port.

    Raises
    ------
    ResourceError
        When the socket cannot be created or bound.
    """

    def __init__(self, *, host: str, port: int) -> None:
        self._host = host
        self._port = port
        self._sent_count = 0
        self._failed_count = 0
        self._closed = False
        self._sockets: dict[int, socket.socket] = {}
        self._sockets[socket.AF_INET] = _bound_socket(socket.AF_INET, host, port)

    @property
    def local_address(self) -> tuple[str, int]:
        """Address the IPv4 socket is bound to (OS-assigned port)."""
        return self._sockets[socket.AF_INET].getsockname()

    @property
    def sent_count(self) -> int:
        return self._sent_count

    @property
    def failed_count(self) -> int:
        return self._failed_count

    @property
    def closed(self) -> bool:
        return self._closed

    def send(self, payload: str | bytes) -> bool:
        """Send ``payload`` as one datagram.

        Empty payloads (the record builders' failure result) are ignored
        without touching the network. Failures are logged and swallowed.

        Returns
        -------
        bool
            ``True`` when the datagram was handed to the socket.
        """
        if not payload:
            return False
        try:
            self._transmit(payload)
        except SendError:
            self._failed_count += 1
            logger.exception("Error sending GELF log message")
            return False
        self._sent_count += 1
        return True

    def close(self) -> None:
        """Release the sockets; further calls are ignored."""
        if self._closed:
            return
        self._closed = True
        sockets, self._sockets = list(self._sockets.values()), {}
        errors: list[OSError] = []
        for sock in sockets:
            try:
                sock.close()
            except OSError as exc:
                errors.append(exc)
        if errors:
            raise ResourceError(f"cannot close UDP socket for {self._host}:{self._port}") from errors[0]

    def _transmit(self, payload: str | bytes) -> None:
        if self._closed:
            raise SendError(f"cannot deliver GELF message to {self._host}:{self._port}: transport is closed")
        try:
            data = payload.encode("utf-8") if isinstance(payload, str) else bytes(payload)
            if len(data) > GELF_UDP_CHUNK_SIZE:
                logger.warning(
                    "GELF message of %d bytes exceeds %d bytes and is sent unchunked to %s:%d",
                    len(data),
                    GELF_UDP_CHUNK_SIZE,
                    self._host,
                    self._port,
                )
            family, _type, _proto, _canonname, sockaddr = socket.getaddrinfo(self._host, self._port, type=socket.SOCK_DGRAM)[0]
            self._socket_for(family).sendto(data, sockaddr)
        except (OSError, ResourceError, UnicodeError) as exc:
            raise SendError(f"cannot deliver GELF message to {self._host}:{self._port}: {exc}") from exc

    def _socket_for(self, family: int) -> socket.socket:
        sock = self._sockets.get(family)
        if sock is None:
            sock = _bound_socket(family, self._host, self._port)
            self._sockets[family] = sock
        return sock

    def __enter__(self) -> "UdpGelfTransport":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        self.close()


def _bound_socket(family: int, host: str, port: int) -> socket.socket:
    """Return a datagram socket of ``family`` bound to an OS-assigned port."""
    try:
        sock = socket.socket(family, socket.SOCK_DGRAM)
    except OSError as exc:
        raise ResourceError(f"cannot create UDP socket for {host}:{port}") from exc
    try:
        sock.bind(("::" if family == socket.AF_INET6 else "", 0))
    except OSError as exc:
        sock.close()
        raise ResourceError(f"cannot bind UDP socket for {host}:{port}") from exc
    return sock


__all__ = ["UdpGelfTransport"]
