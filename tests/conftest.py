from __future__ import annotations

import socket
from datetime import datetime, timezone
from typing import Any, Callable, Iterator

import pytest

from lib_audit_gelf.domain.events import AdminEvent, AuthDetails, OperationType, UserEvent


class UdpReceiver:
    """Loopback UDP socket collecting datagrams sent by the transport under test."""

    def __init__(self) -> None:
        self._sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
        self._sock.bind(("127.0.0.1", 0))
        self._sock.settimeout(2.0)
        self.host, self.port = self._sock.getsockname()

    def receive(self) -> bytes:
        data, _ = self._sock.recvfrom(65535)
        return data

    def receive_nothing(self, timeout: float = 0.2) -> bool:
        self._sock.settimeout(timeout)
        try:
            self._sock.recvfrom(65535)
        except socket.timeout:
            return True
        finally:
            self._sock.settimeout(2.0)
        return False

    def close(self) -> None:
        self._sock.close()


class FixedClock:
    def __init__(self, when: datetime) -> None:
        self.when = when

    def now(self) -> datetime:
        return self.when


class RecordingTransport:
    def __init__(self) -> None:
        self.payloads: list[str | bytes] = []
        self.closed = False

    def send(self, payload: str | bytes) -> bool:
        if not payload:
            return False
        self.payloads.append(payload)
        return True

    def close(self) -> None:
        self.closed = True


class StaticSessionContext:
    def __init__(self, link: Any) -> None:
        self.link = link

    def authentication_session(self) -> Any:
        return self.link


@pytest.fixture
def udp_receiver() -> Iterator[UdpReceiver]:
    receiver = UdpReceiver()
    try:
        yield receiver
    finally:
        receiver.close()


@pytest.fixture
def fixed_clock() -> FixedClock:
    return FixedClock(datetime(2023, 11, 14, 22, 13, 20, tzinfo=timezone.utc))


@pytest.fixture
def recording_transport() -> RecordingTransport:
    return RecordingTransport()


@pytest.fixture
def user_event_factory() -> Callable[..., UserEvent]:
    def _factory(**overrides: Any) -> UserEvent:
        fields: dict[str, Any] = {
            "type": "LOGIN",
            "time": 1699999999500,
            "id": "evt-1",
            "realm_id": "realm-uuid",
        }
        fields.update(overrides)
        return UserEvent(**fields)

    return _factory


@pytest.fixture
def admin_event_factory() -> Callable[..., AdminEvent]:
    def _factory(*, auth: dict[str, Any] | None = None, **overrides: Any) -> AdminEvent:
        fields: dict[str, Any] = {
            "operation_type": OperationType.DELETE,
            "auth_details": AuthDetails(realm_id="master-uuid", **(auth or {})),
            "id": "adm-1",
            "resource_path": "users/123",
            "resource_type": "USER",
        }
        fields.update(overrides)
        return AdminEvent(**fields)

    return _factory


@pytest.fixture
def session_context_factory() -> Callable[[Any], StaticSessionContext]:
    return StaticSessionContext
