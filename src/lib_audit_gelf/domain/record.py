"""GELF record primitives shared by the record builders and the transport.

Purpose
-------
Keep the protocol constants, the summary/field coupling helper, and the JSON
encoding in one pure module.

Contents
--------
* :data:`GELF_VERSION` - protocol version placed in every record.
* :data:`GELF_UDP_CHUNK_SIZE` - size above which collectors expect chunking.
* :func:`token` - string form of enum or plain event attributes.
* :func:`include` - appends a value to the summary and sets the field.
* :func:`encode_record` - compact JSON rendering of a record.
"""

from __future__ import annotations

import json
from enum import Enum
from typing import Any

GELF_VERSION = "1.1"
GELF_UDP_CHUNK_SIZE = 8192

GelfRecord = dict[str, Any]


def token(value: Any) -> str:
    """Return the string token for ``value``.

    Examples
    --------
    >>> from lib_audit_gelf.domain.events import OperationType
    >>> token(OperationType.DELETE), token("LOGIN")
    ('DELETE', 'LOGIN')
    """
    if isinstance(value, Enum):
        return str(value.value)
    return str(value)


def include(summary: str, fields: GelfRecord, name: str, value: str | None) -> tuple[str, GelfRecord]:
    """Append ``value`` to ``summary`` and set ``fields[name]`` when present.

    Both outputs change together or not at all, so every optional value in the
    short message is also queryable as a structured field.

    Examples
    --------
    >>> include("LOGIN", {}, "ip_address", "10.0.0.5")
    ('LOGIN 10.0.0.5', {'ip_address': '10.0.0.5'})
    >>> include("LOGIN", {}, "error", None)
    ('LOGIN', {})
    """
    if value is None:
        return summary, fields
    return f"{summary} {value}", {**fields, name: value}


def without_none(fields: GelfRecord) -> GelfRecord:
    """Return ``fields`` minus entries whose value is ``None``."""

    return {key: value for key, value in fields.items() if value is not None}


def encode_record(record: GelfRecord) -> str:
    """Serialize ``record`` to compact JSON keeping insertion order.

    Non-ASCII characters are kept verbatim; the transport encodes to UTF-8.

    Examples
    --------
    >>> encode_record({"version": "1.1", "host": "kc", "short_message": "LOGIN", "timestamp": 1})
    '{"version":"1.1","host":"kc","short_message":"LOGIN","timestamp":1}'
    """
    return json.dumps(record, ensure_ascii=False, separators=(",", ":"))


__all__ = [
    "GELF_UDP_CHUNK_SIZE",
    "GELF_VERSION",
    "GelfRecord",
    "encode_record",
    "include",
    "token",
    "without_none",
]
