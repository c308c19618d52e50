"""Use cases building and delivering GELF records."""

from __future__ import annotations

from .build_record import build_admin_record, build_user_record, render_admin_event, render_user_event
from .process_event import GelfEventListener

__all__ = [
    "GelfEventListener",
    "build_admin_record",
    "build_user_record",
    "render_admin_event",
    "render_user_event",
]
