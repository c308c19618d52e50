"""Static package metadata surfaced by the CLI ``info`` command."""

from __future__ import annotations

name = "lib_audit_gelf"
title = "Ship identity-platform audit events to Graylog as GELF over UDP"
version = "0.1.0"
homepage = "https://github.com/lib-audit-gelf/lib_audit_gelf"
author = "lib_audit_gelf contributors"
shell_command = "lib_audit_gelf"


def summary_info() -> str:
    """Return the metadata banner, one ``key = value`` line per field.

    Examples
    --------
    >>> summary_info().splitlines()[0]
    'Info for lib_audit_gelf:'
    """
    fields = [
        ("name", name),
        ("title", title),
        ("version", version),
        ("homepage", homepage),
        ("author", author),
        ("shell_command", shell_command),
    ]
    pad = max(len(label) for label, _ in fields)
    lines = [f"Info for {name}:", ""]
    lines.extend(f"    {label.ljust(pad)} = {value}" for label, value in fields)
    return "\n".join(lines) + "\n"
