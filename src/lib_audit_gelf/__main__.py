"""Module entry point for ``python -m lib_audit_gelf``.

Wraps the Click group so tests and packaging smoke checks can call
:func:`main` directly and receive an exit code instead of ``SystemExit``.
"""

from __future__ import annotations

from typing import Sequence

import click

from .cli import cli


def main(argv: Sequence[str] | None = None) -> int:
    """Run the Click group in a test-friendly manner.

    Parameters
    ----------
    argv:
        Optional sequence of argument strings (defaults to ``sys.argv[1:]``).

    Returns
    -------
    int
        Zero on success, the Click exit code otherwise.
    """

    args = list(argv) if argv is not None else None
    try:
        cli.main(args=args, prog_name="lib_audit_gelf", standalone_mode=False)
    except click.exceptions.Exit as exit_request:
        return exit_request.exit_code
    except click.ClickException as error:
        error.show()
        return error.exit_code
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
