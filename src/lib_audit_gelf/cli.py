"""Click command group for rendering and sending audit events by hand.

Purpose
-------
Let operators check collector connectivity and inspect the GELF payload an
exported event turns into, without running the identity platform.

Contents
--------
* :func:`cli` - root group (``--use-dotenv``, ``--verbose``, ``--version``).
* ``info`` / ``render`` / ``send`` subcommands.
"""

from __future__ import annotations

import json
import logging
import time
from typing import IO, Any, Mapping

import click
from rich.console import Console
from rich.logging import RichHandler

from . import __init__conf__
from . import config as gelf_config
from .application.use_cases import render_admin_event, render_user_event
from .domain.events import AdminEvent, UserEvent
from .factory import GelfEventListenerFactory

CLICK_CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), rich_tracebacks=True, show_path=False)],
    )


def _is_admin(payload: Mapping[str, Any]) -> bool:
    return "operationType" in payload or "operation_type" in payload


def _load_event(stream: IO[str]) -> UserEvent | AdminEvent:
    try:
        payload = json.load(stream)
    except json.JSONDecodeError as exc:
        raise click.ClickException(f"event file is not valid JSON: {exc}") from exc
    if not isinstance(payload, dict):
        raise click.ClickException("event file must contain a JSON object")
    try:
        if _is_admin(payload):
            return AdminEvent.from_dict(payload)
        return UserEvent.from_dict(payload)
    except (KeyError, TypeError, ValueError) as exc:
        raise click.ClickException(f"event file does not describe an event: {exc}") from exc


@click.group(
    help=__init__conf__.title,
    context_settings=CLICK_CONTEXT_SETTINGS,
    invoke_without_command=True,
)
@click.version_option(
    version=__init__conf__.version,
    prog_name=__init__conf__.shell_command,
    message=f"{__init__conf__.shell_command} version {__init__conf__.version}",
)
@click.option(
    "--use-dotenv/--no-use-dotenv",
    default=None,
    help=f"Load the nearest .env before reading settings (default: ${gelf_config.DOTENV_ENV_VAR}).",
)
@click.option("--verbose", "-v", is_flag=True, help="Log rendered payloads at DEBUG level.")
@click.pass_context
def cli(ctx: click.Context, use_dotenv: bool | None, verbose: bool) -> None:
    """Root command; prints the metadata banner when no subcommand is given."""

    _configure_logging(verbose)
    if gelf_config.dotenv_requested(use_dotenv):
        gelf_config.enable_dotenv()
    if ctx.invoked_subcommand is None:
        click.echo(__init__conf__.summary_info(), nl=False)


@cli.command("info", context_settings=CLICK_CONTEXT_SETTINGS)
def cli_info() -> None:
    """Print package metadata."""

    click.echo(__init__conf__.summary_info(), nl=False)


@cli.command("render", context_settings=CLICK_CONTEXT_SETTINGS)
@click.argument("event_file", type=click.File("r", encoding="utf-8"))
@click.option("--hostname", default=None, help="Source label for the host field (default: settings).")
@click.option("--no-representation", is_flag=True, help="Omit the admin resource representation.")
@click.option("--raw", is_flag=True, help="Print compact JSON instead of pretty output.")
def cli_render(event_file: IO[str], hostname: str | None, no_representation: bool, raw: bool) -> None:
    """Print the GELF payload for EVENT_FILE (``-`` reads stdin)."""

    event = _load_event(event_file)
    label = hostname or gelf_config.source_hostname()
    if isinstance(event, AdminEvent):
        payload = render_admin_event(
            event,
            label,
            timestamp=int(time.time()),
            include_representation=not no_representation,
        )
    else:
        payload = render_user_event(event, label)
    if not payload:
        raise click.ClickException("event could not be converted to GELF")
    if raw:
        click.echo(payload)
    else:
        Console().print_json(payload)


@cli.command("send", context_settings=CLICK_CONTEXT_SETTINGS)
@click.argument("event_file", type=click.File("r", encoding="utf-8"))
@click.option("--gelf-host", default=None, help="Collector host (default: $GELF_HOST or 127.0.0.1).")
@click.option("--gelf-port", default=None, help="Collector UDP port (default: $GELF_PORT or 12201).")
@click.option("--hostname", default=None, help="Source label (default: $GELF_SOURCE_HOSTNAME or keycloak).")
@click.option("--no-representation", is_flag=True, help="Omit the admin resource representation.")
def cli_send(
    event_file: IO[str],
    gelf_host: str | None,
    gelf_port: str | None,
    hostname: str | None,
    no_representation: bool,
) -> None:
    """Send EVENT_FILE to the collector as one GELF datagram."""

    event = _load_event(event_file)
    factory = GelfEventListenerFactory()
    try:
        settings = factory.init({"hostname": hostname, "gelf-host": gelf_host, "gelf-port": gelf_port})
    except ValueError as exc:
        raise click.BadParameter(str(exc)) from exc
    listener = factory.create()
    try:
        if isinstance(event, AdminEvent):
            listener.on_admin_event(event, include_representation=not no_representation)
        else:
            listener.on_event(event)
        sent = listener.transport.sent_count
    finally:
        listener.close()
        factory.close()
    if not sent:
        raise click.ClickException(f"event was not sent to {settings.gelf_host}:{settings.gelf_port}")
    click.echo(f"sent to {settings.gelf_host}:{settings.gelf_port}")


__all__ = ["cli"]
