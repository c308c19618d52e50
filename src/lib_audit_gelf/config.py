"""Configuration helpers: listener settings and optional ``.env`` loading.

Purpose
-------
Resolve the three values the listener needs (source hostname label, collector
host, collector port) from a provider scope mapping and/or environment
variables, and optionally populate the environment from the nearest ``.env``.

Contents
--------
* :class:`GelfSettings` - frozen settings value object.
* :func:`settings_from_scope` / :func:`settings_from_env` - validated loaders.
* :func:`enable_dotenv` - python-dotenv bridge, never overriding real variables.

Precedence is defaults < environment < provider scope.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Mapping

from dotenv import find_dotenv, load_dotenv

logger = logging.getLogger(__name__)

DEFAULT_HOSTNAME = "keycloak"
DEFAULT_GELF_HOST = "127.0.0.1"
DEFAULT_GELF_PORT = 12201

DOTENV_ENV_VAR = "GELF_USE_DOTENV"
ENV_HOSTNAME = "GELF_SOURCE_HOSTNAME"
ENV_GELF_HOST = "GELF_HOST"
ENV_GELF_PORT = "GELF_PORT"

SCOPE_HOSTNAME = "hostname"
SCOPE_GELF_HOST = "gelf-host"
SCOPE_GELF_PORT = "gelf-port"

_TRUTHY = {"1", "true", "yes", "on"}

_DOTENV_PATH: Path | None = None
_DOTENV_ATTEMPTED = False


@dataclass(slots=True, frozen=True)
class GelfSettings:
    """Resolved listener configuration.

    Attributes
    ----------
    hostname:
        Label written to the ``host`` field of every record.
    gelf_host:
        Collector host receiving the datagrams.
    gelf_port:
        Collector UDP port.
    """

    hostname: str = DEFAULT_HOSTNAME
    gelf_host: str = DEFAULT_GELF_HOST
    gelf_port: int = DEFAULT_GELF_PORT

    def __post_init__(self) -> None:
        if not self.hostname.strip():
            raise ValueError("hostname must not be empty")
        if not self.gelf_host.strip():
            raise ValueError("gelf host must not be empty")
        object.__setattr__(self, "gelf_port", parse_port(self.gelf_port, source="gelf port"))

    @property
    def address(self) -> tuple[str, int]:
        return self.gelf_host, self.gelf_port


def parse_port(value: Any, *, source: str) -> int:
    """Return ``value`` as a valid UDP port number.

    Examples
    --------
    >>> parse_port("12201", source="GELF_PORT")
    12201
    >>> parse_port("0", source="GELF_PORT")
    Traceback (most recent call last):
    ...
    ValueError: GELF_PORT must be positive, got 0
    """
    try:
        port = int(str(value).strip())
    except ValueError as exc:
        raise ValueError(f"{source} must be an integer, got {value!r}") from exc
    if port <= 0:
        raise ValueError(f"{source} must be positive, got {port}")
    if port > 65535:
        raise ValueError(f"{source} must be <= 65535, got {port}")
    return port


_FIELDS = ("hostname", "gelf_host", "gelf_port")
_ENV_KEYS = (ENV_HOSTNAME, ENV_GELF_HOST, ENV_GELF_PORT)
_SCOPE_KEYS = (SCOPE_HOSTNAME, SCOPE_GELF_HOST, SCOPE_GELF_PORT)

_Layer = tuple[Mapping[str, Any], tuple[str, str, str]]


def _layered(base: GelfSettings, layers: tuple[_Layer, ...]) -> GelfSettings:
    """Apply the first non-``None`` value per field; ``layers`` run highest precedence first.

    Only the winning value of each field is validated, so a malformed value
    hidden by a higher layer never raises.
    """
    changes: dict[str, Any] = {}
    for index, name in enumerate(_FIELDS):
        for values, keys in layers:
            raw = values.get(keys[index])
            if raw is None:
                continue
            changes[name] = parse_port(raw, source=keys[index]) if name == "gelf_port" else raw
            break
    return replace(base, **changes) if changes else base


def settings_from_env(environ: Mapping[str, str] | None = None, *, base: GelfSettings | None = None) -> GelfSettings:
    """Apply ``GELF_SOURCE_HOSTNAME``, ``GELF_HOST`` and ``GELF_PORT`` over ``base``."""

    env = os.environ if environ is None else environ
    return _layered(base or GelfSettings(), ((env, _ENV_KEYS),))


def settings_from_scope(scope: Mapping[str, str | None] | None, *, base: GelfSettings | None = None) -> GelfSettings:
    """Apply provider scope keys ``hostname``, ``gelf-host`` and ``gelf-port`` over ``base``.

    Missing or ``None`` values keep the value from ``base`` (defaults when
    omitted).

    Examples
    --------
    >>> settings_from_scope({"gelf-port": "5555"})
    GelfSettings(hostname='keycloak', gelf_host='127.0.0.1', gelf_port=5555)
    """
    return _layered(base or GelfSettings(), ((scope or {}, _SCOPE_KEYS),))


def resolve_settings(
    scope: Mapping[str, str | None] | None = None,
    environ: Mapping[str, str] | None = None,
    *,
    base: GelfSettings | None = None,
) -> GelfSettings:
    """Layer provider ``scope`` over the environment over ``base``.

    Examples
    --------
    >>> resolve_settings({"gelf-port": "5555"}, {"GELF_PORT": "not-a-port", "GELF_HOST": "graylog"})
    GelfSettings(hostname='keycloak', gelf_host='graylog', gelf_port=5555)
    """
    env = os.environ if environ is None else environ
    return _layered(base or GelfSettings(), ((scope or {}, _SCOPE_KEYS), (env, _ENV_KEYS)))


def source_hostname(environ: Mapping[str, str] | None = None) -> str:
    """Return ``GELF_SOURCE_HOSTNAME`` or the default label, without reading the other settings."""

    env = os.environ if environ is None else environ
    value = env.get(ENV_HOSTNAME)
    return value if value and value.strip() else DEFAULT_HOSTNAME


def dotenv_requested(flag: bool | None, environ: Mapping[str, str] | None = None) -> bool:
    """Return whether ``.env`` loading is wanted; an explicit ``flag`` wins."""

    if flag is not None:
        return flag
    env = os.environ if environ is None else environ
    return env.get(DOTENV_ENV_VAR, "").strip().lower() in _TRUTHY


def enable_dotenv() -> Path | None:
    """Load the nearest ``.env`` in the working directory or its parents.

    Existing environment variables keep precedence. Repeated calls return the
    file loaded by the first call.
    """
    global _DOTENV_PATH, _DOTENV_ATTEMPTED
    if _DOTENV_ATTEMPTED:
        return _DOTENV_PATH
    _DOTENV_ATTEMPTED = True
    location = find_dotenv(usecwd=True)
    if not location:
        logger.debug("no .env file found above %s", Path.cwd())
        return None
    found = Path(location).resolve()
    load_dotenv(found, override=False)
    logger.debug("loaded environment from %s", found)
    _DOTENV_PATH = found
    return found


def _reset_dotenv_state_for_testing() -> None:
    global _DOTENV_PATH, _DOTENV_ATTEMPTED
    _DOTENV_PATH = None
    _DOTENV_ATTEMPTED = False


__all__ = [
    "DEFAULT_GELF_HOST",
    "DEFAULT_GELF_PORT",
    "DEFAULT_HOSTNAME",
    "DOTENV_ENV_VAR",
    "GelfSettings",
    "dotenv_requested",
    "enable_dotenv",
    "parse_port",
    "resolve_settings",
    "settings_from_env",
    "settings_from_scope",
    "source_hostname",
]
