"""Provider factory creating one :class:`GelfEventListener` per host session.

Purpose
-------
Mirror the host's provider-factory lifecycle: ``init`` resolves configuration
once, ``create`` builds a listener (with its own socket) for every session,
and ``close`` ends the factory.

System Role
-----------
Composition root of the package: the only place that picks concrete adapters
(:class:`UdpGelfTransport`, :class:`SystemClock`) for the application layer.
"""

from __future__ import annotations

import logging
from typing import Mapping

from .adapters import SystemClock, UdpGelfTransport
from .application.ports import SessionContextPort
from .application.use_cases import GelfEventListener
from .config import GelfSettings, resolve_settings
from .domain.errors import ResourceError

logger = logging.getLogger(__name__)

PROVIDER_ID = "l9g-graylog"


class GelfEventListenerFactory:
    """Create GELF/UDP event listeners from resolved settings."""

    provider_id = PROVIDER_ID

    def __init__(self, settings: GelfSettings | None = None) -> None:
        self._settings = settings or GelfSettings()

    @property
    def settings(self) -> GelfSettings:
        return self._settings

    def init(self, scope: Mapping[str, str | None] | None = None, *, environ: Mapping[str, str] | None = None) -> GelfSettings:
        """Resolve settings from environment and provider ``scope``.

        Examples
        --------
        >>> factory = GelfEventListenerFactory()
        >>> factory.init({"hostname": "sso", "gelf-host": "graylog", "gelf-port": "12202"}, environ={})
        GelfSettings(hostname='sso', gelf_host='graylog', gelf_port=12202)
        """
        self._settings = resolve_settings(scope, environ, base=self._settings)
        logger.info("gelf source = %s", self._settings.hostname)
        logger.info("gelf address = %s:%d", self._settings.gelf_host, self._settings.gelf_port)
        return self._settings

    def create(self, session_context: SessionContextPort | None = None) -> GelfEventListener:
        """Return a new listener owning a freshly bound UDP socket.

        Raises
        ------
        ResourceError
            When the socket cannot be opened; the host cannot create the
            provider without one.
        """
        try:
            transport = UdpGelfTransport(host=self._settings.gelf_host, port=self._settings.gelf_port)
        except ResourceError:
            logger.exception("Error initializing GelfEventListener")
            raise
        return GelfEventListener(
            transport,
            self._settings.hostname,
            session_context=session_context,
            clock=SystemClock(),
        )

    def close(self) -> None:
        """Nothing to release; listeners own their sockets."""


__all__ = ["GelfEventListenerFactory", "PROVIDER_ID"]
