"""BaseService — common foundation for pgbootstrap services.

Every service receives the :class:`ServiceConfig` at construction time and
an optional :class:`PluginManager`. Paths are resolved once here and passed
explicitly to the lower layers.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from pgbootstrap.infrastructure.binaries import PostgresBinaries

if TYPE_CHECKING:
    from pgbootstrap.config.models import ServiceConfig
    from pgbootstrap.plugins.manager import PluginManager


class BaseService:
    """Base for service-layer classes."""

    def __init__(self, config: ServiceConfig, plugins: PluginManager | None = None) -> None:
        self._config = config
        self._plugins = plugins

    @property
    def config(self) -> ServiceConfig:
        return self._config

    @property
    def binaries(self) -> PostgresBinaries:
        return PostgresBinaries.from_package(self._config.package)
