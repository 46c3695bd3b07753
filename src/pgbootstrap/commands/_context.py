"""AppContext — shared Click context for all commands.

Created once by the root CLI group and flows to all subcommands via
``@click.pass_obj``.  Provides lazy plugin loading and centralized
result emission (stdout/stderr routing + exit codes).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from pgbootstrap.output.formatters import format_result

if TYPE_CHECKING:
    from pgbootstrap.config.models import ServiceConfig
    from pgbootstrap.config.settings import PgBootstrapSettings
    from pgbootstrap.plugins.manager import PluginManager
    from pgbootstrap.services.result import ServiceResult


class AppContext:
    """Shared context flowing through Click's command hierarchy.

    Plugins are discovered lazily on first use so ``--help`` and
    ``--version`` never import third-party plugin code.
    """

    def __init__(self, settings: PgBootstrapSettings) -> None:
        self.settings = settings
        self._plugins: PluginManager | None = None

        from pgbootstrap.config.logging import configure_logging

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

    @property
    def service(self) -> ServiceConfig:
        return self.settings.service

    @property
    def plugins(self) -> PluginManager:
        """The plugin manager (entry points loaded on first access)."""
        if self._plugins is None:
            from pgbootstrap.plugins.manager import PluginManager

            self._plugins = PluginManager()
            self._plugins.discover_and_load()
        return self._plugins

    def emit(self, result: ServiceResult) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success (``result.ok``): writes to stdout, returns normally.
          Warnings are emitted to stderr so they don't pollute piped output.
        * Failure: writes to stderr, exits with code 1.
        """
        output = format_result(
            result,
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
        )
        if result.ok:
            click.echo(output)
            # In JSON mode, warnings are already in the serialized payload.
            if not self.settings.json_output:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)
