"""Command: bootstrap the data directory and exec the server."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from pgbootstrap.commands._base import PgCommand

if TYPE_CHECKING:
    from pgbootstrap.commands._context import AppContext


@click.command(
    cls=PgCommand,
    examples="""\
  pgbootstrap start
  pgbootstrap -c /etc/pgbootstrap.toml --log-json start""",
)
@click.pass_obj
def start(app: AppContext) -> None:
    """Initialize on first run, converge, then replace this process with postgres.

    Intended to be run by the process supervisor, not by hand.
    """
    from pgbootstrap.services.start import StartService

    app.emit(StartService(app.service, app.plugins).start())
