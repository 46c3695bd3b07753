"""Command: compile the service configuration into the store."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from pgbootstrap.commands._base import PgCommand

if TYPE_CHECKING:
    from pgbootstrap.commands._context import AppContext


@click.command(
    "compile",
    cls=PgCommand,
    examples="""\
  pgbootstrap compile
  pgbootstrap --json compile
  pgbootstrap -c /etc/pgbootstrap.toml compile""",
)
@click.pass_obj
def compile_cmd(app: AppContext) -> None:
    """Write postgresql.conf, pg_hba.conf and pg_ident.conf to the store."""
    from pgbootstrap.services.build import BuildService

    app.emit(BuildService(app.service).compile())
