"""Command: run the server's configuration check."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from pgbootstrap.commands._base import PgCommand

if TYPE_CHECKING:
    from pgbootstrap.commands._context import AppContext


@click.command(
    cls=PgCommand,
    examples="""\
  pgbootstrap check
  pgbootstrap --json check""",
)
@click.pass_obj
def check(app: AppContext) -> None:
    """Compile and check the configuration, even when check_config is off."""
    from pgbootstrap.services.build import BuildService

    app.emit(BuildService(app.service).check())
