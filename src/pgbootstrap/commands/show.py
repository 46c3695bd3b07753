"""Command: print the effective settings."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from pgbootstrap.commands._base import PgCommand

if TYPE_CHECKING:
    from pgbootstrap.commands._context import AppContext


@click.command(cls=PgCommand, examples="  pgbootstrap show\n  pgbootstrap --json show")
@click.pass_obj
def show(app: AppContext) -> None:
    """Show each effective setting with its priority and source."""
    from pgbootstrap.services.build import BuildService

    app.emit(BuildService(app.service).show())
