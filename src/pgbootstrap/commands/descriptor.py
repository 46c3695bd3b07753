"""Command: print the supervisor's service descriptor."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from pgbootstrap.commands._base import PgCommand

if TYPE_CHECKING:
    from pgbootstrap.commands._context import AppContext


@click.command(
    cls=PgCommand,
    examples="""\
  pgbootstrap descriptor > ~/Library/LaunchAgents/org.pgbootstrap.postgresql.plist
  pgbootstrap descriptor --program /usr/local/bin/pgbootstrap
  pgbootstrap --json descriptor""",
)
@click.option(
    "--program",
    default="pgbootstrap",
    show_default=True,
    help="Executable the supervisor should run.",
)
@click.pass_obj
def descriptor(app: AppContext, program: str) -> None:
    """Print a launchd property list that runs `pgbootstrap start`."""
    from pgbootstrap.services.descriptor import build_service_descriptor
    from pgbootstrap.services.result import ServiceResult

    desc = build_service_descriptor(
        app.service,
        program=program,
        config_path=app.settings.config_path,
    )
    if app.settings.json_output:
        app.emit(ServiceResult(ok=True, op="descriptor", data=desc.to_launchd()))
        return
    click.echo(desc.render_plist(), nl=False)
