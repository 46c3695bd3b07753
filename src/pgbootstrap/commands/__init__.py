"""Subcommand modules for pgbootstrap.

Provides register_commands() which uses deferred imports to keep
``pgbootstrap --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all standalone commands on the root CLI group."""
    from pgbootstrap.commands.check import check
    from pgbootstrap.commands.compile import compile_cmd
    from pgbootstrap.commands.descriptor import descriptor
    from pgbootstrap.commands.show import show
    from pgbootstrap.commands.start import start

    cli.add_command(compile_cmd)
    cli.add_command(check)
    cli.add_command(show)
    cli.add_command(descriptor)
    cli.add_command(start)
