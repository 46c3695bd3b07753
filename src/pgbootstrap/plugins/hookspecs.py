"""Pluggy hook specifications for bootstrap lifecycle events.

``post_initialize`` is the slot for first-run actions such as running an
initial SQL script or ensuring databases and users exist.
"""

from __future__ import annotations

import pluggy

hookspec = pluggy.HookspecMarker("pgbootstrap")
hookimpl = pluggy.HookimplMarker("pgbootstrap")


class PgBootstrapHookSpec:
    """Hook specifications for the pgbootstrap plugin system."""

    @hookspec
    def post_initialize(self, data_dir: str, super_user: str) -> None:
        """Called once, right after ``initdb`` succeeded on a fresh data directory."""

    @hookspec
    def pre_exec(self, data_dir: str, config_file: str) -> None:
        """Called after convergence, immediately before the server replaces this process."""
