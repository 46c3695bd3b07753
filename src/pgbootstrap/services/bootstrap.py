"""Bootstrap orchestrator — one synchronous pass per service activation.

State machine::

    start -> check_marker -> uninitialized -> initialize -> converge -> exec
                          \\-> initialized  ---------------/

Bootstrap state is never stored. It is derived on every run from the
presence of ``PG_VERSION`` inside the data directory.

Initialization runs at most once per data directory: remove stray
top-level ``*.conf`` files, run ``initdb``, then fire the
``post_initialize`` hook. Convergence runs on every activation and only
re-points symlinks. The final step replaces this process with
``postgres``; supervision and restarts belong to the process supervisor.
"""

from __future__ import annotations

import logging
import os
import subprocess
from collections.abc import Callable, Mapping, Sequence
from enum import StrEnum
from pathlib import Path
from typing import TYPE_CHECKING

from pgbootstrap.domain.errors import ConvergenceFailed, ExecFailed, InitializationFailed
from pgbootstrap.infrastructure.binaries import diagnostics, run_binary
from pgbootstrap.infrastructure.filesystem import (
    CONFIG_LINK,
    RECOVERY_LINK,
    has_version_marker,
    remove_stray_configs,
    replace_symlink,
)

if TYPE_CHECKING:
    from pgbootstrap.infrastructure.binaries import PostgresBinaries
    from pgbootstrap.plugins.manager import PluginManager

logger = logging.getLogger(__name__)

DATA_DIR_ENV = "PGDATA"

Runner = Callable[..., subprocess.CompletedProcess[str]]
Exec = Callable[[str, list[str], dict[str, str]], object]


class BootstrapState(StrEnum):
    """Derived state of a data directory."""

    UNINITIALIZED = "uninitialized"
    INITIALIZED = "initialized"


class BootstrapOrchestrator:
    """Initialize (once) and converge a data directory, then exec the server.

    Args:
        data_dir: The server's data directory.
        binaries: Resolved ``postgres`` and ``initdb`` paths.
        config_file: Compiled ``postgresql.conf`` to link into the data directory.
        super_user: Account name passed to ``initdb -U``.
        initdb_args: Extra ``initdb`` arguments, passed verbatim and in order.
        recovery_file: Optional ``recovery.conf`` to link into the data directory.
        plugins: Receives ``post_initialize`` and ``pre_exec``.
        environ: Base environment for child processes (default: ``os.environ``).
        runner: Runs ``initdb`` to completion.
        execve: Replaces the current process with the server.
    """

    def __init__(
        self,
        *,
        data_dir: Path,
        binaries: PostgresBinaries,
        config_file: Path,
        super_user: str = "postgres",
        initdb_args: Sequence[str] = (),
        recovery_file: Path | None = None,
        plugins: PluginManager | None = None,
        environ: Mapping[str, str] | None = None,
        runner: Runner | None = None,
        execve: Exec | None = None,
    ) -> None:
        self.data_dir = data_dir
        self.binaries = binaries
        self.config_file = config_file
        self.super_user = super_user
        self.initdb_args = list(initdb_args)
        self.recovery_file = recovery_file
        self._plugins = plugins
        self._environ = dict(os.environ if environ is None else environ)
        self._run = runner or run_binary
        self._execve = execve or os.execve
        self.warnings: list[str] = []

    @property
    def environment(self) -> dict[str, str]:
        """Child environment: the base environment plus ``PGDATA``."""
        return {**self._environ, DATA_DIR_ENV: str(self.data_dir)}

    # ------------------------------------------------------------------
    # States
    # ------------------------------------------------------------------

    def detect_state(self) -> BootstrapState:
        if has_version_marker(self.data_dir):
            return BootstrapState.INITIALIZED
        return BootstrapState.UNINITIALIZED

    def initdb_command(self) -> list[str]:
        return [
            str(self.binaries.initdb),
            "-D",
            str(self.data_dir),
            "-U",
            self.super_user,
            *self.initdb_args,
        ]

    def initialize(self) -> None:
        """Clean stray config files and run ``initdb``.

        Raises:
            InitializationFailed: ``initdb`` could not run or exited non-zero.
                The data directory is left as-is for an administrator.
        """
        for path in remove_stray_configs(self.data_dir):
            logger.info("Removed stray config file %s", path)

        argv = self.initdb_command()
        logger.info("Initializing data directory %s", self.data_dir)
        try:
            result = self._run(argv, env=self.environment)
        except OSError as exc:
            msg = f"Cannot run {self.binaries.initdb}"
            raise InitializationFailed(msg, details=str(exc)) from exc
        if result.returncode != 0:
            msg = f"initdb failed for {self.data_dir}"
            raise InitializationFailed(msg, details=diagnostics(result))

        self._dispatch("post_initialize", data_dir=str(self.data_dir), super_user=self.super_user)

    def converge(self) -> None:
        """Re-point the config (and recovery) symlinks. Safe on every run.

        An unset recovery file leaves an existing ``recovery.conf`` link alone.

        Raises:
            ConvergenceFailed: A symlink could not be replaced.
        """
        links = [(self.data_dir / CONFIG_LINK, self.config_file)]
        if self.recovery_file is not None:
            links.append((self.data_dir / RECOVERY_LINK, self.recovery_file))

        for link, target in links:
            try:
                replace_symlink(link, target)
            except OSError as exc:
                msg = f"Cannot link {link} -> {target}"
                raise ConvergenceFailed(msg, details=str(exc)) from exc
            logger.debug("Linked %s -> %s", link, target)

    def exec_server(self) -> None:
        """Replace this process with ``postgres``. Does not return under ``os.execve``.

        Raises:
            ExecFailed: The server binary is missing or not executable.
        """
        self._dispatch("pre_exec", data_dir=str(self.data_dir), config_file=str(self.config_file))
        postgres = str(self.binaries.postgres)
        logger.info("Starting %s with %s=%s", postgres, DATA_DIR_ENV, self.data_dir)
        try:
            self._execve(postgres, [postgres], self.environment)
        except OSError as exc:
            msg = f"Cannot exec {postgres}"
            raise ExecFailed(msg, details=str(exc)) from exc

    # ------------------------------------------------------------------
    # Sequencing
    # ------------------------------------------------------------------

    def prepare(self) -> BootstrapState:
        """Run every step short of exec; return the state found at start."""
        state = self.detect_state()
        logger.info("Data directory %s is %s", self.data_dir, state)
        if state is BootstrapState.UNINITIALIZED:
            self.initialize()
        self.converge()
        return state

    def run(self) -> None:
        """Prepare the data directory, then hand the process over to the server."""
        self.prepare()
        self.exec_server()

    def _dispatch(self, hook_name: str, **kwargs: str) -> None:
        if self._plugins is None:
            return
        self.warnings.extend(self._plugins.dispatch(hook_name, **kwargs))
