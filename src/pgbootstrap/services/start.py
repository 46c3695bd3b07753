"""StartService — the program the process supervisor runs.

Builds and checks the configuration, prepares the data directory, and
execs the server. It only returns if something failed (or, in tests,
when ``execve`` is replaced by a function that returns).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from pgbootstrap.domain.errors import PgBootstrapError
from pgbootstrap.services.base import BaseService
from pgbootstrap.services.bootstrap import BootstrapOrchestrator
from pgbootstrap.services.build import BuildService
from pgbootstrap.services.result import ServiceResult

if TYPE_CHECKING:
    from pgbootstrap.services.bootstrap import Exec, Runner


class StartService(BaseService):
    """Compile, bootstrap, and hand over to ``postgres``."""

    def start(self, *, runner: Runner | None = None, execve: Exec | None = None) -> ServiceResult:
        warnings: list[str] = []
        try:
            build = BuildService(self.config, self._plugins).build()
            warnings.extend(build.warnings)
            orchestrator = BootstrapOrchestrator(
                data_dir=self.config.resolved_data_dir(),
                binaries=self.binaries,
                config_file=build.document.path,
                super_user=self.config.super_user,
                initdb_args=self.config.initdb_args,
                recovery_file=build.recovery_file,
                plugins=self._plugins,
                runner=runner,
                execve=execve,
            )
            state = orchestrator.prepare()
            orchestrator.exec_server()
        except PgBootstrapError as exc:
            return ServiceResult.failure("start", exc, warnings=warnings)

        warnings.extend(orchestrator.warnings)
        return ServiceResult(
            ok=True,
            op="start",
            data={
                "state": str(state),
                "data_dir": str(orchestrator.data_dir),
                "config_file": str(build.document.path),
            },
            warnings=warnings,
        )
