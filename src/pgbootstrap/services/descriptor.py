"""Service descriptor handed to a launchd-style process supervisor.

The supervisor runs ``pgbootstrap start`` in the data directory with
``PGDATA`` set, keeps it alive, and starts it at load.
"""

from __future__ import annotations

import plistlib
from pathlib import Path
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, Field

from pgbootstrap.services.bootstrap import DATA_DIR_ENV

if TYPE_CHECKING:
    from pgbootstrap.config.models import ServiceConfig


class ServiceDescriptor(BaseModel):
    """What the supervisor needs to run the service."""

    model_config = {"frozen": True}

    label: str
    program_arguments: list[str]
    working_directory: Path
    keep_alive: bool = True
    run_at_load: bool = True
    environment: dict[str, str] = Field(default_factory=dict)

    def to_launchd(self) -> dict[str, Any]:
        """Key names as launchd expects them in a property list."""
        return {
            "Label": self.label,
            "ProgramArguments": list(self.program_arguments),
            "WorkingDirectory": str(self.working_directory),
            "KeepAlive": self.keep_alive,
            "RunAtLoad": self.run_at_load,
            "EnvironmentVariables": dict(self.environment),
        }

    def render_plist(self) -> str:
        return plistlib.dumps(self.to_launchd()).decode("utf-8")


def build_service_descriptor(
    config: ServiceConfig,
    *,
    program: str = "pgbootstrap",
    config_path: Path | None = None,
) -> ServiceDescriptor:
    """Describe the agent that runs ``pgbootstrap start`` for *config*."""
    args = [program]
    if config_path is not None:
        args += ["--config", str(config_path)]
    args.append("start")
    data_dir = config.resolved_data_dir()
    return ServiceDescriptor(
        label=config.label,
        program_arguments=args,
        working_directory=data_dir,
        environment={DATA_DIR_ENV: str(data_dir)},
    )
