"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, pgbootstrap.toml only contains
overrides under a ``[service]`` table.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field

from pgbootstrap.domain.settings import Priority

DEFAULT_PSQL_SCHEMA = "14"
DATA_ROOT = Path("/var/lib/postgresql")
DEFAULT_STORE_DIR = Path("/var/lib/pgbootstrap/store")


class SettingSpec(BaseModel):
    """A ``postgresql.conf`` value with an explicit merge priority.

    Written in TOML as ``log_destination = { value = "syslog", priority = "force" }``.
    """

    model_config = {"frozen": True}

    value: bool | int | float | str
    priority: Priority = Priority.ORDINARY


class EnsureUserConfig(BaseModel):
    """[[service.ensure_users]] entry."""

    model_config = {"frozen": True}

    name: str
    ensure_permissions: dict[str, str] = Field(default_factory=dict)


class ServiceConfig(BaseModel):
    """[service] section — everything needed to build and start the server."""

    model_config = {"frozen": True}

    label: str = "org.pgbootstrap.postgresql"
    package: Path | None = None
    psql_schema: str = DEFAULT_PSQL_SCHEMA
    data_dir: Path | None = None
    store_dir: Path = DEFAULT_STORE_DIR
    port: int = 5432
    check_config: bool = True
    enable_tcpip: bool = False
    log_line_prefix: str = "[%p] "
    authentication: str = ""
    ident_map: str = ""
    initdb_args: list[str] = Field(default_factory=list)
    initial_script: Path | None = None
    ensure_databases: list[str] = Field(default_factory=list)
    ensure_users: list[EnsureUserConfig] = Field(default_factory=list)
    recovery_config: str | None = None
    super_user: str = "postgres"
    settings: dict[str, bool | int | float | str | SettingSpec] = Field(default_factory=dict)

    def resolved_data_dir(self) -> Path:
        """The data directory, defaulting to ``/var/lib/postgresql/<psql_schema>``."""
        if self.data_dir is not None:
            return self.data_dir
        return DATA_ROOT / self.psql_schema
