"""BuildService — turn a ServiceConfig into validated, stored documents.

Writes ``pg_hba.conf``, ``pg_ident.conf``, the optional ``recovery.conf``,
and the compiled ``postgresql.conf`` into the store, then runs the
configuration check unless ``check_config`` is off.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field

from pgbootstrap.domain.defaults import render_hba, service_settings, unsupported_option_warnings
from pgbootstrap.domain.errors import PgBootstrapError
from pgbootstrap.domain.settings import merge_settings
from pgbootstrap.domain.values import serialize_value
from pgbootstrap.infrastructure.store import store_path, write_text
from pgbootstrap.services.base import BaseService
from pgbootstrap.services.compiler import Document, compile_settings
from pgbootstrap.services.result import ServiceResult
from pgbootstrap.services.validator import validate_document

logger = logging.getLogger(__name__)


class ServiceBuild(BaseModel):
    """Everything produced for one service activation."""

    model_config = {"frozen": True}

    document: Document
    hba_file: Path
    ident_file: Path
    recovery_file: Path | None = None
    validated: bool = False
    warnings: list[str] = Field(default_factory=list)


class BuildService(BaseService):
    """Compiles and checks the service configuration."""

    def auxiliary_paths(self) -> tuple[Path, Path]:
        """Store paths of ``pg_hba.conf`` and ``pg_ident.conf`` without writing them."""
        store = self.config.store_dir
        return (
            store_path(store, "pg_hba.conf", render_hba(self.config.authentication)),
            store_path(store, "pg_ident.conf", self.config.ident_map),
        )

    def write_auxiliary(self) -> tuple[Path, Path, Path | None]:
        """Store ``pg_hba.conf``, ``pg_ident.conf`` and ``recovery.conf``."""
        store = self.config.store_dir
        hba_file = write_text(store, "pg_hba.conf", render_hba(self.config.authentication))
        ident_file = write_text(store, "pg_ident.conf", self.config.ident_map)
        recovery_file = None
        if self.config.recovery_config is not None:
            recovery_file = write_text(store, "recovery.conf", self.config.recovery_config)
        return hba_file, ident_file, recovery_file

    def build(self, *, validate: bool | None = None) -> ServiceBuild:
        """Write every document and (by default per ``check_config``) check it.

        Raises:
            PgBootstrapError: A setting is malformed or the check failed.
        """
        hba_file, ident_file, recovery_file = self.write_auxiliary()
        settings = service_settings(self.config, hba_file=hba_file, ident_file=ident_file).build()
        document = compile_settings(settings, self.config.store_dir)
        logger.debug("Compiled %d settings into %s", len(settings), document.path)

        should_validate = self.config.check_config if validate is None else validate
        if should_validate:
            validate_document(document, self.binaries)

        warnings = unsupported_option_warnings(self.config)
        for warning in warnings:
            logger.warning(warning)

        return ServiceBuild(
            document=document,
            hba_file=hba_file,
            ident_file=ident_file,
            recovery_file=recovery_file,
            validated=should_validate,
            warnings=warnings,
        )

    # ------------------------------------------------------------------
    # Public API (ServiceResult)
    # ------------------------------------------------------------------

    def compile(self) -> ServiceResult:
        """Compile and, unless disabled, check the configuration."""
        try:
            build = self.build()
        except PgBootstrapError as exc:
            return ServiceResult.failure("compile", exc)
        return ServiceResult(
            ok=True,
            op="compile",
            data=_build_data(build),
            warnings=build.warnings,
        )

    def check(self) -> ServiceResult:
        """Compile and always check, regardless of ``check_config``."""
        try:
            build = self.build(validate=True)
        except PgBootstrapError as exc:
            return ServiceResult.failure("check", exc)
        return ServiceResult(
            ok=True,
            op="check",
            data={"config_file": str(build.document.path), "valid": True},
            warnings=build.warnings,
        )

    def show(self) -> ServiceResult:
        """Report each effective setting with its value, priority and source."""
        try:
            hba_file, ident_file = self.auxiliary_paths()
            builder = service_settings(self.config, hba_file=hba_file, ident_file=ident_file)
            merged = merge_settings(builder.build())
            items = [
                {
                    "key": key,
                    "value": serialize_value(setting.value),
                    "priority": str(setting.priority),
                    "source": setting.source,
                }
                for key, setting in merged.items()
            ]
        except PgBootstrapError as exc:
            return ServiceResult.failure("show", exc)
        return ServiceResult(ok=True, op="show", data={"items": items, "count": len(items)})


def _build_data(build: ServiceBuild) -> dict[str, Any]:
    data: dict[str, Any] = {
        "config_file": str(build.document.path),
        "hba_file": str(build.hba_file),
        "ident_file": str(build.ident_file),
        "validated": build.validated,
    }
    if build.recovery_file is not None:
        data["recovery_file"] = str(build.recovery_file)
    return data
