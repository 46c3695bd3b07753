"""PostgreSQL binary resolution and invocation."""

from __future__ import annotations

import shutil
import subprocess
from collections.abc import Mapping, Sequence
from pathlib import Path

from pydantic import BaseModel


class PostgresBinaries(BaseModel):
    """Resolved paths of the server binaries this tool invokes."""

    model_config = {"frozen": True}

    postgres: Path
    initdb: Path

    @classmethod
    def from_package(cls, package: Path | None) -> PostgresBinaries:
        """Resolve binaries under ``<package>/bin``, or from ``PATH``."""
        return cls(postgres=_resolve(package, "postgres"), initdb=_resolve(package, "initdb"))


def _resolve(package: Path | None, name: str) -> Path:
    if package is not None:
        return package / "bin" / name
    found = shutil.which(name)
    return Path(found) if found else Path(name)


def run_binary(
    argv: Sequence[str],
    *,
    env: Mapping[str, str] | None = None,
) -> subprocess.CompletedProcess[str]:
    """Run a binary to completion, capturing output. Never raises on exit status."""
    return subprocess.run(
        list(argv),
        env=dict(env) if env is not None else None,
        capture_output=True,
        text=True,
        check=False,
    )


def diagnostics(result: subprocess.CompletedProcess[str]) -> str:
    """Best diagnostic text from a finished process: stderr, then stdout."""
    text = (result.stderr or "").strip() or (result.stdout or "").strip()
    return text or f"exited with status {result.returncode}"
