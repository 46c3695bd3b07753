"""Shared pytest fixtures for pgbootstrap tests.

Fake ``postgres`` and ``initdb`` executables are written as shell scripts
into ``<tmp>/pg/bin`` so binary invocations run for real without a
PostgreSQL installation.
"""

from __future__ import annotations

import logging
import stat
import subprocess
from collections.abc import Generator, Sequence
from pathlib import Path

import pytest
from click.testing import CliRunner

from pgbootstrap.config.models import ServiceConfig
from pgbootstrap.infrastructure.binaries import PostgresBinaries

FAKE_POSTGRES = """\
#!/bin/sh
# Supports only the configuration check: postgres -D <dir> -C <param>
if [ "$1" = "-D" ] && [ "$3" = "-C" ]; then
    conf="$2/postgresql.conf"
    bad=$(grep -m1 '^unknown_' "$conf" | cut -d' ' -f1)
    if [ -n "$bad" ]; then
        echo "FATAL:  unrecognized configuration parameter \\"$bad\\"" >&2
        exit 1
    fi
    echo "$conf"
    exit 0
fi
echo "unexpected invocation: $*" >&2
exit 2
"""

FAKE_INITDB = """\
#!/bin/sh
here=$(dirname "$0")
echo "$*" >> "$here/../initdb.calls"
mkdir -p "$PGDATA"
echo 14 > "$PGDATA/PG_VERSION"
echo "# initdb sample" > "$PGDATA/postgresql.conf"
"""

FAILING_INITDB = """\
#!/bin/sh
here=$(dirname "$0")
echo "$*" >> "$here/../initdb.calls"
echo "initdb: error: could not create directory" >&2
exit 1
"""


def write_fake_package(root: Path, *, initdb: str = FAKE_INITDB) -> Path:
    """Create ``<root>/bin/{postgres,initdb}`` and return *root*."""
    bin_dir = root / "bin"
    bin_dir.mkdir(parents=True)
    for name, body in (("postgres", FAKE_POSTGRES), ("initdb", initdb)):
        script = bin_dir / name
        script.write_text(body, encoding="utf-8")
        script.chmod(script.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return root


def initdb_calls(package: Path) -> list[str]:
    """Argument lines recorded by the fake initdb, one per invocation."""
    calls = package / "initdb.calls"
    if not calls.exists():
        return []
    return calls.read_text(encoding="utf-8").splitlines()


class FakeRunner:
    """In-process stand-in for ``run_binary`` that records every call."""

    def __init__(self, *, returncode: int = 0, stderr: str = "") -> None:
        self.returncode = returncode
        self.stderr = stderr
        self.calls: list[tuple[list[str], dict[str, str]]] = []

    def __call__(
        self, argv: Sequence[str], *, env: dict[str, str] | None = None
    ) -> subprocess.CompletedProcess[str]:
        env = dict(env or {})
        self.calls.append((list(argv), env))
        if self.returncode == 0:
            data_dir = Path(env["PGDATA"])
            data_dir.mkdir(parents=True, exist_ok=True)
            (data_dir / "PG_VERSION").write_text("14\n", encoding="utf-8")
        return subprocess.CompletedProcess(list(argv), self.returncode, "", self.stderr)


class FakeExec:
    """Records the exec hand-off instead of replacing the test process."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, list[str], dict[str, str]]] = []

    def __call__(self, path: str, args: list[str], env: dict[str, str]) -> None:
        self.calls.append((path, args, env))


@pytest.fixture(autouse=True)
def _restore_logging() -> Generator[None]:
    """Undo handler changes made by configure_logging()."""
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    pg = logging.getLogger("pgbootstrap")
    pg_level = pg.level
    yield
    root.handlers = original_handlers
    root.setLevel(original_level)
    pg.setLevel(pg_level)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def pg_package(tmp_path: Path) -> Path:
    """Fake PostgreSQL package with a working postgres and initdb."""
    return write_fake_package(tmp_path / "pg")


@pytest.fixture
def failing_pg_package(tmp_path: Path) -> Path:
    """Fake PostgreSQL package whose initdb always fails."""
    return write_fake_package(tmp_path / "pg-broken", initdb=FAILING_INITDB)


@pytest.fixture
def binaries(pg_package: Path) -> PostgresBinaries:
    return PostgresBinaries.from_package(pg_package)


@pytest.fixture
def data_dir(tmp_path: Path) -> Path:
    return tmp_path / "data"


@pytest.fixture
def store_dir(tmp_path: Path) -> Path:
    return tmp_path / "store"


@pytest.fixture
def service_config(pg_package: Path, data_dir: Path, store_dir: Path) -> ServiceConfig:
    """ServiceConfig wired to the fake package and temp directories."""
    return ServiceConfig(package=pg_package, data_dir=data_dir, store_dir=store_dir)


@pytest.fixture
def config_file(tmp_path: Path, pg_package: Path, data_dir: Path, store_dir: Path) -> Path:
    """A pgbootstrap.toml pointing at the fake package and temp directories."""
    path = tmp_path / "pgbootstrap.toml"
    path.write_text(
        "[service]\n"
        f'package = "{pg_package}"\n'
        f'data_dir = "{data_dir}"\n'
        f'store_dir = "{store_dir}"\n'
        "\n"
        "[service.settings]\n"
        "logging_collector = true\n"
        'log_destination = { value = "syslog", priority = "force" }\n',
        encoding="utf-8",
    )
    return path
