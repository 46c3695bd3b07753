"""Tests for the descriptor CLI command."""

from __future__ import annotations

import json
import plistlib
from pathlib import Path

from click.testing import CliRunner

from pgbootstrap.cli import cli


class TestDescriptorCommand:
    def test_plist(self, cli_runner: CliRunner, config_file: Path, data_dir: Path) -> None:
        result = cli_runner.invoke(
            cli, ["-c", str(config_file), "descriptor", "--program", "/opt/bin/pgbootstrap"]
        )
        assert result.exit_code == 0
        parsed = plistlib.loads(result.stdout.encode("utf-8"))
        assert parsed["ProgramArguments"] == [
            "/opt/bin/pgbootstrap",
            "--config",
            str(config_file),
            "start",
        ]
        assert parsed["EnvironmentVariables"] == {"PGDATA": str(data_dir)}

    def test_json(self, cli_runner: CliRunner, config_file: Path) -> None:
        result = cli_runner.invoke(cli, ["-c", str(config_file), "--json", "descriptor"])
        assert result.exit_code == 0
        data = json.loads(result.stdout)["data"]
        assert data["KeepAlive"] is True
        assert data["RunAtLoad"] is True
