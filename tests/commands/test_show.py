"""Tests for the show CLI command."""

from __future__ import annotations

import json
from pathlib import Path

from click.testing import CliRunner

from pgbootstrap.cli import cli


class TestShowCommand:
    def test_show_json(self, cli_runner: CliRunner, config_file: Path) -> None:
        result = cli_runner.invoke(cli, ["-c", str(config_file), "--json", "show"])
        assert result.exit_code == 0
        items = {i["key"]: i for i in json.loads(result.stdout)["data"]["items"]}
        assert items["log_destination"]["priority"] == "force"
        assert items["log_destination"]["value"] == "'syslog'"
        assert items["listen_addresses"]["source"] == "defaults"

    def test_show_table(self, cli_runner: CliRunner, config_file: Path) -> None:
        result = cli_runner.invoke(cli, ["-c", str(config_file), "show"])
        assert result.exit_code == 0
        assert "logging_collector" in result.stdout
