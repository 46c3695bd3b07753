"""Tests for StartService — the full activation sequence."""

from pathlib import Path

from pgbootstrap.config.models import ServiceConfig
from pgbootstrap.services.start import StartService
from tests.conftest import FakeExec, initdb_calls


class TestStartService:
    def test_first_activation(
        self, service_config: ServiceConfig, pg_package: Path, data_dir: Path
    ) -> None:
        execve = FakeExec()
        result = StartService(service_config).start(execve=execve)

        assert result.ok is True
        assert result.data["state"] == "uninitialized"
        assert len(initdb_calls(pg_package)) == 1
        assert (data_dir / "postgresql.conf").resolve() == Path(result.data["config_file"]).resolve()
        [(_path, _args, env)] = execve.calls
        assert env["PGDATA"] == str(data_dir)

    def test_second_activation_converges_latest_document(
        self, service_config: ServiceConfig, pg_package: Path, data_dir: Path
    ) -> None:
        StartService(service_config).start(execve=FakeExec())
        changed = service_config.model_copy(update={"port": 6543})
        result = StartService(changed).start(execve=FakeExec())

        assert result.data["state"] == "initialized"
        assert len(initdb_calls(pg_package)) == 1
        assert "port = 6543" in (data_dir / "postgresql.conf").read_text().splitlines()

    def test_recovery_link(self, service_config: ServiceConfig, data_dir: Path) -> None:
        config = service_config.model_copy(update={"recovery_config": "restore_command = ''\n"})
        StartService(config).start(execve=FakeExec())
        assert (data_dir / "recovery.conf").read_text() == "restore_command = ''\n"

    def test_check_failure_stops_before_initdb(
        self, service_config: ServiceConfig, pg_package: Path, data_dir: Path
    ) -> None:
        config = service_config.model_copy(update={"settings": {"unknown_param": 1}})
        execve = FakeExec()
        result = StartService(config).start(execve=execve)
        assert result.ok is False
        assert result.error.code == "CHECK_FAILED"
        assert initdb_calls(pg_package) == []
        assert execve.calls == []

    def test_initdb_failure(
        self, service_config: ServiceConfig, failing_pg_package: Path, data_dir: Path
    ) -> None:
        config = service_config.model_copy(update={"package": failing_pg_package})
        result = StartService(config).start(execve=FakeExec())
        assert result.ok is False
        assert result.error.code == "INITIALIZATION_FAILED"
        assert not (data_dir / "postgresql.conf").is_symlink()

    def test_missing_server_binary_is_a_failed_result(
        self, service_config: ServiceConfig, pg_package: Path
    ) -> None:
        (pg_package / "bin" / "postgres").unlink()
        config = service_config.model_copy(update={"check_config": False})

        def _execve(path: str, args: list[str], env: dict[str, str]) -> None:
            raise FileNotFoundError(2, "No such file or directory", path)

        result = StartService(config).start(execve=_execve)
        assert result.ok is False
        assert result.error.code == "EXEC_FAILED"
