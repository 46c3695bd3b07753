"""Tests for service-level default settings and generated hba rules."""

from pathlib import Path

from pgbootstrap.config.models import ServiceConfig, SettingSpec
from pgbootstrap.domain.defaults import (
    DEFAULT_HBA_RULES,
    render_hba,
    service_settings,
    unsupported_option_warnings,
)
from pgbootstrap.domain.settings import Priority, merge_settings

HBA = Path("/store/hba")
IDENT = Path("/store/ident")


def _merged(config: ServiceConfig) -> dict:
    builder = service_settings(config, hba_file=HBA, ident_file=IDENT)
    return {k: s.value for k, s in merge_settings(builder.build()).items()}


class TestServiceSettings:
    def test_defaults(self) -> None:
        merged = _merged(ServiceConfig())
        assert merged == {
            "hba_file": "/store/hba",
            "ident_file": "/store/ident",
            "log_destination": "stderr",
            "log_line_prefix": "[%p] ",
            "listen_addresses": "localhost",
            "port": 5432,
        }

    def test_enable_tcpip_listens_everywhere(self) -> None:
        assert _merged(ServiceConfig(enable_tcpip=True))["listen_addresses"] == "*"

    def test_port_option(self) -> None:
        assert _merged(ServiceConfig(port=6543))["port"] == 6543

    def test_user_setting_overrides_default_at_equal_priority(self) -> None:
        merged = _merged(ServiceConfig(settings={"log_destination": "syslog"}))
        assert merged["log_destination"] == "syslog"

    def test_user_settings_follow_defaults(self) -> None:
        merged = _merged(ServiceConfig(settings={"shared_buffers": "128MB"}))
        assert list(merged)[-1] == "shared_buffers"

    def test_setting_spec_carries_priority(self) -> None:
        config = ServiceConfig(
            settings={"log_destination": SettingSpec(value="syslog", priority=Priority.FORCE)}
        )
        builder = service_settings(config, hba_file=HBA, ident_file=IDENT)
        merged = merge_settings(builder.build())
        assert merged["log_destination"].priority is Priority.FORCE
        assert merged["log_destination"].source == "user"


class TestRenderHba:
    def test_empty_authentication_uses_defaults(self) -> None:
        assert render_hba("") == DEFAULT_HBA_RULES

    def test_user_rules_come_first(self) -> None:
        rendered = render_hba("local all admin trust")
        assert rendered.startswith("local all admin trust\n")
        assert rendered.endswith(DEFAULT_HBA_RULES)


class TestUnsupportedOptions:
    def test_none_configured(self) -> None:
        assert unsupported_option_warnings(ServiceConfig()) == []

    def test_lists_configured_options(self) -> None:
        config = ServiceConfig(ensure_databases=["gitea"], initial_script=Path("/init.sql"))
        [warning] = unsupported_option_warnings(config)
        assert "initial_script" in warning
        assert "ensure_databases" in warning
        assert "ensure_users" not in warning
