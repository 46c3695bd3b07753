"""Service defaults contributed ahead of the user's settings.

These mirror what a PostgreSQL service definition always sets: where the
authentication files live, logging to stderr for the supervisor, the
listen address, and the port. They are declared first at ordinary
priority, so any user value for the same key wins.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from pgbootstrap.domain.settings import Priority, SettingsBuilder

if TYPE_CHECKING:
    from pgbootstrap.config.models import ServiceConfig

DEFAULTS_SOURCE = "defaults"
USER_SOURCE = "user"

DEFAULT_HBA_RULES = """\
# Generated file; do not edit!
local all all              peer
host  all all 127.0.0.1/32 md5
host  all all ::1/128      md5
"""


def render_hba(authentication: str) -> str:
    """User rules first, then the generated defaults.

    ``pg_hba.conf`` is first-match, so user rules take precedence.
    """
    if not authentication:
        return DEFAULT_HBA_RULES
    if not authentication.endswith("\n"):
        authentication += "\n"
    return authentication + DEFAULT_HBA_RULES


def service_settings(config: ServiceConfig, *, hba_file: Path, ident_file: Path) -> SettingsBuilder:
    """Build the full settings list: service defaults, then user settings."""
    builder = SettingsBuilder()
    builder.extend(
        {
            "hba_file": str(hba_file),
            "ident_file": str(ident_file),
            "log_destination": "stderr",
            "log_line_prefix": config.log_line_prefix,
            "listen_addresses": "*" if config.enable_tcpip else "localhost",
            "port": config.port,
        },
        source=DEFAULTS_SOURCE,
    )
    for key, entry in config.settings.items():
        if isinstance(entry, (bool, int, float, str)):
            builder.add(key, entry, source=USER_SOURCE)
        else:
            builder.add(key, entry.value, priority=Priority(entry.priority), source=USER_SOURCE)
    return builder


def unsupported_option_warnings(config: ServiceConfig) -> list[str]:
    """Options that are accepted but have no post-start facility to run them."""
    configured = []
    if config.initial_script is not None:
        configured.append("initial_script")
    if config.ensure_databases:
        configured.append("ensure_databases")
    if config.ensure_users:
        configured.append("ensure_users")
    if not configured:
        return []
    return [
        f"{', '.join(configured)} configured but not supported: "
        "there is no post-start step to execute them"
    ]
