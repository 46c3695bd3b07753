"""Data-directory file operations.

The data directory belongs to the server. This module only ever touches
three things inside it: the version marker (read), stray top-level
``*.conf`` files (removed before ``initdb``), and the configuration
symlinks (replaced atomically).
"""

from __future__ import annotations

import os
from pathlib import Path

VERSION_MARKER = "PG_VERSION"
CONFIG_LINK = "postgresql.conf"
RECOVERY_LINK = "recovery.conf"


def has_version_marker(data_dir: Path) -> bool:
    """Whether *data_dir* has completed ``initdb``."""
    return (data_dir / VERSION_MARKER).exists()


def remove_stray_configs(data_dir: Path) -> list[Path]:
    """Delete top-level ``*.conf`` files and symlinks in *data_dir*.

    Directories are left alone and nothing is removed recursively.
    Returns the removed paths.
    """
    if not data_dir.is_dir():
        return []
    removed: list[Path] = []
    for path in sorted(data_dir.glob("*.conf")):
        if path.is_symlink() or path.is_file():
            path.unlink()
            removed.append(path)
    return removed


def replace_symlink(link: Path, target: Path) -> None:
    """Point *link* at *target*, replacing whatever is there.

    The new link is created under a temporary name and renamed over
    *link*, so readers never observe a missing link.
    """
    tmp = link.with_name(f".{link.name}.{os.getpid()}.tmp")
    tmp.unlink(missing_ok=True)
    os.symlink(target, tmp)
    try:
        os.replace(tmp, link)
    except OSError:
        tmp.unlink(missing_ok=True)
        raise
