"""Config validator — ask the server binary to parse a compiled document.

Runs ``postgres -D <document-dir> -C config_file``. The document's own
store directory stands in for the data directory, so the check never
starts a server or touches real data.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from pgbootstrap.domain.errors import CheckFailed
from pgbootstrap.infrastructure.binaries import diagnostics, run_binary

if TYPE_CHECKING:
    from pgbootstrap.infrastructure.binaries import PostgresBinaries
    from pgbootstrap.services.compiler import Document

logger = logging.getLogger(__name__)


def check_command(document: Document, binaries: PostgresBinaries) -> list[str]:
    return [str(binaries.postgres), "-D", str(document.directory), "-C", "config_file"]


def validate_document(document: Document, binaries: PostgresBinaries) -> None:
    """Raise :class:`CheckFailed` unless the server accepts *document*."""
    argv = check_command(document, binaries)
    logger.debug("Checking configuration: %s", " ".join(argv))
    try:
        result = run_binary(argv)
    except OSError as exc:
        msg = f"Cannot run {binaries.postgres}"
        raise CheckFailed(msg, details=str(exc)) from exc
    if result.returncode != 0:
        msg = f"Configuration check failed for {document.path}"
        raise CheckFailed(msg, details=diagnostics(result))
    logger.debug("Configuration check passed for %s", document.path)
