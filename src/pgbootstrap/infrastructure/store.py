"""Content-addressed store for generated documents.

INVARIANT: Store entries are immutable. A path is derived from the
entry's name and content, so identical input always maps to the same
path and changed input always maps to a new one. Entries are written
under a temporary name and renamed into place.

Layout::

    <store>/<digest>-pg_hba.conf                      (file entry)
    <store>/<digest>-postgresql.conf/postgresql.conf  (directory entry)
"""

from __future__ import annotations

import hashlib
import os
import shutil
import tempfile
from pathlib import Path

DIGEST_LENGTH = 32
READ_ONLY = 0o444


def store_digest(name: str, text: str) -> str:
    """Stable digest for an entry named *name* holding *text*."""
    h = hashlib.sha256()
    h.update(name.encode("utf-8"))
    h.update(b"\0")
    h.update(text.encode("utf-8"))
    return h.hexdigest()[:DIGEST_LENGTH]


def store_path(store: Path, name: str, text: str) -> Path:
    """Where *text* stored as *name* lives, whether or not it is written yet."""
    return store / f"{store_digest(name, text)}-{name}"


def _write_file(path: Path, text: str) -> None:
    path.write_text(text, encoding="utf-8", newline="\n")
    path.chmod(READ_ONLY)


def write_text(store: Path, name: str, text: str) -> Path:
    """Store *text* as a single file and return its path."""
    target = store_path(store, name, text)
    if target.is_file():
        return target

    store.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(dir=store, prefix=f".{name}.")
    os.close(fd)
    tmp = Path(tmp_name)
    try:
        _write_file(tmp, text)
        os.replace(tmp, target)
    finally:
        tmp.unlink(missing_ok=True)
    return target


def write_text_dir(store: Path, name: str, text: str) -> Path:
    """Store *text* as ``<entry>/<name>`` and return the file's path.

    The enclosing directory can be handed to tools that expect a
    directory holding the file.
    """
    entry = store_path(store, name, text)
    target = entry / name
    if target.is_file():
        return target

    store.mkdir(parents=True, exist_ok=True)
    tmp = Path(tempfile.mkdtemp(dir=store, prefix=f".{name}."))
    try:
        _write_file(tmp / name, text)
        try:
            os.rename(tmp, entry)
        except OSError:
            # Another writer won the race; its entry has identical content.
            if not target.is_file():
                raise
    finally:
        if tmp.exists():
            shutil.rmtree(tmp)
    return target
