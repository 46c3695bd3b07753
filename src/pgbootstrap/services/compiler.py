"""Settings compiler — merged settings to an immutable ``postgresql.conf``.

The document is one ``key = value`` line per effective setting, in
first-declaration order, LF-terminated. It is written into the
content-addressed store, so compiling the same settings twice yields the
same bytes at the same path.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from pathlib import Path

from pydantic import BaseModel

from pgbootstrap.domain.settings import Setting, merge_settings
from pgbootstrap.domain.values import serialize_value
from pgbootstrap.infrastructure.store import write_text_dir

CONFIG_FILENAME = "postgresql.conf"


class Document(BaseModel):
    """A compiled configuration document and where it is stored.

    Attributes:
        text: The exact file contents.
        path: The stored ``postgresql.conf`` file.
    """

    model_config = {"frozen": True}

    text: str
    path: Path

    @property
    def directory(self) -> Path:
        """Directory holding the document; usable as ``postgres -D`` for checks."""
        return self.path.parent


def render_document(merged: Mapping[str, Setting]) -> str:
    """Render merged settings as ``postgresql.conf`` text."""
    lines = [f"{key} = {serialize_value(setting.value)}" for key, setting in merged.items()]
    if not lines:
        return ""
    return "\n".join(lines) + "\n"


def compile_settings(settings: Iterable[Setting], store: Path) -> Document:
    """Merge *settings*, render them, and store the result."""
    text = render_document(merge_settings(settings))
    path = write_text_dir(store, CONFIG_FILENAME, text)
    return Document(text=text, path=path)
