"""Settings, merge priorities, and the pure merge function.

A setting is contributed by a source (service defaults, user config, ...)
at one of three priorities. The merged mapping keeps one setting per key:

- ``force`` beats everything,
- ``override_after`` beats ``ordinary``,
- at equal priority the later declaration wins.

Keys keep the position of their first declaration, so the rendered
document reads in the order the sources introduced them.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from enum import StrEnum

from pgbootstrap.domain.errors import SettingTypeConflict
from pgbootstrap.domain.values import SettingValue, value_kind


class Priority(StrEnum):
    """Merge priority attached to each contributed setting."""

    ORDINARY = "ordinary"
    OVERRIDE_AFTER = "override_after"
    FORCE = "force"

    @property
    def rank(self) -> int:
        return _RANKS[self]


_RANKS: dict[Priority, int] = {
    Priority.ORDINARY: 0,
    Priority.OVERRIDE_AFTER: 1,
    Priority.FORCE: 2,
}


@dataclass(frozen=True)
class Setting:
    """One contribution of a value for a configuration key.

    Attributes:
        key: Configuration parameter name, e.g. ``shared_buffers``.
        value: Boolean, number, or string.
        priority: Merge priority of this contribution.
        source: Human-readable origin (``"defaults"``, ``"user"``, ...).
        order: Declaration index across all sources; later wins on ties.
    """

    key: str
    value: SettingValue
    priority: Priority = Priority.ORDINARY
    source: str = "user"
    order: int = 0


class SettingsBuilder:
    """Collect settings from several sources in declaration order.

    Assigns each contribution a monotonically increasing ``order`` and
    rejects a key declared with two different value kinds.

    Usage::

        builder = SettingsBuilder()
        builder.extend({"port": 5432}, source="defaults")
        builder.add("port", 5433, priority=Priority.FORCE)
        settings = builder.build()
    """

    def __init__(self) -> None:
        self._settings: list[Setting] = []
        self._kinds: dict[str, tuple[str, str]] = {}

    def add(
        self,
        key: str,
        value: SettingValue,
        *,
        priority: Priority = Priority.ORDINARY,
        source: str = "user",
    ) -> Setting:
        """Append one contribution and return it."""
        kind = value_kind(value)
        previous = self._kinds.get(key)
        if previous is not None and previous[0] != kind:
            msg = (
                f"Setting {key!r} declared as {previous[0]} by {previous[1]!r} "
                f"and as {kind} by {source!r}"
            )
            raise SettingTypeConflict(msg)
        self._kinds.setdefault(key, (kind, source))

        setting = Setting(
            key=key,
            value=value,
            priority=Priority(priority),
            source=source,
            order=len(self._settings),
        )
        self._settings.append(setting)
        return setting

    def extend(
        self,
        values: Mapping[str, SettingValue],
        *,
        priority: Priority = Priority.ORDINARY,
        source: str = "user",
    ) -> None:
        """Append every entry of *values* at the same priority."""
        for key, value in values.items():
            self.add(key, value, priority=priority, source=source)

    def build(self) -> list[Setting]:
        return list(self._settings)


def merge_settings(settings: Iterable[Setting]) -> dict[str, Setting]:
    """Select the effective setting for each key.

    Returns a dict keyed by setting name in first-declaration order.
    """
    merged: dict[str, Setting] = {}
    for setting in sorted(settings, key=lambda s: s.order):
        current = merged.get(setting.key)
        if current is None or setting.priority.rank >= current.priority.rank:
            merged[setting.key] = setting
    return merged
