"""Value serialization for the ``postgresql.conf`` grammar.

Booleans become ``yes``/``no``, numbers are written bare, and strings are
single-quoted with embedded quotes doubled. No other escaping is applied.
"""

from __future__ import annotations

from pgbootstrap.domain.errors import SerializationError

SettingValue = bool | int | float | str

KIND_BOOLEAN = "boolean"
KIND_NUMBER = "number"
KIND_STRING = "string"


def value_kind(value: object) -> str:
    """Classify *value* as ``boolean``, ``number`` or ``string``.

    ``bool`` is checked before ``int`` since it is a subclass.

    Raises:
        SerializationError: *value* is none of the accepted shapes.
    """
    if isinstance(value, bool):
        return KIND_BOOLEAN
    if isinstance(value, (int, float)):
        return KIND_NUMBER
    if isinstance(value, str):
        return KIND_STRING
    msg = f"Unsupported setting value type: {type(value).__name__}"
    raise SerializationError(msg)


def quote_string(value: str) -> str:
    """Wrap *value* in single quotes, doubling any embedded quote.

    Examples:
        >>> quote_string("O'Brien")
        "'O''Brien'"
    """
    return "'" + value.replace("'", "''") + "'"


def serialize_value(value: SettingValue) -> str:
    """Render a setting value as ``postgresql.conf`` text.

    Examples:
        >>> serialize_value(True)
        'yes'
        >>> serialize_value(5432)
        '5432'
        >>> serialize_value("O'Brien's")
        "'O''Brien''s'"
    """
    kind = value_kind(value)
    if kind == KIND_BOOLEAN:
        return "yes" if value else "no"
    if kind == KIND_STRING:
        return quote_string(value)  # type: ignore[arg-type]
    return str(value)


def parse_value(text: str) -> SettingValue:
    """Inverse of :func:`serialize_value` for the text it produces.

    Raises:
        SerializationError: *text* is not a quoted string, ``yes``/``no``,
            or a decimal number.
    """
    if text == "yes":
        return True
    if text == "no":
        return False
    if len(text) >= 2 and text.startswith("'") and text.endswith("'"):
        return text[1:-1].replace("''", "'")
    try:
        return int(text)
    except ValueError:
        pass
    try:
        return float(text)
    except ValueError:
        msg = f"Cannot parse configuration value: {text!r}"
        raise SerializationError(msg) from None
