"""Standard converters for the built-in value types.

Three shapes of converter are provided:

- basic: return the typed getter's result verbatim, None included
- null-aware primitive: return None when ``row.was_null()`` instead of the
  zero value the getter produced
- temporal: parse the string value with the field's ``format`` attribute
  when one is set, otherwise read the native temporal value
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from datetime import date, datetime, time
from decimal import Decimal
from typing import Any, TypeVar

from pydantic import AwareDatetime

from row_mapper.converters.temporal import (
    parse_aware_datetime,
    parse_date,
    parse_datetime,
    parse_time,
    to_utc,
)
from row_mapper.core.config import FORMAT_ATTRIBUTE
from row_mapper.core.exceptions import ConversionError
from row_mapper.core.registry import ConverterRegistry
from row_mapper.core.row import Converter, Row

T = TypeVar("T")
U = TypeVar("U")

Getter = Callable[[Row, str], T]


def basic_converter(getter: Getter[Any]) -> Converter:
    """Converter returning the getter's result unchanged."""

    def convert(row: Row, column: str, attributes: Mapping[str, Any]) -> Any:
        return getter(row, column)

    return convert


def nullable_converter(getter: Getter[Any]) -> Converter:
    """Converter for getters that return a zero value for SQL NULL."""

    def convert(row: Row, column: str, attributes: Mapping[str, Any]) -> Any:
        value = getter(row, column)
        return None if row.was_null() else value

    return convert


def temporal_converter(
    getter: Getter[U | None],
    adapt: Callable[[U], T],
    parse: Callable[[str, str], T],
) -> Converter:
    """Converter for date/time types with optional ``format`` support.

    Args:
        getter: Native temporal getter used when no format is set.
        adapt: Applied to a non-None native value.
        parse: ``parse(value, pattern)`` used when a format is set.
    """

    def convert(row: Row, column: str, attributes: Mapping[str, Any]) -> T | None:
        pattern = attributes.get(FORMAT_ATTRIBUTE)
        if pattern is None:
            native = getter(row, column)
            return None if native is None else adapt(native)

        text = row.get_string(column)
        if text is None:
            return None
        try:
            return parse(text, pattern)
        except (ValueError, TypeError, OverflowError) as e:
            raise ConversionError(
                column, f"cannot parse {text!r} with format {pattern!r}: {e}"
            ) from e

    return convert


def _identity(value: T) -> T:
    return value


OBJECT = basic_converter(lambda row, column: row.get_object(column))
STRING = basic_converter(lambda row, column: row.get_string(column))
DECIMAL = basic_converter(lambda row, column: row.get_decimal(column))

INTEGER = nullable_converter(lambda row, column: row.get_int(column))
FLOAT = nullable_converter(lambda row, column: row.get_float(column))
BOOLEAN = nullable_converter(lambda row, column: row.get_bool(column))

DATE = temporal_converter(lambda row, column: row.get_date(column), _identity, parse_date)
DATETIME = temporal_converter(
    lambda row, column: row.get_datetime(column), _identity, parse_datetime
)
TIME = temporal_converter(lambda row, column: row.get_time(column), _identity, parse_time)
AWARE_DATETIME = temporal_converter(
    lambda row, column: row.get_datetime(column), to_utc, parse_aware_datetime
)


def register_defaults(registry: ConverterRegistry) -> None:
    """Register the standard converters.

    Subclasses are registered before their bases (``bool`` before ``int``,
    ``datetime`` before ``date``) so the supertype scan finds the most
    specific standard converter first.
    """
    registry.register(str, STRING)
    registry.register(bool, BOOLEAN)
    registry.register(int, INTEGER)
    registry.register(float, FLOAT)
    registry.register(Decimal, DECIMAL)
    registry.register(AwareDatetime, AWARE_DATETIME)
    registry.register(datetime, DATETIME)
    registry.register(date, DATE)
    registry.register(time, TIME)
