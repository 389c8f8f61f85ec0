"""Row and cursor protocols, plus adapters for dict rows and DB-API cursors.

A row exposes its column labels and typed getters by label. Typed getters
for primitives return the zero value for SQL NULL; ``was_null()`` reports
whether the last value read was actually NULL.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator, Mapping, Sequence
from datetime import date, datetime, time
from decimal import Decimal
from typing import Any, Protocol, runtime_checkable

import dateutil.parser

_TRUE_STRINGS = frozenset({"true", "t", "yes", "y", "1", "on"})
_FALSE_STRINGS = frozenset({"false", "f", "no", "n", "0", "off"})


@runtime_checkable
class Row(Protocol):
    """A result row positioned at exactly one record."""

    def column_count(self) -> int:
        """Number of columns in the row."""
        ...

    def column_label(self, index: int) -> str:
        """Label of the column at a 1-based index."""
        ...

    def get_object(self, label: str) -> Any: ...

    def get_string(self, label: str) -> str | None: ...

    def get_int(self, label: str) -> int: ...

    def get_float(self, label: str) -> float: ...

    def get_bool(self, label: str) -> bool: ...

    def get_decimal(self, label: str) -> Decimal | None: ...

    def get_date(self, label: str) -> date | None: ...

    def get_datetime(self, label: str) -> datetime | None: ...

    def get_time(self, label: str) -> time | None: ...

    def was_null(self) -> bool:
        """Whether the last value read was SQL NULL."""
        ...


@runtime_checkable
class Cursor(Row, Protocol):
    """A row that can advance through a result set."""

    def advance(self) -> bool:
        """Move to the next row. Returns False at end of data."""
        ...


# A converter reads one column of a row and returns the converted value.
# It receives the row, the actual column label and the field attributes.
Converter = Callable[[Row, str, Mapping[str, Any]], Any]


def _to_int(label: str, value: Any) -> int:
    if isinstance(value, int):
        return int(value)
    if isinstance(value, (float, Decimal)):
        return int(value)
    if isinstance(value, (str, bytes)):
        return int(value.strip())
    raise TypeError(f"Column '{label}' cannot be read as int: {type(value).__name__}")


def _to_float(label: str, value: Any) -> float:
    if isinstance(value, (int, float, Decimal)):
        return float(value)
    if isinstance(value, (str, bytes)):
        return float(value.strip())
    raise TypeError(f"Column '{label}' cannot be read as float: {type(value).__name__}")


def _to_bool(label: str, value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float, Decimal)):
        return value != 0
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in _TRUE_STRINGS:
            return True
        if lowered in _FALSE_STRINGS:
            return False
        raise ValueError(f"Column '{label}' holds a non-boolean string: {value!r}")
    raise TypeError(f"Column '{label}' cannot be read as bool: {type(value).__name__}")


def _to_decimal(label: str, value: Any) -> Decimal:
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        return Decimal(str(value))
    if isinstance(value, (int, str)):
        return Decimal(value)
    raise TypeError(f"Column '{label}' cannot be read as Decimal: {type(value).__name__}")


def _to_date(label: str, value: Any) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        return dateutil.parser.isoparse(value.strip()).date()
    raise TypeError(f"Column '{label}' cannot be read as date: {type(value).__name__}")


def _to_datetime(label: str, value: Any) -> datetime:
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime.combine(value, time.min)
    if isinstance(value, str):
        return dateutil.parser.isoparse(value.strip())
    raise TypeError(f"Column '{label}' cannot be read as datetime: {type(value).__name__}")


def _to_time(label: str, value: Any) -> time:
    if isinstance(value, datetime):
        return value.time()
    if isinstance(value, time):
        return value
    if isinstance(value, str):
        return dateutil.parser.isoparser().parse_isotime(value.strip())
    raise TypeError(f"Column '{label}' cannot be read as time: {type(value).__name__}")


class DictRow:
    """Row adapter over a single ``{label: value}`` mapping.

    Typed getters coerce leniently: numeric strings read as numbers,
    ``1``/``"true"`` read as booleans and ISO strings read as temporals.

    Args:
        values: Column label to raw value mapping. Label order is preserved.
    """

    def __init__(self, values: Mapping[str, Any]) -> None:
        self._values: Mapping[str, Any] = values
        self._labels: list[str] = list(values.keys())
        self._was_null = False

    def column_count(self) -> int:
        return len(self._labels)

    def column_label(self, index: int) -> str:
        if index < 1 or index > len(self._labels):
            raise IndexError(f"Column index {index} out of range 1..{len(self._labels)}")
        return self._labels[index - 1]

    def _read(self, label: str) -> Any:
        try:
            value = self._values[label]
        except KeyError:
            raise KeyError(f"No column labelled '{label}'") from None
        self._was_null = value is None
        return value

    def get_object(self, label: str) -> Any:
        return self._read(label)

    def get_string(self, label: str) -> str | None:
        value = self._read(label)
        if value is None:
            return None
        if isinstance(value, bytes):
            return value.decode("utf-8")
        return str(value)

    def get_int(self, label: str) -> int:
        value = self._read(label)
        return 0 if value is None else _to_int(label, value)

    def get_float(self, label: str) -> float:
        value = self._read(label)
        return 0.0 if value is None else _to_float(label, value)

    def get_bool(self, label: str) -> bool:
        value = self._read(label)
        return False if value is None else _to_bool(label, value)

    def get_decimal(self, label: str) -> Decimal | None:
        value = self._read(label)
        return None if value is None else _to_decimal(label, value)

    def get_date(self, label: str) -> date | None:
        value = self._read(label)
        return None if value is None else _to_date(label, value)

    def get_datetime(self, label: str) -> datetime | None:
        value = self._read(label)
        return None if value is None else _to_datetime(label, value)

    def get_time(self, label: str) -> time | None:
        value = self._read(label)
        return None if value is None else _to_time(label, value)

    def was_null(self) -> bool:
        return self._was_null

    def __repr__(self) -> str:
        return f"DictRow({dict(self._values)!r})"


class DictCursor(DictRow):
    """Cursor adapter over an iterable of dict rows.

    The cursor starts before the first row; call ``advance()`` to move onto
    each row in turn.
    """

    def __init__(self, rows: Iterable[Mapping[str, Any]]) -> None:
        super().__init__({})
        self._rows: Iterator[Mapping[str, Any]] = iter(rows)
        self._positioned = False

    def advance(self) -> bool:
        row = next(self._rows, None)
        if row is None:
            self._positioned = False
            return False
        self._values = row
        self._labels = list(row.keys())
        self._was_null = False
        self._positioned = True
        return True

    def _read(self, label: str) -> Any:
        if not self._positioned:
            raise LookupError("Cursor is not positioned on a row; call advance() first")
        return super()._read(label)

    def __repr__(self) -> str:
        return f"DictCursor(positioned={self._positioned})"


class ResultCursor(DictCursor):
    """Cursor adapter over a DB-API 2.0 cursor that has executed a query.

    Labels come from ``cursor.description``; rows are pulled one at a time
    with ``fetchone()``. Both tuple rows and dict-like rows are accepted.

    Args:
        cursor: An executed DB-API cursor.
    """

    def __init__(self, cursor: Any) -> None:
        super().__init__(())
        self._cursor = cursor
        description: Sequence[Any] = cursor.description or ()
        self._columns: list[str] = [desc[0] for desc in description]

    def advance(self) -> bool:
        if not self._columns:
            return False
        row = self._cursor.fetchone()
        if row is None:
            self._positioned = False
            return False
        if isinstance(row, Mapping):
            values = dict(row)
        else:
            values = dict(zip(self._columns, row, strict=True))
        self._values = values
        self._labels = list(values.keys())
        self._was_null = False
        self._positioned = True
        return True

    def __repr__(self) -> str:
        return f"ResultCursor(columns={self._columns!r})"
