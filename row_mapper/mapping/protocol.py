"""Mapper protocol.

RowMapper implements this interface. ``map``/``map_all`` work on row and
cursor accessors; ``map_one``/``map_many`` accept plain dict rows such as
those produced by DB-API ``dict_row`` factories.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any, Protocol, TypeVar, runtime_checkable

from row_mapper.core.row import Cursor, Row

T_co = TypeVar("T_co", covariant=True)


@runtime_checkable
class Mapper(Protocol[T_co]):
    """Base mapper protocol."""

    def map(self, row: Row) -> T_co:
        """Map the current row to a target object."""
        ...

    def map_all(self, cursor: Cursor) -> list[T_co]:
        """Map every remaining row of a cursor."""
        ...

    def map_one(self, row: Mapping[str, Any]) -> T_co:
        """Map a single row dict to a target object."""
        ...

    def map_many(self, rows: Iterable[Mapping[str, Any]]) -> list[T_co]:
        """Map multiple row dicts to a list of target objects."""
        ...
