"""Row mapper - converts rows into target objects through a frozen plan."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any, Generic, TypeVar

from row_mapper.core.config import MapperConfig
from row_mapper.core.exceptions import ColumnNotFoundError, ConversionError, MappingError
from row_mapper.core.row import Cursor, DictCursor, DictRow, Row
from row_mapper.mapping.construct import instantiate
from row_mapper.mapping.plan import MappingPlan

T = TypeVar("T")

logger = logging.getLogger(__name__)


class RowMapper(Generic[T]):
    """Maps rows onto instances of one target class.

    A RowMapper is immutable once built; its only state is the compiled
    MappingPlan, so ``map`` may be called concurrently for different rows.
    Instances are normally created with ``mapper_for(cls)...build()``.

    Args:
        plan: Compiled field plans for the target shape.
        config: Mapper policy the plan was compiled with.
    """

    def __init__(self, plan: MappingPlan, config: MapperConfig) -> None:
        self._plan = plan
        self._config = config
        self._case_insensitive = config.case_insensitive_columns

    @property
    def target_class(self) -> type[T]:
        return self._plan.shape.target_class

    @property
    def plan(self) -> MappingPlan:
        return self._plan

    @property
    def config(self) -> MapperConfig:
        return self._config

    def _lookup_key(self, label: str) -> str:
        return label.lower() if self._case_insensitive else label

    def _available_columns(self, row: Row) -> dict[str, str]:
        """Lookup key -> actual column label, read once per row."""
        columns: dict[str, str] = {}
        for index in range(1, row.column_count() + 1):
            label = row.column_label(index)
            columns[self._lookup_key(label)] = label
        return columns

    def map(self, row: Row) -> T:
        """Map the row the cursor is positioned on.

        Raises:
            ColumnNotFoundError: If a mapped column is absent and unknown
                columns are not ignored.
            ConversionError: If a converter fails.
            ObjectInstantiationError: If the target cannot be built.
        """
        shape = self._plan.shape
        columns = self._available_columns(row)
        values: dict[str, Any] = {}

        for field_plan in self._plan.fields:
            column = columns.get(self._lookup_key(field_plan.column_name))
            if column is None:
                if self._config.ignore_unknown_columns:
                    logger.debug(
                        "Column '%s' absent, skipping %s.%s",
                        field_plan.column_name,
                        shape.name,
                        field_plan.name,
                    )
                    continue
                raise ColumnNotFoundError(field_plan.column_name, shape.name)

            try:
                value = field_plan.converter(row, column, field_plan.attributes)
            except MappingError:
                raise
            except Exception as e:
                raise ConversionError(
                    column, f"field '{field_plan.name}' of {shape.name}: {e}"
                ) from e

            # SQL NULL stays None, even for int, float and bool fields
            values[field_plan.name] = value

        return instantiate(shape, values)

    def map_all(self, cursor: Cursor) -> list[T]:
        """Advance the cursor to exhaustion, mapping every row in order.

        The first failing row aborts the batch; no partial result is returned.
        """
        results: list[T] = []
        while cursor.advance():
            results.append(self.map(cursor))
        logger.debug("Mapped %d rows to %s", len(results), self._plan.shape.name)
        return results

    def map_one(self, row: Mapping[str, Any]) -> T:
        """Map a single ``{column: value}`` dict."""
        return self.map(DictRow(row))

    def map_many(self, rows: Iterable[Mapping[str, Any]]) -> list[T]:
        """Map a sequence of ``{column: value}`` dicts."""
        return self.map_all(DictCursor(rows))

    def __repr__(self) -> str:
        return f"RowMapper({self._plan.shape.name}, fields={list(self._plan.column_names)})"
