"""Field plan data classes.

Frozen dataclasses representing the compiled mapping of a target shape.
Computed once when a RowMapper is built and used unchanged for every row.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from row_mapper.core.config import FieldConfig
from row_mapper.core.row import Converter
from row_mapper.mapping.shape import ShapeField, TargetShape


@dataclass(frozen=True)
class FieldPlan:
    """Resolved (column, converter, attributes) for one mapped field."""

    field: ShapeField
    config: FieldConfig

    @property
    def name(self) -> str:
        return self.field.name

    @property
    def column_name(self) -> str:
        return self.config.column_name  # type: ignore[return-value]

    @property
    def converter(self) -> Converter:
        return self.config.converter  # type: ignore[return-value]

    @property
    def attributes(self) -> Mapping[str, Any]:
        return self.config.attributes


@dataclass(frozen=True)
class MappingPlan:
    """Compiled mapping for one target shape."""

    shape: TargetShape
    fields: tuple[FieldPlan, ...] = ()

    def field_plan(self, field_name: str) -> FieldPlan | None:
        for plan in self.fields:
            if plan.name == field_name:
                return plan
        return None

    @property
    def column_names(self) -> dict[str, str]:
        """Field name -> resolved column name."""
        return {plan.name: plan.column_name for plan in self.fields}
