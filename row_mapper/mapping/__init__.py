"""Mapping layer - resolve field plans and turn rows into typed objects."""

from __future__ import annotations

from row_mapper.mapping.builder import RowMapperBuilder, mapper_for
from row_mapper.mapping.mapper import RowMapper
from row_mapper.mapping.marker import Column
from row_mapper.mapping.plan import FieldPlan, MappingPlan
from row_mapper.mapping.protocol import Mapper
from row_mapper.mapping.resolver import compile_plan
from row_mapper.mapping.shape import ShapeField, TargetShape, inspect_shape

__all__ = [
    "Column",
    "Mapper",
    "RowMapper",
    "RowMapperBuilder",
    "mapper_for",
    "FieldPlan",
    "MappingPlan",
    "compile_plan",
    "ShapeField",
    "TargetShape",
    "inspect_shape",
]
