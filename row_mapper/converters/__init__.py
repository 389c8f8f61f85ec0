"""Converters - turn one column of a row into a typed value."""

from __future__ import annotations

from row_mapper.converters.standard import (
    AWARE_DATETIME,
    BOOLEAN,
    DATE,
    DATETIME,
    DECIMAL,
    FLOAT,
    INTEGER,
    OBJECT,
    STRING,
    TIME,
    basic_converter,
    nullable_converter,
    register_defaults,
    temporal_converter,
)
from row_mapper.converters.temporal import to_strptime

__all__ = [
    "OBJECT",
    "STRING",
    "DECIMAL",
    "INTEGER",
    "FLOAT",
    "BOOLEAN",
    "DATE",
    "DATETIME",
    "TIME",
    "AWARE_DATETIME",
    "basic_converter",
    "nullable_converter",
    "temporal_converter",
    "register_defaults",
    "to_strptime",
]
