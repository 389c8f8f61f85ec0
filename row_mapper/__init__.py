"""RowMapper - map tabular query rows onto typed Python objects."""

from __future__ import annotations

from row_mapper.core.config import FORMAT_ATTRIBUTE, FieldConfig, FieldConfigBuilder, MapperConfig
from row_mapper.core.enums import NamingStrategy, ShapeKind
from row_mapper.core.exceptions import (
    ColumnNotFoundError,
    ConfigurationError,
    ConversionError,
    ConverterInstantiationError,
    MappingError,
    ObjectInstantiationError,
    RowMapperError,
    UnresolvedConverterError,
)
from row_mapper.core.registry import ConverterRegistry
from row_mapper.core.row import Converter, Cursor, DictCursor, DictRow, ResultCursor, Row
from row_mapper.mapping.builder import RowMapperBuilder, mapper_for
from row_mapper.mapping.mapper import RowMapper
from row_mapper.mapping.marker import Column
from row_mapper.mapping.protocol import Mapper

__all__ = [
    # Builder
    "mapper_for",
    "RowMapperBuilder",
    # Mapper
    "RowMapper",
    "Mapper",
    "Column",
    # Configuration
    "FieldConfig",
    "FieldConfigBuilder",
    "MapperConfig",
    "FORMAT_ATTRIBUTE",
    # Enums
    "NamingStrategy",
    "ShapeKind",
    # Converters
    "Converter",
    "ConverterRegistry",
    # Rows
    "Row",
    "Cursor",
    "DictRow",
    "DictCursor",
    "ResultCursor",
    # Exceptions
    "RowMapperError",
    "ConfigurationError",
    "UnresolvedConverterError",
    "ConverterInstantiationError",
    "MappingError",
    "ColumnNotFoundError",
    "ConversionError",
    "ObjectInstantiationError",
]
