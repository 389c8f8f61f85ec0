"""RowMapper exception hierarchy.

Configuration errors are raised by ``build()`` before any row is read.
Mapping errors are raised per row by ``map``/``map_all``.
"""

from __future__ import annotations


class RowMapperError(Exception):
    """Base exception for all RowMapper errors."""


# --- Configuration ---


class ConfigurationError(RowMapperError):
    """Raised when a mapper cannot be built from its configuration."""


class UnresolvedConverterError(ConfigurationError):
    """Raised when no converter can be resolved for a mapped field."""

    def __init__(self, target_class: str, field_name: str, field_type: object) -> None:
        self.target_class = target_class
        self.field_name = field_name
        self.field_type = field_type
        type_name = getattr(field_type, "__name__", repr(field_type))
        super().__init__(
            f"No converter for field '{field_name}' of type {type_name} in {target_class}"
        )


class ConverterInstantiationError(ConfigurationError):
    """Raised when a converter class named by a Column marker cannot be created."""

    def __init__(self, converter_class: type, detail: str) -> None:
        self.converter_class = converter_class
        super().__init__(f"Cannot instantiate converter {converter_class.__name__}: {detail}")


# --- Mapping ---


class MappingError(RowMapperError):
    """Base for per-row mapping errors."""


class ColumnNotFoundError(MappingError):
    """Raised when a mapped column is absent from the row."""

    def __init__(self, column_name: str, target_class: str) -> None:
        self.column_name = column_name
        self.target_class = target_class
        super().__init__(f"Column not found: '{column_name}' (mapping to {target_class})")


class ConversionError(MappingError):
    """Raised when a column value cannot be converted."""

    def __init__(self, column_name: str, detail: str) -> None:
        self.column_name = column_name
        super().__init__(f"Cannot convert column '{column_name}': {detail}")


class ObjectInstantiationError(MappingError):
    """Raised when the destination object cannot be created or populated."""

    def __init__(self, target_class: str, detail: str) -> None:
        self.target_class = target_class
        super().__init__(f"Failed to instantiate object of type {target_class}: {detail}")
