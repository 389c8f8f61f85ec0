"""Declarative column marker.

Fields are opted into mapping with ``typing.Annotated``::

    @dataclass
    class User:
        id: Annotated[int, Column()]
        full_name: Annotated[str, Column("FULL_NAME")]
        born: Annotated[date | None, Column(format="dd/MM/yyyy")]
        notes: str = ""  # no marker: never mapped

A bare ``Column`` (the class itself) marks a field the same way as
``Column()``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from row_mapper.core.config import FieldConfig, FieldConfigBuilder
from row_mapper.core.exceptions import ConfigurationError, ConverterInstantiationError
from row_mapper.core.row import Converter


@dataclass(frozen=True)
class Column:
    """Mapping marker for one field.

    Args:
        name: Explicit column label. Empty means "use the naming strategy".
        format: Date/time pattern for string-encoded temporal columns.
        converter: A converter callable, or a converter class that is
            instantiated once with no arguments.
    """

    name: str | None = None
    format: str | None = None
    converter: Converter | type | None = None

    def field_config(self, instances: dict[type, Converter] | None = None) -> FieldConfig:
        """Translate the marker into a FieldConfig.

        Args:
            instances: Cache of converter instances keyed by converter class,
                shared across the fields of one shape.

        Raises:
            ConverterInstantiationError: If a converter class cannot be created.
        """
        builder = FieldConfigBuilder().to_column(self.name or None)
        if self.converter is not None:
            builder.with_converter(resolve_converter(self.converter, instances))
        if self.format:
            builder.with_format(self.format)
        return builder.build()


def resolve_converter(reference: Any, instances: dict[type, Converter] | None = None) -> Converter:
    """Turn a converter reference (class or callable) into a converter."""
    if isinstance(reference, type):
        if instances is not None and reference in instances:
            return instances[reference]
        try:
            converter = reference()
        except Exception as e:
            raise ConverterInstantiationError(reference, str(e)) from e
        if not callable(converter):
            raise ConverterInstantiationError(reference, "instance is not callable")
        if instances is not None:
            instances[reference] = converter
        return converter

    if not callable(reference):
        raise ConfigurationError(f"Converter {reference!r} is neither a class nor callable")
    return reference


def find_marker(metadata: tuple[Any, ...] | list[Any]) -> Column | None:
    """Return the Column marker among ``Annotated`` metadata, if any."""
    for item in metadata:
        if isinstance(item, Column):
            return item
        if item is Column:
            return Column()
    return None
