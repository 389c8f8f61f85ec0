"""Row mapper builder.

Provides a fluent builder that accumulates mapping policy and produces an
immutable RowMapper.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from typing import Any, Generic, TypeVar

from pydantic import ValidationError

from row_mapper.core.config import FieldConfigBuilder, MapperConfig
from row_mapper.core.enums import NamingStrategy
from row_mapper.core.exceptions import ConfigurationError
from row_mapper.core.registry import ConverterRegistry
from row_mapper.core.row import Converter
from row_mapper.mapping.mapper import RowMapper
from row_mapper.mapping.resolver import compile_plan
from row_mapper.mapping.shape import inspect_shape

T = TypeVar("T")

logger = logging.getLogger(__name__)


def mapper_for(target_class: type[T]) -> RowMapperBuilder[T]:
    """Entry point for the mapper builder DSL.

    Args:
        target_class: The class rows are mapped onto.

    Returns:
        A builder for chaining configuration calls.
    """
    return RowMapperBuilder(target_class)


class RowMapperBuilder(Generic[T]):
    """Fluent builder for RowMapper.

    Defaults: ``AS_IS`` naming, unknown columns ignored, unknown types
    passed through raw, case-insensitive column matching, standard
    converters included.
    """

    def __init__(self, target_class: type[T]) -> None:
        self._target_class = target_class
        self._naming_strategy: NamingStrategy | Callable[[str], str] | None = NamingStrategy.AS_IS
        self._ignore_unknown_columns = True
        self._ignore_unknown_types = True
        self._case_insensitive_columns = True
        self._include_default_converters = True
        self._field_builders: dict[str, FieldConfigBuilder] = {}
        self._registry = ConverterRegistry()

    def naming_strategy(
        self, strategy: NamingStrategy | Callable[[str], str] | None
    ) -> RowMapperBuilder[T]:
        """Set the field-name to column-name convention."""
        self._naming_strategy = strategy
        return self

    def ignore_unknown_columns(self, enabled: bool = True) -> RowMapperBuilder[T]:
        """Skip fields whose column is absent instead of failing the row."""
        self._ignore_unknown_columns = enabled
        return self

    def ignore_unknown_types(self, enabled: bool = True) -> RowMapperBuilder[T]:
        """Pass raw values through for fields with no resolvable converter."""
        self._ignore_unknown_types = enabled
        return self

    def case_insensitive_columns(self, enabled: bool = True) -> RowMapperBuilder[T]:
        self._case_insensitive_columns = enabled
        return self

    def include_default_converters(self, enabled: bool = True) -> RowMapperBuilder[T]:
        self._include_default_converters = enabled
        return self

    def map_field(
        self,
        field_name: str,
        configurer: Callable[[FieldConfigBuilder], Any] | None = None,
        *,
        column: str | None = None,
        converter: Converter | None = None,
        format: str | None = None,  # noqa: A002
    ) -> RowMapperBuilder[T]:
        """Explicitly configure one field, overriding its Column marker.

        Either pass keyword shortcuts or a configurer that receives a
        FieldConfigBuilder. The configuration is validated by ``build()``.
        """
        builder = FieldConfigBuilder()
        if column is not None:
            builder.to_column(column)
        if converter is not None:
            builder.with_converter(converter)
        if format is not None:
            builder.with_format(format)
        if configurer is not None:
            configurer(builder)
        self._field_builders[field_name] = builder
        return self

    def register_converter(self, type_: type, converter: Converter) -> RowMapperBuilder[T]:
        """Register a converter for a value type. Later registrations win."""
        self._registry.register(type_, converter)
        return self

    def register_converters(self, converters: Mapping[type, Converter]) -> RowMapperBuilder[T]:
        self._registry.register_all(converters)
        return self

    def _build_config(self) -> MapperConfig:
        field_configs = {}
        for name, builder in self._field_builders.items():
            if not isinstance(name, str) or not name.strip():
                raise ConfigurationError("Field name can not be empty")
            field_configs[name] = builder.build()

        if self._naming_strategy is None:
            raise ConfigurationError("Naming strategy can not be None")

        try:
            return MapperConfig(
                ignore_unknown_columns=self._ignore_unknown_columns,
                ignore_unknown_types=self._ignore_unknown_types,
                case_insensitive_columns=self._case_insensitive_columns,
                naming_strategy=self._naming_strategy,
                field_configs=field_configs,
            )
        except ValidationError as e:
            raise ConfigurationError(
                f"Invalid mapper configuration for {self._target_class!r}: {e}"
            ) from e

    def build(self) -> RowMapper[T]:
        """Validate the configuration and compile it into a RowMapper.

        The converter registry is copied, so later changes to this builder
        never affect the returned mapper.

        Raises:
            ConfigurationError: On any invalid configuration.
        """
        config = self._build_config()

        registry = (
            ConverterRegistry.with_defaults()
            if self._include_default_converters
            else ConverterRegistry()
        )
        registry.register_all(self._registry.converters)

        shape = inspect_shape(self._target_class)
        plan = compile_plan(shape, config, registry)
        logger.debug(
            "Built RowMapper for %s (%s, %d mapped fields)",
            shape.name,
            shape.kind.value,
            len(plan.fields),
        )
        return RowMapper(plan, config)
