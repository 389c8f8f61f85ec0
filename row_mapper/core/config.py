"""Field and mapper configuration.

FieldConfig is the frozen (column, converter, attributes) plan for one
field. MapperConfig is a frozen Pydantic model holding the builder-time
policy of one mapper.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, InstanceOf, field_validator

from row_mapper.core.enums import NamingStrategy
from row_mapper.core.exceptions import ConfigurationError
from row_mapper.core.row import Converter

FORMAT_ATTRIBUTE = "format"


def _is_blank(value: object) -> bool:
    return not isinstance(value, str) or not value.strip()


@dataclass(frozen=True)
class FieldConfig:
    """Resolved or user-supplied mapping configuration for one field.

    Raises:
        ConfigurationError: If the column name is blank, or an attribute has
            a blank key or a None value.
    """

    column_name: str | None = None
    converter: Converter | None = None
    attributes: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if self.column_name is not None and _is_blank(self.column_name):
            raise ConfigurationError("Column name can not be empty")
        if self.attributes is None:
            raise ConfigurationError("Attributes can not be None")
        for key, value in self.attributes.items():
            if _is_blank(key):
                raise ConfigurationError("Attribute name can not be empty")
            if value is None:
                raise ConfigurationError(f"Attribute '{key}' value can not be None")
            if key == FORMAT_ATTRIBUTE and _is_blank(value):
                raise ConfigurationError("Format pattern can not be empty")
        object.__setattr__(self, "attributes", MappingProxyType(dict(self.attributes)))

    @property
    def format(self) -> str | None:
        """The ``format`` attribute, if set."""
        return self.attributes.get(FORMAT_ATTRIBUTE)

    def attribute(self, key: str, default: Any = None) -> Any:
        return self.attributes.get(key, default)

    @staticmethod
    def builder() -> FieldConfigBuilder:
        return FieldConfigBuilder()


class FieldConfigBuilder:
    """Fluent builder for FieldConfig."""

    def __init__(self) -> None:
        self._column_name: str | None = None
        self._converter: Converter | None = None
        self._attributes: dict[str, Any] = {}

    def to_column(self, column_name: str | None) -> FieldConfigBuilder:
        self._column_name = column_name
        return self

    def with_converter(self, converter: Converter | None) -> FieldConfigBuilder:
        self._converter = converter
        return self

    def with_format(self, pattern: str) -> FieldConfigBuilder:
        return self.with_attribute(FORMAT_ATTRIBUTE, pattern)

    def with_attribute(self, key: str, value: Any) -> FieldConfigBuilder:
        self._attributes[key] = value
        return self

    def with_attributes(self, attributes: Mapping[str, Any]) -> FieldConfigBuilder:
        if attributes is None:
            raise ConfigurationError("Attributes can not be None")
        self._attributes.update(attributes)
        return self

    def build(self) -> FieldConfig:
        """Validate and freeze the configuration."""
        return FieldConfig(
            column_name=self._column_name,
            converter=self._converter,
            attributes=self._attributes,
        )


class MapperConfig(BaseModel):
    """Frozen builder-time policy for one RowMapper."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    ignore_unknown_columns: bool = True
    ignore_unknown_types: bool = True
    case_insensitive_columns: bool = True
    naming_strategy: NamingStrategy | Callable[[str], str] = NamingStrategy.AS_IS
    field_configs: Mapping[str, InstanceOf[FieldConfig]] = Field(
        default_factory=dict, validate_default=True
    )

    @field_validator("field_configs")
    @classmethod
    def freeze_field_configs(
        cls, value: Mapping[str, FieldConfig]
    ) -> Mapping[str, FieldConfig]:
        return MappingProxyType(dict(value))

    def field_config(self, field_name: str) -> FieldConfig | None:
        """Explicit override for a field, if one was configured."""
        return self.field_configs.get(field_name)

    def column_name_for(self, field_name: str) -> str:
        """Default column name for a field under the naming strategy."""
        return self.naming_strategy(field_name)
