"""Field configuration resolver.

Merges, for every marked field of a target shape, the three configuration
sources into one frozen FieldConfig:

    column name:  mapper override > Column marker > naming strategy
    converter:    mapper override > Column marker > registry lookup by
                  declared type > OBJECT (if unknown types are ignored)
    attributes:   Column marker attributes, overridden key-by-key by the
                  mapper override
"""

from __future__ import annotations

import logging
from typing import Any

from row_mapper.converters.standard import OBJECT
from row_mapper.core.config import FieldConfig, MapperConfig
from row_mapper.core.exceptions import UnresolvedConverterError
from row_mapper.core.registry import ConverterRegistry
from row_mapper.core.row import Converter
from row_mapper.mapping.plan import FieldPlan, MappingPlan
from row_mapper.mapping.shape import ShapeField, TargetShape

logger = logging.getLogger(__name__)


def _first(*values: Any) -> Any:
    for value in values:
        if value is not None:
            return value
    return None


def _resolve_field(
    shape: TargetShape,
    field: ShapeField,
    config: MapperConfig,
    registry: ConverterRegistry,
    instances: dict[type, Converter],
) -> FieldPlan:
    declared = field.marker.field_config(instances)  # type: ignore[union-attr]
    override = config.field_config(field.name)

    column_name = _first(override.column_name if override else None, declared.column_name)
    if column_name is None:
        column_name = config.column_name_for(field.name)

    converter = _first(override.converter if override else None, declared.converter)
    if converter is None:
        converter = registry.lookup(field.type)
    if converter is None:
        if not config.ignore_unknown_types:
            raise UnresolvedConverterError(shape.name, field.name, field.type)
        logger.warning(
            "No converter for %s.%s (%r); passing raw column values through",
            shape.name,
            field.name,
            field.type,
        )
        converter = OBJECT

    attributes: dict[str, Any] = dict(declared.attributes)
    if override is not None:
        attributes.update(override.attributes)

    return FieldPlan(
        field=field,
        config=FieldConfig(column_name=column_name, converter=converter, attributes=attributes),
    )


def compile_plan(
    shape: TargetShape,
    config: MapperConfig,
    registry: ConverterRegistry,
) -> MappingPlan:
    """Resolve every marked field of a shape into a frozen MappingPlan.

    Raises:
        UnresolvedConverterError: If a field has no converter and unknown
            types are not ignored.
        ConverterInstantiationError: If a marker's converter class cannot
            be instantiated.
        ConfigurationError: If a resolved field configuration is invalid.
    """
    instances: dict[type, Converter] = {}
    plans = tuple(
        _resolve_field(shape, field, config, registry, instances) for field in shape.mapped_fields
    )

    mapped = {plan.name for plan in plans}
    for name in config.field_configs:
        if name not in mapped:
            logger.warning(
                "Field override '%s' matches no mapped field of %s and is ignored",
                name,
                shape.name,
            )

    for plan in plans:
        logger.debug("%s.%s -> column '%s'", shape.name, plan.name, plan.column_name)

    return MappingPlan(shape=shape, fields=plans)
