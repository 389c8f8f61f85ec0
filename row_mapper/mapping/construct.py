"""Destination object construction.

Dispatches on the shape kind:

- MUTABLE: ``cls()``, then one ``setattr`` per staged value. Mapped fields
  left unset and absent from the instance receive their zero value.
- RECORD: one constructor call with every component; unset components get
  their declared default or their type's zero value.
- MODEL: one ``model_validate`` call; unset components with a declared
  default are left to Pydantic, the rest get their type's zero value.
"""

from __future__ import annotations

from typing import Any

from row_mapper.core.enums import ShapeKind
from row_mapper.core.exceptions import ObjectInstantiationError
from row_mapper.mapping.shape import TargetShape


def _populate(shape: TargetShape, values: dict[str, Any]) -> Any:
    instance = shape.target_class()
    for field in shape.mapped_fields:
        if field.name in values:
            setattr(instance, field.name, values[field.name])
        elif not hasattr(instance, field.name):
            setattr(instance, field.name, field.default_value())
    return instance


def _construct(shape: TargetShape, values: dict[str, Any]) -> Any:
    arguments = {
        field.name: values[field.name] if field.name in values else field.default_value()
        for field in shape.fields
    }
    return shape.target_class(**arguments)


def _validate(shape: TargetShape, values: dict[str, Any]) -> Any:
    payload: dict[str, Any] = {}
    for field in shape.fields:
        if field.name in values:
            payload[field.name] = values[field.name]
        elif not field.has_default:
            payload[field.name] = field.default_value()
    return shape.target_class.model_validate(payload)  # type: ignore[attr-defined]


_STRATEGIES = {
    ShapeKind.MUTABLE: _populate,
    ShapeKind.RECORD: _construct,
    ShapeKind.MODEL: _validate,
}


def instantiate(shape: TargetShape, values: dict[str, Any]) -> Any:
    """Build an instance of the shape's class from staged field values.

    Raises:
        ObjectInstantiationError: If construction or assignment fails.
    """
    try:
        return _STRATEGIES[shape.kind](shape, values)
    except Exception as e:
        raise ObjectInstantiationError(shape.name, str(e)) from e
