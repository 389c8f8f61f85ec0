"""Target shape inspection.

A target class is inspected once, when its mapper is built, into a
TargetShape: the construction kind plus an ordered list of fields with
their declared types, markers and defaults.

Supported targets:
    pydantic BaseModel    -> ShapeKind.MODEL
    dataclass, NamedTuple -> ShapeKind.RECORD
    plain annotated class -> ShapeKind.MUTABLE
"""

from __future__ import annotations

import dataclasses
from collections.abc import Callable
from dataclasses import dataclass
from typing import Annotated, Any, ClassVar, get_args, get_origin, get_type_hints

from pydantic import BaseModel

from row_mapper.core.enums import ShapeKind
from row_mapper.core.exceptions import ConfigurationError
from row_mapper.core.registry import unwrap_optional
from row_mapper.mapping.marker import Column, find_marker


class _Missing:
    """Marks a field that declares no default."""

    def __repr__(self) -> str:
        return "MISSING"


MISSING: Any = _Missing()

# Zero values for non-nullable primitive slots.
_ZERO_VALUES: dict[type, Any] = {bool: False, int: 0, float: 0.0}


@dataclass(frozen=True)
class ShapeField:
    """One field (component) of a target shape."""

    name: str
    type: Any
    nullable: bool = False
    marker: Column | None = None
    default: Any = MISSING
    default_factory: Callable[[], Any] | Any = MISSING

    @property
    def is_mapped(self) -> bool:
        return self.marker is not None

    @property
    def is_primitive(self) -> bool:
        """Non-Optional ``int``, ``float`` or ``bool``: zero-filled when its column is absent."""
        return not self.nullable and self.type in _ZERO_VALUES

    @property
    def has_default(self) -> bool:
        return self.default is not MISSING or self.default_factory is not MISSING

    def default_value(self) -> Any:
        """Declared default, else the type's zero value (None for non-primitives)."""
        if self.default is not MISSING:
            return self.default
        if self.default_factory is not MISSING:
            return self.default_factory()
        if self.is_primitive:
            return _ZERO_VALUES[self.type]
        return None


@dataclass(frozen=True)
class TargetShape:
    """Inspected structure of a target class."""

    target_class: type
    kind: ShapeKind
    fields: tuple[ShapeField, ...]

    @property
    def name(self) -> str:
        return self.target_class.__name__

    @property
    def mapped_fields(self) -> tuple[ShapeField, ...]:
        """Fields carrying a Column marker, in declaration order."""
        return tuple(f for f in self.fields if f.is_mapped)


def _split_annotation(annotation: Any) -> tuple[Any, bool, Column | None]:
    """Return ``(type, nullable, marker)`` for a field annotation."""
    marker: Column | None = None
    if get_origin(annotation) is Annotated:
        marker = find_marker(annotation.__metadata__)
        annotation = get_args(annotation)[0]
    annotation, nullable = unwrap_optional(annotation)
    if get_origin(annotation) is Annotated:
        marker = marker or find_marker(annotation.__metadata__)
        annotation = get_args(annotation)[0]
    return annotation, nullable, marker


def _type_hints(cls: type) -> dict[str, Any]:
    try:
        return get_type_hints(cls, include_extras=True)
    except (NameError, TypeError) as e:
        raise ConfigurationError(f"Cannot resolve type hints of {cls.__name__}: {e}") from e


def _is_named_tuple(cls: type) -> bool:
    return issubclass(cls, tuple) and hasattr(cls, "_fields")


def _model_fields(cls: type[BaseModel]) -> list[ShapeField]:
    fields: list[ShapeField] = []
    for name, info in cls.model_fields.items():
        type_, nullable, marker = _split_annotation(info.annotation)
        marker = marker or find_marker(info.metadata)
        default = MISSING if info.is_required() else info.default
        factory = info.default_factory if info.default_factory is not None else MISSING
        if factory is not MISSING:
            default = MISSING
        fields.append(ShapeField(name, type_, nullable, marker, default, factory))
    return fields


def _dataclass_fields(cls: type) -> list[ShapeField]:
    hints = _type_hints(cls)
    fields: list[ShapeField] = []
    for f in dataclasses.fields(cls):
        if not f.init:
            continue
        type_, nullable, marker = _split_annotation(hints.get(f.name, Any))
        default = MISSING if f.default is dataclasses.MISSING else f.default
        factory = MISSING if f.default_factory is dataclasses.MISSING else f.default_factory
        fields.append(ShapeField(f.name, type_, nullable, marker, default, factory))
    return fields


def _named_tuple_fields(cls: type) -> list[ShapeField]:
    hints = _type_hints(cls)
    defaults: dict[str, Any] = getattr(cls, "_field_defaults", {})
    fields: list[ShapeField] = []
    for name in cls._fields:  # type: ignore[attr-defined]
        type_, nullable, marker = _split_annotation(hints.get(name, Any))
        fields.append(ShapeField(name, type_, nullable, marker, defaults.get(name, MISSING)))
    return fields


def _class_default(cls: type, name: str) -> Any:
    for klass in cls.__mro__:
        if name in vars(klass):
            return vars(klass)[name]
    return MISSING


def _plain_fields(cls: type) -> list[ShapeField]:
    fields: list[ShapeField] = []
    for name, hint in _type_hints(cls).items():
        if hint is ClassVar or get_origin(hint) is ClassVar:
            continue
        type_, nullable, marker = _split_annotation(hint)
        fields.append(ShapeField(name, type_, nullable, marker, _class_default(cls, name)))
    return fields


def inspect_shape(target_class: type) -> TargetShape:
    """Inspect a target class into a TargetShape.

    Raises:
        ConfigurationError: If the target is not a class or its annotations
            cannot be resolved.
    """
    if not isinstance(target_class, type):
        raise ConfigurationError(f"Target must be a class, got {target_class!r}")

    if issubclass(target_class, BaseModel):
        return TargetShape(target_class, ShapeKind.MODEL, tuple(_model_fields(target_class)))
    if dataclasses.is_dataclass(target_class):
        return TargetShape(target_class, ShapeKind.RECORD, tuple(_dataclass_fields(target_class)))
    if _is_named_tuple(target_class):
        return TargetShape(
            target_class, ShapeKind.RECORD, tuple(_named_tuple_fields(target_class))
        )
    return TargetShape(target_class, ShapeKind.MUTABLE, tuple(_plain_fields(target_class)))
