"""Converter registry - maps target value types to converters.

Lookup order:
    exact type match                     -> that converter
    first registered supertype of type  -> that converter (registration order)
    otherwise                            -> None
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from types import MappingProxyType, UnionType
from typing import Any, Union, get_args, get_origin

from row_mapper.core.exceptions import ConfigurationError
from row_mapper.core.row import Converter


def unwrap_optional(annotation: Any) -> tuple[Any, bool]:
    """Split ``X | None`` into ``(X, True)``; anything else into ``(annotation, False)``.

    Unions of more than one non-None member are returned unchanged.
    """
    origin = get_origin(annotation)
    if origin is Union or origin is UnionType:
        args = [arg for arg in get_args(annotation) if arg is not type(None)]
        nullable = len(args) < len(get_args(annotation))
        if len(args) == 1:
            return args[0], nullable
        return annotation, nullable
    return annotation, False


class ConverterRegistry:
    """Registry of converters keyed by target value type.

    The registry is mutable while a mapper is being configured. Every built
    mapper holds its own copy, so later registrations never leak into a
    mapper that already exists.

    Args:
        converters: Optional initial type to converter mapping.
    """

    def __init__(self, converters: Mapping[type, Converter] | None = None) -> None:
        self._converters: dict[type, Converter] = {}
        if converters is not None:
            self.register_all(converters)

    @classmethod
    def with_defaults(cls) -> ConverterRegistry:
        """A registry holding the standard converter for every built-in type."""
        from row_mapper.converters.standard import register_defaults

        registry = cls()
        register_defaults(registry)
        return registry

    def register(self, type_: type, converter: Converter) -> None:
        """Register a converter for a type. The last registration wins."""
        if type_ is None:
            raise ConfigurationError("Converter type can not be None")
        if converter is None:
            raise ConfigurationError(f"Converter for {type_!r} can not be None")
        self._converters[type_] = converter

    def register_all(self, converters: Mapping[type, Converter]) -> None:
        if converters is None:
            raise ConfigurationError("Converters can not be None")
        for type_, converter in converters.items():
            self.register(type_, converter)

    def lookup(self, type_: Any) -> Converter | None:
        """Find the converter for a type.

        ``Optional`` wrappers are stripped and generic aliases resolve
        through their origin class. When several registered supertypes
        match, the one registered first wins.

        Returns:
            The converter, or None if nothing is registered for the type.
        """
        type_, _ = unwrap_optional(type_)

        converter = self._converters.get(type_)
        if converter is not None:
            return converter

        if not isinstance(type_, type):
            type_ = get_origin(type_)
            if not isinstance(type_, type):
                return None
            converter = self._converters.get(type_)
            if converter is not None:
                return converter

        for registered_type, registered in self._converters.items():
            if isinstance(registered_type, type) and issubclass(type_, registered_type):
                return registered
        return None

    def has(self, type_: Any) -> bool:
        """Check if a converter would be found for a type."""
        return self.lookup(type_) is not None

    def copy(self) -> ConverterRegistry:
        return ConverterRegistry(self._converters)

    @property
    def types(self) -> list[type]:
        """Registered types, in registration order."""
        return list(self._converters)

    @property
    def converters(self) -> Mapping[type, Converter]:
        """Read-only view of the registered converters."""
        return MappingProxyType(self._converters)

    def __contains__(self, type_: object) -> bool:
        return type_ in self._converters

    def __iter__(self) -> Iterator[type]:
        return iter(self._converters)

    def __len__(self) -> int:
        """Number of registered types."""
        return len(self._converters)
