"""Naming strategy and target shape enumerations."""

from __future__ import annotations

from enum import Enum


def camel_to_snake(value: str) -> str:
    """Convert a camelCase name to snake_case, keeping acronyms together.

    An uppercase character gets a leading underscore when it is not the
    first character and its neighbour on either side is lowercase, so
    ``myHTTPRequest`` becomes ``my_http_request`` rather than
    ``my_h_t_t_p_request``.
    """
    result: list[str] = []
    for i, char in enumerate(value):
        if char.isupper():
            prev_is_lower = i > 0 and value[i - 1].islower()
            next_is_lower = i + 1 < len(value) and value[i + 1].islower()
            if i > 0 and (prev_is_lower or next_is_lower):
                result.append("_")
            result.append(char.lower())
        else:
            result.append(char)
    return "".join(result)


class NamingStrategy(Enum):
    """Default field-name to column-name conventions."""

    AS_IS = "as_is"
    SNAKE_CASE = "snake_case"
    UPPER_SNAKE_CASE = "upper_snake_case"

    def field_to_column_name(self, field_name: str) -> str:
        """Convert a field name to its default column name."""
        if self is NamingStrategy.SNAKE_CASE:
            return camel_to_snake(field_name)
        if self is NamingStrategy.UPPER_SNAKE_CASE:
            return camel_to_snake(field_name).upper()
        return field_name

    def __call__(self, field_name: str) -> str:
        return self.field_to_column_name(field_name)


class ShapeKind(Enum):
    """How instances of a target shape are constructed."""

    MUTABLE = "mutable"  # no-argument construction, then attribute assignment
    RECORD = "record"  # dataclass / NamedTuple: one constructor call
    MODEL = "model"  # pydantic BaseModel: one model_validate call
