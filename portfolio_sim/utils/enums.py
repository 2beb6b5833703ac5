"""Coercion of caller-supplied strings to enum members."""

from enum import Enum
from typing import Any, Type, TypeVar

from portfolio_sim.utils.exceptions import InvalidInputError

E = TypeVar("E", bound=Enum)


def parse_enum(enum_cls: Type[E], value: Any, field_name: str) -> E:
    """Coerce a string (or enum member) to ``enum_cls``, ignoring case.

    Raises:
        InvalidInputError: If ``value`` is not a valid member
    """
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(str(value).lower())
    except ValueError:
        choices = ", ".join(m.value for m in enum_cls)
        raise InvalidInputError(
            f"{field_name} must be one of: {choices}; got {value!r}"
        ) from None
