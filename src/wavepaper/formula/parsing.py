"""
Helpers that turn already-parsed descriptor fields into formula parameters.

The job descriptor encodes complex numbers as ``{"real": ..., "imaginary": ...}``
and powers as plain integers. Anything else is rejected with ``ParseError``.
"""

import numbers
from enum import Enum
from typing import Any, Mapping, Optional, Type, TypeVar

from .exceptions import ParseError

E = TypeVar("E", bound=Enum)


def parse_complex(data: Any, field_name: str = "multiplier",
                  default: Optional[complex] = None) -> complex:
    """
    Read a complex number from a ``{real, imaginary}`` mapping.

    Args:
        data: The mapping (or None when the field is absent)
        field_name: Name used in error messages
        default: Returned when ``data`` is None; None makes the field required

    Returns:
        The complex value
    """
    if data is None:
        if default is None:
            raise ParseError(f"{field_name} is required")
        return default
    if isinstance(data, numbers.Number) and not isinstance(data, bool):
        return complex(data)
    if not isinstance(data, Mapping):
        raise ParseError(f"{field_name} must be a mapping with real/imaginary, got {data!r}")

    unknown = set(data) - {"real", "imaginary"}
    if unknown:
        raise ParseError(f"{field_name} has unknown fields: {sorted(unknown)}")

    real = parse_float(data.get("real", 0.0), f"{field_name}.real")
    imaginary = parse_float(data.get("imaginary", 0.0), f"{field_name}.imaginary")
    return complex(real, imaginary)


def parse_float(value: Any, field_name: str) -> float:
    """Read a real number, accepting numeric strings such as ``"2e-2"``."""
    if isinstance(value, bool):
        raise ParseError(f"{field_name} must be a number, got {value!r}")
    try:
        return float(value)
    except (TypeError, ValueError) as exc:
        raise ParseError(f"{field_name} must be a number, got {value!r}") from exc


def parse_int(value: Any, field_name: str) -> int:
    """Read an integer power. Floats are accepted only when integral."""
    if isinstance(value, bool):
        raise ParseError(f"{field_name} must be an integer, got {value!r}")
    if isinstance(value, numbers.Integral):
        return int(value)
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError as exc:
            raise ParseError(f"{field_name} must be an integer, got {value!r}") from exc
    raise ParseError(f"{field_name} must be an integer, got {value!r}")


def parse_bool(value: Any, field_name: str) -> bool:
    if isinstance(value, bool):
        return value
    raise ParseError(f"{field_name} must be true or false, got {value!r}")


def parse_enum(enum_type: Type[E], value: Any, field_name: str) -> E:
    """Look an enum member up by value (case-insensitive for strings)."""
    if isinstance(value, enum_type):
        return value
    if isinstance(value, str):
        for member in enum_type:
            if isinstance(member.value, str) and member.value.lower() == value.strip().lower():
                return member
    valid = [member.value for member in enum_type]
    raise ParseError(f"Unknown {field_name}: {value!r}. Valid: {valid}")
