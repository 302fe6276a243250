# Cmdtree CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Contains value coercion utilities for cmdtree option arguments.

Option values are kept as raw strings during parsing. These helpers convert
them on demand into the Python type matching a declared `ArgKind`.

Functions:
- coerce_bool: Convert a string to a boolean.
- coerce_value: Convert a raw token to the type described by an `ArgKind`.
"""
from typing import Any

from cmdtree.parser.arg_kind import ArgKind


def coerce_bool(value: str | bool) -> bool:
    """
    Convert a string to a boolean.

    Accepts various truthy and falsy representations such as 'true', 'yes', '0', 'off', etc.

    Args:
        value (str | bool): The input string or boolean.

    Returns:
        bool: Parsed boolean result.

    Raises:
        ValueError: If the text is not a recognised boolean word.
    """
    if isinstance(value, bool):
        return value
    normalized = value.strip().lower()
    if normalized in {"true", "t", "1", "yes", "y", "on"}:
        return True
    elif normalized in {"false", "f", "0", "no", "n", "off"}:
        return False
    raise ValueError(f"'{value}' is not a valid boolean")


def coerce_value(value: str, kind: ArgKind | str | type) -> Any:
    """
    Convert a raw option token to the type described by `kind`.

    Args:
        value (str): The raw token as typed on the command line.
        kind (ArgKind | str | type): The target kind, or anything `ArgKind` accepts.

    Returns:
        Any: The coerced value.

    Raises:
        ValueError: If the token cannot be interpreted as `kind`.
    """
    kind = ArgKind(kind) if not isinstance(kind, ArgKind) else kind
    match kind:
        case ArgKind.STRING:
            return value
        case ArgKind.INTEGER:
            return int(value)
        case ArgKind.DOUBLE:
            return float(value)
        case ArgKind.BOOLEAN:
            return coerce_bool(value)
    raise ValueError(f"Unsupported argument kind: {kind}")
