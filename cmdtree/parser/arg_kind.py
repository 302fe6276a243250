# Cmdtree CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines `ArgKind`, an enum describing the type of each value slot of a
value-taking option.

An option declares an ordered tuple of argument kinds; its arity is the length
of that tuple. Kinds are only descriptive at parse time: tokens are stored
verbatim and coerced later, when a requirement rule or a command reads them.

Supports alias coercion for shorthand or config-friendly values, including the
matching Python builtin types.

Example:
    ArgKind("string") → ArgKind.STRING
    ArgKind("int")    → ArgKind.INTEGER (via alias)
    ArgKind(float)    → ArgKind.DOUBLE  (via builtin type)
"""
from __future__ import annotations

from enum import Enum


class ArgKind(Enum):
    """
    Kind of a single option argument slot.

    Members:
        STRING: Any text.
        INTEGER: A whole number.
        DOUBLE: A floating-point number.
        BOOLEAN: A truthy/falsy word such as `true`, `no`, `1`.

    Aliases:
        - "str" → "string"
        - "int" → "integer"
        - "float", "number" → "double"
        - "bool" → "boolean"
    """

    STRING = "string"
    INTEGER = "integer"
    DOUBLE = "double"
    BOOLEAN = "boolean"

    @classmethod
    def choices(cls) -> list[ArgKind]:
        """Return a list of all argument kinds."""
        return list(cls)

    @classmethod
    def _get_alias(cls, value: str) -> str:
        aliases = {
            "str": "string",
            "int": "integer",
            "float": "double",
            "number": "double",
            "bool": "boolean",
        }
        return aliases.get(value, value)

    @classmethod
    def _missing_(cls, value: object) -> ArgKind:
        builtin_types = {str: "string", int: "integer", float: "double", bool: "boolean"}
        if isinstance(value, type) and value in builtin_types:
            return cls(builtin_types[value])
        if not isinstance(value, str):
            raise ValueError(f"Invalid {cls.__name__}: {value!r}")
        normalized = value.strip().lower()
        alias = cls._get_alias(normalized)
        for member in cls:
            if member.value == alias:
                return member
        valid = ", ".join(member.value for member in cls)
        raise ValueError(f"Invalid {cls.__name__}: '{value}'. Must be one of: {valid}")

    @property
    def placeholder(self) -> str:
        """Lower-case placeholder shown in help output."""
        return self.value

    def __str__(self) -> str:
        """Return the string representation of the argument kind."""
        return self.value
