# Cmdtree CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Declarative option requirement rules.

A requirement rule describes a relationship between a command's options that
must hold after parsing. Rules are immutable values forming a closed union:

- `Exclusive(*names)`: at most one of the named options may be given.
- `RequireOneOf(*names)`: at least one of the named options must be given.
- `IfPresentThen(name, then)`: when `name` is given, rule `then` must hold.
- `Range(name, min_value, max_value)`: the first value of `name`, read as a
  number, must lie in the closed interval `[min_value, max_value]`.

Rules only name options; they are checked against a command's declared options
and evaluated by `cmdtree.requirements.engine`.

Example:
    requirements = [
        Exclusive("--all", "--name"),
        IfPresentThen("--limit", Range("--limit", 1, 100)),
    ]
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from cmdtree.exceptions import ConfigurationError


@dataclass(frozen=True)
class OptionRequirementError:
    """A human-readable description of one violated rule instance."""

    message: str

    def __str__(self) -> str:
        return self.message


@dataclass(frozen=True, init=False)
class Exclusive:
    """The named options are mutually exclusive."""

    names: tuple[str, ...]

    def __init__(self, *names: str) -> None:
        if len(names) < 2:
            raise ConfigurationError("Exclusive requires at least two option names")
        object.__setattr__(self, "names", tuple(names))


@dataclass(frozen=True, init=False)
class RequireOneOf:
    """At least one of the named options is required."""

    names: tuple[str, ...]

    def __init__(self, *names: str) -> None:
        if not names:
            raise ConfigurationError("RequireOneOf requires at least one option name")
        object.__setattr__(self, "names", tuple(names))


@dataclass(frozen=True)
class IfPresentThen:
    """When option `name` is present, requirement `then` must hold."""

    name: str
    then: OptionRequirement

    def __post_init__(self) -> None:
        if not isinstance(self.then, RULE_TYPES):
            raise ConfigurationError(
                f"IfPresentThen needs a requirement rule, got {self.then!r}"
            )

    @property
    def names(self) -> tuple[str, ...]:
        return (self.name,)


@dataclass(frozen=True)
class Range:
    """The first value of option `name` lies in `[min_value, max_value]`."""

    name: str
    min_value: float
    max_value: float

    def __post_init__(self) -> None:
        if not self.min_value < self.max_value:
            raise ConfigurationError(
                f"Range for '{self.name}': min value must be smaller than max value "
                f"(got {self.min_value} and {self.max_value})"
            )

    @property
    def names(self) -> tuple[str, ...]:
        return (self.name,)


OptionRequirement = Union[Exclusive, RequireOneOf, IfPresentThen, Range]
RULE_TYPES = (Exclusive, RequireOneOf, IfPresentThen, Range)
