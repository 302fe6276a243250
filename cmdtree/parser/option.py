# Cmdtree CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines the `OptionDefinition` dataclass used by `OptionParser` to describe the
options a command accepts.

Each definition names one option by a canonical long name (`--tag`) and an
optional short alias (`-t`), carries a human description for help output, and
lists the kinds of the values it consumes. An option with no argument kinds is
a boolean flag: its presence alone carries meaning.

Names may be declared with or without their leading dashes; they are normalised
on construction so `"tag"` becomes `"--tag"` and `"t"` becomes `"-t"`. The same
normalisation is applied by every name lookup, so requirement rules may refer to
options as `"tag"`, `"--tag"` or `"-t"`.

Key Attributes:
- `long_name`: Canonical name, unique within a command.
- `short_name`: Optional alias.
- `description`: Help text.
- `arg_kinds`: Ordered `ArgKind` value slots; the arity of the option.
"""
from __future__ import annotations

from dataclasses import dataclass, field

from cmdtree.exceptions import ConfigurationError
from cmdtree.parser.arg_kind import ArgKind


def normalize_option_name(name: str) -> str:
    """Add the conventional leading dashes to a bare option name."""
    if not isinstance(name, str) or not name.strip("-"):
        raise ConfigurationError(f"Invalid option name: {name!r}")
    if name.startswith("-"):
        return name
    if len(name) == 1:
        return f"-{name}"
    return f"--{name}"


def _is_valid_name_body(body: str) -> bool:
    return body.replace("-", "").replace("_", "").isalnum() and not body.startswith("-")


@dataclass(frozen=True)
class OptionDefinition:
    """
    Declared shape of a command option.

    Attributes:
        long_name (str): Canonical long name, e.g. `--tag`.
        short_name (str | None): Optional short alias, e.g. `-t`.
        description (str): Help text for the option.
        arg_kinds (tuple[ArgKind, ...]): Kinds of the values the option consumes.
    """

    long_name: str
    short_name: str | None = None
    description: str = ""
    arg_kinds: tuple[ArgKind, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        long_name = normalize_option_name(self.long_name)
        if not long_name.startswith("--") or not _is_valid_name_body(long_name[2:]):
            raise ConfigurationError(
                f"Long option name must look like '--name', got '{self.long_name}'"
            )
        object.__setattr__(self, "long_name", long_name)

        if self.short_name is not None:
            short_name = normalize_option_name(self.short_name)
            if short_name.startswith("--") or not _is_valid_name_body(short_name[1:]):
                raise ConfigurationError(
                    f"Short option name must look like '-n', got '{self.short_name}'"
                )
            object.__setattr__(self, "short_name", short_name)

        try:
            arg_kinds = tuple(
                kind if isinstance(kind, ArgKind) else ArgKind(kind)
                for kind in self.arg_kinds
            )
        except ValueError as error:
            raise ConfigurationError(
                f"Invalid argument kind for '{long_name}': {error}"
            ) from error
        object.__setattr__(self, "arg_kinds", arg_kinds)

    @property
    def names(self) -> tuple[str, ...]:
        """All names this option answers to, short name first."""
        if self.short_name:
            return (self.short_name, self.long_name)
        return (self.long_name,)

    @property
    def arity(self) -> int:
        return len(self.arg_kinds)

    @property
    def is_flag(self) -> bool:
        return not self.arg_kinds

    @property
    def dest(self) -> str:
        """Identifier-style key for the option, e.g. `--dry-run` → `dry_run`."""
        return self.long_name.lstrip("-").replace("-", "_")

    def matches(self, name: str) -> bool:
        """Return True if `name` is this option's short or long name."""
        return normalize_option_name(name) in self.names

    def get_label(self) -> str:
        """Long name followed by the value placeholders, e.g. `--size integer`."""
        placeholders = [kind.placeholder for kind in self.arg_kinds]
        return " ".join([self.long_name, *placeholders])

    def __str__(self) -> str:
        return ", ".join(self.names)
