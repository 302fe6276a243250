# Cmdtree CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Parse result models produced by `OptionParser`.

- `ParsedOption`: one concrete occurrence of an option on the command line, with
  the literal token the user typed and the raw value tokens it consumed.
- `ParsedOptions`: the ordered, read-only collection of parsed options of one
  parse pass, with lookup by any option name and typed value access.
- `ParseResult`: what a single `OptionParser.parse()` call returns: the parsed
  options, how many tokens were consumed, and the tokens left for dispatch.

All three are call-scoped values. They are never stored on a command, so the
same command can parse several argument vectors independently.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable, Iterator, Sequence, overload

from cmdtree.exceptions import OptionParseError
from cmdtree.parser.option import OptionDefinition, normalize_option_name
from cmdtree.parser.utils import coerce_value


@dataclass(frozen=True)
class ParsedOption:
    """
    A concrete occurrence of an option.

    Attributes:
        option (OptionDefinition): The definition the token matched.
        parsed_name (str): The literal token used, short or long form.
        args (tuple[str, ...]): The raw value tokens consumed for the option.
    """

    option: OptionDefinition
    parsed_name: str
    args: tuple[str, ...] = ()

    def matches(self, name: str) -> bool:
        return self.option.matches(name)

    def typed_arg(self, index: int = 0) -> Any:
        """
        Coerce the value token at `index` with its declared argument kind.

        Raises:
            OptionParseError: If the token cannot be read as its declared kind.
        """
        raw_value = self.args[index]
        try:
            return coerce_value(raw_value, self.option.arg_kinds[index])
        except ValueError as error:
            raise OptionParseError(
                f"Invalid argument value: {self.parsed_name} {raw_value}"
            ) from error

    def typed_args(self) -> list[Any]:
        """Coerce every value token with its declared argument kind."""
        return [self.typed_arg(index) for index in range(len(self.args))]

    def __str__(self) -> str:
        return " ".join([self.parsed_name, *self.args])


class ParsedOptions(Sequence[ParsedOption]):
    """Ordered collection of the options parsed for one command invocation."""

    def __init__(self, parsed: Iterable[ParsedOption] = ()) -> None:
        self._parsed: tuple[ParsedOption, ...] = tuple(parsed)

    @overload
    def __getitem__(self, index: int) -> ParsedOption: ...

    @overload
    def __getitem__(self, index: slice) -> Sequence[ParsedOption]: ...

    def __getitem__(self, index):
        return self._parsed[index]

    def __len__(self) -> int:
        return len(self._parsed)

    def __iter__(self) -> Iterator[ParsedOption]:
        return iter(self._parsed)

    def __contains__(self, item: object) -> bool:
        if isinstance(item, str):
            return self.get(item) is not None
        return item in self._parsed

    def get(self, name: str) -> ParsedOption | None:
        """Return the parsed option answering to `name`, if present."""
        name = normalize_option_name(name)
        for parsed_option in self._parsed:
            if name in parsed_option.option.names:
                return parsed_option
        return None

    def is_present(self, name: str) -> bool:
        return self.get(name) is not None

    def value(self, name: str, index: int = 0, default: Any = None) -> Any:
        """
        Return the value at `index` of option `name`, coerced to its declared kind.

        Flags have no values: for a present flag this returns True, for any
        absent option it returns `default`.

        Raises:
            OptionParseError: If the raw token cannot be coerced to its declared kind.
        """
        parsed_option = self.get(name)
        if parsed_option is None:
            return default
        if parsed_option.option.is_flag:
            return True
        return parsed_option.typed_arg(index)

    def values(self, name: str) -> list[Any]:
        """Return every value of option `name`, coerced, or an empty list."""
        parsed_option = self.get(name)
        if parsed_option is None:
            return []
        return parsed_option.typed_args()

    def as_dict(self) -> dict[str, list[str]]:
        """Map each present option's `dest` to its raw value tokens."""
        return {
            parsed_option.option.dest: list(parsed_option.args)
            for parsed_option in self._parsed
        }

    def __eq__(self, other: object) -> bool:
        if isinstance(other, ParsedOptions):
            return self._parsed == other._parsed
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._parsed)

    def __repr__(self) -> str:
        return f"ParsedOptions({', '.join(str(parsed) for parsed in self._parsed)})"


@dataclass(frozen=True)
class ParseResult:
    """Outcome of parsing the option prefix of an argument list."""

    options: ParsedOptions = field(default_factory=ParsedOptions)
    consumed: int = 0
    remaining: tuple[str, ...] = ()
