# Cmdtree CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
This module implements `OptionParser`, the per-command option parser used by
cmdtree's dispatcher.

A command's options always come first on its slice of the command line:
the parser consumes the longest prefix of recognised option tokens (each
followed by its value tokens) and stops at the first token it does not know.
Everything after that point belongs to sub-command dispatch or to the command's
own positional arguments.

Key Features:
- Declarative option registration via `add_option()`
- Exact matching on short (`-t`) or long (`--tag`) names
- Fixed arity per option, values kept verbatim as strings
- Call-scoped `ParseResult`; the parser itself holds no per-parse state
- Loud rejection of truncated values and repeated options

Public Interface:
- `add_option(...)`: Register a new option definition.
- `parse(...)`: Parse an argument list into a `ParseResult`.
- `find_option_by_name(...)`: Resolve a short or long name to its definition.

Example Usage:
    parser = OptionParser(command_name="pull")
    parser.add_option("--tag", "-t", "Image tag", arg_kinds=("string",))
    parser.add_option("--quiet", "-q", "Suppress output")

    result = parser.parse(["-q", "--tag", "latest", "myrepo"])

    # result.consumed == 3
    # result.remaining == ("myrepo",)
    # result.options.value("tag") == "latest"

Design Notes:
Interleaving options after positional tokens, POSIX flag bundling and
`--name=value` syntax are intentionally unsupported.
"""
from __future__ import annotations

from typing import Iterable, Sequence

from cmdtree.exceptions import ConfigurationError, OptionParseError
from cmdtree.logger import logger
from cmdtree.parser.arg_kind import ArgKind
from cmdtree.parser.option import OptionDefinition, normalize_option_name
from cmdtree.parser.parsed_option import ParsedOption, ParsedOptions, ParseResult


class OptionParser:
    """
    Option parser for a single command.

    It holds the command's ordered option definitions and converts raw tokens
    into `ParsedOption` instances. It is not a replacement for argparse: there
    are no positional definitions, defaults or help actions here; help tokens
    are handled by the command dispatcher before parsing starts.
    """

    def __init__(
        self,
        options: Iterable[OptionDefinition] = (),
        command_name: str = "",
    ) -> None:
        self.command_name: str = command_name
        self._options: list[OptionDefinition] = []
        self._flag_map: dict[str, OptionDefinition] = {}
        for option in options:
            self.add_option(option)

    @property
    def definitions(self) -> tuple[OptionDefinition, ...]:
        """Declared options in declaration order."""
        return tuple(self._options)

    @property
    def has_options(self) -> bool:
        return bool(self._options)

    def add_option(
        self,
        option: OptionDefinition | str,
        short_name: str | None = None,
        description: str = "",
        arg_kinds: Sequence[ArgKind | str | type] = (),
    ) -> OptionDefinition:
        """
        Register an option.

        Args:
            option (OptionDefinition | str): A ready definition or its long name.
            short_name (str | None): Short alias when `option` is a name.
            description (str): Help text when `option` is a name.
            arg_kinds (Sequence): Value kinds when `option` is a name.

        Returns:
            OptionDefinition: The registered definition.

        Raises:
            ConfigurationError: If a name is malformed or already taken.
        """
        if not isinstance(option, OptionDefinition):
            option = OptionDefinition(
                long_name=option,
                short_name=short_name,
                description=description,
                arg_kinds=tuple(arg_kinds),
            )
        elif short_name or description or arg_kinds:
            raise ConfigurationError(
                "Pass either an OptionDefinition or its fields, not both"
            )

        for name in option.names:
            if name in self._flag_map:
                raise ConfigurationError(
                    f"Option name '{name}' is already used by "
                    f"'{self._flag_map[name].long_name}'"
                    + (f" in command '{self.command_name}'" if self.command_name else "")
                )
        self._options.append(option)
        for name in option.names:
            self._flag_map[name] = option
        return option

    def get_option(self, name: str) -> OptionDefinition | None:
        """Return the definition answering to `name`, or None."""
        return self._flag_map.get(normalize_option_name(name))

    def find_option_by_name(self, name: str) -> OptionDefinition:
        """
        Return the definition answering to `name`.

        Raises:
            ConfigurationError: If no declared option has that short or long name.
        """
        option = self.get_option(name)
        if option is None:
            raise ConfigurationError(
                f"Option '{name}' is not declared"
                + (f" by command '{self.command_name}'" if self.command_name else "")
            )
        return option

    def _consume_args(
        self, args: Sequence[str], index: int, option: OptionDefinition, token: str
    ) -> tuple[tuple[str, ...], int]:
        end = index + option.arity
        if end > len(args):
            expected = " ".join(kind.placeholder for kind in option.arg_kinds)
            raise OptionParseError(
                f"Option '{token}' requires {option.arity} "
                f"argument{'s' if option.arity != 1 else ''} ({expected}), "
                f"got {len(args) - index}."
            )
        return tuple(args[index:end]), end

    def parse(self, args: Sequence[str]) -> ParseResult:
        """
        Consume the option prefix of `args`.

        Args:
            args (Sequence[str]): The tokens left for this command.

        Returns:
            ParseResult: Parsed options in encounter order, the number of
            consumed tokens, and the remaining tokens.

        Raises:
            OptionParseError: If an option lacks value tokens or is repeated.
        """
        parsed: list[ParsedOption] = []
        seen: dict[str, ParsedOption] = {}
        index = 0
        while index < len(args):
            token = args[index]
            option = self._flag_map.get(token)
            if option is None:
                break
            if option.long_name in seen:
                previous = seen[option.long_name]
                raise OptionParseError(
                    f"Option '{token}' is given more than once "
                    f"(already given as '{previous.parsed_name}')."
                )
            values, index = self._consume_args(args, index + 1, option, token)
            parsed_option = ParsedOption(option=option, parsed_name=token, args=values)
            seen[option.long_name] = parsed_option
            parsed.append(parsed_option)

        logger.debug(
            "[%s] Parsed %d option token(s): %s",
            self.command_name or "command",
            index,
            [str(parsed_option) for parsed_option in parsed],
        )
        return ParseResult(
            options=ParsedOptions(parsed),
            consumed=index,
            remaining=tuple(args[index:]),
        )

    def __str__(self) -> str:
        """Return a human-readable summary of the parser state."""
        value_options = sum(not option.is_flag for option in self._options)
        return (
            f"OptionParser(options={len(self._options)}, "
            f"flags={len(self._flag_map)}, value_options={value_options})"
        )

    def __repr__(self) -> str:
        return str(self)
