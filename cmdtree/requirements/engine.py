# Cmdtree CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Evaluation of option requirement rules.

`validate()` is a pure function of a command's option definitions, its
requirement rules and one set of parsed options. Every top-level rule is
evaluated and every violation is collected, in rule order, so a user sees all
problems with an invocation at once. The only short-circuit is inside
`IfPresentThen`, whose inner rule is not evaluated when its trigger is absent.

Messages quote what the user typed where that helps (the literal `-a` rather
than `--all`), while help lines always use canonical long names.

Functions:
- validate: Collect every `OptionRequirementError` for a parse.
- help_line: Render the declarative sentence for a rule.
- check_requirements: Verify that rules only reference declared options.
- find_option_by_name: Resolve a rule's option name to its definition.
"""
from __future__ import annotations

import math
from typing import Iterable, Sequence

from cmdtree.exceptions import ConfigurationError
from cmdtree.parser.option import OptionDefinition
from cmdtree.parser.parsed_option import ParsedOption
from cmdtree.requirements.rules import (
    Exclusive,
    IfPresentThen,
    OptionRequirement,
    OptionRequirementError,
    Range,
    RequireOneOf,
)
from cmdtree.utils import format_number


def find_option_by_name(
    definitions: Iterable[OptionDefinition], name: str
) -> OptionDefinition:
    """
    Return the definition whose short or long name equals `name`.

    Raises:
        ConfigurationError: If the rule references an option that was never declared.
    """
    for option in definitions:
        if option.matches(name):
            return option
    raise ConfigurationError(
        f"Option requirement references undeclared option '{name}'"
    )


def find_parsed_option(
    parsed_options: Iterable[ParsedOption], name: str
) -> ParsedOption | None:
    for parsed_option in parsed_options:
        if parsed_option.matches(name):
            return parsed_option
    return None


def referenced_names(rule: OptionRequirement) -> tuple[str, ...]:
    """Every option name a rule references, including nested rules."""
    match rule:
        case IfPresentThen():
            return (rule.name, *referenced_names(rule.then))
        case Exclusive() | RequireOneOf() | Range():
            return rule.names
    raise ConfigurationError(f"Unknown option requirement: {rule!r}")


def check_requirements(
    definitions: Sequence[OptionDefinition],
    requirements: Iterable[OptionRequirement],
) -> None:
    """
    Verify that every rule only references declared options.

    Raises:
        ConfigurationError: On an undeclared option name, or on a `Range` over
            an option that takes no value.
    """
    for rule in requirements:
        for name in referenced_names(rule):
            find_option_by_name(definitions, name)
        _check_ranges(definitions, rule)


def _check_ranges(
    definitions: Sequence[OptionDefinition], rule: OptionRequirement
) -> None:
    if isinstance(rule, IfPresentThen):
        _check_ranges(definitions, rule.then)
    elif isinstance(rule, Range):
        option = find_option_by_name(definitions, rule.name)
        if option.is_flag:
            raise ConfigurationError(
                f"Range requirement on '{option.long_name}' needs an option "
                "that takes a value"
            )


def parse_number(text: str) -> float:
    """
    Read a `Range` value. Returns nan for anything that is not a number.

    Accepts what `float()` accepts (surrounding whitespace, exponents, `inf`)
    except underscore digit separators.
    """
    if "_" in text:
        return math.nan
    try:
        return float(text)
    except ValueError:
        return math.nan


def _long_names(definitions: Sequence[OptionDefinition], names: Iterable[str]) -> str:
    return ", ".join(find_option_by_name(definitions, name).long_name for name in names)


def _exclusive_sentence(names: str) -> str:
    return f"{names} are mutually exclusive."


def _require_one_of_sentence(names: str, count: int) -> str:
    if count == 1:
        return f"{names} is required."
    return f"{names} at least one is required."


def _if_present_sentence(name: str, then_sentence: str) -> str:
    return f"If {name} is present then {then_sentence}"


def _range_sentence(name: str, rule: Range) -> str:
    return (
        f"{name} has value in range "
        f"[{format_number(rule.min_value)}, {format_number(rule.max_value)}]."
    )


def help_line(
    rule: OptionRequirement, definitions: Sequence[OptionDefinition]
) -> str:
    """Render the declarative help sentence of `rule` using canonical long names."""
    match rule:
        case Exclusive():
            return _exclusive_sentence(_long_names(definitions, rule.names))
        case RequireOneOf():
            return _require_one_of_sentence(
                _long_names(definitions, rule.names), len(rule.names)
            )
        case IfPresentThen():
            return _if_present_sentence(
                find_option_by_name(definitions, rule.name).long_name,
                help_line(rule.then, definitions),
            )
        case Range():
            return _range_sentence(
                find_option_by_name(definitions, rule.name).long_name, rule
            )
    raise ConfigurationError(f"Unknown option requirement: {rule!r}")


def validate_rule(
    rule: OptionRequirement,
    definitions: Sequence[OptionDefinition],
    parsed_options: Sequence[ParsedOption],
) -> list[OptionRequirementError]:
    """Evaluate a single rule and return its violations."""
    match rule:
        case Exclusive():
            present = [
                name for name in rule.names if find_parsed_option(parsed_options, name)
            ]
            if len(present) < 2:
                return []
            used_tokens = [
                parsed_option.parsed_name
                for parsed_option in parsed_options
                if any(parsed_option.matches(name) for name in rule.names)
            ]
            return [OptionRequirementError(_exclusive_sentence(", ".join(used_tokens)))]

        case RequireOneOf():
            if any(find_parsed_option(parsed_options, name) for name in rule.names):
                return []
            return [
                OptionRequirementError(
                    _require_one_of_sentence(
                        _long_names(definitions, rule.names), len(rule.names)
                    )
                )
            ]

        case IfPresentThen():
            if find_parsed_option(parsed_options, rule.name) is None:
                return []
            trigger = find_option_by_name(definitions, rule.name).long_name
            return [
                OptionRequirementError(_if_present_sentence(trigger, error.message))
                for error in validate_rule(rule.then, definitions, parsed_options)
            ]

        case Range():
            parsed_option = find_parsed_option(parsed_options, rule.name)
            if parsed_option is None:
                return []
            raw_value = parsed_option.args[0]
            value = parse_number(raw_value)
            if math.isnan(value):
                return [
                    OptionRequirementError(
                        f"Invalid argument value: {parsed_option.parsed_name} {raw_value}"
                    )
                ]
            if rule.min_value <= value <= rule.max_value:
                return []
            option = find_option_by_name(definitions, rule.name)
            return [OptionRequirementError(_range_sentence(option.long_name, rule))]

    raise ConfigurationError(f"Unknown option requirement: {rule!r}")


def validate(
    definitions: Sequence[OptionDefinition],
    requirements: Sequence[OptionRequirement],
    parsed_options: Sequence[ParsedOption],
) -> list[OptionRequirementError]:
    """
    Validate parsed options against every requirement rule.

    Args:
        definitions (Sequence[OptionDefinition]): The command's declared options.
        requirements (Sequence[OptionRequirement]): The command's rules.
        parsed_options (Sequence[ParsedOption]): The options of one parse pass.

    Returns:
        list[OptionRequirementError]: Every violation, in rule evaluation order.

    Raises:
        ConfigurationError: If a rule references an undeclared option.
    """
    check_requirements(definitions, requirements)
    errors: list[OptionRequirementError] = []
    for rule in requirements:
        errors.extend(validate_rule(rule, definitions, parsed_options))
    return errors
