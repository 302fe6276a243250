import pytest

from cmdtree.exceptions import ConfigurationError
from cmdtree.parser import OptionDefinition
from cmdtree.requirements import (
    Exclusive,
    IfPresentThen,
    Range,
    RequireOneOf,
    help_line,
)

DEFINITIONS = (
    OptionDefinition("--all", "-a"),
    OptionDefinition("--filter", "-f", arg_kinds=("string",)),
    OptionDefinition("--limit", arg_kinds=("integer",)),
)


@pytest.mark.parametrize(
    "rule, expected",
    [
        (Exclusive("-a", "f"), "--all, --filter are mutually exclusive."),
        (RequireOneOf("limit"), "--limit is required."),
        (RequireOneOf("a", "f"), "--all, --filter at least one is required."),
        (Range("--limit", 1, 100), "--limit has value in range [1, 100]."),
        (
            IfPresentThen("-a", Range("limit", 1, 2.5)),
            "If --all is present then --limit has value in range [1, 2.5].",
        ),
    ],
)
def test_help_line_uses_canonical_long_names(rule, expected):
    assert help_line(rule, DEFINITIONS) == expected


def test_help_line_undeclared_option():
    with pytest.raises(ConfigurationError):
        help_line(RequireOneOf("--nope"), DEFINITIONS)
