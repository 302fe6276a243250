from itertools import combinations

import pytest

from cmdtree.exceptions import ConfigurationError
from cmdtree.parser import OptionDefinition, OptionParser
from cmdtree.requirements import (
    Exclusive,
    IfPresentThen,
    Range,
    RequireOneOf,
    check_requirements,
    validate,
)

DEFINITIONS = (
    OptionDefinition("--all", "-a", "All"),
    OptionDefinition("--block", "-b", "Block"),
    OptionDefinition("--count", "-c", "Count"),
    OptionDefinition("--level", "-l", "Level", arg_kinds=("integer",)),
    OptionDefinition("--name", "-n", "Name", arg_kinds=("string",)),
)


def parse(*tokens: str):
    return OptionParser(DEFINITIONS).parse(list(tokens)).options


def messages(requirements, *tokens: str) -> list[str]:
    return [
        error.message for error in validate(DEFINITIONS, requirements, parse(*tokens))
    ]


def test_exclusive_scenario_lists_literal_tokens():
    assert messages([Exclusive("a", "b")], "-a", "-b") == [
        "-a, -b are mutually exclusive."
    ]


def test_exclusive_uses_typed_form_in_parse_order():
    assert messages([Exclusive("--all", "--block")], "--block", "-a") == [
        "--block, -a are mutually exclusive."
    ]


@pytest.mark.parametrize(
    "present",
    [
        subset
        for size in range(4)
        for subset in combinations(("-a", "-b", "-c"), size)
    ],
)
def test_exclusive_fails_iff_two_or_more_present(present):
    errors = messages([Exclusive("a", "b", "c")], *present)
    if len(present) >= 2:
        assert len(errors) == 1
        assert all(token in errors[0] for token in present)
    else:
        assert errors == []


def test_require_one_of_singular_wording():
    assert messages([RequireOneOf("name")]) == ["--name is required."]
    assert messages([RequireOneOf("name")], "-n", "x") == []


def test_require_one_of_plural_wording():
    assert messages([RequireOneOf("-a", "--block")]) == [
        "--all, --block at least one is required."
    ]
    assert messages([RequireOneOf("-a", "--block")], "-b") == []


def test_if_present_then_absent_trigger_skips_inner_rule():
    rule = IfPresentThen("--all", RequireOneOf("--name"))
    assert messages([rule]) == []
    assert messages([rule], "-b") == []


def test_if_present_then_wraps_inner_errors():
    rule = IfPresentThen("-a", Exclusive("--block", "--count"))
    assert messages([rule], "-a", "-b", "-c") == [
        "If --all is present then -b, -c are mutually exclusive."
    ]
    assert messages([rule], "-a", "-b") == []


def test_if_present_then_nested():
    rule = IfPresentThen("a", IfPresentThen("b", RequireOneOf("name")))
    assert messages([rule], "-a", "-b") == [
        "If --all is present then If --block is present then --name is required."
    ]
    assert messages([rule], "-a") == []


def test_range_scenario():
    errors = messages([Range("level", 1, 10)], "--level", "15")
    assert errors == ["--level has value in range [1, 10]."]


@pytest.mark.parametrize("value", ["1", "10", "5", "1.0", "9.99", " 5 ", "1e0"])
def test_range_bounds_are_inclusive(value):
    assert messages([Range("level", 1, 10)], "-l", value) == []


@pytest.mark.parametrize("value", ["0", "10.01", "-3", "inf", "1e3"])
def test_range_out_of_bounds(value):
    assert messages([Range("level", 1, 10)], "-l", value) == [
        "--level has value in range [1, 10]."
    ]


@pytest.mark.parametrize("value", ["ten", "", "nan", "1_000", "5_"])
def test_range_invalid_value(value):
    assert messages([Range("level", 1, 10)], "-l", value) == [
        f"Invalid argument value: -l {value}"
    ]


def test_range_non_integral_bounds():
    assert messages([Range("level", 0.5, 2.5)], "-l", "3") == [
        "--level has value in range [0.5, 2.5]."
    ]


def test_range_absent_option():
    assert messages([Range("level", 1, 10)]) == []


def test_all_rules_run_and_keep_order():
    requirements = [
        RequireOneOf("name"),
        Exclusive("a", "b"),
        Range("level", 1, 10),
    ]
    assert messages(requirements, "-a", "-b", "-l", "99") == [
        "--name is required.",
        "-a, -b are mutually exclusive.",
        "--level has value in range [1, 10].",
    ]


def test_validate_undeclared_option():
    with pytest.raises(ConfigurationError, match="undeclared option '--missing'"):
        validate(DEFINITIONS, [RequireOneOf("--missing")], parse())


def test_check_requirements_nested_undeclared_option():
    with pytest.raises(ConfigurationError, match="undeclared option 'zzz'"):
        check_requirements(DEFINITIONS, [IfPresentThen("a", RequireOneOf("zzz"))])


def test_check_requirements_range_on_flag():
    with pytest.raises(ConfigurationError, match="needs an option that takes a value"):
        check_requirements(DEFINITIONS, [Range("--all", 0, 1)])
