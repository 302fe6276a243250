import pytest

from cmdtree.parser import ArgKind, coerce_bool, coerce_value


@pytest.mark.parametrize(
    "value, kind, expected",
    [
        ("42", ArgKind.INTEGER, 42),
        ("3.14", ArgKind.DOUBLE, 3.14),
        ("-7", "int", -7),
        ("1e3", float, 1000.0),
        ("hello", ArgKind.STRING, "hello"),
        ("", ArgKind.STRING, ""),
        ("yes", ArgKind.BOOLEAN, True),
        ("Off", "bool", False),
    ],
)
def test_coerce_value_basic(value, kind, expected):
    assert coerce_value(value, kind) == expected


@pytest.mark.parametrize(
    "value, kind",
    [
        ("abc", ArgKind.INTEGER),
        ("4.5", ArgKind.INTEGER),
        ("ten", ArgKind.DOUBLE),
        ("maybe", ArgKind.BOOLEAN),
    ],
)
def test_coerce_value_failure(value, kind):
    with pytest.raises(ValueError):
        coerce_value(value, kind)


def test_coerce_bool_passthrough():
    assert coerce_bool(True) is True
    assert coerce_bool(" TRUE ") is True
    assert coerce_bool("n") is False
