import pytest

from lambdarun import CONSTANTS, parse
from lambdarun.decode import Marker, to_bool, to_int, try_to_bool, try_to_int
from lambdarun.term import Variable, church_numeral


@pytest.mark.parametrize("n", [0, 1, 2, 7])
def test_to_int_numerals(n):
    assert to_int(church_numeral(n)) == n


def test_to_int_reduces_first():
    assert to_int(parse("_SUCC (_SUCC _ZERO)")) == 2


def test_to_int_of_constant():
    assert to_int(CONSTANTS["THREE"]) == 3


@pytest.mark.parametrize("text", ["x", r"\x.\y. y y", "_TRUE"])
def test_to_int_of_non_numeral(text):
    assert to_int(parse(text)) == 0


def test_to_int_of_identity():
    # λx.x is the eta-reduced form of 1
    assert to_int(parse(r"\x. x")) == 1


def test_to_bool():
    assert to_bool(parse("_TRUE")) is True
    assert to_bool(parse("_FALSE")) is False
    assert to_bool(parse("_NOT _FALSE")) is True


@pytest.mark.parametrize("text", ["x", r"\x. x", "_3"])
def test_to_bool_of_non_boolean(text):
    assert to_bool(parse(text)) is False


def test_markers_are_not_variables():
    # no parsed term can name a marker
    with pytest.raises(ValueError):
        Variable("<succ>")
    assert Marker("<succ>") != Variable("succ")


@pytest.mark.parametrize(
    "text,expected",
    [
        (r"\f.\x. x", 0),
        (r"\f.\x. f (f x)", 2),
        (r"\s.\z. s z", 1),
        (r"\x.\x. x", 0),
        (r"\f.\x. f", None),
        (r"\f.\x. f f x", None),
        (r"\f.\x. f (x f)", None),
        (r"\x. x", None),
        ("x", None),
        (r"\x.\x. f x", None),
    ],
)
def test_try_to_int(text, expected):
    assert try_to_int(parse(text)) == expected


@pytest.mark.parametrize(
    "text,expected",
    [
        (r"\x.\y. x", True),
        (r"\a.\b. b", False),
        (r"\x.\x. x", False),
        (r"\x.\y. z", None),
        (r"\x. x", None),
        (r"\x.\y. x y", None),
    ],
)
def test_try_to_bool(text, expected):
    assert try_to_bool(parse(text)) is expected


def test_try_to_int_sees_through_constants():
    assert try_to_int(CONSTANTS["ZERO"]) == 0
    assert try_to_bool(CONSTANTS["TRUE"]) is True
