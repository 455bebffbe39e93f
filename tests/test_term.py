import pytest

from lambdarun.term import (
    Abstraction,
    Application,
    Variable,
    church_numeral,
    free_variables,
    render,
)


def test_call_builds_application():
    f, x, y = Variable("f"), Variable("x"), Variable("y")
    assert f(x)(y) == Application(Application(f, x), y)


def test_terms_are_values(identity):
    assert identity == Abstraction("x", Variable("x"))
    assert hash(identity) == hash(Abstraction("x", Variable("x")))
    assert identity != Abstraction("y", Variable("y"))


@pytest.mark.parametrize("name", ["", "1x", "x-y", "λ", "a b"])
def test_invalid_variable_name(name):
    with pytest.raises(ValueError):
        Variable(name)


def test_invalid_parameter_name():
    with pytest.raises(ValueError):
        Abstraction("2", Variable("x"))


def test_free_variables():
    term = Abstraction("x", Application(Variable("x"), Variable("y")))
    assert free_variables(term) == {"y"}
    assert term.free_vars == {"y"}
    assert Abstraction("x", Abstraction("y", Variable("x"))).free_vars == frozenset()


@pytest.mark.parametrize(
    "term,expected",
    [
        (Variable("x"), "x"),
        (Abstraction("x", Application(Variable("x"), Variable("y"))), "λx.x y"),
        (Application(Abstraction("x", Variable("x")), Variable("y")), "(λx.x) y"),
        (
            Application(Variable("f"), Application(Variable("g"), Variable("x"))),
            "f (g x)",
        ),
        (
            Application(Application(Variable("f"), Variable("x")), Variable("y")),
            "f x y",
        ),
        (
            Application(Variable("f"), Abstraction("x", Variable("x"))),
            "f (λx.x)",
        ),
    ],
)
def test_render(term, expected):
    assert render(term) == expected
    assert str(term) == expected


def test_church_numeral():
    assert church_numeral(0) == Abstraction("f", Abstraction("x", Variable("x")))
    assert str(church_numeral(3)) == "λf.λx.f (f (f x))"


def test_church_numeral_negative():
    with pytest.raises(ValueError):
        church_numeral(-1)
