import pytest

from lambdarun import CONSTANTS
from lambdarun.core import reduce
from lambdarun.parser import ParseError
from lambdarun.registry import LazyScript, Registry
from lambdarun.term import Abstraction, Variable, church_numeral


@pytest.fixture
def registry():
    return Registry()


def test_forward_reference(registry):
    registry.script("TWICE_I", "_I _I")
    registry.script("I", r"\x. x")
    result, steps = reduce(registry["TWICE_I"])
    assert result == Abstraction("x", Variable("x"))
    assert steps == 1


def test_define_and_lookup(registry):
    term = Abstraction("x", Variable("x"))
    registry.define("ID", term)
    assert registry.lookup("ID") is term
    assert registry.lookup("MISSING") is None
    assert "ID" in registry
    assert len(registry) == 1
    assert list(registry) == ["ID"]


def test_lookup_numerals(registry):
    assert registry.lookup("4") == church_numeral(4)
    assert "4" not in registry


def test_duplicate_name(registry):
    registry.script("A", "x")
    with pytest.raises(RuntimeError):
        registry.script("A", "y")


def test_frozen_registry(registry):
    assert registry.freeze() is registry
    with pytest.raises(RuntimeError):
        registry.define("A", Variable("x"))


def test_constants_are_frozen():
    assert CONSTANTS.frozen
    with pytest.raises(RuntimeError):
        CONSTANTS.script("NEW", "x")


def test_alias(registry):
    registry.script("K", r"\x.\y. x")
    registry.alias("TRUE", "K")
    assert registry["TRUE"] == registry["K"]
    assert registry["TRUE"].resolve() == Abstraction("x", Abstraction("y", Variable("x")))


def test_alias_chain():
    assert CONSTANTS["T"] == CONSTANTS["K"]


def test_script_is_parsed_once(registry):
    script = registry.script("I", r"\x. x")
    assert script.term is script.term
    assert script.resolve() is script.term


def test_script_errors_surface_on_use(registry):
    script = registry.script("BAD", r"(\x. x")
    with pytest.raises(ParseError):
        script.resolve()


def test_lazy_script_equality():
    script = LazyScript("λx.x")
    assert script == Abstraction("x", Variable("x"))
    assert Abstraction("x", Variable("x")) == script
    assert hash(script) == hash(Abstraction("x", Variable("x")))
    assert str(script) == "λx.x"


def test_lazy_script_free_vars():
    assert LazyScript(r"\x. x y").free_vars == {"y"}
