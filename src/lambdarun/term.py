"""
Lambda calculus term representation using named variables.

A term is one of three immutable variants:

- `Variable`, a reference to a name
- `Abstraction`, a lambda binding one name in its body
- `Application`, a function applied to an argument

Terms never change once built. Every transformation in `lambdarun.core`
returns a new term and shares the subtrees it did not touch.

Every operation looks at a term through `Term.resolve()`. Plain variants return
themselves, while deferred terms (see `lambdarun.registry.LazyScript`) return
the term their source text parses to. This lets a deferred term stand anywhere
a term can.
"""

from __future__ import annotations

import re
from abc import ABC
from dataclasses import dataclass
from functools import cached_property

__all__ = [
    "Term",
    "Variable",
    "Abstraction",
    "Application",
    "IDENTIFIER",
    "free_variables",
    "render",
    "church_numeral",
]

IDENTIFIER = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")


def _check_identifier(name: str, role: str):
    if not isinstance(name, str) or IDENTIFIER.fullmatch(name) is None:
        raise ValueError(f"invalid {role} name {name!r}")


class Term(ABC):
    """
    Base class for lambda calculus terms.
    """

    def __call__(self, arg: Term) -> Term:
        """Apply this term to an argument"""
        return Application(self, arg)

    def resolve(self) -> Term:
        """
        The concrete variant behind this term.

        Only deferred terms override this.
        """
        return self

    @cached_property
    def free_vars(self) -> frozenset[str]:
        """
        Names occurring free in this term.

        Computed once per node; terms are immutable so the cache never goes stale.
        """
        match self.resolve():
            case Variable(name):
                return frozenset((name,))
            case Abstraction(param, body):
                return body.free_vars - {param}
            case Application(function, argument):
                return function.free_vars | argument.free_vars
        raise TypeError(f"not a lambda term: {self!r}")

    def __str__(self) -> str:
        return render(self)


@dataclass(frozen=True)
class Variable(Term):
    """
    A variable reference.

    Whether it is bound or free depends on the enclosing abstractions.

    Attributes:
        name: an identifier (`[A-Za-z_][A-Za-z0-9_]*`)
    """

    name: str

    def __post_init__(self):
        _check_identifier(self.name, "variable")


@dataclass(frozen=True)
class Abstraction(Term):
    """
    Lambda abstraction.

    Binds `param` in `body`.

    Example:
        λx.x      =>  Abstraction("x", Variable("x"))
        λx.λy.x   =>  Abstraction("x", Abstraction("y", Variable("x")))

    Attributes:
        param: the bound name
        body: the body of the abstraction
    """

    param: str
    body: Term

    def __post_init__(self):
        _check_identifier(self.param, "parameter")


@dataclass(frozen=True)
class Application(Term):
    """
    Function application.

    Example:
        (λx.x) y  =>  Application(Abstraction("x", Variable("x")), Variable("y"))

    Attributes:
        function: the term being applied
        argument: the argument it is applied to
    """

    function: Term
    argument: Term


def free_variables(term: Term) -> frozenset[str]:
    return term.free_vars


def render(term: Term) -> str:
    """
    Canonical printed form of a term.

    An abstraction in function position is parenthesized, and so is an
    application or an abstraction in argument position. Nothing else is.
    `Parser` reads this form back to an equal term.
    """
    match term.resolve():
        case Variable(name):
            return name
        case Abstraction(param, body):
            return f"λ{param}.{render(body)}"
        case Application(function, argument):
            function_str = render(function)
            if isinstance(function.resolve(), Abstraction):
                function_str = f"({function_str})"
            argument_str = render(argument)
            if isinstance(argument.resolve(), (Abstraction, Application)):
                argument_str = f"({argument_str})"
            return f"{function_str} {argument_str}"
    raise TypeError(f"not a lambda term: {term!r}")


def church_numeral(n: int) -> Term:
    """
    Church encoding of a natural number: λf.λx.f (f (... (f x))) with `n` applications.
    """
    if n < 0:
        raise ValueError(f"Church numerals are only defined for n >= 0, got {n}")
    body: Term = Variable("x")
    for _ in range(n):
        body = Application(Variable("f"), body)
    return Abstraction("f", Abstraction("x", body))
