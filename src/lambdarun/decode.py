"""
Read Church-encoded results back as Python values.

`to_int` and `to_bool` work by behaviour: they apply the term to marker
variables and look at what comes out. They never fail and return 0 or False
for anything that does not behave like a numeral or a boolean.

`try_to_int` and `try_to_bool` only look at the shape of a term already in
normal form, and return None when it does not match.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .core import reduce
from .term import Abstraction, Application, Term, Variable

__all__ = [
    "DECODE_STEP_LIMIT",
    "Marker",
    "to_int",
    "to_bool",
    "try_to_int",
    "try_to_bool",
]

DECODE_STEP_LIMIT = 10000


@dataclass(frozen=True)
class Marker(Variable):
    """
    A free variable that no parsed term can contain.

    Its name is not a valid identifier, so it can not collide with a user's variable.
    """

    def __post_init__(self):
        pass


SUCC_MARKER = Marker("<succ>")
ZERO_MARKER = Marker("<zero>")
TRUE_MARKER = Marker("<true>")
FALSE_MARKER = Marker("<false>")


def _count_successors(term: Term) -> int:
    count = 0
    while True:
        match term.resolve():
            case Application(function, argument):
                if function.resolve() == SUCC_MARKER:
                    count += 1
                term = argument
            case Abstraction(_, body):
                term = body
            case _:
                return count


def to_int(term: Term) -> int:
    """
    Value of a Church numeral: `n` when `term SUCC ZERO` reduces to `SUCC (... (SUCC ZERO))`.
    """
    term, _ = reduce(term, DECODE_STEP_LIMIT)
    result, _ = reduce(term(SUCC_MARKER)(ZERO_MARKER), DECODE_STEP_LIMIT)
    return _count_successors(result)


def to_bool(term: Term) -> bool:
    """
    Value of a Church boolean: True when `term TRUE FALSE` reduces to `TRUE`.
    """
    result, _ = reduce(term(TRUE_MARKER)(FALSE_MARKER), DECODE_STEP_LIMIT)
    return result.resolve() == TRUE_MARKER


def _abstraction_pair(term: Term) -> Optional[tuple[str, str, Term]]:
    outer = term.resolve()
    if not isinstance(outer, Abstraction):
        return None
    inner = outer.body.resolve()
    if not isinstance(inner, Abstraction):
        return None
    return outer.param, inner.param, inner.body


def try_to_int(term: Term) -> Optional[int]:
    """
    `n` if `term` is exactly `λf.λx.f (f (... (f x)))`, else None.
    """
    shape = _abstraction_pair(term)
    if shape is None:
        return None
    f, x, body = shape
    if f == x:
        # λx.λx.x: the inner binder hides f
        return 0 if body.resolve() == Variable(x) else None

    count = 0
    while True:
        match body.resolve():
            case Application(function, argument) if function.resolve() == Variable(f):
                count += 1
                body = argument
            case Variable(name) if name == x:
                return count
            case _:
                return None


def try_to_bool(term: Term) -> Optional[bool]:
    """
    True for `λx.λy.x`, False for `λx.λy.y`, else None.
    """
    shape = _abstraction_pair(term)
    if shape is None:
        return None
    x, y, body = shape
    match body.resolve():
        case Variable(name) if name == y:
            return False
        case Variable(name) if name == x:
            return True
    return None
