"""
Untyped lambda calculus: terms, capture-avoiding substitution, normal-order
reduction, and a parser with a library of Church-encoded constants.

```
>>> from lambdarun import parse, reduce, to_int
>>> result, steps = reduce(parse("_PLUS _2 _3"), 1000)
>>> to_int(result)
5
```
"""

from .constants import CONSTANTS, build_constants
from .core import (
    DEFAULT_STEP_LIMIT,
    alpha_convert,
    beta_step,
    eta_reduce,
    eta_step,
    fresh_variable,
    reduce,
    reduction_chain,
    substitute,
)
from .decode import to_bool, to_int, try_to_bool, try_to_int
from .parser import ParseError, Parser
from .registry import LazyScript, Registry
from .term import (
    Abstraction,
    Application,
    Term,
    Variable,
    church_numeral,
    free_variables,
    render,
)

__all__ = [
    "Term",
    "Variable",
    "Abstraction",
    "Application",
    "free_variables",
    "render",
    "church_numeral",
    "fresh_variable",
    "alpha_convert",
    "substitute",
    "beta_step",
    "eta_step",
    "reduce",
    "eta_reduce",
    "reduction_chain",
    "DEFAULT_STEP_LIMIT",
    "Parser",
    "ParseError",
    "LazyScript",
    "Registry",
    "CONSTANTS",
    "build_constants",
    "parse",
    "to_int",
    "to_bool",
    "try_to_int",
    "try_to_bool",
]


def parse(text: str) -> Term:
    """
    Parse `text`, resolving `_NAME` constants against `CONSTANTS`.

    Raises:
        ParseError: if `text` is not a well-formed expression.
    """
    return Parser(text, CONSTANTS).parse()
