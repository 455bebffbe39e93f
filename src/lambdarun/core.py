"""Core engine of lambda-calculus.

This module rewrites terms from `lambdarun.term`. Some vocabulary used below:

# 1. Free and bound names

A `Variable` is *bound* if an enclosing `Abstraction` has the same name as
parameter, otherwise it is *free*. The free names of a term are given by
`Term.free_vars`.

# 2. Substitution

`t[x := s]` replaces every free occurrence of `x` in `t` by `s`.
An abstraction whose parameter is `x` shadows the substitution.
An abstraction whose parameter is free in `s` would *capture* it, so the
parameter is renamed first (alpha-conversion) to a fresh name: one that is
not free in `s` and does not occur anywhere in the body, bound or free.

# 3. Redex

A "Redex" is an `Application` whose function is an `Abstraction`:
`(λx.body) arg`. Its beta-reduction is `body[x := arg]`.

# 4. Reduction order

`beta_step` reduces the leftmost-outermost redex (normal order):
the application itself if it is a redex, else its function, else its argument.
Abstraction bodies are reduced too. Normal order finds a normal form whenever
one exists, but nothing guarantees there is one: `reduce` takes a step limit.

# 5. Eta-reduction

`λx.(f x)` is rewritten to `f` when `x` is not free in `f`.
"""

from __future__ import annotations

import logging
from typing import Iterable, Iterator

from .term import Abstraction, Application, Term, Variable

__all__ = [
    "DEFAULT_STEP_LIMIT",
    "fresh_variable",
    "alpha_convert",
    "substitute",
    "beta_step",
    "eta_step",
    "reduce",
    "eta_reduce",
    "reduction_chain",
]

logger = logging.getLogger(__name__)

DEFAULT_STEP_LIMIT = 1000


def fresh_variable(base: str, avoid: Iterable[str]) -> str:
    """
    A name derived from `base` that is not in `avoid`.

    Tries `base`, then `base0`, `base1`, `base2`, ... in that order.
    """
    avoid = frozenset(avoid)
    if base not in avoid:
        return base
    i = 0
    while f"{base}{i}" in avoid:
        i += 1
    return f"{base}{i}"


def alpha_convert(term: Term, old_name: str, new_name: str) -> Term:
    """
    Rename every occurrence of `old_name`, references and binders alike.

    No capture check is done: the caller must pick `new_name` fresh.
    """
    match term.resolve():
        case Variable(name):
            return Variable(new_name) if name == old_name else term
        case Abstraction(param, body):
            return Abstraction(
                new_name if param == old_name else param,
                alpha_convert(body, old_name, new_name),
            )
        case Application(function, argument):
            return Application(
                alpha_convert(function, old_name, new_name),
                alpha_convert(argument, old_name, new_name),
            )
    raise TypeError(f"not a lambda term: {term!r}")


def _names(term: Term) -> frozenset[str]:
    """Every name in `term`, free or bound, binders included"""
    match term.resolve():
        case Variable(name):
            return frozenset((name,))
        case Abstraction(param, body):
            return _names(body) | {param}
        case Application(function, argument):
            return _names(function) | _names(argument)
    raise TypeError(f"not a lambda term: {term!r}")


def substitute(term: Term, name: str, replacement: Term) -> Term:
    """
    Capture-avoiding substitution `term[name := replacement]` (see 2.)
    """
    match term.resolve():
        case Variable(var_name):
            return replacement if var_name == name else term
        case Abstraction(param, body):
            if param == name:
                return term
            if param in replacement.free_vars:
                fresh = fresh_variable(param, replacement.free_vars | _names(body))
                body = alpha_convert(body, param, fresh)
                param = fresh
            return Abstraction(param, substitute(body, name, replacement))
        case Application(function, argument):
            return Application(
                substitute(function, name, replacement),
                substitute(argument, name, replacement),
            )
    raise TypeError(f"not a lambda term: {term!r}")


def beta_step(term: Term) -> tuple[Term, bool]:
    """
    Perform one beta-reduction, on the leftmost-outermost redex (see 4.)

    Returns the new term and whether a reduction happened.
    If nothing was reduced, the term is returned as is.
    """
    match term.resolve():
        case Application(function, argument):
            # If I'm a redex, reduce me
            if isinstance(lamb := function.resolve(), Abstraction):
                return substitute(lamb.body, lamb.param, argument), True

            # Otherwise try the function
            new_function, changed = beta_step(function)
            if changed:
                return Application(new_function, argument), True

            # Then try the argument
            new_argument, changed = beta_step(argument)
            if changed:
                return Application(function, new_argument), True

            return term, False
        case Abstraction(param, body):
            new_body, changed = beta_step(body)
            if changed:
                return Abstraction(param, new_body), True
            return term, False
    return term, False


def eta_step(term: Term) -> tuple[Term, bool]:
    """
    Perform one eta-reduction (see 5.), searching in the same order as `beta_step`.
    """
    match term.resolve():
        case Abstraction(param, body):
            match body.resolve():
                case Application(function, argument):
                    if (
                        argument.resolve() == Variable(param)
                        and param not in function.free_vars
                    ):
                        return function, True

            new_body, changed = eta_step(body)
            if changed:
                return Abstraction(param, new_body), True
            return term, False
        case Application(function, argument):
            new_function, changed = eta_step(function)
            if changed:
                return Application(new_function, argument), True

            new_argument, changed = eta_step(argument)
            if changed:
                return Application(function, new_argument), True

            return term, False
    return term, False


def _drive(step, term: Term, limit: int) -> tuple[Term, int]:
    if limit <= 0:
        limit = DEFAULT_STEP_LIMIT
    steps = 0
    while steps < limit:
        term, changed = step(term)
        if not changed:
            logger.debug("%s: normal form after %d steps", step.__name__, steps)
            break
        steps += 1
    else:
        logger.debug("%s: stopped at the limit of %d steps", step.__name__, limit)
    return term, steps


def reduce(term: Term, limit: int = 0) -> tuple[Term, int]:
    """
    Beta-reduce `term` until it is in normal form or `limit` steps were taken.

    A `limit` of 0 or less means `DEFAULT_STEP_LIMIT`.
    Returns the last term and the number of steps taken.
    Reaching the limit is not an error: when the number of steps equals the
    limit, the term may still be reducible.
    """
    return _drive(beta_step, term, limit)


def eta_reduce(term: Term, limit: int = 0) -> tuple[Term, int]:
    """
    Same as `reduce`, with eta-reductions.
    """
    return _drive(eta_step, term, limit)


def reduction_chain(term: Term, limit: int = 0) -> Iterator[Term]:
    """
    Yield `term` and then every term of its normal-order reduction.

    At most `limit` reductions are yielded (`DEFAULT_STEP_LIMIT` if `limit <= 0`).
    """
    if limit <= 0:
        limit = DEFAULT_STEP_LIMIT
    yield term
    for _ in range(limit):
        term, changed = beta_step(term)
        if not changed:
            break
        yield term
