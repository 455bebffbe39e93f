r"""
Command line entry point: parse an expression, reduce it and print the result.

```
$ lambdarun "_PLUS _2 _3"
5
$ lambdarun --type lambda "\x. (\y. y) x"
λx.x
```
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Optional, Sequence

from . import parse
from .core import DEFAULT_STEP_LIMIT, eta_reduce, reduce, reduction_chain
from .decode import try_to_bool, try_to_int
from .diagram import to_diagram
from .parser import ParseError
from .term import Term

__all__ = ["main", "build_parser"]

logger = logging.getLogger(__name__)

DEFAULT_STEPS = 10000


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="lambdarun",
        description="Reduce a lambda calculus expression to normal form.",
    )
    parser.add_argument("expression", help=r"expression to reduce, e.g. '(\x. x) y'")
    parser.add_argument(
        "--steps",
        type=int,
        default=DEFAULT_STEPS,
        help="maximum number of beta-reductions (default: %(default)s)",
    )
    parser.add_argument(
        "--type",
        choices=["auto", "int", "bool", "lambda"],
        default="auto",
        help="how to print the result (default: %(default)s)",
    )
    parser.add_argument("--eta", action="store_true", help="eta-reduce the result too")
    parser.add_argument(
        "--trace", action="store_true", help="print every step of the reduction"
    )
    parser.add_argument(
        "--diagram",
        choices=["unicode", "svg"],
        help="also print a diagram of the result",
    )
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument("-v", "--verbose", action="store_true")
    verbosity.add_argument("-q", "--quiet", action="store_true")
    return parser


def _run(term: Term, limit: int, trace: bool) -> tuple[Term, int]:
    if not trace:
        return reduce(term, limit)
    steps = -1
    for steps, term in enumerate(reduction_chain(term, limit)):
        print(f"{steps}: {term}")
    return term, steps


def _format(term: Term, kind: str) -> tuple[str, bool]:
    """The printed result, and whether it has the requested type."""
    if kind == "lambda":
        return str(term), True
    if kind in ("int", "auto"):
        value = try_to_int(term)
        if value is not None:
            return str(value), True
        if kind == "int":
            return str(term), False
    value = try_to_bool(term)
    if value is not None:
        return str(value).lower(), True
    return str(term), kind == "auto"


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    level = logging.INFO
    if args.verbose:
        level = logging.DEBUG
    elif args.quiet:
        level = logging.WARNING
    logging.basicConfig(level=level, format="%(message)s")

    try:
        term = parse(args.expression)
    except ParseError as e:
        print(f"Parse error: {e}", file=sys.stderr)
        return 1

    term, steps = _run(term, args.steps, args.trace)
    limit = args.steps if args.steps > 0 else DEFAULT_STEP_LIMIT
    if steps >= limit:
        logger.warning("Stopped after %d steps, the result may not be in normal form", steps)
    else:
        logger.info("Reduced in %d steps", steps)

    if args.eta:
        term, eta_steps = eta_reduce(term, args.steps)
        logger.debug("%d eta-reductions", eta_steps)

    text, matched = _format(term, args.type)
    if not matched:
        print(f"Result is not a Church {args.type}", file=sys.stderr)
    print(text)

    if args.diagram == "unicode":
        print(to_diagram(term).to_unicode())
    elif args.diagram == "svg":
        print(to_diagram(term).to_svg())

    return 0 if matched else 1


if __name__ == "__main__":
    sys.exit(main())
