"""
Recursive-descent parser for lambda calculus expressions.

Grammar:

    expr        = abstraction | application ;
    abstraction = ("λ" | "\\") identifier "." expr ;
    application = term { term } ;
    term        = "(" expr ")" | abstraction | identifier ;
    identifier  = (letter | "_") { letter | digit | "_" } ;

Application is left-associative (`f x y` is `(f x) y`) and an abstraction
extends as far to the right as possible (`λx.f x` is `λx.(f x)`).

An identifier starting with `_` names a constant: `_PLUS`, `_Y`, `_42`.
It is looked up in the registry given to the parser (`registry.lookup("PLUS")`)
and kept as a plain variable if the registry does not know it.
"""

from __future__ import annotations

from typing import Optional, Protocol

from .term import IDENTIFIER, Abstraction, Application, Term, Variable

__all__ = ["ParseError", "Parser", "ConstantLookup"]

LAMBDAS = ("λ", "\\")


class ParseError(ValueError):
    """
    Invalid input for `Parser`.

    Attributes:
        position: offset in the input where the problem was found
    """

    def __init__(self, message: str, position: int):
        super().__init__(message)
        self.position = position


class ConstantLookup(Protocol):
    def lookup(self, name: str) -> Optional[Term]: ...


class Parser:
    def __init__(self, text: str, registry: Optional[ConstantLookup] = None):
        self.text = text
        self.registry = registry
        self.pos = 0

    def parse(self) -> Term:
        """
        Parse the whole input.

        Raises:
            ParseError: if the input is not a single well-formed expression.
        """
        self.check_parentheses()
        result = self.parse_expr()

        self.skip_whitespace()
        if self.pos < len(self.text):
            raise ParseError(
                f"unexpected characters after expression at position {self.pos}: "
                f"{self.text[self.pos :]!r}",
                self.pos,
            )
        return result

    def check_parentheses(self):
        """
        Report unbalanced parentheses with their exact count, before parsing.
        """
        depth = 0
        for i, char in enumerate(self.text):
            if char == "(":
                depth += 1
            elif char == ")":
                if depth == 0:
                    raise ParseError(f"unexpected ')' at position {i}", i)
                depth -= 1
        if depth > 0:
            raise ParseError(
                f"missing {depth} closing parenthesis(es) at position {len(self.text)}",
                len(self.text),
            )

    def peek(self) -> str:
        if self.pos >= len(self.text):
            return ""
        return self.text[self.pos]

    def skip_whitespace(self):
        while self.pos < len(self.text) and self.text[self.pos].isspace():
            self.pos += 1

    def at_term_start(self) -> bool:
        char = self.peek()
        return char == "(" or char in LAMBDAS or IDENTIFIER.match(char) is not None

    def parse_expr(self) -> Term:
        self.skip_whitespace()
        if self.pos >= len(self.text):
            raise ParseError(f"unexpected end of input at position {self.pos}", self.pos)

        if self.peek() in LAMBDAS:
            return self.parse_abstraction()
        return self.parse_application()

    def parse_abstraction(self) -> Term:
        self.pos += 1  # λ or \
        self.skip_whitespace()

        param = self.parse_identifier()
        if param is None:
            if self.pos >= len(self.text):
                raise ParseError(
                    f"unexpected end of input at position {self.pos}: "
                    "expected parameter name",
                    self.pos,
                )
            raise ParseError(f"expected parameter name at position {self.pos}", self.pos)

        self.skip_whitespace()
        if self.peek() != ".":
            raise ParseError(
                f"expected '.' after parameter at position {self.pos}", self.pos
            )
        self.pos += 1

        return Abstraction(param, self.parse_expr())

    def parse_application(self) -> Term:
        left = self.parse_term()
        while True:
            self.skip_whitespace()
            if not self.at_term_start():
                # end of input, closing paren, or trailing garbage for `parse` to report
                return left
            left = Application(left, self.parse_term())

    def parse_term(self) -> Term:
        self.skip_whitespace()
        if self.pos >= len(self.text):
            raise ParseError(f"unexpected end of input at position {self.pos}", self.pos)

        char = self.peek()
        if char == "(":
            self.pos += 1
            expr = self.parse_expr()
            self.skip_whitespace()
            if self.peek() != ")":
                raise ParseError(f"expected ')' at position {self.pos}", self.pos)
            self.pos += 1
            return expr

        if char in LAMBDAS:
            return self.parse_abstraction()

        name = self.parse_identifier()
        if name is None:
            raise ParseError(
                f"expected variable or '(' at position {self.pos}", self.pos
            )
        return self.resolve_name(name)

    def parse_identifier(self) -> Optional[str]:
        match = IDENTIFIER.match(self.text, self.pos)
        if match is None:
            return None
        self.pos = match.end()
        return match.group()

    def resolve_name(self, name: str) -> Term:
        if name.startswith("_") and self.registry is not None:
            constant = self.registry.lookup(name[1:])
            if constant is not None:
                return constant
        return Variable(name)
