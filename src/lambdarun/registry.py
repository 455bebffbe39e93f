"""
Named constants and deferred terms.

A `Registry` maps constant names to terms. Most constants are stored as a
`LazyScript`: the source text of the definition, parsed the first time the
term is needed. Names inside that text are looked up when it is parsed, not
when it is registered, so definitions can be written in any order and can
refer to each other.

```
registry = Registry()
registry.script("MOD", r"_Y (\\rec.\\m.\\n. ...)")   # _Y is not defined yet
registry.script("Y", r"\\f. (\\x. f (x x)) (\\x. f (x x))")
registry.freeze()
```
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterator, Mapping
from typing import Optional

from .parser import Parser
from .term import Term, church_numeral

__all__ = ["LazyScript", "Registry"]

logger = logging.getLogger(__name__)


class LazyScript(Term):
    """
    A term given by source text, parsed on first use.

    Behaves exactly like the term it parses to: every operation goes through
    `resolve()`, and it compares and hashes equal to that term.

    Attributes:
        text: the source of the term
        registry: where `_NAME` constants of the text are looked up
    """

    def __init__(self, text: str, registry: Optional[Registry] = None):
        self.text = text
        self.registry = registry
        self._term: Optional[Term] = None
        self._lock = threading.Lock()

    @property
    def term(self) -> Term:
        """
        The parsed term, computed once.
        """
        if self._term is None:
            with self._lock:
                if self._term is None:
                    logger.debug("parsing deferred term %r", self.text.strip()[:40])
                    self._term = Parser(self.text, self.registry).parse()
        return self._term

    def resolve(self) -> Term:
        return self.term.resolve()

    def __eq__(self, other):
        if isinstance(other, Term):
            return self.resolve() == other.resolve()
        return NotImplemented

    def __hash__(self):
        return hash(self.resolve())

    def __repr__(self):
        return f"LazyScript({self.text.strip()!r})"


class Registry(Mapping[str, Term]):
    """
    Table of named constants, read-only once frozen.
    """

    def __init__(self):
        self._terms: dict[str, Term] = {}
        self.frozen = False

    def define(self, name: str, term: Term) -> Term:
        if self.frozen:
            raise RuntimeError(f"cannot define {name!r}: the registry is frozen")
        if name in self._terms:
            raise RuntimeError(f"constant {name!r} is already defined")
        self._terms[name] = term
        return term

    def script(self, name: str, text: str) -> LazyScript:
        """
        Define `name` by the source `text`, resolved against this registry.
        """
        script = LazyScript(text, self)
        self.define(name, script)
        return script

    def alias(self, name: str, target: str) -> LazyScript:
        """
        Define `name` as another name for the constant `target`.

        `target` does not need to be defined yet.
        """
        return self.script(name, f"_{target}")

    def freeze(self) -> Registry:
        self.frozen = True
        return self

    def lookup(self, name: str) -> Optional[Term]:
        """
        The term for constant `name`.

        Names made only of digits are Church numerals and are not stored.
        Returns None for unknown names.
        """
        if name.isdigit() and name.isascii():
            return church_numeral(int(name))
        return self._terms.get(name)

    def __getitem__(self, name: str) -> Term:
        return self._terms[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._terms)

    def __len__(self) -> int:
        return len(self._terms)
