"""
Standard constants, written in the calculus itself.

Every definition is source text installed in a `Registry` with
`Registry.script`, so definitions may use constants that come later in this
file (`SUB` uses `PRED`, `GCD` uses `MOD`...).

Numerals are Church numerals: `n := λf.λx.f (... (f x))`, with `n`
applications of `f`. `_0`, `_1`, `_42`... can be used anywhere.
"""

from .registry import Registry

__all__ = ["install"]


def install(registry: Registry):
    _combinators(registry)
    _booleans(registry)
    _arithmetic(registry)
    _predicates(registry)
    _pairs_and_lists(registry)
    _parity(registry)
    _recursion(registry)


def _combinators(registry: Registry):
    # SK and BCKW are both complete bases
    registry.script("I", r"\x. x")
    registry.script("K", r"\x.\y. x")
    registry.script("S", r"\x.\y.\z. x z (y z)")
    registry.script("B", r"\x.\y.\z. x (y z)")
    registry.script("C", r"\x.\y.\z. x z y")
    registry.script("W", r"\x.\y. x y y")
    registry.script("U", r"\x. x x")
    registry.alias("OMEGA_LOWER", "U")
    registry.alias("DELTA", "U")

    # no normal form
    registry.script("OMEGA", r"_U _U")

    # Y g = g (Y g)
    registry.script("Y", r"\f. (\x. f (x x)) (\x. f (x x))")


def _booleans(registry: Registry):
    registry.alias("TRUE", "K")
    registry.script("FALSE", r"\x.\y. y")
    registry.alias("T", "TRUE")
    registry.alias("F", "FALSE")

    registry.script("AND", r"\p.\q. p q p")
    registry.script("OR", r"\p.\q. p p q")
    registry.script("NOT", r"\p. p _FALSE _TRUE")

    registry.script("IF", r"\b.\x.\y. b x y")
    registry.alias("IFTHENELSE", "IF")


def _arithmetic(registry: Registry):
    registry.script("ZERO", r"\f.\x. x")
    registry.script("SUCC", r"\n.\f.\x. f (n f x)")
    registry.script("ONE", r"_SUCC _ZERO")
    registry.script("TWO", r"_SUCC _ONE")
    registry.script("THREE", r"_SUCC _TWO")

    registry.script("PLUS", r"\m.\n.\f.\x. m f (n f x)")
    registry.alias("ADD", "PLUS")
    registry.script("MULT", r"\m.\n.\f. m (n f)")
    registry.alias("MUL", "MULT")
    # b^n
    registry.script("POW", r"\b.\n. n b")

    # PHI (a, b) = (b, b + 1), so n applications from (0, 0) give (n - 1, n)
    registry.script("PHI", r"\x. _PAIR (_SECOND x) (_SUCC (_SECOND x))")
    registry.script("PRED", r"\n. _FIRST (n _PHI (_PAIR _0 _0))")
    registry.alias("DEC", "PRED")
    # truncated: m - n = 0 when n > m
    registry.script("SUB", r"\m.\n. n _PRED m")


def _predicates(registry: Registry):
    registry.script("ISZERO", r"\n. n (\x. _FALSE) _TRUE")
    registry.script("LEQ", r"\m.\n. _ISZERO (_SUB m n)")
    registry.script("LT", r"\m.\n. _NOT (_LEQ n m)")
    registry.script("EQ", r"\m.\n. _AND (_LEQ m n) (_LEQ n m)")
    registry.script("MAX", r"\a.\b. _IF (_LEQ a b) b a")
    registry.script("MIN", r"\a.\b. _IF (_LEQ a b) a b")


def _pairs_and_lists(registry: Registry):
    registry.script("PAIR", r"\x.\y.\f. f x y")
    registry.script("FIRST", r"\p. p _TRUE")
    registry.script("SECOND", r"\p. p _FALSE")

    registry.script("NIL", r"\x. _TRUE")
    registry.script("NULL", r"\p. p (\x.\y. _FALSE)")


def _parity(registry: Registry):
    # (half, odd) -> (half + odd, not odd)
    registry.script(
        "STEP2",
        r"\p. _PAIR (_IF (_SECOND p) (_SUCC (_FIRST p)) (_FIRST p)) (_NOT (_SECOND p))",
    )
    registry.script("INIT2", r"_PAIR _ZERO _FALSE")

    registry.script("DIV2", r"\n. _FIRST (n _STEP2 _INIT2)")
    registry.script("ISODD", r"\n. _SECOND (n _STEP2 _INIT2)")
    registry.script("ISEVEN", r"\n. _NOT (_ISODD n)")


def _recursion(registry: Registry):
    # m mod 0 = 0
    registry.script(
        "MOD",
        r"""
        _Y (\rec.\m.\n.
            (_ISZERO n) _ZERO
            ((_LT m n) m (rec (_SUB m n) n)))
        """,
    )
    registry.script(
        "GCD",
        r"""
        _Y (\rec.\a.\b.
            _IF (_ISZERO b)
                a
                (rec b (_MOD a b)))
        """,
    )

    # a^e mod m, by squaring
    registry.script(
        "POWMOD",
        r"""
        _Y (\rec.\a.\e.\m.
            _IF (_ISZERO e)
                (_IF (_ISZERO m) _ONE (_MOD _ONE m))
                (_IF (_ISEVEN e)
                    (rec (_MOD (_MUL a a) m) (_DIV2 e) m)
                    (_MOD (_MUL a (rec (_MOD (_MUL a a) m) (_DIV2 e) m)) m)))
        """,
    )
    # same, tail-recursive with the accumulator r: POWMOD_PRIME a e m 1 = a^e mod m
    registry.script(
        "POWMOD_PRIME",
        r"""
        _Y (\rec.\a.\e.\m.\r.
            _IF (_ISZERO e)
                (_IF (_ISZERO m) r (_MOD r m))
                (_IF (_ISEVEN e)
                    (rec (_MOD (_MUL a a) m) (_DIV2 e) m r)
                    (rec (_MOD (_MUL a a) m) (_DIV2 e) m (_MOD (_MUL r a) m))))
        """,
    )

    registry.script(
        "FACTORIAL",
        r"""
        _Y (\f.\n.
            (_ISZERO n) _1 (_MULT n (f (_PRED n))))
        """,
    )
    # without Y. The outer x keeps FAC 0 and FAC 1 in numeral shape, not λf.f
    registry.script(
        "FAC", r"\n.\f.\x. n (\f.\n. n (f (\f.\x. n f (f x)))) (\y. f) (\y. y) x"
    )
    # (a, b) -> (b, a + b), n times from (0, 1)
    registry.script(
        "FIB",
        r"\n. _FIRST (n (\p. _PAIR (_SECOND p) (_PLUS (_FIRST p) (_SECOND p))) (_PAIR _0 _1))",
    )
