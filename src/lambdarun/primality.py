"""
Miller-Rabin primality test, in Church encoding.

For an odd n > 3, write n - 1 = 2^s * d with d odd. A base a passes when
a^d = 1 (mod n), or a^(d * 2^j) = n - 1 (mod n) for some j < s.
`IS_PRIME` tries the bases 2 .. min(12, n - 2), and first rejects any base
sharing a factor with n.

All of these build on `lambdarun.library` through the registry: they only
work in a registry where that library is installed too.
"""

from .registry import Registry

__all__ = ["install"]


def install(registry: Registry):
    # LET x f = f x, to name an intermediate result
    registry.script("LET", r"\x.\f. f x")
    registry.alias("OR_EXPR", "OR")

    # TWODEC s d = (s + s', d') where d = 2^s' * d' and d' is odd
    registry.script(
        "TWODEC",
        r"""
        _Y (\rec.\s.\d.
            _IF (_ISEVEN d)
                (rec (_SUCC s) (_DIV2 d))
                (_PAIR s d))
        """,
    )
    # n - 1 = 2^s * d, as the pair (s, d)
    registry.script("DECOMPOSE", r"\n. _TWODEC _ZERO (_DEC n)")

    registry.script("IS_LESS2", r"\n. _LEQ n _2")
    registry.script("IS_SMALL", r"\n. _LEQ n _3")

    # single base check. The base is mapped into [2, n - 1] first.
    registry.script(
        "MR_PASS",
        r"""
        \n.\a.
            _LET (_DECOMPOSE n) (\sd.
            _LET (_FIRST sd) (\s.
            _LET (_SECOND sd) (\d.
            _LET (_IF (_IS_SMALL n) _TWO (_ADD _2 (_MOD a (_SUB n _2)))) (\abase.
            _LET (_POWMOD_PRIME abase d n _ONE) (\x0.
                _IF (_OR (_EQ x0 _ONE) (_EQ x0 (_DEC n)))
                    _TRUE
                    (_LET
                        (_Y (\loop.\j.\x.
                            _IF (_ISZERO j)
                                _FALSE
                                (_LET (_MOD (_MUL x x) n) (\x2.
                                    _IF (_EQ x2 (_DEC n)) _TRUE (loop (_DEC j) x2)))))
                        (\run. run (_DEC s) x0)))))))
        """,
    )

    # every base from a to limit
    registry.script(
        "MR_SCAN",
        r"""
        _Y (\rec.\n.\a.\limit.
            _IF (_LT limit a)
                _TRUE
                (_IF (_NOT (_EQ (_GCD n a) _ONE))
                    _FALSE
                    (_IF (_MR_PASS n a)
                        (rec n (_SUCC a) limit)
                        _FALSE)))
        """,
    )

    registry.script(
        "IS_PRIME",
        r"""
        \n.
            _IF (_IS_SMALL n)
                (_OR (_EQ n _TWO) (_EQ n _3))
                (_IF (_ISEVEN n)
                    _FALSE
                    (_MR_SCAN n _TWO (_MIN _12 (_DEC (_DEC n)))))
        """,
    )
