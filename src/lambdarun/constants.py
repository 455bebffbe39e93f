"""
The process-wide constant table.

`CONSTANTS` is built once, when this module is first imported, and frozen:
nothing can be added to it afterwards.
"""

from . import library, primality
from .registry import Registry

__all__ = ["CONSTANTS", "build_constants"]


def build_constants() -> Registry:
    """
    A new frozen registry with the standard library and the primality test.
    """
    registry = Registry()
    library.install(registry)
    primality.install(registry)
    return registry.freeze()


CONSTANTS = build_constants()
