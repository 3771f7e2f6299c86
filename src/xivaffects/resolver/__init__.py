"""
Resolve archive paths to the game entities they affect.
"""

from xivaffects.resolver.heuristics import categorise
from xivaffects.resolver.resolver import (
    Affects,
    fallback,
    format_affects,
    resolve,
    resolve_path,
)

__all__ = [
    "Affects",
    "categorise",
    "fallback",
    "format_affects",
    "resolve",
    "resolve_path",
]
