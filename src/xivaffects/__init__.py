"""
xivaffects - archive path to game entity resolver

Parses game archive paths into typed descriptors and looks them up in an
index, built offline from the game's sheets and IMC files, of the gear,
NPCs, emotes, actions and maps that use each model and variant.
"""

__version__ = "0.1.0"
__author__ = "xivaffects contributors"

from xivaffects.common import EquipSlot, ItemKind
from xivaffects.index import AffectsIndex, NamePool
from xivaffects.parser import GrammarError, MismatchedPathIds, PathParseError, parse_path
from xivaffects.resolver import resolve, resolve_path

__all__ = [
    "AffectsIndex",
    "EquipSlot",
    "GrammarError",
    "ItemKind",
    "MismatchedPathIds",
    "NamePool",
    "PathParseError",
    "parse_path",
    "resolve",
    "resolve_path",
]
