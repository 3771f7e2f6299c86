"""
Affects index: the name pool, per-family lookup maps and their JSON form.
"""

from xivaffects.common import EquipSlot, ItemKind
from xivaffects.index.model import (
    MAX_NAMES,
    AffectsIndex,
    IndexBuildError,
    IndexFormatError,
    NamePool,
    NamePoolOverflow,
    VfxMaps,
)
from xivaffects.index.packing import (
    pack_gear_model,
    pack_weapon_model,
    unpack_gear_model,
    unpack_weapon_model,
)

__all__ = [
    "AffectsIndex",
    "EquipSlot",
    "IndexBuildError",
    "IndexFormatError",
    "ItemKind",
    "MAX_NAMES",
    "NamePool",
    "NamePoolOverflow",
    "VfxMaps",
    "pack_gear_model",
    "pack_weapon_model",
    "unpack_gear_model",
    "unpack_weapon_model",
]
