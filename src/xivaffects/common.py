"""
Shared Enumerations

Types used by both the path parser and the affects index: the ten
equipment slots and the kinds of entity a name can be attached to.
"""

from enum import Enum, IntEnum
from typing import Optional


class EquipSlot(IntEnum):
    """Equipment slot. The integer value is the serialized form."""
    HEAD = 0
    HANDS = 1
    LEGS = 2
    FEET = 3
    BODY = 4
    EARS = 5
    NECK = 6
    RFINGER = 7
    LFINGER = 8
    WRISTS = 9

    @property
    def code(self) -> str:
        """Three letter code used in file names (`met`, `glv`, ...)."""
        return _SLOT_CODES[self]

    @property
    def display_name(self) -> str:
        return _SLOT_NAMES[self]

    @property
    def imc_part_index(self) -> int:
        """Index of the part describing this slot inside an IMC file."""
        return _SLOT_PARTS[self]

    @property
    def is_accessory(self) -> bool:
        return self in (
            EquipSlot.EARS,
            EquipSlot.NECK,
            EquipSlot.WRISTS,
            EquipSlot.RFINGER,
            EquipSlot.LFINGER,
        )

    @classmethod
    def from_code(cls, code: str) -> Optional["EquipSlot"]:
        return _SLOTS_BY_CODE.get(code)

    @classmethod
    def from_part_index(cls, index: int, accessory: bool) -> Optional["EquipSlot"]:
        """Inverse of imc_part_index within the gear or accessory family."""
        for slot, part_index in _SLOT_PARTS.items():
            if part_index == index and slot.is_accessory == accessory:
                return slot
        return None


_SLOT_CODES = {
    EquipSlot.HEAD: "met",
    EquipSlot.HANDS: "glv",
    EquipSlot.LEGS: "dwn",
    EquipSlot.FEET: "sho",
    EquipSlot.BODY: "top",
    EquipSlot.EARS: "ear",
    EquipSlot.NECK: "nek",
    EquipSlot.RFINGER: "rir",
    EquipSlot.LFINGER: "ril",
    EquipSlot.WRISTS: "wrs",
}

_SLOTS_BY_CODE = {code: slot for slot, code in _SLOT_CODES.items()}

_SLOT_NAMES = {
    EquipSlot.HEAD: "Helmet",
    EquipSlot.HANDS: "Gloves",
    EquipSlot.LEGS: "Pants",
    EquipSlot.FEET: "Shoes",
    EquipSlot.BODY: "Chestpiece",
    EquipSlot.EARS: "Earrings",
    EquipSlot.NECK: "Necklace",
    EquipSlot.RFINGER: "Ring",
    EquipSlot.LFINGER: "Ring",
    EquipSlot.WRISTS: "Bracelet",
}

# Gear and accessories both use a five part IMC layout
_SLOT_PARTS = {
    EquipSlot.HEAD: 0,
    EquipSlot.BODY: 1,
    EquipSlot.HANDS: 2,
    EquipSlot.LEGS: 3,
    EquipSlot.FEET: 4,
    EquipSlot.EARS: 0,
    EquipSlot.NECK: 1,
    EquipSlot.WRISTS: 2,
    EquipSlot.RFINGER: 3,
    EquipSlot.LFINGER: 4,
}


class ItemKind(IntEnum):
    """Why a name is attached to an asset. The integer value is serialized."""
    GEAR = 0
    WEAPON = 1
    EMOTE = 2
    BATTLE_NPC = 3
    EVENT_NPC = 4
    MINION = 5
    MOUNT = 6
    FASHION_ACCESSORY = 7
    CUSTOMISATION = 8
    ACTION = 9
    MAP = 10
    ICON = 11
    FONT = 12
    MISCELLANEOUS = 13
    ANIMATION = 14

    @property
    def display_name(self) -> str:
        return _KIND_NAMES.get(self, self.name.title())


_KIND_NAMES = {
    ItemKind.BATTLE_NPC: "Battle NPC",
    ItemKind.EVENT_NPC: "Event NPC",
    ItemKind.FASHION_ACCESSORY: "Fashion Accessory",
}


class ModelCharaKind(Enum):
    """Kind column of the ModelChara sheet."""
    DEMIHUMAN = "demihuman"
    MONSTER = "monster"
    OTHER = "other"

    @classmethod
    def from_raw(cls, value: int) -> "ModelCharaKind":
        if value == 2:
            return cls.DEMIHUMAN
        if value == 3:
            return cls.MONSTER
        return cls.OTHER
