"""
Path Component Types

Closed enumerations for the short codes that appear inside archive paths,
plus the character "model info" table that maps a four digit code such as
0101 to a race, gender and body kind.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional

from xivaffects.common import EquipSlot


class CodeEnum(Enum):
    """Enum whose value is the literal code written in paths."""

    @classmethod
    def from_code(cls, code: str):
        for member in cls:
            if member.value == code:
                return member
        return None

    @property
    def code(self) -> str:
        return self.value


class Language(CodeEnum):
    ENGLISH = "en"
    JAPANESE = "ja"
    GERMAN = "de"
    FRENCH = "fr"


class Race(Enum):
    MIDLANDER = "Midlander"
    HIGHLANDER = "Highlander"
    ELEZEN = "Elezen"
    MIQOTE = "Miqo'te"
    ROEGADYN = "Roegadyn"
    LALAFELL = "Lalafell"
    AURA = "Au Ra"
    HROTHGAR = "Hrothgar"
    VIERA = "Viera"

    def __str__(self) -> str:
        return self.value


class Gender(Enum):
    MALE = "Male"
    FEMALE = "Female"

    def __str__(self) -> str:
        return self.value


class ModelKind(Enum):
    ADULT = ""
    CHILD = " (Child)"
    UNKNOWN = " (Unknown)"


@dataclass(frozen=True)
class ModelInfo:
    """Race, gender and body kind decoded from a character model code."""
    race: Optional[Race]
    gender: Gender
    kind: ModelKind

    def __str__(self) -> str:
        race = str(self.race) if self.race is not None else "Unknown"
        return f"{self.gender} {race}{self.kind.value}"


def _build_model_info_table() -> Dict[int, ModelInfo]:
    table: Dict[int, ModelInfo] = {}
    for index, race in enumerate(Race):
        for offset, gender in ((1, Gender.MALE), (2, Gender.FEMALE)):
            prefix = (index * 2 + offset) * 100
            table[prefix + 1] = ModelInfo(race, gender, ModelKind.ADULT)
            table[prefix + 4] = ModelInfo(race, gender, ModelKind.CHILD)

    # Midlanders have two extra body codes nobody has identified
    for code, gender in ((102, Gender.MALE), (103, Gender.MALE),
                         (202, Gender.FEMALE), (203, Gender.FEMALE)):
        table[code] = ModelInfo(Race.MIDLANDER, gender, ModelKind.UNKNOWN)

    table[9104] = ModelInfo(None, Gender.MALE, ModelKind.CHILD)
    table[9204] = ModelInfo(None, Gender.FEMALE, ModelKind.CHILD)
    return table


MODEL_INFO: Dict[int, ModelInfo] = _build_model_info_table()


def model_info(code: int) -> Optional[ModelInfo]:
    """Look up a character model code, e.g. 101 -> Male Midlander."""
    return MODEL_INFO.get(code)


class BodyType(CodeEnum):
    """Folder under human/cXXXX/obj/."""
    BODY = "body"
    EAR = "zear"
    FACE = "face"
    HAIR = "hair"
    TAIL = "tail"

    @property
    def abbreviation(self) -> str:
        return {
            BodyType.BODY: "b",
            BodyType.EAR: "z",
            BodyType.FACE: "f",
            BodyType.HAIR: "h",
            BodyType.TAIL: "t",
        }[self]

    @property
    def display_name(self) -> str:
        return {
            BodyType.BODY: "Body",
            BodyType.EAR: "Ear",
            BodyType.FACE: "Face",
            BodyType.HAIR: "Hair",
            BodyType.TAIL: "Tail",
        }[self]


class BodyTypeSlot(CodeEnum):
    """Optional slot suffix on character model/material/texture names."""
    EAR = "zer"
    FACE = "fac"
    HAIR = "hir"
    TAIL = "til"
    IRIS = "iri"
    ACCESSORY = "acc"
    ETC = "etc"
    HEAD = "met"
    HANDS = "glv"
    LEGS = "dwn"
    FEET = "sho"
    BODY = "top"
    EARS = "ear"
    NECK = "nek"
    RFINGER = "rir"
    LFINGER = "ril"
    WRISTS = "wrs"

    @property
    def equip_slot(self) -> Optional[EquipSlot]:
        return EquipSlot.from_code(self.value)

    @property
    def display_name(self) -> str:
        slot = self.equip_slot
        if slot is not None:
            return slot.display_name
        return {
            BodyTypeSlot.EAR: "Ear",
            BodyTypeSlot.FACE: "Face",
            BodyTypeSlot.HAIR: "Hair",
            BodyTypeSlot.TAIL: "Tail",
            BodyTypeSlot.IRIS: "Iris",
            BodyTypeSlot.ACCESSORY: "Accessory",
            BodyTypeSlot.ETC: "Etc",
        }[self]


class SkeletonSlot(CodeEnum):
    """Folder under human/cXXXX/skeleton/."""
    HEAD = "met"
    HANDS = "glv"
    LEGS = "dwn"
    FEET = "sho"
    BODY = "top"
    EARS = "ear"
    NECK = "nek"
    RFINGER = "rir"
    LFINGER = "ril"
    WRISTS = "wrs"
    BASE = "base"
    FACE = "face"
    HAIR = "hair"

    @property
    def abbreviation(self) -> str:
        return _SKELETON_ABBREVIATIONS.get(self, "")

    @property
    def display_name(self) -> str:
        slot = EquipSlot.from_code(self.value)
        if slot is not None:
            return slot.display_name
        return self.value.title()


_SKELETON_ABBREVIATIONS = {
    SkeletonSlot.HEAD: "m",
    SkeletonSlot.HANDS: "g",
    SkeletonSlot.LEGS: "d",
    SkeletonSlot.FEET: "s",
    SkeletonSlot.BODY: "t",
    SkeletonSlot.BASE: "b",
    SkeletonSlot.FACE: "f",
    SkeletonSlot.HAIR: "h",
}


class DecalType(CodeEnum):
    FACE = "face"
    EQUIP = "equip"

