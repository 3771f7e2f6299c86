"""
Archive path parser.

Turns archive path strings such as
    chara/monster/m0133/obj/body/b0002/b0002.imc
into typed descriptors, checking that ids repeated between directory and
file names agree.
"""

from xivaffects.parser.errors import GrammarError, MismatchedPathIds, PathParseError
from xivaffects.parser.grammar import game_path, parse_path
from xivaffects.parser.paths import (
    AccessoryImc,
    AccessoryMdl,
    AccessoryMtrl,
    AccessoryPath,
    AccessoryTex,
    CharacterAttachOffset,
    CharacterBodyPath,
    CharacterCatchlight,
    CharacterDecal,
    CharacterMdl,
    CharacterMtrl,
    CharacterPap,
    CharacterPath,
    CharacterSkeleton,
    CharacterSkin,
    CharacterTex,
    CharacterTimeline,
    CharacterTmb,
    DemihumanAvfx,
    DemihumanImc,
    DemihumanMdl,
    DemihumanMtrl,
    DemihumanPath,
    DemihumanSkeleton,
    DemihumanTex,
    EquipmentAvfx,
    EquipmentImc,
    EquipmentMdl,
    EquipmentMtrl,
    EquipmentPath,
    EquipmentTex,
    FontFile,
    FontTexture,
    Icon,
    MapTexture,
    MonsterAvfx,
    MonsterImc,
    MonsterMdl,
    MonsterMtrl,
    MonsterPath,
    MonsterSkeleton,
    MonsterTex,
    PathDescriptor,
    WeaponAvfx,
    WeaponImc,
    WeaponMdl,
    WeaponMtrl,
    WeaponPath,
    WeaponSkeleton,
    WeaponTex,
)
from xivaffects.parser.types import (
    BodyType,
    BodyTypeSlot,
    DecalType,
    Gender,
    Language,
    ModelInfo,
    ModelKind,
    Race,
    SkeletonSlot,
    model_info,
)

__all__ = [
    "parse_path",
    "game_path",
    "PathParseError",
    "GrammarError",
    "MismatchedPathIds",
    "PathDescriptor",
    "MonsterPath",
    "MonsterImc",
    "MonsterMdl",
    "MonsterMtrl",
    "MonsterTex",
    "MonsterAvfx",
    "MonsterSkeleton",
    "WeaponPath",
    "WeaponImc",
    "WeaponMdl",
    "WeaponMtrl",
    "WeaponTex",
    "WeaponAvfx",
    "WeaponSkeleton",
    "DemihumanPath",
    "DemihumanImc",
    "DemihumanMdl",
    "DemihumanMtrl",
    "DemihumanTex",
    "DemihumanAvfx",
    "DemihumanSkeleton",
    "EquipmentPath",
    "EquipmentImc",
    "EquipmentMdl",
    "EquipmentMtrl",
    "EquipmentTex",
    "EquipmentAvfx",
    "AccessoryPath",
    "AccessoryImc",
    "AccessoryMdl",
    "AccessoryMtrl",
    "AccessoryTex",
    "CharacterPath",
    "CharacterBodyPath",
    "CharacterMdl",
    "CharacterMtrl",
    "CharacterTex",
    "CharacterCatchlight",
    "CharacterSkin",
    "CharacterDecal",
    "CharacterSkeleton",
    "CharacterTimeline",
    "CharacterTmb",
    "CharacterPap",
    "CharacterAttachOffset",
    "FontFile",
    "FontTexture",
    "Icon",
    "MapTexture",
    "BodyType",
    "BodyTypeSlot",
    "DecalType",
    "Gender",
    "Language",
    "ModelInfo",
    "ModelKind",
    "Race",
    "SkeletonSlot",
    "model_info",
]
