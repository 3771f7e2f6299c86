"""
Synthesised names.

Paths that are not tied to a sheet row (character customisation, skeletons,
icons, fonts, base animations) get a descriptive name built from the
descriptor fields.
"""

from typing import Optional

from xivaffects.common import EquipSlot
from xivaffects.parser.paths import (
    CharacterAttachOffset,
    CharacterBodyPath,
    CharacterCatchlight,
    CharacterDecal,
    CharacterPap,
    CharacterSkeleton,
    CharacterSkin,
    FontFile,
    FontTexture,
    Icon,
)
from xivaffects.parser.types import DecalType, Language, ModelInfo

STIGMA_PATH = "chara/common/texture/decal_equip/_stigma.tex"
STIGMA_NAME = "Stigma Decal"

# bt_<weapon type> animation folders => job
WEAPON_TYPE_JOBS = {
    "common": "Common",
    "emp_emp": "Unarmed",
    "2ax_emp": "Warrior",
    "2sw_emp": "Dark Knight",
    "2gb_emp": "Gunbreaker",
    "swd_sld": "Paladin",
    "clw_clw": "Monk",
    "2sp_emp": "Dragoon",
    "dgr_dgr": "Ninja",
    "2kt_emp": "Samurai",
    "2km_emp": "Reaper",
    "2bw_emp": "Bard",
    "2gn_emp": "Machinist",
    "chk_chk": "Dancer",
    "stf_sld": "Black Mage",
    "jst_sld": "White Mage",
    "2st_emp": "Black Mage",
    "2rp_emp": "Red Mage",
    "2bk_emp": "Scholar",
    "2gl_emp": "Astrologian",
    "2ff_emp": "Sage",
    "2rd_emp": "Viper",
    "2br_emp": "Pictomancer",
}

# Animation keys shared by every job, under each bt_ folder
BASE_ANIMATIONS = {
    "resident/idle": "Idle",
    "resident/sub": "Idle",
    "resident/move_a": "Movement",
    "resident/move_b": "Movement",
    "resident/move_d": "Movement",
    "resident/pose": "Pose",
}

_LANGUAGE_NAMES = {
    Language.ENGLISH: "English",
    Language.JAPANESE: "Japanese",
    Language.GERMAN: "German",
    Language.FRENCH: "French",
}


def _model_label(info: Optional[ModelInfo]) -> str:
    return str(info) if info is not None else "Unknown"


def body_name(descriptor: CharacterBodyPath) -> str:
    """`Male Midlander Face 1`, or `Male Midlander Body (Gloves) 1` for an equip slot."""
    label = f"{_model_label(descriptor.model_info)} {descriptor.body_type.display_name}"
    slot = descriptor.slot.equip_slot if descriptor.slot is not None else None
    if slot is not None:
        label += f" ({slot.display_name})"
    return f"{label} {descriptor.body_id}"


def _tidy(text: str) -> str:
    return text.strip("_- ").replace("_", " ")


def catchlight_name(descriptor: CharacterCatchlight) -> str:
    rest = _tidy(descriptor.name)
    return f"Catchlight {rest}" if rest else "Catchlight"


def skin_name(descriptor: CharacterSkin) -> str:
    rest = _tidy(descriptor.name)
    return f"Skin {rest}" if rest else "Skin"


def decal_name(descriptor: CharacterDecal) -> str:
    if descriptor.decal_type is DecalType.FACE:
        return f"Face Paint {descriptor.decal_id}"
    return f"Equipment Decal {descriptor.decal_id}"


def skeleton_name(descriptor: CharacterSkeleton) -> str:
    return (f"{_model_label(descriptor.model_info)} {descriptor.slot.display_name} "
            f"Skeleton {descriptor.skeleton_id}")


def attach_offset_name(descriptor: CharacterAttachOffset) -> str:
    return f"{_model_label(descriptor.model_info)} Attach Offsets"


def base_animation_name(descriptor: CharacterPap) -> Optional[str]:
    """`(Warrior) Idle` for base animation keys inside a bt_ folder."""
    if descriptor.weapon_type is None:
        return None
    label = BASE_ANIMATIONS.get(descriptor.key)
    if label is None:
        return None
    job = WEAPON_TYPE_JOBS.get(descriptor.weapon_type, descriptor.weapon_type)
    return f"({job}) {label}"


def smallclothes_name(slot: Optional[EquipSlot]) -> str:
    if slot is None:
        return "Smallclothes"
    return f"Smallclothes ({slot.display_name})"


def icon_name(descriptor: Icon) -> str:
    name = f"Icon #{descriptor.primary_id}"
    qualifiers = []
    if descriptor.language is not None:
        qualifiers.append(_LANGUAGE_NAMES[descriptor.language])
    if descriptor.hq:
        qualifiers.append("HQ")
    if descriptor.hires:
        qualifiers.append("High Resolution")
    if qualifiers:
        name += f" ({', '.join(qualifiers)})"
    return name


def font_file_name(descriptor: FontFile) -> str:
    name = f"{descriptor.family} {descriptor.size}"
    if descriptor.lobby:
        name += " (Lobby)"
    return name


def font_texture_name(descriptor: FontTexture) -> str:
    return f"Font Texture {descriptor.name}"
