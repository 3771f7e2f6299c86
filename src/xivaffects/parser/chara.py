"""
Chara Grammars

Grammars for the model families under chara/: monster, weapon, demihuman,
equipment and accessory. Each family parser reads the ids from the
directory components, then tries each file shape in turn; file names that
repeat the directory ids must repeat them exactly.
"""

from typing import Callable

from xivaffects.common import EquipSlot
from xivaffects.parser.combinators import (
    Failure,
    Parser,
    Result,
    alt,
    delimited,
    lookup,
    map_value,
    n_digit_id,
    path_id,
    preceded,
    repeat_of,
    seq,
    tag,
    take,
    take_till,
    terminated,
)
from xivaffects.parser.paths import (
    AccessoryImc,
    AccessoryMdl,
    AccessoryMtrl,
    AccessoryTex,
    DemihumanAvfx,
    DemihumanImc,
    DemihumanMdl,
    DemihumanMtrl,
    DemihumanSkeleton,
    DemihumanTex,
    EquipmentAvfx,
    EquipmentImc,
    EquipmentMdl,
    EquipmentMtrl,
    EquipmentTex,
    MonsterAvfx,
    MonsterImc,
    MonsterMdl,
    MonsterMtrl,
    MonsterSkeleton,
    MonsterTex,
    WeaponAvfx,
    WeaponImc,
    WeaponMdl,
    WeaponMtrl,
    WeaponSkeleton,
    WeaponTex,
)
from xivaffects.parser.types import MODEL_INFO


equip_slot = lookup(take(3), EquipSlot.from_code, "equip slot")

# Four digit character code, validated against the model info table
model_code = lookup(n_digit_id(4), lambda code: code if code in MODEL_INFO else None, "model code")

skeleton_prefix = terminated(alt(tag("eid"), tag("skl"), tag("phy")), tag("_"))
skeleton_extension = preceded(tag("."), alt(tag("eid"), tag("sklb"), tag("phyb"), tag("skp")))


def material_folder(text: str) -> Result:
    """`material/vXXXX/`"""
    return delimited(tag("material/"), path_id("v"), tag("/"))(text)


def texture_variant(text: str) -> Result:
    """`texture/vNN_`"""
    return delimited(tag("texture/v"), n_digit_id(2), tag("_"))(text)


def _with_ids(head: Parser, files: Callable[[int, int], Parser]) -> Parser:
    """Parse a two id directory head, then the file grammar built for those ids."""
    def parse(text: str) -> Result:
        result = head(text)
        if isinstance(result, Failure):
            return result
        primary_id, secondary_id = result.value
        return files(primary_id, secondary_id)(result.rest)
    return parse


# =============================================================================
# Monster and weapon bodies
# =============================================================================

def _body_family(root: str, primary: str, vfx: str, types: dict) -> Parser:
    """
    Grammar shared by monster and weapon bodies.

    `types` maps imc/mdl/mtrl/tex/avfx/skeleton to descriptor classes.
    """
    def repeat(primary_id: int, secondary_id: int) -> Parser:
        return repeat_of(seq(path_id(primary), path_id("b")), primary_id, secondary_id)

    def files(primary_id: int, secondary_id: int) -> Parser:
        ids = (primary_id, secondary_id)
        imc = map_value(
            terminated(repeat_of(path_id("b"), secondary_id), tag(".imc")),
            lambda _: types["imc"](*ids),
        )
        mdl = map_value(
            delimited(tag("model/"), repeat(*ids), tag(".mdl")),
            lambda _: types["mdl"](*ids),
        )
        mtrl = map_value(
            seq(
                material_folder,
                delimited(tag("mt_"), repeat(*ids), tag("_")),
                terminated(take_till("."), tag(".mtrl")),
            ),
            lambda v: types["mtrl"](*ids, v[0], v[2]),
        )
        tex = map_value(
            seq(texture_variant, repeat(*ids), terminated(take_till("."), tag(".tex"))),
            lambda v: types["tex"](*ids, v[0], v[2]),
        )
        avfx = map_value(
            delimited(tag(f"vfx/eff/{vfx}"), n_digit_id(4), tag(".avfx")),
            lambda effect_id: types["avfx"](*ids, effect_id),
        )
        return alt(imc, mdl, mtrl, tex, avfx)

    body_head = seq(
        delimited(tag(f"{root}/"), path_id(primary), tag("/")),
        delimited(tag("obj/body/"), path_id("b"), tag("/")),
    )
    skeleton_head = seq(
        delimited(tag(f"{root}/"), path_id(primary), tag("/")),
        delimited(tag("skeleton/base/"), path_id("b"), tag("/")),
    )

    def skeleton(primary_id: int, secondary_id: int) -> Parser:
        return map_value(
            seq(skeleton_prefix, repeat(primary_id, secondary_id), skeleton_extension),
            lambda v: types["skeleton"](primary_id, secondary_id, v[0], v[2]),
        )

    return alt(_with_ids(body_head, files), _with_ids(skeleton_head, skeleton))


monster_path = _body_family("monster", "m", "vm", {
    "imc": MonsterImc,
    "mdl": MonsterMdl,
    "mtrl": MonsterMtrl,
    "tex": MonsterTex,
    "avfx": MonsterAvfx,
    "skeleton": MonsterSkeleton,
})

weapon_path = _body_family("weapon", "w", "vw", {
    "imc": WeaponImc,
    "mdl": WeaponMdl,
    "mtrl": WeaponMtrl,
    "tex": WeaponTex,
    "avfx": WeaponAvfx,
    "skeleton": WeaponSkeleton,
})


# =============================================================================
# Demihuman
# =============================================================================

def _demihuman_files(primary_id: int, secondary_id: int) -> Parser:
    ids = (primary_id, secondary_id)
    repeat = repeat_of(seq(path_id("d"), path_id("e")), *ids)
    slotted = preceded(repeat, preceded(tag("_"), equip_slot))

    imc = map_value(
        terminated(repeat_of(path_id("e"), secondary_id), tag(".imc")),
        lambda _: DemihumanImc(*ids),
    )
    mdl = map_value(
        delimited(tag("model/"), slotted, tag(".mdl")),
        lambda slot: DemihumanMdl(*ids, slot),
    )
    mtrl = map_value(
        seq(
            material_folder,
            preceded(tag("mt_"), slotted),
            terminated(take_till("."), tag(".mtrl")),
        ),
        lambda v: DemihumanMtrl(*ids, v[0], v[1], v[2]),
    )
    tex = map_value(
        seq(texture_variant, slotted, terminated(take_till("."), tag(".tex"))),
        lambda v: DemihumanTex(*ids, v[0], v[1], v[2]),
    )
    avfx = map_value(
        delimited(tag("vfx/eff/ve"), n_digit_id(4), tag(".avfx")),
        lambda effect_id: DemihumanAvfx(*ids, effect_id),
    )
    return alt(imc, mdl, mtrl, tex, avfx)


def _demihuman_skeleton(primary_id: int, secondary_id: int) -> Parser:
    repeat = repeat_of(seq(path_id("d"), path_id("b")), primary_id, secondary_id)
    return map_value(
        seq(skeleton_prefix, repeat, skeleton_extension),
        lambda v: DemihumanSkeleton(primary_id, secondary_id, v[0], v[2]),
    )


demihuman_path = alt(
    _with_ids(
        seq(
            delimited(tag("demihuman/"), path_id("d"), tag("/")),
            delimited(tag("obj/equipment/"), path_id("e"), tag("/")),
        ),
        _demihuman_files,
    ),
    _with_ids(
        seq(
            delimited(tag("demihuman/"), path_id("d"), tag("/")),
            delimited(tag("skeleton/base/"), path_id("b"), tag("/")),
        ),
        _demihuman_skeleton,
    ),
)


# =============================================================================
# Equipment and accessories
# =============================================================================

def _gear_repeat(prefix: str, primary_id: int) -> Parser:
    """`cXXXX<prefix>XXXX`, yielding the character model code."""
    return terminated(preceded(tag("c"), model_code), repeat_of(path_id(prefix), primary_id))


def _equipment_files(primary_id: int) -> Parser:
    repeat = _gear_repeat("e", primary_id)
    imc = map_value(
        terminated(repeat_of(path_id("e"), primary_id), tag(".imc")),
        lambda _: EquipmentImc(primary_id),
    )
    mtrl = map_value(
        seq(
            material_folder,
            preceded(tag("mt_"), repeat),
            delimited(tag("_"), equip_slot, tag("_")),
            terminated(take_till("."), tag(".mtrl")),
        ),
        lambda v: EquipmentMtrl(primary_id, v[0], v[1], v[2], v[3]),
    )
    mdl = map_value(
        delimited(tag("model/"), seq(repeat, preceded(tag("_"), equip_slot)), tag(".mdl")),
        lambda v: EquipmentMdl(primary_id, v[0], v[1]),
    )
    tex = map_value(
        seq(
            texture_variant,
            repeat,
            preceded(tag("_"), equip_slot),
            terminated(take_till("."), tag(".tex")),
        ),
        lambda v: EquipmentTex(primary_id, v[0], v[1], v[2], v[3]),
    )
    avfx = map_value(
        delimited(tag("vfx/eff/ve"), n_digit_id(4), tag(".avfx")),
        lambda effect_id: EquipmentAvfx(primary_id, effect_id),
    )
    return alt(imc, mtrl, mdl, tex, avfx)


def _accessory_files(primary_id: int) -> Parser:
    repeat = _gear_repeat("a", primary_id)
    imc = map_value(
        terminated(repeat_of(path_id("a"), primary_id), tag(".imc")),
        lambda _: AccessoryImc(primary_id),
    )
    mtrl = map_value(
        seq(
            material_folder,
            preceded(tag("mt_"), repeat),
            preceded(tag("_"), equip_slot),
            terminated(take_till("."), tag(".mtrl")),
        ),
        lambda v: AccessoryMtrl(primary_id, v[0], v[1], v[2], v[3]),
    )
    mdl = map_value(
        delimited(tag("model/"), seq(repeat, preceded(tag("_"), equip_slot)), tag(".mdl")),
        lambda v: AccessoryMdl(primary_id, v[0], v[1]),
    )
    tex = map_value(
        seq(
            texture_variant,
            repeat,
            preceded(tag("_"), equip_slot),
            terminated(take_till("."), tag(".tex")),
        ),
        lambda v: AccessoryTex(primary_id, v[0], v[1], v[2], v[3]),
    )
    return alt(imc, mtrl, mdl, tex)


def _single_id(root: str, prefix: str, files: Callable[[int], Parser]) -> Parser:
    head = delimited(tag(f"{root}/"), path_id(prefix), tag("/"))

    def parse(text: str) -> Result:
        result = head(text)
        if isinstance(result, Failure):
            return result
        return files(result.value)(result.rest)
    return parse


equipment_path = _single_id("equipment", "e", _equipment_files)
accessory_path = _single_id("accessory", "a", _accessory_files)


__all__ = [
    "accessory_path",
    "demihuman_path",
    "equip_slot",
    "equipment_path",
    "model_code",
    "monster_path",
    "weapon_path",
]
