"""
Character Grammars

Player character paths: body/face/hair/tail/ear models under chara/human/,
the shared textures under chara/common/, skeletons, animation timelines
and attach offsets.
"""

from xivaffects.parser.chara import model_code
from xivaffects.parser.combinators import (
    Failure,
    Parser,
    Result,
    alt,
    delimited,
    digits,
    lookup,
    map_value,
    n_digit_id,
    one_of,
    opt,
    part,
    path_id,
    preceded,
    repeat_of,
    seq,
    tag,
    take,
    take_till,
    take_until,
    terminated,
)
from xivaffects.parser.paths import (
    CharacterAttachOffset,
    CharacterCatchlight,
    CharacterDecal,
    CharacterMdl,
    CharacterMtrl,
    CharacterPap,
    CharacterSkeleton,
    CharacterSkin,
    CharacterTex,
    CharacterTmb,
)
from xivaffects.parser.types import BodyType, BodyTypeSlot, DecalType, SkeletonSlot


body_type = lookup(part, BodyType.from_code, "body type")
skeleton_slot = lookup(part, SkeletonSlot.from_code, "skeleton slot")
decal_type = lookup(part, DecalType.from_code, "decal type")
body_type_slot = lookup(take(3), BodyTypeSlot.from_code, "body type slot")


def _file_repeat(code: int, abbreviation: str, body_id: int) -> Parser:
    """`cXXXX<abbr>XXXX` repeated in a file name."""
    return repeat_of(seq(preceded(tag("c"), n_digit_id(4)), path_id(abbreviation)), code, body_id)


# =============================================================================
# chara/human/cXXXX/obj/<type>/<abbr>XXXX/
# =============================================================================

def _body_files(code: int, kind: BodyType, body_id: int) -> Parser:
    name = preceded(
        _file_repeat(code, kind.abbreviation, body_id),
        opt(preceded(tag("_"), body_type_slot)),
    )

    mdl = map_value(
        delimited(tag("model/"), name, tag(".mdl")),
        lambda slot: CharacterMdl(code, kind, body_id, slot),
    )
    mtrl = map_value(
        seq(
            preceded(tag("material/"), opt(terminated(path_id("v"), tag("/")))),
            preceded(tag("mt_"), name),
            terminated(take_till("."), tag(".mtrl")),
        ),
        lambda v: CharacterMtrl(code, kind, body_id, v[1], v[0], v[2]),
    )
    tex = map_value(
        seq(
            preceded(tag("texture/"), opt(tag("--"))),
            opt(delimited(tag("v"), n_digit_id(2), tag("_"))),
            name,
            terminated(take_till("."), tag(".tex")),
        ),
        lambda v: CharacterTex(code, kind, body_id, v[2], v[1], v[0] is not None, v[3]),
    )
    return alt(mdl, mtrl, tex)


def _simple_path(text: str) -> Result:
    head = seq(
        delimited(tag("human/c"), model_code, tag("/")),
        delimited(tag("obj/"), body_type, tag("/")),
    )(text)
    if isinstance(head, Failure):
        return head
    code, kind = head.value

    folder = terminated(path_id(kind.abbreviation), tag("/"))(head.rest)
    if isinstance(folder, Failure):
        return folder
    return _body_files(code, kind, folder.value)(folder.rest)


# =============================================================================
# Shared textures, skeletons, timelines and attach offsets
# =============================================================================

catchlight = map_value(
    delimited(tag("common/texture/catchlight"), take_until(".tex"), tag(".tex")),
    CharacterCatchlight,
)

skin = map_value(
    delimited(tag("common/texture/skin"), take_until(".tex"), tag(".tex")),
    CharacterSkin,
)

decal = map_value(
    seq(
        delimited(tag("common/texture/decal_"), decal_type, tag("/")),
        opt(one_of("-_")),
        delimited(tag("decal_"), digits, tag(".tex")),
    ),
    lambda v: CharacterDecal(v[0], v[2], v[1] or ""),
)


def skeleton(text: str) -> Result:
    head = seq(
        delimited(tag("human/c"), model_code, tag("/")),
        delimited(tag("skeleton/"), skeleton_slot, tag("/")),
    )(text)
    if isinstance(head, Failure):
        return head
    code, slot = head.value

    folder = terminated(path_id(slot.abbreviation), tag("/"))(head.rest)
    if isinstance(folder, Failure):
        return folder
    skeleton_id = folder.value

    return map_value(
        seq(
            terminated(alt(tag("eid"), tag("skl"), tag("phy"), tag("kdi")), tag("_")),
            _file_repeat(code, slot.abbreviation, skeleton_id),
            preceded(tag("."), alt(tag("eid"), tag("sklb"), tag("phyb"), tag("skp"), tag("kdb"))),
        ),
        lambda v: CharacterSkeleton(code, slot, skeleton_id, v[0], v[2]),
    )(folder.rest)


tmb = map_value(
    delimited(tag("action/"), take_until(".tmb"), tag(".tmb")),
    CharacterTmb,
)

pap = map_value(
    seq(
        delimited(tag("human/"), path_id("c"), tag("/")),
        delimited(tag("animation/"), path_id("a"), tag("/")),
        opt(delimited(tag("bt_"), take_till("/"), tag("/"))),
        terminated(take_until(".pap"), tag(".pap")),
    ),
    lambda v: CharacterPap(v[0], v[1], v[3], v[2]),
)

attach_offset = map_value(
    delimited(tag("xls/attachOffset/c"), model_code, tag(".atch")),
    CharacterAttachOffset,
)

_complex_path = alt(catchlight, skin, decal, skeleton, tmb, pap, attach_offset)

character_path = alt(_simple_path, _complex_path)
