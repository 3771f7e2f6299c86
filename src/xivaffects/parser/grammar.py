"""
Game Path Grammar

Top level alternation over the archive roots (common/, chara/, ui/) and
the parse_path() entry point.
"""

import logging

from xivaffects.parser.chara import (
    accessory_path,
    demihuman_path,
    equipment_path,
    monster_path,
    weapon_path,
)
from xivaffects.parser.combinators import (
    Failure,
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
    preceded,
    seq,
    tag,
    take,
    take_till,
    terminated,
)
from xivaffects.parser.errors import GrammarError, MismatchedPathIds
from xivaffects.parser.human import character_path
from xivaffects.parser.paths import FontFile, FontTexture, Icon, MapTexture, PathDescriptor
from xivaffects.parser.types import Language

logger = logging.getLogger(__name__)

LOWERCASE = "abcdefghijklmnopqrstuvwxyz"


# =============================================================================
# common/font/
# =============================================================================

font_texture = map_value(terminated(take_till("."), tag(".tex")), FontTexture)

font_file = map_value(
    seq(
        terminated(take_till("_"), tag("_")),
        digits,
        terminated(opt(tag("_lobby")), tag(".fdt")),
    ),
    lambda v: FontFile(v[0], v[1], v[2] is not None),
)

common_path = preceded(tag("font/"), alt(font_texture, font_file))


# =============================================================================
# ui/icon/, ui/map/
# =============================================================================

language = lookup(part, Language.from_code, "language")

icon = map_value(
    seq(
        delimited(tag("icon/"), digits, tag("/")),
        opt(terminated(language, tag("/"))),
        opt(tag("hq/")),
        digits,
        terminated(opt(tag("_hr1")), tag(".tex")),
    ),
    lambda v: Icon(v[0], v[3], v[1], v[2] is not None, v[4] is not None),
)


def map_texture(text: str) -> Result:
    head = seq(
        delimited(tag("map/"), take(4), tag("/")),
        terminated(n_digit_id(2), tag("/")),
    )(text)
    if isinstance(head, Failure):
        return head
    primary_id, variant = head.value

    return map_value(
        seq(
            tag(f"{primary_id}{variant:02d}"),
            opt(one_of(LOWERCASE)),
            opt(preceded(tag("_"), one_of(LOWERCASE))),
            tag(".tex"),
        ),
        lambda v: MapTexture(primary_id, variant, v[1], v[2]),
    )(head.rest)


ui_path = alt(icon, map_texture)


# =============================================================================
# chara/ and the top level
# =============================================================================

chara_path = alt(
    equipment_path,
    monster_path,
    weapon_path,
    demihuman_path,
    accessory_path,
    character_path,
)

game_path = alt(
    preceded(tag("common/"), common_path),
    preceded(tag("chara/"), chara_path),
    preceded(tag("ui/"), ui_path),
)


def parse_path(path: str) -> PathDescriptor:
    """
    Parse an archive path into its descriptor.

    Raises:
        MismatchedPathIds: a file name repeats a directory id with a different value
        GrammarError: no path family matched, or input was left over
    """
    result = game_path(path)
    if isinstance(result, Failure):
        if result.is_mismatch:
            raise MismatchedPathIds(path, result.expected, result.actual)
        raise GrammarError(path, result.reason)
    if result.rest:
        raise GrammarError(path, f"unparsed trailing input {result.rest!r}")
    return result.value
