"""
Map pass: map textures keyed by map id (`s1d1/00`), named from place names.
"""

import logging
from typing import Optional

from xivaffects.builder.context import BuildContext
from xivaffects.common import ItemKind
from xivaffects.sheets.provider import read_sheet
from xivaffects.sheets.records import Map, PlaceName

logger = logging.getLogger(__name__)


def map_name(region: Optional[str], place: Optional[str], sub: Optional[str]) -> str:
    """
    Compose `Region - Place (Sub)`.

    Missing parts are dropped; a sub-place equal to the place is not
    repeated, and a sub-place with nothing before it is not parenthesised.
    """
    name = region or ""
    if place:
        if name:
            name += " - "
        name += place
    if sub and sub != place:
        name = f"{name} ({sub})" if name else sub
    return name


def analyse_maps(ctx: BuildContext) -> None:
    place_names = {pn.row_id: pn.name for pn in read_sheet(ctx.sheets, PlaceName) if pn.name}

    for map_row in read_sheet(ctx.sheets, Map):
        if not map_row.id:
            continue

        name = map_name(
            place_names.get(map_row.place_name_region),
            place_names.get(map_row.place_name),
            place_names.get(map_row.place_name_sub),
        )
        if not name:
            logger.debug(f"Map {map_row.id} has no place names")
            continue

        ctx.index.add_map(map_row.id, ctx.index.name_ref(ItemKind.MAP, name))
