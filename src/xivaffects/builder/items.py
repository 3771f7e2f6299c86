"""
Item pass: gear and weapons from the Item sheet.
"""

import logging
from typing import Dict

from xivaffects.builder.context import BuildContext
from xivaffects.common import EquipSlot, ItemKind
from xivaffects.index.packing import unpack_gear_model, unpack_weapon_model
from xivaffects.parser.paths import AccessoryImc, EquipmentImc, WeaponImc
from xivaffects.sheets.provider import read_sheet
from xivaffects.sheets.records import EquipSlotCategory, Item

logger = logging.getLogger(__name__)

# The one "Dated" item that is not a superseded duplicate
DATED_EXCEPTION = 17557

_OFFHAND = " (Offhand)"

# ItemUICategory => suffix for the secondary model of a weapon
WEAPON_SUFFIXES: Dict[int, str] = {
    1: _OFFHAND,    # pugilist
    4: " (Quiver)",
    84: _OFFHAND,   # rogue
    88: " (Aetherotransformer)",
    89: " (Orrery)",
    96: " (Sheathe)",
    97: " (Focus)",
    107: _OFFHAND,  # dancer
    110: _OFFHAND,  # viper
    111: " (Palette)",
    11: "",         # shields
}
WEAPON_SUFFIXES.update({category: "" for category in range(12, 34)})  # tools

OTHER_RING = {
    EquipSlot.LFINGER: EquipSlot.RFINGER,
    EquipSlot.RFINGER: EquipSlot.LFINGER,
}


def gear_imc_path(slot: EquipSlot, model: int) -> str:
    if slot.is_accessory:
        return AccessoryImc(model).to_path()
    return EquipmentImc(model).to_path()


def analyse_items(ctx: BuildContext) -> None:
    categories = {esc.row_id: esc for esc in read_sheet(ctx.sheets, EquipSlotCategory)}

    for item in read_sheet(ctx.sheets, Item):
        if not item.name:
            continue
        if item.row_id != DATED_EXCEPTION and item.name.startswith("Dated "):
            continue
        if item.equip_slot_category == 0:
            continue

        category = categories.get(item.equip_slot_category)
        if category is None:
            logger.debug(f"Item {item.row_id}: unknown equip slot category {item.equip_slot_category}")
            continue

        slot = category.equip_slot()
        if slot is not None:
            _add_gear(ctx, item, slot)
        elif category.is_weapon:
            _add_weapon(ctx, item)
        else:
            logger.debug(f"Item {item.row_id}: no model for equip slots {category}")


def _add_gear(ctx: BuildContext, item: Item, slot: EquipSlot) -> None:
    model, variant = unpack_gear_model(item.model_main)
    variant = ctx.remap(gear_imc_path(slot, model), slot.imc_part_index, variant)

    ref = ctx.index.name_ref(ItemKind.GEAR, item.name)
    ctx.index.add_equipment(slot, model, variant, [ref])

    other = OTHER_RING.get(slot)
    if other is not None:
        ctx.index.add_equipment(other, model, variant, [ref])


def _add_weapon(ctx: BuildContext, item: Item) -> None:
    model, body, variant = unpack_weapon_model(item.model_main)
    variant = ctx.remap(WeaponImc(model, body).to_path(), 0, variant)
    ctx.index.add_weapon(model, body, variant, [ctx.index.name_ref(ItemKind.WEAPON, item.name)])

    suffix = WEAPON_SUFFIXES.get(item.item_ui_category)
    if suffix is None or item.model_sub == 0:
        return

    model, body, variant = unpack_weapon_model(item.model_sub)
    variant = ctx.remap(WeaponImc(model, body).to_path(), 0, variant)
    ref = ctx.index.name_ref(ItemKind.WEAPON, f"{item.name}{suffix}")
    ctx.index.add_weapon(model, body, variant, [ref])
