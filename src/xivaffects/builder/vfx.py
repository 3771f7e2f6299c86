"""
VFX passes.

After the entity passes, every equipment, weapon and monster model that
made it into the index has its IMC file read again, and each variant with
both a material and a vfx id is recorded as vfx id => physical variant.
"""

import logging

from xivaffects.builder.context import BuildContext
from xivaffects.builder.items import gear_imc_path
from xivaffects.common import EquipSlot
from xivaffects.parser.paths import MonsterImc, WeaponImc

logger = logging.getLogger(__name__)


def analyse_equipment_vfx(ctx: BuildContext) -> None:
    for slot, models in sorted(ctx.index.equipment.items()):
        for model in sorted(models):
            imc = ctx.imc(gear_imc_path(slot, model))
            if imc is None:
                continue
            for part_index in range(len(imc.parts)):
                part_slot = EquipSlot.from_part_index(part_index, slot.is_accessory)
                if part_slot is None:
                    continue
                for vfx_id, material_id in imc.iter_vfx(part_index):
                    ctx.index.add_equipment_vfx(model, vfx_id, part_slot, material_id)


def analyse_weapon_vfx(ctx: BuildContext) -> None:
    for model, bodies in sorted(ctx.index.weapons.items()):
        for body in sorted(bodies):
            imc = ctx.imc(WeaponImc(model, body).to_path())
            if imc is None:
                continue
            for part_index in range(len(imc.parts)):
                for vfx_id, material_id in imc.iter_vfx(part_index):
                    ctx.index.add_weapon_vfx(model, body, vfx_id, material_id)


def analyse_monster_vfx(ctx: BuildContext) -> None:
    for model, bases in sorted(ctx.index.monsters.items()):
        for base in sorted(bases):
            imc = ctx.imc(MonsterImc(model, base).to_path())
            if imc is None:
                continue
            for part_index in range(len(imc.parts)):
                for vfx_id, material_id in imc.iter_vfx(part_index):
                    ctx.index.add_monster_vfx(model, base, vfx_id, material_id)
