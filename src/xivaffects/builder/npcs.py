"""
Character passes: battle NPCs, event NPCs, minions, mounts and ornaments.

All of these point at a ModelChara row giving (kind, model, base, variant).
Monster variants are remapped through the monster body IMC (part 0).
Demihumans are assembled from equipment pieces, so their variant comes from
the IMC of each piece they wear, and the pieces' vfx are recorded on the way.
"""

import logging
from typing import Dict, Iterable, List, Optional, Tuple

from xivaffects.builder.context import BuildContext
from xivaffects.common import ItemKind, ModelCharaKind
from xivaffects.index.model import NameRef
from xivaffects.parser.paths import DemihumanImc, MonsterImc
from xivaffects.sheets.provider import read_row, read_sheet
from xivaffects.sheets.records import (
    BNpcBase,
    BNpcName,
    Companion,
    ENpcBase,
    ENpcResident,
    ModelChara,
    Mount,
    NpcEquip,
    Ornament,
)

logger = logging.getLogger(__name__)

# Demihuman IMC files have five parts; the second five slots reuse them
DEMIHUMAN_PARTS = 5


def _model_charas(ctx: BuildContext) -> Dict[int, ModelChara]:
    return {
        mc.row_id: mc
        for mc in read_sheet(ctx.sheets, ModelChara)
        if mc.kind is not ModelCharaKind.OTHER
    }


def demihuman_variant(
    ctx: BuildContext, model_chara: ModelChara, gear: Iterable[Tuple[int, int]]
) -> int:
    """
    Physical variant for a demihuman wearing `gear` ((model, variant) per slot).

    Each slot whose IMC file exists overwrites the result, so the last such
    slot in head..right ring order decides. Every vfx seen in those IMC
    parts is recorded against the demihuman model and gear model.
    """
    variant_id = model_chara.variant
    for slot_index, (gear_model, gear_variant) in enumerate(gear):
        imc = ctx.imc(DemihumanImc(model_chara.model, gear_model).to_path())
        if imc is None:
            continue

        part_index = slot_index % DEMIHUMAN_PARTS
        if part_index >= len(imc.parts):
            continue

        physical = imc.remap(part_index, gear_variant)
        if physical is not None:
            variant_id = physical

        for vfx_id, material_id in imc.iter_vfx(part_index):
            ctx.index.add_demihuman_vfx(model_chara.model, gear_model, vfx_id, material_id)

    return variant_id


def register_model_chara(
    ctx: BuildContext,
    model_chara: ModelChara,
    refs: List[NameRef],
    gear: Optional[Iterable[Tuple[int, int]]] = None,
) -> None:
    """Insert `refs` under the monster or demihuman entry for `model_chara`."""
    variant_id = model_chara.variant

    if model_chara.kind is ModelCharaKind.MONSTER:
        path = MonsterImc(model_chara.model, model_chara.base).to_path()
        variant_id = ctx.remap(path, 0, variant_id)
        ctx.index.add_monster(model_chara.model, model_chara.base, variant_id, refs)
    elif model_chara.kind is ModelCharaKind.DEMIHUMAN:
        if gear is not None:
            variant_id = demihuman_variant(ctx, model_chara, gear)
        ctx.index.add_demihuman(model_chara.model, model_chara.base, variant_id, refs)


# =============================================================================
# Passes
# =============================================================================

def analyse_bnpcs(ctx: BuildContext) -> None:
    model_charas = _model_charas(ctx)
    names = {name.row_id: name for name in read_sheet(ctx.sheets, BNpcName)}
    minion_models = {minion.model for minion in read_sheet(ctx.sheets, Companion)}

    for bnpc in read_sheet(ctx.sheets, BNpcBase):
        # battle NPC copies of minions are registered by the minion pass
        if bnpc.model_chara in minion_models:
            continue

        model_chara = model_charas.get(bnpc.model_chara)
        if model_chara is None:
            continue

        refs = []
        for name_id in ctx.bnpc_names.get(bnpc.row_id, []):
            name = names.get(name_id)
            if name is not None and name.singular:
                refs.append(ctx.index.name_ref(ItemKind.BATTLE_NPC, name.singular))
        if not refs:
            continue

        gear = None
        if model_chara.kind is ModelCharaKind.DEMIHUMAN:
            npc_equip = read_row(ctx.sheets, NpcEquip, bnpc.npc_equip)
            if npc_equip is None:
                continue
            gear = npc_equip.gear_models()

        register_model_chara(ctx, model_chara, refs, gear)


def analyse_enpcs(ctx: BuildContext) -> None:
    model_charas = _model_charas(ctx)
    residents = {resident.row_id: resident for resident in read_sheet(ctx.sheets, ENpcResident)}

    for enpc in read_sheet(ctx.sheets, ENpcBase):
        model_chara = model_charas.get(enpc.model_chara)
        if model_chara is None:
            continue

        resident = residents.get(enpc.row_id)
        if resident is None or not resident.singular or not resident.plural:
            continue

        refs = [ctx.index.name_ref(ItemKind.EVENT_NPC, resident.singular)]
        register_model_chara(ctx, model_chara, refs, enpc.gear_models())


def _analyse_named(ctx: BuildContext, entries: Iterable[Tuple[int, str]], kind: ItemKind) -> None:
    """Shared body of the minion, mount and ornament passes."""
    model_charas = _model_charas(ctx)
    for model_chara_id, name in entries:
        model_chara = model_charas.get(model_chara_id)
        if model_chara is None or not name:
            continue
        register_model_chara(ctx, model_chara, [ctx.index.name_ref(kind, name)])


def analyse_minions(ctx: BuildContext) -> None:
    entries = ((minion.model, minion.singular) for minion in read_sheet(ctx.sheets, Companion))
    _analyse_named(ctx, entries, ItemKind.MINION)


def analyse_mounts(ctx: BuildContext) -> None:
    entries = (
        (mount.model_chara, mount.singular)
        for mount in read_sheet(ctx.sheets, Mount)
        if mount.model_chara >= 0
    )
    _analyse_named(ctx, entries, ItemKind.MOUNT)


def analyse_ornaments(ctx: BuildContext) -> None:
    entries = ((ornament.model, ornament.singular) for ornament in read_sheet(ctx.sheets, Ornament))
    _analyse_named(ctx, entries, ItemKind.FASHION_ACCESSORY)
