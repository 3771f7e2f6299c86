"""
Affects Resolver

Maps a parsed path descriptor onto the affects index and returns the names
it touches, grouped by ItemKind.

Model level files (imc, mdl, skeletons) affect every variant of the model,
so their result is the union of all variant buckets. Material and texture
files name one physical variant and are looked up directly. Effect files
(avfx) go through the vfx index first: effect id => physical variants =>
names.
"""

import logging
from typing import Dict, Iterable, List, Optional, Set, Tuple

from xivaffects.common import EquipSlot, ItemKind
from xivaffects.index.model import AffectsIndex, NameRef, NameSet, VariantTree
from xivaffects.parser import (
    AccessoryImc,
    AccessoryMdl,
    AccessoryMtrl,
    AccessoryTex,
    CharacterAttachOffset,
    CharacterBodyPath,
    CharacterCatchlight,
    CharacterDecal,
    CharacterPap,
    CharacterSkeleton,
    CharacterSkin,
    CharacterTimeline,
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
    MonsterSkeleton,
    MonsterTex,
    PathDescriptor,
    PathParseError,
    WeaponAvfx,
    WeaponImc,
    WeaponMdl,
    WeaponMtrl,
    WeaponSkeleton,
    WeaponTex,
    parse_path,
)
from xivaffects.resolver import names
from xivaffects.resolver.heuristics import categorise

logger = logging.getLogger(__name__)

Affects = Dict[ItemKind, Set[str]]

GEAR_SLOTS = [slot for slot in EquipSlot if not slot.is_accessory]
ACCESSORY_SLOTS = [slot for slot in EquipSlot if slot.is_accessory]


class Resolution:
    """Accumulates (kind, name) pairs for one query."""

    def __init__(self, index: AffectsIndex):
        self.index = index
        self.affects: Affects = {}

    def add(self, kind: ItemKind, name: str) -> None:
        self.affects.setdefault(kind, set()).add(name)

    def add_refs(self, refs: Iterable[NameRef]) -> None:
        for kind, name_index in refs:
            self.add(kind, self.index.names[name_index])

    def add_buckets(self, variants: Optional[Dict[int, NameSet]], only: Optional[Iterable[int]] = None) -> None:
        """Names from a variant => names map, restricted to `only` if given."""
        if not variants:
            return
        keys = variants.keys() if only is None else only
        for variant in keys:
            self.add_refs(variants.get(variant, ()))


def _variants(tree: VariantTree, primary: int, secondary: int) -> Dict[int, NameSet]:
    return tree.get(primary, {}).get(secondary, {})


def _vfx_variants(tree: Dict[int, Dict[int, Dict[int, Set[int]]]], primary: int,
                  secondary: int, effect: int) -> Set[int]:
    return tree.get(primary, {}).get(secondary, {}).get(effect, set())


# =============================================================================
# Families
# =============================================================================

def _resolve_body(res: Resolution, tree: VariantTree, vfx_tree, descriptor) -> None:
    """Monster, weapon and demihuman share one shape: model => secondary => variant."""
    primary, secondary = descriptor.primary_id, descriptor.secondary_id

    if isinstance(descriptor, (MonsterSkeleton, WeaponSkeleton, DemihumanSkeleton)):
        # skeleton bases are not body ids; the skeleton serves the whole model
        for variants in tree.get(primary, {}).values():
            res.add_buckets(variants)
    elif isinstance(descriptor, (MonsterImc, MonsterMdl, WeaponImc, WeaponMdl, DemihumanImc, DemihumanMdl)):
        res.add_buckets(_variants(tree, primary, secondary))
    elif isinstance(descriptor, (MonsterMtrl, MonsterTex, WeaponMtrl, WeaponTex, DemihumanMtrl, DemihumanTex)):
        res.add_buckets(_variants(tree, primary, secondary), [descriptor.variant_id])
    elif isinstance(descriptor, (MonsterAvfx, WeaponAvfx, DemihumanAvfx)):
        physical = _vfx_variants(vfx_tree, primary, secondary, descriptor.effect_id)
        res.add_buckets(_variants(tree, primary, secondary), sorted(physical))


def _resolve_gear(res: Resolution, descriptor, slots: List[EquipSlot]) -> None:
    equipment = res.index.equipment
    model = descriptor.primary_id

    if isinstance(descriptor, EquipmentPath) and model == 0:
        res.add(ItemKind.GEAR, names.smallclothes_name(getattr(descriptor, "slot", None)))
        return

    if isinstance(descriptor, (EquipmentImc, AccessoryImc)):
        for slot in slots:
            res.add_buckets(equipment.get(slot, {}).get(model))
    elif isinstance(descriptor, (EquipmentMdl, AccessoryMdl)):
        res.add_buckets(equipment.get(descriptor.slot, {}).get(model))
    elif isinstance(descriptor, (EquipmentMtrl, EquipmentTex, AccessoryMtrl, AccessoryTex)):
        res.add_buckets(equipment.get(descriptor.slot, {}).get(model), [descriptor.variant_id])
    elif isinstance(descriptor, EquipmentAvfx):
        pairs: Set[Tuple[EquipSlot, int]] = res.index.vfx.equipment.get(model, {}).get(descriptor.effect_id, set())
        for slot, variant in sorted(pairs):
            if slot in slots:
                res.add_buckets(equipment.get(slot, {}).get(model), [variant])


def _resolve_character(res: Resolution, descriptor) -> None:
    kind = ItemKind.CUSTOMISATION

    if isinstance(descriptor, CharacterBodyPath):
        res.add(kind, names.body_name(descriptor))
    elif isinstance(descriptor, CharacterCatchlight):
        res.add(kind, names.catchlight_name(descriptor))
    elif isinstance(descriptor, CharacterSkin):
        res.add(kind, names.skin_name(descriptor))
    elif isinstance(descriptor, CharacterDecal):
        res.add(kind, names.decal_name(descriptor))
    elif isinstance(descriptor, CharacterSkeleton):
        res.add(kind, names.skeleton_name(descriptor))
    elif isinstance(descriptor, CharacterAttachOffset):
        res.add(kind, names.attach_offset_name(descriptor))
    elif isinstance(descriptor, CharacterTimeline):
        _resolve_timeline(res, descriptor)


def _resolve_timeline(res: Resolution, descriptor: CharacterTimeline) -> None:
    key = descriptor.key
    for kind, name_index, command_index in res.index.emotes.get(key.split("/")[-1], ()):
        name = res.index.names[name_index]
        if command_index is not None:
            name = f"{name} ({res.index.names[command_index]})"
        res.add(kind, name)

    res.add_refs(res.index.actions.get(key, ()))

    if isinstance(descriptor, CharacterPap):
        base = names.base_animation_name(descriptor)
        if base is not None:
            res.add(ItemKind.ANIMATION, base)


# =============================================================================
# Entry points
# =============================================================================

def resolve(index: AffectsIndex, descriptor: PathDescriptor) -> Affects:
    """Names affected by the file `descriptor` addresses, grouped by kind."""
    res = Resolution(index)

    if isinstance(descriptor, (MonsterImc, MonsterMdl, MonsterMtrl, MonsterTex, MonsterAvfx, MonsterSkeleton)):
        _resolve_body(res, index.monsters, index.vfx.monsters, descriptor)
    elif isinstance(descriptor, (WeaponImc, WeaponMdl, WeaponMtrl, WeaponTex, WeaponAvfx, WeaponSkeleton)):
        _resolve_body(res, index.weapons, index.vfx.weapons, descriptor)
    elif isinstance(descriptor, (DemihumanImc, DemihumanMdl, DemihumanMtrl, DemihumanTex,
                                 DemihumanAvfx, DemihumanSkeleton)):
        _resolve_body(res, index.demihumans, index.vfx.demihumans, descriptor)
    elif isinstance(descriptor, EquipmentPath):
        _resolve_gear(res, descriptor, GEAR_SLOTS)
    elif isinstance(descriptor, (AccessoryImc, AccessoryMdl, AccessoryMtrl, AccessoryTex)):
        _resolve_gear(res, descriptor, ACCESSORY_SLOTS)
    elif isinstance(descriptor, MapTexture):
        res.add_refs(index.maps.get(descriptor.key, ()))
    elif isinstance(descriptor, Icon):
        res.add(ItemKind.ICON, names.icon_name(descriptor))
    elif isinstance(descriptor, FontFile):
        res.add(ItemKind.FONT, names.font_file_name(descriptor))
    elif isinstance(descriptor, FontTexture):
        res.add(ItemKind.FONT, names.font_texture_name(descriptor))
    else:
        _resolve_character(res, descriptor)

    return res.affects


def fallback(path: str) -> Affects:
    """Heuristic category for a path the grammar rejected."""
    category = categorise(path)
    if category is None:
        return {}
    return {ItemKind.MISCELLANEOUS: {category}}


def resolve_path(index: AffectsIndex, path: str) -> Affects:
    """
    Names affected by an archive path. Never raises for bad paths: an
    unrecognised path yields a heuristic category or an empty result.
    """
    path = path.strip()
    if path == names.STIGMA_PATH:
        return {ItemKind.CUSTOMISATION: {names.STIGMA_NAME}}

    try:
        descriptor = parse_path(path)
    except PathParseError as e:
        logger.debug(f"Falling back to heuristics: {e}")
        return fallback(path)

    return resolve(index, descriptor)


def format_affects(affects: Affects) -> List[str]:
    """`Kind: name` lines in kind order, names sorted."""
    lines = []
    for kind in sorted(affects):
        for name in sorted(affects[kind]):
            lines.append(f"{kind.display_name}: {name}")
    return lines
