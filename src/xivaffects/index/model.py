"""
Affects Index Model

The persisted lookup structure answering "which named things use this
model/variant". Every entity family is a nested dict keyed by the ids that
appear in archive paths, ending in a set of (ItemKind, name index) pairs.
Names are interned once in a NamePool and referenced by a 16 bit index.

Variant keys are always physical (material) variant ids, i.e. the id that
appears in material and texture paths after remapping through IMC files.
"""

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Dict, Iterable, Iterator, List, Optional, Set, Tuple

from xivaffects.common import EquipSlot, ItemKind

logger = logging.getLogger(__name__)

# Name references are stored as u16
MAX_NAMES = 0x10000

NameRef = Tuple[ItemKind, int]
EmoteRef = Tuple[ItemKind, int, Optional[int]]
NameSet = Set[NameRef]

# model => secondary => variant => names
VariantTree = Dict[int, Dict[int, Dict[int, NameSet]]]
# model => secondary => vfx => variants
VfxTree = Dict[int, Dict[int, Dict[int, Set[int]]]]


class IndexBuildError(Exception):
    """Fatal error while constructing an index."""


class NamePoolOverflow(IndexBuildError):
    """More distinct names than a 16 bit reference can address."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"name pool is full ({MAX_NAMES} names), cannot add {name!r}")


class IndexFormatError(Exception):
    """A persisted index document could not be read."""


class NamePool:
    """Append-only, deduplicated list of display names."""

    def __init__(self, names: Optional[Iterable[str]] = None):
        self._names: List[str] = []
        self._lookup: Dict[str, int] = {}
        for name in names or ():
            self.intern(name)

    def intern(self, name: str) -> int:
        """Index of `name`, adding it if it has not been seen."""
        index = self._lookup.get(name)
        if index is not None:
            return index
        if len(self._names) >= MAX_NAMES:
            raise NamePoolOverflow(name)
        index = len(self._names)
        self._names.append(name)
        self._lookup[name] = index
        return index

    def __getitem__(self, index: int) -> str:
        return self._names[index]

    def __len__(self) -> int:
        return len(self._names)

    def __iter__(self) -> Iterator[str]:
        return iter(self._names)

    def to_list(self) -> List[str]:
        return list(self._names)

    @classmethod
    def from_list(cls, names: List[str]) -> "NamePool":
        """Restore a saved pool, keeping every index exactly as written."""
        if not isinstance(names, list):
            raise IndexFormatError("names must be a list")
        if len(names) > MAX_NAMES:
            raise IndexFormatError(f"{len(names)} names exceeds the limit of {MAX_NAMES}")
        pool = cls()
        for index, name in enumerate(names):
            if not isinstance(name, str):
                raise IndexFormatError(f"name {index} is not a string")
            if name in pool._lookup:
                raise IndexFormatError(f"duplicate name {name!r} at {index}")
            pool._names.append(name)
            pool._lookup[name] = index
        return pool


@dataclass
class VfxMaps:
    """Visual effect id => physical variants, per family."""
    # model => vfx => {(slot, variant)}
    equipment: Dict[int, Dict[int, Set[Tuple[EquipSlot, int]]]] = field(default_factory=dict)
    monsters: VfxTree = field(default_factory=dict)
    demihumans: VfxTree = field(default_factory=dict)
    weapons: VfxTree = field(default_factory=dict)


def _bucket(mapping: dict, *keys) -> set:
    """Walk/create nested dicts along `keys`, returning the set at the end."""
    for key in keys[:-1]:
        mapping = mapping.setdefault(key, {})
    return mapping.setdefault(keys[-1], set())


@dataclass
class AffectsIndex:
    names: NamePool = field(default_factory=NamePool)
    # slot => model => variant => names
    equipment: Dict[EquipSlot, Dict[int, Dict[int, NameSet]]] = field(default_factory=dict)
    # model => weapon => variant => names
    weapons: VariantTree = field(default_factory=dict)
    # timeline key => {(kind, name, command)}
    emotes: Dict[str, Set[EmoteRef]] = field(default_factory=dict)
    # model => base => variant => names
    monsters: VariantTree = field(default_factory=dict)
    demihumans: VariantTree = field(default_factory=dict)
    # timeline key => names
    actions: Dict[str, NameSet] = field(default_factory=dict)
    # "primary/NN" => names
    maps: Dict[str, NameSet] = field(default_factory=dict)
    vfx: VfxMaps = field(default_factory=VfxMaps)

    # -------------------------------------------------------------------------
    # Construction
    # -------------------------------------------------------------------------

    def name_ref(self, kind: ItemKind, name: str) -> NameRef:
        return (kind, self.names.intern(name))

    def add_equipment(self, slot: EquipSlot, model: int, variant: int, refs: Iterable[NameRef]) -> None:
        _bucket(self.equipment, slot, model, variant).update(refs)

    def add_weapon(self, model: int, weapon: int, variant: int, refs: Iterable[NameRef]) -> None:
        _bucket(self.weapons, model, weapon, variant).update(refs)

    def add_monster(self, model: int, base: int, variant: int, refs: Iterable[NameRef]) -> None:
        _bucket(self.monsters, model, base, variant).update(refs)

    def add_demihuman(self, model: int, base: int, variant: int, refs: Iterable[NameRef]) -> None:
        _bucket(self.demihumans, model, base, variant).update(refs)

    def add_emote(self, key: str, ref: EmoteRef) -> None:
        _bucket(self.emotes, key).add(ref)

    def add_action(self, key: str, ref: NameRef) -> None:
        _bucket(self.actions, key).add(ref)

    def add_map(self, key: str, ref: NameRef) -> None:
        _bucket(self.maps, key).add(ref)

    def add_equipment_vfx(self, model: int, vfx_id: int, slot: EquipSlot, variant: int) -> None:
        _bucket(self.vfx.equipment, model, vfx_id).add((slot, variant))

    def add_weapon_vfx(self, model: int, weapon: int, vfx_id: int, variant: int) -> None:
        _bucket(self.vfx.weapons, model, weapon, vfx_id).add(variant)

    def add_monster_vfx(self, model: int, base: int, vfx_id: int, variant: int) -> None:
        _bucket(self.vfx.monsters, model, base, vfx_id).add(variant)

    def add_demihuman_vfx(self, model: int, base: int, vfx_id: int, variant: int) -> None:
        _bucket(self.vfx.demihumans, model, base, vfx_id).add(variant)

    # -------------------------------------------------------------------------
    # Serialization
    # -------------------------------------------------------------------------

    def to_dict(self) -> Dict[str, Any]:
        """Plain JSON-ready structure with every key and set member sorted."""
        return {
            "names": self.names.to_list(),
            "equipment": _dump_tree(self.equipment, 3, _dump_names),
            "weapons": _dump_tree(self.weapons, 3, _dump_names),
            "emotes": _dump_keyed(self.emotes, _dump_emotes),
            "monsters": _dump_tree(self.monsters, 3, _dump_names),
            "demihumans": _dump_tree(self.demihumans, 3, _dump_names),
            "actions": _dump_keyed(self.actions, _dump_names),
            "maps": _dump_keyed(self.maps, _dump_names),
            "vfx": {
                "equipment": _dump_tree(self.vfx.equipment, 2, _dump_slot_variants),
                "monsters": _dump_tree(self.vfx.monsters, 3, sorted),
                "demihumans": _dump_tree(self.vfx.demihumans, 3, sorted),
                "weapons": _dump_tree(self.vfx.weapons, 3, sorted),
            },
        }

    def to_json(self, pretty: bool = False) -> str:
        if pretty:
            return json.dumps(self.to_dict(), indent=2, ensure_ascii=False)
        return json.dumps(self.to_dict(), separators=(",", ":"), ensure_ascii=False)

    def save(self, path: Path, pretty: bool = False) -> None:
        Path(path).write_text(self.to_json(pretty), encoding="utf-8")
        logger.info(f"Wrote index with {len(self.names)} names to {path}")

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AffectsIndex":
        try:
            vfx = data.get("vfx", {})
            equipment = _load_tree(data.get("equipment", {}), 3, _load_names)
            index = cls(
                names=NamePool.from_list(data.get("names", [])),
                equipment={EquipSlot(slot): models for slot, models in equipment.items()},
                weapons=_load_tree(data.get("weapons", {}), 3, _load_names),
                emotes=_load_keyed(data.get("emotes", {}), _load_emotes),
                monsters=_load_tree(data.get("monsters", {}), 3, _load_names),
                demihumans=_load_tree(data.get("demihumans", {}), 3, _load_names),
                actions=_load_keyed(data.get("actions", {}), _load_names),
                maps=_load_keyed(data.get("maps", {}), _load_names),
                vfx=VfxMaps(
                    equipment=_load_tree(vfx.get("equipment", {}), 2, _load_slot_variants),
                    monsters=_load_tree(vfx.get("monsters", {}), 3, set),
                    demihumans=_load_tree(vfx.get("demihumans", {}), 3, set),
                    weapons=_load_tree(vfx.get("weapons", {}), 3, set),
                ),
            )
        except (AttributeError, KeyError, TypeError, ValueError) as e:
            raise IndexFormatError(f"malformed index document: {e}") from e
        index._check_refs()
        return index

    def _check_refs(self) -> None:
        """Every name reference must point inside the name pool."""
        count = len(self.names)
        trees = {
            "equipment": self.equipment,
            "weapons": self.weapons,
            "monsters": self.monsters,
            "demihumans": self.demihumans,
            "actions": self.actions,
            "maps": self.maps,
        }
        for section, tree in trees.items():
            for refs in _leaves(tree):
                for _, name in refs:
                    if not 0 <= name < count:
                        raise IndexFormatError(f"{section}: name reference {name} out of range ({count} names)")
        for refs in self.emotes.values():
            for _, name, command in refs:
                for ref in (name,) if command is None else (name, command):
                    if not 0 <= ref < count:
                        raise IndexFormatError(f"emotes: name reference {ref} out of range ({count} names)")

    @classmethod
    def from_json(cls, text: str) -> "AffectsIndex":
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise IndexFormatError(f"index is not valid JSON: {e}") from e
        return cls.from_dict(data)

    @classmethod
    def load(cls, path: Path) -> "AffectsIndex":
        index = cls.from_json(Path(path).read_text(encoding="utf-8"))
        logger.debug(f"Loaded index with {len(index.names)} names from {path}")
        return index


# =============================================================================
# Serialization helpers
# =============================================================================

def _dump_tree(mapping: dict, depth: int, leaf: Callable) -> dict:
    """Integer-keyed nested dicts -> string keys in numeric order."""
    if depth == 0:
        return leaf(mapping)
    return {str(int(key)): _dump_tree(mapping[key], depth - 1, leaf) for key in sorted(mapping)}


def _load_tree(data: dict, depth: int, leaf: Callable) -> dict:
    if depth == 0:
        return leaf(data)
    return {int(key): _load_tree(value, depth - 1, leaf) for key, value in data.items()}


def _leaves(mapping: dict) -> Iterator[set]:
    """Every set at the bottom of a nested dict."""
    for value in mapping.values():
        if isinstance(value, dict):
            yield from _leaves(value)
        else:
            yield value


def _dump_keyed(mapping: Dict[str, Any], leaf: Callable) -> dict:
    return {key: leaf(mapping[key]) for key in sorted(mapping)}


def _load_keyed(data: Dict[str, Any], leaf: Callable) -> dict:
    return {key: leaf(value) for key, value in data.items()}


def _dump_names(refs: NameSet) -> List[List[int]]:
    return [[int(kind), index] for kind, index in sorted(refs)]


def _load_names(data: List[List[int]]) -> NameSet:
    return {(ItemKind(kind), int(index)) for kind, index in data}


def _emote_sort_key(ref: EmoteRef) -> Tuple[int, int, int]:
    kind, index, command = ref
    return (int(kind), index, -1 if command is None else command)


def _dump_emotes(refs: Set[EmoteRef]) -> List[List[Optional[int]]]:
    return [[int(kind), index, command] for kind, index, command in sorted(refs, key=_emote_sort_key)]


def _load_emotes(data: List[List[Optional[int]]]) -> Set[EmoteRef]:
    return {
        (ItemKind(kind), int(index), None if command is None else int(command))
        for kind, index, command in data
    }


def _dump_slot_variants(pairs: Set[Tuple[EquipSlot, int]]) -> List[List[int]]:
    return [[int(slot), variant] for slot, variant in sorted(pairs)]


def _load_slot_variants(data: List[List[int]]) -> Set[Tuple[EquipSlot, int]]:
    return {(EquipSlot(slot), variant) for slot, variant in data}
