"""
Sheet Records

Typed views over the game sheets the index builder reads. Each record is
built with from_row(), which reads the fixed column offsets of its sheet
and raises FieldError if any field is missing or of the wrong type.
"""

from dataclasses import dataclass
from typing import List, Optional, Tuple

from xivaffects.common import EquipSlot, ModelCharaKind
from xivaffects.index.packing import unpack_gear_model
from xivaffects.sheets.provider import Row


@dataclass
class Item:
    SHEET = "Item"

    row_id: int
    name: str
    item_ui_category: int
    equip_slot_category: int
    model_main: int
    model_sub: int

    @classmethod
    def from_row(cls, row: Row) -> "Item":
        return cls(
            row_id=row.row_id,
            name=row.string(9),
            item_ui_category=row.u8(15),
            equip_slot_category=row.u8(17),
            model_main=row.u64(47),
            model_sub=row.u64(48),
        )


@dataclass
class EquipSlotCategory:
    """Which slots an item occupies (1) or blocks (-1)."""
    SHEET = "EquipSlotCategory"

    row_id: int
    main_hand: int
    off_hand: int
    head: int
    body: int
    gloves: int
    waist: int
    legs: int
    feet: int
    ears: int
    neck: int
    wrists: int
    finger_l: int
    finger_r: int
    soul_crystal: int

    @classmethod
    def from_row(cls, row: Row) -> "EquipSlotCategory":
        return cls(row.row_id, *(row.i8(column) for column in range(14)))

    @property
    def is_weapon(self) -> bool:
        return self.main_hand == 1 or self.off_hand == 1

    def equip_slot(self) -> Optional[EquipSlot]:
        """First slot this category occupies, in the order the game checks them."""
        for value, slot in (
            (self.head, EquipSlot.HEAD),
            (self.gloves, EquipSlot.HANDS),
            (self.legs, EquipSlot.LEGS),
            (self.feet, EquipSlot.FEET),
            (self.body, EquipSlot.BODY),
            (self.ears, EquipSlot.EARS),
            (self.neck, EquipSlot.NECK),
            (self.finger_r, EquipSlot.RFINGER),
            (self.finger_l, EquipSlot.LFINGER),
            (self.wrists, EquipSlot.WRISTS),
        ):
            if value == 1:
                return slot
        return None

    def __str__(self) -> str:
        slots = []
        blocks = []
        for label, value in (
            ("main hand", self.main_hand),
            ("off hand", self.off_hand),
            ("head", self.head),
            ("body", self.body),
            ("gloves", self.gloves),
            ("waist", self.waist),
            ("legs", self.legs),
            ("feet", self.feet),
            ("ears", self.ears),
            ("neck", self.neck),
            ("wrists", self.wrists),
            ("left finger", self.finger_l),
            ("right finger", self.finger_r),
            ("soul crystal", self.soul_crystal),
        ):
            if value == 1:
                slots.append(label)
            elif value == -1:
                blocks.append(label)

        text = ", ".join(slots) if slots else "none"
        if blocks:
            text += f" (blocks {', '.join(blocks)})"
        return text


@dataclass
class ModelChara:
    SHEET = "ModelChara"

    row_id: int
    kind: ModelCharaKind
    model: int
    base: int
    variant: int

    @classmethod
    def from_row(cls, row: Row) -> "ModelChara":
        return cls(
            row_id=row.row_id,
            kind=ModelCharaKind.from_raw(row.u8(0)),
            model=row.u16(1),
            base=row.u8(2),
            variant=row.u8(3),
        )


class _GearSet:
    """Ten packed gear models in head, body, hands, legs, feet, ears, neck, wrists, left ring, right ring order."""

    gear: List[int]

    def gear_models(self) -> List[Tuple[int, int]]:
        """(model, variant) per slot."""
        return [unpack_gear_model(value) for value in self.gear]


_NPC_EQUIP_COLUMNS = (6, 11, 14, 17, 20, 23, 26, 29, 32, 35)
_ENPC_GEAR_COLUMNS = (71, 75, 78, 81, 84, 87, 90, 93, 96, 99)


@dataclass
class NpcEquip(_GearSet):
    SHEET = "NpcEquip"

    row_id: int
    gear: List[int]

    @classmethod
    def from_row(cls, row: Row) -> "NpcEquip":
        return cls(row.row_id, [row.u32(column) for column in _NPC_EQUIP_COLUMNS])


@dataclass
class BNpcBase:
    SHEET = "BNpcBase"

    row_id: int
    model_chara: int
    npc_equip: int

    @classmethod
    def from_row(cls, row: Row) -> "BNpcBase":
        return cls(row.row_id, model_chara=row.u16(5), npc_equip=row.u16(7))


@dataclass
class BNpcName:
    SHEET = "BNpcName"

    row_id: int
    singular: str

    @classmethod
    def from_row(cls, row: Row) -> "BNpcName":
        return cls(row.row_id, row.string(0))


@dataclass
class ENpcBase(_GearSet):
    SHEET = "ENpcBase"

    row_id: int
    model_chara: int
    gear: List[int]

    @classmethod
    def from_row(cls, row: Row) -> "ENpcBase":
        return cls(
            row.row_id,
            model_chara=row.u16(35),
            gear=[row.u32(column) for column in _ENPC_GEAR_COLUMNS],
        )


@dataclass
class ENpcResident:
    SHEET = "ENpcResident"

    row_id: int
    singular: str
    plural: str

    @classmethod
    def from_row(cls, row: Row) -> "ENpcResident":
        return cls(row.row_id, singular=row.string(0), plural=row.string(2))


@dataclass
class Companion:
    SHEET = "Companion"

    row_id: int
    singular: str
    model: int

    @classmethod
    def from_row(cls, row: Row) -> "Companion":
        return cls(row.row_id, singular=row.string(0), model=row.u16(8))


@dataclass
class Mount:
    SHEET = "Mount"

    row_id: int
    singular: str
    model_chara: int

    @classmethod
    def from_row(cls, row: Row) -> "Mount":
        return cls(row.row_id, singular=row.string(0), model_chara=row.i32(8))


@dataclass
class Ornament:
    SHEET = "Ornament"

    row_id: int
    model: int
    singular: str

    @classmethod
    def from_row(cls, row: Row) -> "Ornament":
        return cls(row.row_id, model=row.u16(0), singular=row.string(8))


@dataclass
class Emote:
    SHEET = "Emote"

    row_id: int
    name: str
    action_timelines: List[int]
    text_command: int

    @classmethod
    def from_row(cls, row: Row) -> "Emote":
        return cls(
            row.row_id,
            name=row.string(0),
            action_timelines=[row.u16(column) for column in range(1, 8)],
            text_command=row.i32(19),
        )

    @property
    def first_timeline(self) -> Optional[int]:
        for timeline in self.action_timelines:
            if timeline != 0:
                return timeline
        return None


@dataclass
class TextCommand:
    SHEET = "TextCommand"

    row_id: int
    command: str

    @classmethod
    def from_row(cls, row: Row) -> "TextCommand":
        return cls(row.row_id, row.string(5))


@dataclass
class ActionTimeline:
    SHEET = "ActionTimeline"

    row_id: int
    key: str

    @classmethod
    def from_row(cls, row: Row) -> "ActionTimeline":
        return cls(row.row_id, row.string(6))


@dataclass
class ActionCastTimeline:
    SHEET = "ActionCastTimeline"

    row_id: int
    action_timeline: int

    @classmethod
    def from_row(cls, row: Row) -> "ActionCastTimeline":
        return cls(row.row_id, row.u16(0))


@dataclass
class Action:
    SHEET = "Action"

    row_id: int
    name: str
    animation_start: int
    animation_end: int
    animation_hit: int

    @classmethod
    def from_row(cls, row: Row) -> "Action":
        return cls(
            row.row_id,
            name=row.string(0),
            animation_start=row.u8(5),
            animation_end=row.i16(7),
            animation_hit=row.u16(8),
        )


@dataclass
class Map:
    SHEET = "Map"

    row_id: int
    id: str
    place_name_region: int
    place_name: int
    place_name_sub: int

    @classmethod
    def from_row(cls, row: Row) -> "Map":
        return cls(
            row.row_id,
            id=row.string(6),
            place_name_region=row.u16(10),
            place_name=row.u16(11),
            place_name_sub=row.u16(12),
        )


@dataclass
class PlaceName:
    SHEET = "PlaceName"

    row_id: int
    name: str

    @classmethod
    def from_row(cls, row: Row) -> "PlaceName":
        return cls(row.row_id, row.string(0))
