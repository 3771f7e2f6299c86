"""
Pytest configuration and shared fixtures.
"""

import struct
import sys
from pathlib import Path

import pytest

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from xivaffects.common import EquipSlot, ItemKind
from xivaffects.index import AffectsIndex, pack_gear_model
from xivaffects.sheets import MemoryArchive, MemorySheetProvider


# =============================================================================
# IMC BYTES
# =============================================================================

def make_imc(parts):
    """
    Encode an IMC file.

    `parts` is a list of (default_record, [variant_records]) where each
    record is (material, decal, attribute_and_sound, vfx, animation). Every
    part must list the same number of variants.
    """
    count = len(parts[0][1]) if parts else 0
    mask = (1 << len(parts)) - 1
    record = struct.Struct("<BBHBB")

    data = struct.pack("<HH", count, mask)
    for default, _ in parts:
        data += record.pack(*default)
    for variant in range(count):
        for _, variants in parts:
            data += record.pack(*variants[variant])
    return data


def rec(material, vfx=0, decal=0, attributes=0, animation=0):
    """Shorthand for one IMC record tuple."""
    return (material, decal, attributes, vfx, animation)


def gear_imc(part_index, materials, vfx=None, parts=5):
    """
    Five part gear IMC where only `part_index` has interesting records.

    `materials` are the material ids of logical variants 1..n; `vfx`
    optionally gives the vfx id of each variant.
    """
    vfx = vfx or [0] * len(materials)
    result = []
    for index in range(parts):
        if index == part_index:
            variants = [rec(m, v) for m, v in zip(materials, vfx)]
        else:
            variants = [rec(1) for _ in materials]
        result.append((rec(1), variants))
    return make_imc(result)


@pytest.fixture
def imc():
    """The IMC helpers, as a namespace."""
    class Helpers:
        make = staticmethod(make_imc)
        record = staticmethod(rec)
        gear = staticmethod(gear_imc)
    return Helpers


# =============================================================================
# SHEET ROWS
# =============================================================================

def _row(length, **columns):
    values = [0] * length
    for column, value in columns.items():
        values[int(column.lstrip("c"))] = value
    return values


class Rows:
    """Builders for sheet rows with values at the columns the records read."""

    @staticmethod
    def item(name, equip_slot_category, model_main, model_sub=0, ui_category=0):
        return _row(49, c9=name, c15=ui_category, c17=equip_slot_category, c47=model_main, c48=model_sub)

    @staticmethod
    def equip_slot_category(**slots):
        order = ["main_hand", "off_hand", "head", "body", "gloves", "waist", "legs",
                 "feet", "ears", "neck", "wrists", "finger_l", "finger_r", "soul_crystal"]
        return [slots.get(name, 0) for name in order]

    @staticmethod
    def model_chara(kind, model, base, variant):
        return [kind, model, base, variant]

    @staticmethod
    def npc_equip(gear):
        columns = (6, 11, 14, 17, 20, 23, 26, 29, 32, 35)
        values = [0] * 36
        for column, (model, variant) in zip(columns, gear):
            values[column] = pack_gear_model(model, variant)
        return values

    @staticmethod
    def bnpc_base(model_chara, npc_equip=0):
        return _row(8, c5=model_chara, c7=npc_equip)

    @staticmethod
    def enpc_base(model_chara, gear=()):
        columns = (71, 75, 78, 81, 84, 87, 90, 93, 96, 99)
        values = _row(100, c35=model_chara)
        for column, (model, variant) in zip(columns, gear):
            values[column] = pack_gear_model(model, variant)
        return values

    @staticmethod
    def enpc_resident(singular, plural):
        return [singular, 0, plural]

    @staticmethod
    def named_model(name, model):
        """Companion and Mount rows: name at 0, model at 8."""
        return _row(9, c0=name, c8=model)

    @staticmethod
    def ornament(model, name):
        return _row(9, c0=model, c8=name)

    @staticmethod
    def emote(name, timelines, text_command=0):
        values = _row(20, c0=name, c19=text_command)
        for i, timeline in enumerate(timelines[:7]):
            values[1 + i] = timeline
        return values

    @staticmethod
    def text_command(command):
        return _row(6, c5=command)

    @staticmethod
    def action_timeline(key):
        return _row(7, c6=key)

    @staticmethod
    def action(name, start, end, hit):
        return [name, 0, 0, 0, 0, start, 0, end, hit]

    @staticmethod
    def map(map_id, region, place, sub):
        return _row(13, c6=map_id, c10=region, c11=place, c12=sub)


@pytest.fixture
def rows():
    return Rows


@pytest.fixture
def sheets():
    """Empty in-memory sheet provider."""
    return MemorySheetProvider()


@pytest.fixture
def archive():
    """Empty in-memory archive."""
    return MemoryArchive()


# =============================================================================
# INDEX FIXTURES
# =============================================================================

@pytest.fixture
def sample_index():
    """
    Small hand-built index:

    - monster m0133 b0002 with variants 7 and 8
    - equipment e0863 feet variants 6 and 7, vfx 3 on variant 7
    - weapon w0301 b0001 variant 3
    - an emote and an action sharing timeline keys
    - map s1d1/00
    """
    index = AffectsIndex()
    index.add_monster(133, 2, 7, [index.name_ref(ItemKind.MISCELLANEOUS, "X")])
    index.add_monster(133, 2, 8, [index.name_ref(ItemKind.BATTLE_NPC, "Ahriman")])
    index.add_monster(133, 2, 8, [index.name_ref(ItemKind.MINION, "Wind-up Ahriman")])
    index.add_monster_vfx(133, 2, 1, 8)

    index.add_equipment(EquipSlot.FEET, 863, 6, [index.name_ref(ItemKind.GEAR, "Iron Boots")])
    index.add_equipment(EquipSlot.FEET, 863, 7, [index.name_ref(ItemKind.GEAR, "Flame Boots")])
    index.add_equipment(EquipSlot.BODY, 863, 6, [index.name_ref(ItemKind.GEAR, "Iron Mail")])
    index.add_equipment_vfx(863, 3, EquipSlot.FEET, 7)

    index.add_weapon(301, 1, 3, [index.name_ref(ItemKind.WEAPON, "Cesti")])

    emote = index.names.intern("Change Pose")
    command = index.names.intern("/cpose")
    index.add_emote("pose00_loop", (ItemKind.EMOTE, emote, command))
    index.add_action("emote/pose00_loop", index.name_ref(ItemKind.ACTION, "Pose Action"))

    index.add_map("s1d1/00", index.name_ref(ItemKind.MAP, "La Noscea - Limsa Lominsa"))
    return index
