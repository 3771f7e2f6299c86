"""
Tests for the index builder passes.

Every test builds a tiny in-memory game: sheet rows at the columns the
records read, and IMC files encoded with the conftest helpers.
"""

import logging

import pytest

from xivaffects.builder import BuildContext, IndexBuilder, build_index
from xivaffects.builder.items import DATED_EXCEPTION, analyse_items
from xivaffects.builder.maps import analyse_maps, map_name
from xivaffects.builder.npcs import (
    analyse_bnpcs,
    analyse_enpcs,
    analyse_minions,
    analyse_mounts,
    analyse_ornaments,
)
from xivaffects.builder.pipeline import PASSES
from xivaffects.builder.timelines import analyse_actions, analyse_emotes
from xivaffects.builder.vfx import analyse_equipment_vfx, analyse_monster_vfx, analyse_weapon_vfx
from xivaffects.common import EquipSlot, ItemKind
from xivaffects.index import pack_gear_model, pack_weapon_model
from xivaffects.resolver import resolve_path
from xivaffects.sheets import BNpcLink


EQUIPMENT_IMC = "chara/equipment/e0863/e0863.imc"
RING_IMC = "chara/accessory/a0050/a0050.imc"
WEAPON_IMC = "chara/weapon/w0301/obj/body/b0001/b0001.imc"
MONSTER_IMC = "chara/monster/m0133/obj/body/b0002/b0002.imc"


def named(index, refs):
    """(kind, name) pairs for a set of name references."""
    return {(kind, index.names[name]) for kind, name in refs}


@pytest.fixture
def ctx(sheets, archive):
    return BuildContext(sheets, archive)


# =============================================================================
# ITEMS
# =============================================================================

class TestItems:
    """Test the gear and weapon pass."""

    @pytest.fixture(autouse=True)
    def categories(self, sheets, rows):
        sheets.add_row("EquipSlotCategory", 8, rows.equip_slot_category(feet=1))
        sheets.add_row("EquipSlotCategory", 12, rows.equip_slot_category(finger_r=1, finger_l=-1))
        sheets.add_row("EquipSlotCategory", 13, rows.equip_slot_category(main_hand=1))
        sheets.add_row("EquipSlotCategory", 14, rows.equip_slot_category(waist=1))

    def test_gear_variant_is_remapped(self, ctx, sheets, archive, rows, imc):
        """Logical variant 2 is stored under its physical material id."""
        sheets.add_row("Item", 1, rows.item("Iron Boots", 8, pack_gear_model(863, 2)))
        archive.files[EQUIPMENT_IMC] = imc.gear(EquipSlot.FEET.imc_part_index, [5, 6])

        analyse_items(ctx)

        models = ctx.index.equipment[EquipSlot.FEET][863]
        assert list(models) == [6]
        assert named(ctx.index, models[6]) == {(ItemKind.GEAR, "Iron Boots")}

    def test_missing_imc_keeps_logical_variant(self, ctx, sheets, rows):
        sheets.add_row("Item", 1, rows.item("Iron Boots", 8, pack_gear_model(863, 2)))
        analyse_items(ctx)
        assert 2 in ctx.index.equipment[EquipSlot.FEET][863]

    def test_ring_registers_both_fingers(self, ctx, sheets, archive, rows, imc):
        sheets.add_row("Item", 1, rows.item("Silver Ring", 12, pack_gear_model(50, 1)))
        archive.files[RING_IMC] = imc.gear(EquipSlot.RFINGER.imc_part_index, [9])

        analyse_items(ctx)

        for slot in (EquipSlot.RFINGER, EquipSlot.LFINGER):
            assert named(ctx.index, ctx.index.equipment[slot][50][9]) == {(ItemKind.GEAR, "Silver Ring")}

    def test_dated_items_skipped(self, ctx, sheets, rows):
        sheets.add_row("Item", 1, rows.item("Dated Iron Boots", 8, pack_gear_model(863, 1)))
        sheets.add_row("Item", DATED_EXCEPTION, rows.item("Dated Canvas Boots", 8, pack_gear_model(864, 1)))

        analyse_items(ctx)

        feet = ctx.index.equipment[EquipSlot.FEET]
        assert 863 not in feet
        assert 864 in feet

    def test_unusable_rows_skipped(self, ctx, sheets, rows):
        """Unnamed, slotless, unknown-category and belt rows add nothing."""
        sheets.add_row("Item", 1, rows.item("", 8, pack_gear_model(863, 1)))
        sheets.add_row("Item", 2, rows.item("Potion", 0, 0))
        sheets.add_row("Item", 3, rows.item("Mystery", 99, pack_gear_model(863, 1)))
        sheets.add_row("Item", 4, rows.item("Belt", 14, pack_gear_model(863, 1)))

        analyse_items(ctx)

        assert ctx.index.equipment == {}
        assert ctx.index.weapons == {}
        assert len(ctx.index.names) == 0

    def test_weapon_with_offhand(self, ctx, sheets, archive, rows, imc):
        """A secondary model is registered with its category suffix."""
        sheets.add_row("Item", 1, rows.item(
            "Cesti", 13,
            pack_weapon_model(301, 1, 3),
            pack_weapon_model(351, 1, 3),
            ui_category=1,
        ))
        archive.files[WEAPON_IMC] = imc.make([(imc.record(1), [imc.record(1), imc.record(1), imc.record(30)])])

        analyse_items(ctx)

        assert named(ctx.index, ctx.index.weapons[301][1][30]) == {(ItemKind.WEAPON, "Cesti")}
        assert named(ctx.index, ctx.index.weapons[351][1][3]) == {(ItemKind.WEAPON, "Cesti (Offhand)")}

    def test_shield_has_no_suffix(self, ctx, sheets, rows):
        sheets.add_row("Item", 1, rows.item(
            "Buckler", 13, pack_weapon_model(101, 1, 1), pack_weapon_model(101, 2, 1), ui_category=11,
        ))
        analyse_items(ctx)
        assert named(ctx.index, ctx.index.weapons[101][2][1]) == {(ItemKind.WEAPON, "Buckler")}

    def test_unknown_weapon_category_skips_secondary(self, ctx, sheets, rows):
        sheets.add_row("Item", 1, rows.item(
            "Longsword", 13, pack_weapon_model(201, 1, 1), pack_weapon_model(202, 1, 1), ui_category=2,
        ))
        analyse_items(ctx)
        assert list(ctx.index.weapons) == [201]

    def test_slot_without_model_is_logged(self, ctx, sheets, rows, caplog):
        """Categories that are neither gear nor weapon are skipped with their slots named."""
        sheets.add_row("Item", 1, rows.item("Leather Belt", 14, pack_gear_model(5, 1)))

        with caplog.at_level(logging.DEBUG, logger="xivaffects.builder.items"):
            analyse_items(ctx)

        assert ctx.index.equipment == {}
        assert "Item 1: no model for equip slots waist" in caplog.text


# =============================================================================
# CHARACTERS
# =============================================================================

class TestCharacters:
    """Test the battle NPC, event NPC, minion, mount and ornament passes."""

    @pytest.fixture(autouse=True)
    def model_charas(self, sheets, archive, rows, imc):
        sheets.add_row("ModelChara", 10, rows.model_chara(3, 133, 2, 1))
        sheets.add_row("ModelChara", 11, rows.model_chara(2, 1001, 1, 1))
        sheets.add_row("ModelChara", 12, rows.model_chara(1, 5, 1, 1))
        archive.files[MONSTER_IMC] = imc.make([(imc.record(1), [imc.record(7)])])

    def test_battle_npc_monster(self, sheets, archive, rows):
        sheets.add_row("BNpcBase", 100, rows.bnpc_base(10))
        sheets.add_row("BNpcName", 200, ["Ahriman"])
        ctx = BuildContext(sheets, archive, {100: [200]})

        analyse_bnpcs(ctx)

        assert named(ctx.index, ctx.index.monsters[133][2][7]) == {(ItemKind.BATTLE_NPC, "Ahriman")}

    def test_battle_npc_without_name_link(self, ctx, sheets, rows):
        sheets.add_row("BNpcBase", 100, rows.bnpc_base(10))
        analyse_bnpcs(ctx)
        assert ctx.index.monsters == {}

    def test_other_kind_skipped(self, sheets, archive, rows):
        sheets.add_row("BNpcBase", 100, rows.bnpc_base(12))
        sheets.add_row("BNpcName", 200, ["Chocobo"])
        ctx = BuildContext(sheets, archive, {100: [200]})

        analyse_bnpcs(ctx)

        assert ctx.index.monsters == {}
        assert ctx.index.demihumans == {}

    def test_minion_models_left_to_minion_pass(self, sheets, archive, rows):
        sheets.add_row("BNpcBase", 100, rows.bnpc_base(10))
        sheets.add_row("BNpcName", 200, ["Ahriman"])
        sheets.add_row("Companion", 1, rows.named_model("Wind-up Ahriman", 10))
        ctx = BuildContext(sheets, archive, {100: [200]})

        analyse_bnpcs(ctx)
        assert ctx.index.monsters == {}

        analyse_minions(ctx)
        assert named(ctx.index, ctx.index.monsters[133][2][7]) == {(ItemKind.MINION, "Wind-up Ahriman")}

    def test_demihuman_last_slot_wins(self, sheets, archive, rows, imc):
        """The last worn piece with an IMC file decides the variant."""
        sheets.add_row("BNpcBase", 101, rows.bnpc_base(11, npc_equip=5))
        sheets.add_row("BNpcName", 201, ["Amalj'aa"])
        sheets.add_row("NpcEquip", 5, rows.npc_equip([(10, 1), (11, 1)]))
        archive.files["chara/demihuman/d1001/obj/equipment/e0010/e0010.imc"] = imc.gear(0, [4], vfx=[3])
        archive.files["chara/demihuman/d1001/obj/equipment/e0011/e0011.imc"] = imc.gear(1, [9])
        ctx = BuildContext(sheets, archive, {101: [201]})

        analyse_bnpcs(ctx)

        variants = ctx.index.demihumans[1001][1]
        assert list(variants) == [9]
        assert named(ctx.index, variants[9]) == {(ItemKind.BATTLE_NPC, "Amalj'aa")}
        assert ctx.index.vfx.demihumans[1001][10][3] == {4}

    def test_demihuman_without_npc_equip(self, sheets, archive, rows):
        sheets.add_row("BNpcBase", 101, rows.bnpc_base(11, npc_equip=5))
        sheets.add_row("BNpcName", 201, ["Amalj'aa"])
        ctx = BuildContext(sheets, archive, {101: [201]})

        analyse_bnpcs(ctx)

        assert ctx.index.demihumans == {}

    def test_event_npc(self, ctx, sheets, rows):
        sheets.add_row("ENpcBase", 1000, rows.enpc_base(10))
        sheets.add_row("ENpcResident", 1000, rows.enpc_resident("Guard", "Guards"))
        sheets.add_row("ENpcBase", 1001, rows.enpc_base(10))
        sheets.add_row("ENpcResident", 1001, rows.enpc_resident("Nobody", ""))

        analyse_enpcs(ctx)

        assert named(ctx.index, ctx.index.monsters[133][2][7]) == {(ItemKind.EVENT_NPC, "Guard")}

    def test_event_npc_demihuman_gear(self, ctx, sheets, archive, rows, imc):
        sheets.add_row("ENpcBase", 1000, rows.enpc_base(11, [(10, 2)]))
        sheets.add_row("ENpcResident", 1000, rows.enpc_resident("Kobold", "Kobolds"))
        archive.files["chara/demihuman/d1001/obj/equipment/e0010/e0010.imc"] = imc.gear(0, [4, 6])

        analyse_enpcs(ctx)

        assert 6 in ctx.index.demihumans[1001][1]

    def test_mounts(self, ctx, sheets, rows):
        sheets.add_row("Mount", 1, rows.named_model("Company Chocobo", 10))
        sheets.add_row("Mount", 2, rows.named_model("Unused", -1))

        analyse_mounts(ctx)

        assert named(ctx.index, ctx.index.monsters[133][2][7]) == {(ItemKind.MOUNT, "Company Chocobo")}
        assert len(ctx.index.names) == 1

    def test_ornaments(self, ctx, sheets, rows):
        sheets.add_row("Ornament", 1, rows.ornament(10, "Parasol"))
        analyse_ornaments(ctx)
        assert named(ctx.index, ctx.index.monsters[133][2][7]) == {(ItemKind.FASHION_ACCESSORY, "Parasol")}


# =============================================================================
# TIMELINES AND MAPS
# =============================================================================

class TestTimelines:
    """Test the emote and action passes."""

    def test_emote_with_command(self, ctx, sheets, rows):
        sheets.add_row("ActionTimeline", 50, rows.action_timeline("emote/pose00_loop"))
        sheets.add_row("Emote", 1, rows.emote("Change Pose", [0, 50], text_command=7))
        sheets.add_row("TextCommand", 7, rows.text_command("/cpose"))

        analyse_emotes(ctx)

        ((kind, name, command),) = ctx.index.emotes["pose00_loop"]
        assert kind is ItemKind.EMOTE
        assert ctx.index.names[name] == "Change Pose"
        assert ctx.index.names[command] == "/cpose"

    def test_emote_without_command(self, ctx, sheets, rows):
        sheets.add_row("ActionTimeline", 51, rows.action_timeline("emote/sit"))
        sheets.add_row("Emote", 2, rows.emote("Sit", [51]))

        analyse_emotes(ctx)

        ((_, _, command),) = ctx.index.emotes["sit"]
        assert command is None

    def test_emote_without_timeline(self, ctx, sheets, rows):
        sheets.add_row("Emote", 3, rows.emote("Nothing", []))
        analyse_emotes(ctx)
        assert ctx.index.emotes == {}

    def test_actions(self, ctx, sheets, rows):
        """Cast, end and hit timelines are all registered; end -1 is ignored."""
        sheets.add_row("ActionCastTimeline", 3, [60])
        sheets.add_row("ActionTimeline", 60, rows.action_timeline("ability/cast"))
        sheets.add_row("ActionTimeline", 61, rows.action_timeline("magic/fire"))
        sheets.add_row("ActionTimeline", 62, rows.action_timeline("magic/fire_end"))
        sheets.add_row("Action", 1, rows.action("Fire", 3, -1, 61))
        sheets.add_row("Action", 2, rows.action("Blizzard", 0, 62, 61))

        analyse_actions(ctx)

        assert named(ctx.index, ctx.index.actions["ability/cast"]) == {(ItemKind.ACTION, "Fire")}
        assert named(ctx.index, ctx.index.actions["magic/fire"]) == {
            (ItemKind.ACTION, "Fire"),
            (ItemKind.ACTION, "Blizzard"),
        }
        assert named(ctx.index, ctx.index.actions["magic/fire_end"]) == {(ItemKind.ACTION, "Blizzard")}


class TestMaps:
    """Test the map pass and map naming."""

    @pytest.mark.parametrize("parts,expected", [
        (("La Noscea", "Limsa Lominsa", "Upper Decks"), "La Noscea - Limsa Lominsa (Upper Decks)"),
        (("La Noscea", "Limsa Lominsa", "Limsa Lominsa"), "La Noscea - Limsa Lominsa"),
        ((None, "Limsa Lominsa", None), "Limsa Lominsa"),
        (("La Noscea", None, "Upper Decks"), "La Noscea (Upper Decks)"),
        ((None, None, "Upper Decks"), "Upper Decks"),
        ((None, None, None), ""),
    ])
    def test_map_name(self, parts, expected):
        assert map_name(*parts) == expected

    def test_analyse_maps(self, ctx, sheets, rows):
        sheets.add_row("PlaceName", 1, ["La Noscea"])
        sheets.add_row("PlaceName", 2, ["Limsa Lominsa"])
        sheets.add_row("Map", 1, rows.map("s1t1/00", 1, 2, 0))
        sheets.add_row("Map", 2, rows.map("", 1, 2, 0))
        sheets.add_row("Map", 3, rows.map("s1t2/00", 0, 0, 0))

        analyse_maps(ctx)

        assert list(ctx.index.maps) == ["s1t1/00"]
        assert named(ctx.index, ctx.index.maps["s1t1/00"]) == {(ItemKind.MAP, "La Noscea - Limsa Lominsa")}


# =============================================================================
# VFX
# =============================================================================

class TestVfx:
    """Test the vfx passes that run after the entity passes."""

    def test_equipment_vfx(self, ctx, archive, imc):
        ctx.index.add_equipment(EquipSlot.FEET, 863, 6, [ctx.index.name_ref(ItemKind.GEAR, "Flame Boots")])
        archive.files[EQUIPMENT_IMC] = imc.gear(EquipSlot.FEET.imc_part_index, [5, 6], vfx=[0, 3])

        analyse_equipment_vfx(ctx)

        assert ctx.index.vfx.equipment[863] == {3: {(EquipSlot.FEET, 6)}}

    def test_accessory_vfx_uses_accessory_slots(self, ctx, archive, imc):
        ctx.index.add_equipment(EquipSlot.NECK, 50, 2, [ctx.index.name_ref(ItemKind.GEAR, "Choker")])
        archive.files[RING_IMC] = imc.gear(EquipSlot.NECK.imc_part_index, [2], vfx=[5])

        analyse_equipment_vfx(ctx)

        assert ctx.index.vfx.equipment[50][5] == {(EquipSlot.NECK, 2)}

    def test_weapon_vfx(self, ctx, archive, imc):
        ctx.index.add_weapon(301, 1, 3, [ctx.index.name_ref(ItemKind.WEAPON, "Cesti")])
        archive.files[WEAPON_IMC] = imc.make([(imc.record(1), [imc.record(3, vfx=2), imc.record(0, vfx=4)])])

        analyse_weapon_vfx(ctx)

        assert ctx.index.vfx.weapons[301][1] == {2: {3}}

    def test_monster_vfx(self, ctx, archive, imc):
        ctx.index.add_monster(133, 2, 7, [ctx.index.name_ref(ItemKind.BATTLE_NPC, "Ahriman")])
        archive.files[MONSTER_IMC] = imc.make([(imc.record(1), [imc.record(7, vfx=1)])])

        analyse_monster_vfx(ctx)

        assert ctx.index.vfx.monsters[133][2] == {1: {7}}


# =============================================================================
# PIPELINE
# =============================================================================

@pytest.fixture
def small_game(sheets, archive, rows, imc):
    sheets.add_row("EquipSlotCategory", 8, rows.equip_slot_category(feet=1))
    sheets.add_row("Item", 1, rows.item("Flame Boots", 8, pack_gear_model(863, 2)))
    archive.files[EQUIPMENT_IMC] = imc.gear(EquipSlot.FEET.imc_part_index, [5, 6], vfx=[0, 3])

    sheets.add_row("ModelChara", 10, rows.model_chara(3, 133, 2, 1))
    archive.files[MONSTER_IMC] = imc.make([(imc.record(1), [imc.record(7, vfx=1)])])
    sheets.add_row("BNpcBase", 100, rows.bnpc_base(10))
    sheets.add_row("BNpcName", 200, ["Ahriman"])
    return sheets, archive, [BNpcLink(100, 200)]


class TestIndexBuilder:
    """Test the full pass pipeline."""

    def test_vfx_passes_run_last(self):
        names = [name for name, _ in PASSES]
        assert names[-3:] == ["equipment vfx", "weapon vfx", "monster vfx"]

    def test_build_and_resolve(self, small_game):
        index = IndexBuilder(*small_game).build()

        assert resolve_path(index, "chara/equipment/e0863/vfx/eff/ve0003.avfx") == {
            ItemKind.GEAR: {"Flame Boots"},
        }
        assert resolve_path(index, "chara/monster/m0133/obj/body/b0002/vfx/eff/vm0001.avfx") == {
            ItemKind.BATTLE_NPC: {"Ahriman"},
        }

    def test_stats(self, small_game):
        builder = IndexBuilder(*small_game)
        index = builder.build()
        assert list(builder.stats.timings) == [name for name, _ in PASSES]
        assert builder.stats.names == len(index.names) == 2

    def test_build_is_deterministic(self, small_game):
        assert build_index(*small_game).to_json() == build_index(*small_game).to_json()

    def test_custom_passes(self, small_game):
        sheets, archive, links = small_game
        index = IndexBuilder(sheets, archive, links, passes=[("items", analyse_items)]).build()
        assert index.monsters == {}
        assert EquipSlot.FEET in index.equipment


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
