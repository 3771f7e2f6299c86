"""
Tests for the affects resolver.
"""

import pytest

from xivaffects.common import ItemKind
from xivaffects.index import AffectsIndex
from xivaffects.parser import parse_path
from xivaffects.resolver import categorise, fallback, format_affects, resolve, resolve_path


class TestModelFamilies:
    """Test monster, weapon and gear lookups."""

    def test_monster_imc_any_variant(self):
        """Model level files match every physical variant of the model."""
        index = AffectsIndex()
        index.add_monster(133, 2, 7, [index.name_ref(ItemKind.MISCELLANEOUS, "X")])

        affects = resolve(index, parse_path("chara/monster/m0133/obj/body/b0002/b0002.imc"))

        assert affects == {ItemKind.MISCELLANEOUS: {"X"}}

    def test_monster_material_is_targeted(self, sample_index):
        affects = resolve_path(sample_index, "chara/monster/m0133/obj/body/b0002/material/v0008/mt_m0133b0002_a.mtrl")
        assert affects == {
            ItemKind.BATTLE_NPC: {"Ahriman"},
            ItemKind.MINION: {"Wind-up Ahriman"},
        }

    def test_model_result_covers_materials(self, sample_index):
        """An imc result contains the result of every material of the model."""
        model = resolve_path(sample_index, "chara/monster/m0133/obj/body/b0002/model/m0133b0002.mdl")
        for variant in (7, 8):
            material = resolve_path(
                sample_index,
                f"chara/monster/m0133/obj/body/b0002/material/v{variant:04d}/mt_m0133b0002_a.mtrl",
            )
            for kind, names in material.items():
                assert names <= model[kind]

    def test_monster_skeleton_covers_all_bases(self, sample_index):
        affects = resolve_path(sample_index, "chara/monster/m0133/skeleton/base/b0001/skl_m0133b0001.sklb")
        assert affects[ItemKind.MISCELLANEOUS] == {"X"}
        assert affects[ItemKind.BATTLE_NPC] == {"Ahriman"}

    def test_monster_avfx(self, sample_index):
        """Effect ids resolve through their physical variants."""
        affects = resolve_path(sample_index, "chara/monster/m0133/obj/body/b0002/vfx/eff/vm0001.avfx")
        assert affects == {
            ItemKind.BATTLE_NPC: {"Ahriman"},
            ItemKind.MINION: {"Wind-up Ahriman"},
        }

    def test_unknown_effect(self, sample_index):
        assert resolve_path(sample_index, "chara/monster/m0133/obj/body/b0002/vfx/eff/vm0009.avfx") == {}

    def test_weapon_material(self, sample_index):
        affects = resolve_path(sample_index, "chara/weapon/w0301/obj/body/b0001/material/v0003/mt_w0301b0001_a.mtrl")
        assert affects == {ItemKind.WEAPON: {"Cesti"}}

    def test_equipment_material(self, sample_index):
        affects = resolve_path(sample_index, "chara/equipment/e0863/material/v0006/mt_c0101e0863_sho_a.mtrl")
        assert affects == {ItemKind.GEAR: {"Iron Boots"}}

    def test_equipment_model_is_per_slot(self, sample_index):
        affects = resolve_path(sample_index, "chara/equipment/e0863/model/c0101e0863_sho.mdl")
        assert affects == {ItemKind.GEAR: {"Iron Boots", "Flame Boots"}}

    def test_equipment_imc_covers_every_slot(self, sample_index):
        affects = resolve_path(sample_index, "chara/equipment/e0863/e0863.imc")
        assert affects == {ItemKind.GEAR: {"Iron Boots", "Flame Boots", "Iron Mail"}}

    def test_equipment_avfx(self, sample_index):
        affects = resolve_path(sample_index, "chara/equipment/e0863/vfx/eff/ve0003.avfx")
        assert affects == {ItemKind.GEAR: {"Flame Boots"}}

    def test_smallclothes(self, sample_index):
        affects = resolve_path(sample_index, "chara/equipment/e0000/model/c0101e0000_top.mdl")
        assert affects == {ItemKind.GEAR: {"Smallclothes (Chestpiece)"}}

    def test_smallclothes_without_slot(self, sample_index):
        affects = resolve_path(sample_index, "chara/equipment/e0000/e0000.imc")
        assert affects == {ItemKind.GEAR: {"Smallclothes"}}

    def test_unknown_model(self, sample_index):
        assert resolve_path(sample_index, "chara/equipment/e0999/e0999.imc") == {}


class TestTimelines:
    """Test tmb and pap lookups."""

    def test_tmb_matches_emote_and_action(self, sample_index):
        affects = resolve_path(sample_index, "chara/action/emote/pose00_loop.tmb")
        assert affects == {
            ItemKind.EMOTE: {"Change Pose (/cpose)"},
            ItemKind.ACTION: {"Pose Action"},
        }

    def test_pap_without_weapon_type(self, sample_index):
        affects = resolve_path(sample_index, "chara/human/c0101/animation/a0001/emote/pose00_loop.pap")
        assert affects[ItemKind.EMOTE] == {"Change Pose (/cpose)"}
        assert ItemKind.ANIMATION not in affects

    def test_base_animation(self, sample_index):
        affects = resolve_path(sample_index, "chara/human/c0101/animation/a0001/bt_2ax_emp/resident/idle.pap")
        assert affects == {ItemKind.ANIMATION: {"(Warrior) Idle"}}

    def test_non_base_animation_key(self, sample_index):
        affects = resolve_path(sample_index, "chara/human/c0101/animation/a0001/bt_2ax_emp/battle/auto_attack1.pap")
        assert affects == {}


class TestSynthesisedNames:
    """Test paths whose names are built from the path itself."""

    @pytest.mark.parametrize("path,kind,name", [
        ("chara/human/c0101/obj/face/f0001/model/c0101f0001_fac.mdl",
         ItemKind.CUSTOMISATION, "Male Midlander Face 1"),
        ("chara/human/c0201/obj/body/b0001/model/c0201b0001_top.mdl",
         ItemKind.CUSTOMISATION, "Female Midlander Body (Chestpiece) 1"),
        ("chara/human/c0101/obj/hair/h0005/material/v0001/mt_c0101h0005_hir_a.mtrl",
         ItemKind.CUSTOMISATION, "Male Midlander Hair 5"),
        ("chara/common/texture/decal_face/_decal_5.tex", ItemKind.CUSTOMISATION, "Face Paint 5"),
        ("chara/common/texture/decal_equip/-decal_12.tex", ItemKind.CUSTOMISATION, "Equipment Decal 12"),
        ("chara/common/texture/catchlight_1.tex", ItemKind.CUSTOMISATION, "Catchlight 1"),
        ("chara/human/c0101/skeleton/base/b0001/skl_c0101b0001.sklb",
         ItemKind.CUSTOMISATION, "Male Midlander Base Skeleton 1"),
        ("chara/xls/attachOffset/c0101.atch", ItemKind.CUSTOMISATION, "Male Midlander Attach Offsets"),
        ("chara/common/texture/decal_equip/_stigma.tex", ItemKind.CUSTOMISATION, "Stigma Decal"),
        ("ui/icon/060000/en/hq/060001_hr1.tex", ItemKind.ICON, "Icon #60001 (English, HQ, High Resolution)"),
        ("ui/icon/060000/060001.tex", ItemKind.ICON, "Icon #60001"),
        ("common/font/AXIS_12_lobby.fdt", ItemKind.FONT, "AXIS 12 (Lobby)"),
        ("common/font/font1.tex", ItemKind.FONT, "Font Texture font1"),
    ])
    def test_name(self, sample_index, path, kind, name):
        assert resolve_path(sample_index, path) == {kind: {name}}

    def test_map(self, sample_index):
        affects = resolve_path(sample_index, "ui/map/s1d1/00/s1d100m.tex")
        assert affects == {ItemKind.MAP: {"La Noscea - Limsa Lominsa"}}


class TestFallback:
    """Paths outside the grammar get a coarse category or nothing."""

    def test_documented_world_example(self, sample_index):
        assert resolve_path(sample_index, "bgcommon/texture/abc.tex") == {ItemKind.MISCELLANEOUS: {"World"}}

    @pytest.mark.parametrize("path,category", [
        ("bg/ffxiv/sea_s1/twn/s1t1/level/bg.lgb", "World"),
        ("vfx/common/eff/dk05th_stdn0t.avfx", "VFX"),
        ("ui/uld/Window.uld", "Interface"),
        ("shader/sm5/shpk/character.shpk", "Shader"),
        ("sound/battle/mon/ahriman.scd", "Sound"),
        ("music/ffxiv/BGM_System_Title.scd", "Sound"),
        ("exd/root.exl", None),
    ])
    def test_categorise(self, path, category):
        assert categorise(path) == category

    def test_no_category_is_empty(self):
        assert fallback("exd/root.exl") == {}

    def test_mismatched_ids_do_not_raise(self, sample_index):
        """A path rejected by the grammar never raises from resolve_path."""
        path = "chara/equipment/e0863/material/v0006/mt_c0101e0864_sho_a.mtrl"
        assert resolve_path(sample_index, path) == {}

    def test_surrounding_whitespace_ignored(self, sample_index):
        assert resolve_path(sample_index, "  chara/equipment/e0863/e0863.imc\n")[ItemKind.GEAR]


class TestFormatting:
    """Test display lines."""

    def test_sorted_by_kind_then_name(self, sample_index):
        affects = resolve_path(sample_index, "chara/monster/m0133/obj/body/b0002/b0002.imc")
        assert format_affects(affects) == [
            "Battle NPC: Ahriman",
            "Minion: Wind-up Ahriman",
            "Miscellaneous: X",
        ]

    def test_empty(self):
        assert format_affects({}) == []


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
