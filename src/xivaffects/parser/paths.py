"""
Path Descriptors

One frozen dataclass per recognised path shape. A descriptor holds only the
ids needed to address the affects index (plus the few cosmetic pieces of
the filename needed to write the path back out); it never holds names.

Every descriptor can render its canonical path with to_path(), and
parse_path(d.to_path()) == d.
"""

from dataclasses import dataclass
from typing import Optional

from xivaffects.common import EquipSlot
from xivaffects.parser.types import (
    BodyType,
    BodyTypeSlot,
    DecalType,
    Language,
    ModelInfo,
    SkeletonSlot,
    model_info,
)


def _id(prefix: str, value: int) -> str:
    return f"{prefix}{value:04d}"


class PathDescriptor:
    """Base class for every parsed path."""

    def to_path(self) -> str:
        raise NotImplementedError


# =============================================================================
# Monster: chara/monster/mXXXX/obj/body/bXXXX/
# =============================================================================

class MonsterPath(PathDescriptor):
    """Monster body paths, addressed by model (m) and base (b) id."""

    def _body_dir(self) -> str:
        return f"chara/monster/{_id('m', self.primary_id)}/obj/body/{_id('b', self.secondary_id)}"

    def _repeat(self) -> str:
        return _id("m", self.primary_id) + _id("b", self.secondary_id)


@dataclass(frozen=True)
class MonsterImc(MonsterPath):
    primary_id: int
    secondary_id: int

    def to_path(self) -> str:
        return f"{self._body_dir()}/{_id('b', self.secondary_id)}.imc"


@dataclass(frozen=True)
class MonsterMdl(MonsterPath):
    primary_id: int
    secondary_id: int

    def to_path(self) -> str:
        return f"{self._body_dir()}/model/{self._repeat()}.mdl"


@dataclass(frozen=True)
class MonsterMtrl(MonsterPath):
    primary_id: int
    secondary_id: int
    variant_id: int
    suffix: str = "a"

    def to_path(self) -> str:
        return (f"{self._body_dir()}/material/{_id('v', self.variant_id)}/"
                f"mt_{self._repeat()}_{self.suffix}.mtrl")


@dataclass(frozen=True)
class MonsterTex(MonsterPath):
    primary_id: int
    secondary_id: int
    variant_id: int
    suffix: str = "_n"

    def to_path(self) -> str:
        return (f"{self._body_dir()}/texture/v{self.variant_id:02d}_"
                f"{self._repeat()}{self.suffix}.tex")


@dataclass(frozen=True)
class MonsterAvfx(MonsterPath):
    primary_id: int
    secondary_id: int
    effect_id: int

    def to_path(self) -> str:
        return f"{self._body_dir()}/vfx/eff/{_id('vm', self.effect_id)}.avfx"


@dataclass(frozen=True)
class MonsterSkeleton(MonsterPath):
    primary_id: int
    secondary_id: int
    file_prefix: str = "skl"
    extension: str = "sklb"

    def to_path(self) -> str:
        return (f"chara/monster/{_id('m', self.primary_id)}/skeleton/base/"
                f"{_id('b', self.secondary_id)}/{self.file_prefix}_{self._repeat()}.{self.extension}")


# =============================================================================
# Weapon: chara/weapon/wXXXX/obj/body/bXXXX/
# =============================================================================

class WeaponPath(PathDescriptor):
    """Weapon paths, addressed by model (w) and weapon body (b) id."""

    def _body_dir(self) -> str:
        return f"chara/weapon/{_id('w', self.primary_id)}/obj/body/{_id('b', self.secondary_id)}"

    def _repeat(self) -> str:
        return _id("w", self.primary_id) + _id("b", self.secondary_id)


@dataclass(frozen=True)
class WeaponImc(WeaponPath):
    primary_id: int
    secondary_id: int

    def to_path(self) -> str:
        return f"{self._body_dir()}/{_id('b', self.secondary_id)}.imc"


@dataclass(frozen=True)
class WeaponMdl(WeaponPath):
    primary_id: int
    secondary_id: int

    def to_path(self) -> str:
        return f"{self._body_dir()}/model/{self._repeat()}.mdl"


@dataclass(frozen=True)
class WeaponMtrl(WeaponPath):
    primary_id: int
    secondary_id: int
    variant_id: int
    suffix: str = "a"

    def to_path(self) -> str:
        return (f"{self._body_dir()}/material/{_id('v', self.variant_id)}/"
                f"mt_{self._repeat()}_{self.suffix}.mtrl")


@dataclass(frozen=True)
class WeaponTex(WeaponPath):
    primary_id: int
    secondary_id: int
    variant_id: int
    suffix: str = "_n"

    def to_path(self) -> str:
        return (f"{self._body_dir()}/texture/v{self.variant_id:02d}_"
                f"{self._repeat()}{self.suffix}.tex")


@dataclass(frozen=True)
class WeaponAvfx(WeaponPath):
    primary_id: int
    secondary_id: int
    effect_id: int

    def to_path(self) -> str:
        return f"{self._body_dir()}/vfx/eff/{_id('vw', self.effect_id)}.avfx"


@dataclass(frozen=True)
class WeaponSkeleton(WeaponPath):
    primary_id: int
    secondary_id: int
    file_prefix: str = "skl"
    extension: str = "sklb"

    def to_path(self) -> str:
        return (f"chara/weapon/{_id('w', self.primary_id)}/skeleton/base/"
                f"{_id('b', self.secondary_id)}/{self.file_prefix}_{self._repeat()}.{self.extension}")


# =============================================================================
# Demihuman: chara/demihuman/dXXXX/obj/equipment/eXXXX/
# =============================================================================

class DemihumanPath(PathDescriptor):
    """Demihuman paths, addressed by model (d) and equipment (e) id."""

    def _equipment_dir(self) -> str:
        return (f"chara/demihuman/{_id('d', self.primary_id)}/obj/equipment/"
                f"{_id('e', self.secondary_id)}")

    def _repeat(self) -> str:
        return _id("d", self.primary_id) + _id("e", self.secondary_id)


@dataclass(frozen=True)
class DemihumanImc(DemihumanPath):
    primary_id: int
    secondary_id: int

    def to_path(self) -> str:
        return f"{self._equipment_dir()}/{_id('e', self.secondary_id)}.imc"


@dataclass(frozen=True)
class DemihumanMdl(DemihumanPath):
    primary_id: int
    secondary_id: int
    slot: EquipSlot

    def to_path(self) -> str:
        return f"{self._equipment_dir()}/model/{self._repeat()}_{self.slot.code}.mdl"


@dataclass(frozen=True)
class DemihumanMtrl(DemihumanPath):
    primary_id: int
    secondary_id: int
    variant_id: int
    slot: EquipSlot
    suffix: str = "_a"

    def to_path(self) -> str:
        return (f"{self._equipment_dir()}/material/{_id('v', self.variant_id)}/"
                f"mt_{self._repeat()}_{self.slot.code}{self.suffix}.mtrl")


@dataclass(frozen=True)
class DemihumanTex(DemihumanPath):
    primary_id: int
    secondary_id: int
    variant_id: int
    slot: EquipSlot
    suffix: str = "_n"

    def to_path(self) -> str:
        return (f"{self._equipment_dir()}/texture/v{self.variant_id:02d}_"
                f"{self._repeat()}_{self.slot.code}{self.suffix}.tex")


@dataclass(frozen=True)
class DemihumanAvfx(DemihumanPath):
    primary_id: int
    secondary_id: int
    effect_id: int

    def to_path(self) -> str:
        return f"{self._equipment_dir()}/vfx/eff/{_id('ve', self.effect_id)}.avfx"


@dataclass(frozen=True)
class DemihumanSkeleton(DemihumanPath):
    primary_id: int
    secondary_id: int
    file_prefix: str = "skl"
    extension: str = "sklb"

    def to_path(self) -> str:
        repeat = _id("d", self.primary_id) + _id("b", self.secondary_id)
        return (f"chara/demihuman/{_id('d', self.primary_id)}/skeleton/base/"
                f"{_id('b', self.secondary_id)}/{self.file_prefix}_{repeat}.{self.extension}")


# =============================================================================
# Equipment and accessories: chara/equipment/eXXXX/, chara/accessory/aXXXX/
# =============================================================================

class GearPath(PathDescriptor):
    """Shared helpers for equipment and accessory paths."""

    @property
    def model_info(self) -> Optional[ModelInfo]:
        return model_info(self.model_code)


class EquipmentPath(GearPath):
    """Equipment paths, addressed by model (e) id and slot."""

    def _dir(self) -> str:
        return f"chara/equipment/{_id('e', self.primary_id)}"

    def _repeat(self) -> str:
        return f"c{self.model_code:04d}{_id('e', self.primary_id)}"


@dataclass(frozen=True)
class EquipmentImc(EquipmentPath):
    primary_id: int

    def to_path(self) -> str:
        return f"{self._dir()}/{_id('e', self.primary_id)}.imc"


@dataclass(frozen=True)
class EquipmentMdl(EquipmentPath):
    primary_id: int
    model_code: int
    slot: EquipSlot

    def to_path(self) -> str:
        return f"{self._dir()}/model/{self._repeat()}_{self.slot.code}.mdl"


@dataclass(frozen=True)
class EquipmentMtrl(EquipmentPath):
    primary_id: int
    variant_id: int
    model_code: int
    slot: EquipSlot
    suffix: str = "a"

    def to_path(self) -> str:
        return (f"{self._dir()}/material/{_id('v', self.variant_id)}/"
                f"mt_{self._repeat()}_{self.slot.code}_{self.suffix}.mtrl")


@dataclass(frozen=True)
class EquipmentTex(EquipmentPath):
    primary_id: int
    variant_id: int
    model_code: int
    slot: EquipSlot
    suffix: str = "_n"

    def to_path(self) -> str:
        return (f"{self._dir()}/texture/v{self.variant_id:02d}_"
                f"{self._repeat()}_{self.slot.code}{self.suffix}.tex")


@dataclass(frozen=True)
class EquipmentAvfx(EquipmentPath):
    primary_id: int
    effect_id: int

    def to_path(self) -> str:
        return f"{self._dir()}/vfx/eff/{_id('ve', self.effect_id)}.avfx"


class AccessoryPath(GearPath):
    """Accessory paths, addressed by model (a) id and slot."""

    def _dir(self) -> str:
        return f"chara/accessory/{_id('a', self.primary_id)}"

    def _repeat(self) -> str:
        return f"c{self.model_code:04d}{_id('a', self.primary_id)}"


@dataclass(frozen=True)
class AccessoryImc(AccessoryPath):
    primary_id: int

    def to_path(self) -> str:
        return f"{self._dir()}/{_id('a', self.primary_id)}.imc"


@dataclass(frozen=True)
class AccessoryMdl(AccessoryPath):
    primary_id: int
    model_code: int
    slot: EquipSlot

    def to_path(self) -> str:
        return f"{self._dir()}/model/{self._repeat()}_{self.slot.code}.mdl"


@dataclass(frozen=True)
class AccessoryMtrl(AccessoryPath):
    primary_id: int
    variant_id: int
    model_code: int
    slot: EquipSlot
    suffix: str = "_a"

    def to_path(self) -> str:
        return (f"{self._dir()}/material/{_id('v', self.variant_id)}/"
                f"mt_{self._repeat()}_{self.slot.code}{self.suffix}.mtrl")


@dataclass(frozen=True)
class AccessoryTex(AccessoryPath):
    primary_id: int
    variant_id: int
    model_code: int
    slot: EquipSlot
    suffix: str = "_n"

    def to_path(self) -> str:
        return (f"{self._dir()}/texture/v{self.variant_id:02d}_"
                f"{self._repeat()}_{self.slot.code}{self.suffix}.tex")


# =============================================================================
# Character: chara/human/, chara/common/, chara/action/, chara/xls/
# =============================================================================

class CharacterPath(PathDescriptor):
    """Player character customisation, skeleton and animation paths."""


class CharacterBodyPath(CharacterPath):
    """Paths under chara/human/cXXXX/obj/<body type>/<abbr>XXXX/."""

    @property
    def model_info(self) -> Optional[ModelInfo]:
        return model_info(self.model_code)

    def _dir(self) -> str:
        return (f"chara/human/c{self.model_code:04d}/obj/{self.body_type.code}/"
                f"{_id(self.body_type.abbreviation, self.body_id)}")

    def _repeat(self) -> str:
        name = f"c{self.model_code:04d}{_id(self.body_type.abbreviation, self.body_id)}"
        if self.slot is not None:
            name += f"_{self.slot.code}"
        return name


@dataclass(frozen=True)
class CharacterMdl(CharacterBodyPath):
    model_code: int
    body_type: BodyType
    body_id: int
    slot: Optional[BodyTypeSlot] = None

    def to_path(self) -> str:
        return f"{self._dir()}/model/{self._repeat()}.mdl"


@dataclass(frozen=True)
class CharacterMtrl(CharacterBodyPath):
    model_code: int
    body_type: BodyType
    body_id: int
    slot: Optional[BodyTypeSlot] = None
    variant_id: Optional[int] = None
    suffix: str = "_a"

    def to_path(self) -> str:
        folder = "material/"
        if self.variant_id is not None:
            folder += _id("v", self.variant_id) + "/"
        return f"{self._dir()}/{folder}mt_{self._repeat()}{self.suffix}.mtrl"


@dataclass(frozen=True)
class CharacterTex(CharacterBodyPath):
    model_code: int
    body_type: BodyType
    body_id: int
    slot: Optional[BodyTypeSlot] = None
    variant_id: Optional[int] = None
    dashes: bool = False
    suffix: str = "_n"

    def to_path(self) -> str:
        prefix = "--" if self.dashes else ""
        if self.variant_id is not None:
            prefix += f"v{self.variant_id:02d}_"
        return f"{self._dir()}/texture/{prefix}{self._repeat()}{self.suffix}.tex"


@dataclass(frozen=True)
class CharacterCatchlight(CharacterPath):
    name: str

    def to_path(self) -> str:
        return f"chara/common/texture/catchlight{self.name}.tex"


@dataclass(frozen=True)
class CharacterSkin(CharacterPath):
    name: str

    def to_path(self) -> str:
        return f"chara/common/texture/skin{self.name}.tex"


@dataclass(frozen=True)
class CharacterDecal(CharacterPath):
    decal_type: DecalType
    decal_id: int
    prefix: str = ""

    def to_path(self) -> str:
        return (f"chara/common/texture/decal_{self.decal_type.code}/"
                f"{self.prefix}decal_{self.decal_id}.tex")


@dataclass(frozen=True)
class CharacterSkeleton(CharacterPath):
    model_code: int
    slot: SkeletonSlot
    skeleton_id: int
    file_prefix: str = "skl"
    extension: str = "sklb"

    @property
    def model_info(self) -> Optional[ModelInfo]:
        return model_info(self.model_code)

    def to_path(self) -> str:
        folder = _id(self.slot.abbreviation, self.skeleton_id)
        return (f"chara/human/c{self.model_code:04d}/skeleton/{self.slot.code}/{folder}/"
                f"{self.file_prefix}_c{self.model_code:04d}{folder}.{self.extension}")


class CharacterTimeline(CharacterPath):
    """Animation files keyed by an action timeline key."""


@dataclass(frozen=True)
class CharacterTmb(CharacterTimeline):
    key: str

    def to_path(self) -> str:
        return f"chara/action/{self.key}.tmb"


@dataclass(frozen=True)
class CharacterPap(CharacterTimeline):
    model_id: int
    animation_id: int
    key: str
    weapon_type: Optional[str] = None

    def to_path(self) -> str:
        folder = f"bt_{self.weapon_type}/" if self.weapon_type is not None else ""
        return (f"chara/human/{_id('c', self.model_id)}/animation/"
                f"{_id('a', self.animation_id)}/{folder}{self.key}.pap")


@dataclass(frozen=True)
class CharacterAttachOffset(CharacterPath):
    model_code: int

    @property
    def model_info(self) -> Optional[ModelInfo]:
        return model_info(self.model_code)

    def to_path(self) -> str:
        return f"chara/xls/attachOffset/c{self.model_code:04d}.atch"


# =============================================================================
# Common and UI
# =============================================================================

@dataclass(frozen=True)
class FontFile(PathDescriptor):
    family: str
    size: int
    lobby: bool = False

    def to_path(self) -> str:
        lobby = "_lobby" if self.lobby else ""
        return f"common/font/{self.family}_{self.size:02d}{lobby}.fdt"


@dataclass(frozen=True)
class FontTexture(PathDescriptor):
    name: str

    def to_path(self) -> str:
        return f"common/font/{self.name}.tex"


@dataclass(frozen=True)
class Icon(PathDescriptor):
    group: int
    primary_id: int
    language: Optional[Language] = None
    hq: bool = False
    hires: bool = False

    def to_path(self) -> str:
        folder = f"ui/icon/{self.group:06d}/"
        if self.language is not None:
            folder += f"{self.language.code}/"
        if self.hq:
            folder += "hq/"
        hires = "_hr1" if self.hires else ""
        return f"{folder}{self.primary_id:06d}{hires}.tex"


@dataclass(frozen=True)
class MapTexture(PathDescriptor):
    primary_id: str
    variant: int
    suffix: Optional[str] = None
    extra: Optional[str] = None

    @property
    def key(self) -> str:
        """Key used by the maps index, e.g. `s1d1/00`."""
        return f"{self.primary_id}/{self.variant:02d}"

    def to_path(self) -> str:
        name = f"{self.primary_id}{self.variant:02d}{self.suffix or ''}"
        if self.extra is not None:
            name += f"_{self.extra}"
        return f"ui/map/{self.key}/{name}.tex"
