"""
IMC (image change) decoder.

An IMC file maps each logical variant of a model to the physical material,
decal and vfx ids used for each body part. Layout, little endian:

    u16 count
    u16 part_mask
    popcount(part_mask) default records
    count * popcount(part_mask) variant records, stored variant-major
    (variant 1 of every part, then variant 2 of every part, ...)

Each record is five fields packed into six bytes:
    u8 material_id, u8 decal_id, u16 attribute_and_sound,
    u8 vfx_id, u8 material_animation_mask
"""

import logging
import struct
from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Tuple

logger = logging.getLogger(__name__)

HEADER = struct.Struct("<HH")
RECORD = struct.Struct("<BBHBB")


@dataclass(frozen=True)
class VariantRecord:
    """One image change entry."""
    material_id: int
    decal_id: int
    attribute_and_sound: int
    vfx_id: int
    material_animation_mask: int

    @property
    def attribute_mask(self) -> int:
        return self.attribute_and_sound & 0x3FF

    @property
    def sound_id(self) -> int:
        return self.attribute_and_sound >> 10

    @property
    def material_animation_id(self) -> int:
        return self.material_animation_mask & 0xF


@dataclass
class ImcPart:
    default_variant: VariantRecord
    variants: List[VariantRecord] = field(default_factory=list)

    def variant(self, logical_variant: int) -> Optional[VariantRecord]:
        """Record for a logical variant; 0 is the default record."""
        if logical_variant == 0:
            return self.default_variant
        if 1 <= logical_variant <= len(self.variants):
            return self.variants[logical_variant - 1]
        return None


@dataclass
class ImcFile:
    parts: List[ImcPart] = field(default_factory=list)

    def remap(self, part_index: int, logical_variant: int) -> Optional[int]:
        """
        Physical (material) variant id for a logical variant of one part.

        Returns None when the part or variant is not present in the file.
        """
        if not 0 <= part_index < len(self.parts):
            return None
        record = self.parts[part_index].variant(logical_variant)
        if record is None:
            return None
        return record.material_id

    def iter_vfx(self, part_index: int) -> Iterator[Tuple[int, int]]:
        """Yield (vfx_id, material_id) for every variant of a part using a vfx."""
        if not 0 <= part_index < len(self.parts):
            return
        for record in self.parts[part_index].variants:
            if record.material_id != 0 and record.vfx_id != 0:
                yield record.vfx_id, record.material_id


def _read_records(data: bytes, offset: int, count: int) -> Optional[List[VariantRecord]]:
    end = offset + count * RECORD.size
    if end > len(data):
        return None
    return [
        VariantRecord(*RECORD.unpack_from(data, offset + i * RECORD.size))
        for i in range(count)
    ]


def decode_imc(data: bytes) -> Optional[ImcFile]:
    """
    Decode an IMC file.

    Returns None when the data is shorter than the header declares.
    """
    if len(data) < HEADER.size:
        return None

    count, part_mask = HEADER.unpack_from(data, 0)
    part_count = bin(part_mask).count("1")

    defaults = _read_records(data, HEADER.size, part_count)
    if defaults is None:
        return None

    offset = HEADER.size + part_count * RECORD.size
    variants = _read_records(data, offset, count * part_count)
    if variants is None:
        logger.debug(f"IMC truncated: {count} variants x {part_count} parts declared, {len(data)} bytes")
        return None

    parts = [ImcPart(default) for default in defaults]
    records = iter(variants)
    for _ in range(count):
        for imc_part in parts:
            imc_part.variants.append(next(records))

    return ImcFile(parts)
