"""
Packed model fields.

Item, NPC equipment and event NPC rows store a model reference as one
integer with the ids packed into fixed bit ranges:

    gear (u32/u64):   bits 0-15 model, bits 16-23 variant
    weapon (u64):     bits 0-15 model, bits 16-31 weapon body, bits 32-39 variant
"""

from typing import Tuple


def _bits(value: int, shift: int, width: int) -> int:
    return (value >> shift) & ((1 << width) - 1)


def gear_model(value: int) -> int:
    return _bits(value, 0, 16)


def gear_variant(value: int) -> int:
    return _bits(value, 16, 8)


def weapon_model(value: int) -> int:
    return _bits(value, 0, 16)


def weapon_body(value: int) -> int:
    return _bits(value, 16, 16)


def weapon_variant(value: int) -> int:
    return _bits(value, 32, 8)


def unpack_gear_model(value: int) -> Tuple[int, int]:
    """Split a packed gear model into (model, variant)."""
    return gear_model(value), gear_variant(value)


def unpack_weapon_model(value: int) -> Tuple[int, int, int]:
    """Split a packed weapon model into (model, weapon body, variant)."""
    return weapon_model(value), weapon_body(value), weapon_variant(value)


def pack_gear_model(model: int, variant: int) -> int:
    return (model & 0xFFFF) | ((variant & 0xFF) << 16)


def pack_weapon_model(model: int, body: int, variant: int) -> int:
    return (model & 0xFFFF) | ((body & 0xFFFF) << 16) | ((variant & 0xFF) << 32)
