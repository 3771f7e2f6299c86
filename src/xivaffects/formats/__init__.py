"""
Binary asset formats.
"""

from xivaffects.formats.imc import ImcFile, ImcPart, VariantRecord, decode_imc

__all__ = [
    "ImcFile",
    "ImcPart",
    "VariantRecord",
    "decode_imc",
]
