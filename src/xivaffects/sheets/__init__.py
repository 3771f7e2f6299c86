"""
Game sheet access: row/byte provider interfaces, concrete providers and
typed sheet records.
"""

from xivaffects.sheets.bnpc import BNpcLink, BNpcLinkError, load_bnpc_links, parse_bnpc_links
from xivaffects.sheets.provider import (
    ArchiveProvider,
    CsvSheetProvider,
    DirectoryArchive,
    FieldError,
    MemoryArchive,
    MemorySheetProvider,
    Row,
    RowProvider,
    SheetNotFound,
    read_row,
    read_sheet,
)

__all__ = [
    "ArchiveProvider",
    "BNpcLink",
    "BNpcLinkError",
    "CsvSheetProvider",
    "DirectoryArchive",
    "FieldError",
    "MemoryArchive",
    "MemorySheetProvider",
    "Row",
    "RowProvider",
    "SheetNotFound",
    "load_bnpc_links",
    "parse_bnpc_links",
    "read_row",
    "read_sheet",
]
