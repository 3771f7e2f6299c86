"""
Row and Byte Providers

The index builder reads game data through two narrow interfaces:

    RowProvider.rows(sheet)           every row of a named sheet
    RowProvider.row(sheet, row_id)    one row, or None
    ArchiveProvider.read(path)        raw bytes of an archive file, or None

Rows expose typed accessors by column offset. An accessor raises FieldError
when the column is missing or holds a value of the wrong type; callers treat
that as "skip this row".

Concrete providers read the community CSV dumps of the game sheets
(header `key,0,1,...`, a names line, a types line, then one row per line)
and files extracted to a directory tree, or hold everything in memory.
"""

import csv
import logging
from pathlib import Path
from typing import Any, Dict, Iterable, Iterator, List, Optional, Sequence

logger = logging.getLogger(__name__)


class FieldError(Exception):
    """A row field is missing or has the wrong type."""

    def __init__(self, sheet: str, row_id: int, column: int, message: str):
        self.sheet = sheet
        self.row_id = row_id
        self.column = column
        super().__init__(f"{sheet}#{row_id} column {column}: {message}")


class SheetNotFound(Exception):
    """The provider has no sheet with this name."""


_INT_RANGES = {
    "u8": (0, 0xFF),
    "u16": (0, 0xFFFF),
    "u32": (0, 0xFFFFFFFF),
    "u64": (0, 0xFFFFFFFFFFFFFFFF),
    "i8": (-0x80, 0x7F),
    "i16": (-0x8000, 0x7FFF),
    "i32": (-0x80000000, 0x7FFFFFFF),
}


class Row:
    """One sheet row: a row id plus positional column values."""

    def __init__(self, sheet: str, row_id: int, values: Sequence[Any]):
        self.sheet = sheet
        self.row_id = row_id
        self.values = list(values)

    def __repr__(self) -> str:
        return f"Row({self.sheet!r}, {self.row_id}, {self.values!r})"

    def _get(self, column: int) -> Any:
        if not 0 <= column < len(self.values):
            raise FieldError(self.sheet, self.row_id, column, "no such column")
        return self.values[column]

    def string(self, column: int) -> str:
        value = self._get(column)
        if not isinstance(value, str):
            raise FieldError(self.sheet, self.row_id, column, f"expected a string, got {value!r}")
        return value

    def _integer(self, column: int, kind: str) -> int:
        value = self._get(column)
        if isinstance(value, bool) or not isinstance(value, int):
            raise FieldError(self.sheet, self.row_id, column, f"expected {kind}, got {value!r}")
        low, high = _INT_RANGES[kind]
        if not low <= value <= high:
            raise FieldError(self.sheet, self.row_id, column, f"{value} out of range for {kind}")
        return value

    def u8(self, column: int) -> int:
        return self._integer(column, "u8")

    def u16(self, column: int) -> int:
        return self._integer(column, "u16")

    def u32(self, column: int) -> int:
        return self._integer(column, "u32")

    def u64(self, column: int) -> int:
        return self._integer(column, "u64")

    def i8(self, column: int) -> int:
        return self._integer(column, "i8")

    def i16(self, column: int) -> int:
        return self._integer(column, "i16")

    def i32(self, column: int) -> int:
        return self._integer(column, "i32")


class RowProvider:
    """Source of sheet rows."""

    def rows(self, sheet: str) -> Iterable[Row]:
        raise NotImplementedError

    def row(self, sheet: str, row_id: int) -> Optional[Row]:
        raise NotImplementedError


class ArchiveProvider:
    """Source of raw archive file bytes."""

    def read(self, path: str) -> Optional[bytes]:
        raise NotImplementedError


# =============================================================================
# In-memory providers
# =============================================================================

class MemorySheetProvider(RowProvider):
    """Sheets held in memory: {sheet: {row_id: [values...]}}."""

    def __init__(self, sheets: Optional[Dict[str, Dict[int, Sequence[Any]]]] = None):
        self._sheets: Dict[str, Dict[int, Row]] = {}
        for sheet, rows in (sheets or {}).items():
            for row_id, values in rows.items():
                self.add_row(sheet, row_id, values)

    def add_row(self, sheet: str, row_id: int, values: Sequence[Any]) -> Row:
        row = Row(sheet, row_id, values)
        self._sheets.setdefault(sheet, {})[row_id] = row
        return row

    def rows(self, sheet: str) -> Iterator[Row]:
        rows = self._sheets.get(sheet, {})
        for row_id in sorted(rows):
            yield rows[row_id]

    def row(self, sheet: str, row_id: int) -> Optional[Row]:
        return self._sheets.get(sheet, {}).get(row_id)


class MemoryArchive(ArchiveProvider):
    def __init__(self, files: Optional[Dict[str, bytes]] = None):
        self.files: Dict[str, bytes] = dict(files or {})

    def read(self, path: str) -> Optional[bytes]:
        return self.files.get(path)


# =============================================================================
# On-disk providers
# =============================================================================

def _convert(raw: str, type_name: str) -> Any:
    """Convert one CSV cell according to the declared column type."""
    if type_name == "str":
        return raw
    if raw in ("True", "False"):
        return raw == "True"
    try:
        return int(raw)
    except ValueError:
        pass
    # Quad columns are written as "a, b, c, d" (16 bits each, low first)
    pieces = [piece.strip() for piece in raw.split(",")]
    if len(pieces) == 4 and all(piece.lstrip("-").isdigit() for piece in pieces):
        value = 0
        for shift, piece in enumerate(pieces):
            value |= (int(piece) & 0xFFFF) << (16 * shift)
        return value
    try:
        return float(raw)
    except ValueError:
        return raw


class CsvSheetProvider(RowProvider):
    """
    Sheets exported as `<root>/<Sheet>.csv`.

    Sheets are parsed on first use and cached.
    """

    def __init__(self, root: Path):
        self.root = Path(root)
        self._cache: Dict[str, Dict[int, Row]] = {}

    def _load(self, sheet: str) -> Dict[int, Row]:
        cached = self._cache.get(sheet)
        if cached is not None:
            return cached

        path = self.root / f"{sheet}.csv"
        if not path.exists():
            raise SheetNotFound(f"sheet {sheet} not found at {path}")

        rows: Dict[int, Row] = {}
        with open(path, newline="", encoding="utf-8-sig") as f:
            reader = csv.reader(f)
            header = next(reader, None)
            next(reader, None)  # column names
            types = next(reader, None)
            if header is None or types is None:
                logger.warning(f"{path} has no header lines")
                self._cache[sheet] = rows
                return rows

            column_types = types[1:]
            for record in reader:
                if not record:
                    continue
                try:
                    row_id = int(record[0])
                except ValueError:
                    logger.debug(f"{sheet}: skipping row with key {record[0]!r}")
                    continue
                values = [
                    _convert(cell, column_types[i] if i < len(column_types) else "")
                    for i, cell in enumerate(record[1:])
                ]
                rows[row_id] = Row(sheet, row_id, values)

        logger.debug(f"Loaded {len(rows)} rows from {path}")
        self._cache[sheet] = rows
        return rows

    def rows(self, sheet: str) -> List[Row]:
        rows = self._load(sheet)
        return [rows[row_id] for row_id in sorted(rows)]

    def row(self, sheet: str, row_id: int) -> Optional[Row]:
        return self._load(sheet).get(row_id)


class DirectoryArchive(ArchiveProvider):
    """Archive files extracted below a root directory, laid out by game path."""

    def __init__(self, root: Path):
        self.root = Path(root)

    def read(self, path: str) -> Optional[bytes]:
        target = self.root / path
        try:
            return target.read_bytes()
        except FileNotFoundError:
            return None
        except OSError as e:
            logger.warning(f"Could not read {target}: {e}")
            return None


# =============================================================================
# Typed access
# =============================================================================

def read_sheet(provider: RowProvider, record_type) -> Iterator:
    """
    Yield `record_type.from_row(row)` for every row of its sheet.

    Rows with missing or mistyped fields are skipped.
    """
    skipped = 0
    for row in provider.rows(record_type.SHEET):
        try:
            yield record_type.from_row(row)
        except FieldError as e:
            skipped += 1
            logger.debug(f"Skipping {e}")
    if skipped:
        logger.debug(f"{record_type.SHEET}: skipped {skipped} rows")


def read_row(provider: RowProvider, record_type, row_id: int):
    """One typed record, or None if the row is absent or malformed."""
    row = provider.row(record_type.SHEET, row_id)
    if row is None:
        return None
    try:
        return record_type.from_row(row)
    except FieldError as e:
        logger.debug(f"Skipping {e}")
        return None
