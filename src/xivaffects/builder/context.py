"""
Build Context

State shared by every index-building pass: the data providers, the index
being filled in, and the IMC lookups used to turn logical variant ids into
physical ones.
"""

import logging
from typing import Dict, List, Optional

from xivaffects.formats.imc import ImcFile, decode_imc
from xivaffects.index.model import AffectsIndex
from xivaffects.sheets.provider import ArchiveProvider, RowProvider

logger = logging.getLogger(__name__)


class BuildContext:
    """
    Everything a pass needs. Passes only add to `index`.

    Decoded IMC files are cached by path since several passes read the same
    models.
    """

    def __init__(
        self,
        sheets: RowProvider,
        archive: ArchiveProvider,
        bnpc_names: Optional[Dict[int, List[int]]] = None,
        index: Optional[AffectsIndex] = None,
    ):
        self.sheets = sheets
        self.archive = archive
        self.bnpc_names = bnpc_names or {}
        self.index = index if index is not None else AffectsIndex()
        self._imc_cache: Dict[str, Optional[ImcFile]] = {}

    def imc(self, path: str) -> Optional[ImcFile]:
        """Decoded IMC file at `path`, or None if missing or malformed."""
        if path in self._imc_cache:
            return self._imc_cache[path]

        data = self.archive.read(path)
        if data is None:
            imc = None
            logger.debug(f"No IMC file at {path}")
        else:
            imc = decode_imc(data)
            if imc is None:
                logger.debug(f"Could not decode IMC file {path}")
        self._imc_cache[path] = imc
        return imc

    def remap(self, path: str, part_index: int, logical_variant: int) -> int:
        """
        Physical variant id for a logical variant, via the IMC file at `path`.

        Falls back to the logical id when no remap is available.
        """
        imc = self.imc(path)
        if imc is None:
            return logical_variant
        physical = imc.remap(part_index, logical_variant)
        if physical is None:
            logger.debug(f"{path}: no variant {logical_variant} in part {part_index}")
            return logical_variant
        return physical
