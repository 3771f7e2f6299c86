"""
Index Builder

Runs the extraction passes in order against one BuildContext and returns
the finished AffectsIndex. The VFX passes must come last since they walk
the models the entity passes discovered.
"""

import logging
import time
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Tuple

from xivaffects.builder.context import BuildContext
from xivaffects.builder.items import analyse_items
from xivaffects.builder.maps import analyse_maps
from xivaffects.builder.npcs import (
    analyse_bnpcs,
    analyse_enpcs,
    analyse_minions,
    analyse_mounts,
    analyse_ornaments,
)
from xivaffects.builder.timelines import analyse_actions, analyse_emotes
from xivaffects.builder.vfx import (
    analyse_equipment_vfx,
    analyse_monster_vfx,
    analyse_weapon_vfx,
)
from xivaffects.index.model import AffectsIndex
from xivaffects.sheets.bnpc import BNpcLink, names_by_base
from xivaffects.sheets.provider import ArchiveProvider, RowProvider

logger = logging.getLogger(__name__)

Pass = Callable[[BuildContext], None]

PASSES: List[Tuple[str, Pass]] = [
    ("items", analyse_items),
    ("emotes", analyse_emotes),
    ("battle npcs", analyse_bnpcs),
    ("event npcs", analyse_enpcs),
    ("actions", analyse_actions),
    ("minions", analyse_minions),
    ("mounts", analyse_mounts),
    ("ornaments", analyse_ornaments),
    ("maps", analyse_maps),
    ("equipment vfx", analyse_equipment_vfx),
    ("weapon vfx", analyse_weapon_vfx),
    ("monster vfx", analyse_monster_vfx),
]


@dataclass
class BuildStats:
    """Seconds spent per pass, in run order."""
    timings: Dict[str, float] = field(default_factory=dict)
    names: int = 0

    @property
    def total(self) -> float:
        return sum(self.timings.values())


class IndexBuilder:
    """Builds an AffectsIndex from game sheets and archive files."""

    def __init__(
        self,
        sheets: RowProvider,
        archive: ArchiveProvider,
        bnpc_links: Optional[List[BNpcLink]] = None,
        passes: Optional[List[Tuple[str, Pass]]] = None,
    ):
        self.sheets = sheets
        self.archive = archive
        self.bnpc_links = bnpc_links or []
        self.passes = passes if passes is not None else PASSES
        self.stats = BuildStats()

    def build(self) -> AffectsIndex:
        ctx = BuildContext(self.sheets, self.archive, names_by_base(self.bnpc_links))
        self.stats = BuildStats()

        for name, run in self.passes:
            logger.info(f"Analysing {name}...")
            start = time.perf_counter()
            run(ctx)
            elapsed = time.perf_counter() - start
            self.stats.timings[name] = elapsed
            logger.info(f"  {name} done in {elapsed:.2f}s ({len(ctx.index.names)} names so far)")

        self.stats.names = len(ctx.index.names)
        logger.info(f"Built index with {self.stats.names} names in {self.stats.total:.2f}s")
        return ctx.index


def build_index(
    sheets: RowProvider,
    archive: ArchiveProvider,
    bnpc_links: Optional[List[BNpcLink]] = None,
) -> AffectsIndex:
    return IndexBuilder(sheets, archive, bnpc_links).build()
