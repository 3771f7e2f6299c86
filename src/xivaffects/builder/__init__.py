"""
Offline index construction.

Usage:
    from xivaffects.builder import IndexBuilder
    index = IndexBuilder(sheets, archive, bnpc_links).build()
"""

from xivaffects.builder.context import BuildContext
from xivaffects.builder.pipeline import PASSES, BuildStats, IndexBuilder, build_index

__all__ = [
    "BuildContext",
    "BuildStats",
    "IndexBuilder",
    "PASSES",
    "build_index",
]
