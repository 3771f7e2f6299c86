"""
Battle NPC name links.

The game data has no direct link between a battle NPC base and its name;
community tooling publishes the pairs seen in the wild as

    {"bnpc": [{"bnpcBase": 1, "bnpcName": 2}, ...]}
"""

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List

logger = logging.getLogger(__name__)


class BNpcLinkError(Exception):
    """The link document is not in the expected shape."""


@dataclass(frozen=True)
class BNpcLink:
    base: int
    name: int


def parse_bnpc_links(data: Dict[str, Any]) -> List[BNpcLink]:
    try:
        entries = data["bnpc"]
        return [BNpcLink(int(entry["bnpcBase"]), int(entry["bnpcName"])) for entry in entries]
    except (KeyError, TypeError, ValueError) as e:
        raise BNpcLinkError(f"malformed bnpc link data: {e}") from e


def load_bnpc_links(path: Path) -> List[BNpcLink]:
    path = Path(path)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise BNpcLinkError(f"{path} is not valid JSON: {e}") from e
    links = parse_bnpc_links(data)
    logger.info(f"Loaded {len(links)} bnpc name links from {path}")
    return links


def names_by_base(links: List[BNpcLink]) -> Dict[int, List[int]]:
    """Group name ids by bnpc base id, keeping link order."""
    grouped: Dict[int, List[int]] = {}
    for link in links:
        grouped.setdefault(link.base, []).append(link.name)
    return grouped
