"""
Animation timeline passes: emotes and actions.

Emotes are keyed by the last segment of their first timeline key
(`emote/pose00_loop` -> `pose00_loop`); actions by the full key of their
cast, end and hit timelines.
"""

import logging
from typing import Dict, Optional

from xivaffects.builder.context import BuildContext
from xivaffects.common import ItemKind
from xivaffects.sheets.provider import read_row, read_sheet
from xivaffects.sheets.records import (
    Action,
    ActionCastTimeline,
    ActionTimeline,
    Emote,
    TextCommand,
)

logger = logging.getLogger(__name__)


def _timeline_key(ctx: BuildContext, timeline_id: int) -> Optional[str]:
    timeline = read_row(ctx.sheets, ActionTimeline, timeline_id)
    if timeline is None or not timeline.key:
        return None
    return timeline.key


def analyse_emotes(ctx: BuildContext) -> None:
    for emote in read_sheet(ctx.sheets, Emote):
        if not emote.name:
            continue

        timeline_id = emote.first_timeline
        if timeline_id is None:
            continue
        key = _timeline_key(ctx, timeline_id)
        if key is None:
            continue
        key = key.split("/")[-1]

        command_index = None
        if emote.text_command != 0:
            command = read_row(ctx.sheets, TextCommand, emote.text_command)
            if command is not None and command.command:
                command_index = ctx.index.names.intern(command.command)

        name_index = ctx.index.names.intern(emote.name)
        ctx.index.add_emote(key, (ItemKind.EMOTE, name_index, command_index))


def analyse_actions(ctx: BuildContext) -> None:
    cast_timelines: Dict[int, ActionCastTimeline] = {
        cast.row_id: cast for cast in read_sheet(ctx.sheets, ActionCastTimeline)
    }

    for action in read_sheet(ctx.sheets, Action):
        if not action.name:
            continue

        timeline_ids = []
        cast = cast_timelines.get(action.animation_start)
        if cast is not None:
            timeline_ids.append(cast.action_timeline)
        if action.animation_end >= 0:
            timeline_ids.append(action.animation_end)
        timeline_ids.append(action.animation_hit)

        for timeline_id in timeline_ids:
            key = _timeline_key(ctx, timeline_id)
            if key is not None:
                ctx.index.add_action(key, ctx.index.name_ref(ItemKind.ACTION, action.name))
