from __future__ import annotations

from typing import Dict, List, Sequence

from esper import World

from chainbuild.constants import QUEUE_PREVIEW_LIMIT, TOOL_BOMB, TOOL_BUILD, TOOL_STAR, TOOL_TITLES
from chainbuild.systems.session_utils import display_state, get_history, get_level, get_tool_selection


def queue_preview(queue: Sequence[int], num_built: int, limit: int = QUEUE_PREVIEW_LIMIT) -> List[str]:
    """Upcoming queue entries, next first, truncated with a '... (N more)' marker."""

    items = [str(tier) for tier in queue[num_built:]]
    if len(items) > limit:
        cut = len(items) - limit
        items = items[:limit] + [f"... ({cut} more)"]
    return items


def tool_amounts(world: World) -> Dict[str, int]:
    state = display_state(world)
    level = get_level(world)
    return {
        TOOL_BUILD: level.remaining_builds(state.num_built),
        TOOL_STAR: state.num_stars,
        TOOL_BOMB: state.num_bombs,
    }


def toolbar(world: World) -> List[Dict[str, object]]:
    """One entry per tool: name, title, remaining amount and bound slot (-1 when unbound)."""

    selection = get_tool_selection(world)
    return [
        {
            'name': name,
            'title': TOOL_TITLES[name],
            'amount': amount,
            'selected': selection.slot_of(name),
        }
        for name, amount in tool_amounts(world).items()
    ]


def history_labels(world: World) -> List[str]:
    return [state.command or 'Start' for state in get_history(world)]


def status_lines(world: World) -> List[str]:
    level = get_level(world)
    history = get_history(world)
    state = display_state(world)
    return [
        f"Board: {level.width} x {level.height}",
        f"Round: {history.step_number}",
        f"Score: {state.score}",
        f"Queue: {state.num_built} / {len(level.queue)}",
        f"Stars: {state.num_stars}",
        f"Bombers: {state.num_bombs}",
    ]


def render_grid_text(world: World) -> List[str]:
    """Plain-text board using the level file notation ('.' for empty cells)."""

    state = display_state(world)
    return [
        ''.join('.' if value is None else str(value) for value in row)
        for row in state.grid.serialize()
    ]
