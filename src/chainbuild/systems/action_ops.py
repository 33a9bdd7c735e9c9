from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Set, Tuple

from chainbuild.components.action_result import ActionResult
from chainbuild.components.game_state import GameState, build_from_queue
from chainbuild.constants import TOOL_BOMB, TOOL_BUILD, TOOL_STAR
from chainbuild.errors import BatchError, EmptyBatchError
from chainbuild.utils.commands import iter_command_lines, parse_command_line

Position = Tuple[int, int]


def apply_in_place(state: GameState, tool: str, x: int, y: int, queue: Sequence[int]) -> ActionResult:
    """Run a tool against ``state`` directly; callers pass a clone they own."""

    if tool == TOOL_BUILD:
        return build_from_queue(state, queue, x, y)
    if tool == TOOL_STAR:
        return state.put_star(x, y)
    if tool == TOOL_BOMB:
        return state.put_bomb(x, y)
    raise ValueError(f"Unknown tool: {tool}")


def apply_action(state: GameState, tool: str, x: int, y: int, queue: Sequence[int]) -> Tuple[GameState, ActionResult]:
    """Apply a tool to a clone of ``state``; ``state`` itself is never modified."""

    working = state.clone()
    result = apply_in_place(working, tool, x, y, queue)
    return working, result


def run_command_batch(state: GameState, text: str, queue: Sequence[int]) -> List[GameState]:
    """Execute command lines in order, returning one new state per line.

    The first failing line aborts the whole batch with ``BatchError``; nothing
    produced before it is returned, so callers can keep their history as is.
    """

    results: List[GameState] = []
    current = state
    for line_number, line in iter_command_lines(text):
        try:
            command = parse_command_line(line, current.grid, line_number=line_number)
            current, _ = apply_action(current, command.tool, command.x, command.y, queue)
        except Exception as exc:
            raise BatchError(line_number, exc) from exc
        results.append(current)
    if not results:
        raise EmptyBatchError()
    return results


@dataclass(slots=True)
class Preview:
    """Hover preview of a tool.

    state: copy of the source state with only the target cell changed to the
    value it would end up holding; the reacting cells are listed separately so
    the UI can still draw what is about to merge.
    """
    state: GameState
    target: Position
    reaction_cells: Set[Position] = field(default_factory=set)
    result: Optional[ActionResult] = None


def preview_action(state: GameState, tool: str, x: int, y: int, queue: Sequence[int]) -> Optional[Preview]:
    """Return what ``tool`` would do at (x, y), or None when it cannot be previewed.

    Only build and star placements are previewed, and only when they would succeed.
    """

    if not state.grid.in_bounds(x, y) or state.grid.value_at(x, y) is not None:
        return None
    if tool == TOOL_BUILD:
        if state.num_built >= len(queue):
            return None
    elif tool == TOOL_STAR:
        if not state.num_stars:
            return None
    else:
        return None
    _, result = apply_action(state, tool, x, y, queue)
    preview_state = state.clone()
    preview_state.grid.set_value(x, y, result.final_value)
    return Preview(
        state=preview_state,
        target=(x, y),
        reaction_cells=result.reaction_cells(),
        result=result,
    )
