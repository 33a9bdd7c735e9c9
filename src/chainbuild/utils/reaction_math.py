from __future__ import annotations

from collections import deque
from typing import List, Tuple

from chainbuild.components.grid import Grid
from chainbuild.components.reaction_phase import ReactionPhase
from chainbuild.components.rules import DEFAULT_RULES, GameRules
from chainbuild.constants import MIN_TIER

Position = Tuple[int, int]


def connected_group(grid: Grid, x: int, y: int, tier: int) -> List[Position]:
    """Collect the 4-connected group of ``tier`` cells reachable from (x, y).

    The origin is always part of the group whatever it currently holds, so the
    same search answers both "did this placement react" and "would placing
    ``tier`` here react" without touching the grid.
    """

    group: List[Position] = [(x, y)]
    visited = {(x, y)}
    frontier = deque(group)
    while frontier:
        cx, cy = frontier.popleft()
        for pos in grid.neighbors(cx, cy):
            if pos in visited:
                continue
            visited.add(pos)
            if grid.value_at(*pos) == tier:
                group.append(pos)
                frontier.append(pos)
    return group


def find_reaction(grid: Grid, x: int, y: int, tier: int, rules: GameRules = DEFAULT_RULES) -> ReactionPhase | None:
    """Return the phase that a ``tier`` cell at (x, y) would trigger, if any."""

    if tier >= rules.max_tier:
        return None
    group = connected_group(grid, x, y, tier)
    if len(group) < rules.min_reaction_count:
        return None
    return ReactionPhase(tier_before=tier, tier_after=tier + 1, cells=tuple(group))


def select_star_tier(grid: Grid, x: int, y: int, rules: GameRules = DEFAULT_RULES) -> int:
    """Pick the highest tier that would react immediately at (x, y); else the lowest tier.

    Each candidate is probed one level deep only; further cascades are not simulated.
    """

    for tier in range(rules.max_tier, MIN_TIER, -1):
        if find_reaction(grid, x, y, tier, rules) is not None:
            return tier
    return MIN_TIER


def resolve_reactions(grid: Grid, x: int, y: int, rules: GameRules = DEFAULT_RULES) -> List[ReactionPhase]:
    """Merge groups around (x, y) until nothing reacts; mutates ``grid``.

    Every member of a reacting group is cleared and the origin is promoted,
    so the promoted cell may immediately seed the next phase.
    """

    phases: List[ReactionPhase] = []
    while True:
        tier = grid.value_at(x, y)
        if tier is None:
            break
        phase = find_reaction(grid, x, y, tier, rules)
        if phase is None:
            break
        for cx, cy in phase.cells:
            grid.set_value(cx, cy, None)
        grid.set_value(x, y, phase.tier_after)
        phases.append(phase)
    return phases
