"""Snapshot of a game in progress.

A ``GameState`` is only ever mutated on a private clone; once a snapshot is
appended to the history it is treated as read-only.
"""
from __future__ import annotations

from typing import Any, Mapping, Optional, Sequence

from chainbuild.components.action_result import ActionResult
from chainbuild.components.grid import Cell, Grid
from chainbuild.components.rules import DEFAULT_RULES, GameRules
from chainbuild.constants import EXPORT_KEYWORDS, TOOL_BOMB, TOOL_BUILD, TOOL_STAR
from chainbuild.errors import (
    EmptyCellError,
    NoBombersLeftError,
    NoStarsLeftError,
    OccupiedCellError,
    OutOfBoundsError,
    QueueExhaustedError,
)
from chainbuild.utils.reaction_math import resolve_reactions, select_star_tier


def _normalize_score(score: float) -> float:
    if isinstance(score, float) and score.is_integer():
        return int(score)
    return score


def format_command(tool: str, x: int, y: int) -> str:
    """External command text for a 0-based position (coordinates become 1-based)."""
    return f"{EXPORT_KEYWORDS[tool]} {x + 1} {y + 1}"


class GameState:
    def __init__(
        self,
        *,
        score: float = 0,
        num_built: int = 0,
        num_stars: int = 0,
        num_bombs: int = 0,
        grid: Sequence[Sequence[Optional[int]]] | Grid = (),
        command: Optional[str] = None,
        rules: GameRules = DEFAULT_RULES,
    ):
        self.score = _normalize_score(score)
        self.num_built = num_built
        self.num_stars = num_stars
        self.num_bombs = num_bombs
        self.grid = Grid(grid.serialize() if isinstance(grid, Grid) else grid)
        self.command = command
        self.rules = rules

    @classmethod
    def deserialize(cls, value: Mapping[str, Any], *, rules: GameRules = DEFAULT_RULES) -> GameState:
        return cls(
            score=value.get("score", 0),
            num_built=value.get("num_built", 0),
            num_stars=value.get("num_stars", 0),
            num_bombs=value.get("num_bombs", 0),
            grid=value.get("grid", ()),
            command=value.get("command"),
            rules=rules,
        )

    def serialize(self) -> dict[str, Any]:
        return {
            "score": self.score,
            "num_built": self.num_built,
            "num_stars": self.num_stars,
            "num_bombs": self.num_bombs,
            "grid": self.grid.serialize(),
            "command": self.command,
        }

    def clone(self) -> GameState:
        return GameState.deserialize(self.serialize(), rules=self.rules)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, GameState):
            return NotImplemented
        return self.serialize() == other.serialize()

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return (
            f"GameState(score={self.score}, num_built={self.num_built}, "
            f"num_stars={self.num_stars}, num_bombs={self.num_bombs}, command={self.command!r})"
        )

    def _target(self, x: int, y: int) -> Cell:
        if not self.grid.in_bounds(x, y):
            raise OutOfBoundsError()
        return self.grid.cell(x, y)

    def _put_structure(self, tool: str, target: Cell, tier: int) -> ActionResult:
        score_before = self.score
        target.value = tier
        self.score += self.rules.build_score(tier)
        phases = resolve_reactions(self.grid, target.x, target.y, self.rules)
        for phase in phases:
            self.score += self.rules.build_score(phase.tier_after)
        self.score = _normalize_score(self.score)
        return ActionResult(
            tool=tool,
            target=(target.x, target.y),
            tier=tier,
            score_delta=_normalize_score(self.score - score_before),
            phases=phases,
            final_value=target.value,
        )

    def build(self, x: int, y: int, tier: int) -> ActionResult:
        target = self._target(x, y)
        if target.value is not None:
            raise OccupiedCellError("You can't put structures here, since it's not empty.")
        if not self.rules.is_valid_tier(tier):
            raise ValueError(f"Cannot build tier {tier!r}")
        self.command = format_command(TOOL_BUILD, x, y)
        self.num_built += 1
        return self._put_structure(TOOL_BUILD, target, tier)

    def put_star(self, x: int, y: int) -> ActionResult:
        if not self.num_stars:
            raise NoStarsLeftError()
        target = self._target(x, y)
        if target.value is not None:
            raise OccupiedCellError("You can't put stars here, since it's not empty.")
        self.command = format_command(TOOL_STAR, x, y)
        self.num_stars -= 1
        tier = select_star_tier(self.grid, x, y, self.rules)
        return self._put_structure(TOOL_STAR, target, tier)

    def put_bomb(self, x: int, y: int) -> ActionResult:
        if not self.num_bombs:
            raise NoBombersLeftError()
        target = self._target(x, y)
        if target.value is None:
            raise EmptyCellError()
        self.command = format_command(TOOL_BOMB, x, y)
        self.num_bombs -= 1
        tier = target.value
        penalty = self.rules.bomb_penalty(tier)
        self.score = _normalize_score(self.score - penalty)
        target.value = None
        return ActionResult(
            tool=TOOL_BOMB,
            target=(x, y),
            tier=tier,
            score_delta=_normalize_score(-penalty),
        )


def build_from_queue(state: GameState, queue: Sequence[int], x: int, y: int) -> ActionResult:
    """Build the next queued structure at (x, y)."""

    if state.num_built >= len(queue):
        raise QueueExhaustedError()
    return state.build(x, y, queue[state.num_built])
