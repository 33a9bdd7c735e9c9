from __future__ import annotations

from dataclasses import dataclass

from chainbuild.constants import BOMB_RATIO, BUILD_SCORES, MAX_TIER, MIN_REACTION_COUNT, MIN_TIER


@dataclass(frozen=True, slots=True)
class GameRules:
    """Scoring table and reaction thresholds shared by every snapshot.

    build_scores: points per tier, indexed 1..max_tier (index 0 unused).
    bomb_ratio: fraction of a bombed structure's build score taken off the score.
    """

    min_reaction_count: int = MIN_REACTION_COUNT
    max_tier: int = MAX_TIER
    build_scores: tuple[int | None, ...] = BUILD_SCORES
    bomb_ratio: float = BOMB_RATIO

    def __post_init__(self) -> None:
        if len(self.build_scores) != self.max_tier + 1:
            raise ValueError(
                f"build_scores needs {self.max_tier + 1} entries, got {len(self.build_scores)}"
            )

    def build_score(self, tier: int) -> int:
        if not MIN_TIER <= tier <= self.max_tier:
            raise ValueError(f"Tier {tier} is outside 1..{self.max_tier}")
        return self.build_scores[tier]

    def bomb_penalty(self, tier: int) -> float:
        return self.bomb_ratio * self.build_score(tier)

    def is_valid_tier(self, value: object) -> bool:
        return isinstance(value, int) and not isinstance(value, bool) and MIN_TIER <= value <= self.max_tier


DEFAULT_RULES = GameRules()
