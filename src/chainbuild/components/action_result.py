from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from chainbuild.components.reaction_phase import ReactionPhase

@dataclass(slots=True)
class ActionResult:
    """Outcome of one successful build, star or bomb.

    tier: value placed (build/star) or removed (bomb).
    phases: reaction steps in order; always empty for bombs.
    """
    tool: str
    target: Tuple[int, int]
    tier: int
    score_delta: float = 0
    phases: List[ReactionPhase] = field(default_factory=list)
    final_value: Optional[int] = None

    @property
    def reacted(self) -> bool:
        return bool(self.phases)

    def reaction_cells(self) -> set[Tuple[int, int]]:
        return {pos for phase in self.phases for pos in phase.cells}
