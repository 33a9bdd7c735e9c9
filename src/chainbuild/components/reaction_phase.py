from dataclasses import dataclass
from typing import Tuple

@dataclass(frozen=True, slots=True)
class ReactionPhase:
    """One promotion step of a chain reaction.

    cells: the connected group that merged, origin first.
    """
    tier_before: int
    tier_after: int
    cells: Tuple[Tuple[int, int], ...]
