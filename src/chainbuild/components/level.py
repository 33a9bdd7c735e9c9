from dataclasses import dataclass, field
from typing import List, Optional, Tuple

@dataclass(slots=True)
class Level:
    """Decoded level description.

    grid: rows of tiers (None = empty), height x width.
    queue: build queue consumed in order as structures are placed; never mutated.
    filename: name of the source file when loaded from disk.
    """
    width: int
    height: int
    num_stars: int
    num_bombs: int
    grid: List[List[Optional[int]]] = field(default_factory=list)
    queue: Tuple[int, ...] = ()
    filename: Optional[str] = None

    def remaining_builds(self, num_built: int) -> int:
        return max(len(self.queue) - num_built, 0)
