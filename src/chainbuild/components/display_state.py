from dataclasses import dataclass, field
from typing import Any, Optional, Set, Tuple

@dataclass(slots=True)
class DisplayState:
    """What the UI should currently draw instead of the current history step.

    source: 'current', 'preview' (cell hover) or 'history' (history list hover).
    state: the GameState to draw when source is not 'current'.
    preview_target: cell that shows the previewed structure.
    reaction_cells: cells that would take part in the previewed reaction.
    """
    source: str = "current"
    state: Optional[Any] = None
    preview_target: Optional[Tuple[int, int]] = None
    reaction_cells: Set[Tuple[int, int]] = field(default_factory=set)
    hover_index: Optional[int] = None

    def reset(self) -> None:
        self.source = "current"
        self.state = None
        self.preview_target = None
        self.reaction_cells = set()
        self.hover_index = None
