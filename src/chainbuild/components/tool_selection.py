from dataclasses import dataclass, field
from typing import List

from chainbuild.constants import DEFAULT_TOOL_SELECTION, MOUSE_BUTTON_LEFT

@dataclass(slots=True)
class ToolSelection:
    """Tools bound to the primary (left) and secondary (any other) mouse button."""
    selected: List[str] = field(default_factory=lambda: list(DEFAULT_TOOL_SELECTION))

    @staticmethod
    def slot_for(button: int) -> int:
        return 0 if button == MOUSE_BUTTON_LEFT else 1

    @property
    def primary(self) -> str:
        return self.selected[0]

    def tool_for(self, button: int) -> str:
        return self.selected[self.slot_for(button)]

    def select(self, tool: str, button: int) -> None:
        """Bind tool to the button's slot; picking the other slot's tool swaps them."""
        index = self.slot_for(button)
        if self.selected[1 - index] == tool:
            self.selected.reverse()
        else:
            self.selected[index] = tool

    def slot_of(self, tool: str) -> int:
        """0 for primary, 1 for secondary, -1 when unbound."""
        try:
            return self.selected.index(tool)
        except ValueError:
            return -1
