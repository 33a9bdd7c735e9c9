from __future__ import annotations

from typing import Iterable, Iterator, List

from chainbuild.components.game_state import GameState
from chainbuild.errors import IndexOutOfRangeError, NothingToRedoError, NothingToUndoError


class History:
    """Linear timeline of snapshots with a movable step pointer.

    Index 0 is the freshly loaded level. Appending while the pointer is not at
    the end discards the redo branch, so there is never more than one future.
    """

    def __init__(self, initial: GameState):
        self._states: List[GameState] = [initial]
        self.step_number = 0

    def __len__(self) -> int:
        return len(self._states)

    def __iter__(self) -> Iterator[GameState]:
        return iter(self._states)

    def __getitem__(self, index: int) -> GameState:
        return self._states[index]

    @property
    def last_index(self) -> int:
        return len(self._states) - 1

    @property
    def can_undo(self) -> bool:
        return self.step_number > 0

    @property
    def can_redo(self) -> bool:
        return self.step_number < self.last_index

    def current_state(self) -> GameState:
        return self._states[self.step_number]

    def append(self, state: GameState) -> None:
        self.extend((state,))

    def extend(self, states: Iterable[GameState]) -> None:
        """Append several states as one operation, discarding the redo branch first."""
        new_states = list(states)
        if not new_states:
            return
        del self._states[self.step_number + 1:]
        self._states.extend(new_states)
        self.step_number = self.last_index

    def undo(self) -> GameState:
        if not self.can_undo:
            raise NothingToUndoError()
        self.step_number -= 1
        return self.current_state()

    def redo(self) -> GameState:
        if not self.can_redo:
            raise NothingToRedoError()
        self.step_number += 1
        return self.current_state()

    def jump_to(self, index: int) -> GameState:
        if isinstance(index, bool) or not isinstance(index, int) or not 0 <= index < len(self._states):
            raise IndexOutOfRangeError()
        self.step_number = index
        return self.current_state()

    def export_commands(self) -> List[str]:
        return [state.command for state in self._states[1:self.step_number + 1]]
