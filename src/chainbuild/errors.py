"""User-facing game errors.

Every ``GameError`` carries a message that can be shown to the player as-is.
Anything else escaping the engine is treated as an internal defect by the
systems that drive it.
"""
from __future__ import annotations


class GameError(Exception):
    """Base class for recoverable, user-facing failures."""

    default_message = "The operation could not be completed."

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class InvalidShapeError(GameError):
    default_message = "All grid rows must have the same length."


class OutOfBoundsError(GameError):
    default_message = "Coordinates out of range."


class OccupiedCellError(GameError):
    default_message = "You can't put structures here, since it's not empty."


class EmptyCellError(GameError):
    default_message = "You can't put bombers here, since it's empty."


class QueueExhaustedError(GameError):
    default_message = "You have no structure left to build."


class NoStarsLeftError(GameError):
    default_message = "You don't have any stars left."


class NoBombersLeftError(GameError):
    default_message = "You don't have any bombers left."


class NothingToUndoError(GameError):
    default_message = "No operation can be undone."


class NothingToRedoError(GameError):
    default_message = "No operation can be redone."


class IndexOutOfRangeError(GameError):
    default_message = "History index out of range."


class NoLevelLoadedError(GameError):
    default_message = "No level has been loaded."


class ParseError(GameError):
    """Structural problem in a level description.

    ``kind`` is one of the ``KIND_*`` constants so callers can tell the
    failures apart without matching on message text.
    """

    KIND_DIMENSIONS = "dimensions"
    KIND_INVENTORY = "inventory"
    KIND_ROW_LENGTH = "row_length"
    KIND_CELL = "cell"
    KIND_QUEUE = "queue"
    KIND_ENCODING = "encoding"

    default_message = "Failed to parse input file."

    def __init__(self, kind: str, message: str | None = None, *, line_number: int | None = None) -> None:
        self.kind = kind
        self.line_number = line_number
        super().__init__(message)


class CommandError(GameError):
    default_message = "Malformed command."


class EmptyBatchError(GameError):
    default_message = "No command was found."


class BatchError(GameError):
    """A command batch stopped at ``line_number``; ``cause`` is the original error."""

    def __init__(self, line_number: int, cause: BaseException) -> None:
        self.line_number = line_number
        self.cause = cause
        self.unexpected = not isinstance(cause, GameError)
        if self.unexpected:
            message = (
                f"An unknown error occured when executing line {line_number}.\n"
                "Changes will be rolled back."
            )
        else:
            message = f"Error on line {line_number}: {cause}\nExecution was interrupted."
        super().__init__(message)
