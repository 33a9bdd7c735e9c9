from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, List, Optional, Sequence

from chainbuild.errors import InvalidShapeError

Position = tuple[int, int]
CellValues = List[List[Optional[int]]]


@dataclass(slots=True)
class Cell:
    """A single board square.

    x is the row index, y the column index; value is a tier or None when empty.
    """
    x: int
    y: int
    value: Optional[int] = None

    @property
    def is_empty(self) -> bool:
        return self.value is None


class Grid:
    """Rectangular array of cells whose dimensions are fixed at construction."""

    __slots__ = ("cells",)

    def __init__(self, cell_values: Sequence[Sequence[Optional[int]]]):
        rows = [list(row) for row in cell_values]
        if rows:
            width = len(rows[0])
            for index, row in enumerate(rows):
                if len(row) != width:
                    raise InvalidShapeError(
                        f"Grid row {index + 1} has {len(row)} cells, expected {width}."
                    )
        self.cells: List[List[Cell]] = [
            [Cell(x, y, value) for y, value in enumerate(row)]
            for x, row in enumerate(rows)
        ]

    @classmethod
    def deserialize(cls, cell_values: Sequence[Sequence[Optional[int]]]) -> Grid:
        return cls(cell_values)

    @classmethod
    def empty(cls, height: int, width: int) -> Grid:
        return cls([[None] * width for _ in range(height)])

    @property
    def height(self) -> int:
        return len(self.cells)

    @property
    def width(self) -> int:
        return len(self.cells[0]) if self.cells else 0

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < len(self.cells) and 0 <= y < len(self.cells[x])

    def cell(self, x: int, y: int) -> Cell:
        return self.cells[x][y]

    def value_at(self, x: int, y: int) -> Optional[int]:
        return self.cells[x][y].value

    def set_value(self, x: int, y: int, value: Optional[int]) -> None:
        self.cells[x][y].value = value

    def neighbors(self, x: int, y: int) -> Iterator[Position]:
        for dx, dy in ((1, 0), (-1, 0), (0, 1), (0, -1)):
            nx, ny = x + dx, y + dy
            if self.in_bounds(nx, ny):
                yield nx, ny

    def iter_cells(self) -> Iterator[Cell]:
        for row in self.cells:
            yield from row

    def filled_count(self) -> int:
        return sum(1 for cell in self.iter_cells() if cell.value is not None)

    def serialize(self) -> CellValues:
        return [[cell.value for cell in row] for row in self.cells]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Grid):
            return NotImplemented
        return self.serialize() == other.serialize()

    def __repr__(self) -> str:
        return f"Grid({self.height}x{self.width})"
