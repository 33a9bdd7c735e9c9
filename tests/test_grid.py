import pytest

from chainbuild.components.grid import Grid
from chainbuild.errors import GameError, InvalidShapeError


def test_grid_round_trip_preserves_values():
    values = [[1, None, 3], [None, 9, None]]
    grid = Grid(values)
    assert grid.serialize() == values
    assert Grid.deserialize(grid.serialize()) == grid


def test_grid_cells_are_tagged_with_their_position():
    grid = Grid([[1, 2], [3, None]])
    for x, row in enumerate(grid.cells):
        for y, cell in enumerate(row):
            assert (cell.x, cell.y) == (x, y)
    assert grid.cell(1, 0).value == 3
    assert grid.cell(1, 1).is_empty


def test_grid_rejects_ragged_rows():
    with pytest.raises(InvalidShapeError) as info:
        Grid([[1, 2, 3], [1, 2]])
    assert isinstance(info.value, GameError)


def test_grid_dimensions_and_bounds():
    grid = Grid.empty(2, 3)
    assert (grid.height, grid.width) == (2, 3)
    assert grid.in_bounds(0, 0)
    assert grid.in_bounds(1, 2)
    assert not grid.in_bounds(2, 0)
    assert not grid.in_bounds(0, 3)
    assert not grid.in_bounds(-1, 0)
    assert not grid.in_bounds(0, -1)


def test_neighbors_stay_inside_the_grid():
    grid = Grid.empty(3, 3)
    assert sorted(grid.neighbors(0, 0)) == [(0, 1), (1, 0)]
    assert sorted(grid.neighbors(1, 1)) == [(0, 1), (1, 0), (1, 2), (2, 1)]


def test_serialize_returns_a_detached_copy():
    grid = Grid([[1, None]])
    values = grid.serialize()
    values[0][1] = 5
    assert grid.value_at(0, 1) is None
    assert grid.filled_count() == 1
