import pytest

from chainbuild.components.game_state import GameState, build_from_queue
from chainbuild.components.rules import GameRules
from chainbuild.constants import BUILD_SCORES
from chainbuild.errors import (
    EmptyCellError,
    NoBombersLeftError,
    NoStarsLeftError,
    OccupiedCellError,
    OutOfBoundsError,
    QueueExhaustedError,
)
from helpers import make_state


def test_serialize_round_trip():
    state = make_state(["1.", ".9"], stars=2, bombs=1, score=37, num_built=4)
    state.command = "BUILD 1 1"
    restored = GameState.deserialize(state.serialize())
    assert restored == state
    assert restored.serialize() == {
        "score": 37,
        "num_built": 4,
        "num_stars": 2,
        "num_bombs": 1,
        "grid": [[1, None], [None, 9]],
        "command": "BUILD 1 1",
    }


def test_clone_is_independent():
    state = make_state(["..."])
    clone = state.clone()
    clone.build(0, 0, 3)
    assert state.grid.value_at(0, 0) is None
    assert state.num_built == 0
    assert state.command is None
    assert clone != state


def test_build_without_reaction_scores_tier():
    state = make_state(["..."])
    result = state.build(0, 1, 5)
    assert state.grid.serialize() == [[None, 5, None]]
    assert state.score == BUILD_SCORES[5]
    assert state.num_built == 1
    assert state.command == "BUILD 1 2"
    assert result.phases == []
    assert result.final_value == 5


def test_build_fourth_cell_merges_group_into_next_tier():
    state = make_state([
        "11.",
        "1..",
    ])
    result = state.build(1, 1, 1)
    assert len(result.phases) == 1
    phase = result.phases[0]
    assert (phase.tier_before, phase.tier_after) == (1, 2)
    assert set(phase.cells) == {(1, 1), (0, 1), (1, 0), (0, 0)}
    assert state.grid.serialize() == [[None, None, None], [None, 2, None]]
    assert state.score == BUILD_SCORES[1] + BUILD_SCORES[2]
    assert result.score_delta == 24


def test_build_chain_reaction_scores_every_promotion():
    state = make_state([
        ".22",
        "11.",
    ])
    result = state.build(1, 2, 1)
    assert [(p.tier_before, p.tier_after) for p in result.phases] == [(1, 2), (2, 3)]
    assert state.grid.serialize() == [[None, None, None], [None, None, 3]]
    assert state.score == 4 + 20 + 100


def test_tier_nine_never_reacts():
    state = make_state(["99."])
    result = state.build(0, 2, 9)
    assert result.phases == []
    assert state.grid.serialize() == [[9, 9, 9]]

    state = make_state(["88."])
    state.build(0, 2, 8)
    assert state.grid.serialize() == [[None, None, 9]]
    assert state.score == BUILD_SCORES[8] + BUILD_SCORES[9]


def test_build_on_occupied_cell_leaves_state_untouched():
    state = make_state(["1.1", ".1.", "1.1"])
    before = state.clone()
    with pytest.raises(OccupiedCellError):
        state.build(0, 0, 1)
    assert state == before


def test_build_outside_grid_fails():
    state = make_state([".."])
    with pytest.raises(OutOfBoundsError):
        state.build(1, 0, 1)
    assert state.num_built == 0


def test_build_from_queue_uses_next_tier_and_checks_exhaustion():
    state = make_state(["..."])
    queue = (2, 3)
    build_from_queue(state, queue, 0, 0)
    build_from_queue(state, queue, 0, 1)
    assert state.grid.serialize() == [[2, 3, None]]
    with pytest.raises(QueueExhaustedError):
        build_from_queue(state, queue, 0, 2)
    assert state.num_built == 2


def test_star_picks_qualifying_tier_and_reacts():
    state = make_state([
        ".4.",
        "4.7",
        "...",
    ], stars=1)
    result = state.put_star(1, 1)
    assert result.tier == 4
    assert state.num_stars == 0
    assert state.command == "STAR 2 2"
    assert state.grid.serialize() == [
        [None, None, None],
        [None, 5, 7],
        [None, None, None],
    ]
    assert state.score == BUILD_SCORES[4] + BUILD_SCORES[5]


def test_star_without_qualifying_tier_is_tier_one():
    state = make_state(["..."], stars=2)
    result = state.put_star(0, 0)
    assert result.tier == 1
    assert state.score == BUILD_SCORES[1]


def test_star_tier_one_still_runs_reaction():
    state = make_state(["1.1"], stars=1)
    result = state.put_star(0, 1)
    assert result.tier == 1
    assert state.grid.serialize() == [[None, 2, None]]
    assert state.score == BUILD_SCORES[1] + BUILD_SCORES[2]


def test_star_errors_leave_state_untouched():
    state = make_state(["1."], stars=0)
    before = state.clone()
    with pytest.raises(NoStarsLeftError):
        state.put_star(0, 1)
    assert state == before

    state = make_state(["1."], stars=1)
    before = state.clone()
    with pytest.raises(OccupiedCellError) as info:
        state.put_star(0, 0)
    assert "stars" in info.value.message
    assert state == before


def test_bomb_removes_structure_and_charges_half_its_score():
    state = make_state(["3."], bombs=1, score=10)
    result = state.put_bomb(0, 0)
    assert state.grid.serialize() == [[None, None]]
    assert state.num_bombs == 0
    assert state.score == 10 - 50
    assert isinstance(state.score, int)
    assert state.command == "BOMBER 1 1"
    assert result.tier == 3
    assert result.phases == []


def test_bomb_score_can_go_negative_and_fractional():
    rules = GameRules(bomb_ratio=0.3)
    state = GameState(num_bombs=1, grid=[[1]], rules=rules)
    state.put_bomb(0, 0)
    assert state.score == pytest.approx(-1.2)


def test_bomb_does_not_trigger_reactions():
    state = make_state(["11", "1."], bombs=1)
    state.put_bomb(0, 0)
    assert state.grid.serialize() == [[None, 1], [1, None]]


def test_bomb_errors_checked_in_order():
    state = make_state(["."], bombs=0)
    with pytest.raises(NoBombersLeftError):
        state.put_bomb(0, 0)
    state = make_state(["."], bombs=1)
    before = state.clone()
    with pytest.raises(EmptyCellError):
        state.put_bomb(0, 0)
    assert state == before
