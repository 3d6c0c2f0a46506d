import pytest

from models.enums import Orientation
from models.errors import StructuralInconsistency, ValidationError
from models.moves import PawnMove, WallMove
from models.player import PlayerState, Position
from models.wall import Wall
from services.transition import apply_checked_move, apply_move, check_winner


def test_pawn_move_relocates_mover_and_toggles_turn(initial_state):
    new_state = apply_move(initial_state, PawnMove(4, 1))
    assert new_state.player1.position == Position(4, 1)
    assert new_state.player2 == initial_state.player2
    assert new_state.turn_owner == 2
    assert new_state.winner is None
    # input untouched
    assert initial_state.player1.position == Position(4, 0)
    assert initial_state.turn_owner == 1


def test_wall_move_appends_and_spends(state_factory):
    state = state_factory(turn=2, walls=[(0, 0, "h")])
    new_state = apply_move(state, WallMove(3, 3, Orientation.VERTICAL))
    assert new_state.walls == (Wall(0, 0, Orientation.HORIZONTAL), Wall(3, 3, Orientation.VERTICAL))
    assert new_state.player2.walls_remaining == 9
    assert new_state.player1.walls_remaining == 10
    assert new_state.turn_owner == 1
    assert len(state.walls) == 1


def test_reaching_goal_row_sets_winner(state_factory):
    state = state_factory(p1=(2, 7))
    new_state = apply_move(state, PawnMove(2, 8))
    assert new_state.winner == 1
    assert new_state.turn_owner == 2
    assert check_winner(new_state) == 1


def test_player_two_wins_on_row_zero(state_factory):
    state = state_factory(p2=(6, 1), turn=2)
    assert apply_move(state, PawnMove(6, 0)).winner == 2


def test_walls_remaining_never_below_zero():
    player = PlayerState(Position(0, 0), 0)
    assert player.spend_wall().walls_remaining == 0


def test_checked_move_rejects_illegal_pawn_step(initial_state):
    with pytest.raises(ValidationError):
        apply_checked_move(initial_state, PawnMove(4, 2))


def test_checked_move_rejects_wall_without_stock(state_factory):
    state = state_factory(p1_walls=0)
    with pytest.raises(ValidationError):
        apply_checked_move(state, WallMove(3, 3, Orientation.HORIZONTAL))


def test_checked_move_rejects_duplicate_wall(state_factory):
    state = state_factory(walls=[(3, 3, "h")])
    with pytest.raises(ValidationError):
        apply_checked_move(state, WallMove(3, 3, Orientation.HORIZONTAL))


def test_checked_move_rejects_moves_after_game_over(state_factory):
    state = state_factory(p1=(4, 8), p2=(4, 5), winner=1, turn=2)
    with pytest.raises(ValidationError):
        apply_checked_move(state, PawnMove(4, 4))


def test_checked_move_accepts_jump(state_factory):
    state = state_factory(p1=(4, 4), p2=(4, 5))
    new_state = apply_checked_move(state, PawnMove(4, 6))
    assert new_state.player1.position == Position(4, 6)


def test_checked_move_accepts_legal_wall(initial_state):
    new_state = apply_checked_move(initial_state, WallMove(4, 6, Orientation.HORIZONTAL))
    assert new_state.player1.walls_remaining == 9
    assert Wall(4, 6, Orientation.HORIZONTAL) in new_state.walls


def test_checked_move_refuses_a_cut_off_state(state_factory):
    state = state_factory(p1=(0, 0), turn=2, walls=[(0, 0, "h"), (1, 0, "v")])
    with pytest.raises(StructuralInconsistency):
        apply_checked_move(state, PawnMove(4, 7))


def test_lost_path_after_wall_is_fatal(state_factory, monkeypatch):
    from services.board_logic import GameBoard

    # let a sealing wall through the legality check
    monkeypatch.setattr(GameBoard, "is_valid_wall", lambda self, *args: True)
    state = state_factory(p1=(0, 0), walls=[(0, 0, "h")])
    with pytest.raises(StructuralInconsistency):
        apply_checked_move(state, WallMove(1, 0, Orientation.VERTICAL))


@pytest.mark.parametrize("raw, expected", [
    ("h", Orientation.HORIZONTAL),
    ("Vertical", Orientation.VERTICAL),
    (Orientation.HORIZONTAL, Orientation.HORIZONTAL),
])
def test_orientation_parse(raw, expected):
    assert Orientation.parse(raw) is expected


def test_orientation_parse_rejects_unknown():
    with pytest.raises(ValueError):
        Orientation.parse("diagonal")
