import logging
from dataclasses import replace

from models.errors import StructuralInconsistency, ValidationError
from models.moves import Move, PawnMove, WallMove
from models.player import BOARD_SIZE, goal_row, other_player
from models.state import GameState
from .board_logic import board_for

logger = logging.getLogger(__name__)


def apply_move(state: GameState, move: Move) -> GameState:
    """Play `move` for the side to move and return the next state. No checks."""
    player_id = state.turn_owner
    player = state.player(player_id)

    if isinstance(move, PawnMove):
        new_state = state.with_player(player_id, player.moved_to(move.position))
        if move.y == goal_row(player_id):
            new_state = replace(new_state, winner=player_id)
    else:
        new_state = state.with_player(player_id, player.spend_wall())
        new_state = replace(new_state, walls=state.walls + (move.wall,))

    return replace(new_state, turn_owner=other_player(player_id))


def check_winner(state: GameState):
    """Player id standing on its goal row, or None"""
    if state.winner is not None:
        return state.winner
    if state.player1.position.y == BOARD_SIZE - 1:
        return 1
    if state.player2.position.y == 0:
        return 2
    return None


def assert_reachable(state: GameState) -> None:
    """Raise StructuralInconsistency if either player is cut off from its goal row."""
    board = board_for(state.walls)
    for pid in (1, 2):
        if not board.has_path(state.player(pid).position, goal_row(pid)):
            raise StructuralInconsistency(f"Player {pid} has no path to its goal row")


def apply_checked_move(state: GameState, move: Move) -> GameState:
    """Validate `move` against the rules, then apply it."""
    if check_winner(state) is not None:
        raise ValidationError("Game is already over")
    assert_reachable(state)

    player_id = state.turn_owner
    me = state.player(player_id)
    opponent = state.player(other_player(player_id))
    board = board_for(state.walls)

    if isinstance(move, PawnMove):
        if move.position not in board.neighbors(me.position, opponent.position):
            raise ValidationError(f"Illegal pawn move to ({move.x}, {move.y})")
        return apply_move(state, move)

    if not isinstance(move, WallMove):
        raise ValidationError(f"Unknown move: {move!r}")
    if me.walls_remaining <= 0:
        raise ValidationError(f"Player {player_id} has no walls left")
    if not board.is_valid_wall(move.wall, state.player1.position, state.player2.position):
        raise ValidationError(
            f"Illegal wall at ({move.x}, {move.y}) {move.orientation.value}"
        )

    new_state = apply_move(state, move)
    try:
        assert_reachable(new_state)
    except StructuralInconsistency:
        logger.critical("Wall %s passed the legality check but cut a player off", move)
        raise
    return new_state
