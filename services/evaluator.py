from typing import Optional

from models.player import Position, goal_row, other_player
from models.state import GameState
from .board_logic import board_for

WIN_SCORE = 10000
TRAPPED_SCORE = 5000
DISTANCE_WEIGHT = 10
WALL_WEIGHT = 2
REPEAT_PENALTY = 0.5


def evaluate(state: GameState, reference_player: int,
             previous_position: Optional[Position] = None) -> float:
    """
    Static score of `state` seen by `reference_player`. The caller negates it
    for the other side.

    The race (distance difference) dominates; walls in hand and stepping back
    onto `previous_position` only break ties.
    """
    opponent_id = other_player(reference_player)
    me = state.player(reference_player)
    opponent = state.player(opponent_id)
    board = board_for(state.walls)

    my_path = board.shortest_path(me.position, goal_row(reference_player), opponent.position)
    opp_path = board.shortest_path(opponent.position, goal_row(opponent_id), me.position)

    if my_path is not None and my_path.distance == 0:
        return WIN_SCORE
    if opp_path is not None and opp_path.distance == 0:
        return -WIN_SCORE
    if my_path is None:
        return -TRAPPED_SCORE
    if opp_path is None:
        return TRAPPED_SCORE

    score = (opp_path.distance - my_path.distance) * DISTANCE_WEIGHT
    score += me.walls_remaining * WALL_WEIGHT
    if previous_position is not None and tuple(me.position) == tuple(previous_position):
        score -= REPEAT_PENALTY
    return score
