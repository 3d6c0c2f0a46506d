from typing import List

from models.enums import Orientation
from models.moves import Move, PawnMove, WallMove
from models.player import BOARD_SIZE, goal_row, other_player
from models.state import GameState
from models.wall import Wall
from .board_logic import board_for, in_board

# Only the head of the opponent's route is worth blocking
PATH_LOOKAHEAD = 4
ORTHOGONAL_OFFSETS = ((0, 1), (0, -1), (1, 0), (-1, 0))
CENTER_COLUMN = BOARD_SIZE // 2


def generate_pawn_moves(state: GameState, player_id: int) -> List[PawnMove]:
    me = state.player(player_id).position
    opponent = state.player(other_player(player_id)).position
    board = board_for(state.walls)

    target = goal_row(player_id)
    moves = [PawnMove(p.x, p.y) for p in board.neighbors(me, opponent)]
    # stable: ties keep exploration order
    moves.sort(key=lambda m: (abs(m.y - target), abs(m.x - CENTER_COLUMN)))
    return moves


def wall_candidate_cells(state: GameState, player_id: int) -> List[tuple]:
    """
    Anchor cells worth trying for a wall: the start of the opponent's
    shortest route plus the cells around our own pawn. Far-away walls are
    never proposed.
    """
    opponent_id = other_player(player_id)
    me = state.player(player_id).position
    opponent = state.player(opponent_id).position

    candidates = {}
    route = board_for(state.walls).shortest_path(opponent, goal_row(opponent_id), me)
    if route:
        for cx, cy in route.path[:PATH_LOOKAHEAD]:
            candidates[(cx, cy)] = None
            for dx, dy in ORTHOGONAL_OFFSETS:
                candidates[(cx + dx, cy + dy)] = None

    for dx, dy in ORTHOGONAL_OFFSETS:
        candidates[(me.x + dx, me.y + dy)] = None

    return [cell for cell in candidates if in_board(*cell)]


def generate_wall_moves(state: GameState, player_id: int) -> List[WallMove]:
    if state.player(player_id).walls_remaining <= 0:
        return []

    board = board_for(state.walls)
    opponent = state.player(other_player(player_id)).position
    p1, p2 = state.player1.position, state.player2.position

    moves = []
    for cx, cy in wall_candidate_cells(state, player_id):
        for orientation in (Orientation.HORIZONTAL, Orientation.VERTICAL):
            if board.is_valid_wall(Wall(cx, cy, orientation), p1, p2):
                moves.append(WallMove(cx, cy, orientation))

    moves.sort(key=lambda m: abs(m.x - opponent.x) + abs(m.y - opponent.y))
    return moves


def generate_legal_moves(state: GameState, player_id: int) -> List[Move]:
    """
    Pawn moves first, then walls. The order is part of the contract: the
    search relies on it for reproducible cutoffs.
    """
    return generate_pawn_moves(state, player_id) + generate_wall_moves(state, player_id)
