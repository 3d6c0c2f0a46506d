import logging
from typing import List, Optional

import config
from models.enums import Orientation
from models.errors import ComputeFailure, ValidationError
from models.moves import Move, PawnMove
from models.player import Position, goal_row, other_player
from models.state import GameState
from models.wall import Wall
from schemas.game_schema import parse_move
from .ai_service import depth_for_difficulty
from .ai_worker import SearchWorker, default_worker
from .board_logic import PathResult, board_for
from .evaluator import evaluate
from .move_generator import generate_legal_moves
from .transition import apply_checked_move, assert_reachable, check_winner

logger = logging.getLogger(__name__)


class GameService:
    """
    Stateless game operations. Every call receives the full state and
    returns a new one; nothing is kept between calls.
    """

    def __init__(self, worker: Optional[SearchWorker] = None):
        self.worker = worker or default_worker

    def create_game(self) -> GameState:
        return GameState.initial()

    def legal_moves(self, state: GameState, player_id: Optional[int] = None) -> List[Move]:
        return generate_legal_moves(state, player_id or state.turn_owner)

    def is_valid_wall(self, state: GameState, x: int, y: int, orientation) -> bool:
        # same checks the move generator applies, including connectivity
        try:
            wall = Wall(x, y, Orientation.parse(orientation))
        except ValueError as e:
            raise ValidationError(str(e)) from e
        board = board_for(state.walls)
        return board.is_valid_wall(wall, state.player1.position, state.player2.position)

    def shortest_path(self, state: GameState, player_id: int) -> Optional[PathResult]:
        me = state.player(player_id).position
        opponent = state.player(other_player(player_id)).position
        return board_for(state.walls).shortest_path(me, goal_row(player_id), opponent)

    def perform_action(self, state: GameState, move: Move) -> GameState:
        new_state = apply_checked_move(state, move)
        logger.info("Player %s played %s", state.turn_owner, move.to_dict())
        return new_state

    def check_winner(self, state: GameState) -> Optional[int]:
        return check_winner(state)

    def evaluate(self, state: GameState, player_id: int,
                 previous_position: Optional[Position] = None) -> float:
        return evaluate(state, player_id, previous_position)

    def fallback_move(self, state: GameState) -> Move:
        """Next step on the shortest route, else the first legal move."""
        player_id = state.turn_owner
        route = self.shortest_path(state, player_id)
        legal = generate_legal_moves(state, player_id)
        if route and route.next_step:
            step = PawnMove(route.next_step.x, route.next_step.y)
            if step in legal:
                return step
        if legal:
            return legal[0]
        raise ComputeFailure(f"Player {player_id} has no legal move")

    def ia_play(self, state: GameState, difficulty: int, game_id: str = "default",
                previous_position: Optional[Position] = None) -> dict:
        if check_winner(state) is not None:
            raise ValidationError("Game is already over")
        assert_reachable(state)
        depth = depth_for_difficulty(difficulty)
        logger.info("[ia_play] game=%s difficulty=%s depth=%s", game_id, difficulty, depth)

        request = {
            "state": state.to_dict(),
            "depth": depth,
            "previousPosition": previous_position.to_dict() if previous_position else None,
        }
        response = self.worker.request_move(game_id, request, timeout=config.AI_RESULT_TIMEOUT)

        fallback = False
        score = response.get("score")
        if response["success"] and response.get("move"):
            move = parse_move(response["move"])
        else:
            if not response["success"]:
                logger.warning("[ia_play] search failed: %s", response["error"])
            move = self.fallback_move(state)
            fallback = True

        new_state = self.perform_action(state, move)
        return {
            "success": True,
            "move": move.to_dict(),
            "score": score,
            "fallback": fallback,
            "difficulty": difficulty,
            "error": response.get("error"),
            "state": new_state.to_dict(),
        }
