import logging
from typing import NamedTuple, Optional

from models.errors import ValidationError
from models.moves import Move
from models.player import Position, other_player
from models.state import GameState
from .evaluator import TRAPPED_SCORE, evaluate
from .move_generator import generate_legal_moves
from .transition import apply_move

logger = logging.getLogger(__name__)


DIFFICULTY_DEPTH = {
    1: 1,  # easy
    2: 2,  # medium
    3: 3,  # hard
    4: 4,  # expert
}
MAX_DEPTH = max(DIFFICULTY_DEPTH.values())


class SearchResult(NamedTuple):
    score: float
    move: Optional[Move]

    def to_dict(self):
        return {
            "score": self.score,
            "move": self.move.to_dict() if self.move else None,
        }


def depth_for_difficulty(difficulty: int) -> int:
    if difficulty not in DIFFICULTY_DEPTH:
        raise ValidationError(f"Difficulty {difficulty} not supported")
    return DIFFICULTY_DEPTH[difficulty]


class MinimaxAI:
    """
    Minimax with alpha-beta pruning, plays for whoever is to move at the root.

    Depth is the only throttle: there is no clock, and there is no randomness,
    so the same state always yields the same move and score.
    """

    def __init__(self, depth: int, previous_position: Optional[Position] = None):
        if not 1 <= depth <= MAX_DEPTH:
            raise ValidationError(f"Search depth must be between 1 and {MAX_DEPTH}, got {depth}")
        self.depth = depth
        self.previous_position = previous_position
        self.nodes = 0

    def choose_move(self, state: GameState) -> SearchResult:
        self.nodes = 0
        ai_player = state.turn_owner
        result = self._minimax(state, ai_player, self.depth,
                               float("-inf"), float("inf"), True)
        logger.debug(
            "Search depth=%s player=%s nodes=%s score=%s move=%s",
            self.depth, ai_player, self.nodes, result.score, result.move,
        )
        return result

    def _minimax(self, state, ai_player, depth, alpha, beta, maximizing) -> SearchResult:
        self.nodes += 1
        score = evaluate(state, ai_player, self.previous_position)
        if depth == 0 or score > TRAPPED_SCORE or score < -TRAPPED_SCORE:
            return SearchResult(score, None)

        active_player = ai_player if maximizing else other_player(ai_player)
        moves = generate_legal_moves(state, active_player)
        if not moves:
            return SearchResult(score, None)

        best_move = None
        if maximizing:
            best_score = float("-inf")
            for move in moves:
                child = self._minimax(apply_move(state, move), ai_player,
                                      depth - 1, alpha, beta, False)
                if child.score > best_score:
                    best_score = child.score
                    best_move = move
                alpha = max(alpha, child.score)
                if beta <= alpha:
                    break
        else:
            best_score = float("inf")
            for move in moves:
                child = self._minimax(apply_move(state, move), ai_player,
                                      depth - 1, alpha, beta, True)
                if child.score < best_score:
                    best_score = child.score
                    best_move = move
                beta = min(beta, child.score)
                if beta <= alpha:
                    break

        return SearchResult(best_score, best_move if best_move is not None else moves[0])


def search(state: GameState, depth: int, previous_position: Optional[Position] = None) -> SearchResult:
    """Best move for `state.turn_owner`, looking `depth` plies ahead"""
    return MinimaxAI(depth, previous_position).choose_move(state)
