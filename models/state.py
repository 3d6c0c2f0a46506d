from dataclasses import dataclass, replace
from typing import Optional, Tuple

from .player import BOARD_SIZE, PlayerState, Position
from .wall import Wall


@dataclass(frozen=True)
class GameState:
    """Full game position. Never mutated: every transition builds a new one."""

    player1: PlayerState
    player2: PlayerState
    turn_owner: int = 1
    walls: Tuple[Wall, ...] = ()
    winner: Optional[int] = None

    @classmethod
    def initial(cls) -> "GameState":
        center = BOARD_SIZE // 2
        return cls(
            player1=PlayerState(Position(center, 0)),
            player2=PlayerState(Position(center, BOARD_SIZE - 1)),
        )

    def player(self, player_id: int) -> PlayerState:
        return self.player1 if player_id == 1 else self.player2

    def with_player(self, player_id: int, player: PlayerState) -> "GameState":
        if player_id == 1:
            return replace(self, player1=player)
        return replace(self, player2=player)

    def to_dict(self):
        return {
            "player1": self.player1.to_dict(),
            "player2": self.player2.to_dict(),
            "turn": self.turn_owner,
            "walls": [wall.to_dict() for wall in self.walls],
            "winner": self.winner,
        }
