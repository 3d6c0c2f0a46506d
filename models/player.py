from dataclasses import dataclass, replace
from typing import NamedTuple


BOARD_SIZE = 9
MAX_WALLS = 10


class Position(NamedTuple):
    x: int  # column
    y: int  # row

    def to_dict(self):
        return {"x": self.x, "y": self.y}


@dataclass(frozen=True)
class PlayerState:
    position: Position
    walls_remaining: int = MAX_WALLS

    def moved_to(self, position: Position) -> "PlayerState":
        return replace(self, position=position)

    def spend_wall(self) -> "PlayerState":
        return replace(self, walls_remaining=max(0, self.walls_remaining - 1))

    def to_dict(self):
        return {
            "position": self.position.to_dict(),
            "wallsRemaining": self.walls_remaining,
        }


def goal_row(player_id: int) -> int:
    """player 1 races to the last row, player 2 to the first"""
    return BOARD_SIZE - 1 if player_id == 1 else 0


def other_player(player_id: int) -> int:
    return 2 if player_id == 1 else 1
