from dataclasses import dataclass
from typing import Union

from .enums import MoveKind, Orientation
from .player import Position
from .wall import Wall


@dataclass(frozen=True)
class PawnMove:
    x: int
    y: int

    kind = MoveKind.PAWN

    @property
    def position(self) -> Position:
        return Position(self.x, self.y)

    def to_dict(self):
        return {"kind": self.kind.value, "x": self.x, "y": self.y}


@dataclass(frozen=True)
class WallMove:
    x: int
    y: int
    orientation: Orientation

    kind = MoveKind.WALL

    @property
    def wall(self) -> Wall:
        return Wall(self.x, self.y, self.orientation)

    def to_dict(self):
        return {
            "kind": self.kind.value,
            "x": self.x,
            "y": self.y,
            "orientation": self.orientation.value,
        }


Move = Union[PawnMove, WallMove]
