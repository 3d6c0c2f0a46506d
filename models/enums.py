from enum import Enum

class Direction(str, Enum):
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"

class Orientation(str, Enum):
    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"

    @classmethod
    def parse(cls, value) -> "Orientation":
        """accept 'horizontal'/'vertical' as well as the short 'h'/'v' form"""
        if isinstance(value, cls):
            return value
        text = str(value).strip().lower()
        if text in ("h", "horizontal"):
            return cls.HORIZONTAL
        if text in ("v", "vertical"):
            return cls.VERTICAL
        raise ValueError(f"Unknown wall orientation: {value!r}")

class MoveKind(str, Enum):
    PAWN = "pawn"
    WALL = "wall"


# Exploration order is fixed: up, down, left, right (x = column, y = row)
DIRECTION_VECTORS = {
    Direction.UP: (0, -1),
    Direction.DOWN: (0, 1),
    Direction.LEFT: (-1, 0),
    Direction.RIGHT: (1, 0),
}
