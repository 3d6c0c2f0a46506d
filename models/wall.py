from dataclasses import dataclass

from .enums import Orientation


WALL_MAX = 7  # wall anchors live on the 8x8 grid of cell corners


@dataclass(frozen=True)
class Wall:
    x: int
    y: int
    orientation: Orientation

    def to_dict(self):
        return {
            "x": self.x,
            "y": self.y,
            "orientation": self.orientation.value,
        }
