import logging
from collections import deque
from functools import lru_cache
from typing import Iterable, List, NamedTuple, Optional, Tuple

from models.enums import DIRECTION_VECTORS, Orientation
from models.player import BOARD_SIZE, Position
from models.wall import WALL_MAX, Wall

logger = logging.getLogger(__name__)


class PathResult(NamedTuple):
    distance: int
    next_step: Optional[Position]
    path: Tuple[Position, ...]

    def to_dict(self):
        return {
            "distance": self.distance,
            "nextStep": self.next_step.to_dict() if self.next_step else None,
            "path": [p.to_dict() for p in self.path],
        }


def _edge(x1, y1, x2, y2):
    a, b = (x1, y1), (x2, y2)
    return (a, b) if a <= b else (b, a)


@lru_cache(maxsize=8192)
def _blocked_edges(walls: Tuple[Wall, ...]) -> frozenset:
    """Unit edges cut by the walls. A wall spans two cells, so it cuts two edges."""
    edges = set()
    for wall in walls:
        wx, wy = wall.x, wall.y
        if wall.orientation == Orientation.HORIZONTAL:
            # between row wy and wy+1, columns wx and wx+1
            edges.add(_edge(wx, wy, wx, wy + 1))
            edges.add(_edge(wx + 1, wy, wx + 1, wy + 1))
        else:
            # between column wx and wx+1, rows wy and wy+1
            edges.add(_edge(wx, wy, wx + 1, wy))
            edges.add(_edge(wx, wy + 1, wx + 1, wy + 1))
    return frozenset(edges)


class GameBoard:
    """Read-only view of the grid for one wall set."""

    def __init__(self, walls: Iterable[Wall] = (), size: int = BOARD_SIZE):
        self.size = size
        self.walls: Tuple[Wall, ...] = tuple(walls)
        self._blocked = _blocked_edges(self.walls)
        self._routes = {}

    def in_board(self, x: int, y: int) -> bool:
        return 0 <= x < self.size and 0 <= y < self.size

    def is_blocked(self, x1: int, y1: int, x2: int, y2: int) -> bool:
        """
        True if a wall cuts the straight step between two orthogonally
        adjacent cells
        """
        return _edge(x1, y1, x2, y2) in self._blocked

    def neighbors(self, position: Position, opponent: Optional[Position] = None) -> List[Position]:
        """
        Cells reachable in one pawn move from `position`.

        A cell occupied by `opponent` is jumped over: straight if possible,
        otherwise to either side of the opponent.
        """
        x, y = position
        result = []
        for dx, dy in DIRECTION_VECTORS.values():
            nx, ny = x + dx, y + dy
            if not self.in_board(nx, ny) or self.is_blocked(x, y, nx, ny):
                continue

            if opponent is None or (nx, ny) != opponent:
                result.append(Position(nx, ny))
                continue

            jump_x, jump_y = nx + dx, ny + dy
            if self.in_board(jump_x, jump_y) and not self.is_blocked(nx, ny, jump_x, jump_y):
                result.append(Position(jump_x, jump_y))
                continue

            # straight jump impossible: rotate the step +90 then -90 degrees
            for side_dx, side_dy in ((dy, dx), (-dy, -dx)):
                side_x, side_y = nx + side_dx, ny + side_dy
                if self.in_board(side_x, side_y) and not self.is_blocked(nx, ny, side_x, side_y):
                    result.append(Position(side_x, side_y))
        return result

    def shortest_path(self, start: Position, target_row: int,
                      opponent: Optional[Position] = None) -> Optional[PathResult]:
        start = Position(*start)
        parents = {start: None}
        queue = deque([(start, 0)])

        while queue:
            current, dist = queue.popleft()
            if current.y == target_row:
                path = []
                node = current
                while node is not None:
                    path.append(node)
                    node = parents[node]
                path.reverse()
                next_step = path[1] if len(path) > 1 else None
                return PathResult(dist, next_step, tuple(path))

            for nxt in self.neighbors(current, opponent):
                if nxt in parents:
                    continue
                parents[nxt] = current
                queue.append((nxt, dist + 1))

        return None

    def has_path(self, start: Position, target_row: int) -> bool:
        start = Position(*start)
        visited = {start}
        queue = deque([start])

        while queue:
            current = queue.popleft()
            if current.y == target_row:
                return True
            for nxt in self.neighbors(current):
                if nxt not in visited:
                    visited.add(nxt)
                    queue.append(nxt)
        return False

    def collides(self, wall: Wall) -> bool:
        """True if `wall` shares an anchor with, or extends into, a placed wall"""
        x, y, orientation = wall.x, wall.y, wall.orientation
        for existing in self.walls:
            if existing.x == x and existing.y == y:
                # same anchor: either the very same wall or a crossing
                logger.debug("Wall overlaps or crosses (%s, %s) %s", x, y, orientation.value)
                return True
            if existing.orientation != orientation:
                continue
            if orientation == Orientation.HORIZONTAL and existing.y == y and abs(existing.x - x) == 1:
                logger.debug("Horizontal wall collides with neighbour at (%s, %s)", x, y)
                return True
            if orientation == Orientation.VERTICAL and existing.x == x and abs(existing.y - y) == 1:
                logger.debug("Vertical wall collides with neighbour at (%s, %s)", x, y)
                return True
        return False

    def _route_edges(self, start: Position, target_row: int) -> Optional[frozenset]:
        """Edges of one plain route to `target_row`, memoised on this board"""
        key = (start, target_row)
        if key not in self._routes:
            route = self.shortest_path(start, target_row)
            self._routes[key] = None if route is None else frozenset(
                _edge(a.x, a.y, b.x, b.y) for a, b in zip(route.path, route.path[1:])
            )
        return self._routes[key]

    def keeps_path(self, wall: Wall, start: Position, target_row: int) -> bool:
        start = Position(*start)
        route = self._route_edges(start, target_row)
        if route is not None and not (route & _blocked_edges((wall,))):
            # the current route survives the new wall
            return True
        return board_for(self.walls + (wall,)).has_path(start, target_row)

    def is_valid_wall(self, wall: Wall, p1_position: Position, p2_position: Position) -> bool:
        x, y, orientation = wall.x, wall.y, wall.orientation

        if not (0 <= x <= WALL_MAX and 0 <= y <= WALL_MAX):
            logger.debug("Wall out of bounds at (%s, %s) %s", x, y, orientation.value)
            return False

        if self.collides(wall):
            return False

        if not (self.keeps_path(wall, p1_position, BOARD_SIZE - 1)
                and self.keeps_path(wall, p2_position, 0)):
            logger.debug("Wall at (%s, %s) %s blocks every path", x, y, orientation.value)
            return False

        return True


@lru_cache(maxsize=8192)
def board_for(walls: Tuple[Wall, ...]) -> GameBoard:
    return GameBoard(walls)


def in_board(x: int, y: int) -> bool:
    return 0 <= x < BOARD_SIZE and 0 <= y < BOARD_SIZE


def is_blocked(start: Position, target: Position, walls: Iterable[Wall]) -> bool:
    return board_for(tuple(walls)).is_blocked(start[0], start[1], target[0], target[1])


def shortest_path(start: Position, target_row: int, walls: Iterable[Wall],
                  opponent: Optional[Position] = None) -> Optional[PathResult]:
    """BFS distance, first step and full path to `target_row`, or None if unreachable"""
    return board_for(tuple(walls)).shortest_path(start, target_row, opponent)


def has_path(start: Position, target_row: int, walls: Iterable[Wall]) -> bool:
    return board_for(tuple(walls)).has_path(start, target_row)


def is_valid_wall(wall: Wall, walls: Iterable[Wall], p1_position: Position, p2_position: Position) -> bool:
    """Overlap, crossing and connectivity checks for placing `wall` on top of `walls`"""
    return board_for(tuple(walls)).is_valid_wall(wall, p1_position, p2_position)
