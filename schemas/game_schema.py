from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic import ValidationError as PydanticValidationError

from models.enums import MoveKind, Orientation
from models.errors import ValidationError
from models.moves import PawnMove, WallMove
from models.player import BOARD_SIZE, MAX_WALLS, PlayerState, Position
from models.state import GameState
from models.wall import WALL_MAX, Wall
from services.board_logic import board_for


class PositionSchema(BaseModel):
    model_config = ConfigDict(extra='ignore')

    x: int = Field(ge=0, le=BOARD_SIZE - 1)
    y: int = Field(ge=0, le=BOARD_SIZE - 1)

    def to_domain(self) -> Position:
        return Position(self.x, self.y)


class PlayerSchema(BaseModel):
    model_config = ConfigDict(extra='ignore')

    position: PositionSchema
    wallsRemaining: int = Field(MAX_WALLS, ge=0, le=MAX_WALLS)

    def to_domain(self) -> PlayerState:
        return PlayerState(self.position.to_domain(), self.wallsRemaining)


class WallSchema(BaseModel):
    model_config = ConfigDict(extra='ignore')

    x: int = Field(ge=0, le=WALL_MAX)
    y: int = Field(ge=0, le=WALL_MAX)
    orientation: Orientation

    @field_validator("orientation", mode="before")
    @classmethod
    def _short_orientation(cls, value):
        # clients may send 'h' / 'v'
        return Orientation.parse(value)

    def to_domain(self) -> Wall:
        return Wall(self.x, self.y, self.orientation)


class GameStateSchema(BaseModel):
    model_config = ConfigDict(extra='ignore')

    player1: PlayerSchema
    player2: PlayerSchema
    turn: Literal[1, 2] = 1
    walls: List[WallSchema] = []
    winner: Optional[Literal[1, 2]] = None

    @model_validator(mode="after")
    def _check_board(self):
        if self.player1.position == self.player2.position:
            raise ValueError("Both pawns are on the same cell")
        placed = 2 * MAX_WALLS - self.player1.wallsRemaining - self.player2.wallsRemaining
        if len(self.walls) > placed:
            raise ValueError(f"{len(self.walls)} walls on the board but only {placed} were spent")
        walls = tuple(w.to_domain() for w in self.walls)
        # replay the placements: no wall may overlap one laid before it
        for i, wall in enumerate(walls):
            if board_for(walls[:i]).collides(wall):
                raise ValueError(
                    f"Wall at ({wall.x}, {wall.y}) {wall.orientation.value} overlaps another wall"
                )
        return self

    def to_domain(self) -> GameState:
        return GameState(
            player1=self.player1.to_domain(),
            player2=self.player2.to_domain(),
            turn_owner=self.turn,
            walls=tuple(w.to_domain() for w in self.walls),
            winner=self.winner,
        )


class MoveSchema(BaseModel):
    model_config = ConfigDict(extra='ignore')

    kind: MoveKind
    x: int
    y: int
    orientation: Optional[Orientation] = None

    @field_validator("orientation", mode="before")
    @classmethod
    def _short_orientation(cls, value):
        return None if value is None else Orientation.parse(value)

    @model_validator(mode="after")
    def _check_kind(self):
        if self.kind == MoveKind.WALL and self.orientation is None:
            raise ValueError("Wall moves need an orientation")
        return self

    def to_domain(self):
        if self.kind == MoveKind.PAWN:
            return PawnMove(self.x, self.y)
        return WallMove(self.x, self.y, self.orientation)


class SearchRequest(BaseModel):
    model_config = ConfigDict(extra='ignore')

    state: GameStateSchema
    depth: int = Field(ge=1, le=4)
    previousPosition: Optional[PositionSchema] = None


def parse(schema, data):
    """Validate `data` against `schema`, raising the engine's ValidationError"""
    if data is None:
        raise ValidationError("Missing request body")
    try:
        return schema.model_validate(data)
    except PydanticValidationError as e:
        raise ValidationError(str(e)) from e


def parse_state(data) -> GameState:
    return parse(GameStateSchema, data).to_domain()


def parse_move(data):
    return parse(MoveSchema, data).to_domain()


def parse_position(data) -> Optional[Position]:
    if data is None:
        return None
    return parse(PositionSchema, data).to_domain()
