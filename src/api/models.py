"""Requests and Response models"""

from typing import Optional

from pydantic import BaseModel, field_validator

from src.chess.pieces import Color
from src.chess.position import Position
from src.core.exceptions import InvalidPositionError, InvalidRequestError
from src.core.shared_types import PlayerType, Status

PieceColor = str
SquareName = str


# --- REQUEST MODELS ---
class NewGameRequest(BaseModel):
    white: PlayerType = PlayerType.HUMAN
    black: PlayerType = PlayerType.HUMAN


class MoveRequest(BaseModel):
    from_square: SquareName
    to_square: SquareName

    @field_validator(*["from_square", "to_square"])
    @classmethod
    def validate_square(cls, value: str) -> str:
        try:
            Position.from_algebraic(value)
        except InvalidPositionError:
            raise InvalidRequestError(
                f"Cannot interpret {value!r} as a valid square name."
            ) from None
        return value.lower()

    @property
    def from_position(self) -> Position:
        return Position.from_algebraic(self.from_square)

    @property
    def to_position(self) -> Position:
        return Position.from_algebraic(self.to_square)


class PlayerTypeRequest(BaseModel):
    color: Color
    ptype: PlayerType


# --- RESPONSE MODELS ---
class TurnResponse(BaseModel):
    accepted: bool
    captured: bool
    promoted: bool
    code: int


class AiTurnResponse(BaseModel):
    from_square: SquareName
    to_square: SquareName
    captured: bool
    promoted: bool


class GameStateResponse(BaseModel):
    turn: Color
    status: Status
    winner: Optional[Color]
    players: dict[PieceColor, PlayerType]
    figures: dict[PieceColor, dict[str, list[SquareName]]]
    board: str
