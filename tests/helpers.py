"""Short hands shared by the test modules"""

from typing import Callable

from src.chess.game import Game
from src.chess.pieces import Color, FigureKind
from src.chess.position import Position

K, Q, R, B, N, P = (
    FigureKind.KING,
    FigureKind.QUEEN,
    FigureKind.ROOK,
    FigureKind.BISHOP,
    FigureKind.KNIGHT,
    FigureKind.PAWN,
)
W, BL = Color.WHITE, Color.BLACK

GameFactory = Callable[..., Game]


def pos(square: str) -> Position:
    """pos('e2') == Position(4, 1)"""
    return Position.from_algebraic(square)
