"""Defines the figure kinds and the two sides"""

from enum import Enum


class Color(Enum):
    WHITE = "white"
    BLACK = "black"

    def __invert__(self) -> "Color":
        return self.opposite

    @property
    def opposite(self) -> "Color":
        return Color.BLACK if self == Color.WHITE else Color.WHITE


class FigureKind(Enum):
    """The value doubles as the key used in a Player's figure registry."""

    KING = "king"
    QUEEN = "queen"
    BISHOP = "bishop"
    KNIGHT = "knight"
    ROOK = "rook"
    PAWN = "pawn"

    @property
    def short(self) -> str:
        """Two letter name used when printing the board"""
        return FIGURE_SHORT_NAMES[self]


FIGURE_SHORT_NAMES: dict[FigureKind, str] = {
    FigureKind.KING: "Ki",
    FigureKind.QUEEN: "Qu",
    FigureKind.BISHOP: "Bi",
    FigureKind.KNIGHT: "Kn",
    FigureKind.ROOK: "Ro",
    FigureKind.PAWN: "Pa",
}

# Standard back rank, from the a-file (x=0) to the h-file (x=7)
BACK_RANK: tuple[FigureKind, ...] = (
    FigureKind.ROOK,
    FigureKind.KNIGHT,
    FigureKind.BISHOP,
    FigureKind.QUEEN,
    FigureKind.KING,
    FigureKind.BISHOP,
    FigureKind.KNIGHT,
    FigureKind.ROOK,
)

# Ranks the figures start on, and the rank a pawn promotes on
HOME_RANK: dict[Color, int] = {Color.WHITE: 0, Color.BLACK: 7}
PAWN_RANK: dict[Color, int] = {Color.WHITE: 1, Color.BLACK: 6}
PROMOTION_RANK: dict[Color, int] = {Color.WHITE: 7, Color.BLACK: 0}

# White moves UP the board, Black moves DOWN
PAWN_DIRECTION: dict[Color, int] = {Color.WHITE: 1, Color.BLACK: -1}
