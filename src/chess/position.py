"""
A position (field address) on the board

(placed in its own module as multiple other modules need to import it)
"""

from __future__ import annotations

from dataclasses import dataclass

from src.chess.pieces import Color
from src.core.exceptions import InvalidPositionError

# Chess board is always 8x8.
BOARD_DIMENSIONS = (8, 8)


@dataclass(frozen=True)
class Position:
    """Zero-based coordinates: x is the file (a-h), y the rank (1-8). White starts on y=0 and y=1."""

    x: int
    y: int

    def __post_init__(self) -> None:
        if not Position.is_pos(self.x, self.y):
            raise InvalidPositionError(
                f"Position ({self.x}, {self.y}) is not on the {BOARD_DIMENSIONS[0]}x{BOARD_DIMENSIONS[1]} board."
            )

    @staticmethod
    def is_pos(x: int, y: int) -> bool:
        return (0 <= x < BOARD_DIMENSIONS[0]) and (0 <= y < BOARD_DIMENSIONS[1])

    @classmethod
    def from_algebraic(cls, sq: str) -> Position:
        """Square names: 'a1' - 'h8' get converted to (0,0) - (7,7)"""
        if len(sq) != 2 or not sq[1].isdigit():
            raise InvalidPositionError(f"Cannot interpret {sq!r} as a square name.")
        x = ord(sq[0].lower()) - ord("a")
        y = int(sq[1]) - 1
        return cls(x, y)

    def to_algebraic(self) -> str:
        return f"{chr(self.x + ord('a'))}{self.y + 1}"

    def field_color(self) -> Color:
        """Background color of the field when nothing stands on it. a1 is a dark field."""
        return Color.WHITE if (self.x + self.y) % 2 == 1 else Color.BLACK


def all_positions() -> list[Position]:
    """Every field on the board, rank by rank (y outer, x inner)."""
    return [
        Position(x, y)
        for y in range(BOARD_DIMENSIONS[1])
        for x in range(BOARD_DIMENSIONS[0])
    ]
