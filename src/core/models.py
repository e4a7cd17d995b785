"""
Boundary layer data model(s).

What the Game reports back to its caller after a turn attempt. The Service converts these into response models,
a renderer can use them directly (which figure to move / delete / swap for a queen).
"""

from dataclasses import dataclass
from typing import Self

from src.chess.position import Position


@dataclass(frozen=True)
class TurnOutcome:
    """Result of a single turn attempt. Capture and promotion are independent facts."""

    accepted: bool
    captured: bool = False
    promoted: bool = False

    @classmethod
    def rejected(cls) -> Self:
        return cls(accepted=False)

    @property
    def code(self) -> int:
        """
        Compact integer encoding:
        -1 rejected, 0 plain move, 1 promotion, 2 capture, 3 capture + promotion
        """
        if not self.accepted:
            return -1
        return 2 * int(self.captured) + int(self.promoted)


@dataclass(frozen=True)
class AiTurn:
    """The move an AI player made, plus the same flags a human turn reports."""

    from_pos: Position
    to_pos: Position
    captured: bool = False
    promoted: bool = False
