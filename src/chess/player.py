"""
Per-side registry of figures.

Figures of the same kind are interchangeable: they are only identified by the field they stand on.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional, Self

from src.chess.pieces import BACK_RANK, HOME_RANK, PAWN_RANK, Color, FigureKind
from src.chess.position import BOARD_DIMENSIONS, Position, all_positions
from src.core.exceptions import BoardStateError
from src.core.shared_types import PlayerType

if TYPE_CHECKING:
    from src.chess.board import Board

Move = tuple[Position, Position]
CaptureSlot = tuple[int, int]  # (position of the kind in the registry, index in its list)


@dataclass
class Player:
    ptype: PlayerType
    color: Color
    figures: dict[str, list[Position]]

    @classmethod
    def new(cls, ptype: PlayerType, color: Color) -> Self:
        """The standard 16 figures for the given side"""
        home = HOME_RANK[color]
        figures: dict[str, list[Position]] = {
            FigureKind.PAWN.value: [Position(x, PAWN_RANK[color]) for x in range(BOARD_DIMENSIONS[0])]
        }
        for x, kind in enumerate(BACK_RANK):
            figures.setdefault(kind.value, []).append(Position(x, home))
        return cls(ptype, color, figures)

    @classmethod
    def from_board(cls, board: Board, color: Color, ptype: PlayerType = PlayerType.HUMAN) -> Self:
        """Build the registry that matches whatever of our color is standing on the board"""
        figures: dict[str, list[Position]] = {}
        for pos in all_positions():
            kind = board.get_figure(pos)
            if kind is not None and board.get_figure_color(pos) == color:
                figures.setdefault(kind.value, []).append(pos)
        return cls(ptype, color, figures)

    @property
    def is_human(self) -> bool:
        return self.ptype == PlayerType.HUMAN

    def king(self) -> Position:
        """A king is never actually captured: checkmate ends the game first."""
        kings = self.figures.get(FigureKind.KING.value)
        if not kings:
            raise BoardStateError(f"{self.color.value} has no king registered.")
        return kings[0]

    def move_figure(self, before: Position, after: Position) -> None:
        for positions in self.figures.values():
            for i, pos in enumerate(positions):
                if pos == before:
                    positions[i] = after
                    return
        raise BoardStateError(f"{self.color.value} has no figure on {before.to_algebraic()}.")

    def capture(self, kind_name: str, pos: Position) -> CaptureSlot:
        """
        Remove the figure from the registry. Returns where it was (position of the kind in the registry and index
        in its list), so `reverse_capture` can put it back exactly.
        If it was the last one of its kind, the kind is removed from the registry altogether.
        """
        positions = self.figures.get(kind_name)
        if positions is None or pos not in positions:
            raise BoardStateError(
                f"{self.color.value} has no {kind_name} on {pos.to_algebraic()} to capture."
            )
        slot = (list(self.figures).index(kind_name), positions.index(pos))
        del positions[slot[1]]
        if not positions:
            del self.figures[kind_name]
        return slot

    def reverse_capture(self, kind_name: str, pos: Position, slot: Optional[CaptureSlot] = None) -> None:
        """Undo a (simulated) capture. Without a slot the figure is appended."""
        if slot is None:
            self.figures.setdefault(kind_name, []).append(pos)
            return

        kind_index, index = slot
        if kind_name in self.figures:
            self.figures[kind_name].insert(index, pos)
            return
        # the kind was removed by the capture: rebuild the registry in its old order
        items = list(self.figures.items())
        items.insert(kind_index, (kind_name, [pos]))
        self.figures.clear()
        self.figures.update(items)

    def upgrade_pawn(self, pos: Position) -> None:
        """Promotion: the pawn on `pos` becomes a queen"""
        self.capture(FigureKind.PAWN.value, pos)
        self.figures.setdefault(FigureKind.QUEEN.value, []).append(pos)

    def get_possible_moves(self, board: Board, opponent: Player) -> list[Move]:
        """
        Exhaustive legal move generator
        ---

        Every owned figure is tried against all 64 fields. Each candidate goes through the full legality gate,
        which simulates the move to test for self-check. This is the hot path of the engine.
        """
        # snapshot: the simulations rewrite our lists in place (and restore them)
        owned = [pos for positions in self.figures.values() for pos in positions]
        targets = all_positions()
        return [
            (from_pos, to_pos)
            for from_pos in owned
            for to_pos in targets
            if board.is_move_valid(from_pos, to_pos, self, opponent)
        ]

    def can_king_be_saved(self, board: Board, opponent: Player) -> bool:
        """Only asked when our king is in check already: is there any legal move at all?"""
        return len(self.get_possible_moves(board, opponent)) > 0
