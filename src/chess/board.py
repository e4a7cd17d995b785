"""The Game board owns the occupancy of all 64 fields, the legality gate and the check/checkmate detection"""

from __future__ import annotations

from contextlib import ExitStack, contextmanager
from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterator, Optional, Self

from src.chess.moves import valid_move
from src.chess.pieces import BACK_RANK, HOME_RANK, PAWN_RANK, Color, FigureKind
from src.chess.position import BOARD_DIMENSIONS, Position
from src.core.exceptions import BoardStateError

if TYPE_CHECKING:
    from src.chess.player import CaptureSlot, Player

Layout = dict[Position, tuple[FigureKind, Color]]


@dataclass
class Field:
    """
    A single field of the board.

    NOTE: `color` is the occupant's color when occupied, and the checkerboard color of the field when empty.
    """

    color: Color
    figure: Optional[FigureKind] = None

    @classmethod
    def empty_at(cls, pos: Position) -> Self:
        return cls(pos.field_color(), None)

    def is_empty(self) -> bool:
        return self.figure is None

    def __str__(self) -> str:
        if self.figure is None:
            return "   "
        side = "W" if self.color == Color.WHITE else "B"
        return f"{side}{self.figure.short}"


@dataclass
class Board:
    fields: list[list[Field]]  # indexed as fields[y][x]

    @classmethod
    def empty(cls) -> Self:
        return cls(
            [
                [Field.empty_at(Position(x, y)) for x in range(BOARD_DIMENSIONS[0])]
                for y in range(BOARD_DIMENSIONS[1])
            ]
        )

    @classmethod
    def standard(cls) -> Self:
        """
        Standard starting placement:
        * pawns on the 2nd (white) and 7th (black) rank
        * rook, knight, bishop, queen, king, bishop, knight, rook on the 1st / 8th rank, from the a-file onwards
        """
        board = cls.empty()
        for color in Color:
            for x, kind in enumerate(BACK_RANK):
                board.set_figure(Position(x, HOME_RANK[color]), kind, color)
                board.set_figure(Position(x, PAWN_RANK[color]), FigureKind.PAWN, color)
        return board

    @classmethod
    def from_layout(cls, layout: Layout) -> Self:
        """Convenience method to set up any position (used a lot for testing specific situations)"""
        board = cls.empty()
        for pos, (kind, color) in layout.items():
            board.set_figure(pos, kind, color)
        return board

    def __getitem__(self, pos: Position) -> Field:
        return self.fields[pos.y][pos.x]

    def __setitem__(self, pos: Position, field: Field) -> None:
        self.fields[pos.y][pos.x] = field

    def __str__(self) -> str:
        """Text version of the board, 8th rank on top"""
        lines = ["", "  | a | b | c | d | e | f | g | h |", "--|---|---|---|---|---|---|---|---|--"]
        for y in range(BOARD_DIMENSIONS[1] - 1, -1, -1):
            cells = "|".join(str(self[Position(x, y)]) for x in range(BOARD_DIMENSIONS[0]))
            lines.append(f"{y + 1} |{cells}| ")
        lines.append("--|---|---|---|---|---|---|---|---|--")
        return "\n".join(lines) + "\n"

    # --- QUERIES ---
    def is_empty(self, pos: Position) -> bool:
        return self[pos].is_empty()

    def get_figure(self, pos: Position) -> Optional[FigureKind]:
        return self[pos].figure

    def get_figure_color(self, pos: Position) -> Optional[Color]:
        field = self[pos]
        return None if field.is_empty() else field.color

    def is_capture_move(self, from_pos: Position, to_pos: Position) -> bool:
        """True if an opponent's figure stands on the target field"""
        target = self[to_pos]
        return not target.is_empty() and target.color != self[from_pos].color

    # --- MUTATIONS (no legality checks here!) ---
    def set_figure(self, pos: Position, kind: FigureKind, color: Color) -> None:
        self[pos] = Field(color, kind)

    def remove_figure(self, pos: Position) -> None:
        self[pos] = Field.empty_at(pos)

    def move_figure(self, before: Position, after: Position) -> None:
        """Relocate whatever stands on `before`. Overwrites `after` unconditionally."""
        moving = self[before]
        if moving.figure is None:
            raise BoardStateError(f"No figure to move on {before.to_algebraic()}.")
        self.remove_figure(before)
        self.set_figure(after, moving.figure, moving.color)

    # --- LEGALITY ---
    def is_move_valid(
        self, from_pos: Position, to_pos: Position, active: Player, inactive: Player
    ) -> bool:
        """
        Single legality gate for human and AI moves
        ----

        1. there must be a figure of the active player on `from_pos`
        2. the figure's movement rule must accept the move
        3. the move may not leave the active player's king in check
        """
        kind = self.get_figure(from_pos)
        if kind is None or self.get_figure_color(from_pos) != active.color:
            return False
        return valid_move(kind, self, from_pos, to_pos, active.color) and not self.simulate_check(
            from_pos, to_pos, active, inactive, check_active_king=True
        )

    def in_check(self, king_pos: Position, opponent: Player) -> bool:
        """
        Can any of the opponent's figures move onto `king_pos`?

        NOTE: Works for any field, not just the king's. The opponent's own king safety is not considered.
        """
        for positions in opponent.figures.values():
            for pos in positions:
                kind = self.get_figure(pos)
                if kind is None:
                    raise BoardStateError(
                        f"Registry of {opponent.color.value} lists {pos.to_algebraic()}, but the field is empty."
                    )
                if valid_move(kind, self, pos, king_pos, opponent.color):
                    return True
        return False

    @contextmanager
    def simulated_move(
        self, from_pos: Position, to_pos: Position, active: Player, inactive: Player
    ) -> Iterator[None]:
        """
        Make the move on the board and in the active player's registry (capturing if needed), and unmake it
        when the block exits, however it exits.

        NOTE: every step registers its own undo right after it succeeded. The undos run in reverse order.
        """
        with ExitStack() as undo:
            target = self.get_figure(to_pos)
            if target is not None:
                slot = inactive.capture(target.value, to_pos)
                undo.callback(self._restore_capture, to_pos, target, inactive, slot)

            self.move_figure(from_pos, to_pos)
            undo.callback(self.move_figure, to_pos, from_pos)
            active.move_figure(from_pos, to_pos)
            undo.callback(active.move_figure, to_pos, from_pos)
            yield

    def _restore_capture(self, pos: Position, kind: FigureKind, owner: Player, slot: CaptureSlot) -> None:
        owner.reverse_capture(kind.value, pos, slot)
        self.set_figure(pos, kind, owner.color)

    def simulate_check(
        self,
        from_pos: Position,
        to_pos: Position,
        active: Player,
        inactive: Player,
        check_active_king: bool,
    ) -> bool:
        """
        Make -> test -> unmake.

        check_active_king=True : would the active player's king be in check after the move?
        check_active_king=False: would the field the figure moved to be under attack after the move?
        """
        with self.simulated_move(from_pos, to_pos, active, inactive):
            target = active.king() if check_active_king else to_pos
            return self.in_check(target, inactive)

    # --- CHECKS FOR ENDING THE GAME ---
    def checkmated_color(self, one: Player, two: Player) -> Optional[Color]:
        """The color of the side that is checkmated, if any. `one` is looked at first."""
        if self.in_check(one.king(), two):
            return None if one.can_king_be_saved(self, two) else one.color
        if self.in_check(two.king(), one):
            return None if two.can_king_be_saved(self, one) else two.color
        return None

    def checkmate(self, one: Player, two: Player) -> bool:
        return self.checkmated_color(one, two) is not None
