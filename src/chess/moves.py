"""
Geometry/Base movement rules

Key idea: Use strategy pattern to define the legality test for each figure kind.

Every rule answers the question: "given the current occupancy, may the figure of color `color` standing on `from_pos`
move to `to_pos`?" Whether the move leaves your own king in check is decided later by the Board.
"""

from typing import Callable, Optional, Protocol

from src.chess.pieces import PAWN_DIRECTION, PAWN_RANK, Color, FigureKind
from src.chess.position import Position


class Board(Protocol):
    """Just the parts the movement rules need"""

    def is_empty(self, pos: Position) -> bool: ...
    def get_figure_color(self, pos: Position) -> Optional[Color]: ...


Vector = tuple[int, int]


def _sign(value: int) -> int:
    return (value > 0) - (value < 0)


# --- LINE OF SIGHT ---
def way_is_clear(board: Board, from_pos: Position, to_pos: Position) -> bool:
    """
    Walk from `from_pos` towards `to_pos` one step at a time and make sure every field in between is empty.
    ---

    NOTE: Both end points are excluded. The caller decides whether the direction makes sense at all
    (straight, sideways or diagonal). A zero length move is never clear.
    """
    if from_pos == to_pos:
        return False

    step: Vector = (_sign(to_pos.x - from_pos.x), _sign(to_pos.y - from_pos.y))
    x, y = from_pos.x + step[0], from_pos.y + step[1]
    while (x, y) != (to_pos.x, to_pos.y):
        if not board.is_empty(Position(x, y)):
            return False
        x += step[0]
        y += step[1]
    return True


def straight(board: Board, from_pos: Position, to_pos: Position) -> bool:
    """Same file, nothing in between"""
    return from_pos.x == to_pos.x and way_is_clear(board, from_pos, to_pos)


def sideways(board: Board, from_pos: Position, to_pos: Position) -> bool:
    """Same rank, nothing in between"""
    return from_pos.y == to_pos.y and way_is_clear(board, from_pos, to_pos)


def diagonal(board: Board, from_pos: Position, to_pos: Position) -> bool:
    """|delta_x| = |delta_y|, nothing in between"""
    is_diagonal = abs(to_pos.x - from_pos.x) == abs(to_pos.y - from_pos.y)
    return is_diagonal and way_is_clear(board, from_pos, to_pos)


def clashes(board: Board, to_pos: Position, color: Color) -> bool:
    """You can never move onto a field occupied by your own figure"""
    return board.get_figure_color(to_pos) == color


# --- MOVEMENT RULES ---
def pawn_move(board: Board, from_pos: Position, to_pos: Position, color: Color) -> bool:
    """
    A pawn:
    - moves by a single field forward, onto an empty field.
    - can move by two when standing on its starting rank (inferred from the rank only, not from move history)
    - takes diagonally forward, and only when there is an opponent's figure to take

    NOTE: No en passant.
    """
    if clashes(board, to_pos, color):
        return False

    direction = PAWN_DIRECTION[color]
    dy = to_pos.y - from_pos.y

    if board.is_empty(to_pos):
        allowed_steps = {direction, 2 * direction} if from_pos.y == PAWN_RANK[color] else {direction}
        return dy in allowed_steps and straight(board, from_pos, to_pos)

    # destination holds an opponent's figure: only the diagonal take is allowed
    return abs(to_pos.x - from_pos.x) == 1 and dy == direction


def knight_move(board: Board, from_pos: Position, to_pos: Position, color: Color) -> bool:
    """Knights jump: (|delta_x|, |delta_y|) is (1, 2) or (2, 1). Nothing can block them."""
    if clashes(board, to_pos, color):
        return False
    shape = (abs(to_pos.x - from_pos.x), abs(to_pos.y - from_pos.y))
    return shape in ((1, 2), (2, 1))


def bishop_move(board: Board, from_pos: Position, to_pos: Position, color: Color) -> bool:
    """Bishops move diagonally"""
    if clashes(board, to_pos, color):
        return False
    return diagonal(board, from_pos, to_pos)


def rook_move(board: Board, from_pos: Position, to_pos: Position, color: Color) -> bool:
    """Rooks move either along the file or along the rank (exactly one of the two)"""
    if clashes(board, to_pos, color):
        return False
    return straight(board, from_pos, to_pos) != sideways(board, from_pos, to_pos)


def queen_move(board: Board, from_pos: Position, to_pos: Position, color: Color) -> bool:
    """
    The Queen combines the rook moves and the bishop moves.
    Exactly one of the three directions may hold.
    """
    if clashes(board, to_pos, color):
        return False
    directions = (
        straight(board, from_pos, to_pos),
        sideways(board, from_pos, to_pos),
        diagonal(board, from_pos, to_pos),
    )
    return directions.count(True) == 1


def king_move(board: Board, from_pos: Position, to_pos: Position, color: Color) -> bool:
    """The king moves by a single field at the time, in any of the 8 directions. No castling."""
    if clashes(board, to_pos, color):
        return False
    return max(abs(to_pos.x - from_pos.x), abs(to_pos.y - from_pos.y)) == 1


# -- STRATEGY PATTERN: MOVEMENT RULES ---
LegalityFn = Callable[[Board, Position, Position, Color], bool]
LEGALITY_RULES: dict[FigureKind, LegalityFn] = {
    FigureKind.PAWN: pawn_move,
    FigureKind.KNIGHT: knight_move,
    FigureKind.BISHOP: bishop_move,
    FigureKind.ROOK: rook_move,
    FigureKind.QUEEN: queen_move,
    FigureKind.KING: king_move,
}


def valid_move(
    kind: FigureKind, board: Board, from_pos: Position, to_pos: Position, color: Color
) -> bool:
    """Geometric legality of a move for a figure of the given kind (own king safety NOT considered)."""
    return LEGALITY_RULES[kind](board, from_pos, to_pos, color)
