"""
Move selection for the computer players.

Dumb: greedy one-ply heuristic (take the most valuable figure, avoid moving onto attacked fields).
Smart: not implemented, returns a fixed placeholder move.
"""

from __future__ import annotations

import logging
import random
from copy import deepcopy
from typing import TYPE_CHECKING, Optional

from src.chess.pieces import FigureKind
from src.chess.position import Position
from src.core.exceptions import BoardStateError
from src.core.shared_types import PlayerType

if TYPE_CHECKING:
    from src.chess.board import Board
    from src.chess.player import Move, Player

LOGGER = logging.getLogger(__name__)

FIGURE_VALUES: dict[FigureKind, int] = {
    FigureKind.KING: 500,  # never actually capturable
    FigureKind.QUEEN: 100,
    FigureKind.ROOK: 50,
    FigureKind.BISHOP: 25,
    FigureKind.KNIGHT: 25,
    FigureKind.PAWN: 10,
}

SMART_PLACEHOLDER_MOVE: Move = (Position(1, 1), Position(1, 2))


def get_move(
    board: Board, me: Player, opponent: Player, rng: Optional[random.Random] = None
) -> Move:
    """
    Propose a move for a non-human player.

    Works on copies: the Board and Players of the caller are never touched.
    """
    board, me, opponent = deepcopy(board), deepcopy(me), deepcopy(opponent)
    if me.ptype != PlayerType.SMART:
        return get_dumb_move(board, me, opponent, rng)
    return get_smart_move(board, me, opponent)


def figure_value(kind: Optional[FigureKind]) -> int:
    if kind is None:
        raise BoardStateError("Cannot value an empty field.")
    return FIGURE_VALUES[kind]


def random_move(moves: list[Move], rng: Optional[random.Random] = None) -> Move:
    chooser = rng if rng is not None else random
    return chooser.choice(moves)


def capture_and_evade(board: Board, move: Move, active: Player, inactive: Player) -> int:
    """
    Score of a single move
    ---

    * capture: value of the opponent's figure on the target field
    * evade: if the target field is under attack after the move, lose (almost) the value of the moving figure
    """
    from_pos, to_pos = move
    capture = figure_value(board.get_figure(to_pos)) if board.is_capture_move(from_pos, to_pos) else 0

    moving_value = figure_value(board.get_figure(from_pos))
    attacked = board.simulate_check(from_pos, to_pos, active, inactive, check_active_king=False)
    evade = -moving_value + 1 if attacked else 0

    return capture + evade


def get_dumb_move(
    board: Board, me: Player, opponent: Player, rng: Optional[random.Random] = None
) -> Move:
    """
    Highest scoring move. On equal non-zero scores the move found last wins.

    NOTE: If the best score is exactly 0, a random move is picked among ALL legal moves
    (also the ones with a negative score).
    """
    my_moves = me.get_possible_moves(board, opponent)
    if not my_moves:
        raise BoardStateError(f"{me.color.value} has no legal move to choose from.")

    best_move = my_moves[0]
    best_score: Optional[int] = None
    for move in my_moves:
        score = capture_and_evade(board, move, me, opponent)
        if best_score is None or score >= best_score:
            best_move, best_score = move, score

    if best_score == 0:
        return random_move(my_moves, rng)

    LOGGER.debug(
        "%s AI picked %s%s (score %s)",
        me.color.value,
        best_move[0].to_algebraic(),
        best_move[1].to_algebraic(),
        best_score,
    )
    return best_move


def get_smart_move(board: Board, me: Player, opponent: Player) -> Move:
    # TODO: replace the placeholder with a minimax search
    LOGGER.warning("Smart AI is not implemented, proposing a placeholder move.")
    return SMART_PLACEHOLDER_MOVE
