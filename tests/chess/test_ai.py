"""Unit tests for /src/chess/ai.py"""

from copy import deepcopy
from unittest.mock import Mock

import pytest

from src.chess.ai import (
    SMART_PLACEHOLDER_MOVE,
    capture_and_evade,
    figure_value,
    get_dumb_move,
    get_move,
)
from src.chess.board import Board
from src.chess.pieces import Color, FigureKind
from src.chess.player import Player
from src.chess.position import Position
from src.core.exceptions import BoardStateError
from src.core.shared_types import PlayerType
from tests.helpers import BL, B, K, Q, R, W, pos


def setup(layout: dict, white_type: PlayerType = PlayerType.DUMB) -> tuple[Board, Player, Player]:
    board = Board.from_layout(layout)
    return (
        board,
        Player.from_board(board, Color.WHITE, white_type),
        Player.from_board(board, Color.BLACK, PlayerType.HUMAN),
    )


def test_figure_values() -> None:
    assert figure_value(FigureKind.QUEEN) == 100
    assert figure_value(FigureKind.PAWN) == 10
    assert figure_value(FigureKind.BISHOP) == figure_value(FigureKind.KNIGHT) == 25
    with pytest.raises(BoardStateError):
        figure_value(None)


@pytest.mark.parametrize(
    "to_square, expected",
    [
        ("d8", 50),  # takes the rook, nothing covers d8
        ("d7", -99),  # walks into the rook
        ("g4", 0),
    ],
)
def test_capture_and_evade(to_square: str, expected: int) -> None:
    board, white, black = setup({pos("a1"): (K, W), pos("d1"): (Q, W), pos("h8"): (K, BL), pos("d8"): (R, BL)})
    before = deepcopy((board, white, black))

    assert capture_and_evade(board, (pos("d1"), pos(to_square)), white, black) == expected
    assert (board, white, black) == before


def test_bishop_takes_the_undefended_rook() -> None:
    board, white, black = setup(
        {
            Position(0, 0): (K, W),
            Position(2, 2): (B, W),
            Position(5, 5): (R, BL),
            Position(7, 0): (K, BL),
        }
    )
    rng = Mock()

    assert get_move(board, white, black, rng) == (Position(2, 2), Position(5, 5))
    rng.choice.assert_not_called()


def test_random_pick_among_all_moves_when_nothing_scores() -> None:
    """Nothing can be captured or attacked in the opening, so every move scores 0"""
    board = Board.standard()
    white = Player.new(PlayerType.DUMB, Color.WHITE)
    black = Player.new(PlayerType.HUMAN, Color.BLACK)
    rng = Mock()
    rng.choice.side_effect = lambda moves: moves[-1]

    move = get_dumb_move(board, white, black, rng)

    rng.choice.assert_called_once()
    (candidates,) = rng.choice.call_args.args
    assert len(candidates) == 20
    assert move == candidates[-1]


def test_get_move_works_on_copies() -> None:
    board = Board.standard()
    white = Player.new(PlayerType.DUMB, Color.WHITE)
    black = Player.new(PlayerType.HUMAN, Color.BLACK)
    rng = Mock()
    rng.choice.side_effect = lambda moves: moves[0]
    before = deepcopy((board, white, black))

    get_move(board, white, black, rng)

    assert (board, white, black) == before


def test_no_move_to_choose_from_is_a_bug() -> None:
    """Stalemate: the white king is not in check, but every field around it is covered by the queen"""
    board, white, black = setup({pos("a1"): (K, W), pos("b3"): (Q, BL), pos("h8"): (K, BL)})

    assert not board.in_check(white.king(), black)
    with pytest.raises(BoardStateError):
        get_dumb_move(board, white, black)


def test_smart_ai_proposes_the_placeholder() -> None:
    board = Board.standard()
    black = Player.new(PlayerType.SMART, Color.BLACK)
    white = Player.new(PlayerType.HUMAN, Color.WHITE)

    assert get_move(board, black, white) == SMART_PLACEHOLDER_MOVE == (Position(1, 1), Position(1, 2))
