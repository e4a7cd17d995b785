"""Unit tests for /src/chess/player.py"""

import pytest

from src.chess.board import Board
from src.chess.pieces import Color, FigureKind
from src.chess.player import Player
from src.chess.position import Position
from src.core.exceptions import BoardStateError
from src.core.shared_types import PlayerType
from tests.helpers import BL, K, N, P, W, pos


@pytest.fixture
def white() -> Player:
    return Player.new(PlayerType.HUMAN, Color.WHITE)


@pytest.fixture
def black() -> Player:
    return Player.new(PlayerType.DUMB, Color.BLACK)


def test_new_player_has_the_standard_figures(white: Player, black: Player) -> None:
    assert white.figures == {
        "pawn": [Position(x, 1) for x in range(8)],
        "rook": [pos("a1"), pos("h1")],
        "knight": [pos("b1"), pos("g1")],
        "bishop": [pos("c1"), pos("f1")],
        "queen": [pos("d1")],
        "king": [pos("e1")],
    }
    assert black.figures["pawn"] == [Position(x, 6) for x in range(8)]
    assert black.king() == pos("e8")
    assert sum(len(positions) for positions in black.figures.values()) == 16


def test_player_type(white: Player, black: Player) -> None:
    assert white.is_human
    assert not black.is_human


def test_registry_from_board() -> None:
    board = Board.standard()
    assert Player.from_board(board, Color.BLACK, PlayerType.DUMB) == Player.new(PlayerType.DUMB, Color.BLACK)

    board = Board.from_layout({pos("e1"): (K, W), pos("c3"): (N, W), pos("e8"): (K, BL)})
    assert Player.from_board(board, Color.WHITE).figures == {"knight": [pos("c3")], "king": [pos("e1")]}


def test_missing_king_is_a_bug() -> None:
    with pytest.raises(BoardStateError):
        Player(PlayerType.HUMAN, Color.WHITE, {}).king()


def test_move_figure(white: Player) -> None:
    white.move_figure(pos("g1"), pos("f3"))
    assert white.figures["knight"] == [pos("b1"), pos("f3")]


def test_move_figure_from_unowned_field_is_a_bug(white: Player) -> None:
    with pytest.raises(BoardStateError):
        white.move_figure(pos("e4"), pos("e5"))


def test_capture_returns_slot_and_reverse_restores_order(black: Player) -> None:
    before = list(black.figures["pawn"])

    slot = black.capture("pawn", pos("c7"))
    assert slot == (0, 2)
    assert pos("c7") not in black.figures["pawn"]

    black.reverse_capture("pawn", pos("c7"), slot)
    assert black.figures["pawn"] == before


def test_capture_last_of_kind_removes_the_entry(white: Player) -> None:
    white.capture("queen", pos("d1"))
    assert "queen" not in white.figures

    white.reverse_capture("queen", pos("d1"))
    assert white.figures["queen"] == [pos("d1")]


def test_reverse_capture_restores_the_order_of_kinds(white: Player) -> None:
    """Dict equality ignores key order, so compare the keys as a list"""
    kinds_before = list(white.figures)

    slot = white.capture("queen", pos("d1"))
    assert slot == (4, 0)
    assert list(white.figures) == ["pawn", "rook", "knight", "bishop", "king"]

    white.reverse_capture("queen", pos("d1"), slot)
    assert list(white.figures) == kinds_before
    assert white == Player.new(PlayerType.HUMAN, Color.WHITE)


def test_capture_of_unregistered_figure_is_a_bug(white: Player) -> None:
    with pytest.raises(BoardStateError):
        white.capture("queen", pos("d4"))
    with pytest.raises(BoardStateError):
        white.capture("pawn", pos("d1"))


def test_upgrade_pawn(white: Player) -> None:
    white.upgrade_pawn(pos("a2"))
    assert pos("a2") not in white.figures["pawn"]
    assert white.figures["queen"] == [pos("d1"), pos("a2")]


def test_upgrade_last_pawn() -> None:
    player = Player(PlayerType.HUMAN, Color.BLACK, {"king": [pos("e8")], "pawn": [pos("h2")]})
    player.upgrade_pawn(pos("h2"))
    assert player.figures == {"king": [pos("e8")], "queen": [pos("h2")]}


def test_twenty_moves_in_the_starting_position(white: Player, black: Player) -> None:
    board = Board.standard()
    moves = white.get_possible_moves(board, black)

    assert len(moves) == 20
    assert (pos("e2"), pos("e4")) in moves
    assert (pos("g1"), pos("f3")) in moves
    assert (pos("e1"), pos("e2")) not in moves
    # generation leaves the registries untouched
    assert white == Player.new(PlayerType.HUMAN, Color.WHITE)
    assert len(black.get_possible_moves(board, white)) == 20


@pytest.mark.parametrize("with_rook, expected", [(False, True), (True, False)])
def test_can_king_be_saved(with_rook: bool, expected: bool) -> None:
    """The pawn on b2 checks the king on a1 and is covered by the black king. Only b1 is left, unless the rook covers it."""
    layout = {pos("a1"): (K, W), pos("a3"): (K, BL), pos("b2"): (P, BL)}
    if with_rook:
        layout[pos("h1")] = (FigureKind.ROOK, BL)
    board = Board.from_layout(layout)
    white = Player.from_board(board, Color.WHITE)
    black = Player.from_board(board, Color.BLACK)

    assert board.in_check(white.king(), black)
    assert white.can_king_be_saved(board, black) == expected
