"""
Pytest will auto-discover / import this file called 'conftest.py'.
This file defines fixtures required for testing multiple layers.
"""

import pytest

from src.chess.board import Layout
from src.chess.game import Game
from src.chess.pieces import Color
from src.core.shared_types import PlayerType
from tests.helpers import GameFactory


@pytest.fixture
def new_game() -> Game:
    """Standard starting position, two human players"""
    return Game.new_game()


@pytest.fixture
def layout_game() -> GameFactory:
    """Call the inner function with a {Position: (kind, color)} mapping to set up a custom position."""

    def _create_game(
        layout: Layout,
        turn: Color = Color.WHITE,
        white_type: PlayerType = PlayerType.HUMAN,
        black_type: PlayerType = PlayerType.HUMAN,
    ) -> Game:
        return Game.from_layout(layout, turn=turn, white_type=white_type, black_type=black_type)

    return _create_game
