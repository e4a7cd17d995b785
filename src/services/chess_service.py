"""Orchestration of communication between a UI collaborator (renderer, input handling) and the chess domain."""

import logging
import random
from typing import Optional, Protocol

from src.api.models import (
    AiTurnResponse,
    GameStateResponse,
    MoveRequest,
    NewGameRequest,
    PlayerTypeRequest,
    TurnResponse,
)
from src.chess.board import Board
from src.chess.game import Game
from src.chess.pieces import Color
from src.chess.position import Position
from src.core.config import GameSettings
from src.core.models import TurnOutcome
from src.core.shared_types import PlayerType

LOGGER = logging.getLogger(__name__)

MSG_NOT_YOUR_FIGURE = "Please select one of your own figures!"
MSG_OWN_CAPTURE = "You cannot capture your own figure!"
MSG_NOT_VALID = "That was not a valid move!"


class HumanMoveProvider(Protocol):
    """Blocking source of human moves (terminal prompt, mouse picking, a test script, ...)"""

    def request_move(self, board: Board) -> tuple[Position, Position]: ...
    def notify(self, message: str) -> None: ...


def check_human_move(game: Game, from_pos: Position, to_pos: Position) -> Optional[str]:
    """Basic sanity checks before handing a human move to the game. Returns the reason it was refused, if any."""
    board = game.board
    color = game.turn_color()
    if board.get_figure_color(from_pos) != color:
        return MSG_NOT_YOUR_FIGURE
    if board.get_figure_color(to_pos) == color:
        return MSG_OWN_CAPTURE
    active, inactive = game.player(color), game.player(~color)
    if not board.is_move_valid(from_pos, to_pos, active, inactive):
        return MSG_NOT_VALID
    return None


class ChessService:
    """Owns a single Game and translates between UI events / request models and the domain."""

    def __init__(
        self, settings: Optional[GameSettings] = None, rng: Optional[random.Random] = None
    ) -> None:
        self.settings = settings or GameSettings()
        self.rng = rng if rng is not None else random.Random(self.settings.ai_seed)
        self.game = Game.new_game(self.settings.white, self.settings.black, rng=self.rng)
        self._selected: Optional[Position] = None
        self._promotion: Optional[tuple[Color, Position]] = None

    # -- Request model logic ---
    def new_game(self, request: NewGameRequest) -> GameStateResponse:
        """Throw away the current game and start over"""
        self.game = Game.new_game(request.white, request.black, rng=self.rng)
        self.reset_selection()
        self._promotion = None
        LOGGER.info("New game: white=%s, black=%s", request.white.value, request.black.value)
        return self.get_game_state()

    def get_game_state(self) -> GameStateResponse:
        game = self.game
        return GameStateResponse(
            turn=game.turn_color(),
            status=game.status,
            winner=game.winner,
            players={color.value: game.player(color).ptype for color in Color},
            figures={
                color.value: {
                    kind: [pos.to_algebraic() for pos in positions]
                    for kind, positions in game.player(color).figures.items()
                }
                for color in Color
            },
            board=str(game.board),
        )

    def make_move(self, request: MoveRequest) -> TurnResponse:
        outcome = self._play(request.from_position, request.to_position)
        return TurnResponse(
            accepted=outcome.accepted,
            captured=outcome.captured,
            promoted=outcome.promoted,
            code=outcome.code,
        )

    def ai_move(self) -> Optional[AiTurnResponse]:
        """Let the AI play, if it is an AI's turn"""
        mover = self.game.turn_color()
        result = self.game.do_ai_turn()
        if result is None:
            return None
        if result.promoted:
            self._promotion = (mover, result.to_pos)
        return AiTurnResponse(
            from_square=result.from_pos.to_algebraic(),
            to_square=result.to_pos.to_algebraic(),
            captured=result.captured,
            promoted=result.promoted,
        )

    def set_player_type(self, request: PlayerTypeRequest) -> GameStateResponse:
        self.game.set_player_type(request.color, request.ptype)
        return self.get_game_state()

    def toggle_player_ai(self, color: Color) -> PlayerType:
        ptype = self.game.toggle_player_ai(color)
        LOGGER.info("%s is now played by: %s", color.value, ptype.value)
        return ptype

    def has_ai(self) -> bool:
        return self.game.has_ai()

    # -- Field selection (click, click) ---
    def select(self, pos: Position) -> Optional[TurnOutcome]:
        """
        First selection: one of your own figures. Selecting another own figure replaces it.
        Any other field is the target: the turn is attempted and the selection is cleared.
        """
        own_figure = self.game.board.get_figure_color(pos) == self.game.turn_color()
        if own_figure:
            self._selected = pos
            return None
        if self._selected is None:
            return None

        from_pos = self._selected
        self.reset_selection()
        return self._play(from_pos, pos)

    def reset_selection(self) -> None:
        self._selected = None

    @property
    def selected(self) -> Optional[Position]:
        return self._selected

    def take_promotion(self) -> Optional[tuple[Color, Position]]:
        """Field (and color) of the last promoted pawn, for the renderer. Cleared once read."""
        promotion, self._promotion = self._promotion, None
        return promotion

    # -- Blocking human turn ---
    def play_human_turn(self, provider: HumanMoveProvider) -> TurnOutcome:
        """Keep asking the provider until it comes up with a move the game accepts (or the game is over)."""
        while not self.game.check_gameover():
            from_pos, to_pos = provider.request_move(self.game.board)
            reason = check_human_move(self.game, from_pos, to_pos)
            if reason is not None:
                provider.notify(reason)
                continue

            outcome = self._play(from_pos, to_pos)
            if outcome.accepted:
                return outcome
        return TurnOutcome.rejected()

    # -- Internal helpers --
    def _play(self, from_pos: Position, to_pos: Position) -> TurnOutcome:
        mover = self.game.turn_color()
        outcome = self.game.do_turn(from_pos, to_pos)
        if outcome.promoted:
            self._promotion = (mover, to_pos)
        return outcome

