"""
The Game class is the entrypoint into the domain layer for the service layer.
It is responsible for orchestrating everything required to play a turn: legality, capture, promotion,
turn order and detecting the end of the game.
"""

import logging
import random
from dataclasses import dataclass, field
from typing import Optional, Self

from src.chess.ai import get_move
from src.chess.board import Board, Layout
from src.chess.pieces import PROMOTION_RANK, Color, FigureKind
from src.chess.player import Move, Player
from src.chess.position import Position
from src.core.models import AiTurn, TurnOutcome
from src.core.shared_types import PlayerType, Status

LOGGER = logging.getLogger(__name__)


@dataclass
class Game:
    white: Player
    black: Player
    board: Board
    turn: Color = Color.WHITE
    gameover: bool = False
    loser: Optional[Color] = None
    rng: Optional[random.Random] = field(default=None, compare=False, repr=False)

    @classmethod
    def new_game(
        cls,
        white_type: PlayerType = PlayerType.HUMAN,
        black_type: PlayerType = PlayerType.HUMAN,
        rng: Optional[random.Random] = None,
    ) -> Self:
        """Standard starting position, White to move"""
        return cls(
            white=Player.new(white_type, Color.WHITE),
            black=Player.new(black_type, Color.BLACK),
            board=Board.standard(),
            rng=rng,
        )

    @classmethod
    def from_layout(
        cls,
        layout: Layout,
        turn: Color = Color.WHITE,
        white_type: PlayerType = PlayerType.HUMAN,
        black_type: PlayerType = PlayerType.HUMAN,
        rng: Optional[random.Random] = None,
    ) -> Self:
        """Start from any position. Both sides must have a king on the board."""
        board = Board.from_layout(layout)
        return cls(
            white=Player.from_board(board, Color.WHITE, white_type),
            black=Player.from_board(board, Color.BLACK, black_type),
            board=board,
            turn=turn,
            rng=rng,
        )

    # --- STATE QUERIES ---
    def turn_color(self) -> Color:
        return self.turn

    def is_game_over(self) -> bool:
        return self.gameover

    @property
    def status(self) -> Status:
        return Status.CHECKMATE if self.gameover else Status.IN_PROGRESS

    @property
    def winner(self) -> Optional[Color]:
        return None if self.loser is None else ~self.loser

    def player(self, color: Color) -> Player:
        return self.white if color == Color.WHITE else self.black

    def set_player_type(self, color: Color, ptype: PlayerType) -> None:
        """Can be changed before or in between turns"""
        self.player(color).ptype = ptype

    def toggle_player_ai(self, color: Color) -> PlayerType:
        """Switch a side between human control and the (dumb) AI"""
        player = self.player(color)
        player.ptype = PlayerType.DUMB if player.is_human else PlayerType.HUMAN
        return player.ptype

    def has_ai(self) -> bool:
        return not (self.white.is_human and self.black.is_human)

    def legal_moves(self) -> list[Move]:
        """All legal moves of the side to move (empty once the game is over)"""
        if self.gameover:
            return []
        active, inactive = self._active_players()
        return active.get_possible_moves(self.board, inactive)

    # --- TURNS ---
    def do_turn(self, from_pos: Position, to_pos: Position) -> TurnOutcome:
        """
        Attempt a (human) move for the side to move
        ----

        1. Game over? -> rejected
        2. Checkmate on the board? -> game over, rejected
        3. Move not legal? -> rejected, nothing changes
        4. Execute: capture, promotion, move, flip the turn
        """
        if self.check_gameover():
            return TurnOutcome.rejected()

        active, inactive = self._active_players()
        if not self.board.is_move_valid(from_pos, to_pos, active, inactive):
            LOGGER.debug(
                "Rejected %s move %s%s",
                self.turn.value,
                from_pos.to_algebraic(),
                to_pos.to_algebraic(),
            )
            return TurnOutcome.rejected()

        captured, promoted = self._make_move(from_pos, to_pos)
        return TurnOutcome(accepted=True, captured=captured, promoted=promoted)

    def do_ai_turn(self) -> Optional[AiTurn]:
        """
        Same transaction as `do_turn`, but the AI picks the move.
        Nothing happens (None) when a human is to move, or when the AI has no legal move at all.
        """
        if self.check_gameover():
            return None

        active, inactive = self._active_players()
        if active.is_human:
            return None
        if not active.get_possible_moves(self.board, inactive):
            LOGGER.info("%s AI has no legal move left (stalemate)", self.turn.value)
            return None

        from_pos, to_pos = get_move(self.board, active, inactive, self.rng)
        if not self.board.is_move_valid(from_pos, to_pos, active, inactive):
            LOGGER.warning(
                "%s AI (%s) proposed an illegal move %s%s",
                self.turn.value,
                active.ptype.value,
                from_pos.to_algebraic(),
                to_pos.to_algebraic(),
            )
            return None

        captured, promoted = self._make_move(from_pos, to_pos)
        return AiTurn(from_pos, to_pos, captured=captured, promoted=promoted)

    def check_gameover(self) -> bool:
        """Game over is permanent. Checkmate is detected at the start of every turn attempt."""
        if self.gameover:
            return True

        mated = self.board.checkmated_color(self.white, self.black)
        if mated is not None:
            self.gameover = True
            self.loser = mated
            LOGGER.info("Game is over: %s is checkmated", mated.value)
        return self.gameover

    # -- PRIVATE HELPERS ---
    def _active_players(self) -> tuple[Player, Player]:
        return self.player(self.turn), self.player(~self.turn)

    def _make_move(self, from_pos: Position, to_pos: Position) -> tuple[bool, bool]:
        """
        Apply an already validated move. Returns (captured, promoted).

        NOTE: a promoting pawn is swapped for a queen on its starting field, and the queen then makes the move.
        """
        active, inactive = self._active_players()

        captured = False
        target = self.board.get_figure(to_pos)
        if target is not None:
            inactive.capture(target.value, to_pos)
            captured = True

        promoted = False
        is_pawn = self.board.get_figure(from_pos) == FigureKind.PAWN
        if is_pawn and to_pos.y == PROMOTION_RANK[active.color]:
            self.board.set_figure(from_pos, FigureKind.QUEEN, active.color)
            active.upgrade_pawn(from_pos)
            promoted = True

        self.board.move_figure(from_pos, to_pos)
        active.move_figure(from_pos, to_pos)

        self.turn = ~self.turn
        return captured, promoted
