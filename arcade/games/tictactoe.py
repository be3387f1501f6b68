"""
Tic-tac-toe against the AIOpponent.

The TicTacToeEngine is the entrypoint into the domain layer for the service layer. It owns the board,
validates the human's moves, hands the turn to the opponent after a delay and keeps the session score.

Phases:

    SELECTING_DIFFICULTY -> PLAYING -> (AWAITING_OPPONENT <-> PLAYING) -> GAME_OVER -> PLAYING (reset)
"""

import logging
from enum import Enum, auto
from typing import Callable, Optional

from arcade.core.exceptions import GameStateError, IllegalMoveError, InvariantViolationError
from arcade.core.feedback import RESET_PULSE, ROUTINE_PULSE, WIN_PULSE, Feedback, NullFeedback
from arcade.core.models import TicTacToeModel
from arcade.core.scheduler import Handle, Scheduler
from arcade.core.shared_types import Difficulty, Mark
from arcade.games.board import IN_PROGRESS, Board, GameResult, result, winning_line
from arcade.games.opponent import AIOpponent

logger = logging.getLogger(__name__)

DEFAULT_OPPONENT_DELAY = 0.5

GameOverListener = Callable[[GameResult], None]


class Phase(Enum):
    SELECTING_DIFFICULTY = auto()
    PLAYING = auto()
    AWAITING_OPPONENT = auto()
    GAME_OVER = auto()


class TicTacToeEngine:
    def __init__(
        self,
        scheduler: Scheduler,
        opponent: Optional[AIOpponent] = None,
        feedback: Optional[Feedback] = None,
        opponent_delay: float = DEFAULT_OPPONENT_DELAY,
    ) -> None:
        self.scheduler = scheduler
        self.opponent = opponent or AIOpponent()
        self.feedback = feedback or NullFeedback()
        self.opponent_delay = opponent_delay

        self.board = Board()
        self.phase = Phase.SELECTING_DIFFICULTY
        self.difficulty: Optional[Difficulty] = None
        self.result: GameResult = IN_PROGRESS
        self.scores: dict[Mark, int] = {Mark.PLAYER: 0, Mark.OPPONENT: 0}

        # bumped on every reset, pending callbacks from an older generation do nothing
        self.generation = 0
        self._pending: Optional[Handle] = None
        self._listeners: list[GameOverListener] = []

    # --- DOMAIN LAYER API CALLED BY SERVICE ---
    def on_game_over(self, listener: GameOverListener) -> None:
        """Register a callable receiving the terminal result of every match."""
        self._listeners.append(listener)

    def select_difficulty(self, difficulty: Difficulty) -> None:
        """Fix the difficulty for this session and start the first match."""
        if self.phase != Phase.SELECTING_DIFFICULTY:
            raise GameStateError(
                f"Difficulty can only be picked at the start of a session. phase: {self.phase.name}"
            )
        self.difficulty = difficulty
        self._start_match()
        logger.info("Tic-tac-toe session started at difficulty %s", difficulty)

    def place_mark(self, cell: int) -> None:
        """
        The human taps a cell.
        ----

        Rejected (IllegalMoveError, nothing changes) when:
        * the match is over or the opponent is thinking
        * the cell is not on the board or already taken

        On success the result is recomputed. If the match goes on, the opponent's move gets scheduled.
        """
        if self.phase != Phase.PLAYING:
            raise IllegalMoveError(f"Not your turn to move. phase: {self.phase.name}")

        self.board.place(cell, Mark.PLAYER)
        self.feedback.tap()
        self.feedback.vibrate(ROUTINE_PULSE)
        logger.debug("Player marks cell %d: %r", cell, self.board.to_string())

        if self._update_result():
            return

        self.phase = Phase.AWAITING_OPPONENT
        self._schedule_opponent_turn()

    def reset_game(self) -> None:
        """Clear the board for a new match, keep the session score."""
        if self.phase == Phase.SELECTING_DIFFICULTY:
            raise GameStateError("Pick a difficulty before starting a match.")
        self.feedback.tap()
        self.feedback.vibrate(RESET_PULSE)
        self._start_match()

    def change_difficulty(self) -> None:
        """Back to picking a difficulty. A new difficulty means a new session, so scores start over."""
        self._invalidate_pending()
        self.board.clear()
        self.result = IN_PROGRESS
        self.difficulty = None
        self.scores = {Mark.PLAYER: 0, Mark.OPPONENT: 0}
        self.phase = Phase.SELECTING_DIFFICULTY

    def close(self) -> None:
        """The player navigated away. A scheduled opponent turn must not fire into a discarded match."""
        self._invalidate_pending()

    def to_model(self) -> TicTacToeModel:
        """Encode into a format the Service layer uses"""
        line = winning_line(self.board) if self.result.winner else None
        return TicTacToeModel(
            board=[cell.value if cell else None for cell in self.board.cells],
            phase=self.phase.name.lower(),
            difficulty=self.difficulty.value if self.difficulty else None,
            outcome=self.result.outcome.value,
            winner=self.result.winner.value if self.result.winner else None,
            winning_line=list(line) if line else None,
            scores={mark.value: score for mark, score in self.scores.items()},
        )

    # --- PRIVATE HELPERS ---
    def _start_match(self) -> None:
        self._invalidate_pending()
        self.board.clear()
        self.result = IN_PROGRESS
        self.phase = Phase.PLAYING

    def _invalidate_pending(self) -> None:
        self.generation += 1
        if self._pending is not None:
            self._pending.cancel()
            self._pending = None

    def _schedule_opponent_turn(self) -> None:
        generation = self.generation

        def opponent_turn() -> None:
            self._play_opponent_turn(generation)

        self._pending = self.scheduler.call_later(self.opponent_delay, opponent_turn)

    def _play_opponent_turn(self, generation: int) -> None:
        """Callback fired by the scheduler."""
        if generation != self.generation:
            logger.debug("Dropping opponent turn of match %d (now at %d)", generation, self.generation)
            return
        if self.phase != Phase.AWAITING_OPPONENT:
            raise InvariantViolationError(
                f"Opponent turn fired outside of AWAITING_OPPONENT. phase: {self.phase.name}"
            )
        # for the type checker: a match only starts once a difficulty was picked
        assert self.difficulty is not None

        self._pending = None
        cell = self.opponent.select_move(self.board, self.difficulty)
        self.board.place(cell, Mark.OPPONENT)
        self.feedback.tap()

        if self._update_result():
            return
        self.phase = Phase.PLAYING

    def _update_result(self) -> bool:
        """Recompute the result from the board. Returns True if the match just ended."""
        self.result = result(self.board)
        if not self.result.is_over:
            return False

        self.phase = Phase.GAME_OVER
        if self.result.winner is not None:
            self.scores[self.result.winner] += 1
            self.feedback.vibrate(WIN_PULSE)
        logger.info(
            "Tic-tac-toe match over: %s %s (score X %d - O %d)",
            self.result.outcome,
            self.result.winner or "",
            self.scores[Mark.PLAYER],
            self.scores[Mark.OPPONENT],
        )
        for listener in self._listeners:
            listener(self.result)
        return True
