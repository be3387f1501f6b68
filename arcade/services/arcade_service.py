"""Orchestration of communication from API models to the game engines and persistence layer (and the reverse direction)."""

import logging
import random
from typing import Optional, TypeVar
from uuid import UUID, uuid4

from arcade.api.models import (
    AttemptResponse,
    BestScoreRequest,
    BestScoreResponse,
    FlipCardRequest,
    GuessRequest,
    MemoryResponse,
    NumberGuessResponse,
    PlaceMarkRequest,
    SelectDifficultyRequest,
    SessionRequest,
    StartMemoryRequest,
    StartNumberGuessRequest,
    StartTicTacToeRequest,
    TicTacToeResponse,
)
from arcade.core.config import Settings
from arcade.core.exceptions import GameStateError, IllegalMoveError, OutOfRangeError, RepositoryError
from arcade.core.feedback import BACK_PULSE, Feedback, FeedbackSettings, GatedFeedback, NullFeedback
from arcade.core.models import ScoreScope
from arcade.core.scheduler import Scheduler
from arcade.db.repository import ScoreRepository
from arcade.games.memory import MemoryMatchEngine
from arcade.games.number_guess import NumberGuessEngine
from arcade.games.opponent import AIOpponent
from arcade.games.tictactoe import TicTacToeEngine

logger = logging.getLogger(__name__)

Engine = TicTacToeEngine | MemoryMatchEngine | NumberGuessEngine
EngineT = TypeVar("EngineT", TicTacToeEngine, MemoryMatchEngine, NumberGuessEngine)

# Rejections a player can cause by tapping at the wrong moment. They are reported back, not raised.
REJECTIONS = (IllegalMoveError, OutOfRangeError)


class ArcadeService:
    """Orchestration of layers for the arcade. Keeps every running match in memory under a session ID."""

    def __init__(
        self,
        repository: ScoreRepository,
        scheduler: Scheduler,
        feedback: Optional[Feedback] = None,
        settings: Optional[Settings] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.repo = repository
        self.scheduler = scheduler
        self.settings = settings or Settings()
        self.feedback_settings = FeedbackSettings(
            sound_enabled=self.settings.sound_enabled,
            vibration_enabled=self.settings.vibration_enabled,
        )
        self.feedback = GatedFeedback(feedback or NullFeedback(), self.feedback_settings)
        self.rng = rng or random.Random()
        self.sessions: dict[UUID, Engine] = {}

    # -- Tic-tac-toe --
    def start_tictactoe(self, request: StartTicTacToeRequest) -> TicTacToeResponse:
        """Open a session against the opponent at the requested difficulty."""
        engine = TicTacToeEngine(
            scheduler=self.scheduler,
            opponent=AIOpponent(rng=self.rng),
            feedback=self.feedback,
            opponent_delay=self.settings.opponent_delay,
        )
        engine.select_difficulty(request.difficulty)
        session_id = self._register(engine)
        return self._tictactoe_response(session_id, engine)

    def place_mark(self, request: PlaceMarkRequest) -> TicTacToeResponse:
        engine = self._fetch_as(request.session_id, TicTacToeEngine)
        try:
            engine.place_mark(request.cell)
        except REJECTIONS as error:
            return self._tictactoe_response(request.session_id, engine, rejection=error)
        return self._tictactoe_response(request.session_id, engine)

    def reset_tictactoe(self, request: SessionRequest) -> TicTacToeResponse:
        engine = self._fetch_as(request.session_id, TicTacToeEngine)
        engine.reset_game()
        return self._tictactoe_response(request.session_id, engine)

    def change_difficulty(self, request: SelectDifficultyRequest) -> TicTacToeResponse:
        """Switching difficulty starts a fresh session: scores back to zero."""
        engine = self._fetch_as(request.session_id, TicTacToeEngine)
        engine.change_difficulty()
        engine.select_difficulty(request.difficulty)
        return self._tictactoe_response(request.session_id, engine)

    # -- Memory match --
    def start_memory(self, request: StartMemoryRequest) -> MemoryResponse:
        engine = MemoryMatchEngine(
            scheduler=self.scheduler,
            scores=self.repo,
            rng=self.rng,
            feedback=self.feedback,
            match_delay=self.settings.match_delay,
            mismatch_delay=self.settings.mismatch_delay,
        )
        engine.select_grid(request.grid)
        session_id = self._register(engine)
        return self._memory_response(session_id, engine)

    def flip_card(self, request: FlipCardRequest) -> MemoryResponse:
        engine = self._fetch_as(request.session_id, MemoryMatchEngine)
        try:
            engine.flip_card(request.card_id)
        except REJECTIONS as error:
            return self._memory_response(request.session_id, engine, rejection=error)
        return self._memory_response(request.session_id, engine)

    def reset_memory(self, request: SessionRequest) -> MemoryResponse:
        engine = self._fetch_as(request.session_id, MemoryMatchEngine)
        engine.reset_game()
        return self._memory_response(request.session_id, engine)

    # -- Number guess --
    def start_number_guess(self, request: StartNumberGuessRequest) -> NumberGuessResponse:
        engine = NumberGuessEngine(
            scores=self.repo,
            rng=self.rng,
            feedback=self.feedback,
            max_value=request.max_value,
        )
        session_id = self._register(engine)
        return self._number_guess_response(session_id, engine)

    def guess(self, request: GuessRequest) -> NumberGuessResponse:
        engine = self._fetch_as(request.session_id, NumberGuessEngine)
        try:
            engine.guess(request.value)
        except REJECTIONS as error:
            return self._number_guess_response(request.session_id, engine, rejection=error)
        return self._number_guess_response(request.session_id, engine)

    def reset_number_guess(self, request: SessionRequest) -> NumberGuessResponse:
        engine = self._fetch_as(request.session_id, NumberGuessEngine)
        engine.reset_game()
        return self._number_guess_response(request.session_id, engine)

    # -- Shared --
    def get_state(
        self, request: SessionRequest
    ) -> TicTacToeResponse | MemoryResponse | NumberGuessResponse:
        """
        Retrieve current state of any session.
        ----
        Used in "polling" loop by the frontend, ex. to see when the opponent has moved or a pair got resolved.
        """
        engine = self._fetch(request.session_id)
        if isinstance(engine, TicTacToeEngine):
            return self._tictactoe_response(request.session_id, engine)
        if isinstance(engine, MemoryMatchEngine):
            return self._memory_response(request.session_id, engine)
        return self._number_guess_response(request.session_id, engine)

    def end_session(self, request: SessionRequest) -> None:
        """Navigating away: drop the match. Pending callbacks of the match get invalidated."""
        engine = self._fetch(request.session_id)
        if not isinstance(engine, NumberGuessEngine):
            engine.close()
        del self.sessions[request.session_id]
        self.feedback.tap()
        self.feedback.vibrate(BACK_PULSE)
        logger.debug("Session %s ended", request.session_id)

    def best_score(self, request: BestScoreRequest) -> BestScoreResponse:
        scope = ScoreScope(request.game, request.variant)
        return BestScoreResponse(
            game=request.game,
            variant=request.variant,
            best_value=self.repo.get(scope),
        )

    # -- Internal helpers --
    def _register(self, engine: Engine) -> UUID:
        session_id = uuid4()
        self.sessions[session_id] = engine
        logger.debug("Session %s opened for %s", session_id, type(engine).__name__)
        return session_id

    def _fetch(self, session_id: UUID) -> Engine:
        """Attempt to find the session and raise error if it fails."""
        engine = self.sessions.get(session_id)
        if engine is None:
            raise RepositoryError(f"Session with {session_id=} not found.")
        return engine

    def _fetch_as(self, session_id: UUID, kind: type[EngineT]) -> EngineT:
        """Same as _fetch, but the session must also be playing the expected game."""
        engine = self._fetch(session_id)
        if not isinstance(engine, kind):
            raise GameStateError(
                f"Session {session_id} plays {type(engine).__name__}, not {kind.__name__}."
            )
        return engine

    def _rejection_message(self, error: Optional[Exception]) -> Optional[str]:
        if error is None:
            return None
        logger.debug("Rejected: %s", error)
        return str(error)

    def _tictactoe_response(
        self, session_id: UUID, engine: TicTacToeEngine, rejection: Optional[Exception] = None
    ) -> TicTacToeResponse:
        model = engine.to_model()
        return TicTacToeResponse(
            session_id=session_id,
            accepted=rejection is None,
            message=self._rejection_message(rejection),
            board=model.board,
            phase=model.phase,
            difficulty=model.difficulty,
            outcome=model.outcome,
            winner=model.winner,
            winning_line=model.winning_line,
            scores=model.scores,
        )

    def _memory_response(
        self, session_id: UUID, engine: MemoryMatchEngine, rejection: Optional[Exception] = None
    ) -> MemoryResponse:
        model = engine.to_model()
        return MemoryResponse(
            session_id=session_id,
            accepted=rejection is None,
            message=self._rejection_message(rejection),
            grid=model.grid,
            phase=model.phase,
            cards=model.cards,
            matched=model.matched,
            face_up=model.face_up,
            moves=model.moves,
            best=model.best,
        )

    def _number_guess_response(
        self, session_id: UUID, engine: NumberGuessEngine, rejection: Optional[Exception] = None
    ) -> NumberGuessResponse:
        model = engine.to_model()
        return NumberGuessResponse(
            session_id=session_id,
            accepted=rejection is None,
            message=self._rejection_message(rejection),
            max_value=model.max_value,
            attempts=[AttemptResponse(value=value, hint=hint) for value, hint in model.attempts],
            is_won=model.is_won,
            best=model.best,
        )

