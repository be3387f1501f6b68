"""
Number guess: find the secret in [1, max] with as few attempts as possible, guided by higher / lower hints.
"""

import logging
import random
from dataclasses import dataclass
from typing import Optional

from arcade.core.exceptions import GameStateError, IllegalMoveError, OutOfRangeError
from arcade.core.feedback import GUESS_WIN_PULSE, RESET_PULSE, ROUTINE_PULSE, Feedback, NullFeedback
from arcade.core.models import NumberGuessModel, ScoreScope
from arcade.core.shared_types import GameName, Hint
from arcade.db.memory_repository import InMemoryScoreRepository
from arcade.db.repository import ScoreRepository
from arcade.games.scores import record_best

logger = logging.getLogger(__name__)

RANGE_OPTIONS = (10, 50, 100)
DEFAULT_MAX = 100


@dataclass(frozen=True)
class GuessAttempt:
    value: int
    hint: Hint


def hint_for(value: int, secret: int) -> Hint:
    """Tell where the secret lies relative to the guess."""
    if value == secret:
        return Hint.CORRECT
    return Hint.LOWER if secret < value else Hint.HIGHER


def scope_for(max_value: int) -> ScoreScope:
    return ScoreScope(GameName.NUMBER_GUESS, str(max_value))


class NumberGuessEngine:
    def __init__(
        self,
        scores: Optional[ScoreRepository] = None,
        rng: Optional[random.Random] = None,
        feedback: Optional[Feedback] = None,
        max_value: int = DEFAULT_MAX,
    ) -> None:
        self.scores = scores if scores is not None else InMemoryScoreRepository()
        self.rng = rng or random.Random()
        self.feedback = feedback or NullFeedback()

        self.max_value = DEFAULT_MAX
        self._secret = 0
        self.attempts: list[GuessAttempt] = []
        self.new_best = False
        self.select_range(max_value)

    @property
    def is_won(self) -> bool:
        return bool(self.attempts) and self.attempts[-1].hint == Hint.CORRECT

    @property
    def best(self) -> Optional[int]:
        return self.scores.get(scope_for(self.max_value))

    # --- DOMAIN LAYER API CALLED BY SERVICE ---
    def select_range(self, max_value: int) -> None:
        """Draw a new secret uniformly from [1, max_value] and forget earlier attempts."""
        if isinstance(max_value, bool) or not isinstance(max_value, int) or max_value < 1:
            raise GameStateError(f"Range must be a positive integer, got {max_value!r}")
        self.max_value = max_value
        self._secret = self.rng.randint(1, max_value)
        self.attempts = []
        self.new_best = False
        logger.debug("Number guess started on [1, %d]", max_value)

    def reset_game(self) -> None:
        """Play again on the same range."""
        self.feedback.tap()
        self.feedback.vibrate(RESET_PULSE)
        self.select_range(self.max_value)

    def guess(self, value: int) -> GuessAttempt:
        """
        Record a guess and its hint.
        ----

        Integers outside [1, max] (and anything that is not an integer) are rejected with OutOfRangeError
        and do not count as an attempt. Guessing after the secret was found is an IllegalMoveError.
        """
        if self.is_won:
            raise IllegalMoveError("The number was already found. Start a new game.")

        number = self._validate(value)
        attempt = GuessAttempt(number, hint_for(number, self._secret))
        self.attempts.append(attempt)
        self.feedback.tap()
        self.feedback.vibrate(ROUTINE_PULSE)

        if attempt.hint == Hint.CORRECT:
            self.feedback.vibrate(GUESS_WIN_PULSE)
            self.new_best = record_best(self.scores, scope_for(self.max_value), len(self.attempts))
            logger.info("Number %d found in %d attempts", number, len(self.attempts))
        return attempt

    def to_model(self) -> NumberGuessModel:
        """Encode into a format the Service layer uses"""
        return NumberGuessModel(
            max_value=self.max_value,
            attempts=[(attempt.value, attempt.hint.value) for attempt in self.attempts],
            is_won=self.is_won,
            best=self.best,
        )

    # --- PRIVATE HELPERS ---
    def _validate(self, value: int | float) -> int:
        # bool is a subclass of int, but True is not a guess
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise OutOfRangeError(f"Guess must be a whole number, got {value!r}")
        if isinstance(value, float):
            if not value.is_integer():
                raise OutOfRangeError(f"Guess must be a whole number, got {value!r}")
            value = int(value)
        if not 1 <= value <= self.max_value:
            raise OutOfRangeError(f"Guess must lie between 1 and {self.max_value}, got {value}")
        return value
