"""
Memory match: find all pairs of symbols by flipping two cards at a time.

Per pair check:

    IDLE -> (two cards face up) -> RESOLVING -> IDLE

A match starts in SELECTING_GRID and ends in COMPLETE once every card is matched.
"""

import logging
import random
from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional

from arcade.core.exceptions import GameStateError, IllegalMoveError, InvariantViolationError
from arcade.core.feedback import PAIR_PULSE, RESET_PULSE, ROUTINE_PULSE, Feedback, NullFeedback
from arcade.core.models import MemoryModel, ScoreScope
from arcade.core.scheduler import Handle, Scheduler
from arcade.core.shared_types import GameName, GridSize
from arcade.db.memory_repository import InMemoryScoreRepository
from arcade.db.repository import ScoreRepository
from arcade.games.scores import record_best

logger = logging.getLogger(__name__)

# Enough symbols for the largest grid (12 pairs)
SYMBOLS: tuple[str, ...] = (
    "🎮", "🎯", "🎲", "🎪", "🎨", "🎭", "🎸", "🎺", "🎹", "🎻", "🎳", "🏆",
)  # fmt: skip

DEFAULT_MATCH_DELAY = 0.5
DEFAULT_MISMATCH_DELAY = 1.0


class Phase(Enum):
    SELECTING_GRID = auto()
    IDLE = auto()
    RESOLVING = auto()
    COMPLETE = auto()


@dataclass
class MemoryCard:
    id: int
    symbol: str
    face_up: bool = False
    matched: bool = False


def build_deck(pair_count: int, rng: random.Random) -> list[MemoryCard]:
    """
    Two cards per symbol, shuffled.
    ---

    Random.shuffle is a Fisher-Yates shuffle: every ordering of the deck is equally likely.
    Card ids are the positions after shuffling.
    """
    if not 0 < pair_count <= len(SYMBOLS):
        raise GameStateError(f"Cannot deal {pair_count} pairs, there are only {len(SYMBOLS)} symbols.")
    symbols = list(SYMBOLS[:pair_count]) * 2
    rng.shuffle(symbols)
    return [MemoryCard(id=index, symbol=symbol) for index, symbol in enumerate(symbols)]


def scope_for(grid: GridSize) -> ScoreScope:
    """Best scores are kept per grid layout, the same name the player picks and sees (ex. '4x4')."""
    return ScoreScope(GameName.MEMORY, grid.value)


class MemoryMatchEngine:
    def __init__(
        self,
        scheduler: Scheduler,
        scores: Optional[ScoreRepository] = None,
        rng: Optional[random.Random] = None,
        feedback: Optional[Feedback] = None,
        match_delay: float = DEFAULT_MATCH_DELAY,
        mismatch_delay: float = DEFAULT_MISMATCH_DELAY,
    ) -> None:
        self.scheduler = scheduler
        self.scores = scores if scores is not None else InMemoryScoreRepository()
        self.rng = rng or random.Random()
        self.feedback = feedback or NullFeedback()
        self.match_delay = match_delay
        self.mismatch_delay = mismatch_delay

        self.grid: Optional[GridSize] = None
        self.cards: list[MemoryCard] = []
        self.face_up: list[int] = []
        self.moves = 0
        self.phase = Phase.SELECTING_GRID
        self.new_best = False

        self.generation = 0
        self._pending: Optional[Handle] = None

    @property
    def pair_count(self) -> int:
        return self.grid.pair_count if self.grid else 0

    @property
    def matched_pairs(self) -> int:
        return sum(1 for card in self.cards if card.matched) // 2

    @property
    def best(self) -> Optional[int]:
        return self.scores.get(scope_for(self.grid)) if self.grid else None

    # --- DOMAIN LAYER API CALLED BY SERVICE ---
    def select_grid(self, grid: GridSize) -> None:
        """Deal a freshly shuffled deck for the chosen grid and start counting moves from zero."""
        self._invalidate_pending()
        self.grid = grid
        self.cards = build_deck(grid.pair_count, self.rng)
        self.face_up = []
        self.moves = 0
        self.new_best = False
        self.phase = Phase.IDLE
        logger.info("Memory match dealt on a %s grid (%d pairs)", grid, grid.pair_count)

    def reset_game(self) -> None:
        """Play again on the same grid."""
        if self.grid is None:
            raise GameStateError("Select a grid before starting a match.")
        self.feedback.tap()
        self.feedback.vibrate(RESET_PULSE)
        self.select_grid(self.grid)

    def flip_card(self, card_id: int) -> None:
        """
        Turn a card face up.
        ----

        Rejected (IllegalMoveError, nothing changes) while two cards are waiting to be resolved,
        or when the card does not exist, is already face up or already matched.
        The second face-up card counts as one move and starts the resolution.
        """
        if self.phase == Phase.SELECTING_GRID:
            raise GameStateError("Select a grid before flipping cards.")
        if self.phase != Phase.IDLE:
            raise IllegalMoveError(f"Cannot flip a card right now. phase: {self.phase.name}")
        if not 0 <= card_id < len(self.cards):
            raise IllegalMoveError(f"There is no card {card_id}.")

        card = self.cards[card_id]
        if card.face_up or card.matched:
            raise IllegalMoveError(f"Card {card_id} is already face up.")

        card.face_up = True
        self.face_up.append(card_id)
        self.feedback.tap()
        self.feedback.vibrate(ROUTINE_PULSE)

        if len(self.face_up) == 2:
            self.moves += 1
            self.phase = Phase.RESOLVING
            self._schedule_resolution()

    def close(self) -> None:
        self._invalidate_pending()

    def to_model(self) -> MemoryModel:
        """Encode into a format the Service layer uses"""
        return MemoryModel(
            grid=self.grid.value if self.grid else None,
            phase=self.phase.name.lower(),
            cards=[card.symbol if card.face_up or card.matched else None for card in self.cards],
            matched=[card.id for card in self.cards if card.matched],
            face_up=list(self.face_up),
            moves=self.moves,
            best=self.best,
        )

    # --- PRIVATE HELPERS ---
    def _invalidate_pending(self) -> None:
        self.generation += 1
        if self._pending is not None:
            self._pending.cancel()
            self._pending = None

    def _schedule_resolution(self) -> None:
        first, second = (self.cards[card_id] for card_id in self.face_up)
        is_pair = first.symbol == second.symbol
        if is_pair:
            self.feedback.vibrate(PAIR_PULSE)

        generation = self.generation

        def resolve() -> None:
            self._resolve(generation, is_pair)

        delay = self.match_delay if is_pair else self.mismatch_delay
        self._pending = self.scheduler.call_later(delay, resolve)

    def _resolve(self, generation: int, is_pair: bool) -> None:
        """Callback fired by the scheduler: keep the pair or turn both cards back."""
        if generation != self.generation:
            logger.debug("Dropping resolution of deal %d (now at %d)", generation, self.generation)
            return
        if self.phase != Phase.RESOLVING or len(self.face_up) != 2:
            raise InvariantViolationError(
                f"Resolution fired with {len(self.face_up)} face-up cards. phase: {self.phase.name}"
            )

        self._pending = None
        for card_id in self.face_up:
            card = self.cards[card_id]
            if is_pair:
                card.matched = True
            else:
                card.face_up = False
        self.face_up = []

        if all(card.matched for card in self.cards):
            self._complete()
        else:
            self.phase = Phase.IDLE

    def _complete(self) -> None:
        # for the type checker: cards only exist once a grid was picked
        assert self.grid is not None

        self.phase = Phase.COMPLETE
        self.new_best = record_best(self.scores, scope_for(self.grid), self.moves)
        logger.info("Memory match on %s completed in %d moves", self.grid, self.moves)
