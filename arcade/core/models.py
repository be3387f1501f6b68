"""
Data passed across layer boundaries.

Engines hand these snapshots to the Service, and the Service turns them into API responses.
None of them carries engine internals (the memory deck order, the secret number).
"""

from dataclasses import dataclass
from typing import Optional, Self

from arcade.core.shared_types import GameName

# Type aliases to make the snapshots easier to read
CellValue = Optional[str]
CardSymbol = Optional[str]


@dataclass(frozen=True)
class ScoreScope:
    """The (game, variant) key under which a best score is persisted."""

    game: GameName
    variant: str

    @property
    def key(self) -> str:
        return f"{self.game}:{self.variant}"

    @classmethod
    def from_key(cls, key: str) -> Self:
        game, variant = key.split(":", maxsplit=1)
        return cls(GameName(game), variant)


@dataclass
class ScoreRecord:
    scope: ScoreScope
    best_value: int


@dataclass
class TicTacToeModel:
    """Transport-safe snapshot of a tic-tac-toe match."""

    board: list[CellValue]
    phase: str
    difficulty: Optional[str]
    outcome: str
    winner: Optional[str]
    winning_line: Optional[list[int]]
    scores: dict[str, int]


@dataclass
class MemoryModel:
    """Transport-safe snapshot of a memory match. Face-down cards hide their symbol."""

    grid: Optional[str]
    phase: str
    cards: list[CardSymbol]
    matched: list[int]
    face_up: list[int]
    moves: int
    best: Optional[int]


@dataclass
class NumberGuessModel:
    """Transport-safe snapshot of a number guess match. The secret never leaves the domain layer."""

    max_value: int
    attempts: list[tuple[int, str]]
    is_won: bool
    best: Optional[int]
