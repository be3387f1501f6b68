"""Requests and Response models"""

from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ValidationInfo, field_validator

from arcade.core.exceptions import InvalidRequestError
from arcade.core.shared_types import Difficulty, GameName, GridSize, Hint
from arcade.games.board import BOARD_SIZE
from arcade.games.number_guess import RANGE_OPTIONS

MarkName = str

VARIANTS: dict[GameName, list[str]] = {
    GameName.TICTACTOE: [difficulty.value for difficulty in Difficulty],
    GameName.MEMORY: [grid.value for grid in GridSize],
    GameName.NUMBER_GUESS: [str(option) for option in RANGE_OPTIONS],
}


# --- REQUEST MODELS ---
class SessionRequest(BaseModel):
    """Any request that only needs to point at a running session (reset, state, end, ...)."""

    session_id: UUID


class StartTicTacToeRequest(BaseModel):
    difficulty: Difficulty


class PlaceMarkRequest(BaseModel):
    session_id: UUID
    cell: int

    @field_validator("cell")
    @classmethod
    def validate_cell(cls, value: int) -> int:
        if not 0 <= value < BOARD_SIZE:
            raise InvalidRequestError(f"Cell must be between 0 and {BOARD_SIZE - 1}, got {value}.")
        return value


class SelectDifficultyRequest(BaseModel):
    session_id: UUID
    difficulty: Difficulty


class StartMemoryRequest(BaseModel):
    grid: GridSize = GridSize.SMALL


class FlipCardRequest(BaseModel):
    session_id: UUID
    card_id: int

    @field_validator("card_id")
    @classmethod
    def validate_card_id(cls, value: int) -> int:
        if value < 0:
            raise InvalidRequestError(f"Card id cannot be negative, got {value}.")
        return value


class StartNumberGuessRequest(BaseModel):
    max_value: int = 100

    @field_validator("max_value")
    @classmethod
    def validate_max_value(cls, value: int) -> int:
        if value not in RANGE_OPTIONS:
            raise InvalidRequestError(
                f"Range {value} not available. Pick one from {','.join(str(option) for option in RANGE_OPTIONS)}"
            )
        return value


class GuessRequest(BaseModel):
    session_id: UUID
    # NOTE floats are let through on purpose: the game itself rejects non-whole numbers as out of range
    value: int | float


class BestScoreRequest(BaseModel):
    game: GameName
    variant: str

    @field_validator("variant")
    @classmethod
    def validate_variant(cls, value: str, info: ValidationInfo) -> str:
        """The variant names the grid (memory), the range (number guess) or the difficulty (tic-tac-toe)."""
        game = info.data.get("game")
        if game is None:
            # game itself failed validation, pydantic reports that one
            return value
        allowed = VARIANTS[game]
        if value not in allowed:
            raise InvalidRequestError(f"Unknown variant {value!r} for {game}. Pick one from {','.join(allowed)}")
        return value


# --- RESPONSE MODELS ---
class TicTacToeResponse(BaseModel):
    session_id: UUID
    accepted: bool = True
    message: Optional[str] = None
    board: list[Optional[MarkName]]
    phase: str
    difficulty: Optional[Difficulty]
    outcome: str
    winner: Optional[MarkName]
    winning_line: Optional[list[int]]
    scores: dict[MarkName, int]


class MemoryResponse(BaseModel):
    session_id: UUID
    accepted: bool = True
    message: Optional[str] = None
    grid: Optional[GridSize]
    phase: str
    cards: list[Optional[str]]
    matched: list[int]
    face_up: list[int]
    moves: int
    best: Optional[int]


class AttemptResponse(BaseModel):
    value: int
    hint: Hint


class NumberGuessResponse(BaseModel):
    session_id: UUID
    accepted: bool = True
    message: Optional[str] = None
    max_value: int
    attempts: list[AttemptResponse]
    is_won: bool
    best: Optional[int]


class BestScoreResponse(BaseModel):
    game: GameName
    variant: str
    best_value: Optional[int]
