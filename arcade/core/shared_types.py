"""
Type definitions used across layers
"""

from enum import StrEnum


class GameName(StrEnum):
    TICTACTOE = "tictactoe"
    MEMORY = "memory"
    NUMBER_GUESS = "number_guess"


class Difficulty(StrEnum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


class Mark(StrEnum):
    """The two marks on a tic-tac-toe board. The human always plays X and moves first."""

    PLAYER = "X"
    OPPONENT = "O"

    @property
    def other(self) -> "Mark":
        return Mark.OPPONENT if self == Mark.PLAYER else Mark.PLAYER


class Outcome(StrEnum):
    IN_PROGRESS = "in progress"
    WIN = "win"
    DRAW = "draw"


class Hint(StrEnum):
    """Where the secret lies relative to the guessed value."""

    LOWER = "lower"
    HIGHER = "higher"
    CORRECT = "correct"


class GridSize(StrEnum):
    """Memory match grid variants. Values are the (columns x rows) layout shown to the player."""

    SMALL = "4x4"
    MEDIUM = "4x5"
    LARGE = "4x6"

    @property
    def pair_count(self) -> int:
        columns, rows = (int(n) for n in self.value.split("x"))
        return columns * rows // 2
