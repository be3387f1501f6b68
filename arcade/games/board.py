"""
The tic-tac-toe board and the pure functions evaluating it (winner / draw / free cells).

Cells are indexed 0-8, row by row:

    0 | 1 | 2
    3 | 4 | 5
    6 | 7 | 8

A board can be written as a 9 character string, "X", "O" for the marks and "." for an empty cell
(ex. "X...O...." : X in the top-left corner, O in the center).
"""

from dataclasses import dataclass, field
from typing import Optional, Self

from arcade.core.exceptions import IllegalMoveError, InvariantViolationError
from arcade.core.shared_types import Mark, Outcome

BOARD_SIZE = 9
EMPTY_SYMBOL = "."

CENTER = 4
CORNERS = (0, 2, 6, 8)
EDGES = (1, 3, 5, 7)

# 3 rows, 3 columns, 2 diagonals
WINNING_LINES: tuple[tuple[int, int, int], ...] = (
    (0, 1, 2),
    (3, 4, 5),
    (6, 7, 8),
    (0, 3, 6),
    (1, 4, 7),
    (2, 5, 8),
    (0, 4, 8),
    (2, 4, 6),
)

Cell = Optional[Mark]


@dataclass(frozen=True)
class GameResult:
    """Derived from a board, never stored next to it."""

    outcome: Outcome
    winner: Optional[Mark] = None

    @property
    def is_over(self) -> bool:
        return self.outcome != Outcome.IN_PROGRESS


IN_PROGRESS = GameResult(Outcome.IN_PROGRESS)
DRAW = GameResult(Outcome.DRAW)


@dataclass
class Board:
    cells: list[Cell] = field(default_factory=lambda: [None] * BOARD_SIZE)

    @classmethod
    def from_string(cls, notation: str) -> Self:
        """Construct a board from its 9 character notation."""
        if len(notation) != BOARD_SIZE:
            raise ValueError(f"Board notation needs {BOARD_SIZE} characters, got {notation!r}")
        return cls([None if char == EMPTY_SYMBOL else Mark(char) for char in notation])

    def to_string(self) -> str:
        return "".join(EMPTY_SYMBOL if cell is None else cell.value for cell in self.cells)

    def __getitem__(self, index: int) -> Cell:
        return self.cells[index]

    def is_empty(self, index: int) -> bool:
        return self.cells[index] is None

    def count(self, mark: Mark) -> int:
        return sum(1 for cell in self.cells if cell == mark)

    def place(self, index: int, mark: Mark) -> None:
        """Put a mark on an empty cell."""
        if not 0 <= index < BOARD_SIZE:
            raise IllegalMoveError(f"Cell {index} is not on the board.")
        if not self.is_empty(index):
            raise IllegalMoveError(f"Cell {index} is already taken by {self.cells[index]}.")
        self.cells[index] = mark

    def undo(self, index: int) -> None:
        """Take a mark back off the board (used by the search on its scratch board)."""
        if self.is_empty(index):
            raise InvariantViolationError(f"Nothing to undo on empty cell {index}.")
        self.cells[index] = None

    def clear(self) -> None:
        self.cells = [None] * BOARD_SIZE

    def copy(self) -> "Board":
        return Board(list(self.cells))


# --- BOARD EVALUATION ---
def winning_line(board: Board) -> Optional[tuple[int, int, int]]:
    """The first triple holding three equal marks, if any."""
    for a, b, c in WINNING_LINES:
        if board[a] is not None and board[a] == board[b] == board[c]:
            return (a, b, c)
    return None


def winner(board: Board) -> Optional[Mark]:
    """
    NOTE on a board reached by alternating legal moves at most one mark can own a winning line,
    so the order in which the lines are checked does not matter.
    """
    line = winning_line(board)
    return board[line[0]] if line else None


def empty_cells(board: Board) -> list[int]:
    return [index for index, cell in enumerate(board.cells) if cell is None]


def is_draw(board: Board) -> bool:
    return winner(board) is None and not empty_cells(board)


def result(board: Board) -> GameResult:
    mark = winner(board)
    if mark is not None:
        return GameResult(Outcome.WIN, mark)
    if not empty_cells(board):
        return DRAW
    return IN_PROGRESS
