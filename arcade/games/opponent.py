"""
The artificial opponent for tic-tac-toe. Three difficulty tiers:

* EASY: random free cell.
* MEDIUM: a coin flip between EASY and a short list of rules of thumb.
* HARD: exhaustive minimax. Cannot be beaten.

Every random choice goes through `self.rng`, so seeding it makes a match fully reproducible.
"""

import logging
import random
from typing import Callable, Optional

from arcade.core.exceptions import InvariantViolationError
from arcade.core.shared_types import Difficulty, Mark
from arcade.games.board import CENTER, CORNERS, Board, empty_cells, winner

logger = logging.getLogger(__name__)

WIN_SCORE = 10
MEDIUM_RANDOM_CHANCE = 0.5

MoveStrategy = Callable[[Board], int]


class AIOpponent:
    def __init__(
        self,
        rng: Optional[random.Random] = None,
        mark: Mark = Mark.OPPONENT,
    ) -> None:
        self.rng = rng or random.Random()
        self.mark = mark
        self.human = mark.other
        self.positions_evaluated = 0
        self._strategies: dict[Difficulty, MoveStrategy] = {
            Difficulty.EASY: self._easy_move,
            Difficulty.MEDIUM: self._medium_move,
            Difficulty.HARD: self._hard_move,
        }

    def select_move(self, board: Board, difficulty: Difficulty) -> int:
        """
        Pick the cell to play.
        ----

        Only to be called when it is the opponent's turn and the game is not over.
        A board without a free cell means the caller scheduled the turn wrongly.
        """
        if winner(board) is not None or not empty_cells(board):
            raise InvariantViolationError(
                f"Opponent asked to move on a finished board: {board.to_string()!r}"
            )
        move = self._strategies[difficulty](board)
        logger.debug("Opponent (%s) plays cell %d on %r", difficulty, move, board.to_string())
        return move

    # --- EASY ---
    def _easy_move(self, board: Board) -> int:
        return self.rng.choice(empty_cells(board))

    # --- MEDIUM ---
    def _medium_move(self, board: Board) -> int:
        """
        Half of the time just play EASY. Otherwise, in strict order:

        1. win right now
        2. block the human from winning right now
        3. take the center
        4. take a random free corner
        5. take a random free cell
        """
        if self.rng.random() < MEDIUM_RANDOM_CHANCE:
            return self._easy_move(board)

        winning = self.winning_cells(board, self.mark)
        if winning:
            return self.rng.choice(winning)

        blocking = self.winning_cells(board, self.human)
        if blocking:
            return self.rng.choice(blocking)

        if board.is_empty(CENTER):
            return CENTER

        free_corners = [cell for cell in CORNERS if board.is_empty(cell)]
        if free_corners:
            return self.rng.choice(free_corners)

        return self._easy_move(board)

    def winning_cells(self, board: Board, mark: Mark) -> list[int]:
        """Free cells that would complete a line for `mark`."""
        scratch = board.copy()
        cells: list[int] = []
        for cell in empty_cells(scratch):
            scratch.place(cell, mark)
            if winner(scratch) == mark:
                cells.append(cell)
            scratch.undo(cell)
        return cells

    # --- HARD ---
    def _hard_move(self, board: Board) -> int:
        return self.rng.choice(self.best_moves(board))

    def best_moves(self, board: Board) -> list[int]:
        """
        All moves sharing the highest minimax value.
        ----

        The search runs on one scratch copy of the board: place a trial mark, recurse, take it back.
        """
        self.positions_evaluated = 0
        scratch = board.copy()
        best_score: Optional[int] = None
        best: list[int] = []
        for cell in empty_cells(scratch):
            scratch.place(cell, self.mark)
            score = self._minimax(scratch, depth=0, maximizing=False)
            scratch.undo(cell)

            if best_score is None or score > best_score:
                best_score = score
                best = [cell]
            elif score == best_score:
                best.append(cell)

        logger.debug(
            "Minimax evaluated %d positions, best score %s for cells %s",
            self.positions_evaluated,
            best_score,
            best,
        )
        return best

    def _minimax(self, board: Board, depth: int, maximizing: bool) -> int:
        """
        Value of the position for the opponent.
        ---

        * opponent won: 10 - depth (prefer the fastest win)
        * human won: depth - 10 (prefer the slowest loss)
        * draw: 0
        """
        self.positions_evaluated += 1

        mark_that_won = winner(board)
        if mark_that_won == self.mark:
            return WIN_SCORE - depth
        if mark_that_won == self.human:
            return depth - WIN_SCORE

        free = empty_cells(board)
        if not free:
            return 0

        mark = self.mark if maximizing else self.human
        scores: list[int] = []
        for cell in free:
            board.place(cell, mark)
            scores.append(self._minimax(board, depth + 1, not maximizing))
            board.undo(cell)
        return max(scores) if maximizing else min(scores)
