from uuid import UUID, uuid4

import pytest

from arcade.api.models import (
    BestScoreRequest,
    FlipCardRequest,
    GuessRequest,
    PlaceMarkRequest,
    StartMemoryRequest,
    StartNumberGuessRequest,
    StartTicTacToeRequest,
)
from arcade.core.exceptions import InvalidRequestError
from arcade.core.shared_types import Difficulty, GameName, GridSize


@pytest.fixture
def mock_id() -> UUID:
    return uuid4()


# -- Validation - StartTicTacToeRequest --
def test_difficulty_from_string() -> None:
    request = StartTicTacToeRequest(difficulty="hard")
    assert request.difficulty is Difficulty.HARD


# -- Validation - PlaceMarkRequest --
@pytest.mark.parametrize("cell", [0, 4, 8])
def test_valid_cells(mock_id: UUID, cell: int) -> None:
    request = PlaceMarkRequest(session_id=mock_id, cell=cell)
    assert request.cell == cell


@pytest.mark.parametrize("cell", [-1, 9, 100])
def test_invalid_cells(mock_id: UUID, cell: int) -> None:
    """Only cells 0..8 exist on the board."""
    with pytest.raises(InvalidRequestError):
        _ = PlaceMarkRequest(session_id=mock_id, cell=cell)


# -- Validation - memory requests --
def test_grid_defaults_to_smallest() -> None:
    assert StartMemoryRequest().grid is GridSize.SMALL
    assert StartMemoryRequest(grid="4x6").grid.pair_count == 12


def test_negative_card_id(mock_id: UUID) -> None:
    assert FlipCardRequest(session_id=mock_id, card_id=0).card_id == 0
    with pytest.raises(InvalidRequestError):
        _ = FlipCardRequest(session_id=mock_id, card_id=-3)


# -- Validation - number guess requests --
def test_default_range() -> None:
    assert StartNumberGuessRequest().max_value == 100


@pytest.mark.parametrize("max_value", [10, 50, 100])
def test_preset_ranges(max_value: int) -> None:
    assert StartNumberGuessRequest(max_value=max_value).max_value == max_value


@pytest.mark.parametrize("max_value", [0, 20, 1000])
def test_range_must_be_a_preset(max_value: int) -> None:
    with pytest.raises(InvalidRequestError):
        _ = StartNumberGuessRequest(max_value=max_value)


def test_guess_keeps_fractional_values(mock_id: UUID) -> None:
    """Out of range values (fractions included) are the game's business, not the request's."""
    assert GuessRequest(session_id=mock_id, value=42.5).value == 42.5
    assert GuessRequest(session_id=mock_id, value=500).value == 500


# -- Validation - BestScoreRequest --
@pytest.mark.parametrize(
    "game, variant",
    [
        (GameName.MEMORY, "4x4"),
        (GameName.MEMORY, GridSize.LARGE),
        (GameName.NUMBER_GUESS, "50"),
        (GameName.TICTACTOE, "hard"),
    ],
)
def test_valid_variants(game: GameName, variant: str) -> None:
    """Variants are named the way the player sees them: grid layout, range, difficulty."""
    assert BestScoreRequest(game=game, variant=variant).variant == variant


@pytest.mark.parametrize(
    "game, variant",
    [
        (GameName.MEMORY, "8"),  # pair count, not the grid
        (GameName.MEMORY, "5x5"),
        (GameName.NUMBER_GUESS, "4x4"),
        (GameName.NUMBER_GUESS, "20"),
        (GameName.TICTACTOE, "impossible"),
    ],
)
def test_invalid_variants(game: GameName, variant: str) -> None:
    with pytest.raises(InvalidRequestError):
        _ = BestScoreRequest(game=game, variant=variant)
