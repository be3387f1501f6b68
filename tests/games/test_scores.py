"""Unit tests for arcade/games/scores.py"""

from arcade.core.models import ScoreScope
from arcade.core.shared_types import GameName
from arcade.db.memory_repository import InMemoryScoreRepository
from arcade.games.scores import record_best

SCOPE = ScoreScope(GameName.MEMORY, "4x4")


def test_first_score_is_always_a_best() -> None:
    store = InMemoryScoreRepository()
    assert record_best(store, SCOPE, 30)
    assert store.get(SCOPE) == 30


def test_only_strictly_lower_replaces_the_best() -> None:
    store = InMemoryScoreRepository()
    record_best(store, SCOPE, 12)
    assert not record_best(store, SCOPE, 12)
    assert not record_best(store, SCOPE, 15)
    assert store.get(SCOPE) == 12
    assert record_best(store, SCOPE, 9)
    assert store.get(SCOPE) == 9


def test_scopes_are_independent() -> None:
    store = InMemoryScoreRepository()
    other = ScoreScope(GameName.NUMBER_GUESS, "8")
    record_best(store, SCOPE, 10)
    assert store.get(other) is None
    assert record_best(store, other, 20)
    assert store.get(SCOPE) == 10
