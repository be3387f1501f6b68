"""Implementation of (Score)Repository kept in a plain dictionary. Lives as long as the process does."""

from arcade.core.models import ScoreScope


class InMemoryScoreRepository:
    def __init__(self) -> None:
        self._scores: dict[str, int] = {}

    def get(self, scope: ScoreScope) -> int | None:
        return self._scores.get(scope.key)

    def set(self, scope: ScoreScope, value: int) -> None:
        self._scores[scope.key] = value
