"""Protocol repository (can implement later for SQL Alchemy / simple key-value store etc.)"""

from typing import Protocol

from arcade.core.models import ScoreScope


class ScoreRepository(Protocol):
    """Persistence of the best score per (game, variant)."""

    def get(self, scope: ScoreScope) -> int | None:
        """Best value recorded under the scope, if any."""
        ...

    def set(self, scope: ScoreScope, value: int) -> None:
        """Create or overwrite the record of the scope."""
        ...
