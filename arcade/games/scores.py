"""Keeping the best score per (game, variant). Lower is better for every game that keeps one."""

import logging

from arcade.core.models import ScoreScope
from arcade.db.repository import ScoreRepository

logger = logging.getLogger(__name__)


def record_best(store: ScoreRepository, scope: ScoreScope, value: int) -> bool:
    """Store `value` if there is no record yet or it beats (is strictly lower than) the stored one."""
    current = store.get(scope)
    if current is not None and value >= current:
        return False
    store.set(scope, value)
    logger.info("New best score for %s: %d (was %s)", scope.key, value, current)
    return True
