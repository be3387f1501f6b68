"""Implementation of (Score)Repository using SQLAlchemy"""

import logging

from sqlalchemy import select
from sqlalchemy.orm import Session

from arcade.core.models import ScoreRecord, ScoreScope
from arcade.db.schema import DBScore

logger = logging.getLogger(__name__)


class SQLScoreRepository:
    """Data stored using SQL / methods implemented using SQLAlchemy"""

    def __init__(self, db_session: Session) -> None:
        self.db = db_session

    def get(self, scope: ScoreScope) -> int | None:
        """Best value recorded under the scope, if any."""
        score_db = self._fetch_score(scope)
        return score_db.best_value if score_db else None

    def set(self, scope: ScoreScope, value: int) -> None:
        """Create or overwrite the record of the scope."""
        score_db = self._fetch_score(scope)
        if score_db is None:
            score_db = DBScore(scope=scope.key, best_value=value)
            self.db.add(score_db)
        else:
            score_db.best_value = value
        self.db.commit()
        logger.debug("Stored best score %d for %s", value, scope.key)

    def all_records(self) -> list[ScoreRecord]:
        """Every best score on record (for a high score screen)."""
        query = select(DBScore).order_by(DBScore.scope)
        return [self._to_model(score_db) for score_db in self.db.scalars(query)]

    def delete(self, scope: ScoreScope) -> bool:
        """Forget the best score of the scope. Returns False if there was none."""
        score_db = self._fetch_score(scope)
        if not score_db:
            return False
        self.db.delete(score_db)
        self.db.commit()
        return True

    def _fetch_score(self, scope: ScoreScope) -> DBScore | None:
        query = select(DBScore).where(DBScore.scope == scope.key)
        return self.db.scalar(query)

    def _to_model(self, score_db: DBScore) -> ScoreRecord:
        """Convert SQLAlchemy model to data transfer model."""
        return ScoreRecord(
            scope=ScoreScope.from_key(score_db.scope),
            best_value=score_db.best_value,
        )
