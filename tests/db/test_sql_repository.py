"""Unit tests for arcade/db/sql_repository.py"""

from sqlalchemy import select
from sqlalchemy.orm import Session

from arcade.core.models import ScoreRecord, ScoreScope
from arcade.core.shared_types import GameName
from arcade.db.schema import DBScore
from arcade.db.sql_repository import SQLScoreRepository
from arcade.games.scores import record_best

MEMORY_4X4 = ScoreScope(GameName.MEMORY, "4x4")
GUESS_100 = ScoreScope(GameName.NUMBER_GUESS, "100")


def test_get_unknown_scope(db_session_repo: Session) -> None:
    """
    Should return None if nothing was recorded under the scope.

    NOTE with an empty database, any scope is a valid test case.
    """
    repo = SQLScoreRepository(db_session_repo)
    assert repo.get(MEMORY_4X4) is None


def test_set_creates_a_record(db_session_repo: Session) -> None:
    repo = SQLScoreRepository(db_session_repo)
    repo.set(MEMORY_4X4, 12)
    assert repo.get(MEMORY_4X4) == 12

    # stored under the flattened key
    stored = db_session_repo.scalar(select(DBScore).where(DBScore.scope == "memory:4x4"))
    assert stored is not None
    assert stored.best_value == 12
    assert stored.created_at is not None


def test_set_overwrites_existing_record(db_session_repo: Session) -> None:
    repo = SQLScoreRepository(db_session_repo)
    repo.set(MEMORY_4X4, 12)
    repo.set(MEMORY_4X4, 9)
    assert repo.get(MEMORY_4X4) == 9
    assert len(db_session_repo.scalars(select(DBScore)).all()) == 1


def test_scopes_are_kept_apart(db_session_repo: Session) -> None:
    repo = SQLScoreRepository(db_session_repo)
    repo.set(MEMORY_4X4, 12)
    repo.set(GUESS_100, 5)
    assert repo.get(MEMORY_4X4) == 12
    assert repo.get(GUESS_100) == 5
    assert repo.get(ScoreScope(GameName.MEMORY, "4x6")) is None


def test_all_records(db_session_repo: Session) -> None:
    repo = SQLScoreRepository(db_session_repo)
    repo.set(GUESS_100, 5)
    repo.set(MEMORY_4X4, 12)
    assert repo.all_records() == [
        ScoreRecord(scope=MEMORY_4X4, best_value=12),
        ScoreRecord(scope=GUESS_100, best_value=5),
    ]


def test_delete(db_session_repo: Session) -> None:
    repo = SQLScoreRepository(db_session_repo)
    repo.set(MEMORY_4X4, 12)
    assert repo.delete(MEMORY_4X4)
    assert repo.get(MEMORY_4X4) is None
    assert not repo.delete(MEMORY_4X4)


def test_record_best_through_sql(db_session_repo: Session) -> None:
    """The best score logic works the same on top of the SQL store."""
    repo = SQLScoreRepository(db_session_repo)
    assert record_best(repo, MEMORY_4X4, 8)
    assert not record_best(repo, MEMORY_4X4, 10)
    assert repo.get(MEMORY_4X4) == 8


def test_records_survive_a_new_session(db_session_repo: Session) -> None:
    SQLScoreRepository(db_session_repo).set(GUESS_100, 7)
    db_session_repo.expire_all()
    assert SQLScoreRepository(db_session_repo).get(GUESS_100) == 7
