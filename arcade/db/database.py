"""Generate database session"""

from typing import Generator, Optional

from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import Session, sessionmaker

from arcade.core.config import Settings, configure_logging
from arcade.db.schema import Base


def build_engine(settings: Optional[Settings] = None) -> Engine:
    """Apply the logging settings, create the engine for the configured URL and make sure all tables exist."""
    settings = settings or Settings.from_env()
    configure_logging(settings)
    engine = create_engine(settings.database_url, echo=settings.log_level == "DEBUG")
    Base.metadata.create_all(bind=engine)
    return engine


def get_db(engine: Engine) -> Generator[Session, None, None]:
    session_local = sessionmaker(bind=engine)
    db = session_local()
    try:
        yield db
    finally:
        db.close()
