"""Database session management."""

from collections.abc import Generator
from contextlib import contextmanager
from pathlib import Path
from typing import Dict

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session as DBSession, sessionmaker

from competition.config import Settings
from competition.db.models import Base


# Engines and session factories cached per database URL
_engines: Dict[str, Engine] = {}
_factories: Dict[str, sessionmaker] = {}


def get_engine(settings: Settings) -> Engine:
    url = settings.database_url
    if url not in _engines:
        if url.startswith("sqlite"):
            db_file = url.split(":///", 1)[-1]
            if db_file and db_file != ":memory:" and url.startswith("sqlite:///"):
                Path(db_file).parent.mkdir(parents=True, exist_ok=True)
            _engines[url] = create_engine(url, connect_args={"check_same_thread": False})
        else:
            _engines[url] = create_engine(url)
    return _engines[url]


def get_session_factory(settings: Settings) -> sessionmaker:
    url = settings.database_url
    if url not in _factories:
        engine = get_engine(settings)
        _factories[url] = sessionmaker(autoflush=False, bind=engine)
    return _factories[url]


@contextmanager
def get_db(settings: Settings) -> Generator[DBSession, None, None]:
    """Yield a database session. Commits on success, rolls back on error."""
    factory = get_session_factory(settings)
    session = factory()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


def reset_engine() -> None:
    """Dispose cached engines and session factories. Use between tests for isolation."""
    for engine in _engines.values():
        engine.dispose()
    _engines.clear()
    _factories.clear()


def init_db(settings: Settings) -> None:
    """Create all tables."""
    engine = get_engine(settings)
    Base.metadata.create_all(bind=engine)
