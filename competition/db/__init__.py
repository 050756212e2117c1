"""Database layer: SQLAlchemy models and session."""

from competition.db.models import Base, GradedResponse
from competition.db.session import get_db, init_db, reset_engine

__all__ = [
    "Base",
    "GradedResponse",
    "get_db",
    "init_db",
    "reset_engine",
]
