"""SQLAlchemy models for the grade ledger."""

from datetime import datetime

from sqlalchemy import DateTime, Integer, JSON, String, Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    pass


class GradedResponse(Base):
    """One graded answer. response_key makes re-grading a no-op."""

    __tablename__ = "graded_responses"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    response_key: Mapped[str] = mapped_column(String(64), unique=True, index=True, nullable=False)
    timestamp: Mapped[str] = mapped_column(String(64), nullable=False)
    respondent_id: Mapped[str] = mapped_column(String(255), index=True, nullable=False)
    question_id: Mapped[str] = mapped_column(String(128), index=True, nullable=False)
    answer: Mapped[str] = mapped_column(Text, default="")
    status: Mapped[str] = mapped_column(String(16), nullable=False)  # correct | partial | incorrect
    earned_points: Mapped[int] = mapped_column(Integer, default=0)
    max_points: Mapped[int] = mapped_column(Integer, default=0)
    resolved_answer: Mapped[list | None] = mapped_column(JSON, nullable=True)
    resolved_correct: Mapped[list | None] = mapped_column(JSON, nullable=True)
    graded_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=datetime.utcnow)
