"""Grade ledger: durable record of every graded answer, keyed for idempotence."""

from typing import Dict, List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session as DBSession

from competition.db.models import GradedResponse
from grading.models import GradingResult
from grading.normalize import normalize


def record_to_dict(row: GradedResponse) -> Dict:
    """Plain-data view of a ledger row."""
    return {
        'response_key': row.response_key,
        'timestamp': row.timestamp,
        'respondent_id': row.respondent_id,
        'question_id': row.question_id,
        'answer': row.answer,
        'status': row.status,
        'earned_points': row.earned_points,
        'max_points': row.max_points,
        'resolved_answer': list(row.resolved_answer or []),
        'resolved_correct': list(row.resolved_correct or []),
        'graded_at': row.graded_at.isoformat() if row.graded_at else None,
    }


def is_graded(db: DBSession, response_key: str) -> bool:
    return db.query(GradedResponse.id).filter(
        GradedResponse.response_key == response_key,
    ).first() is not None


def record_result(
    db: DBSession,
    response_key: str,
    timestamp: str,
    respondent_id: str,
    question_id: str,
    answer: str,
    result: GradingResult,
    max_points: int,
    resolved_answer: Optional[List[str]] = None,
    resolved_correct: Optional[List[str]] = None,
) -> bool:
    """
    Store a graded answer. Returns False (and changes nothing) if the key
    was already recorded.

    A key inserted by another process between the check and the flush is
    also reported as False; the session is rolled back, so callers commit
    each recorded answer before the next.
    """
    if is_graded(db, response_key):
        return False
    db.add(GradedResponse(
        response_key=response_key,
        timestamp=timestamp,
        respondent_id=respondent_id,
        question_id=question_id,
        answer=answer or '',
        status=result.status,
        earned_points=result.earned_points,
        max_points=max_points,
        resolved_answer=list(resolved_answer or []),
        resolved_correct=list(resolved_correct or []),
    ))
    try:
        db.flush()
    except IntegrityError:
        db.rollback()
        return False
    return True


def list_results(db: DBSession, question_id: Optional[str] = None) -> List[Dict]:
    """All recorded grades, oldest first, optionally for one question."""
    q = db.query(GradedResponse)
    if question_id is not None:
        q = q.filter(GradedResponse.question_id == question_id)
    return [record_to_dict(r) for r in q.order_by(GradedResponse.id).all()]


def results_for_respondent(db: DBSession, respondent_id: str) -> List[Dict]:
    """Every grade recorded for one respondent, matching ids case-insensitively."""
    wanted = normalize(respondent_id)
    rows = db.query(GradedResponse).order_by(GradedResponse.id).all()
    return [record_to_dict(r) for r in rows if normalize(r.respondent_id) == wanted]
