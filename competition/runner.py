"""Idempotent grading runs over form submissions."""

import logging
from dataclasses import asdict, dataclass
from typing import Dict, Iterable, Optional

from competition.config import Settings
from competition.db.session import get_db, init_db
from competition.ledger import is_graded, record_result
from competition.lock import GradingBusyError, GradingLock, default_lock
from competition.question_bank import QuestionBank
from competition.submissions import Submission, make_response_key
from grading import QuestionType, describe_resolution, grade_answer, resolve_multi_select

logger = logging.getLogger("quizarena.grading")


@dataclass
class GradingRunStats:
    """Counters for one grading run. No answer text."""

    submissions: int = 0
    answers_seen: int = 0
    already_graded: int = 0
    graded: int = 0
    correct: int = 0
    partial: int = 0
    incorrect: int = 0
    unanswered: int = 0
    unknown_question: int = 0
    integrity_warnings: int = 0
    points_awarded: int = 0
    skipped_busy: bool = False

    def to_log_dict(self) -> Dict:
        return asdict(self)


def check_question_integrity(question) -> Optional[str]:
    """Describe a data problem that makes the question ungradable, else None."""
    if not (question.correct_answer or '').strip():
        return "empty correct answer"
    if question.qtype is QuestionType.MULTI_SELECT:
        if not resolve_multi_select(question.correct_answer, question.present_options):
            return "correct answer resolves to no options"
    return None


def grade_submissions(
    submissions: Iterable[Submission],
    bank: QuestionBank,
    settings: Settings,
    lock: Optional[GradingLock] = None,
) -> GradingRunStats:
    """
    Grade every answer not already in the ledger.

    Safe to re-run: answers are keyed by (timestamp, respondent, question) and
    a key that is already recorded is left untouched. If another run holds the
    lock past settings.lock_timeout_s this run is skipped, not queued.
    Without an explicit lock, runs share the process-wide default lock.
    """
    stats = GradingRunStats()
    if lock is None:
        lock = default_lock()

    try:
        with lock.hold(settings.lock_timeout_s):
            _grade_locked(list(submissions), bank, settings, stats)
    except GradingBusyError:
        stats.skipped_busy = True
        logger.warning("Grading run skipped: another run is in progress")
        return stats

    logger.info("Grading run complete: %s", stats.to_log_dict())
    return stats


def _grade_locked(
    submissions: list,
    bank: QuestionBank,
    settings: Settings,
    stats: GradingRunStats,
) -> None:
    init_db(settings)
    warned = set()

    with get_db(settings) as db:
        for sub in submissions:
            stats.submissions += 1
            for item in sub.submitted_answers():
                stats.answers_seen += 1
                question_id, answer = item.question_id, item.answer
                question = bank.get_question(question_id)
                if question is None:
                    stats.unknown_question += 1
                    logger.debug("No question %s in bank; answer ignored", question_id)
                    continue

                key = make_response_key(sub.timestamp, sub.respondent_id, question_id)
                if is_graded(db, key):
                    stats.already_graded += 1
                    continue

                problem = check_question_integrity(question)
                if problem and question_id not in warned:
                    warned.add(question_id)
                    stats.integrity_warnings += 1
                    logger.warning("Question %s: %s; answers will score 0", question_id, problem)

                result = grade_answer(question, answer)
                resolved = describe_resolution(question, answer)
                recorded = record_result(
                    db,
                    response_key=key,
                    timestamp=sub.timestamp,
                    respondent_id=sub.respondent_id,
                    question_id=question_id,
                    answer=answer,
                    result=result,
                    max_points=question.points,
                    resolved_answer=resolved['user_items'],
                    resolved_correct=resolved['correct_items'],
                )
                if not recorded:
                    # Graded by a run in another process since the check above
                    stats.already_graded += 1
                    continue
                db.commit()

                if not (answer or '').strip():
                    stats.unanswered += 1
                stats.graded += 1
                stats.points_awarded += result.earned_points
                if result.status == 'correct':
                    stats.correct += 1
                elif result.status == 'partial':
                    stats.partial += 1
                else:
                    stats.incorrect += 1
