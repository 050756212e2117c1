"""Grading service wrappers -- all return JSON-serializable dicts."""

from typing import Dict, List, Optional

from competition.config import Settings
from competition.db.session import get_db, init_db
from competition.leaderboard import compute_leaderboard, compute_question_stats
from competition.ledger import list_results, results_for_respondent
from competition.lock import GradingLock
from competition.question_bank import QuestionBank
from competition.runner import grade_submissions
from competition.submissions import Submission
from grading import Question, describe_resolution, grade_answer


def list_questions(bank: QuestionBank) -> Dict:
    questions = [q.to_dict() for q in bank.all_questions()]
    return {'count': len(questions), 'questions': questions}


def get_question(bank: QuestionBank, question_id: str) -> Dict:
    """Raises KeyError if question_id not found."""
    question = bank.get_question(question_id)
    if question is None:
        raise KeyError(f"Question not found: {question_id}")
    return question.to_dict()


def upsert_question(bank: QuestionBank, question_id: str, data: Dict) -> Dict:
    """Create or replace a question. Raises ValueError on invalid data."""
    question = Question.from_dict({**data, 'question_id': question_id})
    bank.upsert_question(question)
    return question.to_dict()


def delete_question(bank: QuestionBank, question_id: str) -> None:
    """Raises KeyError if question_id not found."""
    if not bank.delete_question(question_id):
        raise KeyError(f"Question not found: {question_id}")


def check_answer(bank: QuestionBank, question_id: str, answer: str) -> Dict:
    """
    Grade one answer without recording it.

    Returns:
        {question_id, is_correct, is_partial, earned_points, max_points,
         status, user_items, correct_items}

    Raises:
        KeyError if question_id not found.
    """
    question = bank.get_question(question_id)
    if question is None:
        raise KeyError(f"Question not found: {question_id}")
    result = grade_answer(question, answer)
    return {
        'question_id': question_id,
        **result.to_dict(),
        'max_points': question.points,
        **describe_resolution(question, answer),
    }


def run_grading(
    bank: QuestionBank,
    settings: Settings,
    lock: GradingLock,
    submissions: List[Dict],
) -> Dict:
    """Grade posted submissions. stats.skipped_busy is set if the lock was busy."""
    subs = [Submission.from_dict(s) for s in submissions]
    stats = grade_submissions(subs, bank, settings, lock=lock)
    return {'stats': stats.to_log_dict()}


def get_respondent_results(settings: Settings, respondent_id: str) -> Dict:
    """Raises KeyError if nothing is recorded for respondent_id."""
    init_db(settings)
    with get_db(settings) as db:
        results = results_for_respondent(db, respondent_id)
    if not results:
        raise KeyError(f"No graded responses for: {respondent_id}")
    return {
        'respondent_id': respondent_id,
        'total_points': sum(r['earned_points'] for r in results),
        'results': results,
    }


def _records(settings: Settings) -> List[Dict]:
    init_db(settings)
    with get_db(settings) as db:
        return list_results(db)


def get_leaderboard(settings: Settings, top: Optional[int] = None) -> Dict:
    if top is None:
        top = settings.leaderboard_size
    return {'rows': compute_leaderboard(_records(settings), top=top)}


def get_question_stats(settings: Settings) -> Dict:
    return {'questions': compute_question_stats(_records(settings))}
