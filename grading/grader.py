"""Grade one submitted answer against its question."""

from typing import Dict

from grading.evaluator import is_answer_correct
from grading.models import GradingResult, Question
from grading.partial_credit import compute_partial_credit
from grading.question_types import QuestionType
from grading.resolver import resolve_multi_select


def grade_answer(question: Question, answer: str) -> GradingResult:
    """
    Combine correctness and partial credit into a GradingResult.

    A correct answer earns the full point value. An incorrect MultiSelect
    answer may still earn partial credit; everything else earns 0.
    """
    points = max(0, int(question.points or 0))
    options = question.present_options

    if is_answer_correct(answer, question.correct_answer, question.question_type, options):
        return GradingResult(is_correct=True, is_partial=False, earned_points=points)

    if question.qtype is not QuestionType.MULTI_SELECT:
        return GradingResult()

    earned = compute_partial_credit(
        answer, question.correct_answer, question.question_type, points, options,
    )
    return GradingResult(
        is_correct=False,
        is_partial=0 < earned < points,
        earned_points=earned,
    )


def describe_resolution(question: Question, answer: str) -> Dict:
    """
    Resolved option lists for display alongside a grade.

    Returns:
        {'user_items': [...], 'correct_items': [...]}; scalar question types
        report the trimmed raw strings.
    """
    if question.qtype is QuestionType.MULTI_SELECT:
        options = question.present_options
        return {
            'user_items': resolve_multi_select(answer, options),
            'correct_items': resolve_multi_select(question.correct_answer, options),
        }
    user = (answer or '').strip()
    correct = (question.correct_answer or '').strip()
    return {
        'user_items': [user] if user else [],
        'correct_items': [correct] if correct else [],
    }
