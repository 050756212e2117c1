"""Answer-grading core: normalization, multi-select resolution, correctness, partial credit."""

from grading.normalize import normalize
from grading.resolver import resolve_multi_select
from grading.evaluator import is_answer_correct
from grading.partial_credit import compute_partial_credit
from grading.models import GradingResult, Question, SubmittedAnswer
from grading.question_types import QuestionType
from grading.grader import describe_resolution, grade_answer

__all__ = [
    "normalize",
    "resolve_multi_select",
    "is_answer_correct",
    "compute_partial_credit",
    "GradingResult",
    "Question",
    "SubmittedAnswer",
    "QuestionType",
    "describe_resolution",
    "grade_answer",
]
