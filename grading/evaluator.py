"""Pass/fail correctness per question type."""

from typing import Iterable, List, Optional

from grading.normalize import normalize
from grading.question_types import QuestionType
from grading.resolver import resolve_multi_select


def _contains_all(items: List[str], pool: List[str]) -> bool:
    """True if every normalized item has an equal entry in pool."""
    keys = {normalize(p) for p in pool}
    return all(normalize(i) in keys for i in items)


def _scalar_correct(user: str, correct: str, correct_answer: str, qtype: QuestionType) -> bool:
    if user == correct:
        return True
    # Legacy single-choice keys list several acceptable answers separated by commas
    if qtype is QuestionType.SINGLE_CHOICE and ',' in correct_answer:
        parts = (normalize(part) for part in correct_answer.split(','))
        return any(part and user == part for part in parts)
    return False


def is_answer_correct(
    user_answer,
    correct_answer,
    question_type,
    options: Optional[Iterable] = None,
) -> bool:
    """
    Decide whether a submitted answer is fully correct.

    FreeText/SingleChoice compare normalized strings. MultiSelect resolves
    both sides against the same options and requires equal-size sets with
    symmetric containment. Missing or blank answers are never correct;
    unknown types grade as FreeText.

    A MultiSelect key that resolves to no options is never matched, even by
    an answer that also resolves to nothing, although two empty sets would
    otherwise pass the size and containment checks.
    """
    user = normalize(user_answer)
    correct = normalize(correct_answer)
    if not user or not correct:
        return False
    qtype = QuestionType.parse(question_type)

    if qtype is not QuestionType.MULTI_SELECT:
        return _scalar_correct(user, correct, str(correct_answer), qtype)

    options = list(options or [])
    user_items = resolve_multi_select(str(user_answer), options)
    correct_items = resolve_multi_select(str(correct_answer), options)
    if not correct_items or len(user_items) != len(correct_items):
        return False
    return _contains_all(user_items, correct_items) and _contains_all(correct_items, user_items)
