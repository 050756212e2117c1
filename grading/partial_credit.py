"""Proportional partial credit for multi-select questions."""

import math
from typing import Iterable, List, Optional

from grading.normalize import normalize
from grading.question_types import QuestionType
from grading.resolver import resolve_multi_select


def _matches_any(item: str, pool: List[str]) -> bool:
    """Equality or substring containment either way, case-insensitive."""
    key = normalize(item)
    for p in pool:
        other = normalize(p)
        if key == other or key in other or other in key:
            return True
    return False


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def compute_partial_credit(
    user_answer,
    correct_answer,
    question_type,
    total_points,
    options: Optional[Iterable] = None,
) -> int:
    """
    Points earned for a multi-select answer.

    Each correct selection earns total_points / len(correct options); each
    incorrect selection deducts the same share. The result is floored at 0,
    rounded half up and capped at total_points. Other question types and
    unresolvable correct answers give 0.
    """
    if QuestionType.parse(question_type) is not QuestionType.MULTI_SELECT:
        return 0
    if not user_answer or not correct_answer:
        return 0
    try:
        total = float(total_points)
    except (TypeError, ValueError):
        return 0
    if total <= 0:
        return 0

    options = list(options or [])
    user_items = resolve_multi_select(str(user_answer), options)
    correct_items = resolve_multi_select(str(correct_answer), options)
    if not correct_items:
        return 0

    correct_count = sum(1 for u in user_items if _matches_any(u, correct_items))
    incorrect_count = len(user_items) - correct_count

    per_item = total / len(correct_items)
    earned = max(0.0, correct_count * per_item - incorrect_count * per_item)
    return min(_round_half_up(earned), int(total))
