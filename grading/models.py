"""Data models for the grading core: Question, SubmittedAnswer, GradingResult."""

from dataclasses import dataclass, field, asdict
from typing import Dict, List, Optional

from grading.question_types import QuestionType


@dataclass
class Question:
    """
    A quiz question as the grader sees it.

    For MultiSelect, correct_answer is itself a comma-joined list of option
    texts. Options may contain commas; that is what the tokenizer untangles.
    """
    question_id: str
    question_type: str = QuestionType.FREE_TEXT.value
    options: List[Optional[str]] = field(default_factory=list)
    correct_answer: str = ''
    points: int = 1
    prompt: str = ''

    @property
    def qtype(self) -> QuestionType:
        return QuestionType.parse(self.question_type)

    @property
    def present_options(self) -> List[str]:
        """Options with absent (None/blank) slots dropped."""
        return [o for o in self.options if o and str(o).strip()]

    def to_dict(self) -> Dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict) -> 'Question':
        data = dict(data)
        if data.get('options') is None:
            data['options'] = []
        known = cls.__dataclass_fields__
        data = {k: v for k, v in data.items() if k in known}
        return cls(**data)


@dataclass
class SubmittedAnswer:
    """One respondent's raw answer to one question."""
    question_id: str
    answer: str = ''


@dataclass
class GradingResult:
    """Outcome of grading one answer. 0 <= earned_points <= question points."""
    is_correct: bool = False
    is_partial: bool = False
    earned_points: int = 0

    @property
    def status(self) -> str:
        """
        Ledger label. Any award short of a correct answer is "partial", which
        includes full points reached through substring containment.
        """
        if self.is_correct:
            return 'correct'
        if self.is_partial or self.earned_points > 0:
            return 'partial'
        return 'incorrect'

    def to_dict(self) -> Dict:
        d = asdict(self)
        d['status'] = self.status
        return d
