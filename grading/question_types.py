"""Question type enumeration for the grading core."""

import re
from enum import Enum

from grading.normalize import normalize


class QuestionType(str, Enum):
    """Types of quiz questions the grader understands."""
    SINGLE_CHOICE = "SingleChoice"
    MULTI_SELECT = "MultiSelect"
    FREE_TEXT = "FreeText"

    @classmethod
    def parse(cls, value) -> 'QuestionType':
        """
        Map a stored type label to a QuestionType.

        Accepts the canonical values and the labels form builders store
        ("Multiple Choice", "Checkboxes", ...). Anything else is FREE_TEXT.
        """
        if isinstance(value, cls):
            return value
        return _ALIASES.get(_NON_ALPHA.sub('', normalize(value)), cls.FREE_TEXT)


_NON_ALPHA = re.compile(r"[^a-z]")

_ALIASES = {
    'singlechoice': QuestionType.SINGLE_CHOICE,
    'multiplechoice': QuestionType.SINGLE_CHOICE,
    'dropdown': QuestionType.SINGLE_CHOICE,
    'truefalse': QuestionType.SINGLE_CHOICE,
    'multiselect': QuestionType.MULTI_SELECT,
    'multipleselect': QuestionType.MULTI_SELECT,
    'checkbox': QuestionType.MULTI_SELECT,
    'checkboxes': QuestionType.MULTI_SELECT,
    'freetext': QuestionType.FREE_TEXT,
    'shortanswer': QuestionType.FREE_TEXT,
    'paragraph': QuestionType.FREE_TEXT,
    'text': QuestionType.FREE_TEXT,
}
