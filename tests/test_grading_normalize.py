"""Tests for grading/normalize.py and grading/question_types.py."""

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from grading.normalize import normalize, normalize_set
from grading.question_types import QuestionType


def test_lowercases_and_trims():
    assert normalize("  Furosemide ") == "furosemide"


def test_collapses_whitespace_runs():
    assert normalize("Cold,\t pale\n\n skin") == "cold, pale skin"


def test_falsy_input_gives_empty_string():
    assert normalize(None) == ""
    assert normalize("") == ""
    assert normalize("   ") == ""


def test_non_string_is_stringified():
    assert normalize(42) == "42"


def test_normalize_set_is_order_independent():
    assert normalize_set(["B", " a "]) == normalize_set(["A", "b"])
    assert normalize_set(["", None, "x"]) == {"x"}


def test_question_type_parses_form_labels():
    assert QuestionType.parse("Multiple Select") is QuestionType.MULTI_SELECT
    assert QuestionType.parse("Checkboxes") is QuestionType.MULTI_SELECT
    assert QuestionType.parse("Multiple Choice") is QuestionType.SINGLE_CHOICE
    assert QuestionType.parse("MultiSelect") is QuestionType.MULTI_SELECT
    assert QuestionType.parse("Short Answer") is QuestionType.FREE_TEXT


def test_unknown_question_type_is_free_text():
    assert QuestionType.parse("Essay-ish") is QuestionType.FREE_TEXT
    assert QuestionType.parse(None) is QuestionType.FREE_TEXT
