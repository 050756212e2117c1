"""Tests for grading/evaluator.py -- pass/fail correctness."""

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from grading import is_answer_correct


ABC = ["A", "B", "C"]


def test_multi_select_order_is_irrelevant():
    assert is_answer_correct("A,B", "B,A", "Multiple Select", ABC) is True


def test_multi_select_size_mismatch_is_incorrect():
    assert is_answer_correct("A,B,C", "A,B", "Multiple Select", ABC) is False
    assert is_answer_correct("A", "A,B", "Multiple Select", ABC) is False


def test_multi_select_same_size_different_items():
    assert is_answer_correct("A,C", "A,B", "Multiple Select", ABC) is False


def test_multi_select_with_commas_in_options():
    options = ["Cold, pale skin", "Warm, flushed skin", "Cyanosis"]
    assert is_answer_correct(
        "Warm, flushed skin, Cold, pale skin",
        "Cold, pale skin,Warm, flushed skin",
        "MultiSelect",
        options,
    ) is True


def test_single_choice_is_case_and_whitespace_insensitive():
    assert is_answer_correct("Furosemide", "furosemide ", "Multiple Choice", []) is True


def test_single_choice_legacy_list_of_accepted_answers():
    assert is_answer_correct("Lasix", "Furosemide, Lasix", "Multiple Choice", []) is True
    assert is_answer_correct("Aspirin", "Furosemide, Lasix", "Multiple Choice", []) is False


def test_free_text_does_not_split_correct_answer():
    assert is_answer_correct("Lasix", "Furosemide, Lasix", "FreeText", []) is False


def test_single_choice_option_containing_comma():
    assert is_answer_correct("Cold, pale skin", "Cold, pale skin", "Multiple Choice",
                             ["Cold, pale skin", "Warm"]) is True


def test_empty_answers_are_never_correct():
    assert is_answer_correct("", "A", "Multiple Choice", ABC) is False
    assert is_answer_correct("A", "", "Multiple Choice", ABC) is False
    assert is_answer_correct(None, None, "Multiple Select", ABC) is False


def test_unknown_type_grades_as_free_text():
    assert is_answer_correct("Paris ", "paris", "Essay", []) is True


def test_multi_select_unresolvable_correct_answer_is_incorrect():
    """Debris on both sides resolves to nothing; that is not a match."""
    assert is_answer_correct("zz", "yy", "Multiple Select", ABC) is False


def test_blank_answer_never_matches_legacy_key_with_trailing_comma():
    assert is_answer_correct("   ", "Furosemide,", "Multiple Choice", []) is False
    assert is_answer_correct(" ", "Furosemide,, Lasix", "Multiple Choice", []) is False
    assert is_answer_correct("Lasix", "Furosemide,, Lasix,", "Multiple Choice", []) is True


def test_whitespace_only_key_is_never_matched():
    assert is_answer_correct("  ", " ", "FreeText", []) is False
    assert is_answer_correct("\t", "\n", "Multiple Select", ABC) is False
