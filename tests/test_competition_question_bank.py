"""Tests for competition/question_bank.py -- JSONL question storage."""

import sys
import tempfile
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

import pytest

from competition.question_bank import QuestionBank
from grading.models import Question


def _make_question(qid="Q1", **kwargs):
    defaults = dict(
        question_type="MultiSelect",
        options=["Cold, pale skin", "Warm, flushed skin", "Cyanosis"],
        correct_answer="Cold, pale skin,Cyanosis",
        points=4,
        prompt="Signs of shock?",
    )
    defaults.update(kwargs)
    return Question(question_id=qid, **defaults)


def test_upsert_and_get():
    with tempfile.TemporaryDirectory() as tmp:
        bank = QuestionBank(Path(tmp) / 'questions.jsonl')
        bank.upsert_question(_make_question())
        q = bank.get_question("Q1")
        assert q is not None
        assert q.options[0] == "Cold, pale skin"
        assert q.points == 4


def test_persists_across_instances():
    with tempfile.TemporaryDirectory() as tmp:
        path = Path(tmp) / 'questions.jsonl'
        QuestionBank(path).upsert_questions([_make_question("Q1"), _make_question("Q2")])
        reloaded = QuestionBank(path)
        assert reloaded.count() == 2
        assert reloaded.get_question("Q2").correct_answer == "Cold, pale skin,Cyanosis"


def test_upsert_overwrites():
    with tempfile.TemporaryDirectory() as tmp:
        bank = QuestionBank(Path(tmp) / 'questions.jsonl')
        bank.upsert_question(_make_question())
        bank.upsert_question(_make_question(points=8))
        assert bank.count() == 1
        assert bank.get_question("Q1").points == 8


def test_delete_question():
    with tempfile.TemporaryDirectory() as tmp:
        bank = QuestionBank(Path(tmp) / 'questions.jsonl')
        bank.upsert_question(_make_question())
        assert bank.delete_question("Q1") is True
        assert bank.delete_question("Q1") is False
        assert bank.get_question("Q1") is None


def test_rejects_more_than_six_options():
    with tempfile.TemporaryDirectory() as tmp:
        bank = QuestionBank(Path(tmp) / 'questions.jsonl')
        with pytest.raises(ValueError):
            bank.upsert_question(_make_question(options=[str(i) for i in range(7)]))


def test_rejects_non_positive_points():
    with tempfile.TemporaryDirectory() as tmp:
        bank = QuestionBank(Path(tmp) / 'questions.jsonl')
        with pytest.raises(ValueError):
            bank.upsert_question(_make_question(points=0))


def test_batch_upsert_is_all_or_nothing():
    with tempfile.TemporaryDirectory() as tmp:
        bank = QuestionBank(Path(tmp) / 'questions.jsonl')
        with pytest.raises(ValueError):
            bank.upsert_questions([_make_question("Q1"), _make_question("Q2", points=-1)])
        assert bank.count() == 0


def test_missing_file_is_empty_bank():
    with tempfile.TemporaryDirectory() as tmp:
        bank = QuestionBank(Path(tmp) / 'nope' / 'questions.jsonl')
        assert bank.count() == 0
        assert bank.all_questions() == []
