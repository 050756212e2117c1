"""Tests for competition/submissions.py -- CSV import and response keys."""

import sys
import tempfile
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

import pytest

from competition.submissions import Submission, make_response_key, read_responses_csv


CSV_TEXT = (
    'Timestamp,Email Address,Q1,Q2,Notes\n'
    '2026-03-01 10:00:00,ann@example.com,"Cold, pale skin,Cyanosis",Furosemide,hi\n'
    '2026-03-01 10:05:00,bob@example.com,Cyanosis,,\n'
    ',nobody@example.com,Cyanosis,Aspirin,\n'
)


def _write_csv(tmp: str, text: str = CSV_TEXT) -> Path:
    path = Path(tmp) / 'responses.csv'
    path.write_text(text, encoding='utf-8')
    return path


def test_reads_rows_and_question_columns():
    with tempfile.TemporaryDirectory() as tmp:
        subs = read_responses_csv(_write_csv(tmp), ["Q1", "Q2"])
        assert len(subs) == 2
        assert subs[0].respondent_id == "ann@example.com"
        assert subs[0].answers == {"Q1": "Cold, pale skin,Cyanosis", "Q2": "Furosemide"}
        assert subs[1].answers["Q2"] == ""


def test_unlisted_columns_are_ignored():
    with tempfile.TemporaryDirectory() as tmp:
        subs = read_responses_csv(_write_csv(tmp), ["Q1"])
        assert set(subs[0].answers) == {"Q1"}


def test_all_columns_kept_without_question_filter():
    with tempfile.TemporaryDirectory() as tmp:
        subs = read_responses_csv(_write_csv(tmp))
        assert set(subs[0].answers) == {"Q1", "Q2", "Notes"}


def test_missing_respondent_column_raises():
    with tempfile.TemporaryDirectory() as tmp:
        path = _write_csv(tmp, 'Timestamp,Q1\n2026-03-01,Cyanosis\n')
        with pytest.raises(ValueError):
            read_responses_csv(path)


def test_response_key_is_stable_and_respondent_insensitive():
    a = make_response_key("2026-03-01 10:00:00", "Ann@Example.com ", "Q1")
    b = make_response_key("2026-03-01 10:00:00", "ann@example.com", "Q1")
    c = make_response_key("2026-03-01 10:00:00", "ann@example.com", "Q2")
    assert a == b
    assert a != c


def test_submission_from_dict_coerces_missing_answers():
    sub = Submission.from_dict({
        'timestamp': 't1', 'respondent_id': 'r1', 'answers': {'Q1': None, 'Q2': 'x'},
    })
    assert sub.answers == {'Q1': '', 'Q2': 'x'}


def test_submitted_answers_keep_question_ids():
    sub = Submission("t1", "ann", {"Q1": "Cyanosis", "Q2": ""})
    answers = sub.submitted_answers()
    assert [(a.question_id, a.answer) for a in answers] == [("Q1", "Cyanosis"), ("Q2", "")]
