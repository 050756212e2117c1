"""Tests for competition/leaderboard.py -- rankings and question stats."""

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from competition.leaderboard import compute_leaderboard, compute_question_stats


def _rec(respondent, question, status, points):
    return {'respondent_id': respondent, 'question_id': question,
            'status': status, 'earned_points': points}


RECORDS = [
    _rec('ann', 'Q1', 'correct', 4), _rec('ann', 'Q2', 'incorrect', 0),
    _rec('bob', 'Q1', 'partial', 1), _rec('bob', 'Q2', 'correct', 2),
    _rec('cat', 'Q1', 'correct', 4), _rec('cat', 'Q2', 'incorrect', 0),
    _rec('dan', 'Q1', 'incorrect', 0), _rec('dan', 'Q2', 'incorrect', 0),
]


def test_sorted_by_points_then_correct():
    board = compute_leaderboard(RECORDS)
    assert [r['respondent_id'] for r in board] == ['ann', 'cat', 'bob', 'dan']


def test_ties_share_rank_and_next_rank_skips():
    board = compute_leaderboard(RECORDS)
    assert [r['rank'] for r in board] == [1, 1, 3, 4]


def test_correct_count_breaks_point_ties():
    records = [_rec('x', 'Q1', 'partial', 2), _rec('x', 'Q2', 'partial', 2),
               _rec('y', 'Q1', 'correct', 4)]
    board = compute_leaderboard(records)
    assert board[0]['respondent_id'] == 'y'
    assert board[1]['rank'] == 2


def test_top_limits_rows():
    assert len(compute_leaderboard(RECORDS, top=2)) == 2


def test_counts_per_respondent():
    bob = [r for r in compute_leaderboard(RECORDS) if r['respondent_id'] == 'bob'][0]
    assert bob == {'rank': 3, 'respondent_id': 'bob', 'total_points': 3,
                   'correct': 1, 'partial': 1, 'answered': 2}


def test_empty_records():
    assert compute_leaderboard([]) == []
    assert compute_question_stats([]) == []


def test_question_stats_hardest_first():
    stats = compute_question_stats(RECORDS)
    assert [s['question_id'] for s in stats] == ['Q2', 'Q1']
    q1 = stats[1]
    assert q1['attempts'] == 4
    assert q1['correct'] == 2
    assert q1['partial'] == 1
    assert q1['percent_correct'] == 50.0
    assert q1['avg_points'] == 2.25


def test_respondent_ids_group_ignoring_case_and_spacing():
    records = [_rec('Ann@x.com', 'Q1', 'correct', 4), _rec(' ann@x.com', 'Q2', 'partial', 1),
               _rec('bob@x.com', 'Q1', 'correct', 4)]
    board = compute_leaderboard(records)
    assert len(board) == 2
    assert board[0]['respondent_id'] == 'Ann@x.com'
    assert board[0]['total_points'] == 5
    assert board[0]['answered'] == 2
