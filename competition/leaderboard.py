"""Leaderboards and per-question statistics from the grade ledger."""

from typing import Dict, List, Optional

from grading.normalize import normalize


def compute_leaderboard(records: List[Dict], top: Optional[int] = None) -> List[Dict]:
    """
    Rank respondents by total points.

    Ties on points break by number of fully correct answers, then by
    respondent id for a stable order. Equal (points, correct) share a rank
    and the next rank skips ("1224" ranking). Respondent ids are grouped
    case- and whitespace-insensitively; the first spelling seen is shown.

    Returns:
        [{rank, respondent_id, total_points, correct, partial, answered}, ...]
    """
    by_respondent: Dict[str, Dict] = {}
    for rec in records:
        rid = rec.get('respondent_id', '')
        row = by_respondent.setdefault(normalize(rid), {
            'respondent_id': rid,
            'total_points': 0,
            'correct': 0,
            'partial': 0,
            'answered': 0,
        })
        row['total_points'] += int(rec.get('earned_points', 0) or 0)
        row['answered'] += 1
        status = rec.get('status')
        if status == 'correct':
            row['correct'] += 1
        elif status == 'partial':
            row['partial'] += 1

    rows = sorted(
        by_respondent.values(),
        key=lambda r: (-r['total_points'], -r['correct'], r['respondent_id']),
    )

    ranked = []
    prev_key = None
    rank = 0
    for i, row in enumerate(rows, 1):
        key = (row['total_points'], row['correct'])
        if key != prev_key:
            rank = i
            prev_key = key
        ranked.append({'rank': rank, **row})

    if top is not None:
        ranked = ranked[:max(0, top)]
    return ranked


def compute_question_stats(records: List[Dict]) -> List[Dict]:
    """
    Per-question difficulty, hardest (lowest percent correct) first.

    Returns:
        [{question_id, attempts, correct, partial, percent_correct, avg_points}, ...]
    """
    by_question: Dict[str, Dict] = {}
    for rec in records:
        qid = rec.get('question_id', '')
        row = by_question.setdefault(qid, {
            'question_id': qid,
            'attempts': 0,
            'correct': 0,
            'partial': 0,
            '_points': 0,
        })
        row['attempts'] += 1
        row['_points'] += int(rec.get('earned_points', 0) or 0)
        if rec.get('status') == 'correct':
            row['correct'] += 1
        elif rec.get('status') == 'partial':
            row['partial'] += 1

    out = []
    for row in by_question.values():
        attempts = row['attempts']
        out.append({
            'question_id': row['question_id'],
            'attempts': attempts,
            'correct': row['correct'],
            'partial': row['partial'],
            'percent_correct': round(100.0 * row['correct'] / attempts, 1) if attempts else 0.0,
            'avg_points': round(row['_points'] / attempts, 2) if attempts else 0.0,
        })
    out.sort(key=lambda r: (r['percent_correct'], r['question_id']))
    return out
