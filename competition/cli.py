"""
Competition grading CLI.

Usage:
    python -m competition.cli --data-root quiz_data questions
    python -m competition.cli --data-root quiz_data import-questions questions.json
    python -m competition.cli --data-root quiz_data check Q3 "Cold, pale skin,Warm, flushed skin"
    python -m competition.cli --data-root quiz_data grade responses.csv
    python -m competition.cli --data-root quiz_data leaderboard [--top 10]
    python -m competition.cli --data-root quiz_data stats
    python -m competition.cli --data-root quiz_data results ann@example.com
"""

import argparse
import json
import logging
import sys
from pathlib import Path

from competition.config import Settings
from competition.db.session import get_db, init_db
from competition.leaderboard import compute_leaderboard, compute_question_stats
from competition.ledger import list_results, results_for_respondent
from competition.question_bank import QuestionBank
from competition.runner import grade_submissions
from competition.submissions import read_responses_csv
from grading import Question, QuestionType, grade_answer
from grading.tokenizer import OptionTokenizer


def _settings(args) -> Settings:
    if args.data_root:
        return Settings(data_root=Path(args.data_root))
    return Settings()


def cmd_questions(args):
    """List questions in the bank."""
    bank = QuestionBank(_settings(args).question_bank_path)
    questions = bank.all_questions()
    if not questions:
        print("No questions in the bank.")
        return
    print(f"\n{len(questions)} question(s):\n")
    for q in questions:
        print(f"  {q.question_id}  [{q.qtype.value}]  {q.points} pt(s)  {q.prompt[:60]}")
        for opt in q.present_options:
            print(f"      - {opt}")


def cmd_import_questions(args):
    """Load questions from a JSON list into the bank."""
    path = Path(args.file)
    if not path.exists():
        print(f"Question file not found: {path}")
        sys.exit(1)
    with open(path, 'r', encoding='utf-8') as f:
        data = json.load(f)
    if isinstance(data, dict):
        data = data.get('questions', [])

    questions = [Question.from_dict(d) for d in data]
    bank = QuestionBank(_settings(args).question_bank_path)
    try:
        bank.upsert_questions(questions)
    except ValueError as e:
        print(f"Import failed: {e}")
        sys.exit(1)
    print(f"Imported {len(questions)} question(s). Bank now holds {bank.count()}.")


def cmd_check(args):
    """Grade a single answer and show how it was resolved."""
    bank = QuestionBank(_settings(args).question_bank_path)
    question = bank.get_question(args.question_id)
    if question is None:
        print(f"Question not found: {args.question_id}")
        sys.exit(1)

    result = grade_answer(question, args.answer)
    print(f"\n{question.question_id} [{question.qtype.value}] {question.prompt}")
    if question.qtype is QuestionType.MULTI_SELECT:
        tokenizer = OptionTokenizer(question.present_options)
        user_trace = tokenizer.explain(args.answer)
        correct_trace = tokenizer.explain(question.correct_answer)
        print(f"  Selected:  {user_trace.selected}")
        print(f"  Expected:  {correct_trace.selected}")
        if user_trace.word_overlap_matches:
            print(f"  Word-overlap matches: {user_trace.word_overlap_matches}")
        if user_trace.kept_fragments:
            print(f"  Unrecognized selections: {user_trace.kept_fragments}")
        if user_trace.discarded_fragments:
            print(f"  Discarded debris: {user_trace.discarded_fragments}")
    else:
        print(f"  Expected:  {question.correct_answer}")
    print(f"  Result:    {result.status}  {result.earned_points}/{question.points}")


def cmd_grade(args):
    """Grade a CSV export of form responses."""
    settings = _settings(args)
    bank = QuestionBank(settings.question_bank_path)
    if bank.count() == 0:
        print("No questions in the bank. Import some first.")
        return
    try:
        submissions = read_responses_csv(
            Path(args.responses), [q.question_id for q in bank.all_questions()],
        )
    except (OSError, ValueError) as e:
        print(f"Could not read responses: {e}")
        sys.exit(1)

    stats = grade_submissions(submissions, bank, settings)
    if stats.skipped_busy:
        print("Another grading run is in progress; skipped.")
        return
    print(f"\nSubmissions:     {stats.submissions}")
    print(f"Newly graded:    {stats.graded}")
    print(f"Already graded:  {stats.already_graded}")
    print(f"  correct={stats.correct}  partial={stats.partial}  incorrect={stats.incorrect}")
    if stats.unknown_question:
        print(f"Unknown question columns: {stats.unknown_question}")
    if stats.integrity_warnings:
        print(f"Question data warnings: {stats.integrity_warnings} (see log)")


def _load_records(settings: Settings):
    init_db(settings)
    with get_db(settings) as db:
        return list_results(db)


def cmd_leaderboard(args):
    """Show the leaderboard."""
    settings = _settings(args)
    top = args.top if args.top is not None else settings.leaderboard_size
    board = compute_leaderboard(_load_records(settings), top=top)
    if not board:
        print("No graded responses yet.")
        return
    print(f"\n{'Rank':<6}{'Respondent':<36}{'Points':>8}{'Correct':>9}{'Partial':>9}")
    for row in board:
        print(f"{row['rank']:<6}{row['respondent_id'][:34]:<36}"
              f"{row['total_points']:>8}{row['correct']:>9}{row['partial']:>9}")


def cmd_results(args):
    """Show every graded answer for one respondent."""
    settings = _settings(args)
    init_db(settings)
    with get_db(settings) as db:
        results = results_for_respondent(db, args.respondent)
    if not results:
        print(f"No graded responses for {args.respondent}.")
        return
    total = 0
    for r in results:
        total += r['earned_points']
        print(f"  {r['question_id']:<12} {r['status']:<10} "
              f"{r['earned_points']}/{r['max_points']}  {r['answer'][:50]}")
    print(f"\nTotal: {total} point(s) over {len(results)} answer(s)")


def cmd_stats(args):
    """Show per-question statistics, hardest first."""
    stats = compute_question_stats(_load_records(_settings(args)))
    if not stats:
        print("No graded responses yet.")
        return
    for row in stats:
        print(f"  {row['question_id']:<12} {row['percent_correct']:>5.1f}% correct  "
              f"partial={row['partial']}  attempts={row['attempts']}  "
              f"avg={row['avg_points']:.2f}")


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="Quiz competition grading",
    )
    parser.add_argument(
        '--data-root', default=None,
        help="Directory holding questions.jsonl and grades.db (default: $QUIZ_DATA_ROOT or ./quiz_data)",
    )
    parser.add_argument('-v', '--verbose', action='store_true', help='Debug logging')

    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    subparsers.add_parser('questions', help='List questions in the bank')

    import_parser = subparsers.add_parser('import-questions',
                                          help='Import questions from a JSON file')
    import_parser.add_argument('file', help='JSON list of question objects')

    check_parser = subparsers.add_parser('check', help='Grade one answer')
    check_parser.add_argument('question_id', help='Question ID')
    check_parser.add_argument('answer', help='Raw answer text')

    grade_parser = subparsers.add_parser('grade', help='Grade a responses CSV export')
    grade_parser.add_argument('responses', help='Path to responses CSV')

    lb_parser = subparsers.add_parser('leaderboard', help='Show the leaderboard')
    lb_parser.add_argument('--top', type=int, default=None,
                           help='Number of rows (default: LEADERBOARD_SIZE or 10)')

    results_parser = subparsers.add_parser('results', help='Graded answers for one respondent')
    results_parser.add_argument('respondent', help='Respondent id (e.g. email address)')

    subparsers.add_parser('stats', help='Per-question statistics')

    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.command == 'questions':
        cmd_questions(args)
    elif args.command == 'import-questions':
        cmd_import_questions(args)
    elif args.command == 'check':
        cmd_check(args)
    elif args.command == 'grade':
        cmd_grade(args)
    elif args.command == 'leaderboard':
        cmd_leaderboard(args)
    elif args.command == 'results':
        cmd_results(args)
    elif args.command == 'stats':
        cmd_stats(args)
    else:
        parser.print_help()


if __name__ == '__main__':
    main()
