"""Competition orchestration: question bank, grading runs, ledger, leaderboards."""
