"""Configuration for the competition orchestration layer."""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional


@dataclass
class Settings:
    """
    Everything the grading run, CLI and server need.

    Defaults resolve relative to data_root.
    Every field is overridable at construction for testing.
    """
    data_root: Optional[Path] = None
    question_bank_path: Optional[Path] = None
    database_url: Optional[str] = None
    lock_timeout_s: float = 10.0  # bounded wait before a grading run is skipped
    leaderboard_size: int = 10

    def __post_init__(self):
        project_root = Path(__file__).resolve().parent.parent

        if self.data_root is None:
            env_root = os.environ.get("QUIZ_DATA_ROOT")
            self.data_root = Path(env_root) if env_root else project_root / "quiz_data"
        self.data_root = Path(self.data_root)

        if self.question_bank_path is None:
            env_bank = os.environ.get("QUESTION_BANK_PATH")
            self.question_bank_path = Path(env_bank) if env_bank else self.data_root / "questions.jsonl"
        self.question_bank_path = Path(self.question_bank_path)

        if self.database_url is None:
            self.database_url = os.environ.get(
                "DATABASE_URL", f"sqlite:///{self.data_root / 'grades.db'}"
            )

        env_timeout = os.environ.get("GRADING_LOCK_TIMEOUT_S")
        if env_timeout is not None:
            try:
                self.lock_timeout_s = float(env_timeout)
            except ValueError:
                pass
        env_size = os.environ.get("LEADERBOARD_SIZE")
        if env_size is not None:
            try:
                self.leaderboard_size = int(env_size)
            except ValueError:
                pass
