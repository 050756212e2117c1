"""JSONL-backed question bank with CRUD operations."""

import json
from pathlib import Path
from typing import Dict, List, Optional

from grading.models import Question

MAX_OPTIONS = 6


def validate_question(question: Question) -> None:
    """Raise ValueError if the question cannot be graded."""
    if not question.question_id or not str(question.question_id).strip():
        raise ValueError("Question id must be a non-empty string")
    if len(question.options) > MAX_OPTIONS:
        raise ValueError(
            f"Question {question.question_id} has {len(question.options)} options "
            f"(max {MAX_OPTIONS})"
        )
    if isinstance(question.points, bool) or not isinstance(question.points, int) or question.points < 1:
        raise ValueError(f"Question {question.question_id} points must be a positive integer")


class QuestionBank:
    """
    JSONL-backed question storage.

    Loads entire file into memory on init (a competition has dozens of questions).
    Writes rewrite the entire file on mutation.
    """

    def __init__(self, db_path):
        self.db_path = Path(db_path)
        self._questions: Dict[str, Question] = {}
        self._load()

    def _load(self) -> None:
        if not self.db_path.exists():
            return
        with open(self.db_path, 'r', encoding='utf-8') as f:
            for line in f:
                line = line.strip()
                if not line:
                    continue
                question = Question.from_dict(json.loads(line))
                self._questions[question.question_id] = question

    def _save(self) -> None:
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self.db_path.with_suffix(self.db_path.suffix + '.tmp')
        with open(tmp, 'w', encoding='utf-8') as f:
            for question in self._questions.values():
                f.write(json.dumps(question.to_dict(), ensure_ascii=False) + '\n')
        tmp.replace(self.db_path)

    def upsert_question(self, question: Question) -> None:
        """Insert or update a question by question_id."""
        validate_question(question)
        self._questions[question.question_id] = question
        self._save()

    def upsert_questions(self, questions: List[Question]) -> None:
        """Batch upsert -- all validated first, single save at the end."""
        for question in questions:
            validate_question(question)
        for question in questions:
            self._questions[question.question_id] = question
        self._save()

    def get_question(self, question_id: str) -> Optional[Question]:
        return self._questions.get(question_id)

    def delete_question(self, question_id: str) -> bool:
        """Remove a question. Returns False if it was not present."""
        if question_id not in self._questions:
            return False
        del self._questions[question_id]
        self._save()
        return True

    def all_questions(self) -> List[Question]:
        return list(self._questions.values())

    def count(self) -> int:
        return len(self._questions)
