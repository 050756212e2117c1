"""Process-wide runtime cache for the question bank and grading lock."""

import threading
from typing import Optional

from competition.config import Settings
from competition.lock import default_lock
from competition.question_bank import QuestionBank


class Runtime:
    """
    Process-wide runtime cache.

    - Question bank: loaded once, reloaded on demand
    - Grading lock: the process-wide default, shared with in-process CLI runs
    """

    def __init__(self, settings: Settings):
        self.settings = settings
        self._bank_lock = threading.Lock()
        self._bank: Optional[QuestionBank] = None
        self.grading_lock = default_lock()

    def get_bank(self) -> QuestionBank:
        if self._bank is not None:
            return self._bank
        with self._bank_lock:
            if self._bank is None:
                self._bank = QuestionBank(self.settings.question_bank_path)
        return self._bank

    def invalidate_bank(self) -> None:
        with self._bank_lock:
            self._bank = None
