"""Form submissions: parsing exported responses and building durable grading keys."""

import csv
import hashlib
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterable, List, Optional

from grading.models import SubmittedAnswer
from grading.normalize import normalize

logger = logging.getLogger("quizarena.submissions")

TIMESTAMP_COLUMNS = ("timestamp", "submitted at", "submitted_at")
RESPONDENT_COLUMNS = ("email address", "email", "respondent", "respondent_id", "name")


@dataclass
class Submission:
    """One respondent's form submission: raw answers keyed by question id."""
    timestamp: str
    respondent_id: str
    answers: Dict[str, str] = field(default_factory=dict)

    def submitted_answers(self) -> List[SubmittedAnswer]:
        return [SubmittedAnswer(qid, answer) for qid, answer in self.answers.items()]

    @classmethod
    def from_dict(cls, data: Dict) -> 'Submission':
        return cls(
            timestamp=str(data.get('timestamp', '')),
            respondent_id=str(data.get('respondent_id', '')),
            answers={str(k): '' if v is None else str(v) for k, v in (data.get('answers') or {}).items()},
        )


def make_response_key(timestamp: str, respondent_id: str, question_id: str) -> str:
    """
    Durable idempotence key for one graded answer.

    Respondent ids compare case/whitespace-insensitively so a re-import of the
    same export maps onto the same keys. SHA-256 truncated to 24 hex chars.
    """
    key = '|'.join([str(timestamp).strip(), normalize(respondent_id), str(question_id).strip()])
    return hashlib.sha256(key.encode('utf-8')).hexdigest()[:24]


def _find_column(header: List[str], candidates: Iterable[str]) -> Optional[int]:
    lowered = [normalize(h) for h in header]
    for cand in candidates:
        if cand in lowered:
            return lowered.index(cand)
    return None


def read_responses_csv(
    path: Path,
    question_ids: Optional[Iterable[str]] = None,
) -> List[Submission]:
    """
    Parse a form-backend CSV export into Submissions.

    Expects a timestamp column, a respondent column and one column per
    question id. When question_ids is given, other columns are ignored.
    Rows without a timestamp or respondent are skipped.

    Raises:
        ValueError if the header lacks a timestamp or respondent column.
    """
    path = Path(path)
    wanted = set(question_ids) if question_ids is not None else None
    submissions: List[Submission] = []

    with open(path, 'r', newline='', encoding='utf-8-sig') as f:
        reader = csv.reader(f)
        header = next(reader, None)
        if not header:
            return submissions

        ts_idx = _find_column(header, TIMESTAMP_COLUMNS)
        resp_idx = _find_column(header, RESPONDENT_COLUMNS)
        if ts_idx is None or resp_idx is None:
            raise ValueError(f"{path.name}: missing timestamp or respondent column")

        answer_cols = []
        for idx, name in enumerate(header):
            name = name.strip()
            if idx in (ts_idx, resp_idx) or not name:
                continue
            if wanted is not None and name not in wanted:
                continue
            answer_cols.append((idx, name))

        skipped = 0
        for row in reader:
            if not any(cell.strip() for cell in row):
                continue
            timestamp = row[ts_idx].strip() if ts_idx < len(row) else ''
            respondent = row[resp_idx].strip() if resp_idx < len(row) else ''
            if not timestamp or not respondent:
                skipped += 1
                continue
            answers = {
                name: (row[idx] if idx < len(row) else '')
                for idx, name in answer_cols
            }
            submissions.append(Submission(timestamp, respondent, answers))

    if skipped:
        logger.warning("Skipped %d response row(s) without timestamp or respondent in %s",
                       skipped, path.name)
    return submissions
