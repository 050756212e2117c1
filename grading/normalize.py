"""Answer text normalization shared by every grading path."""

import re
from typing import Iterable, Set

_WS = re.compile(r"\s+")


def normalize(text) -> str:
    """Lowercase, collapse whitespace runs, trim. Falsy input gives ""."""
    if not text:
        return ""
    if not isinstance(text, str):
        text = str(text)
    return _WS.sub(" ", text.lower()).strip()


def normalize_set(items: Iterable) -> Set[str]:
    """Order-independent canonical form of a selection list."""
    return {n for n in (normalize(i) for i in items) if n}
