"""
Option tokenizer for multi-select answers.

Multi-select answers are stored as the chosen option texts joined with commas,
but option texts may themselves contain commas. The tokenizer uses the
question's known options to recover which ones were selected:

    1. options are scanned longest first so a short option never matches
       inside a longer one;
    2. each hit is cut out of the remaining text and replaced by a comma,
       so neighbours cannot fuse into a new false match;
    3. options of three or more words may match by word overlap when
       punctuation drift defeats the substring scan;
    4. whatever is left over is kept only if it looks like a real selection
       (fragments longer than ``min_fragment_length`` characters).

With no options at all the tokenizer falls back to a naive comma split.
"""

import re
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Tuple

from grading.normalize import normalize

_WORD_SPLIT = re.compile(r"[\s,]+")
_SPACES = re.compile(r" {2,}")

# Punctuation tolerated at word edges by the word-overlap fallback
_EDGE_PUNCT = ".;:!?()\"'"
_EDGE_CLASS = "[" + re.escape(_EDGE_PUNCT) + "]*"


@dataclass
class TokenizeTrace:
    """How an answer string was decomposed. Used for human-readable grading logs."""
    selected: List[str] = field(default_factory=list)
    substring_matches: List[str] = field(default_factory=list)
    word_overlap_matches: List[str] = field(default_factory=list)
    kept_fragments: List[str] = field(default_factory=list)
    discarded_fragments: List[str] = field(default_factory=list)
    naive_split: bool = False


def _words(text: str) -> List[str]:
    """Whitespace/comma tokens with edge punctuation removed."""
    out = []
    for tok in _WORD_SPLIT.split(text):
        tok = tok.strip(_EDGE_PUNCT)
        if tok:
            out.append(tok)
    return out


def _strip_word(text: str, word: str) -> str:
    """Remove the first standalone occurrence of word (edge punctuation included)."""
    pattern = r"(?<![^\s,])" + _EDGE_CLASS + re.escape(word) + _EDGE_CLASS + r"(?![^\s,])"
    return re.sub(pattern, " ", text, count=1)


def _dedupe(items: Iterable[str]) -> List[str]:
    """Drop repeats by normalized text, keeping first-seen order."""
    seen = set()
    out = []
    for item in items:
        key = normalize(item)
        if not key or key in seen:
            continue
        seen.add(key)
        out.append(item)
    return out


class OptionTokenizer:
    """
    Identifies which known options are present in a comma-joined answer.

    Args:
        options:             Raw option texts; None/empty entries are ignored.
        min_fragment_length: Leftover fragments must be longer than this to be
                             kept as extra selections.
        overlap_min_words:   Minimum option word count for the word-overlap
                             fallback.
    """

    def __init__(
        self,
        options: Optional[Iterable] = None,
        min_fragment_length: int = 3,
        overlap_min_words: int = 3,
    ):
        self.min_fragment_length = min_fragment_length
        self.overlap_min_words = overlap_min_words

        usable: List[Tuple[str, str]] = []
        for opt in options or []:
            norm = normalize(opt)
            if norm:
                usable.append((str(opt).strip(), norm))
        # Longest first; sort is stable so equal lengths keep input order
        usable.sort(key=lambda pair: len(pair[1]), reverse=True)
        self._options = usable

    @property
    def options(self) -> List[str]:
        """Usable options in scan order."""
        return [original for original, _ in self._options]

    def tokenize(self, answer) -> List[str]:
        """Return the selected options (and kept leftovers) in detection order."""
        return self.explain(answer).selected

    def explain(self, answer) -> TokenizeTrace:
        """Tokenize and report how each selection was found."""
        trace = TokenizeTrace()

        if not self._options:
            trace.naive_split = True
            if answer:
                parts = [p.strip() for p in str(answer).split(',')]
                trace.selected = _dedupe(p for p in parts if p)
            return trace

        remaining = normalize(answer)
        if not remaining:
            return trace

        found: List[str] = []
        for original, norm in self._options:
            span = self._find_span(remaining, norm)
            if span is not None:
                remaining = remaining.replace(span, ',', 1)
                found.append(original)
                trace.substring_matches.append(original)
                continue
            if self._words_overlap(remaining, norm):
                for word in _words(norm):
                    remaining = _strip_word(remaining, word)
                remaining = _SPACES.sub(' ', remaining)
                found.append(original)
                trace.word_overlap_matches.append(original)

        leftover = remaining.strip(', ')
        if leftover:
            for frag in leftover.split(','):
                frag = frag.strip()
                if not frag:
                    continue
                if len(frag) > self.min_fragment_length:
                    trace.kept_fragments.append(frag)
                else:
                    trace.discarded_fragments.append(frag)

        trace.selected = _dedupe(found + trace.kept_fragments)
        return trace

    @staticmethod
    def _find_span(remaining: str, norm: str) -> Optional[str]:
        """Return the first boundary-aware variant of norm found in remaining."""
        if remaining == norm:
            return norm
        for variant in (', ' + norm, ',' + norm, norm + ',', ' ' + norm + ' '):
            if variant in remaining:
                return variant
        return None

    def _words_overlap(self, remaining: str, norm: str) -> bool:
        words = _words(norm)
        if len(words) < self.overlap_min_words:
            return False
        available = set(_words(remaining))
        return all(w in available for w in words)
