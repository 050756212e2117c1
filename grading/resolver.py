"""Multi-select resolution: raw answer string -> selected option texts."""

from typing import Iterable, List, Optional

from grading.tokenizer import OptionTokenizer


def resolve_multi_select(answer_text, options: Optional[Iterable] = None) -> List[str]:
    """
    Decompose a comma-joined multi-select answer into the options it names.

    Used once for the respondent's answer and once for the correct-answer
    field, with the same option list. Empty input gives [].
    """
    if not answer_text:
        return []
    return OptionTokenizer(options).tokenize(answer_text)
