"""
Text normalization shared by every matcher of the form driver.

Legends, labels and option texts coming from the page are compared only
after both sides went through :func:`normalize`.
"""

import re
from typing import Iterable, Optional

from rapidfuzz import fuzz, process

_WHITESPACE_RX = re.compile(r"\s+")


def normalize(text: Optional[str]) -> str:
    """
    Collapse whitespace runs to a single space, trim and lower-case.

    Non-string input (``None`` for a node without text) normalizes to ``""``.
    """
    if not isinstance(text, str):
        return ""
    return _WHITESPACE_RX.sub(" ", text).strip().lower()


def closest_match(target: str, choices: Iterable[str], threshold: int = 60) -> Optional[str]:
    """
    Return the choice most similar to ``target``, for error reporting only.

    Matching of options stays exact; this merely points at the likely typo
    when an option could not be found.
    """
    candidates = [choice for choice in choices if choice]
    if not candidates:
        return None

    result = process.extractOne(
        normalize(target),
        candidates,
        scorer=fuzz.token_set_ratio,
        processor=normalize,
        score_cutoff=threshold,
    )
    if result:
        matched_value, _score, _index = result
        return matched_value
    return None
