from __future__ import annotations
import re
from typing import List

# space, full-width space, horizontal tab
_SEPARATOR_RE = re.compile("[ 　\t]")


def tokenize(phrase: str) -> List[str]:
    """
    Split a search phrase on every separator. Runs of separators produce empty
    tokens; they are kept here and dropped by the resource matcher.
    No case folding happens at this stage.
    """
    return _SEPARATOR_RE.split(phrase or "")


def non_empty(tokens: List[str]) -> List[str]:
    return [t for t in tokens if t]
