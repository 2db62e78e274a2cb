# =============================================
# File: oborobot/services/resources.py
# Purpose: Resolve tokens against the vocabulary index into candidate resource URLs
# =============================================
from __future__ import annotations
from typing import List

from oborobot import config
from oborobot.errors import NoMatchError
from oborobot.services.tokenizer import non_empty


def is_generic_search(href: str, marker: str | None = None) -> bool:
    marker = marker if marker is not None else config.generic_search_marker()
    return bool(marker) and marker in (href or "")


def match_resources(tokens: List[str], vocabulary, marker: str | None = None) -> List[str]:
    """
    Ordered, de-duplicated candidate URLs for a token sequence.

    Order follows the first token that reaches a URL (then store order of
    the matching terms). URLs of generic search-result pages are skipped.
    Raises NoMatchError when nothing matches.
    """
    marker = marker if marker is not None else config.generic_search_marker()
    urls: List[str] = []
    seen = set()
    for token in non_empty(tokens):
        for term in vocabulary.find_terms_by_value(token.upper()):
            href = term.href
            if href in seen or is_generic_search(href, marker):
                continue
            seen.add(href)
            urls.append(href)

    if not urls:
        raise NoMatchError()
    return urls
