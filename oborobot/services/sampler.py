# =============================================
# File: oborobot/services/sampler.py
# Purpose: Build the keyword pool from matched resources and draw K keywords from it
# =============================================
from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import List, Sequence

from loguru import logger

from oborobot import config
from oborobot.errors import EmptyKeywordPoolError
from oborobot.utils.metrics import record_degraded_sample


@dataclass
class KeywordSample:
    keywords: List[str]
    attempts: int
    degraded: bool = False
    # positions refilled after the retry budget ran out
    refilled: List[int] = field(default_factory=list)

    @property
    def distinct(self) -> bool:
        return len(set(self.keywords)) == len(self.keywords)


def build_keyword_pool(resources: Sequence[str], vocabulary, tokens: Sequence[str]) -> List[str]:
    """
    Raw values of the non-Verb terms of every resource, most used first.
    Duplicates across resources are kept so frequent keywords weigh more.
    Values equal to one of the input tokens are left out.
    """
    token_set = set(tokens)
    pool: List[str] = []
    for href in resources:
        for term in vocabulary.find_terms_by_resource(href):
            if term.type == config.VERB:
                continue
            if term.value in token_set:
                continue
            pool.append(term.value)
    return pool


def _draw(pool: Sequence[str], k: int, rng: random.Random) -> List[str]:
    return [rng.choice(pool) for _ in range(k)]


def _refill_duplicates(draw: List[str], pool: Sequence[str], rng: random.Random) -> List[int]:
    """Replace repeated values with pool values not drawn yet, while any remain."""
    refilled: List[int] = []
    seen = set()
    for i, value in enumerate(draw):
        if value not in seen:
            seen.add(value)
            continue
        remaining = [v for v in pool if v not in seen]
        if not remaining:
            continue
        draw[i] = rng.choice(remaining)
        seen.add(draw[i])
        refilled.append(i)
    return refilled


def sample_keywords(
    pool: Sequence[str],
    rng: random.Random,
    k: int | None = None,
    max_attempts: int | None = None,
) -> KeywordSample:
    """
    Draw k keywords uniformly with replacement, retrying the whole draw up to
    max_attempts times until the k values are pairwise distinct.

    When every attempt collides the sample is flagged as degraded (logged and
    counted) and its duplicate slots are refilled from unused pool values.
    """
    if not pool:
        raise EmptyKeywordPoolError()
    k = k if k is not None else config.keyword_count()
    max_attempts = max_attempts if max_attempts is not None else config.max_sample_attempts()

    draw: List[str] = []
    for attempt in range(1, max_attempts + 1):
        draw = _draw(pool, k, rng)
        if len(set(draw)) == k:
            return KeywordSample(keywords=draw, attempts=attempt)

    refilled = _refill_duplicates(draw, pool, rng)
    sample = KeywordSample(keywords=draw, attempts=max_attempts, degraded=True, refilled=refilled)
    record_degraded_sample()
    logger.warning(
        f"[sampler] degraded sample after {max_attempts} attempts "
        f"pool={len(pool)} distinct_pool={len(set(pool))} k={k} distinct={sample.distinct}"
    )
    return sample
