# =============================================
# File: oborobot/services/suggest.py
# Purpose: Suggestion orchestrator: tokens -> resources -> keywords -> questions -> pick + metadata
# =============================================
from __future__ import annotations

import random
from dataclasses import dataclass
from typing import List, Literal, Optional, Sequence

from loguru import logger
from pydantic import BaseModel, Field
from sqlmodel import Session

from oborobot import config
from oborobot.db.repo import MetadataStore, QuestionStore, VocabularyStore
from oborobot.errors import NoMatchError, NoQuestionMatchError
from oborobot.services.questions import CandidateQuestion, match_questions
from oborobot.services.resources import match_resources
from oborobot.services.sampler import KeywordSample, build_keyword_pool, sample_keywords
from oborobot.services.tokenizer import tokenize
from oborobot.utils.timing import timer

Lang = Literal["ja", "en"]


class SuggestionRequest(BaseModel):
    value: str
    lang: Lang
    user_id: Optional[str] = None
    question_number: Optional[int] = Field(default=None, ge=1)


class SuggestionResult(BaseModel):
    version: str
    question_id: str
    question_number: int
    question_ja: str
    question_en: str
    url: str
    title: str = ""
    description: str = ""


@dataclass
class Suggestion:
    """A result plus the intermediate picks that produced it."""
    result: SuggestionResult
    tokens: List[str]
    resources: List[str]
    sample: KeywordSample
    candidates: List[CandidateQuestion]
    latency_ms: int = 0


def resolve_metadata(metadata, href: str) -> tuple[str, str]:
    """(title, description) recorded for href, empty strings when unknown."""
    fav = metadata.find_by_resource(href)
    if fav is None:
        return "", ""
    return fav.title or "", fav.description or ""


def _pick(items: Sequence, rng: random.Random, error) -> object:
    if not items:
        raise error()
    return items[rng.randrange(len(items))]


class SuggestionEngine:
    """
    Composes the pipeline over three read-only stores. Randomness comes from
    the rng passed to each call; the engine keeps no generator of its own.
    """

    def __init__(
        self,
        vocabulary,
        questions,
        metadata,
        keyword_count: int | None = None,
        max_attempts: int | None = None,
        marker: str | None = None,
    ) -> None:
        self.vocabulary = vocabulary
        self.questions = questions
        self.metadata = metadata
        self.keyword_count = keyword_count if keyword_count is not None else config.keyword_count()
        self.max_attempts = max_attempts if max_attempts is not None else config.max_sample_attempts()
        self.marker = marker

    @classmethod
    def from_session(cls, session: Session, **kw) -> "SuggestionEngine":
        return cls(VocabularyStore(session), QuestionStore(session), MetadataStore(session), **kw)

    def run(self, request: SuggestionRequest, ordinal: int, rng: random.Random | None = None) -> Suggestion:
        rng = rng or random.Random()
        with timer() as elapsed:
            tokens = tokenize(request.value)
            resources = match_resources(tokens, self.vocabulary, marker=self.marker)
            pool = build_keyword_pool(resources, self.vocabulary, tokens)
            sample = sample_keywords(pool, rng, k=self.keyword_count, max_attempts=self.max_attempts)
            bank = self.questions.find_by_language(request.lang)
            candidates = match_questions(sample.keywords, bank)

            url = _pick(resources, rng, NoMatchError)
            question = _pick(candidates, rng, NoQuestionMatchError)
            title, description = resolve_metadata(self.metadata, url)
        latency_ms = elapsed()

        logger.info(
            f"[suggest] lang={request.lang} ordinal={ordinal} resources={len(resources)} "
            f"pool={len(pool)} attempts={sample.attempts} degraded={sample.degraded} "
            f"candidates={len(candidates)} latency_ms={latency_ms}"
        )
        result = SuggestionResult(
            version=config.api_version(),
            question_id=question.question_id,
            question_number=ordinal,
            question_ja=question.question_ja,
            question_en=question.question_en,
            url=url,
            title=title,
            description=description,
        )
        return Suggestion(
            result=result,
            tokens=tokens,
            resources=resources,
            sample=sample,
            candidates=candidates,
            latency_ms=latency_ms,
        )

    def suggest(self, request: SuggestionRequest, ordinal: int, rng: random.Random | None = None) -> SuggestionResult:
        return self.run(request, ordinal, rng).result


def suggest(
    session: Session,
    phrase: str,
    lang: Lang,
    ordinal: int,
    rng: random.Random | None = None,
) -> SuggestionResult:
    """Single suggestion for phrase, backed by the stores of session."""
    engine = SuggestionEngine.from_session(session)
    return engine.suggest(SuggestionRequest(value=phrase, lang=lang), ordinal, rng)
