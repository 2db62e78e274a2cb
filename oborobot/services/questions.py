# =============================================
# File: oborobot/services/questions.py
# Purpose: Match sampled keywords against the question bank's seed terms
# =============================================
from __future__ import annotations

from typing import Iterable, List, Sequence

from pydantic import BaseModel

from oborobot import config
from oborobot.errors import NoQuestionMatchError


class CandidateQuestion(BaseModel):
    question_id: str
    question_ja: str
    question_en: str
    keyword: str


def _seed_matches(question, keyword_upper: str) -> bool:
    return (
        (question.question_seed_en or "").upper() == keyword_upper
        or (question.question_seed_ja or "").upper() == keyword_upper
    )


def _already_covered(accepted_texts: List[str], keyword_upper: str) -> bool:
    return any(keyword_upper in text for text in accepted_texts)


def match_questions(keywords: Sequence[str], questions: Iterable) -> List[CandidateQuestion]:
    """
    Questions whose seed term equals one of the keywords (case-insensitive).

    Verb-seeded questions never match. A keyword already contained in the text
    of a previously accepted question does not count for later questions; the
    first keyword (in sample order) that still counts accepts the question.
    Raises NoQuestionMatchError when nothing is accepted.
    """
    accepted: List[CandidateQuestion] = []
    # upper-cased ja/en texts of accepted questions
    accepted_texts: List[str] = []
    for q in questions:
        if q.question_seed_type == config.VERB:
            continue
        for keyword in keywords:
            kw = keyword.upper()
            if not _seed_matches(q, kw):
                continue
            if _already_covered(accepted_texts, kw):
                continue
            accepted.append(
                CandidateQuestion(
                    question_id=q.id,
                    question_ja=q.question_ja or "",
                    question_en=q.question_en or "",
                    keyword=keyword,
                )
            )
            accepted_texts.append((q.question_ja or "").upper())
            accepted_texts.append((q.question_en or "").upper())
            break

    if not accepted:
        raise NoQuestionMatchError()
    return accepted
