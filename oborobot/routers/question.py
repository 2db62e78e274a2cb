# oborobot/routers/question.py
from __future__ import annotations

import random
from typing import List, Literal

from fastapi import APIRouter, Depends, Request
from pydantic import BaseModel, ConfigDict, Field
from sqlmodel import Session

from oborobot import config
from oborobot.db.repo import AnswerHistoryStore, get_session
from oborobot.services.suggest import SuggestionEngine, SuggestionRequest, SuggestionResult
from oborobot.utils import slog
from oborobot.utils.metrics import record_answer, record_suggestion

router = APIRouter(prefix="/api", tags=["question"])


# --------- Schemas ---------

class QuestionRequest(BaseModel):
    """
    First question of a session.
    - userID: client-generated UUID (36 chars).
    - value: the user's search phrase.
    - lang: "ja" | "en".
    """
    model_config = ConfigDict(populate_by_name=True)

    user_id: str = Field(..., alias="userID", min_length=36, max_length=36)
    value: str = Field(..., min_length=1, max_length=500)
    lang: Literal["ja", "en"]


class QuestionAnswerRequest(BaseModel):
    """
    Answer to question N; the response carries question N+1 for the same phrase.
    """
    model_config = ConfigDict(populate_by_name=True)

    question_id: str = Field(..., alias="questionID", min_length=24, max_length=24)
    user_id: str = Field(..., alias="userID", min_length=36, max_length=36)
    question_number: int = Field(..., alias="questionNumber", ge=1)
    question_answer_id: int = Field(..., alias="questionAnswerID", ge=1, le=5)
    question_value: str = Field(..., alias="questionValue", min_length=1, max_length=500)
    lang: Literal["ja", "en"]


class QuestionResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    version: str
    question_id: str = Field(..., alias="questionID")
    question_number: int = Field(..., alias="questionNumber")
    question_ja: str = Field(..., alias="questionJA")
    question_en: str = Field(..., alias="questionEN")
    url: str
    title: str
    description: str

    @classmethod
    def from_result(cls, r: SuggestionResult) -> "QuestionResponse":
        return cls(**r.model_dump())


# --------- Dependencies ---------

def get_rng() -> random.Random:
    """Fresh generator per request; tests override this to pin the picks."""
    return random.Random()


def _suggest(session: Session, rng: random.Random, phrase: str, lang: str, ordinal: int) -> List[QuestionResponse]:
    engine = SuggestionEngine.from_session(session)
    s = engine.run(SuggestionRequest(value=phrase, lang=lang), ordinal, rng)
    record_suggestion(s.latency_ms)
    return [QuestionResponse.from_result(s.result)]


# --------- Routes ---------

@router.post("/question", response_model=List[QuestionResponse])
def post_question(
    req: QuestionRequest,
    request: Request,
    session: Session = Depends(get_session),
    rng: random.Random = Depends(get_rng),
) -> List[QuestionResponse]:
    """Register the user if new, then suggest question #1 for the phrase."""
    slog.set_context(request, user_id=req.user_id, qhash=slog.qhash(req.value), lang=req.lang, question_number=1)
    created = AnswerHistoryStore(session).ensure_user(req.user_id)
    slog.add_context(request, new_user=created)
    return _suggest(session, rng, req.value, req.lang, 1)


@router.post("/questionAnswer", response_model=List[QuestionResponse])
def post_question_answer(
    req: QuestionAnswerRequest,
    request: Request,
    session: Session = Depends(get_session),
    rng: random.Random = Depends(get_rng),
) -> List[QuestionResponse]:
    """Append the answer to the user's history and suggest the next question."""
    next_number = req.question_number + 1
    slog.set_context(
        request,
        user_id=req.user_id,
        qhash=slog.qhash(req.question_value),
        lang=req.lang,
        question_number=next_number,
    )
    AnswerHistoryStore(session).append(
        user_id=req.user_id,
        question_id=req.question_id,
        ordinal=req.question_number,
        answer_choice=req.question_answer_id,
        lang=req.lang,
        version=config.api_version(),
    )
    record_answer()
    return _suggest(session, rng, req.question_value, req.lang, next_number)
