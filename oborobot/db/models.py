# =============================================
# File: oborobot/db/models.py
# Purpose: SQLModel ORM definitions: vocabulary terms, question bank, resource metadata (favorites),
#          user query log and per-user answer history.
# =============================================

from sqlmodel import SQLModel, Field
from typing import Optional
from datetime import datetime, timezone


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Word(SQLModel, table=True):
    """A vocabulary term linking one word to one resource (href)."""
    id: Optional[int] = Field(default=None, primary_key=True)
    section_name: str = ""
    type: str = ""
    lang: str = ""
    href: str = Field(index=True)
    count: int = 0
    value: str
    upper_value: str = Field(index=True)
    jp_nickname: str = ""

    @classmethod
    def of(cls, value: str, href: str, **kw) -> "Word":
        # upper_value is always derived from value
        return cls(value=value, upper_value=value.upper(), href=href, **kw)


class Question(SQLModel, table=True):
    id: str = Field(primary_key=True, min_length=1, max_length=64)
    question_ja: str = ""
    question_en: str = ""
    question_seed_ja: str = ""
    question_seed_en: str = ""
    question_seed_type: str = ""
    translated_from_ja_to_en: str = ""
    lang: Optional[str] = Field(default=None, index=True)


class Favorite(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    version: str = ""
    href: str = Field(index=True)
    is_checked: bool = False
    title: str = ""
    description: str = ""


class UserQuery(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    version: str = ""
    href: str = ""
    search_value: str = ""
    is_checked: bool = False
    ts: datetime = Field(default_factory=_utcnow)


class User(SQLModel, table=True):
    id: str = Field(primary_key=True)
    ts: datetime = Field(default_factory=_utcnow)


class AnswerRecord(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: str = Field(index=True, foreign_key="user.id")
    question_id: str
    question_number: int
    question_answer_id: int
    lang: str
    version: str = ""
    ts: datetime = Field(default_factory=_utcnow)
