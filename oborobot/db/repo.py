# =============================================
# File: oborobot/db/repo.py
# Purpose: DB repository bootstrap (engine from DB_URL, default SQLite) and the stores the
#          suggestion pipeline reads from / the service layer appends to.
# =============================================
from __future__ import annotations

import threading
from contextlib import contextmanager
from typing import Iterator, List, Optional

from loguru import logger
from sqlalchemy.exc import DisconnectionError, InterfaceError, OperationalError
from sqlalchemy.exc import TimeoutError as PoolTimeoutError
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel, Session, create_engine, select, col, or_

from oborobot import config
from oborobot.db.models import AnswerRecord, Favorite, Question, User, UserQuery, Word
from oborobot.errors import StoreUnavailableError

_engine = None
_engine_lock = threading.Lock()

# store-side failures only; other SQLAlchemy errors propagate unchanged
_UNAVAILABLE = (OperationalError, InterfaceError, DisconnectionError, PoolTimeoutError)


def make_engine(url: str | None = None, timeout: float | None = None):
    url = url or config.db_url()
    timeout = timeout if timeout is not None else config.store_timeout_seconds()
    if url.startswith("sqlite"):
        kwargs = {"connect_args": {"check_same_thread": False, "timeout": timeout}}
        # in-memory databases live as long as their single connection
        if url in ("sqlite://", "sqlite:///:memory:"):
            kwargs["poolclass"] = StaticPool
        return create_engine(url, echo=False, **kwargs)
    return create_engine(url, echo=False, pool_timeout=timeout, pool_pre_ping=True)


def get_engine():
    global _engine
    if _engine is None:
        with _engine_lock:
            if _engine is None:
                _engine = make_engine()
    return _engine


def set_engine(engine) -> None:
    """For tests: swap the process-wide engine."""
    global _engine
    _engine = engine


def init_db(engine=None) -> None:
    try:
        SQLModel.metadata.create_all(engine or get_engine())
    except _UNAVAILABLE as e:
        raise StoreUnavailableError(str(e)) from e


def get_session() -> Iterator[Session]:
    """FastAPI dependency: one session per request."""
    with Session(get_engine()) as session:
        yield session


@contextmanager
def _guard(op: str):
    try:
        yield
    except _UNAVAILABLE as e:
        logger.warning(f"[store] {op} failed: {e}")
        raise StoreUnavailableError(f"{op}: {e.__class__.__name__}") from e


class VocabularyStore:
    """Term lookups by normalized value and by resource."""

    def __init__(self, session: Session) -> None:
        self._session = session

    def find_terms_by_value(self, normalized_value: str) -> List[Word]:
        with _guard("word.find_by_value"):
            stmt = select(Word).where(Word.upper_value == normalized_value).order_by(Word.id)
            return list(self._session.exec(stmt).all())

    def find_terms_by_resource(self, href: str) -> List[Word]:
        """Terms of one resource, most used first."""
        with _guard("word.find_by_resource"):
            stmt = (
                select(Word)
                .where(Word.href == href)
                .order_by(col(Word.count).desc(), Word.id)
            )
            return list(self._session.exec(stmt).all())


class QuestionStore:
    def __init__(self, session: Session) -> None:
        self._session = session

    def find_by_language(self, lang: str) -> List[Question]:
        # untagged questions serve every language
        with _guard("question.find_by_language"):
            stmt = (
                select(Question)
                .where(or_(Question.lang == lang, col(Question.lang).is_(None)))
                .order_by(Question.id)
            )
            return list(self._session.exec(stmt).all())


class MetadataStore:
    def __init__(self, session: Session) -> None:
        self._session = session

    def find_by_resource(self, href: str) -> Optional[Favorite]:
        with _guard("favorite.find_by_resource"):
            stmt = select(Favorite).where(Favorite.href == href).order_by(Favorite.id)
            return self._session.exec(stmt).first()

    def add(self, href: str, is_checked: bool, version: str) -> Favorite:
        fav = Favorite(href=href, is_checked=is_checked, version=version)
        with _guard("favorite.add"):
            self._session.add(fav)
            self._session.commit()
            self._session.refresh(fav)
        return fav


class QueryLogStore:
    def __init__(self, session: Session) -> None:
        self._session = session

    def add(self, href: str, search_value: str, is_checked: bool, version: str) -> UserQuery:
        row = UserQuery(href=href, search_value=search_value, is_checked=is_checked, version=version)
        with _guard("query.add"):
            self._session.add(row)
            self._session.commit()
            self._session.refresh(row)
        return row


class AnswerHistoryStore:
    """Append-only answer log keyed by user identity."""

    def __init__(self, session: Session) -> None:
        self._session = session

    def ensure_user(self, user_id: str) -> bool:
        """Register the user when unknown. Returns True when a row was created."""
        with _guard("user.ensure"):
            if self._session.get(User, user_id) is not None:
                return False
            self._session.add(User(id=user_id))
            self._session.commit()
            return True

    def append(
        self,
        user_id: str,
        question_id: str,
        ordinal: int,
        answer_choice: int,
        lang: str,
        version: str = "",
    ) -> AnswerRecord:
        self.ensure_user(user_id)
        rec = AnswerRecord(
            user_id=user_id,
            question_id=question_id,
            question_number=ordinal,
            question_answer_id=answer_choice,
            lang=lang,
            version=version,
        )
        with _guard("answer.append"):
            self._session.add(rec)
            self._session.commit()
            self._session.refresh(rec)
        return rec

    def history(self, user_id: str) -> List[AnswerRecord]:
        with _guard("answer.history"):
            stmt = select(AnswerRecord).where(AnswerRecord.user_id == user_id).order_by(AnswerRecord.id)
            return list(self._session.exec(stmt).all())
