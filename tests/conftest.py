# =============================================
# File: tests/conftest.py
# Purpose: Shared fixtures: in-memory SQLite stores seeded with a small vocabulary/question bank
# =============================================
import sys, os
sys.path.append(os.path.dirname(os.path.dirname(__file__)))

import random

import pytest
from fastapi.testclient import TestClient
from sqlmodel import Session

from oborobot.db.models import Favorite, Question, Word
from oborobot.db.repo import init_db, make_engine, set_engine
from oborobot.utils.metrics import reset as metrics_reset

URL_A = "https://example.org/go-vs-python"
URL_B = "https://example.org/go-tour"
URL_G = "https://www.google.com/search?q=go"

USER_ID = "123e4567-e89b-12d3-a456-426614174000"


def qid(n: int) -> str:
    return f"5f{n:022d}"


def seed_words():
    return [
        Word.of("Go", URL_A, type="Noun", count=10, lang="en"),
        Word.of("Python", URL_A, type="Noun", count=9, lang="en"),
        Word.of("run", URL_A, type="Verb", count=8, lang="en"),
        Word.of("concurrency", URL_A, type="Noun", count=7, lang="en"),
        Word.of("goroutine", URL_A, type="Noun", count=6, lang="en"),
        Word.of("typing", URL_A, type="Noun", count=3, lang="en"),
        Word.of("Go", URL_B, type="Noun", count=5, lang="en"),
        Word.of("channel", URL_B, type="Noun", count=4, lang="en"),
        Word.of("compile", URL_B, type="Verb", count=2, lang="en"),
        Word.of("Go", URL_G, type="Noun", count=50, lang="en"),
        Word.of("search", URL_G, type="Noun", count=1, lang="en"),
    ]


def seed_questions():
    return [
        Question(id=qid(1), question_seed_en="Concurrency", question_seed_ja="並行処理", question_seed_type="Noun",
                 question_en="Are you comfortable with concurrency?", question_ja="並行処理は得意ですか?"),
        Question(id=qid(2), question_seed_en="concurrency", question_seed_ja="並行処理", question_seed_type="Noun",
                 question_en="Do you enjoy concurrency puzzles?", question_ja="並行処理のパズルは好きですか?"),
        Question(id=qid(3), question_seed_en="channel", question_seed_ja="チャネル", question_seed_type="Noun",
                 question_en="Have you used channels?", question_ja="チャネルを使ったことがありますか?", lang="en"),
        Question(id=qid(4), question_seed_en="typing", question_seed_ja="タイピング", question_seed_type="Verb",
                 question_en="Do you type fast?", question_ja="タイプは速いですか?"),
        Question(id=qid(5), question_seed_en="goroutine", question_seed_ja="ゴルーチン", question_seed_type="Noun",
                 question_en="Do you know goroutines?", question_ja="ゴルーチンを知っていますか?", lang="ja"),
        Question(id=qid(6), question_seed_en="typing", question_seed_ja="型付け", question_seed_type="Noun",
                 question_en="Do you prefer static typing?", question_ja="静的型付けが好きですか?"),
        Question(id=qid(7), question_seed_en="Go", question_seed_ja="Go", question_seed_type="Noun",
                 question_en="Which Go feature do you like most?", question_ja="Goのどの機能が好きですか?"),
    ]


def seed_favorites():
    return [Favorite(href=URL_A, title="Go vs Python", description="Why we switched", is_checked=True)]


class FakeVocabulary:
    """List-backed vocabulary with the same lookups as VocabularyStore."""

    def __init__(self, words):
        self.words = list(words)

    def find_terms_by_value(self, normalized_value):
        return [w for w in self.words if w.upper_value == normalized_value]

    def find_terms_by_resource(self, href):
        return sorted((w for w in self.words if w.href == href), key=lambda w: -w.count)


class FirstChoiceRandom(random.Random):
    """Always picks the first element; forces every with-replacement draw to collide."""

    def choice(self, seq):
        return seq[0]


@pytest.fixture
def engine():
    eng = make_engine("sqlite://")
    init_db(eng)
    return eng


@pytest.fixture
def seeded_engine(engine):
    with Session(engine) as s:
        s.add_all(seed_words())
        s.add_all(seed_questions())
        s.add_all(seed_favorites())
        s.commit()
    return engine


@pytest.fixture
def session(seeded_engine):
    with Session(seeded_engine) as s:
        yield s


def mount_client(engine, seed: int | None = 7) -> TestClient:
    from oborobot.main import app
    from oborobot.routers.question import get_rng

    set_engine(engine)
    metrics_reset()
    app.dependency_overrides.clear()
    if seed is not None:
        app.dependency_overrides[get_rng] = lambda: random.Random(seed)
    return TestClient(app)


@pytest.fixture
def client(seeded_engine):
    c = mount_client(seeded_engine)
    yield c
    c.app.dependency_overrides.clear()
