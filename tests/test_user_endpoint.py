# =============================================
# File: tests/test_user_endpoint.py
# =============================================
import sys, os
sys.path.append(os.path.dirname(os.path.dirname(__file__)))

from sqlmodel import Session, select

from conftest import URL_B
from oborobot.db.models import Favorite, UserQuery


def test_user_query_is_logged(client, seeded_engine):
    r = client.post("/api/user/query", json={"href": "https://www.google.com/search?q=go", "searchValue": "go", "isChecked": True})
    assert r.status_code == 200
    assert r.json() == [{"version": "v0.0.1"}]
    with Session(seeded_engine) as s:
        rows = s.exec(select(UserQuery)).all()
    assert len(rows) == 1
    assert rows[0].search_value == "go" and rows[0].is_checked

def test_user_favorite_is_stored(client, seeded_engine):
    r = client.post("/api/user/favorite", json={"href": URL_B, "isChecked": True})
    assert r.status_code == 200
    assert r.json()[0]["version"] == "v0.0.1"
    with Session(seeded_engine) as s:
        fav = s.exec(select(Favorite).where(Favorite.href == URL_B)).first()
    assert fav is not None and fav.is_checked and fav.title == ""

def test_favorite_requires_href(client):
    assert client.post("/api/user/favorite", json={"isChecked": True}).status_code == 422

def test_api_version_from_env(client, monkeypatch):
    monkeypatch.setenv("API_VERSION", "v9.9.9")
    r = client.post("/api/user/query", json={"href": "x", "searchValue": "y"})
    assert r.json() == [{"version": "v9.9.9"}]
