"""Tests for web/app.py — JSON endpoints via the Flask test client."""

from __future__ import annotations

import pytest

from config.settings import Settings
from core.models import Dataset
from web.app import create_app


@pytest.fixture
def dataset() -> Dataset:
    return Dataset.model_validate(
        {
            "graphs": [
                {
                    "title": "Social Media Trends",
                    "sources": [
                        {
                            "source": "S1",
                            "topics": [
                                {"topic": "AI", "count": 10, "type": "trending"},
                                {"topic": "Crypto", "count": 5, "type": "rising"},
                            ],
                        },
                        {"source": "S2", "topics": [{"topic": "AI", "count": 7, "type": "trending"}]},
                    ],
                },
                {"title": "Trending Conversations", "data": {"Google": {"Jan": 5}, "Reddit": {"Jan": 8}}},
                {"title": "News Topic Counts of Articles", "data": {"AI": {"count": 4}}},
            ],
            "Reddit": {"trending_topics": [{"topic": "AI", "count": 40}, {"topic": "Crypto", "count": 9}]},
        }
    )


@pytest.fixture
def client(tmp_path, monkeypatch, dataset):
    monkeypatch.setenv("DB_PATH", str(tmp_path / "users.db"))
    for name in ("TOP_N", "HIGH_DEMAND_THRESHOLD", "UNTAPPED_THRESHOLD", "HIGH_DEMAND_POLARITY"):
        monkeypatch.delenv(name, raising=False)
    app = create_app(Settings(), dataset)
    app.config["TESTING"] = True
    return app.test_client()


class TestDashboardApi:
    def test_index(self, client):
        assert client.get("/").status_code == 200

    def test_report(self, client):
        body = client.get("/api/report").get_json()
        assert set(body) == {"top_topics", "classification", "overlap", "engagement", "newsroom"}
        assert body["top_topics"][0] == {"topic": "AI", "total_count": 17, "type": "trending"}

    def test_top_topics_limit(self, client):
        body = client.get("/api/topics/top?limit=1").get_json()
        assert [t["topic"] for t in body] == ["AI"]

    def test_top_topics_bad_limit(self, client):
        assert client.get("/api/topics/top?limit=abc").status_code == 400
        assert client.get("/api/topics/top?limit=-2").status_code == 400

    def test_classification(self, client):
        body = client.get("/api/topics/classification").get_json()
        assert [t["topic"] for t in body["high_demand"]] == ["AI"]
        assert [t["topic"] for t in body["untapped"]] == ["Crypto"]

    def test_overlap(self, client):
        assert client.get("/api/overlap").get_json() == [{"source": "Reddit", "percentage": 50.0}]

    def test_engagement(self, client):
        body = client.get("/api/engagement?month=Jan").get_json()
        assert [r["platform"] for r in body] == ["Reddit", "Google"]

    def test_newsroom(self, client):
        assert client.get("/api/newsroom").get_json() == [{"topic": "AI", "count": 4}]

    def test_unknown_route_is_404(self, client):
        assert client.get("/api/nope").status_code == 404


class TestAuthApi:
    def test_signup_then_login(self, client):
        resp = client.post("/signup", json={"username": "alice", "password": "pw"})
        assert resp.status_code == 201

        resp = client.post("/login", json={"username": "alice", "password": "pw"})
        assert resp.status_code == 200
        assert resp.get_json()["message"] == "Login successful"

    def test_duplicate_signup(self, client):
        client.post("/signup", json={"username": "alice", "password": "pw"})
        resp = client.post("/signup", json={"username": "alice", "password": "pw"})
        assert resp.status_code == 400
        assert resp.get_json()["message"] == "Username already taken"

    def test_signup_missing_fields(self, client):
        assert client.post("/signup", json={}).status_code == 400

    def test_signup_non_string_username(self, client):
        resp = client.post("/signup", json={"username": 123, "password": "pw"})
        assert resp.status_code == 400

    def test_login_non_string_password(self, client):
        client.post("/signup", json={"username": "alice", "password": "pw"})
        assert client.post("/login", json={"username": "alice", "password": 1}).status_code == 400

    def test_login_wrong_password(self, client):
        client.post("/signup", json={"username": "alice", "password": "pw"})
        resp = client.post("/login", json={"username": "alice", "password": "nope"})
        assert resp.status_code == 400
        assert resp.get_json()["message"] == "Invalid username or password"
