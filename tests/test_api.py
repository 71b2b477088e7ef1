"""
Integration tests for the HTTP API.
"""

import pytest
from fastapi.testclient import TestClient

from api import create_app
from core.relevance import RelevanceEngine


@pytest.fixture
def client(corpus):
    return TestClient(create_app(RelevanceEngine(corpus, allowed_general_tags=["g1"])))


class TestApi:
    """Test query endpoints against the shared corpus."""

    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "ok", "records": 5}

    def test_top_tags(self, client):
        response = client.get("/tags/top", params={"metric": "reactions", "limit": 2})
        assert response.status_code == 200
        assert response.json()["results"] == [
            {"tag": "X", "count": 3, "category": "character"},
            {"tag": "g1", "count": 3, "category": "general"},
        ]

    def test_top_tags_without_whitelist(self, client):
        response = client.get("/tags/top", params={"categories": ["general"], "use_whitelist": "false"})
        assert [row["tag"] for row in response.json()["results"]] == ["g1", "g2", "g3"]

    def test_top_users(self, client):
        response = client.get("/users/top", params={"metric": "posts"})
        assert response.json()["results"][0] == {"userId": "alice", "count": 2}

    def test_user_tags_and_neighbors(self, client):
        tags = client.get("/users/alice/tags", params={"category": "character"}).json()["results"]
        assert [row["tag"] for row in tags] == ["X", "Y"]
        graph = client.get("/users/alice/neighbors", params={"allowed_categories": ["user"]}).json()
        assert graph["nodes"][0] == {"id": "alice", "name": "alice", "category": "user", "value": 3}
        assert [link["target"] for link in graph["links"]] == ["bob", "carol"]

    def test_tag_neighbors(self, client):
        graph = client.get("/tags/X/neighbors").json()
        assert graph["nodes"][0]["value"] == 5
        assert {link["target"] for link in graph["links"]} == {"g1", "C"}

    def test_fans(self, client):
        fans = client.get("/fans", params={"limit": 1}).json()["results"]
        assert fans == [{"tag": "X", "category": "character", "fanUserId": "bob", "fanCount": 2, "totalCount": 5}]
        shares = client.get("/tags/X/fans", params={"category": "character"}).json()["results"]
        assert [row["userId"] for row in shares] == ["bob", "alice", "carol"]

    def test_network(self, client):
        graph = client.get("/network", params={"allowed_categories": ["user"]}).json()
        assert graph["links"] == [{"source": "alice", "target": "bob", "value": 3}]

    def test_negative_limit_rejected(self, client):
        assert client.get("/tags/top", params={"limit": -1}).status_code == 422

    def test_missing_engine(self):
        client = TestClient(create_app())
        assert client.get("/health").json()["records"] == 0
        assert client.get("/tags/top").status_code == 500
