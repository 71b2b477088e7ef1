"""
Tests for global user ranking.
"""

from core.models.domain import Metric
from core.relevance.users import get_top_users

from .conftest import make_record


def as_pairs(users):
    return [(user.user_id, user.count) for user in users]


class TestTopUsers:
    """Test user ranking per metric."""

    def test_scenario_interactions(self, scenario_record):
        assert sorted(as_pairs(get_top_users([scenario_record]))) == [("alice", 1), ("bob", 1), ("carol", 1)]

    def test_scenario_reactions_excludes_author(self, scenario_record):
        users = get_top_users([scenario_record], metric=Metric.REACTIONS)
        assert as_pairs(users) == [("bob", 1), ("carol", 1)]

    def test_interactions(self, corpus):
        assert as_pairs(get_top_users(corpus)) == [("bob", 3), ("alice", 3), ("carol", 2), ("dave", 1)]

    def test_posts_count_one_per_authored_record(self, corpus):
        assert as_pairs(get_top_users(corpus, metric="posts")) == [("alice", 2), ("bob", 1), ("carol", 1)]

    def test_posts_ignores_reactor_count(self):
        records = [
            make_record("1.png", "alice", ["b", "c", "d", "e"]),
            make_record("2.png", "alice", []),
        ]
        assert as_pairs(get_top_users(records, metric=Metric.POSTS)) == [("alice", 2)]

    def test_reactions_count_every_reaction(self, corpus):
        assert as_pairs(get_top_users(corpus, metric=Metric.REACTIONS)) == [
            ("bob", 2),
            ("alice", 2),
            ("carol", 1),
            ("dave", 1),
        ]

    def test_popularity_ranks_like_interactions(self, corpus):
        assert get_top_users(corpus, metric=Metric.POPULARITY) == get_top_users(corpus)

    def test_limit_and_empty_input(self, corpus):
        assert len(get_top_users(corpus, limit=2)) == 2
        assert get_top_users([]) == []
