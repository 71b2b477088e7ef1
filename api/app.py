# Path: api/app.py
# Purpose: Expose a FastAPI application for tag relevance queries.
# Layer: api.
# Details: Provides health checks and read-only endpoints delegating to the relevance engine.

from __future__ import annotations

from typing import Any, Dict, List, Optional

from core.relevance.engine import RelevanceEngine


def create_app(engine: Optional[RelevanceEngine] = None):  # type: ignore[override]
    """Create a FastAPI app instance configured with the provided relevance engine."""

    from fastapi import FastAPI, HTTPException, Query

    app = FastAPI(title="Tag Relevance API", version="0.1.0")

    def require_engine() -> RelevanceEngine:
        if engine is None:
            raise HTTPException(status_code=500, detail="Relevance engine is not configured.")
        return engine

    @app.get("/health")
    def health() -> Dict[str, Any]:
        """Return a simple health status payload."""

        return {"status": "ok", "records": len(engine) if engine is not None else 0}

    @app.get("/tags/top")
    def top_tags(
        category: Optional[str] = None,
        categories: Optional[List[str]] = Query(None),
        limit: Optional[int] = Query(None, ge=0),
        min_support: Optional[int] = None,
        metric: Optional[str] = None,
        use_whitelist: bool = True,
    ):
        """Rank tags across the whole dataset."""

        results = require_engine().top_tags(
            category=category,
            categories=categories,
            limit=limit,
            min_support=min_support,
            metric=metric,
            use_whitelist=use_whitelist,
        )
        return {"results": [item.to_dict() for item in results]}

    @app.get("/users/top")
    def top_users(limit: Optional[int] = Query(None, ge=0), metric: Optional[str] = None):
        """Rank users by their aggregate weight."""

        results = require_engine().top_users(limit=limit, metric=metric)
        return {"results": [item.to_dict() for item in results]}

    @app.get("/users/{user_id}/tags")
    def user_tags(
        user_id: str,
        category: Optional[str] = None,
        limit: Optional[int] = Query(None, ge=0),
        metric: Optional[str] = None,
        use_whitelist: bool = True,
    ):
        """Rank the tags of the records a user is active on."""

        results = require_engine().top_user_tags(
            user_id, category=category, limit=limit, metric=metric, use_whitelist=use_whitelist
        )
        return {"results": [item.to_dict() for item in results]}

    @app.get("/users/{user_id}/neighbors")
    def user_neighbors(
        user_id: str,
        limit: Optional[int] = Query(None, ge=0),
        allowed_categories: Optional[List[str]] = Query(None),
        metric: Optional[str] = None,
        use_whitelist: bool = True,
    ):
        """Star graph of tags and users around a user."""

        graph = require_engine().user_neighbors(
            user_id,
            limit=limit,
            allowed_categories=allowed_categories,
            metric=metric,
            use_whitelist=use_whitelist,
        )
        return graph.to_dict()

    @app.get("/tags/{tag}/neighbors")
    def tag_neighbors(
        tag: str,
        limit: Optional[int] = Query(None, ge=0),
        min_cooccurrence: Optional[int] = None,
        allowed_categories: Optional[List[str]] = Query(None),
        metric: Optional[str] = None,
        use_whitelist: bool = True,
    ):
        """Star graph of tags and users co-occurring with a tag."""

        graph = require_engine().tag_neighbors(
            tag,
            limit=limit,
            min_cooccurrence=min_cooccurrence,
            allowed_categories=allowed_categories,
            metric=metric,
            use_whitelist=use_whitelist,
        )
        return graph.to_dict()

    @app.get("/tags/{tag}/fans")
    def tag_fans(tag: str, category: str = "general", metric: Optional[str] = None):
        """Share of a tag's weight held by each contributing user."""

        results = require_engine().tag_fan_breakdown(tag, category, metric=metric)
        return {"results": [item.to_dict() for item in results]}

    @app.get("/fans")
    def biggest_fans(
        limit: Optional[int] = Query(None, ge=0),
        categories: Optional[List[str]] = Query(None),
        metric: Optional[str] = None,
        use_whitelist: bool = True,
    ):
        """The biggest fan of every tag."""

        results = require_engine().biggest_fans(
            limit=limit, categories=categories, metric=metric, use_whitelist=use_whitelist
        )
        return {"results": [item.to_dict() for item in results]}

    @app.get("/network")
    def network(
        limit: Optional[int] = Query(None, ge=0),
        min_cooccurrence: Optional[int] = None,
        allowed_categories: Optional[List[str]] = Query(None),
        metric: Optional[str] = None,
        use_whitelist: bool = True,
    ):
        """Corpus-wide network of top tags and, optionally, top users."""

        graph = require_engine().global_network(
            limit=limit,
            min_cooccurrence=min_cooccurrence,
            allowed_categories=allowed_categories,
            metric=metric,
            use_whitelist=use_whitelist,
        )
        return graph.to_dict()

    return app
