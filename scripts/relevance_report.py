# Path: scripts/relevance_report.py
# Purpose: CLI tool to print relevance statistics for a dataset.
# Layer: scripts.
# Details: Demonstrates how to wire settings, dataset loading, and the relevance engine together.

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

# Ensure project root is on sys.path when running as a script.
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from config import AppSettings
from core.datasets import DatasetLoader
from core.models.domain import Metric
from core.relevance import RelevanceEngine

QUERIES = (
    "top-tags",
    "top-users",
    "user-tags",
    "tag-neighbors",
    "user-neighbors",
    "fans",
    "fan-breakdown",
    "network",
)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Print tag relevance statistics for a dataset")
    parser.add_argument("query", choices=QUERIES, help="Statistic to compute")
    parser.add_argument("--data-dir", type=Path, default=None, help="Folder containing dataset JSON files")
    parser.add_argument("--dataset", type=str, default=None, help="Dataset name (default, gelbooru, ...)")
    parser.add_argument(
        "--metric", type=str, default=None, choices=[metric.value for metric in Metric], help="Weighting metric"
    )
    parser.add_argument("--limit", type=int, default=None, help="Maximum number of results")
    parser.add_argument("--tag", type=str, default=None, help="Tag for tag-neighbors and fan-breakdown")
    parser.add_argument("--user", type=str, default=None, help="User for user-tags and user-neighbors")
    parser.add_argument("--category", type=str, default=None, help="Restrict to one tag category")
    parser.add_argument("--with-users", action="store_true", help="Include user nodes in graph queries")
    parser.add_argument("--no-whitelist", action="store_true", help="Do not filter generic general tags")
    parser.add_argument("--show-progress", action="store_true", help="Show a progress bar while loading")
    parser.add_argument("--json", action="store_true", help="Print results as JSON")
    return parser


def _allowed_categories(args: argparse.Namespace) -> Optional[List[str]]:
    if not args.with_users and args.category is None:
        return None
    categories = [args.category] if args.category else ["character", "copyright", "artist", "general"]
    if args.with_users:
        categories.append("user")
    return categories


def run_query(engine: RelevanceEngine, args: argparse.Namespace):
    """Dispatch the requested query and return a JSON-serializable payload."""

    use_whitelist = not args.no_whitelist
    if args.query == "top-tags":
        results = engine.top_tags(
            category=args.category, limit=args.limit, metric=args.metric, use_whitelist=use_whitelist
        )
    elif args.query == "top-users":
        results = engine.top_users(limit=args.limit, metric=args.metric)
    elif args.query == "user-tags":
        results = engine.top_user_tags(
            args.user, category=args.category, limit=args.limit, metric=args.metric, use_whitelist=use_whitelist
        )
    elif args.query == "fans":
        categories = [args.category] if args.category else None
        results = engine.biggest_fans(
            limit=args.limit, categories=categories, metric=args.metric, use_whitelist=use_whitelist
        )
    elif args.query == "fan-breakdown":
        results = engine.tag_fan_breakdown(args.tag, args.category or "general", metric=args.metric)
    elif args.query == "tag-neighbors":
        return engine.tag_neighbors(
            args.tag,
            limit=args.limit,
            allowed_categories=_allowed_categories(args),
            metric=args.metric,
            use_whitelist=use_whitelist,
        ).to_dict()
    elif args.query == "user-neighbors":
        return engine.user_neighbors(
            args.user,
            limit=args.limit,
            allowed_categories=_allowed_categories(args),
            metric=args.metric,
            use_whitelist=use_whitelist,
        ).to_dict()
    else:
        return engine.global_network(
            limit=args.limit,
            allowed_categories=_allowed_categories(args),
            metric=args.metric,
            use_whitelist=use_whitelist,
        ).to_dict()
    return [item.to_dict() for item in results]


def _print_payload(payload) -> None:
    if isinstance(payload, dict):
        for node in payload["nodes"]:
            print(f"node {node['id']} [{node['category']}] value={node['value']}")
        for link in payload["links"]:
            print(f"link {link['source']} -- {link['target']} value={link['value']}")
        return
    for row in payload:
        print(" ".join(f"{key}={value}" for key, value in row.items()))


def main(argv: Optional[List[str]] = None) -> int:
    """Load a dataset and print the requested statistic."""

    parser = build_parser()
    args = parser.parse_args(argv)
    if args.query in ("user-tags", "user-neighbors") and not args.user:
        parser.error(f"{args.query} requires --user")
    if args.query in ("tag-neighbors", "fan-breakdown") and not args.tag:
        parser.error(f"{args.query} requires --tag")

    settings = AppSettings.from_env()
    if args.data_dir is not None:
        settings.dataset.data_dir = args.data_dir
    if args.show_progress:
        settings.dataset.show_progress = True
    logging.basicConfig(level=settings.log_level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    loaded = DatasetLoader(settings.dataset).load(args.dataset or settings.default_dataset)
    if not loaded.ok:
        print(f"Error: {loaded.error}", file=sys.stderr)
        return 1

    engine = RelevanceEngine(loaded.records, allowed_general_tags=loaded.whitelist, settings=settings.query)
    payload = run_query(engine, args)
    if args.json:
        print(json.dumps(payload, indent=2, ensure_ascii=False))
    else:
        _print_payload(payload)
    return 0


if __name__ == "__main__":
    sys.exit(main())
