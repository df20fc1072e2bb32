"""Helper functions for the migrate_posts CLI."""

from __future__ import annotations

import argparse
import logging
from collections import Counter
from typing import Any, Protocol

from common.cli_helpers import add_config_argument, positive_int
from migrate_posts.models import ItemSummary

logger = logging.getLogger(__name__)

COMMANDS = ("migrate", "status", "summary")

STATUS_TABLES = (
    ("Posts", "nutrition_posts"),
    ("Tags", "tags"),
    ("Categories", "categories"),
)


class RowCounter(Protocol):
    def count_rows(self, table: str) -> int: ...


def parse_migrate_posts_args(argv: list[str] | None = None) -> argparse.Namespace:
    '''Parse CLI arguments for migrate_posts.'''

    parser = argparse.ArgumentParser(
        description="Migrate legacy nutrition items from JSON into the database.",
    )
    parser.add_argument(
        "command",
        nargs="?",
        default="migrate",
        choices=COMMANDS,
        help="migrate (default): migrate, reconcile counts and report status; "
        "status: report only; summary: analyze the input file only",
    )
    parser.add_argument(
        "--data-path",
        default=None,
        help="Path to the legacy JSON file (default: migration.data_path from config)",
    )
    parser.add_argument(
        "--batch-size",
        type=positive_int,
        default=None,
        help="Items per batch (default: migration.batch_size from config)",
    )
    add_config_argument(parser)
    return parser.parse_args(argv)


def summarize_items(items: list[dict[str, Any]]) -> ItemSummary:
    """Count source types, categories and tags across raw legacy items."""
    source_types: Counter[str] = Counter()
    categories: Counter[str] = Counter()
    total_tags = 0

    for item in items:
        source_types[str(item.get("sourceType"))] += 1
        categories[item.get("category") or "unknown"] += 1
        total_tags += len(item.get("tags") or [])

    return ItemSummary(
        total_items=len(items),
        source_types=dict(source_types),
        categories=dict(categories),
        total_tags=total_tags,
    )


def log_item_summary(summary: ItemSummary) -> None:
    logger.info("=== MIGRATION SUMMARY ===")
    logger.info("Total items to migrate: %d", summary.total_items)
    logger.info("Source types:")
    for source_type, count in sorted(summary.source_types.items()):
        logger.info("  %s: %d items", source_type, count)
    logger.info("Categories:")
    for category, count in sorted(summary.categories.items()):
        logger.info("  %s: %d items", category, count)
    logger.info("Total tags to process: %d", summary.total_tags)


def get_migration_status(store: RowCounter) -> dict[str, int]:
    """Return row counts for posts, tags and categories."""
    return {label: store.count_rows(table) for label, table in STATUS_TABLES}


def log_migration_status(store: RowCounter) -> dict[str, int]:
    status = get_migration_status(store)
    logger.info("Migration Status:")
    for label, count in status.items():
        logger.info("%s: %d", label, count)
    return status
