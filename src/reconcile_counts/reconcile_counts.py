"""Recompute denormalized post counts on categories and tags."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Protocol

logger = logging.getLogger(__name__)


class CountStore(Protocol):
    def list_categories(self) -> list[dict[str, Any]]: ...
    def list_tag_ids(self) -> list[Any]: ...
    def count_posts_in_category(self, category_id: Any) -> int: ...
    def count_posts_with_tag(self, tag_id: Any) -> int: ...
    def set_category_post_count(self, category_id: Any, count: int) -> None: ...
    def set_tag_post_count(self, tag_id: Any, count: int) -> None: ...
    def commit(self) -> None: ...


@dataclass
class ReconcileResult:
    categories_updated: int = 0
    tags_updated: int = 0


def reconcile_counts(store: CountStore) -> ReconcileResult:
    """
    Recompute post_count for every category and tag from the source tables.

    Counts are always derived from the posts and links themselves, so running
    this repeatedly yields the same values.
    """
    result = ReconcileResult()

    logger.info("Updating category post counts...")
    for category in store.list_categories():
        count = store.count_posts_in_category(category["id"]) or 0
        store.set_category_post_count(category["id"], count)
        logger.debug("Category %s: %d posts", category.get("name"), count)
        result.categories_updated += 1

    logger.info("Updating tag post counts...")
    for tag_id in store.list_tag_ids():
        count = store.count_posts_with_tag(tag_id) or 0
        store.set_tag_post_count(tag_id, count)
        result.tags_updated += 1

    store.commit()
    logger.info(
        "Post counts updated for %d categories and %d tags",
        result.categories_updated,
        result.tags_updated,
    )
    return result
