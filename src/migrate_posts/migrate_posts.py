"""Batch migration of legacy nutrition items into the destination store."""

from __future__ import annotations

import logging
import math
import time
from dataclasses import asdict
from typing import Any, Callable, Protocol

from migrate_posts.models import LegacyItem, MigrationResult, TransformedItem
from migrate_posts.resolvers import CategoryResolver, TagResolver
from migrate_posts.transform import transform_item

logger = logging.getLogger(__name__)

DEFAULT_BATCH_SIZE = 10
DEFAULT_BATCH_DELAY = 0.1


class MigrationError(RuntimeError):
    """Raised when a precondition for migrating fails."""


class PostStore(Protocol):
    def list_categories(self) -> list[dict[str, Any]]: ...
    def get_category_id(self, name: str) -> Any | None: ...
    def find_or_create_tag(self, name: str) -> Any: ...
    def insert_post(self, post: dict[str, Any]) -> Any | None: ...
    def link_post_tag(self, post_id: Any, tag_id: Any) -> None: ...
    def commit(self) -> None: ...
    def rollback(self) -> None: ...


def _link_tags(
    transformed: TransformedItem,
    post_id: Any,
    tag_resolver: TagResolver,
    store: PostStore,
    result: MigrationResult,
) -> None:
    """Link each tag to the post; a failing tag never fails the post."""
    for tag_name in transformed.tags:
        try:
            tag_id = tag_resolver.resolve(tag_name)
            if tag_id is None:
                continue
            store.link_post_tag(post_id, tag_id)
            result.tag_links += 1
        except Exception as e:
            logger.error(
                "Error linking tag %r for post %s: %s", tag_name, transformed.original_id, e
            )
            result.tag_errors += 1


def _migrate_item(
    raw: dict[str, Any],
    store: PostStore,
    category_resolver: CategoryResolver,
    tag_resolver: TagResolver,
    language: str,
    result: MigrationResult,
) -> None:
    item = LegacyItem.from_dict(raw)

    try:
        category_id = category_resolver.resolve(item.category)
        if category_id is None:
            raise MigrationError(f"no category row for legacy label {item.category!r}")
        transformed = transform_item(item, category_id, language=language)
        post_id = store.insert_post(asdict(transformed.post))
    except Exception as e:
        logger.error("Error processing item %s: %s", item.id, e)
        store.rollback()
        result.errors += 1
        result.failed_ids.append(item.id)
        return

    if post_id is None:
        logger.info("Skipped existing post: %s", item.id)
        result.skipped += 1
        store.commit()
        return

    logger.info("Migrated: %s -> %s", transformed.original_id, post_id)
    result.migrated += 1

    _link_tags(transformed, post_id, tag_resolver, store, result)
    store.commit()


def migrate_items(
    items: list[dict[str, Any]],
    store: PostStore,
    batch_size: int = DEFAULT_BATCH_SIZE,
    batch_delay: float = DEFAULT_BATCH_DELAY,
    language: str = "ko",
    sleep: Callable[[float], None] = time.sleep,
) -> MigrationResult:
    """
    Migrate raw legacy items into the store in fixed-size batches.

    Items are processed one at a time and committed individually; a failing
    item is logged, counted and skipped. Items whose legacy id is already
    present in the store are skipped, so the migration can be rerun.

    Args:
        items: Raw legacy item dicts as loaded from the JSON file
        store: Destination store
        batch_size: Number of items per batch
        batch_delay: Seconds to pause between batches
        language: Language code written to every post
        sleep: Sleep function, injectable for tests

    Returns:
        Counts of migrated, skipped and failed items and tag links

    Raises:
        MigrationError: If the categories cannot be read from the store.
    """
    result = MigrationResult()

    if not items:
        logger.warning("No data to migrate")
        return result

    logger.info("Starting migration of %d items", len(items))

    try:
        categories = store.list_categories()
    except Exception as e:
        store.rollback()
        raise MigrationError(
            "Could not read categories; ensure the categories table exists and is seeded"
        ) from e
    logger.info("Found %d categories in database", len(categories))

    category_resolver = CategoryResolver(store)
    tag_resolver = TagResolver(store)
    total_batches = math.ceil(len(items) / batch_size)

    for batch_index, start in enumerate(range(0, len(items), batch_size), start=1):
        batch = items[start:start + batch_size]
        logger.info("Processing batch %d/%d", batch_index, total_batches)

        for raw in batch:
            _migrate_item(raw, store, category_resolver, tag_resolver, language, result)

        if batch_index < total_batches and batch_delay > 0:
            sleep(batch_delay)

    logger.info("Migration completed")
    logger.info("Successfully migrated: %d items", result.migrated)
    logger.info("Skipped (already migrated): %d items", result.skipped)
    logger.info("Errors: %d items", result.errors)
    if result.tag_errors:
        logger.warning("Tag link errors: %d", result.tag_errors)
    return result
