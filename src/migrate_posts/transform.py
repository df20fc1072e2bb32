"""Map legacy nutrition items onto the nutrition_posts schema."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Optional
from uuid import uuid4

from common.datetime import parse_datetime, utc_now
from migrate_posts.models import LegacyItem, PostRecord, TransformedItem

SUMMARY_MAX_CHARS = 500
DEFAULT_TRUST_SCORE = 50
DEFAULT_SOURCE_TYPE = "youtube"
UNKNOWN = "Unknown"


def build_summary(item: LegacyItem) -> str:
    if item.summary:
        return item.summary
    if item.description:
        return item.description[:SUMMARY_MAX_CHARS]
    return ""


def build_content(item: LegacyItem) -> str:
    return item.originalContent or item.description or item.summary or ""


def item_tags(item: LegacyItem) -> list[str]:
    return list(item.tags or item.keywords or [])


def transform_item(
    item: LegacyItem,
    category_id: Any,
    language: str = "ko",
    now: Optional[datetime] = None,
) -> TransformedItem:
    """
    Transform one legacy item into a post record and its tag names.

    Raises:
        ValueError: If one of the item's dates is not ISO-8601.
    """
    collected = parse_datetime(item.collectedDate)
    published = parse_datetime(item.publishedDate) or collected
    timestamp = collected or now or utc_now()

    post = PostRecord(
        id=str(uuid4()),
        title=item.title,
        summary=build_summary(item),
        content=build_content(item),
        source_type=item.sourceType or DEFAULT_SOURCE_TYPE,
        source_url=item.sourceUrl,
        source_name=item.sourceName or item.channelTitle or UNKNOWN,
        author=item.channelTitle or item.author or UNKNOWN,
        published_date=published,
        collected_date=collected,
        trust_score=DEFAULT_TRUST_SCORE if item.trustScore is None else item.trustScore,
        category_id=category_id,
        image_url=item.thumbnailUrl or item.imageUrl,
        language=language,
        is_active=item.isActive is not False,
        view_count=item.viewCount or 0,
        like_count=item.likeCount or 0,
        bookmark_count=0,
        is_manual_post=False,
        admin_id=None,
        admin_name=None,
        is_draft=False,
        last_modified=timestamp,
        created_at=timestamp,
        updated_at=timestamp,
        external_ref=item.id,
    )

    return TransformedItem(post=post, tags=item_tags(item), original_id=item.id)
