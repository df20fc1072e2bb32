"""Data models for the migrate_posts stage."""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from datetime import datetime
from typing import Any, Optional


@dataclass(frozen=True)
class LegacyItem:
    """Nutrition item as stored in the legacy JSON file (camelCase keys)."""
    id: Optional[str] = None
    title: Optional[str] = None
    summary: Optional[str] = None
    description: Optional[str] = None
    originalContent: Optional[str] = None
    sourceType: Optional[str] = None
    sourceUrl: Optional[str] = None
    sourceName: Optional[str] = None
    channelTitle: Optional[str] = None
    author: Optional[str] = None
    publishedDate: Optional[str] = None
    collectedDate: Optional[str] = None
    trustScore: Optional[int] = None
    category: Optional[str] = None
    tags: Optional[list[str]] = None
    keywords: Optional[list[str]] = None
    thumbnailUrl: Optional[str] = None
    imageUrl: Optional[str] = None
    viewCount: Optional[int] = None
    likeCount: Optional[int] = None
    isActive: Optional[bool] = None

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> "LegacyItem":
        """Build from a raw JSON object, ignoring unknown keys."""
        known = {f.name for f in fields(cls)}
        values = {key: value for key, value in raw.items() if key in known}
        if values.get("id") is not None:
            values["id"] = str(values["id"])
        return cls(**values)


@dataclass
class PostRecord:
    """Row of the nutrition_posts table."""
    id: str
    title: Optional[str]
    summary: str
    content: str
    source_type: str
    source_url: Optional[str]
    source_name: str
    author: str
    published_date: Optional[datetime]
    collected_date: Optional[datetime]
    trust_score: int
    category_id: Any
    image_url: Optional[str]
    language: str
    is_active: bool
    view_count: int
    like_count: int
    bookmark_count: int
    is_manual_post: bool
    admin_id: Optional[str]
    admin_name: Optional[str]
    is_draft: bool
    last_modified: datetime
    created_at: datetime
    updated_at: datetime
    external_ref: Optional[str]


@dataclass
class TransformedItem:
    """A post ready for insertion plus the tags to link once it exists."""
    post: PostRecord
    tags: list[str]
    original_id: Optional[str]


@dataclass
class MigrationResult:
    migrated: int = 0
    skipped: int = 0
    errors: int = 0
    tag_links: int = 0
    tag_errors: int = 0
    failed_ids: list[Optional[str]] = field(default_factory=list)


@dataclass
class ItemSummary:
    """Pre-migration analysis of the legacy file."""
    total_items: int
    source_types: dict[str, int]
    categories: dict[str, int]
    total_tags: int
