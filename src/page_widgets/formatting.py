"""Display helpers for nutrition cards and pagination."""

from __future__ import annotations

from typing import Any, Optional

from common.datetime import parse_datetime
from page_widgets.models import NutritionCard, Pagination, PaginationView

MAX_CARD_TAGS = 5
PAGE_WINDOW = 2
NO_SUMMARY = "No summary available."
NO_DATE = "No date"

SOURCE_TYPE_LABELS = {
    "pubmed": "Paper",
    "paper": "Paper",
    "youtube": "YouTube",
    "news": "News",
    "manual": "Manual",
}

DEFAULT_IMAGES = {
    "pubmed": "/images/default-paper.jpg",
    "paper": "/images/default-paper.jpg",
    "youtube": "/images/default-youtube.jpg",
    "news": "/images/default-news.jpg",
    "manual": "/images/default-nutrition.jpg",
}
FALLBACK_IMAGE = "/images/default-nutrition.jpg"


def source_type_label(source_type: Optional[str]) -> str:
    return SOURCE_TYPE_LABELS.get(source_type or "", "Other")


def default_image(source_type: Optional[str]) -> str:
    return DEFAULT_IMAGES.get(source_type or "", FALLBACK_IMAGE)


def image_url(item: dict[str, Any]) -> str:
    return item.get("thumbnailUrl") or item.get("imageUrl") or default_image(item.get("sourceType"))


def format_date(value: Any) -> str:
    """Format a date as Korean locale short date, e.g. "2024. 1. 5."."""
    if not value:
        return NO_DATE
    try:
        parsed = parse_datetime(value)
    except (TypeError, ValueError):
        return NO_DATE
    return f"{parsed.year}. {parsed.month}. {parsed.day}."


def format_count(count: int) -> str:
    if count >= 1_000_000:
        return f"{count // 1_000_000}M"
    if count >= 1_000:
        return f"{count // 1_000}K"
    return str(count)


def build_card(item: dict[str, Any]) -> NutritionCard:
    source_type = item.get("sourceType")
    return NutritionCard(
        id=item.get("id"),
        title=item.get("title") or "",
        summary=item.get("summary") or NO_SUMMARY,
        tags=[f"#{tag}" for tag in (item.get("tags") or [])[:MAX_CARD_TAGS]],
        image_url=image_url(item),
        fallback_image_url=default_image(source_type),
        source_label=source_type_label(source_type),
        date_label=format_date(item.get("publishedDate") or item.get("createdAt")),
        view_count_label=format_count(int(item.get("viewCount") or 0)),
        detail_url=f"nutrition-info.html?id={item.get('id')}",
    )


def build_pagination_view(pagination: Optional[Pagination]) -> PaginationView:
    """Show up to PAGE_WINDOW pages either side of the current page."""
    if pagination is None or pagination.total_pages <= 1:
        return PaginationView(visible=False)

    start = max(1, pagination.current_page - PAGE_WINDOW)
    end = min(pagination.total_pages, pagination.current_page + PAGE_WINDOW)
    return PaginationView(
        visible=True,
        prev_enabled=pagination.has_prev,
        next_enabled=pagination.has_next,
        page_numbers=list(range(start, end + 1)),
        active_page=pagination.current_page,
    )
