"""Shared fixtures: an in-memory stand-in for the nutrition store."""

from __future__ import annotations

from typing import Any
from unittest.mock import Mock

import pytest

CANONICAL_CATEGORIES = ("diet", "supplements", "research", "trends")


class FakeStore:
    """Dict-backed store with the same surface as common.store.NutritionStore."""

    def __init__(self, categories: tuple[str, ...] = CANONICAL_CATEGORIES):
        self.categories = {
            index: {"id": index, "name": name, "description": "", "post_count": 0}
            for index, name in enumerate(categories, start=1)
        }
        self.tags: dict[int, dict[str, Any]] = {}
        self.posts: dict[str, dict[str, Any]] = {}
        self.post_tags: list[tuple[Any, Any]] = []
        self.failing_titles: set[str] = set()
        self.failing_tags: set[str] = set()
        self.commits = 0
        self.rollbacks = 0

    def commit(self) -> None:
        self.commits += 1

    def rollback(self) -> None:
        self.rollbacks += 1

    def list_categories(self) -> list[dict[str, Any]]:
        return [dict(category) for category in self.categories.values()]

    def get_category_id(self, name: str) -> Any | None:
        for category in self.categories.values():
            if category["name"] == name:
                return category["id"]
        return None

    def find_or_create_tag(self, name: str) -> Any:
        if name in self.failing_tags:
            raise RuntimeError(f"cannot create tag {name}")
        for tag in self.tags.values():
            if tag["name"] == name:
                return tag["id"]
        tag_id = len(self.tags) + 1
        self.tags[tag_id] = {"id": tag_id, "name": name, "post_count": 0}
        return tag_id

    def insert_post(self, post: dict[str, Any]) -> Any | None:
        if post.get("title") is None:
            raise RuntimeError('null value in column "title" violates not-null constraint')
        if post["title"] in self.failing_titles:
            raise RuntimeError(f"insert failed for {post['title']}")
        external_ref = post.get("external_ref")
        if external_ref is not None and any(
            existing["external_ref"] == external_ref for existing in self.posts.values()
        ):
            return None
        self.posts[post["id"]] = dict(post)
        return post["id"]

    def link_post_tag(self, post_id: Any, tag_id: Any) -> None:
        self.post_tags.append((post_id, tag_id))

    def list_tag_ids(self) -> list[Any]:
        return list(self.tags)

    def count_posts_in_category(self, category_id: Any) -> int:
        return sum(1 for post in self.posts.values() if post["category_id"] == category_id)

    def count_posts_with_tag(self, tag_id: Any) -> int:
        return sum(1 for _, linked in self.post_tags if linked == tag_id)

    def set_category_post_count(self, category_id: Any, count: int) -> None:
        self.categories[category_id]["post_count"] = count

    def set_tag_post_count(self, tag_id: Any, count: int) -> None:
        self.tags[tag_id]["post_count"] = count

    def count_rows(self, table: str) -> int:
        tables = {
            "nutrition_posts": self.posts,
            "tags": self.tags,
            "categories": self.categories,
            "post_tags": self.post_tags,
        }
        return len(tables[table])

    def category_named(self, name: str) -> dict[str, Any]:
        return self.categories[self.get_category_id(name)]

    def tag_named(self, name: str) -> dict[str, Any]:
        return next(tag for tag in self.tags.values() if tag["name"] == name)


@pytest.fixture
def fake_store() -> FakeStore:
    return FakeStore()


@pytest.fixture
def store_factory():
    return FakeStore


@pytest.fixture
def make_response():
    """Build a mock requests.Response with a JSON body."""

    def _make(body: Any = None, status_code: int = 200, reason: str = "OK") -> Mock:
        response = Mock()
        response.status_code = status_code
        response.ok = 200 <= status_code < 300
        response.reason = reason
        if isinstance(body, Exception):
            response.json.side_effect = body
        else:
            response.json.return_value = body
        return response

    return _make
