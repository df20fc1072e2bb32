"""Destination store for nutrition posts, categories and tags."""

from __future__ import annotations

import logging
from typing import Any, Mapping

from sqlalchemy import text
from sqlalchemy.orm import Session

logger = logging.getLogger(__name__)

POSTS_TABLE = "nutrition_posts"

# Tables that count_rows may be asked about
COUNTABLE_TABLES = frozenset({
    "nutrition_posts",
    "categories",
    "tags",
    "post_tags",
    "products",
    "product_categories",
    "product_analytics",
})

POST_COLUMNS = (
    "id",
    "title",
    "summary",
    "content",
    "source_type",
    "source_url",
    "source_name",
    "author",
    "published_date",
    "collected_date",
    "trust_score",
    "category_id",
    "image_url",
    "language",
    "is_active",
    "view_count",
    "like_count",
    "bookmark_count",
    "is_manual_post",
    "admin_id",
    "admin_name",
    "is_draft",
    "last_modified",
    "created_at",
    "updated_at",
    "external_ref",
)


class NutritionStore:
    """
    SQL access to the nutrition tables over a single SQLAlchemy session.

    Write methods run inside a savepoint so a failing statement only discards
    its own changes. Callers decide when to commit.
    """

    def __init__(self, session: Session):
        self.session = session

    def commit(self) -> None:
        self.session.commit()

    def rollback(self) -> None:
        self.session.rollback()

    def list_categories(self) -> list[dict[str, Any]]:
        rows = self.session.execute(
            text("SELECT id, name, description, post_count FROM categories ORDER BY name")
        ).mappings().all()
        return [dict(row) for row in rows]

    def get_category_id(self, name: str) -> Any | None:
        row = self.session.execute(
            text("SELECT id FROM categories WHERE name = :name"),
            {"name": name},
        ).first()
        return row[0] if row else None

    def upsert_category(self, name: str, description: str) -> None:
        with self.session.begin_nested():
            self.session.execute(
                text(
                    """
                    INSERT INTO categories (name, description)
                    VALUES (:name, :description)
                    ON CONFLICT (name) DO UPDATE SET description = EXCLUDED.description
                    """
                ),
                {"name": name, "description": description},
            )

    def upsert_product_category(self, name: str, display_name: str, description: str) -> None:
        with self.session.begin_nested():
            self.session.execute(
                text(
                    """
                    INSERT INTO product_categories (name, display_name, description)
                    VALUES (:name, :display_name, :description)
                    ON CONFLICT (name) DO UPDATE
                    SET display_name = EXCLUDED.display_name,
                        description = EXCLUDED.description
                    """
                ),
                {"name": name, "display_name": display_name, "description": description},
            )

    def find_or_create_tag(self, name: str) -> Any:
        """Return the id of the tag with this exact name, inserting it if absent."""
        with self.session.begin_nested():
            self.session.execute(
                text("INSERT INTO tags (name) VALUES (:name) ON CONFLICT (name) DO NOTHING"),
                {"name": name},
            )
            row = self.session.execute(
                text("SELECT id FROM tags WHERE name = :name"),
                {"name": name},
            ).one()
        return row[0]

    def insert_post(self, post: Mapping[str, Any]) -> Any | None:
        """
        Insert a post row and return its id.

        Returns None when a post with the same external_ref already exists.
        """
        columns = ", ".join(POST_COLUMNS)
        placeholders = ", ".join(f":{column}" for column in POST_COLUMNS)
        params = {column: post.get(column) for column in POST_COLUMNS}

        with self.session.begin_nested():
            row = self.session.execute(
                text(
                    f"""
                    INSERT INTO {POSTS_TABLE} ({columns})
                    VALUES ({placeholders})
                    ON CONFLICT (external_ref) DO NOTHING
                    RETURNING id
                    """
                ),
                params,
            ).first()
        return row[0] if row else None

    def link_post_tag(self, post_id: Any, tag_id: Any) -> None:
        with self.session.begin_nested():
            self.session.execute(
                text("INSERT INTO post_tags (post_id, tag_id) VALUES (:post_id, :tag_id)"),
                {"post_id": post_id, "tag_id": tag_id},
            )

    def list_tag_ids(self) -> list[Any]:
        return list(self.session.execute(text("SELECT id FROM tags ORDER BY id")).scalars())

    def count_posts_in_category(self, category_id: Any) -> int:
        return self.session.execute(
            text(f"SELECT COUNT(*) FROM {POSTS_TABLE} WHERE category_id = :category_id"),
            {"category_id": category_id},
        ).scalar_one()

    def count_posts_with_tag(self, tag_id: Any) -> int:
        return self.session.execute(
            text("SELECT COUNT(*) FROM post_tags WHERE tag_id = :tag_id"),
            {"tag_id": tag_id},
        ).scalar_one()

    def set_category_post_count(self, category_id: Any, count: int) -> None:
        self.session.execute(
            text("UPDATE categories SET post_count = :count WHERE id = :id"),
            {"count": count, "id": category_id},
        )

    def set_tag_post_count(self, tag_id: Any, count: int) -> None:
        self.session.execute(
            text("UPDATE tags SET post_count = :count WHERE id = :id"),
            {"count": count, "id": tag_id},
        )

    def count_rows(self, table: str) -> int:
        if table not in COUNTABLE_TABLES:
            raise ValueError(f"Unknown table: {table}")
        return self.session.execute(text(f"SELECT COUNT(*) FROM {table}")).scalar_one()
