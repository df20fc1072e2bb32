"""Category and tag resolution against the destination store."""

from __future__ import annotations

import logging
from typing import Any, Optional, Protocol

logger = logging.getLogger(__name__)

DEFAULT_CATEGORY = "diet"

# Legacy free-text category -> canonical category name
CATEGORY_MAPPING = {
    "diet": "diet",
    "supplements": "supplements",
    "research": "research",
    "trends": "trends",
}


class CategoryLookup(Protocol):
    def get_category_id(self, name: str) -> Any | None: ...


class TagStore(Protocol):
    def find_or_create_tag(self, name: str) -> Any: ...


def resolve_category_name(label: Optional[str]) -> str:
    """Map a legacy category label onto a canonical name, defaulting to diet."""
    if not label:
        return DEFAULT_CATEGORY
    return CATEGORY_MAPPING.get(label, DEFAULT_CATEGORY)


class CategoryResolver:
    """Resolve legacy category labels to category ids."""

    def __init__(self, store: CategoryLookup):
        self.store = store

    def resolve(self, label: Optional[str]) -> Any | None:
        """
        Return the id of the canonical category for a label.

        Returns None if the canonical category row is missing from the store.
        """
        name = resolve_category_name(label)
        category_id = self.store.get_category_id(name)
        if category_id is None:
            logger.error("Category %r not found in store (legacy label %r)", name, label)
        return category_id


class TagResolver:
    """
    Find-or-create tags by exact trimmed name.

    The store performs the lookup and insert as one conditional insert, so
    repeated names resolve to the same id.
    """

    def __init__(self, store: TagStore):
        self.store = store

    def resolve(self, raw_name: Any) -> Any | None:
        """Return the tag id for raw_name, or None for blank or non-string names."""
        if not isinstance(raw_name, str):
            logger.warning("Skipping non-string tag: %r", raw_name)
            return None
        name = raw_name.strip()
        if not name:
            return None
        return self.store.find_or_create_tag(name)
