"""Controller for the bookmarked nutrition list page."""

from __future__ import annotations

import logging
from typing import Optional

import requests

from page_widgets.api_client import ApiClient, ApiError, raise_for_status, read_json
from page_widgets.formatting import build_card, build_pagination_view
from page_widgets.models import EMPTY, ERROR, LOADING, SUCCESS, BookmarkListView, Pagination

logger = logging.getLogger(__name__)

BOOKMARKS_PATH = "/api/nutrition-info/bookmarks"
LOGIN_PAGE = "login.html"
ITEMS_PER_PAGE = 12
DEFAULT_ERROR = "Failed to load bookmarks."


class BookmarkListController:
    """
    Load bookmarked items page by page.

    A load requested while another is in flight is dropped, not queued.
    """

    def __init__(self, client: ApiClient, items_per_page: int = ITEMS_PER_PAGE):
        self.client = client
        self.items_per_page = items_per_page
        self.current_page = 1
        self.is_loading = False
        self.view = BookmarkListView()

    def load(self) -> Optional[BookmarkListView]:
        """Fetch the current page; returns None if a load is already running."""
        if self.is_loading:
            logger.debug("Bookmark load already in flight, dropping request")
            return None

        self.is_loading = True
        self.view = BookmarkListView(status=LOADING)
        try:
            response = self.client.get(
                BOOKMARKS_PATH,
                params={"page": self.current_page, "limit": self.items_per_page},
            )
            if response.status_code == 401:
                self.view.redirect_to = LOGIN_PAGE
                return self.view
            raise_for_status(response)

            body = read_json(response)
            if not body.get("success"):
                raise ApiError(body.get("error") or DEFAULT_ERROR, response.status_code)

            self.view = self._render(body.get("data") or [], body.get("pagination"))
        except (ApiError, requests.RequestException) as e:
            logger.error("Error loading bookmarks: %s", e)
            self.view = BookmarkListView(status=ERROR, error_message=str(e) or DEFAULT_ERROR)
        finally:
            self.is_loading = False

        return self.view

    def _render(self, data: list[dict], pagination_data: Optional[dict]) -> BookmarkListView:
        pagination = Pagination.from_api(pagination_data) if pagination_data else None
        if not data:
            return BookmarkListView(status=EMPTY, total_count=0)

        return BookmarkListView(
            status=SUCCESS,
            cards=[build_card(item) for item in data],
            total_count=pagination.total_count if pagination else len(data),
            pagination=build_pagination_view(pagination),
        )

    def retry(self) -> Optional[BookmarkListView]:
        return self.load()

    def go_to_page(self, page: int) -> Optional[BookmarkListView]:
        self.current_page = page
        return self.load()

    def go_to_prev_page(self) -> Optional[BookmarkListView]:
        if self.current_page <= 1:
            return None
        self.current_page -= 1
        return self.load()

    def go_to_next_page(self) -> Optional[BookmarkListView]:
        self.current_page += 1
        return self.load()
