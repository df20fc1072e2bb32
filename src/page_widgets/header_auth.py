"""Controller for the header login/logout links."""

from __future__ import annotations

import logging
from typing import Any, Optional

import requests

from page_widgets.api_client import ApiClient, ApiError, read_json
from page_widgets.models import HeaderLink, LogoutOutcome, Toast

logger = logging.getLogger(__name__)

AUTH_ME_PATH = "/api/auth/me"
LOGOUT_PATH = "/api/auth/logout"
AUTH_REQUIRED_PAGES = ("/profile.html", "/mypage.html")
RELOAD_PAGES = ("store.html",)
HOME_PAGE = "index.html"


class HeaderAuthController:
    def __init__(self, client: ApiClient):
        self.client = client
        self.is_logged_in = False
        self.user: Optional[dict[str, Any]] = None

    def check_auth_status(self) -> bool:
        """Refresh the login state; any failure counts as logged out."""
        try:
            body = read_json(self.client.get(AUTH_ME_PATH))
        except (ApiError, requests.RequestException) as e:
            logger.error("Error checking auth status: %s", e)
            body = {}

        if body.get("loggedIn") and body.get("user"):
            self.is_logged_in = True
            self.user = body["user"]
        else:
            self.is_logged_in = False
            self.user = None
        return self.is_logged_in

    def header_links(self) -> list[HeaderLink]:
        if self.is_logged_in:
            return [
                HeaderLink("Logout", "#", id="logout-link"),
                HeaderLink("Support", "#support"),
            ]
        return [
            HeaderLink("Login", "login.html"),
            HeaderLink("Sign up", "signup.html"),
            HeaderLink("Support", "#support"),
        ]

    def refresh(self) -> list[HeaderLink]:
        self.check_auth_status()
        return self.header_links()

    def logout(self, current_path: str = "") -> LogoutOutcome:
        try:
            body = read_json(self.client.post(LOGOUT_PATH))
        except (ApiError, requests.RequestException) as e:
            logger.error("Logout error: %s", e)
            return LogoutOutcome(False, Toast("An error occurred while logging out.", "error"))

        if not body.get("success"):
            reason = body.get("error") or "Unknown error"
            return LogoutOutcome(False, Toast(f"Logout failed: {reason}", "error"))

        self.is_logged_in = False
        self.user = None
        outcome = LogoutOutcome(True, Toast("You have been logged out.", "success"))
        if is_auth_required_page(current_path):
            outcome.redirect_to = HOME_PAGE
        elif any(page in current_path for page in RELOAD_PAGES):
            outcome.reload = True
        return outcome


def is_auth_required_page(path: str) -> bool:
    return any(page in path for page in AUTH_REQUIRED_PAGES)
