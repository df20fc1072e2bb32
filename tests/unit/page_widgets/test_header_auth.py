"""Tests for page_widgets.header_auth module."""

from unittest.mock import MagicMock

import pytest
import requests

from page_widgets.header_auth import HeaderAuthController, is_auth_required_page


@pytest.fixture
def client():
    return MagicMock()


class TestCheckAuthStatus:
    def test_logged_in(self, client, make_response) -> None:
        client.get.return_value = make_response({"loggedIn": True, "user": {"id": 1}})
        controller = HeaderAuthController(client)

        links = controller.refresh()

        assert controller.is_logged_in
        assert controller.user == {"id": 1}
        assert [link.label for link in links] == ["Logout", "Support"]
        assert links[0].id == "logout-link"

    def test_logged_in_without_user_counts_as_logged_out(self, client, make_response) -> None:
        client.get.return_value = make_response({"loggedIn": True})
        assert HeaderAuthController(client).check_auth_status() is False

    def test_error_treated_as_logged_out(self, client) -> None:
        client.get.side_effect = requests.ConnectionError("offline")
        controller = HeaderAuthController(client)
        controller.is_logged_in = True

        links = controller.refresh()

        assert not controller.is_logged_in
        assert [link.href for link in links] == ["login.html", "signup.html", "#support"]

    def test_non_json_body_treated_as_logged_out(self, client, make_response) -> None:
        client.get.return_value = make_response(ValueError("no json"))
        assert HeaderAuthController(client).check_auth_status() is False


class TestLogout:
    @pytest.mark.parametrize("path", ["/profile.html", "/mypage.html"])
    def test_redirects_from_protected_pages(self, client, make_response, path) -> None:
        client.post.return_value = make_response({"success": True})
        controller = HeaderAuthController(client)
        controller.is_logged_in = True

        outcome = controller.logout(path)

        assert outcome.success
        assert outcome.redirect_to == "index.html"
        assert not controller.is_logged_in

    def test_reloads_store_page(self, client, make_response) -> None:
        client.post.return_value = make_response({"success": True})
        outcome = HeaderAuthController(client).logout("/store.html")
        assert outcome.reload
        assert outcome.redirect_to is None

    def test_other_page_only_updates_header(self, client, make_response) -> None:
        client.post.return_value = make_response({"success": True})
        outcome = HeaderAuthController(client).logout("/index.html")
        assert outcome.success
        assert outcome.redirect_to is None
        assert not outcome.reload

    def test_server_failure_reason_in_toast(self, client, make_response) -> None:
        client.post.return_value = make_response({"success": False, "error": "session expired"})
        controller = HeaderAuthController(client)
        controller.is_logged_in = True

        outcome = controller.logout("/index.html")

        assert not outcome.success
        assert outcome.toast.message == "Logout failed: session expired"
        assert outcome.toast.type == "error"
        assert controller.is_logged_in

    def test_network_error(self, client) -> None:
        client.post.side_effect = requests.ConnectionError("offline")
        outcome = HeaderAuthController(client).logout()
        assert outcome.toast.message == "An error occurred while logging out."


def test_is_auth_required_page() -> None:
    assert is_auth_required_page("/mypage.html")
    assert not is_auth_required_page("/store.html")
