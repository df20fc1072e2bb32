"""Tests for page_widgets.contact_form module."""

from unittest.mock import MagicMock

import pytest
import requests

from page_widgets.contact_form import CONTACT_SUBMIT_PATH, ContactFormController
from page_widgets.models import ContactForm


@pytest.fixture
def client():
    return MagicMock()


def _form(**overrides):
    values = {"category": "service", "subject": "Hello", "message": "Question", "email": "a@b.c"}
    values.update(overrides)
    return ContactForm(**values)


class TestSubmit:
    @pytest.mark.parametrize("missing", ["category", "subject", "message"])
    def test_required_fields(self, client, missing) -> None:
        outcome = ContactFormController(client).submit(_form(**{missing: ""}))
        assert outcome.toast.message == "Please fill in all required fields."
        assert outcome.toast.type == "error"
        client.post.assert_not_called()

    def test_success_resets_and_closes(self, client, make_response) -> None:
        client.post.return_value = make_response({"success": True})

        outcome = ContactFormController(client).submit(_form())

        client.post.assert_called_once_with(
            CONTACT_SUBMIT_PATH,
            {"category": "service", "subject": "Hello", "message": "Question", "email": "a@b.c"},
        )
        assert outcome.toast.type == "success"
        assert outcome.reset_form and outcome.close_modal

    def test_server_message_shown(self, client, make_response) -> None:
        client.post.return_value = make_response({"success": False, "message": "Too many requests"})
        outcome = ContactFormController(client).submit(_form())
        assert outcome.toast.message == "Too many requests"
        assert not outcome.reset_form

    def test_network_error(self, client) -> None:
        client.post.side_effect = requests.Timeout("slow")
        outcome = ContactFormController(client).submit(_form())
        assert outcome.toast.message == "An error occurred while submitting your inquiry."
