"""Controller for the contact (support inquiry) form."""

from __future__ import annotations

import logging
from dataclasses import asdict

import requests

from page_widgets.api_client import ApiClient, ApiError, read_json
from page_widgets.models import ContactForm, SubmitOutcome, Toast

logger = logging.getLogger(__name__)

CONTACT_SUBMIT_PATH = "/api/contact/submit"
MISSING_FIELDS = "Please fill in all required fields."
SUBMITTED = "Your inquiry has been submitted."
SUBMIT_FAILED = "An error occurred while submitting your inquiry."


class ContactFormController:
    def __init__(self, client: ApiClient):
        self.client = client

    def submit(self, form: ContactForm) -> SubmitOutcome:
        if not (form.category and form.subject and form.message):
            return SubmitOutcome(Toast(MISSING_FIELDS, "error"))

        try:
            body = read_json(self.client.post(CONTACT_SUBMIT_PATH, asdict(form)))
        except (ApiError, requests.RequestException) as e:
            logger.error("Contact submission error: %s", e)
            return SubmitOutcome(Toast(SUBMIT_FAILED, "error"))

        if body.get("success"):
            return SubmitOutcome(Toast(SUBMITTED, "success"), reset_form=True, close_modal=True)
        return SubmitOutcome(Toast(body.get("message") or SUBMIT_FAILED, "error"))
