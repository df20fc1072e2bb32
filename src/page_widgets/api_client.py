"""HTTP client for the nutrition web application's REST API."""

from __future__ import annotations

import logging
from typing import Any, Optional

import requests

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10


class ApiError(Exception):
    """Raised when an API call fails or returns an unusable body."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class ApiClient:
    """Send requests relative to a base URL with a shared cookie session."""

    def __init__(
        self,
        base_url: str,
        session: Optional[requests.Session] = None,
        timeout: float = DEFAULT_TIMEOUT,
    ):
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout

    def get(self, path: str, params: Optional[dict[str, Any]] = None) -> requests.Response:
        return self.session.get(f"{self.base_url}{path}", params=params, timeout=self.timeout)

    def post(self, path: str, payload: Optional[dict[str, Any]] = None) -> requests.Response:
        return self.session.post(f"{self.base_url}{path}", json=payload, timeout=self.timeout)


def read_json(response: requests.Response) -> dict[str, Any]:
    """Return the decoded JSON object of a response.

    Raises:
        ApiError: If the body is not a JSON object.
    """
    try:
        body = response.json()
    except ValueError as exc:
        raise ApiError("Response body is not JSON", response.status_code) from exc
    if not isinstance(body, dict):
        raise ApiError("Response body is not a JSON object", response.status_code)
    return body


def raise_for_status(response: requests.Response) -> None:
    """Raise ApiError for non-2xx responses."""
    if not response.ok:
        raise ApiError(f"HTTP {response.status_code}: {response.reason}", response.status_code)
