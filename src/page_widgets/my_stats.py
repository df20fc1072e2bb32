"""Controller for the personal service usage panel."""

from __future__ import annotations

import logging

import requests

from page_widgets.api_client import ApiClient, ApiError, raise_for_status, read_json
from page_widgets.models import ERROR, SUCCESS, MyStatsView

logger = logging.getLogger(__name__)

MY_STATS_PATH = "/api/stats/my"
UNAVAILABLE = "N/A"

# Panel element -> serviceUsage key
STAT_KEYS = {
    "nutritionSearchCount": "ingredientAnalysis",
    "savedMealsStatCount": "mealPlan",
    "savedSupplementsStatCount": "supplementRecommendation",
    "miniGamePlays": "mini-game",
}


class MyStatsController:
    def __init__(self, client: ApiClient):
        self.client = client

    def load(self) -> MyStatsView | None:
        """Return the panel values, or None when the API reports no usage data."""
        try:
            response = self.client.get(MY_STATS_PATH)
            raise_for_status(response)
            body = read_json(response)
        except (ApiError, requests.RequestException) as e:
            logger.error("Error fetching my stats: %s", e)
            return MyStatsView(ERROR, {element: UNAVAILABLE for element in STAT_KEYS})

        usage = body.get("serviceUsage")
        if not body.get("success") or not usage:
            logger.error("Failed to get stats: %s", body.get("error") or "Unknown error")
            return None

        return MyStatsView(
            SUCCESS,
            {element: str(usage.get(key) or 0) for element, key in STAT_KEYS.items()},
        )
