"""
Card sets API client.
"""
from typing import List
from urllib.parse import quote

from pokecollect.api.base_client import ApiClient
from pokecollect.api.errors import ApiError, CardSetsError
from pokecollect.config.settings import settings
from pokecollect.models.catalog import CardSet
from pokecollect.utils.logger import logger


def encode_path_segment(value: str) -> str:
    """Percent-encode a value for use as a single URL path segment."""
    return quote(value, safe="")


class CardSetsClient:
    """Fetches card sets per series."""

    def __init__(self, api_client: ApiClient):
        self._api = api_client

    def get_sets_by_series(self, series: str) -> List[CardSet]:
        """
        Fetch card sets for a specific series.

        Args:
            series: The series name (e.g. "Scarlet & Violet")

        Returns:
            List of CardSet objects

        Raises:
            CardSetsError: wrapping the underlying ApiError
        """
        path = settings.get_api_endpoints()["sets_by_series"].format(
            series=encode_path_segment(series))

        try:
            card_sets = self._api.get(path, decoder=CardSet.list_from_json)
        except ApiError as e:
            logger.error(f"Failed to fetch sets for series {series}: {e}")
            raise CardSetsError(series, e) from e

        logger.info(f"Fetched {len(card_sets)} sets for series: {series}")
        return card_sets
