"""
Cards API client.
"""
from typing import List

from pokecollect.api.base_client import ApiClient
from pokecollect.api.card_sets_client import encode_path_segment
from pokecollect.api.errors import ApiError, CardsError
from pokecollect.config.settings import settings
from pokecollect.models.catalog import Card
from pokecollect.utils.logger import logger


class CardsClient:
    """Fetches the cards of a set."""

    def __init__(self, api_client: ApiClient):
        self._api = api_client

    def get_cards_by_set_id(self, set_id: str) -> List[Card]:
        """
        Fetch cards for a specific set.

        Args:
            set_id: The set ID (e.g. "sv6")

        Returns:
            List of Card objects
        """
        path = settings.get_api_endpoints()["cards_by_set"].format(
            set_id=encode_path_segment(set_id))

        try:
            cards = self._api.get(path, decoder=Card.list_from_json)
        except ApiError as e:
            logger.error(f"Failed to fetch cards for set {set_id}: {e}")
            raise CardsError(set_id, e) from e

        logger.info(f"Fetched {len(cards)} cards for set: {set_id}")
        return cards
