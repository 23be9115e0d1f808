"""
Collection API client: add/update, remove and list a user's entries.
"""
from typing import List

from pokecollect.api.base_client import ApiClient
from pokecollect.api.errors import ApiError, CollectionError
from pokecollect.config.settings import settings
from pokecollect.models.collection import AddEntryRequest, CollectionEntry
from pokecollect.utils.logger import logger


class CollectionClient:
    """Collection entry operations. Nothing is cached; callers refetch."""

    def __init__(self, api_client: ApiClient):
        self._api = api_client
        self._endpoints = settings.get_api_endpoints()

    def add_to_collection(self, card_id: str, user_id: int, quantity: int) -> CollectionEntry:
        """
        Add a card to the user's collection or update its quantity.

        The server upserts on the (user, card) pair.

        Args:
            card_id: The ID of the card to add
            user_id: The ID of the user
            quantity: The quantity to set for this card

        Returns:
            The created or updated CollectionEntry
        """
        request = AddEntryRequest(card_id=card_id, user_id=user_id, quantity=quantity)

        try:
            entry = self._api.post(self._endpoints["collection_add"], body=request,
                                   decoder=CollectionEntry.from_dict)
        except ApiError as e:
            logger.error(f"Failed to add card {card_id} to collection: {e}")
            raise CollectionError.add_failed(card_id, e) from e

        logger.info(f"Added/updated card {card_id} in collection with quantity {quantity}")
        return entry

    def remove_from_collection(self, entry_id: int) -> None:
        """Remove a collection entry."""
        path = self._endpoints["collection_delete"].format(entry_id=entry_id)

        try:
            self._api.delete(path)
        except ApiError as e:
            logger.error(f"Failed to remove collection entry {entry_id}: {e}")
            raise CollectionError.delete_failed(entry_id, e) from e

        logger.info(f"Removed collection entry {entry_id}")

    def get_user_collection(self, user_id: int) -> List[CollectionEntry]:
        """Get all collection entries for a user, each with its card embedded."""
        path = self._endpoints["collection_user"].format(user_id=user_id)

        try:
            entries = self._api.get(path, decoder=CollectionEntry.list_from_json)
        except ApiError as e:
            logger.error(f"Failed to fetch collection for user {user_id}: {e}")
            raise CollectionError.fetch_failed(user_id, e) from e

        logger.info(f"Fetched {len(entries)} collection entries for user {user_id}")
        return entries
