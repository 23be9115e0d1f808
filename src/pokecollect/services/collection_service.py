"""
Collection service: look up and change how many copies of a card a user owns.
"""
from typing import List, Optional

from pokecollect.api.collection_client import CollectionClient
from pokecollect.models.collection import CollectionEntry
from pokecollect.utils.formatters import format_quantity
from pokecollect.utils.logger import logger
from pokecollect.utils.validators import validate_quantity


class CollectionService:
    """
    Business-logic service for collection edits.

    Nothing is cached; every lookup refetches the user's collection.
    Client errors (CollectionError) propagate to the caller.
    """

    def __init__(self, collection_client: CollectionClient):
        self._client = collection_client

    def get_entries(self, user_id: int) -> List[CollectionEntry]:
        return self._client.get_user_collection(user_id)

    def find_entry(self, user_id: int, card_id: str) -> Optional[CollectionEntry]:
        """Return the user's entry for ``card_id``, or None if not owned."""
        for entry in self._client.get_user_collection(user_id):
            if entry.card_id == card_id:
                return entry
        return None

    def set_quantity(
        self,
        user_id: int,
        card_id: str,
        quantity: int,
        entry: Optional[CollectionEntry] = None,
    ) -> Optional[CollectionEntry]:
        """
        Set the owned quantity of a card.

        Zero removes ``entry`` if one is given; a positive quantity adds or
        updates the entry (the server upserts on user and card).

        Args:
            user_id: The ID of the user
            card_id: The ID of the card
            quantity: New quantity, 0 or more
            entry: The current entry for this card, if known

        Returns:
            The resulting entry, or None if the card is no longer owned

        Raises:
            ValueError: for a negative or non-integer quantity
            CollectionError: if the request fails
        """
        is_valid, err = validate_quantity(quantity)
        if not is_valid:
            raise ValueError(err)

        if quantity == 0:
            if entry is not None:
                self._client.remove_from_collection(entry.id)
                logger.info(f"Card {card_id}: {format_quantity(0)}")
            return None

        updated = self._client.add_to_collection(card_id, user_id, quantity)
        logger.info(f"Card {card_id}: {format_quantity(updated.quantity)}")
        return updated
