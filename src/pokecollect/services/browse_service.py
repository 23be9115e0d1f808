"""
Browse service: series of card sets and the cards of one set.
"""
import sys
from dataclasses import dataclass, field
from typing import Iterable, List, Optional

from pokecollect.api.card_sets_client import CardSetsClient
from pokecollect.api.cards_client import CardsClient
from pokecollect.api.errors import CardSetsError
from pokecollect.config.settings import settings
from pokecollect.models.catalog import Card, CardSet, Series
from pokecollect.utils.error_translator import error_translator
from pokecollect.utils.logger import logger
from pokecollect.utils.validators import sanitize_input


@dataclass
class BrowseResult:
    """Series that loaded, plus a message for each one that did not."""
    series: List[Series] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)


def card_sort_key(card: Card):
    # Numbered cards first in numeric order, promos and other labels after
    number = card.display_number
    return (int(number) if number.isdecimal() else sys.maxsize, number)


class BrowseService:
    """
    Business-logic service for catalog browsing.

    All methods are blocking; use ApiWorker for background calls.
    """

    def __init__(self, card_sets_client: CardSetsClient, cards_client: CardsClient):
        self._card_sets_client = card_sets_client
        self._cards_client = cards_client

    def load_series(self, names: Optional[Iterable[str]] = None) -> BrowseResult:
        """
        Fetch the sets of each series, one request per series.

        A failed series is skipped and its error message collected; a series
        with no sets is left out.

        Args:
            names: Series names to load (defaults to settings.DEFAULT_SERIES)

        Returns:
            BrowseResult with sets in each series ordered newest first
        """
        result = BrowseResult()

        for name in names if names is not None else settings.DEFAULT_SERIES:
            try:
                card_sets = self._card_sets_client.get_sets_by_series(name)
            except CardSetsError as e:
                logger.warning(f"Skipping series {name}: {e}")
                result.errors.append(error_translator.translate(e))
                continue

            if not card_sets:
                logger.debug(f"No sets found for series: {name}")
                continue

            result.series.append(Series(name=name, sets=self.sort_sets(card_sets)))

        logger.info(f"Loaded {len(result.series)} series ({len(result.errors)} failed)")
        return result

    @staticmethod
    def sort_sets(card_sets: Iterable[CardSet]) -> List[CardSet]:
        # yyyy-MM-dd sorts chronologically as a string
        return sorted(card_sets, key=lambda card_set: card_set.release_date, reverse=True)

    def load_cards(self, set_id: str) -> List[Card]:
        """
        Fetch the cards of a set ordered by card number.

        Raises:
            CardsError: if the request fails
        """
        return sorted(self._cards_client.get_cards_by_set_id(set_id), key=card_sort_key)

    @staticmethod
    def filter_cards(cards: Iterable[Card], query: str) -> List[Card]:
        """Case-insensitive match on card name or displayed number."""
        query = sanitize_input(query).lower()
        if not query:
            return list(cards)
        return [card for card in cards
                if query in card.name.lower() or query in card.display_number.lower()]

    @staticmethod
    def filter_series(series: Iterable[Series], query: str) -> List[Series]:
        """
        Case-insensitive search over series and their sets.

        A series is kept when any of its sets matches by set name or series
        label, narrowed to those sets, or when its own name matches, with all
        of its sets.
        """
        query = sanitize_input(query).lower()
        if not query:
            return list(series)

        result = []
        for entry in series:
            matching = [card_set for card_set in entry.sets
                        if query in card_set.name.lower() or query in card_set.series.lower()]
            if matching:
                result.append(Series(name=entry.name, sets=matching))
            elif query in entry.name.lower():
                result.append(entry)
        return result
