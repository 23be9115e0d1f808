"""
Catalog models: card sets, series groupings and cards.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional

from pokecollect.models.base import optional, require_list, require_mapping, required
from pokecollect.utils.formatters import format_release_date, format_set_total


@dataclass(frozen=True)
class CardSet:
    id: str
    name: str
    series: str
    language: str
    printed_total: int
    total_cards: int
    release_date: str   # yyyy-MM-dd as sent by the backend
    symbol_url: Optional[str] = None
    logo_url: Optional[str] = None

    @property
    def formatted_release_date(self) -> str:
        return format_release_date(self.release_date)

    @property
    def display_total(self) -> str:
        return format_set_total(self.printed_total, self.total_cards)

    @classmethod
    def from_dict(cls, data: Any) -> "CardSet":
        data = require_mapping(data)
        return cls(
            id=required(data, "id", str),
            name=required(data, "name", str),
            series=required(data, "series", str),
            language=required(data, "language", str),
            symbol_url=optional(data, "symbolUrl", str),
            logo_url=optional(data, "logoUrl", str),
            printed_total=required(data, "printedTotal", int),
            total_cards=required(data, "totalCards", int),
            release_date=required(data, "releaseDate", str),
        )

    @classmethod
    def list_from_json(cls, data: Any) -> List["CardSet"]:
        return [cls.from_dict(item) for item in require_list(data)]


@dataclass(frozen=True)
class Series:
    """Card sets grouped under one series name for display."""
    name: str
    sets: List[CardSet] = field(default_factory=list)


def group_sets_by_series(card_sets: Iterable[CardSet]) -> List[Series]:
    """Group sets by their series name, keeping first-seen series order."""
    grouped: Dict[str, List[CardSet]] = {}
    for card_set in card_sets:
        grouped.setdefault(card_set.series, []).append(card_set)
    return [Series(name=name, sets=sets) for name, sets in grouped.items()]


@dataclass(frozen=True)
class Card:
    id: str
    name: str
    number: str
    rarity: str
    small_image_url: Optional[str] = None
    large_image_url: Optional[str] = None

    @property
    def display_number(self) -> str:
        # "001/264" displays as "001"
        if "/" in self.number:
            return self.number.split("/")[0]
        return self.number

    @property
    def best_image_url(self) -> Optional[str]:
        return self.large_image_url or self.small_image_url

    @classmethod
    def from_dict(cls, data: Any) -> "Card":
        data = require_mapping(data)
        return cls(
            id=required(data, "id", str),
            name=required(data, "name", str),
            number=required(data, "number", str),
            rarity=required(data, "rarity", str),
            small_image_url=optional(data, "smallImageUrl", str),
            large_image_url=optional(data, "largeImageUrl", str),
        )

    @classmethod
    def list_from_json(cls, data: Any) -> List["Card"]:
        return [cls.from_dict(item) for item in require_list(data)]
