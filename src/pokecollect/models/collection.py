"""
Collection models.
"""
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from pokecollect.models.base import optional, require_list, require_mapping, required


@dataclass(frozen=True)
class AddEntryRequest:
    card_id: str
    user_id: int
    quantity: int

    def to_dict(self) -> Dict[str, Any]:
        return {"cardId": self.card_id, "userId": self.user_id, "quantity": self.quantity}


@dataclass(frozen=True)
class CollectionCard:
    """Card data embedded in a collection entry."""
    id: str
    name: str
    number: str
    rarity: Optional[str] = None
    image_url: Optional[str] = None
    small_image_url: Optional[str] = None
    large_image_url: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Any) -> "CollectionCard":
        data = require_mapping(data)
        return cls(
            id=required(data, "id", str),
            name=required(data, "name", str),
            number=required(data, "number", str),
            rarity=optional(data, "rarity", str),
            image_url=optional(data, "imageUrl", str),
            small_image_url=optional(data, "smallImageUrl", str),
            large_image_url=optional(data, "largeImageUrl", str),
        )


@dataclass(frozen=True)
class CollectionEntry:
    """
    "User ``user_id`` owns ``quantity`` of this card."

    The add/upsert response may omit the embedded card; the user collection
    listing always includes it.
    """
    id: int
    user_id: int
    quantity: int
    acquired_date: str
    card: Optional[CollectionCard] = None
    card_id: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Any, require_card: bool = False) -> "CollectionEntry":
        data = require_mapping(data)
        card = data.get("card")
        if card is None and require_card:
            raise KeyError("card")
        embedded = CollectionCard.from_dict(card) if card is not None else None
        return cls(
            id=required(data, "id", int),
            user_id=required(data, "userId", int),
            quantity=required(data, "quantity", int),
            acquired_date=required(data, "acquiredDate", str),
            card=embedded,
            card_id=optional(data, "cardId", str) or (embedded.id if embedded else None),
        )

    @classmethod
    def list_from_json(cls, data: Any) -> List["CollectionEntry"]:
        return [cls.from_dict(item, require_card=True) for item in require_list(data)]
