from unittest.mock import MagicMock

import pytest

from pokecollect.api.card_sets_client import CardSetsClient
from pokecollect.api.cards_client import CardsClient
from pokecollect.api.errors import CardSetsError, CardsError, NetworkError, NotFoundError
from pokecollect.config.settings import settings
from pokecollect.models.catalog import Card, CardSet, Series, group_sets_by_series
from pokecollect.services.browse_service import BrowseService


def card_set(set_id, series, release_date):
    return CardSet(id=set_id, name=set_id.upper(), series=series, language="en",
                   printed_total=100, total_cards=100, release_date=release_date)


def card(number, name="Pikachu"):
    return Card(id=f"sv6-{number}", name=name, number=number, rarity="Common")


@pytest.fixture
def sets_client():
    return MagicMock(spec=CardSetsClient)


@pytest.fixture
def cards_client():
    return MagicMock(spec=CardsClient)


@pytest.fixture
def service(sets_client, cards_client):
    return BrowseService(sets_client, cards_client)


class TestLoadSeries:
    def test_default_series_requested_in_order(self, service, sets_client):
        sets_client.get_sets_by_series.return_value = []

        service.load_series()

        requested = [call.args[0] for call in sets_client.get_sets_by_series.call_args_list]
        assert requested == settings.DEFAULT_SERIES

    def test_sets_sorted_newest_first(self, service, sets_client):
        sets_client.get_sets_by_series.return_value = [
            card_set("sv1", "Scarlet & Violet", "2023-03-31"),
            card_set("sv6", "Scarlet & Violet", "2024-05-24"),
            card_set("sv3", "Scarlet & Violet", "2023-08-11"),
        ]

        result = service.load_series(["Scarlet & Violet"])

        assert [s.name for s in result.series] == ["Scarlet & Violet"]
        assert [s.id for s in result.series[0].sets] == ["sv6", "sv3", "sv1"]
        assert result.errors == []

    def test_failed_series_skipped(self, service, sets_client):
        def fetch(series):
            if series == "XY":
                raise CardSetsError(series, NetworkError())
            return [card_set(series[:2].lower(), series, "2020-01-01")]

        sets_client.get_sets_by_series.side_effect = fetch

        result = service.load_series(["Sun & Moon", "XY", "Classic"])

        assert [s.name for s in result.series] == ["Sun & Moon", "Classic"]
        assert len(result.errors) == 1
        assert "XY" in result.errors[0]

    def test_empty_series_left_out(self, service, sets_client):
        sets_client.get_sets_by_series.return_value = []

        result = service.load_series(["XY"])

        assert result.series == []
        assert result.errors == []


class TestLoadCards:
    def test_sorted_by_card_number(self, service, cards_client):
        cards_client.get_cards_by_set_id.return_value = [
            card("10/167"), card("SV-P"), card("2/167"), card("001/167"),
        ]

        cards = service.load_cards("sv6")

        assert [c.number for c in cards] == ["001/167", "2/167", "10/167", "SV-P"]
        cards_client.get_cards_by_set_id.assert_called_once_with("sv6")

    def test_superscript_number_sorted_with_labels(self, service, cards_client):
        cards_client.get_cards_by_set_id.return_value = [card("\u00b2"), card("3/167")]

        assert [c.number for c in service.load_cards("sv6")] == ["3/167", "\u00b2"]

    def test_errors_propagate(self, service, cards_client):
        cards_client.get_cards_by_set_id.side_effect = CardsError("sv6", NotFoundError())

        with pytest.raises(CardsError):
            service.load_cards("sv6")


def test_filter_cards():
    cards = [card("001/167", "Pikachu"), card("025/167", "Raichu"), card("100/167", "Charizard")]

    assert [c.name for c in BrowseService.filter_cards(cards, "chu")] == ["Pikachu", "Raichu"]
    assert [c.name for c in BrowseService.filter_cards(cards, "100")] == ["Charizard"]
    assert BrowseService.filter_cards(cards, "  ") == cards


def test_filter_series():
    sword = Series(name="Sword & Shield", sets=[
        card_set("swsh1", "Sword & Shield", "2020-02-07"),
        card_set("swsh2", "Sword & Shield", "2020-05-01"),
    ])
    scarlet = Series(name="Scarlet & Violet", sets=[card_set("sv1", "Scarlet & Violet", "2023-03-31")])
    everything = [sword, scarlet]

    assert BrowseService.filter_series(everything, "swsh2") == [
        Series(name="Sword & Shield", sets=[sword.sets[1]]),
    ]
    assert BrowseService.filter_series(everything, "violet") == [scarlet]
    assert BrowseService.filter_series(everything, "base set") == []
    assert BrowseService.filter_series(everything, "") == everything


def test_group_sets_by_series_keeps_first_seen_order():
    sets = [
        card_set("swsh1", "Sword & Shield", "2020-02-07"),
        card_set("sv1", "Scarlet & Violet", "2023-03-31"),
        card_set("swsh2", "Sword & Shield", "2020-05-01"),
    ]

    grouped = group_sets_by_series(sets)

    assert [s.name for s in grouped] == ["Sword & Shield", "Scarlet & Violet"]
    assert [s.id for s in grouped[0].sets] == ["swsh1", "swsh2"]
