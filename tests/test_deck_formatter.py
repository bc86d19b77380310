import pytest

from deckoracle.models.deck import DeckEntry, DeckFound, ParsedDeck
from deckoracle.services.deck_formatter import format_deck_text, format_entries
from deckoracle.services.decklist_parser import parse_deck_list


class TestFormatDeckText:
    def test_main_deck_only(self) -> None:
        deck = ParsedDeck(main_deck=(DeckEntry(4, "Shock"), DeckEntry(20, "Mountain")))

        assert format_deck_text(deck) == "Deck\n4 Shock\n20 Mountain"

    def test_with_sideboard(self) -> None:
        deck = ParsedDeck(
            main_deck=(DeckEntry(4, "Shock"),),
            sideboard=(DeckEntry(2, "Negate"),),
        )

        assert format_deck_text(deck) == "Deck\n4 Shock\n\nSideboard\n2 Negate"

    def test_explanation_not_rendered(self) -> None:
        deck = ParsedDeck(main_deck=(DeckEntry(4, "Shock"),), explanation="Burn.")

        assert "Burn." not in format_deck_text(deck)

    def test_format_entries(self) -> None:
        assert format_entries([DeckEntry(1, "Negate"), DeckEntry(2, "Duress")]) == (
            "1 Negate\n2 Duress"
        )


class TestRoundTrip:
    @pytest.mark.parametrize(
        "deck",
        [
            ParsedDeck(main_deck=(DeckEntry(4, "Shock"),)),
            ParsedDeck(
                main_deck=(
                    DeckEntry(4, "Goblin Guide"),
                    DeckEntry(3, "Fire // Ice"),
                    DeckEntry(2, "Sheoldred, the Apocalypse"),
                    DeckEntry(20, "Mountain"),
                ),
                sideboard=(DeckEntry(2, "Negate"), DeckEntry(1, "Borrowed 2 Time")),
            ),
        ],
    )
    def test_format_then_parse(self, deck: ParsedDeck) -> None:
        """Rendering and re-parsing keeps entries and order."""
        outcome = parse_deck_list(format_deck_text(deck))

        assert isinstance(outcome, DeckFound)
        assert outcome.deck.main_deck == deck.main_deck
        assert outcome.deck.sideboard == deck.sideboard

    def test_parse_then_format_is_idempotent(self, sample_reply: str) -> None:
        first = parse_deck_list(sample_reply)
        assert isinstance(first, DeckFound)
        text = format_deck_text(first.deck)

        second = parse_deck_list(text)
        assert isinstance(second, DeckFound)
        assert format_deck_text(second.deck) == text
