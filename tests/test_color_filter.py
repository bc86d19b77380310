from itertools import combinations

import pytest

from deckoracle.models.failure import InvalidColorError
from deckoracle.services.card_catalog import CardCatalog
from deckoracle.services.color_filter import (
    describe_colors,
    filter_card_names,
    filter_cards,
    parse_color_selection,
)

ALL_SYMBOLS = ("W", "U", "B", "R", "G", "C")

ALL_SELECTIONS = [
    frozenset(combo) for size in range(len(ALL_SYMBOLS) + 1) for combo in combinations(ALL_SYMBOLS, size)
]


class TestFilterCardNames:
    def test_empty_selection_returns_everything(self, catalog: CardCatalog) -> None:
        """No selection means no filter."""
        assert filter_card_names(catalog, frozenset()) == list(catalog.names)

    def test_mono_red(self, catalog: CardCatalog) -> None:
        names = filter_card_names(catalog, frozenset({"R"}))

        assert names == [
            "Fable of the Mirror-Breaker",
            "Forest",
            "Goblin Guide",
            "Mountain",
            "Shock",
            "Wastes",
        ]

    def test_basic_lands_always_included(self, catalog: CardCatalog) -> None:
        """Off-color basics stay in the pool."""
        names = filter_card_names(catalog, frozenset({"U"}))

        assert "Forest" in names
        assert "Mountain" in names
        assert "Wastes" in names

    def test_colorless_needs_marker_when_colors_chosen(self, catalog: CardCatalog) -> None:
        without = filter_card_names(catalog, frozenset({"R"}))
        with_marker = filter_card_names(catalog, frozenset({"R", "C"}))

        assert "Patchwork Banner" not in without
        assert "Patchwork Banner" in with_marker
        assert "Undercity" in with_marker

    def test_colorless_only_selection(self, catalog: CardCatalog) -> None:
        """Only colorless cards and basics when just C is chosen."""
        names = filter_card_names(catalog, frozenset({"C"}))

        assert names == ["Forest", "Mountain", "Patchwork Banner", "Undercity", "Wastes"]

    def test_subset_rule_not_exact_match(self, catalog: CardCatalog) -> None:
        """A mono-green card is playable in a green-white deck."""
        names = filter_card_names(catalog, frozenset({"G", "W"}))

        assert "Llanowar Elves" in names
        assert "Invasion of Gobakhan" in names
        assert "Restless Vinestalk" in names
        # Atraxa also needs U and B
        assert "Atraxa, Grand Unifier" not in names

    def test_four_color_card_with_full_selection(self, catalog: CardCatalog) -> None:
        names = filter_card_names(catalog, frozenset({"W", "U", "B", "G"}))

        assert "Atraxa, Grand Unifier" in names

    def test_nonbasic_land_is_color_filtered(self, catalog: CardCatalog) -> None:
        assert "Restless Vinestalk" not in filter_card_names(catalog, frozenset({"R"}))

    def test_filter_cards_returns_card_objects(self, catalog: CardCatalog) -> None:
        cards = filter_cards(catalog, frozenset({"U"}))

        assert [card.name for card in cards] == filter_card_names(catalog, frozenset({"U"}))

    @pytest.mark.parametrize("selection", ALL_SELECTIONS, ids=lambda s: "".join(sorted(s)) or "none")
    def test_every_result_is_legal(self, catalog: CardCatalog, selection: frozenset[str]) -> None:
        """Each returned card is a basic, a subset of the colors, or an allowed colorless card."""
        wubrg = selection - {"C"}
        for name in filter_card_names(catalog, selection):
            card = catalog[name]
            if card.is_basic_land or not selection:
                continue
            if card.is_colorless:
                assert "C" in selection or not wubrg
            else:
                assert card.color_identity <= wubrg

    @pytest.mark.parametrize("selection", ALL_SELECTIONS, ids=lambda s: "".join(sorted(s)) or "none")
    def test_preserves_catalog_order(self, catalog: CardCatalog, selection: frozenset[str]) -> None:
        names = filter_card_names(catalog, selection)

        assert names == [name for name in catalog.names if name in set(names)]


class TestParseColorSelection:
    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("", frozenset()),
            (None, frozenset()),
            ("RG", frozenset({"R", "G"})),
            ("w,u", frozenset({"W", "U"})),
            ("B R C", frozenset({"B", "R", "C"})),
            (["g", "W"], frozenset({"G", "W"})),
        ],
    )
    def test_valid_input(self, raw: str | list[str] | None, expected: frozenset[str]) -> None:
        assert parse_color_selection(raw) == expected

    def test_unknown_symbol_raises(self) -> None:
        with pytest.raises(InvalidColorError) as exc_info:
            parse_color_selection("RX")

        assert exc_info.value.symbols == {"X"}
        assert exc_info.value.status_code == 422


class TestDescribeColors:
    def test_wubrg_order(self) -> None:
        assert describe_colors({"G", "R", "C"}) == "Red, Green, Colorless"

    def test_empty(self) -> None:
        assert describe_colors(set()) == ""
