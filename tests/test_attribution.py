"""Tests for click attribution on interleaved pages."""

import pytest

from interleaving_eval.core.errors import InvalidInputError
from interleaving_eval.core.types import InterleavedItem, InterleavedResult
from interleaving_eval.interleaving import (
    attribute_click_positions,
    attribute_clicks,
    compute_credit,
    interleave,
)


@pytest.fixture
def page() -> InterleavedResult:
    return InterleavedResult(
        items=[
            InterleavedItem(position=0, result_id="x", team="A"),
            InterleavedItem(position=1, result_id="y", team="B"),
            InterleavedItem(position=2, result_id="z", team="B"),
        ],
        rounds=["A", "B"],
    )


class TestAttributeClicks:
    def test_clicks_map_to_owning_team(self, page: InterleavedResult) -> None:
        assert attribute_clicks(page, ["y", "x", "z"]) == ["B", "A", "B"]

    def test_off_page_click_is_unattributed(self, page: InterleavedResult) -> None:
        assert attribute_clicks(page, ["q", "x"]) == [None, "A"]

    def test_no_clicks(self, page: InterleavedResult) -> None:
        assert attribute_clicks(page, []) == []

    def test_positions(self, page: InterleavedResult) -> None:
        assert attribute_click_positions(page, [2, 0]) == ["B", "A"]

    def test_position_outside_page(self, page: InterleavedResult) -> None:
        with pytest.raises(InvalidInputError, match="outside page"):
            attribute_click_positions(page, [3])


class TestComputeCredit:
    def test_counts_per_team(self, page: InterleavedResult) -> None:
        assert compute_credit(page, ["x", "x", "y", "missing"]) == {"A": 2, "B": 1}

    def test_no_clicks_gives_zero_credit(self, page: InterleavedResult) -> None:
        assert compute_credit(page, []) == {"A": 0, "B": 0}


def test_clicks_on_ranker_a_results_credit_team_a() -> None:
    ranking_a, ranking_b = ["a1", "a2", "a3"], ["b1", "b2", "b3"]
    result = interleave(ranking_a, ranking_b, page_size=6, rng=9)
    assert attribute_clicks(result, ranking_a) == ["A", "A", "A"]
    assert attribute_clicks(result, ranking_b) == ["B", "B", "B"]
