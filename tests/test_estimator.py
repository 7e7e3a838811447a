"""Tests for the preference estimator."""

import numpy as np
import pandas as pd
import pytest

from interleaving_eval.core.errors import InsufficientDataError, InvalidInputError
from interleaving_eval.core.types import GroupOutcomes
from interleaving_eval.preference import (
    classify_counts,
    count_arrays,
    count_group_clicks,
    estimate_outcomes,
    preference,
)


class TestPreferenceValues:
    """Exact values of Δ_AB for characteristic click patterns."""

    def test_pure_ties_give_zero(self) -> None:
        keys = ["s1", "s1", "s2", "s2", "s3", "s3", "s3", "s3"]
        teams = ["A", "B", "B", "A", "A", "A", "B", "B"]
        assert preference(keys, teams) == 0.0

    def test_a_always_wins(self) -> None:
        keys = ["s1", "s2", "s2", "s3"]
        teams = ["A", "A", "A", "A"]
        assert preference(keys, teams) == 0.5

    def test_b_always_wins(self) -> None:
        keys = ["s1", "s2", "s3", "s3"]
        teams = ["B", "B", "B", "B"]
        assert preference(keys, teams) == -0.5

    def test_mixed_outcomes(self) -> None:
        # s1: A wins, s2: B wins, s3: tie, s4: A wins
        keys = ["s1", "s1", "s2", "s3", "s3", "s4"]
        teams = ["A", "A", "B", "A", "B", "A"]
        outcomes = estimate_outcomes(keys, teams)
        assert (outcomes.wins_a, outcomes.wins_b, outcomes.ties) == (2, 1, 1)
        assert preference(keys, teams) == 0.125

    def test_majority_within_group_decides(self) -> None:
        keys = ["s1"] * 5
        teams = ["A", "B", "A", "B", "A"]
        assert preference(keys, teams) == 0.5

    def test_result_in_range(self) -> None:
        rng = np.random.default_rng(0)
        keys = list(rng.integers(0, 30, size=200))
        teams = list(rng.choice(["A", "B"], size=200))
        delta = preference(keys, teams)
        assert -0.5 <= delta <= 0.5

    def test_deterministic(self) -> None:
        keys = ["s1", "s2", "s2", "s3"]
        teams = ["A", "B", "B", "A"]
        assert preference(keys, teams) == preference(keys, teams)


class TestSilentGroups:
    """Groups with no attributed clicks never enter the denominator."""

    @pytest.fixture
    def base(self) -> tuple:
        keys = ["s1", "s2", "s2", "s3"]
        teams = ["A", "B", "A", "B"]
        return keys, teams

    def test_non_click_groups_are_ignored(self, base) -> None:
        keys, teams = base
        extra_keys = keys + ["s4", "s5", "s5"]
        extra_teams = teams + ["A", None, "B"]
        event_types = ["click"] * len(keys) + ["impression"] * 3

        assert preference(extra_keys, extra_teams, event_types=event_types) == preference(keys, teams)

    def test_unattributed_click_groups_are_ignored(self, base) -> None:
        keys, teams = base
        assert preference(keys + ["s9", "s9"], teams + [None, None]) == preference(keys, teams)

    def test_silent_groups_are_counted_as_groups(self, base) -> None:
        keys, teams = base
        outcomes = estimate_outcomes(keys + ["s9"], teams + [None])
        assert outcomes.n_groups == 4
        assert outcomes.n_informative == 3
        assert outcomes.n_silent == 1

    def test_non_click_records_do_not_count_inside_group(self) -> None:
        keys = ["s1", "s1", "s1"]
        teams = ["A", "B", "B"]
        event_types = ["click", "click", "hover"]
        assert preference(keys, teams, event_types=event_types) == 0.0


class TestAggregationModes:
    def test_per_session_vs_per_search(self) -> None:
        # One session, two searches: q1 gets two A clicks, q2 one B click
        session_keys = ["s1", "s1", "s1"]
        search_keys = [("s1", "q1"), ("s1", "q1"), ("s1", "q2")]
        teams = ["A", "A", "B"]

        assert preference(session_keys, teams, mode="per_session") == 0.5
        assert preference(search_keys, teams, mode="per_search") == 0.0

    def test_unknown_mode(self) -> None:
        with pytest.raises(InvalidInputError, match="Unknown aggregation mode"):
            preference(["s1"], ["A"], mode="per_query")


class TestInsufficientData:
    def test_no_records(self) -> None:
        with pytest.raises(InsufficientDataError) as exc_info:
            preference([], [])
        assert exc_info.value.reason == InsufficientDataError.NO_CLICKS
        assert "No click data" in str(exc_info.value)

    def test_only_non_click_events(self) -> None:
        with pytest.raises(InsufficientDataError) as exc_info:
            preference(["s1", "s2"], ["A", "B"], event_types=["impression", "impression"])
        assert exc_info.value.reason == InsufficientDataError.NO_CLICKS

    def test_only_unattributed_clicks(self) -> None:
        with pytest.raises(InsufficientDataError) as exc_info:
            preference(["s1", "s2"], [None, None])
        assert exc_info.value.reason == InsufficientDataError.NO_INFORMATIVE_CLICKS
        assert "No informative clicks" in str(exc_info.value)

    def test_insufficient_data_is_not_invalid_input(self) -> None:
        with pytest.raises(InsufficientDataError) as exc_info:
            preference([], [])
        assert not isinstance(exc_info.value, InvalidInputError)


class TestInvalidInput:
    def test_misaligned_sequences(self) -> None:
        with pytest.raises(InvalidInputError, match="aligned"):
            preference(["s1", "s2"], ["A"])

    def test_misaligned_event_types(self) -> None:
        with pytest.raises(InvalidInputError, match="event_types"):
            preference(["s1", "s2"], ["A", "B"], event_types=["click"])

    def test_unknown_team_label(self) -> None:
        with pytest.raises(InvalidInputError, match="Unknown team label 'C'"):
            preference(["s1", "s2"], ["A", "C"])


class TestMissingLabels:
    @pytest.mark.parametrize("missing", [None, pd.NA, float("nan"), np.nan])
    def test_missing_label_is_unattributed(self, missing) -> None:
        assert preference(["s1", "s2"], ["A", missing]) == 0.5

    def test_missing_label_keeps_group_silent(self) -> None:
        counts = count_group_clicks(["s1", "s1", "s2"], ["B", pd.NA, pd.NA])
        assert counts == {"s1": (0, 1), "s2": (0, 0)}

    def test_all_missing_labels(self) -> None:
        with pytest.raises(InsufficientDataError) as exc_info:
            preference(["s1", "s2"], [pd.NA, float("nan")])
        assert exc_info.value.reason == InsufficientDataError.NO_INFORMATIVE_CLICKS

    def test_nullable_string_column(self) -> None:
        teams = pd.Series(["A", None, "B", "A"], dtype="string")
        assert preference(["s1", "s2", "s3", "s4"], list(teams)) == pytest.approx(2 / 3 - 0.5)


class TestMapThenClassify:
    def test_count_group_clicks_preserves_first_seen_order(self) -> None:
        counts = count_group_clicks(["s2", "s1", "s2", "s3"], ["A", "B", "B", None])
        assert list(counts.keys()) == ["s2", "s1", "s3"]
        assert counts == {"s2": (1, 1), "s1": (0, 1), "s3": (0, 0)}

    def test_count_arrays(self) -> None:
        count_a, count_b = count_arrays({"s1": (2, 0), "s2": (0, 3)})
        assert count_a.tolist() == [2, 0]
        assert count_b.tolist() == [0, 3]

    def test_count_arrays_empty(self) -> None:
        count_a, count_b = count_arrays({})
        assert len(count_a) == len(count_b) == 0

    def test_classify_counts(self) -> None:
        outcomes = classify_counts(np.array([1, 0, 2, 0]), np.array([0, 1, 2, 0]))
        assert outcomes == GroupOutcomes(wins_a=1, wins_b=1, ties=1, n_groups=4)

    def test_classify_counts_with_weights(self) -> None:
        outcomes = classify_counts(
            np.array([1, 0, 2]), np.array([0, 1, 2]), weights=np.array([2, 0, 1])
        )
        assert outcomes == GroupOutcomes(wins_a=2, wins_b=0, ties=1, n_groups=3)
        assert outcomes.delta == pytest.approx((2 + 0.5) / 3 - 0.5)

    def test_delta_without_informative_groups(self) -> None:
        with pytest.raises(InsufficientDataError):
            GroupOutcomes(wins_a=0, wins_b=0, ties=0, n_groups=3).delta
