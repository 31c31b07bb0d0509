import math

import pytest

from desk_planner.core.errors import EmptyDistributionError, InvalidPercentileError
from desk_planner.simulation import (
    DistributionAggregator,
    SimulationResult,
    TrialOutcome,
    coverage_table,
    percentile
)


def outcome(*counts):
    return TrialOutcome(daily_counts=tuple(counts))


class TestPercentile:

    def test_index_is_floor_of_fraction(self):
        dist = list(range(100))
        assert percentile(dist, 50) == 50
        assert percentile(dist, 95) == 95
        assert percentile(dist, 12.5) == 12

    def test_index_clamped_to_last_element(self):
        assert percentile([3, 4, 9], 99.9) == 9
        assert percentile([7], 95) == 7

    def test_small_percent_gives_first_element(self):
        assert percentile([2, 5, 8], 0.1) == 2

    @pytest.mark.parametrize("p", [0, 100, -5, 150, math.nan])
    def test_out_of_range_rejected(self, p):
        with pytest.raises(InvalidPercentileError):
            percentile([1, 2, 3], p)

    def test_non_numeric_rejected(self):
        with pytest.raises(InvalidPercentileError):
            percentile([1, 2, 3], "95")

    def test_empty_distribution_rejected(self):
        with pytest.raises(EmptyDistributionError):
            percentile([], 50)

    def test_rejection_leaves_distribution_untouched(self):
        dist = [1, 2, 3]
        with pytest.raises(InvalidPercentileError):
            percentile(dist, 100)
        assert dist == [1, 2, 3]

    def test_monotonic_in_percent(self):
        dist = sorted([5, 1, 9, 9, 3, 7, 2, 8, 4, 6] * 7)
        values = [percentile(dist, p) for p in (1, 10, 25, 50, 75, 90, 99)]
        assert values == sorted(values)


class TestDistributionAggregator:

    def test_finalize_sorts_and_summarizes(self):
        agg = DistributionAggregator()
        agg.extend([
            outcome(3, 1, 0, 2, 4),
            outcome(1, 1, 1, 1, 1),
            outcome(5, 0, 0, 0, 0)
        ])
        result = agg.finalize(expected_count=3)

        assert result.distribution == (1, 4, 5)
        assert result.avg_peak == pytest.approx(10 / 3)
        assert result.avg_daily_occupancy == pytest.approx((2 + 1 + 1) / 3)
        assert result.max_observed == 5
        assert result.p95 == 5

    def test_p95_matches_percentile_query(self):
        agg = DistributionAggregator()
        agg.extend(outcome(i % 17, 0, 0, 0, 0) for i in range(231))
        result = agg.finalize()
        assert result.p95 == percentile(result.distribution, 95)
        assert result.p95 == result.percentile(95)

    def test_empty_finalize_is_precondition_error(self):
        with pytest.raises(EmptyDistributionError):
            DistributionAggregator().finalize()

    def test_count_mismatch_rejected(self):
        agg = DistributionAggregator()
        agg.add(outcome(1, 1, 1, 1, 1))
        with pytest.raises(ValueError):
            agg.finalize(expected_count=2)

    def test_merge_order_does_not_matter(self):
        batches = [
            [outcome(2, 3, 1, 0, 0), outcome(4, 4, 4, 4, 4)],
            [outcome(0, 0, 9, 0, 0)],
            [outcome(1, 2, 3, 4, 5), outcome(6, 0, 0, 0, 1)]
        ]
        shards = []
        for batch in batches:
            shard = DistributionAggregator()
            shard.extend(batch)
            shards.append(shard)

        forward = DistributionAggregator()
        for shard in shards:
            forward.merge(shard)
        backward = DistributionAggregator()
        for shard in reversed(shards):
            backward.merge(shard)

        assert forward.finalize() == backward.finalize()

    def test_single_trial_is_valid(self):
        agg = DistributionAggregator()
        agg.add(outcome(2, 2, 2, 2, 7))
        result = agg.finalize(expected_count=1)
        assert result.distribution == (7,)
        assert result.p95 == 7
        assert result.percentile(1) == 7


def test_coverage_table_pairs_percent_with_desks():
    result = SimulationResult(distribution=tuple(range(10, 30)), avg_peak=19.5, avg_daily_occupancy=15.0)
    assert coverage_table(result, [50, 90]) == [(50, 20), (90, 28)]


def test_histogram_zero_fills_gaps():
    result = SimulationResult(distribution=(3, 3, 5, 6, 6, 6))
    assert result.histogram() == {3: 2, 4: 0, 5: 1, 6: 3}


def test_result_requires_a_distribution():
    with pytest.raises(EmptyDistributionError):
        SimulationResult(distribution=())
