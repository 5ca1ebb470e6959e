"""
Unit tests for aggregate culture score computation.
"""
import math

import pytest

from app.scoring.aggregator import (
    HIGH_TURNOVER_ADJUSTMENT,
    AggregateScore,
    clamp_rating,
    compute_aggregate,
    get_aggregate_score,
    get_aggregate_scores,
    mean_of,
    turnover_adjustment,
)


def row(**metrics):
    return metrics


class TestMeanOf:

    @pytest.mark.unit
    def test_mean_of_values(self):
        assert mean_of([4.0, 4.2]) == pytest.approx(4.1)

    @pytest.mark.unit
    def test_skips_missing_and_unparseable(self):
        assert mean_of([None, "4.0", "n/a", 5]) == pytest.approx(4.5)

    @pytest.mark.unit
    def test_ignores_non_finite(self):
        assert mean_of([math.nan, math.inf, 3.0]) == pytest.approx(3.0)

    @pytest.mark.unit
    def test_empty_is_none(self):
        assert mean_of([]) is None
        assert mean_of([None, None]) is None


class TestTurnoverAdjustment:

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "rate, expected",
        [
            (0, 0.3),
            (10, 0.3),
            (10.01, 0.0),
            (20, 0.0),
            (25, -0.1),
            (30, -0.1),
            (40, -0.3),
            (40.5, HIGH_TURNOVER_ADJUSTMENT),
            (95, -0.5),
        ],
    )
    def test_brackets(self, rate, expected):
        assert turnover_adjustment(rate) == expected

    @pytest.mark.unit
    def test_clamp(self):
        assert clamp_rating(5.3) == 5.0
        assert clamp_rating(0.7) == 1.0
        assert clamp_rating(3.3) == 3.3


class TestComputeAggregate:

    @pytest.mark.unit
    def test_no_rows_returns_none(self):
        assert compute_aggregate([], turnover_rate=12) is None

    @pytest.mark.unit
    def test_low_turnover_raises_overall(self):
        result = compute_aggregate([row(overall_rating=4.0), row(overall_rating=4.2)], 8)
        assert result.overall_rating == pytest.approx(4.4)
        assert result.source_count == 2

    @pytest.mark.unit
    def test_very_high_turnover_lowers_overall(self):
        result = compute_aggregate([row(overall_rating=4.0), row(overall_rating=4.2)], 55)
        assert result.overall_rating == pytest.approx(3.6)

    @pytest.mark.unit
    def test_unknown_turnover_leaves_overall_unadjusted(self):
        result = compute_aggregate([row(overall_rating=3.7)], None)
        assert result.overall_rating == pytest.approx(3.7)

    @pytest.mark.unit
    def test_overall_clamped_after_adjustment(self):
        high = compute_aggregate([row(overall_rating=4.9)], 5)
        low = compute_aggregate([row(overall_rating=1.2)], 60)
        assert high.overall_rating == 5.0
        assert low.overall_rating == 1.0

    @pytest.mark.unit
    def test_other_metrics_are_plain_means(self):
        rows = [
            row(overall_rating=4.0, work_life_balance=3.0, ceo_approval=80),
            row(overall_rating=4.0, work_life_balance=4.0, ceo_approval=None),
        ]
        result = compute_aggregate(rows, 5)
        assert result.work_life_balance == pytest.approx(3.5)
        assert result.ceo_approval == pytest.approx(80)
        assert result.career_opportunities is None

    @pytest.mark.unit
    def test_metric_missing_everywhere_is_none(self):
        result = compute_aggregate([row(work_life_balance=3.0)], 5)
        assert result.overall_rating is None

    @pytest.mark.unit
    def test_to_dict_has_every_metric(self):
        result = compute_aggregate([row(overall_rating=4.0)], None)
        data = result.to_dict()
        assert data["overall_rating"] == pytest.approx(4.0)
        assert data["source_count"] == 1
        assert "recommend_to_friend" in data


class TestAggregateFromDatabase:

    @pytest.mark.unit
    def test_single_company(self, test_db, sample_companies):
        result = get_aggregate_score(test_db, sample_companies["acme"].id)
        assert isinstance(result, AggregateScore)
        assert result.overall_rating == pytest.approx(4.4)
        assert result.work_life_balance == pytest.approx(3.9)

    @pytest.mark.unit
    def test_company_without_scores(self, test_db, sample_companies):
        assert get_aggregate_score(test_db, sample_companies["unscored"].id) is None

    @pytest.mark.unit
    def test_batch_matches_single(self, test_db, sample_companies):
        ids = [c.id for c in sample_companies.values()]
        batch = get_aggregate_scores(test_db, ids)

        assert set(batch) == set(ids)
        for company_id in ids:
            single = get_aggregate_score(test_db, company_id)
            assert batch[company_id] == single

    @pytest.mark.unit
    def test_batch_empty(self, test_db):
        assert get_aggregate_scores(test_db, []) == {}
