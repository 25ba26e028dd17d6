"""Tests for similarity metrics."""

import numpy as np
import pytest

from refmatch.find.matchers import (
    AbsoluteDifferenceMetric,
    SquaredDifferenceMetric,
    get_metric,
)


class TestSquaredDifference:
    def test_identical_scores_one(self):
        assert SquaredDifferenceMetric().score(0, 300) == 1.0

    def test_maximal_difference_scores_zero(self):
        metric = SquaredDifferenceMetric()
        cost = int(metric.pixel_cost(np.full(3, 255, dtype=np.int32)).sum())

        assert metric.score(cost, 3) == 0.0

    def test_cost_is_symmetric(self):
        metric = SquaredDifferenceMetric()
        diff = np.array([-7, 7], dtype=np.int32)

        assert metric.pixel_cost(diff).tolist() == [49, 49]

    def test_score_is_monotonic_in_cost(self):
        metric = SquaredDifferenceMetric()
        scores = [metric.score(cost, 10) for cost in range(0, 650_251, 65_025)]

        assert scores == sorted(scores, reverse=True)

    def test_requires_values(self):
        with pytest.raises(ValueError):
            SquaredDifferenceMetric().score(0, 0)


class TestAbsoluteDifference:
    def test_score(self):
        metric = AbsoluteDifferenceMetric()
        cost = int(metric.pixel_cost(np.array([-51, 51], dtype=np.int32)).sum())

        assert metric.score(cost, 2) == pytest.approx(0.8)

    def test_full_scale_outlier_scores_equally(self):
        diff = np.array([255, 0, 0, 0], dtype=np.int32)
        absolute = AbsoluteDifferenceMetric()
        squared = SquaredDifferenceMetric()

        abs_score = absolute.score(int(absolute.pixel_cost(diff).sum()), 4)
        sq_score = squared.score(int(squared.pixel_cost(diff).sum()), 4)

        assert abs_score == sq_score == 0.75


class TestRegistry:
    def test_get_metric(self):
        assert isinstance(get_metric("squared"), SquaredDifferenceMetric)
        assert isinstance(get_metric("absolute"), AbsoluteDifferenceMetric)

    def test_unknown_metric(self):
        with pytest.raises(ValueError, match="Unknown metric"):
            get_metric("cosine")


class TestCandidateLimit:
    def test_squared_limit_is_the_cost_itself(self):
        assert SquaredDifferenceMetric().candidate_limit(1234.0, 10) == 1234.0

    def test_absolute_limit_bounds_every_better_offset(self):
        # Two offsets over four values: the second has the lower absolute cost
        first = np.array([4, 4, 4, 4], dtype=np.int32)
        second = np.array([15, 0, 0, 0], dtype=np.int32)
        squared = SquaredDifferenceMetric()
        absolute = AbsoluteDifferenceMetric()

        first_sq = int(squared.pixel_cost(first).sum())
        second_sq = int(squared.pixel_cost(second).sum())

        assert absolute.pixel_cost(second).sum() < absolute.pixel_cost(first).sum()
        assert second_sq > first_sq
        assert second_sq <= absolute.candidate_limit(first_sq, 4)
