"""Tests for optional-value numeric helpers."""

import math

import numpy as np
import pytest

from intradayvol.numeric import (
    clean_value,
    defined_values,
    is_missing,
    mean,
    quartiles,
    sample_std,
    skewness,
    total,
)


class TestMissing:
    def test_is_missing(self):
        assert is_missing(None)
        assert is_missing(float("nan"))
        assert not is_missing(0.0)
        assert not is_missing(3)

    def test_clean_value(self):
        assert clean_value(float("inf")) is None
        assert clean_value(2) == 2.0

    def test_defined_values(self):
        assert defined_values([1.0, None, float("nan"), 2.0]).tolist() == [1.0, 2.0]


class TestAggregates:
    def test_mean_and_total_ignore_undefined(self):
        assert mean([1.0, None, 3.0]) == 2.0
        assert total([1.0, None, 3.0]) == 4.0
        assert mean([None]) is None
        assert total([]) is None

    def test_sample_std(self):
        assert sample_std([1.0, 2.0, 3.0, 4.0]) == pytest.approx(np.std([1, 2, 3, 4], ddof=1))
        assert sample_std([1.0, None]) is None

    def test_skewness_g1(self):
        x = [1.0, 2.0, 3.0, 10.0]
        arr = np.array(x)
        d = arr - arr.mean()
        assert skewness(x) == pytest.approx(np.mean(d ** 3) / np.mean(d ** 2) ** 1.5)

    def test_skewness_symmetric_is_zero(self):
        assert abs(skewness([-1.0, 0.0, 1.0])) < 1e-12

    def test_skewness_undefined(self):
        assert skewness([1.0, 2.0]) is None
        assert skewness([0.001] * 5) is None
        assert skewness([0.0, 0.0, 0.0]) is None

    def test_quartiles(self):
        assert quartiles([4.0, 1.0, None, 3.0, 2.0]) == (1.75, 3.25)
        assert quartiles([]) is None
        q1, q3 = quartiles([5.0])
        assert math.isclose(q1, 5.0) and math.isclose(q3, 5.0)
