"""Tests for metrics/normalization.py."""

import pytest

from riskmap.metrics.normalization import min_max_normalize


class TestMinMaxNormalize:
    def test_scales_to_unit_interval(self):
        assert min_max_normalize([2.0, 4.0, 6.0]) == pytest.approx([0.0, 0.5, 1.0])

    def test_empty_input(self):
        assert min_max_normalize([]) == []

    def test_constant_series_is_all_zero(self):
        """No variance means no signal."""
        assert min_max_normalize([3.0, 3.0, 3.0]) == [0.0, 0.0, 0.0]

    def test_single_value(self):
        assert min_max_normalize([42.0]) == [0.0]

    def test_negative_values(self):
        assert min_max_normalize([-1.0, 0.0, 1.0]) == pytest.approx([0.0, 0.5, 1.0])

    def test_returns_python_floats(self):
        result = min_max_normalize([1, 2])
        assert all(type(v) is float for v in result)
