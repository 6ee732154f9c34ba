"""
Unit tests for fsed_sim.normalization.normalize_intensity.

The normalizer rescales a whole sweep so its maximum becomes 100 and guards
against a zero/NaN maximum and empty input.
"""

from __future__ import annotations

import numpy as np
import pytest

from fsed_sim.normalization import PEAK_VALUE, normalize_intensity


def test_peak_becomes_one_hundred() -> None:
    out = normalize_intensity([1.0, 4.0, 2.0])
    assert PEAK_VALUE == 100.0
    assert out.tolist() == pytest.approx([25.0, 100.0, 50.0])
    assert np.max(out) == 100.0


def test_relative_shape_is_preserved() -> None:
    values = np.array([3e-6, 1.5e-6, 6e-6, 0.0])
    out = normalize_intensity(values)
    assert out / out[2] == pytest.approx(values / values[2])


def test_all_zero_input_maps_to_all_zero_output() -> None:
    out = normalize_intensity([0.0, 0.0, 0.0])
    assert out.tolist() == [0.0, 0.0, 0.0]


def test_empty_input_returns_empty_array() -> None:
    out = normalize_intensity([])
    assert out.shape == (0,)


def test_nan_maximum_falls_back_to_unit_reference() -> None:
    """
    A NaN maximum is replaced by 1, so finite entries are only scaled by 100.
    """
    out = normalize_intensity([0.5, float('nan')])
    assert out[0] == pytest.approx(50.0)
    assert np.isnan(out[1])


def test_accepts_generators() -> None:
    out = normalize_intensity(v for v in (2.0, 1.0))
    assert out.tolist() == [100.0, 50.0]
