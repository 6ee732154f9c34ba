"""
Unit tests for fsed_sim.sampling.

These tests verify the aperture discretizer:
- evenly spaced samples that include both aperture endpoints
- default sample counts (60 horn, 100 slit) and SamplingConfig overrides
- the two fixed screen-edge positions
"""

from __future__ import annotations

import numpy as np
import pytest

from fsed_sim.param_schema import SamplingConfig, SimParams
from fsed_sim.sampling import N_HORN, N_SLIT, discretize, edge_positions, sample_aperture


def test_sample_aperture_includes_both_endpoints() -> None:
    """
    The first and last samples sit exactly on -w/2 and +w/2.
    """
    pts = sample_aperture(40.0, 100)
    assert pts.shape == (100,)
    assert pts[0] == pytest.approx(-20.0)
    assert pts[-1] == pytest.approx(20.0)


def test_sample_aperture_is_evenly_spaced_and_increasing() -> None:
    """
    Consecutive samples are separated by w/(N-1).
    """
    pts = sample_aperture(140.0, 60)
    steps = np.diff(pts)
    assert np.all(steps > 0)
    assert np.allclose(steps, 140.0 / 59)


def test_sample_aperture_zero_width_collapses_to_axis() -> None:
    """
    A zero-width aperture yields N samples all located at 0 without raising.
    """
    pts = sample_aperture(0.0, 10)
    assert pts.shape == (10,)
    assert np.all(pts == 0.0)


def test_edge_positions_are_screen_boundaries() -> None:
    """
    Exactly two edge points at -W/2 and +W/2.
    """
    edges = edge_positions(300.0)
    assert edges.tolist() == [-150.0, 150.0]


def test_discretize_uses_reference_counts_by_default() -> None:
    """
    Without a SamplingConfig the calibrated counts are used.
    """
    samples = discretize(SimParams.reference())
    assert samples.horn.shape == (N_HORN,) == (60,)
    assert samples.slit.shape == (N_SLIT,) == (100,)
    assert samples.edges.tolist() == [-150.0, 150.0]
    assert samples.horn[0] == pytest.approx(-70.0)
    assert samples.horn[-1] == pytest.approx(70.0)


def test_discretize_honours_sampling_config() -> None:
    """
    SamplingConfig overrides both sample counts.
    """
    samples = discretize(SimParams.reference(), SamplingConfig(n_horn=5, n_slit=7))
    assert samples.horn.shape == (5,)
    assert samples.slit.shape == (7,)
