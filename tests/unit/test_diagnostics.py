"""
Unit tests for fsed_analysis.diagnostics.

These tests cover the physical diagnoses built on top of the simulator:
- axial dip detection on synthetic and simulated curves
- the edge toggle comparison
- the screen width scan
"""

from __future__ import annotations

import math

import pytest

from fsed_analysis.diagnostics import compare_edge_toggle, detect_axial_dip, scan_screen_width
from fsed_sim.param_schema import DataPoint, SimParams

REFERENCE_ANGLES = [float(a) for a in range(-60, 61)]


def _curve(values):
    thetas = range(-(len(values) // 2), len(values) // 2 + 1)
    return [DataPoint(theta=float(t), intensity=v) for t, v in zip(thetas, values)]


def test_detect_axial_dip_on_synthetic_curve() -> None:
    report = detect_axial_dip(_curve([40.0, 100.0, 80.0, 90.0, 70.0, 100.0, 40.0]))
    assert report.has_dip is False  # the centre (90) is a local maximum

    report = detect_axial_dip(_curve([40.0, 90.0, 100.0, 80.0, 100.0, 90.0, 40.0]))
    assert report.has_dip is True
    assert report.axial_theta == 0.0
    assert report.axial_intensity == 80.0
    assert report.flank_intensity == 100.0
    assert report.depth == pytest.approx(20.0)


def test_detect_axial_dip_single_peak() -> None:
    report = detect_axial_dip(_curve([10.0, 50.0, 100.0, 50.0, 10.0]))
    assert report.has_dip is False
    assert report.depth == 0.0


def test_detect_axial_dip_rejects_empty_curve() -> None:
    with pytest.raises(ValueError):
        detect_axial_dip([])


def test_reference_setup_shows_dip_only_with_edges() -> None:
    comparison = compare_edge_toggle(SimParams.reference(), REFERENCE_ANGLES)

    assert detect_axial_dip(comparison.with_edges).has_dip is True
    assert detect_axial_dip(comparison.without_edges).has_dip is False
    assert comparison.axial_with_edges < comparison.axial_without_edges
    assert comparison.axial_ratio < 1.0
    assert comparison.max_abs_difference > 0.0


def test_compare_edge_toggle_ignores_input_flag() -> None:
    """
    The comparison always runs one exposed and one absorbed configuration.
    """
    a = compare_edge_toggle(SimParams.reference(enable_edges=False), [-5.0, 0.0, 5.0])
    b = compare_edge_toggle(SimParams.reference(enable_edges=True), [-5.0, 0.0, 5.0])
    assert a.with_edges == b.with_edges
    assert a.without_edges == b.without_edges


def test_compare_edge_toggle_with_empty_sweep() -> None:
    comparison = compare_edge_toggle(SimParams.reference(), [])
    assert comparison.with_edges == []
    assert math.isnan(comparison.axial_with_edges)
    assert math.isfinite(comparison.axial_ratio)


def test_scan_screen_width_returns_one_sample_per_width() -> None:
    angles = [float(a) for a in range(-20, 21)]
    samples = scan_screen_width(SimParams.reference(), [200.0, 300.0, 400.0], angles)

    assert [s.screen_width for s in samples] == [200.0, 300.0, 400.0]
    assert all(math.isfinite(s.axial_ratio) for s in samples)
    assert all(0.0 <= s.axial_intensity <= 100.0 for s in samples)
    assert samples[1].has_dip is True
    # the edge phase changes with W, so the axial ratio swings
    assert len({round(s.axial_ratio, 6) for s in samples}) == 3


def test_scan_screen_width_skips_failing_steps(capsys) -> None:
    """
    A width whose step fails is reported and skipped; the scan itself returns.
    """
    samples = scan_screen_width(SimParams.reference(), [200.0, 300.0], [])

    assert samples == []
    out = capsys.readouterr().out
    assert "Error scanning W=200.0" in out
    assert "Error scanning W=300.0" in out


def test_scan_screen_width_keeps_good_steps_around_a_bad_one(capsys) -> None:
    """
    Only the failing width is dropped; the others are still scanned in order.
    """
    angles = [float(a) for a in range(-20, 21)]
    samples = scan_screen_width(SimParams.reference(), [200.0, "wide", 400.0], angles)

    assert [s.screen_width for s in samples] == [200.0, 400.0]
    assert "Error scanning W=wide" in capsys.readouterr().out
