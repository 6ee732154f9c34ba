"""
Unit tests for fsed_analysis.visualizer.PatternVisualizer.

Plots are rendered with the non-interactive Agg backend and written to a
temporary directory; no window is opened.
"""

from __future__ import annotations

from pathlib import Path

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt  # noqa: E402

from fsed_analysis.diagnostics import compare_edge_toggle, scan_screen_width  # noqa: E402
from fsed_analysis.visualizer import PatternVisualizer  # noqa: E402
from fsed_sim.param_schema import SimParams  # noqa: E402
from fsed_sim.simulator import simulate_diffraction  # noqa: E402

ANGLES = [float(a) for a in range(-30, 31, 2)]


def test_plot_pattern_saves_figure(tmp_path: Path) -> None:
    params = SimParams.reference()
    path = tmp_path / "plots" / "pattern.png"

    fig = PatternVisualizer().plot_pattern(simulate_diffraction(params, ANGLES), params,
                                           save_path=str(path), show=False)

    assert path.exists()
    assert "a=40mm" in fig.axes[0].get_title()
    plt.close(fig)


def test_plot_edge_comparison_draws_two_curves(tmp_path: Path) -> None:
    comparison = compare_edge_toggle(SimParams.reference(), ANGLES)
    fig = PatternVisualizer().plot_edge_comparison(comparison, save_path=str(tmp_path / "cmp.png"), show=False)

    assert len(fig.axes[0].get_lines()) >= 2
    assert (tmp_path / "cmp.png").exists()
    plt.close(fig)


def test_plot_screen_width_scan(tmp_path: Path) -> None:
    samples = scan_screen_width(SimParams.reference(), [250.0, 300.0], ANGLES)
    fig = PatternVisualizer().plot_screen_width_scan(samples, save_path=str(tmp_path / "scan.png"), show=False)

    assert (tmp_path / "scan.png").exists()
    plt.close(fig)
