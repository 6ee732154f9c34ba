# -*- coding: utf-8 -*-
"""
FSED/fsed_analysis/visualizer.py

This module provides the PatternVisualizer class, which draws the simulated
intensity curves and the results of the edge diagnostics. It only consumes
the output of the simulator; nothing in fsed_sim depends on it.
"""
import os
from typing import Optional, Sequence

import matplotlib.pyplot as plt
import numpy as np

from fsed_analysis.diagnostics import EdgeToggleComparison, ScreenWidthSample
from fsed_sim.param_schema import DataPoint, SimParams


class PatternVisualizer:
    """
    A class to plot diffraction intensity curves and screen-width scans.
    """

    def __init__(self, figsize=(12, 6)):
        self.figsize = figsize

    @staticmethod
    def _arrays(points: Sequence[DataPoint]):
        thetas = np.array([p.theta for p in points], dtype=np.float64)
        intensity = np.array([p.intensity for p in points], dtype=np.float64)
        return thetas, intensity

    @staticmethod
    def _finish(fig, save_path: Optional[str], show: bool):
        if save_path:
            parent = os.path.dirname(save_path)
            if parent:
                os.makedirs(parent, exist_ok=True)
            fig.savefig(save_path)
        if show:
            plt.show()
        return fig

    def plot_pattern(
            self,
            points: Sequence[DataPoint],
            params: Optional[SimParams] = None,
            save_path: Optional[str] = None,
            show: bool = True
    ):
        """
        Plots a single normalized intensity curve against detector angle.

        Args:
            points (Sequence[DataPoint]): The simulated curve.
            params (SimParams, optional): Used to build the title.
            save_path (str, optional): If provided, saves the plot to this path.
            show (bool): Whether to call plt.show().
        """
        thetas, intensity = self._arrays(points)

        fig, ax = plt.subplots(figsize=self.figsize)
        ax.plot(thetas, intensity, color='#6366f1', linewidth=2.5)
        ax.fill_between(thetas, intensity, color='#6366f1', alpha=0.15)
        ax.axvline(0, color='#94a3b8', linestyle='--', linewidth=1)

        if params is not None:
            state = "edges exposed" if params.enable_edges else "edges absorbed"
            ax.set_title(f"Finite-Screen Diffraction (a={params.slit_width:g}mm, "
                         f"W={params.screen_width:g}mm, λ={params.wavelength:g}mm, {state})")
        else:
            ax.set_title("Finite-Screen Diffraction")
        ax.set_xlabel("Detector angle (deg)")
        ax.set_ylabel("Normalized Intensity")
        ax.grid(True, alpha=0.3)

        return self._finish(fig, save_path, show)

    def plot_edge_comparison(
            self,
            comparison: EdgeToggleComparison,
            save_path: Optional[str] = None,
            show: bool = True
    ):
        """
        Overlays the curves with exposed and absorbed screen edges.
        """
        thetas_on, on = self._arrays(comparison.with_edges)
        thetas_off, off = self._arrays(comparison.without_edges)

        fig, ax = plt.subplots(figsize=self.figsize)
        ax.plot(thetas_on, on, 'r', linewidth=2, label='Edges exposed')
        ax.plot(thetas_off, off, 'b--', linewidth=2, label='Edges absorbed (ideal)')
        ax.axvline(0, color='#94a3b8', linestyle=':', linewidth=1)
        ax.set_title(f"Edge Toggle: axial ratio I_on/I_off = {comparison.axial_ratio:.3f}")
        ax.set_xlabel("Detector angle (deg)")
        ax.set_ylabel("Normalized Intensity")
        ax.legend()
        ax.grid(True, alpha=0.3)

        return self._finish(fig, save_path, show)

    def plot_screen_width_scan(
            self,
            samples: Sequence[ScreenWidthSample],
            save_path: Optional[str] = None,
            show: bool = True
    ):
        """
        Plots the axial intensity ratio as a function of screen width, marking
        the widths at which the axis is a local minimum.
        """
        widths = np.array([s.screen_width for s in samples], dtype=np.float64)
        ratios = np.array([s.axial_ratio for s in samples], dtype=np.float64)
        dips = np.array([s.has_dip for s in samples], dtype=bool)

        fig, ax = plt.subplots(figsize=self.figsize)
        ax.plot(widths, ratios, 'k-o', markersize=4, label='I_on(0) / I_off(0)')
        if dips.any():
            ax.plot(widths[dips], ratios[dips], 'o', color='#f59e0b', markersize=8, label='Axial dip')
        ax.axhline(1.0, color='#94a3b8', linestyle='--', linewidth=1)
        ax.set_title("Axial Intensity vs Screen Width")
        ax.set_xlabel("Screen width W (mm)")
        ax.set_ylabel("Axial intensity ratio")
        ax.legend()
        ax.grid(True, alpha=0.3)

        return self._finish(fig, save_path, show)


# When run directly, perform a test
if __name__ == '__main__':
    from fsed_analysis.diagnostics import compare_edge_toggle, scan_screen_width
    from fsed_sim.simulator import simulate_diffraction

    print("--- Testing Pattern Visualizer ---")

    params = SimParams.reference()
    angles = [float(a) for a in range(-60, 61)]
    visualizer = PatternVisualizer()

    print("\n[1] Plotting the reference pattern...")
    visualizer.plot_pattern(simulate_diffraction(params, angles), params)

    print("\n[2] Plotting the edge toggle comparison...")
    visualizer.plot_edge_comparison(compare_edge_toggle(params, angles))

    print("\n[3] Plotting a screen width scan...")
    visualizer.plot_screen_width_scan(scan_screen_width(params, range(100, 601, 20), angles))
