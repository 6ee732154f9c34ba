# -*- coding: utf-8 -*-
"""
FSED/fsed_analysis/diagnostics.py

该模块对仿真得到的强度曲线做物理诊断:
- detect_axial_dip: 判断轴线 (θ=0) 上是否出现干涉凹陷。
- compare_edge_toggle: 验证 1，比较裸露板边缘与覆盖吸波材料两种情况。
- scan_screen_width: 验证 2，改变板宽 W，观察中心强度随程差的摆动。
"""
from dataclasses import dataclass
from typing import List, Optional, Sequence

import numpy as np
from pydantic import BaseModel, ConfigDict
from scipy.signal import find_peaks
from tqdm import tqdm

from fsed_sim.param_schema import DataPoint, SimParams, ValidationError
from fsed_sim.simulator import DiffractionSimulator


@dataclass(frozen=True)
class AxialDipReport:
    """轴向凹陷的诊断结果。强度均为归一化值。"""
    has_dip: bool
    axial_theta: float
    axial_intensity: float
    flank_intensity: float
    depth: float


@dataclass(frozen=True)
class EdgeToggleComparison:
    """同一装置在边缘开启/屏蔽两种情况下的曲线对比。"""
    with_edges: List[DataPoint]
    without_edges: List[DataPoint]
    axial_with_edges: float
    axial_without_edges: float
    axial_ratio: float  # 未归一化的 I_on(0) / I_off(0)
    max_abs_difference: float


class ScreenWidthSample(BaseModel):
    """板宽扫描中的一个点。可以直接用 save_scan_results 导出。"""
    model_config = ConfigDict(frozen=True)

    screen_width: float
    axial_intensity: float
    axial_ratio: float
    has_dip: bool


def _axis_index(points: Sequence[DataPoint]) -> int:
    thetas = np.array([p.theta for p in points], dtype=np.float64)
    return int(np.argmin(np.abs(thetas)))


def detect_axial_dip(points: Sequence[DataPoint], min_prominence: float = 0.5) -> AxialDipReport:
    """
    判断最接近 θ=0 的采样点是否为强度曲线的局部极小值。

    Args:
        points (Sequence[DataPoint]): 一次扫描的归一化曲线，按角度递增排列。
        min_prominence (float): 凹陷的最小显著度 (归一化强度单位)。

    Returns:
        AxialDipReport: depth 为两侧最近峰值中较高者与轴向强度之差。
    """
    if not points:
        raise ValueError("无法诊断空的强度曲线。")

    intensity = np.array([p.intensity for p in points], dtype=np.float64)
    idx = _axis_index(points)

    # 凹陷即 -I 的峰
    minima, _ = find_peaks(-intensity, prominence=min_prominence)
    has_dip = bool(idx in minima)

    peaks, _ = find_peaks(intensity)
    left = peaks[peaks < idx]
    right = peaks[peaks > idx]
    flank_candidates = []
    if left.size:
        flank_candidates.append(intensity[left[-1]])
    if right.size:
        flank_candidates.append(intensity[right[0]])
    flank = float(max(flank_candidates)) if flank_candidates else float(intensity[idx])

    return AxialDipReport(
        has_dip=has_dip,
        axial_theta=float(points[idx].theta),
        axial_intensity=float(intensity[idx]),
        flank_intensity=flank,
        depth=flank - float(intensity[idx]),
    )


def _axial_ratio(simulator: DiffractionSimulator, params: SimParams) -> float:
    """边缘开启与屏蔽时轴向未归一化强度之比。"""
    on = simulator.raw_intensities(params.model_copy(update={'enable_edges': True}), [0.0])[0]
    off = simulator.raw_intensities(params.model_copy(update={'enable_edges': False}), [0.0])[0]
    with np.errstate(divide='ignore', invalid='ignore'):
        return float(np.float64(on) / np.float64(off))


def compare_edge_toggle(
        params: SimParams,
        angles: Sequence[float],
        simulator: Optional[DiffractionSimulator] = None
) -> EdgeToggleComparison:
    """
    以相同参数分别运行边缘开启和屏蔽的仿真。
    如果轴向凹陷在屏蔽后消失，说明凹陷来自板边缘而不是缝隙。
    """
    simulator = simulator or DiffractionSimulator()
    angles = list(angles)

    with_edges = simulator.simulate(params.model_copy(update={'enable_edges': True}), angles)
    without_edges = simulator.simulate(params.model_copy(update={'enable_edges': False}), angles)

    if angles:
        idx = _axis_index(with_edges)
        axial_on = with_edges[idx].intensity
        axial_off = without_edges[idx].intensity
        max_diff = max(abs(a.intensity - b.intensity) for a, b in zip(with_edges, without_edges))
    else:
        axial_on = axial_off = max_diff = float('nan')

    return EdgeToggleComparison(
        with_edges=with_edges,
        without_edges=without_edges,
        axial_with_edges=axial_on,
        axial_without_edges=axial_off,
        axial_ratio=_axial_ratio(simulator, params),
        max_abs_difference=max_diff,
    )


def scan_screen_width(
        params: SimParams,
        screen_widths: Sequence[float],
        angles: Sequence[float],
        simulator: Optional[DiffractionSimulator] = None,
        show_progress: bool = False
) -> List[ScreenWidthSample]:
    """
    对每个板宽 W 运行一次仿真 (其他参数不变)，记录中心强度。
    改变 W 会改变边缘波与缝隙波之间的程差，中心强度随之摆动。
    """
    simulator = simulator or DiffractionSimulator()
    angles = list(angles)

    samples = []
    widths = tqdm(screen_widths, desc="Screen width scan") if show_progress else screen_widths
    for width in widths:
        try:
            current = params.model_copy(update={'screen_width': float(width)})
            points = simulator.simulate(current, angles)
            report = detect_axial_dip(points)
            samples.append(ScreenWidthSample(
                screen_width=float(width),
                axial_intensity=report.axial_intensity,
                axial_ratio=_axial_ratio(simulator, current),
                has_dip=report.has_dip,
            ))
        except (ValidationError, TypeError, ValueError) as e:
            print(f"Error scanning W={width}: {e}. Skipping.")
            continue
    return samples
