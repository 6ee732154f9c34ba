# -*- coding: utf-8 -*-
"""
FSED/fsed_sim/sampling.py

孔径离散器：把连续的孔径 (喇叭口面、单缝) 转换为有限个等间距点源，
并确定遮挡板两条边缘的位置。

包含的函数:
- sample_aperture: 在 [-w/2, +w/2] 上生成等间距采样点 (含两个端点)。
- edge_positions: 遮挡板左右边缘的两个点。
- discretize: 为一次仿真生成全部点源。
"""
from dataclasses import dataclass
from typing import Optional

import numpy as np

from fsed_sim.param_schema import SimParams, SamplingConfig

# 仿真质量常数。增大它们会同时提高精度和计算量。
N_HORN = 60
N_SLIT = 100


@dataclass(frozen=True)
class ApertureSamples:
    """一次仿真所用的全部点源位置 (沿孔径轴的标量坐标)。"""
    horn: np.ndarray
    slit: np.ndarray
    edges: np.ndarray


def sample_aperture(width: float, count: int) -> np.ndarray:
    """
    在 [-width/2, +width/2] 上生成 count 个等间距的点，两个端点都包含在内。

    Args:
        width (float): 孔径宽度。
        count (int): 采样点数，至少为 2。

    Returns:
        np.ndarray: 形状为 (count,) 的一维数组，按位置递增排列。
    """
    # 逐点计算 -w/2 + i*w/(N-1)，不使用 np.linspace 的步长累加
    i = np.arange(count, dtype=np.float64)
    return -width / 2 + (i * width) / (count - 1)


def edge_positions(screen_width: float) -> np.ndarray:
    """遮挡板的两条边缘，位于 -W/2 和 +W/2。"""
    return np.array([-screen_width / 2, screen_width / 2], dtype=np.float64)


def discretize(params: SimParams, sampling: Optional[SamplingConfig] = None) -> ApertureSamples:
    """
    为一次仿真生成点源。喇叭口面的采样点会被计算出来，但场叠加引擎
    把光源视为从轴线出发，并不使用它们。
    """
    n_horn = sampling.n_horn if sampling is not None else N_HORN
    n_slit = sampling.n_slit if sampling is not None else N_SLIT
    return ApertureSamples(
        horn=sample_aperture(params.horn_aperture, n_horn),
        slit=sample_aperture(params.slit_width, n_slit),
        edges=edge_positions(params.screen_width),
    )
