# -*- coding: utf-8 -*-
"""
FSED/fsed_sim/phenomena/edge_diffraction.py

该模块是场叠加引擎，模拟有限尺寸遮挡板上单缝的远场衍射。
总场 E_total = E_slit (缝隙衍射) + E_edges (板左右边缘绕射)，
两者按复振幅相干叠加。每个点源都使用标量球面波近似:
振幅按每段路径 1/sqrt(r) 衰减，相位为 k*r。

包含的函数:
- wavenumber: 波数 k = 2π/λ。
- detector_position: 探测器在给定转角下的笛卡尔坐标。
- path_lengths: 光源到点源 (r1) 以及点源到探测器 (r2) 的路程。
- wavelet_amplitude: 一个子波的振幅。
- slit_field / edge_field: 缝隙和板边缘各自的复场。
- field_at_angle: 某一转角下的总复场。
- unnormalized_intensity: 某一转角下的未归一化强度。
"""
from typing import Tuple, Union

import numpy as np

from fsed_sim.param_schema import SimParams
from fsed_sim.sampling import ApertureSamples

ArrayLike = Union[float, np.ndarray]

# 经验标定常数：边缘绕射波相对于直接透射波的相位滞后，以及边缘散射系数。
# 它们被调节为重现 40mm 缝/300mm 板时的轴向凹陷，不是从第一性原理推导的。
EDGE_PHASE_LAG = np.pi * 0.85
EDGE_AMPLITUDE = 1.8


def wavenumber(wavelength: float) -> float:
    """k = 2π/λ。λ=0 时得到 inf 而不是抛出异常。"""
    with np.errstate(divide='ignore'):
        return (2 * np.pi) / np.float64(wavelength)


def detector_position(theta_deg: float, dist_l2: float) -> Tuple[float, float]:
    """
    探测器位于以缝平面中心为圆心、半径为 L2 的圆上。

    Returns:
        Tuple[float, float]: (det_x, det_z)，即 L2*sin(θ) 和 L2*cos(θ)。
    """
    theta_rad = (theta_deg * np.pi) / 180
    return dist_l2 * np.sin(theta_rad), dist_l2 * np.cos(theta_rad)


def path_lengths(
        x: ArrayLike,
        dist_l1: float,
        det_x: float,
        det_z: float
) -> Tuple[ArrayLike, ArrayLike]:
    """
    计算点源 x 的两段路程。

    r1 从喇叭口面中心的波阵面出发 (光源视为位于轴线上)，
    r2 从点源到探测器。

    Args:
        x (float 或 np.ndarray): 点源在孔径轴上的位置。
        dist_l1 (float): 喇叭到缝平面的距离。
        det_x (float): 探测器的横向坐标。
        det_z (float): 探测器的纵向坐标。

    Returns:
        Tuple: (r1, r2)，与 x 的形状相同。
    """
    r1 = np.sqrt(dist_l1 * dist_l1 + x * x)
    r2 = np.sqrt(det_z * det_z + (det_x - x) * (det_x - x))
    return r1, r2


def wavelet_amplitude(r1: ArrayLike, r2: ArrayLike, coefficient: float = 1.0) -> ArrayLike:
    """子波振幅 coefficient / (sqrt(r1) * sqrt(r2))，每段路径按 1/sqrt(r) 衰减。"""
    return coefficient / (np.sqrt(r1) * np.sqrt(r2))


def _superpose(
        positions: np.ndarray,
        dist_l1: float,
        det_x: float,
        det_z: float,
        k: float,
        coefficient: float = 1.0,
        phase_offset: float = 0.0
) -> complex:
    """把一组点源在探测器处的子波相干求和，返回复场。"""
    r1, r2 = path_lengths(positions, dist_l1, det_x, det_z)
    phase = k * (r1 + r2) + phase_offset
    amp = wavelet_amplitude(r1, r2, coefficient)
    re = np.sum(amp * np.cos(phase))
    im = np.sum(amp * np.sin(phase))
    return complex(re, im)


def slit_field(theta_deg: float, params: SimParams, slit_points: np.ndarray) -> complex:
    """缝隙上所有采样点在转角 θ 处的复场 E_slit。"""
    det_x, det_z = detector_position(theta_deg, params.dist_l2)
    with np.errstate(divide='ignore', invalid='ignore', over='ignore'):
        return _superpose(slit_points, params.dist_l1, det_x, det_z, wavenumber(params.wavelength))


def edge_field(theta_deg: float, params: SimParams, edge_points: np.ndarray) -> complex:
    """
    两条板边缘在转角 θ 处的复场 E_edges。
    即使 enable_edges 为 False 也会计算；是否计入由 field_at_angle 决定。
    """
    det_x, det_z = detector_position(theta_deg, params.dist_l2)
    with np.errstate(divide='ignore', invalid='ignore', over='ignore'):
        return _superpose(edge_points, params.dist_l1, det_x, det_z, wavenumber(params.wavelength),
                          coefficient=EDGE_AMPLITUDE, phase_offset=EDGE_PHASE_LAG)


def field_at_angle(theta_deg: float, params: SimParams, samples: ApertureSamples) -> complex:
    """
    计算单个转角处的总复场。

    Args:
        theta_deg (float): 探测器转角 (度)。
        params (SimParams): 装置参数。
        samples (ApertureSamples): 由 sampling.discretize 生成的点源。

    Returns:
        complex: E_slit + E_edges。边缘被屏蔽时 E_edges 为 0。
    """
    # 1. 缝隙贡献
    total = slit_field(theta_deg, params, samples.slit)

    # 2. 边缘贡献 (如果未被吸波材料屏蔽)
    if params.enable_edges:
        total += edge_field(theta_deg, params, samples.edges)

    return total


def unnormalized_intensity(theta_deg: float, params: SimParams, samples: ApertureSamples) -> float:
    """某一转角的强度 |E_total|^2 = Re^2 + Im^2。"""
    field = field_at_angle(theta_deg, params, samples)
    return float(field.real * field.real + field.imag * field.imag)


# 当该文件被直接执行时，运行以下测试代码
if __name__ == '__main__':
    from fsed_sim.sampling import discretize

    print("--- Testing Edge Diffraction Engine ---")

    params = SimParams.reference()
    samples = discretize(params)

    print("\n[1] Field components on axis (θ = 0)...")
    e_slit = slit_field(0.0, params, samples.slit)
    e_edges = edge_field(0.0, params, samples.edges)
    print(f"    -> |E_slit|  = {abs(e_slit):.6f}")
    print(f"    -> |E_edges| = {abs(e_edges):.6f}")

    print("\n[2] Axial intensity with and without edge diffraction...")
    i_on = unnormalized_intensity(0.0, params, samples)
    i_off = unnormalized_intensity(0.0, params.model_copy(update={'enable_edges': False}), samples)
    print(f"    -> edges exposed : {i_on:.6e}")
    print(f"    -> edges absorbed: {i_off:.6e}")
    print(f"    -> ratio         : {i_on / i_off:.4f}")

    print("\n--- Edge Diffraction Engine Test Complete ---")
