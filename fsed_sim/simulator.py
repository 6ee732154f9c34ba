# -*- coding: utf-8 -*-
"""
FSED/fsed_sim/simulator.py

该模块提供了仿真的入口。
它把参数模型、孔径离散器、场叠加引擎和强度归一化器串联起来:
先逐角度计算未归一化强度 (可并行)，等全部角度完成后再统一归一化。
"""
import json
import os
from concurrent.futures import ThreadPoolExecutor
from typing import Any, List, Optional, Sequence

import numpy as np
from pydantic import BaseModel

from fsed_sim.normalization import normalize_intensity
from fsed_sim.param_schema import DataPoint, SamplingConfig, SimParams, SimulationConfig
from fsed_sim.phenomena.edge_diffraction import unnormalized_intensity
from fsed_sim.sampling import ApertureSamples, discretize


class DiffractionSimulator:
    """
    一个计算有限尺寸屏单缝衍射强度曲线的类。
    实例本身不保存任何与某次仿真相关的状态，可以重复使用。
    """

    def __init__(
            self,
            sampling: Optional[SamplingConfig] = None,
            max_workers: int = 1,
            strict: bool = False
    ):
        if max_workers < 1:
            raise ValueError(f"max_workers 必须至少为 1，当前值为 {max_workers}。")
        self.sampling = sampling if sampling is not None else SamplingConfig()
        self.max_workers = max_workers
        self.strict = strict

    @classmethod
    def from_config(cls, config: SimulationConfig) -> 'DiffractionSimulator':
        return cls(sampling=config.sampling, max_workers=config.max_workers, strict=config.strict)

    def raw_intensities(self, params: SimParams, angles: Sequence[float]) -> np.ndarray:
        """
        计算每个角度的未归一化强度，顺序与 angles 一致。

        Args:
            params (SimParams): 装置参数。
            angles (Sequence[float]): 探测器转角 (度)。

        Returns:
            np.ndarray: 与 angles 等长的一维数组。
        """
        if self.strict:
            params.check_physical()

        angles = list(angles)
        samples = discretize(params, self.sampling)

        if self.max_workers > 1 and len(angles) > 1:
            # 各角度互相独立；map 按输入顺序返回结果
            with ThreadPoolExecutor(max_workers=self.max_workers) as pool:
                values = list(pool.map(lambda theta: self._intensity_at(theta, params, samples), angles))
        else:
            values = [self._intensity_at(theta, params, samples) for theta in angles]

        return np.asarray(values, dtype=np.float64)

    @staticmethod
    def _intensity_at(theta: float, params: SimParams, samples: ApertureSamples) -> float:
        return unnormalized_intensity(theta, params, samples)

    def simulate(self, params: SimParams, angles: Sequence[float]) -> List[DataPoint]:
        """
        计算归一化强度曲线。

        Returns:
            List[DataPoint]: 与 angles 等长、同序的数据点，峰值为 100。
        """
        angles = list(angles)
        normalized = normalize_intensity(self.raw_intensities(params, angles))
        return [DataPoint(theta=theta, intensity=float(value)) for theta, value in zip(angles, normalized)]

    def simulate_config(self, config: SimulationConfig) -> List[DataPoint]:
        """使用配置中的参数和扫描范围运行一次仿真。"""
        return self.simulate(config.params, config.sweep.angles())


def simulate_diffraction(
        params: SimParams,
        angles: Sequence[float],
        sampling: Optional[SamplingConfig] = None,
        max_workers: int = 1,
        strict: bool = False
) -> List[DataPoint]:
    """
    核心入口：给定装置参数和转角序列，返回归一化的 (角度, 强度) 序列。
    相同的输入总是得到逐位相同的输出。
    """
    simulator = DiffractionSimulator(sampling=sampling, max_workers=max_workers, strict=strict)
    return simulator.simulate(params, angles)


def _write_json(document: Any, save_path: str) -> None:
    parent = os.path.dirname(save_path)
    if parent:
        os.makedirs(parent, exist_ok=True)
    with open(save_path, 'w', encoding='utf-8') as f:
        json.dump(document, f, indent=2, ensure_ascii=False)


def save_results(points: Sequence[DataPoint], save_path: str, params: Optional[SimParams] = None) -> None:
    """把一条强度曲线 (以及可选的装置参数) 保存为 JSON 文件。"""
    document = {
        'params': params.model_dump(by_alias=True) if params is not None else None,
        'points': [point.model_dump() for point in points],
    }
    _write_json(document, save_path)


def save_scan_results(samples: Sequence[BaseModel], save_path: str) -> None:
    """把一组扫描结果 (任意 Pydantic 模型，例如板宽扫描的 ScreenWidthSample) 保存为 JSON 列表。"""
    _write_json([sample.model_dump() for sample in samples], save_path)


# 当该文件被直接执行时，运行以下测试代码
if __name__ == '__main__':
    print("--- Testing Diffraction Simulator ---")

    params = SimParams.reference()
    angles = [float(a) for a in range(-60, 61)]

    print("\n[1] Simulating the reference setup (edges exposed)...")
    with_edges = simulate_diffraction(params, angles)
    print(f"    -> {len(with_edges)} points, peak = {max(p.intensity for p in with_edges):.2f}")
    print(f"    -> I(0°) = {with_edges[60].intensity:.2f}")

    print("\n[2] Simulating with absorber on the edges...")
    without_edges = simulate_diffraction(params.model_copy(update={'enable_edges': False}), angles)
    print(f"    -> I(0°) = {without_edges[60].intensity:.2f}")

    print("\n--- Diffraction Simulator Test Complete ---")
