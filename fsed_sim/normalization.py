# -*- coding: utf-8 -*-
"""
FSED/fsed_sim/normalization.py

强度归一化器：把一次完整角度扫描的强度序列缩放到峰值为 100。
这是一个针对整个序列的操作，必须在所有角度都计算完成之后执行。
"""
from typing import Iterable

import numpy as np

PEAK_VALUE = 100.0


def normalize_intensity(values: Iterable[float]) -> np.ndarray:
    """
    normalized[i] = values[i] / max(values) * 100。

    当最大值为 0、NaN 或序列为空时，参考值取 1，
    因此全零输入得到全零输出，而不会出现除零。

    Args:
        values (Iterable[float]): 一次扫描的未归一化强度。

    Returns:
        np.ndarray: 与输入等长的归一化强度。
    """
    intensities = np.asarray(list(values), dtype=np.float64)
    if intensities.size == 0:
        return intensities

    max_val = np.max(intensities)
    if max_val == 0 or np.isnan(max_val):
        max_val = 1.0

    with np.errstate(divide='ignore', invalid='ignore'):
        return (intensities / max_val) * PEAK_VALUE
