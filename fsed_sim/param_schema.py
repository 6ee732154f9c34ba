# -*- coding: utf-8 -*-
"""
FSED/fsed_sim/param_schema.py

使用 Pydantic 定义仿真参数与输出数据点的结构。
所有的模型都是不可变的 (frozen)：每次仿真调用都接收一个完整的参数值，
核心中不存在任何进程级的可变状态。
(Pydantic V2 语法)

包含的模型:
- SimParams: 装置的几何/物理参数。
- DataPoint: 输出序列中的一个 (角度, 强度) 点。
- SamplingConfig: 孔径离散化的采样点数。
- AngleSweep: 探测器转角扫描范围。
- SimulationConfig: YAML 配置文件的顶层结构。
"""
import math
from typing import List, Optional

import numpy as np
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

__all__ = [
    'InvalidParameterError',
    'SimParams',
    'DataPoint',
    'SamplingConfig',
    'AngleSweep',
    'SimulationConfig',
    'ValidationError',
]


class InvalidParameterError(ValueError):
    """当启用严格检查且某个宽度/距离为负数或非有限值时抛出。"""


# 1. 装置参数
class SimParams(BaseModel):
    """
    描述一次仿真所用的装置。所有长度使用同一单位 (参考装置使用毫米)。
    字段名既可以用 snake_case，也可以用原装置记录中的 camelCase 别名。
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    wavelength: float = Field(..., description="波长 λ。")
    horn_aperture: float = Field(..., alias='hornAperture', description="喇叭辐射口径宽度。")
    dist_l1: float = Field(..., alias='distL1', description="喇叭到缝平面的距离 L1。")
    dist_l2: float = Field(..., alias='distL2', description="缝平面到探测器的距离 L2。")
    slit_width: float = Field(..., alias='slitWidth', description="单缝宽度 a (位于屏中央)。")
    screen_width: float = Field(..., alias='screenWidth', description="遮挡板总宽 W。")
    enable_edges: bool = Field(True, alias='enableEdges', description="False 表示板边缘已覆盖吸波材料。")

    @classmethod
    def reference(cls, **overrides) -> 'SimParams':
        """返回参考装置 (32mm 波长, 40mm 缝, 300mm 板)，可按字段名覆盖。"""
        values = dict(
            wavelength=32.0,
            horn_aperture=140.0,
            dist_l1=600.0,
            dist_l2=600.0,
            slit_width=40.0,
            screen_width=300.0,
            enable_edges=True,
        )
        values.update(overrides)
        return cls(**values)

    def check_physical(self) -> None:
        """
        可选的严格检查：宽度、距离和波长必须是有限的非负数 (波长必须为正)。
        不检查 slit_width 与 screen_width 的相对大小。

        Raises:
            InvalidParameterError: 如果某个字段不满足条件。
        """
        lengths = {
            'horn_aperture': self.horn_aperture,
            'dist_l1': self.dist_l1,
            'dist_l2': self.dist_l2,
            'slit_width': self.slit_width,
            'screen_width': self.screen_width,
        }
        for name, value in lengths.items():
            if not math.isfinite(value) or value < 0:
                raise InvalidParameterError(f"参数 '{name}' 必须是有限的非负数，当前值为 {value}。")
        if not math.isfinite(self.wavelength) or self.wavelength <= 0:
            raise InvalidParameterError(f"参数 'wavelength' 必须是有限的正数，当前值为 {self.wavelength}。")


# 2. 输出数据点
class DataPoint(BaseModel):
    """归一化强度曲线上的一个点，峰值为 100。"""
    model_config = ConfigDict(frozen=True)

    theta: float = Field(..., description="探测器转角 (度)，与输入一致。")
    intensity: float = Field(..., description="归一化强度，范围 [0, 100]。")


# 3. 采样质量
class SamplingConfig(BaseModel):
    """孔径离散化的采样点数。在一次扫描中保持不变。"""
    model_config = ConfigDict(frozen=True)

    n_horn: int = Field(60, ge=2, description="喇叭口径上的采样点数。")
    n_slit: int = Field(100, ge=2, description="缝隙上的采样点数。")


# 4. 角度扫描
class AngleSweep(BaseModel):
    """从 start 到 stop (含端点) 的等步长角度序列，单位为度。"""
    model_config = ConfigDict(frozen=True)

    start: float = -60.0
    stop: float = 60.0
    step: float = Field(1.0, gt=0)

    @model_validator(mode='after')
    def _check_order(self) -> 'AngleSweep':
        if self.stop < self.start:
            raise ValueError(f"stop ({self.stop}) 不能小于 start ({self.start})。")
        return self

    def angles(self) -> List[float]:
        """生成扫描角度列表。参考扫描 (-60..60, 步长 1) 共 121 个点。"""
        count = int(math.floor((self.stop - self.start) / self.step + 1e-9)) + 1
        return [self.start + i * self.step for i in range(count)]


def _default_screen_widths() -> List[float]:
    # 与原装置的板宽调节范围一致: 100..600mm, 步长 10mm
    return [float(w) for w in np.arange(100, 601, 10)]


# 5. 顶层配置
class SimulationConfig(BaseModel):
    """
    一个完整的仿真配置，对应 configs/ 目录下的 YAML 文件。
    """
    params: SimParams = Field(default_factory=SimParams.reference)
    sweep: AngleSweep = Field(default_factory=AngleSweep)
    sampling: SamplingConfig = Field(default_factory=SamplingConfig)

    max_workers: int = Field(1, ge=1, description="并行计算各角度时的线程数。1 表示串行。")
    strict: bool = Field(False, description="为 True 时在计算前调用 SimParams.check_physical()。")

    output_path: Optional[str] = Field(None, description="结果 JSON 的保存路径。")
    plot_path: Optional[str] = Field(None, description="曲线图的保存路径。")
    screen_widths: List[float] = Field(
        default_factory=_default_screen_widths,
        description="板宽扫描使用的宽度列表。"
    )

    @field_validator('screen_widths')
    @classmethod
    def _non_empty_widths(cls, widths: List[float]) -> List[float]:
        if not widths:
            raise ValueError("screen_widths 不能为空。")
        return widths


# 当该文件被直接执行时，运行以下测试代码
if __name__ == '__main__':
    print("--- Testing Parameter Schema ---")

    print("\n[1] Creating the reference setup...")
    params = SimParams.reference()
    print(params.model_dump_json(indent=2, by_alias=True))

    print("\n[2] Loading a camelCase record...")
    record = {
        'wavelength': 32, 'hornAperture': 140, 'distL1': 600, 'distL2': 600,
        'slitWidth': 80, 'screenWidth': 300, 'enableEdges': False
    }
    print(f"    -> {SimParams.model_validate(record)}")

    print("\n[3] Testing with an invalid record (missing 'distL2')...")
    record.pop('distL2')
    try:
        SimParams.model_validate(record)
    except ValidationError as e:
        print("    -> SUCCESS: Pydantic correctly caught the validation error!")
        print(f"       {e.errors()[0]['loc'][0]}: {e.errors()[0]['msg']}")

    print(f"\n[4] Reference sweep has {len(AngleSweep().angles())} angles.")

    print("\n--- Parameter Schema Test Complete ---")
