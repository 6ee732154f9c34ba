# -*- coding: utf-8 -*-
"""
FSED/fsed_sim/config_loader.py

从 YAML 文件读取仿真配置，并用 Pydantic 验证为 SimulationConfig。
"""
from pathlib import Path
from typing import Any, Dict, Union

import yaml

from fsed_sim.param_schema import SimulationConfig


def load_config_dict(config_path: Union[str, Path]) -> Dict[str, Any]:
    """读取 YAML 文件并返回原始字典。空文件返回空字典。"""
    config_path = Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(f"配置文件未找到: {config_path}")

    # 明确指定 utf-8，配置中可能包含中文注释
    with open(config_path, 'r', encoding='utf-8') as f:
        data = yaml.safe_load(f)
    return data or {}


def load_simulation_config(config_path: Union[str, Path]) -> SimulationConfig:
    """
    读取并验证一个仿真配置文件。

    Raises:
        FileNotFoundError: 文件不存在。
        pydantic.ValidationError: 文件内容不符合 SimulationConfig。
    """
    return SimulationConfig.model_validate(load_config_dict(config_path))
