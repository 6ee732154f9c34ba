# -*- coding: utf-8 -*-
"""
FSED/scripts/1_run_simulation.py
python scripts/1_run_simulation.py --config configs/reference_setup.yaml

该脚本读取一个配置文件，运行一次有限尺寸屏衍射仿真，
打印轴向诊断结果，并把强度曲线保存为 JSON (以及可选的图像)。
"""
import argparse
import yaml

# --- 拓宽Python的模块搜索路径 ---
import sys
import os

project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
sys.path.append(project_root)
# -----------------------------------------

from fsed_sim.config_loader import load_simulation_config
from fsed_sim.simulator import DiffractionSimulator, save_results
from fsed_analysis.diagnostics import detect_axial_dip


def main():
    """主执行函数"""
    parser = argparse.ArgumentParser(description="从配置文件运行有限尺寸屏衍射仿真。")
    parser.add_argument('--config', type=str, required=True, help="指向仿真配置 YAML 文件的路径。")
    parser.add_argument('--output', type=str, default=None, help="覆盖配置中的 output_path。")
    parser.add_argument('--plot', type=str, default=None, help="覆盖配置中的 plot_path。")
    parser.add_argument('--no-show', action='store_true', help="保存图像但不弹出窗口。")
    args = parser.parse_args()

    config = load_simulation_config(args.config)

    print("--- 仿真配置 ---")
    print(yaml.dump(config.model_dump(by_alias=True), indent=2, allow_unicode=True))
    print("--------------------")

    simulator = DiffractionSimulator.from_config(config)
    angles = config.sweep.angles()

    print(f"\n计算 {len(angles)} 个角度 (线程数: {config.max_workers})...")
    points = simulator.simulate(config.params, angles)

    report = detect_axial_dip(points)
    print(f"\n轴向强度 I({report.axial_theta:g}°) = {report.axial_intensity:.2f}")
    if report.has_dip:
        print(f"检测到干涉凹陷: 深度 {report.depth:.2f} (两侧峰值 {report.flank_intensity:.2f})")
    else:
        print("未检测到轴向凹陷。")

    output_path = args.output or config.output_path
    if output_path:
        save_results(points, output_path, params=config.params)
        print(f"\n强度曲线已保存到 '{output_path}'")

    plot_path = args.plot or config.plot_path
    if plot_path:
        from fsed_analysis.visualizer import PatternVisualizer
        PatternVisualizer().plot_pattern(points, config.params, save_path=plot_path, show=not args.no_show)
        print(f"图像已保存到 '{plot_path}'")

    print("\n仿真完成！")


if __name__ == '__main__':
    main()
