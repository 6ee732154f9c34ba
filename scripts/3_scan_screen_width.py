# -*- coding: utf-8 -*-
"""
FSED/scripts/3_scan_screen_width.py
python scripts/3_scan_screen_width.py --config configs/reference_setup.yaml

验证 2：板尺寸调节。
依次改变板宽 W，边缘波与缝隙波之间的程差随之变化，
中心点强度会随 W 剧烈摆动。
"""
import argparse

# 1. 拓宽Python的模块搜索路径
import sys
import os

project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
sys.path.append(project_root)

# 2. 导入所有必要的模块
from fsed_sim.config_loader import load_simulation_config
from fsed_sim.simulator import DiffractionSimulator, save_scan_results
from fsed_analysis.diagnostics import scan_screen_width


def main():
    parser = argparse.ArgumentParser(description="扫描遮挡板宽度，记录中心强度。")
    parser.add_argument('--config', type=str, required=True, help="指向仿真配置 YAML 文件的路径。")
    parser.add_argument('--output', type=str, default=None, help="扫描结果 JSON 的保存路径。")
    parser.add_argument('--plot', type=str, default=None, help="扫描曲线图的保存路径。")
    parser.add_argument('--no-show', action='store_true', help="保存图像但不弹出窗口。")
    args = parser.parse_args()

    config = load_simulation_config(args.config)
    simulator = DiffractionSimulator.from_config(config)

    print(f"--- 扫描 {len(config.screen_widths)} 个板宽 ---")
    samples = scan_screen_width(
        config.params,
        config.screen_widths,
        config.sweep.angles(),
        simulator=simulator,
        show_progress=True
    )

    print(f"\n{'W (mm)':>8} {'I(0°)':>8} {'I_on/I_off':>11}  凹陷")
    for s in samples:
        print(f"{s.screen_width:>8g} {s.axial_intensity:>8.2f} {s.axial_ratio:>11.4f}  {'*' if s.has_dip else ''}")

    if args.output:
        save_scan_results(samples, args.output)
        print(f"\n扫描结果已保存到 '{args.output}'")

    if args.plot:
        from fsed_analysis.visualizer import PatternVisualizer
        PatternVisualizer().plot_screen_width_scan(samples, save_path=args.plot, show=not args.no_show)
        print(f"扫描曲线图已保存到 '{args.plot}'")


if __name__ == '__main__':
    main()
