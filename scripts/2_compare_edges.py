# -*- coding: utf-8 -*-
"""
FSED/scripts/2_compare_edges.py
python scripts/2_compare_edges.py --config configs/reference_setup.yaml

验证 1：屏蔽效应。
以相同的装置参数分别计算裸露板边缘和覆盖吸波材料两种情况，
如果轴向凹陷在屏蔽后消失，说明凹陷来自板边缘而不是缝隙。
"""
import argparse

# 1. 拓宽Python的模块搜索路径
import sys
import os

project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
sys.path.append(project_root)

# 2. 导入所有必要的模块
from fsed_sim.config_loader import load_simulation_config
from fsed_sim.simulator import DiffractionSimulator
from fsed_analysis.diagnostics import compare_edge_toggle, detect_axial_dip


def main():
    parser = argparse.ArgumentParser(description="比较板边缘开启与屏蔽时的衍射曲线。")
    parser.add_argument('--config', type=str, required=True, help="指向仿真配置 YAML 文件的路径。")
    parser.add_argument('--plot', type=str, default=None, help="对比图的保存路径。")
    parser.add_argument('--no-show', action='store_true', help="保存图像但不弹出窗口。")
    args = parser.parse_args()

    config = load_simulation_config(args.config)
    params = config.params

    print(f"--- 装置 ---")
    print(f"缝宽 a = {params.slit_width:g}mm, 板宽 W = {params.screen_width:g}mm, λ = {params.wavelength:g}mm")
    print("--------------------")

    simulator = DiffractionSimulator.from_config(config)
    comparison = compare_edge_toggle(params, config.sweep.angles(), simulator=simulator)

    dip_on = detect_axial_dip(comparison.with_edges)
    dip_off = detect_axial_dip(comparison.without_edges)

    print("\n>>> 裸露板边缘:")
    print(f"    I(0°) = {comparison.axial_with_edges:.2f}, 轴向凹陷: {'是' if dip_on.has_dip else '否'}")
    print(">>> 已覆盖吸波材料:")
    print(f"    I(0°) = {comparison.axial_without_edges:.2f}, 轴向凹陷: {'是' if dip_off.has_dip else '否'}")
    print(f"\n未归一化轴向强度比 I_on/I_off = {comparison.axial_ratio:.4f}")
    print(f"两条曲线的最大差异 = {comparison.max_abs_difference:.2f}")

    if args.plot:
        from fsed_analysis.visualizer import PatternVisualizer
        PatternVisualizer().plot_edge_comparison(comparison, save_path=args.plot, show=not args.no_show)
        print(f"\n对比图已保存到 '{args.plot}'")


if __name__ == '__main__':
    main()
