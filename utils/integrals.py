"""
integrals - 数值积分工具函数

提供复合 Simpson 求积，用于计算曲线弧长、曲率-速度复合度量与适应度。

区间 [a, b] 等分为 2n 个子区间，步长 h = (b-a)/(2n)：
    ∫_a^b f(u) du ≈ h/3 * [f(u_0) + 4f(u_1) + 2f(u_2) + ... + 4f(u_{2n-1}) + f(u_{2n})]
"""

from typing import Callable

import numpy as np


def simpson_nodes(a: float, b: float, n: int) -> tuple[np.ndarray, np.ndarray, float]:
    """
    计算复合 Simpson 法则的节点与权重。

    Args:
        a: 积分下限
        b: 积分上限
        n: 半区间数，共 2n 个子区间

    Returns:
        nodes: (2n+1,) 采样参数，nodes[-1] 严格等于 b
        weights: (2n+1,) 权重 1, 4, 2, 4, ..., 2, 4, 1
        step: 子区间步长 h
    """
    if n < 1:
        raise ValueError(f"Simpson rule needs n >= 1, got {n}")

    step = (b - a) / (2 * n)
    nodes = a + step * np.arange(2 * n + 1)
    nodes[-1] = b

    weights = np.full(2 * n + 1, 2.0)
    weights[1::2] = 4.0
    weights[0] = weights[-1] = 1.0

    return nodes, weights, step


def composite_simpson(f: Callable[[float], float], a: float, b: float, n: int) -> float:
    """
    复合 Simpson 求积。

    被积函数按节点顺序逐点调用，抛出的异常原样传播。

    Args:
        f: 被积函数
        a: 积分下限
        b: 积分上限
        n: 半区间数，共 2n 个子区间

    Returns:
        积分近似值
    """
    nodes, weights, step = simpson_nodes(a, b, n)
    values = np.array([f(u) for u in nodes], dtype=float)
    return float(np.dot(weights, values) * step / 3.0)


if __name__ == "__main__":
    print("=== 复合 Simpson 积分测试 ===")

    result = composite_simpson(np.exp, 0, 1, 10)
    exact = np.e - 1
    print(f"∫e^x dx from 0 to 1 (n=10):")
    print(f"  计算值: {result:.10f}")
    print(f"  精确值: {exact:.10f}")
    print(f"  误差: {abs(result - exact):.2e}")
