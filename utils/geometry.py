"""
geometry - 几何计算工具函数

提供速度、曲率项等被积函数所需的基础几何量。
"""

import numpy as np

from ..constants import ZERO_SPEED_TOLERANCE
from ..errors import DegenerateCurveError


def speed(first_derivative: np.ndarray) -> float:
    """返回 |c'(u)|。"""
    return float(np.linalg.norm(first_derivative))


def curvature_term(
    first_derivative: np.ndarray,
    second_derivative: np.ndarray,
    u: float = float("nan"),
    tolerance: float = ZERO_SPEED_TOLERANCE,
) -> float:
    """
    计算曲率 κ = |c' × c''| / |c'|³。

    Args:
        first_derivative: (3,) 一阶导数 c'(u)
        second_derivative: (3,) 二阶导数 c''(u)
        u: 参数值，仅用于错误信息
        tolerance: 零速度判定阈值

    Returns:
        曲率值

    Raises:
        DegenerateCurveError: |c'(u)| <= tolerance
    """
    v = speed(first_derivative)
    if v <= tolerance:
        raise DegenerateCurveError(u, v)
    return float(np.linalg.norm(np.cross(first_derivative, second_derivative))) / v**3


def curvature_speed_term(
    first_derivative: np.ndarray,
    second_derivative: np.ndarray,
    u: float = float("nan"),
    tolerance: float = ZERO_SPEED_TOLERANCE,
) -> float:
    """
    曲率-速度复合项 κ + |c'|。

    既不是纯曲率也不是纯弧长，而是用于评价曲线质量的组合度量。
    """
    return curvature_term(first_derivative, second_derivative, u, tolerance) + speed(first_derivative)
