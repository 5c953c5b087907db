"""
utils - 工具函数模块

包含:
- geometry: 速度与曲率项
- integrals: 复合 Simpson 积分
"""

from .geometry import speed, curvature_term, curvature_speed_term
from .integrals import simpson_nodes, composite_simpson

__all__ = [
    "speed",
    "curvature_term",
    "curvature_speed_term",
    "simpson_nodes",
    "composite_simpson",
]
