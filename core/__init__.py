"""
core - 核心算法模块

包含:
- derivatives: 曲线点与导数序列
- linear_combination: 基函数线性组合曲线
- render_buffer: GPU 顶点缓冲区
- generic_curve: 离散采样曲线
- bernstein: Bernstein 基函数族
- bspline: B样条基函数族与参数化工具
"""

from .derivatives import Derivatives
from .linear_combination import BlendingFamily, LinearCombination3
from .render_buffer import VertexBuffer, opengl_available
from .generic_curve import GenericCurve3
from .bernstein import BernsteinBasis
from .bspline import BSplineBasis, centripetal_parameterization, compute_knot_vector

__all__ = [
    "Derivatives",
    "BlendingFamily",
    "LinearCombination3",
    "VertexBuffer",
    "opengl_available",
    "GenericCurve3",
    "BernsteinBasis",
    "BSplineBasis",
    "centripetal_parameterization",
    "compute_knot_vector",
]
