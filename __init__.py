"""
blending_curves - 基函数线性组合空间曲线库

曲线表示为 c(u) = Σ_i F_i(u) · p_i，基函数族 F_i 可替换 (Bernstein、B样条等)。
在此表示之上提供导数计算、复合 Simpson 求积 (弧长、曲率-速度复合度量、适应度)、
配置方程组插值、离散采样以及控制点的 OpenGL 顶点缓冲区。
"""

from .algorithm import InterpolatedPath
from .constants import BufferUsage, RenderMode
from .core.bernstein import BernsteinBasis
from .core.bspline import BSplineBasis
from .core.derivatives import Derivatives
from .core.generic_curve import GenericCurve3
from .core.linear_combination import BlendingFamily, LinearCombination3
from .errors import CurveError, DegenerateCurveError, EvaluationError, InterpolationError

__version__ = "0.1.0"
__all__ = [
    "InterpolatedPath",
    "BufferUsage",
    "RenderMode",
    "BernsteinBasis",
    "BSplineBasis",
    "Derivatives",
    "GenericCurve3",
    "BlendingFamily",
    "LinearCombination3",
    "CurveError",
    "DegenerateCurveError",
    "EvaluationError",
    "InterpolationError",
]
