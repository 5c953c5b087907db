"""
algorithm - 离散点插值曲线

InterpolatedPath 串联完整流程：参数化离散点 → 构造基函数族 → 求解配置方程组
得到控制点 → 计算弧长 → 等距采样。
"""

import logging

import numpy as np

from .constants import DEFAULT_QUADRATURE_INTERVALS, DEFAULT_USAGE_FLAG
from .core.bernstein import BernsteinBasis
from .core.bspline import (
    BSplineBasis,
    centripetal_parameterization,
    chord_length_parameterization,
    uniform_parameterization,
)
from .core.generic_curve import GenericCurve3
from .core.linear_combination import LinearCombination3
from .errors import InterpolationError

logger = logging.getLogger(__name__)

PARAMETERIZATIONS = {
    "centripetal": centripetal_parameterization,
    "chord": chord_length_parameterization,
    "uniform": uniform_parameterization,
}

FAMILIES = ("bspline", "bernstein")


class InterpolatedPath:
    """
    经过给定离散点的线性组合曲线。

    Attributes:
        points: (N, 3) 待插值点
        degree: B样条次数 (bernstein 族的次数固定为 N-1)
        family: "bspline" 或 "bernstein"
        parameterization: "centripetal" / "chord" / "uniform"
        params: (N,) 各点对应的参数值
        curve: 拟合得到的 LinearCombination3
        length: 曲线弧长
    """

    def __init__(
        self,
        points: np.ndarray,
        degree: int = 3,
        family: str = "bspline",
        parameterization: str = "centripetal",
        quadrature_intervals: int = DEFAULT_QUADRATURE_INTERVALS,
        usage_flag=DEFAULT_USAGE_FLAG,
        gl=None,
    ):
        """
        Args:
            points: (N, 3) 待插值点
            degree: B样条次数
            family: 基函数族
            parameterization: 参数化方法
            quadrature_intervals: 弧长求积的半区间数
            usage_flag: 控制点缓冲区用途提示
            gl: OpenGL 函数命名空间
        """
        self.points = np.asarray(points, dtype=float)
        if self.points.ndim != 2 or self.points.shape[1] != 3:
            raise ValueError(f"points must have shape (N, 3), got {self.points.shape}")
        if family not in FAMILIES:
            raise ValueError(f"Unknown blending family {family!r}, expected one of {FAMILIES}")
        if parameterization not in PARAMETERIZATIONS:
            raise ValueError(f"Unknown parameterization {parameterization!r}")

        self.N = len(self.points)
        if family == "bspline" and self.N < degree + 1:
            raise ValueError(f"Need at least {degree + 1} points for degree {degree}, got {self.N}")
        if self.N < 2:
            raise ValueError("Need at least 2 points")

        self.degree = degree if family == "bspline" else self.N - 1
        self.family = family
        self.parameterization = parameterization
        self.quadrature_intervals = quadrature_intervals
        self.usage_flag = usage_flag
        self._gl = gl

        self.params: np.ndarray | None = None
        self.curve: LinearCombination3 | None = None
        self.length: float = 0.0

    def fit(self):
        """
        拟合插值曲线。返回 self 以支持链式调用。

        Raises:
            InterpolationError: 配置方程组无法求解
        """
        self.params = PARAMETERIZATIONS[self.parameterization](self.points)

        if self.family == "bspline":
            basis = BSplineBasis.from_parameters(self.params, self.degree)
        else:
            basis = BernsteinBasis(self.degree, self.params[0], self.params[-1])

        curve = LinearCombination3(
            self.params[0], self.params[-1], self.N, basis, self.usage_flag, gl=self._gl
        )
        if not curve.update_data_for_interpolation(self.params, self.points):
            raise InterpolationError(
                f"Cannot interpolate {self.N} points with {self.family} (degree {self.degree})"
            )

        self.curve = curve
        self.length = curve.length(self.quadrature_intervals)
        logger.debug("Fitted %r, length=%.6f", self, self.length)
        return self

    def _require_fit(self) -> LinearCombination3:
        if self.curve is None:
            raise RuntimeError("InterpolatedPath.fit() must be called first")
        return self.curve

    def evaluate(self, u: float) -> np.ndarray:
        """
        在参数 u 处评估曲线点。

        Raises:
            ValueError: u 超出定义域
        """
        point = self._require_fit().evaluate(u)
        if point is None:
            raise ValueError(f"Parameter {u} outside definition domain")
        return point

    def evaluate_batch(self, u_values: np.ndarray) -> np.ndarray:
        """批量评估，返回 (M, 3)。"""
        return np.array([self.evaluate(u) for u in np.asarray(u_values, dtype=float)])

    def sample(self, num_points: int, max_order: int = 1) -> GenericCurve3 | None:
        """沿参数等距采样 num_points 个点及其导数。"""
        return self._require_fit().generate_image(max_order, num_points, self.usage_flag)

    def __repr__(self) -> str:
        status = "fitted" if self.curve is not None else "not fitted"
        return f"InterpolatedPath(N={self.N}, family={self.family}, degree={self.degree}, {status})"


if __name__ == "__main__":
    t = np.linspace(0, 2 * np.pi, 12)
    helix = np.column_stack([np.cos(t), np.sin(t), t / (2 * np.pi)])

    print("=== 插值曲线测试 ===")
    path = InterpolatedPath(helix, degree=3).fit()
    print(path)
    print(f"弧长: {path.length:.6f}")

    errors = np.linalg.norm(path.evaluate_batch(path.params) - helix, axis=1)
    print(f"插值误差: max={errors.max():.2e}")
    print(f"曲率-速度复合度量: {path.curve.curvature(50):.6f}")
