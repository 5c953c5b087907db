"""
bspline - B样条基函数族与参数化工具

实现:
1. 参数化方法 (向心、弦长、均匀)
2. 均值法节点向量
3. 基函数矩阵构造
4. BSplineBasis: 可接入 LinearCombination3 的 B样条基函数族
"""

import numpy as np
from scipy.interpolate import BSpline

from ..constants import DOMAIN_TOLERANCE


def centripetal_parameterization(points: np.ndarray) -> np.ndarray:
    """
    向心参数化方法。

    使用相邻点距离的平方根来分配参数值，相比弦长参数化能产生更好的拟合效果。

    Args:
        points: (N, D) 离散点坐标

    Returns:
        u_bar: (N,) 参数值数组, u_bar[0]=0, u_bar[-1]=1
    """
    return _cumulative_parameterization(points, exponent=0.5)


def chord_length_parameterization(points: np.ndarray) -> np.ndarray:
    """
    弦长参数化方法，参数增量与相邻点距离成正比。

    Args:
        points: (N, D) 离散点坐标

    Returns:
        u_bar: (N,) 参数值数组, u_bar[0]=0, u_bar[-1]=1
    """
    return _cumulative_parameterization(points, exponent=1.0)


def uniform_parameterization(points: np.ndarray) -> np.ndarray:
    """均匀参数化，u_bar = linspace(0, 1, N)。"""
    return np.linspace(0, 1, len(points))


def _cumulative_parameterization(points: np.ndarray, exponent: float) -> np.ndarray:
    N = len(points)
    if N < 2:
        return np.array([0.0]) if N == 1 else np.array([])

    increments = np.linalg.norm(np.diff(np.asarray(points, dtype=float), axis=0), axis=1) ** exponent
    d = np.sum(increments)

    # 重合点退化为均匀参数化
    if d < 1e-12:
        return np.linspace(0, 1, N)

    u_bar = np.zeros(N)
    u_bar[1:] = np.cumsum(increments) / d
    u_bar[-1] = 1.0
    return u_bar


def compute_knot_vector(params: np.ndarray, degree: int) -> np.ndarray:
    """
    均值法计算夹持 B样条节点向量。

    首尾各 degree+1 个节点取 params[0] 与 params[-1]，内部节点为相邻 degree 个参数的均值。

    Args:
        params: (N,) 递增参数值
        degree: 样条次数

    Returns:
        knots: (N + degree + 1,) 节点向量
    """
    params = np.asarray(params, dtype=float)
    if len(params) < degree + 1:
        raise ValueError(f"Need at least {degree + 1} parameters for degree {degree}, got {len(params)}")

    N = len(params) - 1
    n = degree

    knots = np.empty(N + n + 2)
    knots[: n + 1] = params[0]
    knots[-(n + 1):] = params[-1]

    for j in range(1, N - n + 1):
        knots[j + n] = np.mean(params[j:j + n])

    return knots


def uniform_knot_vector(count: int, degree: int, u_min: float = 0.0, u_max: float = 1.0) -> np.ndarray:
    """count 个基函数的夹持均匀节点向量，长度 count + degree + 1。"""
    if count < degree + 1:
        raise ValueError(f"Need at least {degree + 1} basis functions for degree {degree}, got {count}")
    interior = np.linspace(u_min, u_max, count - degree + 1)
    return np.concatenate([np.full(degree, u_min), interior, np.full(degree, u_max)])


def bspline_basis_matrix(params: np.ndarray, knots: np.ndarray, degree: int) -> np.ndarray:
    """
    计算 B样条基函数矩阵，Phi[r, i] = N_{i,degree}(params[r])。

    以单位矩阵为系数构造 BSpline，一次向量化求出所有基函数。

    Args:
        params: (M,) 参数值
        knots: 节点向量
        degree: 样条次数

    Returns:
        Phi: (M, count) 基函数矩阵
    """
    count = len(knots) - degree - 1
    basis_spline = BSpline(knots, np.eye(count), degree)
    return basis_spline(np.asarray(params, dtype=float))


class BSplineBasis:
    """
    B样条基函数族。

    有效参数范围为 [t_k, t_{count}]，其外的求值返回 None。

    Attributes:
        knots: 节点向量
        degree: 样条次数
        function_count: 基函数个数
        u_min, u_max: 有效参数范围
    """

    def __init__(self, knots: np.ndarray, degree: int):
        knots = np.asarray(knots, dtype=float)
        if degree < 0:
            raise ValueError(f"Degree must be non-negative, got {degree}")
        if np.any(np.diff(knots) < 0):
            raise ValueError("Knot vector must be non-decreasing")

        count = len(knots) - degree - 1
        if count < degree + 1:
            raise ValueError(f"Knot vector of length {len(knots)} too short for degree {degree}")

        self.knots = knots
        self.degree = degree
        self.function_count = count
        self.u_min = float(knots[degree])
        self.u_max = float(knots[count])
        if not self.u_min < self.u_max:
            raise ValueError("Knot vector spans an empty parameter range")

        self._basis = BSpline(knots, np.eye(count), degree)

    @classmethod
    def uniform(cls, count: int, degree: int, u_min: float = 0.0, u_max: float = 1.0) -> "BSplineBasis":
        """夹持均匀节点的基函数族。"""
        return cls(uniform_knot_vector(count, degree, u_min, u_max), degree)

    @classmethod
    def from_parameters(cls, params: np.ndarray, degree: int) -> "BSplineBasis":
        """由插值参数值按均值法生成节点，基函数个数等于参数个数。"""
        return cls(compute_knot_vector(params, degree), degree)

    def _in_range(self, u: float) -> bool:
        return self.u_min - DOMAIN_TOLERANCE <= u <= self.u_max + DOMAIN_TOLERANCE

    def values(self, u: float) -> np.ndarray | None:
        """u 处全部基函数值；u 在有效范围外时返回 None。"""
        if not self._in_range(u):
            return None
        u = min(max(u, self.u_min), self.u_max)
        return self._basis(u)

    def derivatives(self, max_order: int, u: float) -> np.ndarray | None:
        """
        u 处基函数 0..max_order 阶导数。

        Returns:
            (max_order+1, count) 数组，高于 degree 阶的行为零；u 在有效范围外时返回 None
        """
        if not self._in_range(u):
            return None
        u = min(max(u, self.u_min), self.u_max)

        result = np.zeros((max_order + 1, self.function_count))
        for k in range(min(max_order, self.degree) + 1):
            result[k] = self._basis(u, nu=k)
        return result

    def __repr__(self) -> str:
        return (
            f"BSplineBasis(degree={self.degree}, count={self.function_count}, "
            f"domain=[{self.u_min}, {self.u_max}])"
        )
