"""
bernstein - Bernstein (Bézier) 基函数族

n 次 Bernstein 基函数定义在 [u_min, u_max] 上，t = (u - u_min) / (u_max - u_min)：
    B_{i,n}(t) = C(n, i) t^i (1-t)^(n-i)

k 阶导数通过差分矩阵 D 计算：
    d^k/du^k c(u) = B_{n-k}(t) · D_{n-k+1} ··· D_n · P / (u_max - u_min)^k
"""

import numpy as np
from scipy.special import comb

from ..constants import DOMAIN_TOLERANCE


def get_D_matrix(N: int) -> np.ndarray:
    """
    n 次 Bézier 曲线的差分矩阵。

    [D]_{i,j} = N × { -1 (j=i), 1 (j=i+1), 0 (其他) }

    Args:
        N: 曲线次数

    Returns:
        D: (N, N+1) 矩阵
    """
    D = np.zeros((N, N + 1))
    for i in range(N):
        D[i, i] = -N
        D[i, i + 1] = N
    return D


def bernstein_values(degree: int, t: float) -> np.ndarray:
    """计算 t 处全部 degree 次 Bernstein 基函数值，返回 (degree+1,) 数组。"""
    i = np.arange(degree + 1)
    return comb(degree, i) * t**i * (1 - t) ** (degree - i)


class BernsteinBasis:
    """
    Bernstein 基函数族。

    Attributes:
        degree: 次数 n
        function_count: 基函数个数 n+1
        u_min, u_max: 定义域
    """

    def __init__(self, degree: int, u_min: float = 0.0, u_max: float = 1.0):
        if degree < 0:
            raise ValueError(f"Degree must be non-negative, got {degree}")
        if not u_min < u_max:
            raise ValueError(f"Invalid domain [{u_min}, {u_max}]")

        self.degree = degree
        self.function_count = degree + 1
        self.u_min = float(u_min)
        self.u_max = float(u_max)

        # _difference[k] 将控制点映射为 k 阶导数曲线 (n-k 次) 的控制点
        self._difference = [np.eye(degree + 1)]
        for k in range(1, degree + 1):
            self._difference.append(get_D_matrix(degree - k + 1) @ self._difference[-1])

    def _local_parameter(self, u: float) -> float | None:
        if u < self.u_min - DOMAIN_TOLERANCE or u > self.u_max + DOMAIN_TOLERANCE:
            return None
        t = (u - self.u_min) / (self.u_max - self.u_min)
        return min(max(t, 0.0), 1.0)

    def values(self, u: float) -> np.ndarray | None:
        """u 处的基函数值；u 在定义域外时返回 None。"""
        t = self._local_parameter(u)
        if t is None:
            return None
        return bernstein_values(self.degree, t)

    def derivatives(self, max_order: int, u: float) -> np.ndarray | None:
        """
        u 处基函数 0..max_order 阶导数。

        Returns:
            (max_order+1, n+1) 数组，高于 n 阶的行为零；u 在定义域外时返回 None
        """
        t = self._local_parameter(u)
        if t is None:
            return None

        result = np.zeros((max_order + 1, self.function_count))
        scale = 1.0 / (self.u_max - self.u_min)
        for k in range(min(max_order, self.degree) + 1):
            result[k] = bernstein_values(self.degree - k, t) @ self._difference[k] * scale**k
        return result

    def __repr__(self) -> str:
        return f"BernsteinBasis(degree={self.degree}, domain=[{self.u_min}, {self.u_max}])"
