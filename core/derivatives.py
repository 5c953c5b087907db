"""
derivatives - 曲线点及其各阶导数

Derivatives 为定长的 3D 向量序列：下标 0 为曲线点，下标 k 为 k 阶导数。
"""

import numpy as np


class Derivatives:
    """
    曲线在某一参数处的点与导数 [c(u), c'(u), ..., c^(k)(u)]。

    长度在构造时固定，之后不会改变。

    Attributes:
        data: (order+1, 3) 底层数组
    """

    def __init__(self, maximum_order_of_derivatives: int = 2):
        if maximum_order_of_derivatives < 0:
            raise ValueError(f"Derivative order must be non-negative, got {maximum_order_of_derivatives}")
        self.data = np.zeros((maximum_order_of_derivatives + 1, 3))

    @classmethod
    def from_array(cls, values: np.ndarray) -> "Derivatives":
        """由 (order+1, 3) 数组构造。"""
        values = np.asarray(values, dtype=float)
        if values.ndim != 2 or values.shape[1] != 3 or len(values) == 0:
            raise ValueError(f"Expected shape (order+1, 3), got {values.shape}")
        d = cls(len(values) - 1)
        d.data[:] = values
        return d

    @property
    def maximum_order(self) -> int:
        return len(self.data) - 1

    def load_null_vectors(self):
        """将所有向量置零。"""
        self.data[:] = 0.0

    def _check_index(self, k: int) -> int:
        k = int(k)
        if not 0 <= k < len(self.data):
            raise IndexError(f"Derivative order {k} out of range [0, {len(self.data)})")
        return k

    def __len__(self) -> int:
        return len(self.data)

    def __getitem__(self, k: int) -> np.ndarray:
        return self.data[self._check_index(k)]

    def __setitem__(self, k: int, value):
        self.data[self._check_index(k)] = value

    def __iter__(self):
        return iter(self.data)

    def __array__(self, dtype=None, copy=None):
        if copy:
            return np.array(self.data, dtype=dtype)
        if dtype is None:
            return self.data
        return self.data.astype(dtype)

    def copy(self) -> "Derivatives":
        return Derivatives.from_array(self.data)

    def __copy__(self):
        return self.copy()

    def __deepcopy__(self, memo):
        return self.copy()

    def __repr__(self) -> str:
        return f"Derivatives(order={self.maximum_order}, point={self.data[0].tolist()})"
