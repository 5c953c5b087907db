"""
linear_combination - 基函数线性组合曲线

c(u) = Σ_i F_i(u) · p_i,  u ∈ [u_min, u_max]

F_i 由可替换的基函数族 (BlendingFamily) 提供，p_i 为 3D 控制点。实现:
1. 导数计算 (基函数导数与控制点的组合)
2. 插值: 求解配置线性方程组
3. 复合 Simpson 求积: 弧长、曲率-速度复合度量、加权适应度
4. 离散采样 (GenericCurve3)
5. 控制点的 GPU 顶点缓冲区
"""

import copy
import logging
from typing import Protocol, Sequence

import numpy as np

from ..constants import (
    CONTROL_POLYGON_MODES,
    DEFAULT_QUADRATURE_INTERVALS,
    DEFAULT_USAGE_FLAG,
    INTERPOLATION_CONDITION_LIMIT,
    ZERO_SPEED_TOLERANCE,
    to_usage_flag,
)
from ..errors import EvaluationError
from ..utils.geometry import curvature_speed_term, curvature_term, speed
from ..utils.integrals import composite_simpson
from .derivatives import Derivatives
from .generic_curve import GenericCurve3
from .render_buffer import VertexBuffer

logger = logging.getLogger(__name__)


class BlendingFamily(Protocol):
    """
    基函数族接口。

    function_count 个基函数；求值失败 (参数超出有效范围等) 时返回 None。
    """

    function_count: int

    def values(self, u: float) -> np.ndarray | None:
        """(function_count,) 基函数值。"""

    def derivatives(self, max_order: int, u: float) -> np.ndarray | None:
        """(max_order+1, function_count) 基函数 0..max_order 阶导数。"""


class LinearCombination3:
    """
    以控制点为系数的基函数线性组合空间曲线。

    控制点个数在构造时固定。GPU 缓冲区只在 update_render_buffer 时写入控制点，
    之后修改控制点不会自动同步。

    Attributes:
        family: 基函数族
        usage_flag: 控制点缓冲区的用途提示
    """

    def __init__(
        self,
        u_min: float,
        u_max: float,
        data_count: int,
        family: BlendingFamily,
        usage_flag=DEFAULT_USAGE_FLAG,
        gl=None,
    ):
        """
        Args:
            u_min, u_max: 定义域
            data_count: 控制点个数，须等于 family.function_count
            family: 基函数族
            usage_flag: 顶点缓冲区用途提示
            gl: OpenGL 函数命名空间，None 表示使用 OpenGL.GL
        """
        if data_count != family.function_count:
            raise ValueError(
                f"Blending family provides {family.function_count} functions, expected {data_count}"
            )
        usage = to_usage_flag(usage_flag)
        if usage is None:
            raise ValueError(f"Unknown usage flag {usage_flag!r}")

        self.family = family
        self.usage_flag = usage
        self._u_min = 0.0
        self._u_max = 0.0
        self.set_definition_domain(u_min, u_max)
        self._data = np.zeros((data_count, 3))
        self._gl = gl
        self._buffer = VertexBuffer(gl)

    # ------------------------------------------------------------------
    # 定义域与控制点
    # ------------------------------------------------------------------

    def set_definition_domain(self, u_min: float, u_max: float):
        if not u_min <= u_max:
            raise ValueError(f"Invalid definition domain [{u_min}, {u_max}]")
        self._u_min = float(u_min)
        self._u_max = float(u_max)

    def get_definition_domain(self) -> tuple[float, float]:
        return self._u_min, self._u_max

    @property
    def u_min(self) -> float:
        return self._u_min

    @property
    def u_max(self) -> float:
        return self._u_max

    @property
    def data_count(self) -> int:
        return len(self._data)

    @property
    def control_points(self) -> np.ndarray:
        """(N, 3) 控制点数组，可原地修改。"""
        return self._data

    @control_points.setter
    def control_points(self, points):
        points = np.asarray(points, dtype=float)
        if points.shape != self._data.shape:
            raise ValueError(f"Expected control points of shape {self._data.shape}, got {points.shape}")
        self._data[:] = points

    def _check_index(self, index: int) -> int:
        index = int(index)
        if not 0 <= index < len(self._data):
            raise IndexError(f"Control point index {index} out of range [0, {len(self._data)})")
        return index

    def __len__(self) -> int:
        return len(self._data)

    def __getitem__(self, index: int) -> np.ndarray:
        """第 index 个控制点 (可写视图)。"""
        return self._data[self._check_index(index)]

    def __setitem__(self, index: int, point):
        self._data[self._check_index(index)] = point

    # ------------------------------------------------------------------
    # 基函数与导数
    # ------------------------------------------------------------------

    def blending_function_values(self, u: float) -> np.ndarray | None:
        """u 处全部基函数值；求值失败时返回 None。"""
        values = self.family.values(u)
        if values is None:
            return None
        return np.asarray(values, dtype=float)

    def calculate_derivatives(self, max_order: int, u: float) -> Derivatives | None:
        """
        计算 u 处的曲线点及 1..max_order 阶导数。

        Returns:
            Derivatives；基函数求值失败时返回 None
        """
        basis = self.family.derivatives(max_order, u)
        if basis is None:
            return None
        return Derivatives.from_array(np.asarray(basis, dtype=float) @ self._data)

    def evaluate(self, u: float) -> np.ndarray | None:
        """u 处的曲线点。"""
        d = self.calculate_derivatives(0, u)
        return None if d is None else d[0].copy()

    def _derivatives_or_raise(self, max_order: int, u: float) -> Derivatives:
        d = self.calculate_derivatives(max_order, u)
        if d is None:
            raise EvaluationError(u)
        return d

    # ------------------------------------------------------------------
    # 插值
    # ------------------------------------------------------------------

    def collocation_matrix(self, knot_vector: Sequence[float]) -> np.ndarray | None:
        """
        配置矩阵，第 r 行为 knot_vector[r] 处的基函数值。

        Returns:
            (len(knot_vector), N) 矩阵；任一求值失败时返回 None
        """
        matrix = np.empty((len(knot_vector), self.data_count))
        for r, u in enumerate(knot_vector):
            values = self.blending_function_values(u)
            if values is None:
                logger.warning("Blending functions undefined at knot %d (u=%r)", r, u)
                return None
            matrix[r] = values
        return matrix

    def update_data_for_interpolation(self, knot_vector, data_points_to_interpolate) -> bool:
        """
        求解控制点使曲线在 knot_vector[r] 处经过 data_points_to_interpolate[r]。

        Args:
            knot_vector: (N,) 参数值
            data_points_to_interpolate: (N, 3) 待插值点

        Returns:
            是否成功；失败时控制点保持不变
        """
        knot_vector = np.asarray(knot_vector, dtype=float).ravel()
        data_points = np.asarray(data_points_to_interpolate, dtype=float)

        if len(knot_vector) != self.data_count or len(data_points) != self.data_count:
            logger.warning(
                "Interpolation needs %d knots and data points, got %d and %d",
                self.data_count, len(knot_vector), len(data_points),
            )
            return False
        if data_points.shape != (self.data_count, 3):
            logger.warning("Data points must have shape (%d, 3), got %s", self.data_count, data_points.shape)
            return False

        matrix = self.collocation_matrix(knot_vector)
        if matrix is None:
            return False

        try:
            solution = np.linalg.solve(matrix, data_points)
        except np.linalg.LinAlgError as exc:
            logger.warning("Collocation matrix is singular: %s", exc)
            return False

        condition = np.linalg.cond(matrix)
        if not np.isfinite(condition) or condition > INTERPOLATION_CONDITION_LIMIT:
            logger.warning("Collocation matrix is ill-conditioned (cond=%.3e)", condition)
            return False
        if not np.all(np.isfinite(solution)):
            logger.warning("Interpolation produced non-finite control points")
            return False

        self._data[:] = solution
        return True

    # ------------------------------------------------------------------
    # 数值泛函 (复合 Simpson 求积)
    # ------------------------------------------------------------------

    def length(self, n: int = DEFAULT_QUADRATURE_INTERVALS) -> float:
        """
        弧长 ∫ |c'(u)| du。

        Args:
            n: 半区间数，共 2n 个子区间

        Raises:
            EvaluationError: 某采样点处导数无法求值
        """

        def integrand(u: float) -> float:
            return speed(self._derivatives_or_raise(1, u)[1])

        return composite_simpson(integrand, self._u_min, self._u_max, n)

    def curvature(self, n: int = DEFAULT_QUADRATURE_INTERVALS, tolerance: float = ZERO_SPEED_TOLERANCE) -> float:
        """
        曲率-速度复合度量 ∫ (|c' × c''| / |c'|³ + |c'|) du。

        这不是教科书意义上的曲率积分：被积函数同时包含曲率与速度，
        用作曲线光顺程度与长度的组合评价。直线上该值等于弧长。

        Raises:
            EvaluationError: 某采样点处导数无法求值
            DegenerateCurveError: 某采样点处 |c'| <= tolerance
        """

        def integrand(u: float) -> float:
            d = self._derivatives_or_raise(2, u)
            return curvature_speed_term(d[1], d[2], u, tolerance)

        return composite_simpson(integrand, self._u_min, self._u_max, n)

    def fitness(
        self,
        n: int = DEFAULT_QUADRATURE_INTERVALS,
        weights: Sequence[float] = (1.0, 1.0),
        tolerance: float = ZERO_SPEED_TOLERANCE,
    ) -> float:
        """
        加权适应度 ∫ (w_c · |c' × c''| / |c'|³ + w_e · |c'|) du。

        Args:
            n: 半区间数
            weights: (w_e, w_c)，分别为速度项与曲率项的权重
            tolerance: 零速度判定阈值

        Raises:
            EvaluationError: 某采样点处导数无法求值
            DegenerateCurveError: w_c 非零且某采样点处 |c'| <= tolerance
        """
        if len(weights) != 2:
            raise ValueError(f"Expected weights (w_e, w_c), got {len(weights)} values")
        w_e, w_c = float(weights[0]), float(weights[1])

        def integrand(u: float) -> float:
            d = self._derivatives_or_raise(2, u)
            value = w_e * speed(d[1])
            if w_c != 0.0:
                value += w_c * curvature_term(d[1], d[2], u, tolerance)
            return value

        return composite_simpson(integrand, self._u_min, self._u_max, n)

    # ------------------------------------------------------------------
    # 离散采样
    # ------------------------------------------------------------------

    def generate_image(
        self,
        max_order_of_derivatives: int,
        div_point_count: int,
        usage_flag=DEFAULT_USAGE_FLAG,
    ) -> GenericCurve3 | None:
        """
        在定义域上等距采样，记录各点的点与导数。

        最后一个参数值严格等于 u_max。

        Args:
            max_order_of_derivatives: 最高导数阶数
            div_point_count: 采样点数，至少为 2
            usage_flag: 结果缓冲区的用途提示

        Returns:
            GenericCurve3 (所有权归调用者)；参数非法或任一求值失败时返回 None
        """
        if div_point_count < 2:
            logger.warning("generate_image needs at least 2 points, got %d", div_point_count)
            return None
        if to_usage_flag(usage_flag) is None:
            logger.warning("Rejected image usage flag %r", usage_flag)
            return None

        result = GenericCurve3(max_order_of_derivatives, div_point_count, usage_flag, gl=self._gl)

        step = (self._u_max - self._u_min) / (div_point_count - 1)
        for i in range(div_point_count):
            if i == div_point_count - 1:
                u = self._u_max
            else:
                u = min(self._u_min + i * step, self._u_max)
            d = self.calculate_derivatives(max_order_of_derivatives, u)
            if d is None:
                logger.warning("Derivative evaluation failed at u=%r; image discarded", u)
                return None
            result.set_column(i, d, u)

        return result

    # ------------------------------------------------------------------
    # 控制点顶点缓冲区
    # ------------------------------------------------------------------

    @property
    def has_render_buffer(self) -> bool:
        return self._buffer.is_built

    @property
    def render_buffer(self) -> VertexBuffer:
        return self._buffer

    def update_render_buffer(self, usage_flag=None) -> bool:
        """
        重建控制点缓冲区。

        Args:
            usage_flag: 用途提示，None 表示沿用 self.usage_flag

        Returns:
            是否成功；失败时不持有缓冲区
        """
        if usage_flag is None:
            usage_flag = self.usage_flag
        if not self._buffer.update(self._data, usage_flag):
            return False
        self.usage_flag = self._buffer.usage_flag
        return True

    def release_render_buffer(self):
        self._buffer.release()

    def draw(self, mode) -> bool:
        """以 LINE_STRIP / LINE_LOOP / POINTS 绘制控制多边形。"""
        return self._buffer.draw(mode, CONTROL_POLYGON_MODES)

    update_vertex_buffer_objects_of_data = update_render_buffer
    delete_vertex_buffer_objects_of_data = release_render_buffer
    render_data = draw

    # ------------------------------------------------------------------
    # 复制与赋值
    # ------------------------------------------------------------------

    def copy(self) -> "LinearCombination3":
        """
        深复制。源对象持有缓冲区时，为副本构建独立的新缓冲区。
        """
        result = LinearCombination3(
            self._u_min, self._u_max, self.data_count, copy.deepcopy(self.family), self.usage_flag, self._gl
        )
        result._data[:] = self._data
        if self.has_render_buffer:
            result.update_render_buffer(self.usage_flag)
        return result

    def __copy__(self):
        return self.copy()

    def __deepcopy__(self, memo):
        return self.copy()

    def assign(self, other: "LinearCombination3") -> "LinearCombination3":
        """
        以 other 的状态覆盖自身。

        先释放自身缓冲区，再深复制定义域、用途提示、基函数族与控制点；
        仅当 other 持有缓冲区时重建。
        """
        if other is self:
            return self

        self.release_render_buffer()

        self.usage_flag = other.usage_flag
        self._u_min = other._u_min
        self._u_max = other._u_max
        self.family = copy.deepcopy(other.family)
        self._data = other._data.copy()

        if other.has_render_buffer:
            self.update_render_buffer(self.usage_flag)
        return self

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.release_render_buffer()

    def __repr__(self) -> str:
        buffer = "buffered" if self.has_render_buffer else "no buffer"
        return (
            f"LinearCombination3(domain=[{self._u_min}, {self._u_max}], "
            f"control_points={self.data_count}, {buffer})"
        )
