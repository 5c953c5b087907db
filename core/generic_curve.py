"""
generic_curve - 离散采样曲线

GenericCurve3 保存曲线在 point_count 个参数处的点与各阶导数，可构建顶点缓冲区
直接绘制：0 阶为采样点折线，k 阶为从采样点出发、沿 k 阶导数方向的线段。
"""

import logging

import numpy as np

from ..constants import (
    CONTROL_POLYGON_MODES,
    DEFAULT_USAGE_FLAG,
    DERIVATIVE_MODES,
    RenderMode,
    to_usage_flag,
)
from .derivatives import Derivatives
from .render_buffer import VertexBuffer

logger = logging.getLogger(__name__)


class GenericCurve3:
    """
    多阶导数采样缓冲。

    Attributes:
        derivatives: (order+1, point_count, 3) 第 k 阶导数在第 i 个采样点的值
        parameters: (point_count,) 各采样点的参数值
        usage_flag: 顶点缓冲区的用途提示
    """

    def __init__(
        self,
        maximum_order_of_derivatives: int = 2,
        point_count: int = 0,
        usage_flag=DEFAULT_USAGE_FLAG,
        gl=None,
    ):
        if maximum_order_of_derivatives < 0:
            raise ValueError(f"Derivative order must be non-negative, got {maximum_order_of_derivatives}")
        if point_count < 0:
            raise ValueError(f"Point count must be non-negative, got {point_count}")

        usage = to_usage_flag(usage_flag)
        if usage is None:
            raise ValueError(f"Unknown usage flag {usage_flag!r}")

        self.usage_flag = usage
        self.derivatives = np.zeros((maximum_order_of_derivatives + 1, point_count, 3))
        self.parameters = np.full(point_count, np.nan)
        self._gl = gl
        self._buffers: list[VertexBuffer] = []

    @property
    def maximum_order_of_derivatives(self) -> int:
        return self.derivatives.shape[0] - 1

    @property
    def point_count(self) -> int:
        return self.derivatives.shape[1]

    def set_column(self, index: int, derivatives: Derivatives | np.ndarray, u: float | None = None):
        """
        写入第 index 个采样点的点与导数。

        Args:
            index: 采样点下标
            derivatives: 至少包含 maximum_order_of_derivatives+1 个向量
            u: 对应的参数值
        """
        if not 0 <= index < self.point_count:
            raise IndexError(f"Column {index} out of range [0, {self.point_count})")
        values = np.asarray(derivatives, dtype=float)
        order = self.maximum_order_of_derivatives
        if len(values) < order + 1:
            raise ValueError(f"Need {order + 1} derivative vectors, got {len(values)}")
        self.derivatives[:, index] = values[: order + 1]
        if u is not None:
            self.parameters[index] = u

    def column(self, index: int) -> Derivatives:
        """返回第 index 个采样点的 Derivatives 副本。"""
        return Derivatives.from_array(self.derivatives[:, index])

    def point(self, index: int) -> np.ndarray:
        return self.derivatives[0, index]

    def derivative(self, order: int, index: int) -> np.ndarray:
        return self.derivatives[order, index]

    def update_vertex_buffer_objects(self, scale: float = 1.0, usage_flag=None) -> bool:
        """
        为每一阶导数构建顶点缓冲区。

        Args:
            scale: 导数线段的缩放系数
            usage_flag: 用途提示，None 表示沿用构造时的设置

        Returns:
            是否全部构建成功；任一失败则释放所有缓冲
        """
        self.delete_vertex_buffer_objects()

        usage = self.usage_flag if usage_flag is None else to_usage_flag(usage_flag)
        if usage is None:
            logger.warning("Rejected sample buffer usage flag %r", usage_flag)
            return False

        if self.point_count == 0:
            return False

        points = self.derivatives[0]
        for order in range(self.maximum_order_of_derivatives + 1):
            if order == 0:
                vertices = points
            else:
                # 每个采样点两个顶点：p_i 与 p_i + scale * d_i
                vertices = np.empty((2 * self.point_count, 3))
                vertices[0::2] = points
                vertices[1::2] = points + scale * self.derivatives[order]

            buffer = VertexBuffer(self._gl)
            self._buffers.append(buffer)
            if not buffer.update(vertices, usage):
                self.delete_vertex_buffer_objects()
                return False

        self.usage_flag = usage
        return True

    def delete_vertex_buffer_objects(self):
        for buffer in self._buffers:
            buffer.release()
        self._buffers = []

    def render_derivatives(self, order: int = 0, mode=None) -> bool:
        """
        绘制第 order 阶数据。

        0 阶支持 LINE_STRIP / LINE_LOOP / POINTS；k 阶支持 LINES / POINTS。
        """
        if not 0 <= order < len(self._buffers):
            return False
        if order == 0:
            allowed = CONTROL_POLYGON_MODES
            default_mode = RenderMode.LINE_STRIP
        else:
            allowed = DERIVATIVE_MODES
            default_mode = RenderMode.LINES
        if mode is None:
            mode = default_mode
        return self._buffers[order].draw(mode, allowed)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.delete_vertex_buffer_objects()

    def __repr__(self) -> str:
        return (
            f"GenericCurve3(order={self.maximum_order_of_derivatives}, "
            f"points={self.point_count}, buffers={len(self._buffers)})"
        )
