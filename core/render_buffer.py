"""
render_buffer - GPU 顶点缓冲区管理

VertexBuffer 维护一份顶点坐标在显存中的副本 (OpenGL VBO)：
1. update: 校验用途提示，释放旧缓冲，分配、映射、写入 float32 坐标、解除映射
2. release: 释放缓冲 (幂等)
3. draw: 以点/线图元绘制全部顶点，绘制前后绑定状态不变

缓冲区只在显式 update 时与 CPU 侧数据同步。任何失败都使管理器回到"无缓冲"状态。
所有 GL 调用必须在持有 GL 上下文的线程中执行。
"""

import ctypes
import logging
import weakref
from importlib.util import find_spec

import numpy as np

from ..constants import CONTROL_POLYGON_MODES, to_render_mode, to_usage_flag

logger = logging.getLogger(__name__)


def opengl_available() -> bool:
    """PyOpenGL 是否可导入 (不实际导入)。"""
    try:
        return find_spec("OpenGL") is not None
    except (ImportError, ValueError):
        return False


def _delete_buffer(gl, handle: int):
    gl.glDeleteBuffers(1, [handle])
    logger.debug("Deleted vertex buffer %d", handle)


class VertexBuffer:
    """
    独占的 GL 顶点缓冲区。

    对象被回收时通过 weakref.finalize 释放缓冲区；也可作为上下文管理器使用，
    退出时释放。

    Attributes:
        usage_flag: 最近一次成功构建时使用的用途提示
        vertex_count: 缓冲区中的顶点数
    """

    def __init__(self, gl=None):
        """
        Args:
            gl: OpenGL 函数命名空间；为 None 时首次使用才导入 OpenGL.GL
        """
        self._gl = gl
        self._handle: int | None = None
        self._finalizer: weakref.finalize | None = None
        self.usage_flag = None
        self.vertex_count = 0

    @property
    def gl(self):
        if self._gl is None:
            from OpenGL import GL

            self._gl = GL
        return self._gl

    @property
    def handle(self) -> int | None:
        return self._handle

    @property
    def is_built(self) -> bool:
        return self._handle is not None

    def update(self, vertices: np.ndarray, usage_flag) -> bool:
        """
        重建缓冲区并写入顶点坐标。

        Args:
            vertices: (N, 3) 顶点坐标，写入时收窄为 float32
            usage_flag: BufferUsage 或等值的 GL 枚举

        Returns:
            是否成功；失败时不持有缓冲区
        """
        vertices = np.asarray(vertices, dtype=float)
        if vertices.ndim != 2 or vertices.shape[1] != 3:
            raise ValueError(f"vertices must have shape (N, 3), got {vertices.shape}")

        self.release()

        usage = to_usage_flag(usage_flag)
        if usage is None:
            logger.warning("Rejected vertex buffer usage flag %r", usage_flag)
            return False

        count = len(vertices)
        if count == 0:
            logger.warning("Cannot build a vertex buffer without vertices")
            return False

        if self._gl is None and not opengl_available():
            logger.warning("PyOpenGL is not available; vertex buffer not built")
            return False

        gl = self.gl
        handle = int(gl.glGenBuffers(1))
        if not handle:
            logger.warning("glGenBuffers returned no buffer")
            return False

        self._handle = handle
        self._finalizer = weakref.finalize(self, _delete_buffer, gl, handle)
        self._finalizer.atexit = False

        coordinates = np.ascontiguousarray(vertices, dtype=np.float32)
        built = False
        try:
            gl.glBindBuffer(gl.GL_ARRAY_BUFFER, handle)
            built = self._upload(gl, coordinates, usage)
        finally:
            gl.glBindBuffer(gl.GL_ARRAY_BUFFER, 0)
            if not built:
                self.release()

        if built:
            self.usage_flag = usage
            self.vertex_count = count
            logger.debug("Built vertex buffer %d with %d vertices (%s)", handle, count, usage.name)
        return built

    @staticmethod
    def _upload(gl, coordinates: np.ndarray, usage) -> bool:
        gl.glBufferData(gl.GL_ARRAY_BUFFER, coordinates.nbytes, None, int(usage))

        address = gl.glMapBuffer(gl.GL_ARRAY_BUFFER, gl.GL_WRITE_ONLY)
        if not address:
            logger.warning("glMapBuffer failed")
            return False

        ctypes.memmove(address, coordinates.ctypes.data, coordinates.nbytes)

        if not gl.glUnmapBuffer(gl.GL_ARRAY_BUFFER):
            logger.warning("glUnmapBuffer failed; buffer contents are undefined")
            return False
        return True

    def release(self):
        """释放缓冲区；无缓冲时为空操作。"""
        if self._finalizer is not None:
            self._finalizer()
            self._finalizer = None
        self._handle = None
        self.vertex_count = 0

    def draw(self, mode, allowed_modes=CONTROL_POLYGON_MODES) -> bool:
        """
        以指定图元绘制全部顶点。

        Args:
            mode: RenderMode 或等值的 GL 枚举
            allowed_modes: 允许的图元集合

        Returns:
            无缓冲或模式不被允许时返回 False
        """
        if not self.is_built:
            return False

        render_mode = to_render_mode(mode)
        if render_mode is None or render_mode not in allowed_modes:
            logger.warning("Rejected render mode %r", mode)
            return False

        gl = self.gl
        try:
            gl.glEnableClientState(gl.GL_VERTEX_ARRAY)
            gl.glBindBuffer(gl.GL_ARRAY_BUFFER, self._handle)
            gl.glVertexPointer(3, gl.GL_FLOAT, 0, None)
            gl.glDrawArrays(int(render_mode), 0, self.vertex_count)
        finally:
            gl.glBindBuffer(gl.GL_ARRAY_BUFFER, 0)
            gl.glDisableClientState(gl.GL_VERTEX_ARRAY)
        return True

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.release()

    def __repr__(self) -> str:
        status = f"handle={self._handle}, vertices={self.vertex_count}" if self.is_built else "not built"
        return f"VertexBuffer({status})"
