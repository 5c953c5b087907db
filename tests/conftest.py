"""
测试公共夹具

FakeGL 记录所有 GL 调用，并以 numpy 数组作为映射内存，便于检查写入的缓冲区内容。
"""

import numpy as np
import pytest

from blending_curves import BernsteinBasis, LinearCombination3


class FakeGL:
    """最小化的 OpenGL 函数命名空间替身。"""

    GL_ARRAY_BUFFER = 0x8892
    GL_WRITE_ONLY = 0x88B9
    GL_VERTEX_ARRAY = 0x8074
    GL_FLOAT = 0x1406

    def __init__(self):
        self.calls = []
        self.buffers = {}
        self.usages = {}
        self.bound = 0
        self.client_state = False
        self.draws = []
        self._next_handle = 1
        self._mapped = None

        self.fail_gen = False
        self.fail_map = False
        self.fail_unmap = False
        self.raise_on_buffer_data = False

    def glGenBuffers(self, n):
        self.calls.append("glGenBuffers")
        if self.fail_gen:
            return 0
        handle = self._next_handle
        self._next_handle += 1
        self.buffers[handle] = np.zeros(0, dtype=np.uint8)
        return handle

    def glBindBuffer(self, target, handle):
        self.calls.append("glBindBuffer")
        self.bound = handle

    def glBufferData(self, target, size, data, usage):
        self.calls.append("glBufferData")
        if self.raise_on_buffer_data:
            raise RuntimeError("GL_OUT_OF_MEMORY")
        self.buffers[self.bound] = np.zeros(size, dtype=np.uint8)
        self.usages[self.bound] = usage

    def glMapBuffer(self, target, access):
        self.calls.append("glMapBuffer")
        if self.fail_map:
            return None
        self._mapped = self.buffers[self.bound]
        return self._mapped.ctypes.data

    def glUnmapBuffer(self, target):
        self.calls.append("glUnmapBuffer")
        self._mapped = None
        return not self.fail_unmap

    def glDeleteBuffers(self, n, handles):
        self.calls.append("glDeleteBuffers")
        for handle in handles:
            self.buffers.pop(int(handle), None)

    def glEnableClientState(self, state):
        self.calls.append("glEnableClientState")
        self.client_state = True

    def glDisableClientState(self, state):
        self.calls.append("glDisableClientState")
        self.client_state = False

    def glVertexPointer(self, size, dtype, stride, pointer):
        self.calls.append("glVertexPointer")

    def glDrawArrays(self, mode, first, count):
        self.calls.append("glDrawArrays")
        self.draws.append((mode, first, count, self.bound))

    def contents(self, handle):
        """以 (N, 3) float32 形式返回缓冲区内容。"""
        return self.buffers[handle].view(np.float32).reshape(-1, 3)


@pytest.fixture
def gl():
    return FakeGL()


@pytest.fixture
def straight_cubic(gl):
    """[0, 1] 上从 (0,0,0) 到 (3,0,0) 的匀速三次 Bézier 直线段。"""
    curve = LinearCombination3(0.0, 1.0, 4, BernsteinBasis(3), gl=gl)
    for i in range(4):
        curve[i] = (float(i), 0.0, 0.0)
    return curve


@pytest.fixture
def arc_cubic(gl):
    """近似四分之一单位圆的三次 Bézier 曲线。"""
    k = 4.0 / 3.0 * (np.sqrt(2.0) - 1.0)
    curve = LinearCombination3(0.0, 1.0, 4, BernsteinBasis(3), gl=gl)
    curve.control_points = [[1, 0, 0], [1, k, 0], [k, 1, 0], [0, 1, 0]]
    return curve
