"""
constants - 全局常量与默认参数

包含:
1. OpenGL 缓冲区用途 (usage) 与图元模式的枚举值
2. 数值计算默认参数 (求积区间数、零速度容差、条件数上限)
"""

from enum import IntEnum


class BufferUsage(IntEnum):
    """OpenGL 缓冲区用途提示，{stream, static, dynamic} × {draw, read, copy}。"""

    STREAM_DRAW = 0x88E0
    STREAM_READ = 0x88E1
    STREAM_COPY = 0x88E2
    STATIC_DRAW = 0x88E4
    STATIC_READ = 0x88E5
    STATIC_COPY = 0x88E6
    DYNAMIC_DRAW = 0x88E8
    DYNAMIC_READ = 0x88E9
    DYNAMIC_COPY = 0x88EA


class RenderMode(IntEnum):
    """绘制所用的点/线图元。"""

    POINTS = 0x0000
    LINES = 0x0001
    LINE_LOOP = 0x0002
    LINE_STRIP = 0x0003


# 控制多边形允许的绘制模式
CONTROL_POLYGON_MODES = frozenset(
    {RenderMode.LINE_STRIP, RenderMode.LINE_LOOP, RenderMode.POINTS}
)

# 导数向量 (order > 0) 以线段形式绘制
DERIVATIVE_MODES = frozenset({RenderMode.LINES, RenderMode.POINTS})

DEFAULT_USAGE_FLAG = BufferUsage.STATIC_DRAW

# Simpson 求积默认半区间数 n (共 2n 个子区间)
DEFAULT_QUADRATURE_INTERVALS = 100

# |c'(u)| 不大于该值时视为退化 (零速度)
ZERO_SPEED_TOLERANCE = 1e-12

# 参数落在基函数定义域外的容许误差
DOMAIN_TOLERANCE = 1e-12

# 配置矩阵条件数上限，超过则视为病态
INTERPOLATION_CONDITION_LIMIT = 1e14


def to_usage_flag(flag) -> BufferUsage | None:
    """将整数或枚举转换为 BufferUsage，无法识别时返回 None。"""
    try:
        return BufferUsage(int(flag))
    except (TypeError, ValueError):
        return None


def to_render_mode(mode) -> RenderMode | None:
    """将整数或枚举转换为 RenderMode，无法识别时返回 None。"""
    try:
        return RenderMode(int(mode))
    except (TypeError, ValueError):
        return None
