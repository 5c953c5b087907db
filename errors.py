"""
errors - 异常类型

数值泛函 (length / curvature / fitness) 以及 InterpolatedPath 通过异常报告失败；
插值、缓冲区与采样操作通过 bool / None 返回值报告失败。
"""


class CurveError(Exception):
    """曲线相关错误的基类。"""


class EvaluationError(CurveError):
    """基函数或导数在某参数处无法求值。"""

    def __init__(self, u: float, message: str | None = None):
        self.u = u
        super().__init__(message or f"Derivative evaluation failed at u={u!r}")


class DegenerateCurveError(CurveError, ArithmeticError):
    """采样点处一阶导数为零，曲率项无定义。"""

    def __init__(self, u: float, speed: float):
        self.u = u
        self.speed = speed
        super().__init__(f"Zero speed at u={u!r} (|c'(u)|={speed:.3e}); curvature term undefined")


class InterpolationError(CurveError):
    """配置线性方程组无法求解。"""
