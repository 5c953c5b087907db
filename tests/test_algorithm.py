"""
algorithm (InterpolatedPath) 模块单元测试
"""

import numpy as np
import pytest

from blending_curves import InterpolatedPath, InterpolationError


class TestInterpolatedPath:
    """InterpolatedPath 主类测试"""

    @pytest.fixture
    def helix(self):
        """一圈螺旋线上的离散点"""
        t = np.linspace(0, 2 * np.pi, 15)
        return np.column_stack([np.cos(t), np.sin(t), t / (2 * np.pi)])

    def test_initialization(self, helix, gl):
        path = InterpolatedPath(helix, gl=gl)
        assert path.N == 15
        assert path.curve is None
        assert path.length == 0.0

    def test_fit_passes_through_points(self, helix, gl):
        path = InterpolatedPath(helix, degree=3, gl=gl).fit()
        np.testing.assert_allclose(path.evaluate_batch(path.params), helix, atol=1e-9)

    def test_length(self, helix, gl):
        """测试弧长接近螺旋线解析值"""
        path = InterpolatedPath(helix, gl=gl).fit()
        exact = np.sqrt((2 * np.pi) ** 2 + 1)
        assert np.isclose(path.length, exact, rtol=1e-2)

    @pytest.mark.parametrize("parameterization", ["centripetal", "chord", "uniform"])
    def test_parameterizations(self, helix, gl, parameterization):
        path = InterpolatedPath(helix, parameterization=parameterization, gl=gl).fit()
        assert path.params[0] == 0.0
        assert path.params[-1] == 1.0
        np.testing.assert_allclose(path.evaluate(path.params[7]), helix[7], atol=1e-9)

    def test_bernstein_family(self, gl):
        points = np.array([[0, 0, 0], [1, 2, 0], [3, 3, 1], [5, 2, 2], [6, 0, 1]], dtype=float)
        path = InterpolatedPath(points, family="bernstein", gl=gl).fit()
        assert path.degree == 4
        np.testing.assert_allclose(path.evaluate_batch(path.params), points, atol=1e-9)

    def test_sample(self, helix, gl):
        path = InterpolatedPath(helix, gl=gl).fit()
        image = path.sample(20, max_order=2)
        assert image.point_count == 20
        assert image.parameters[-1] == 1.0
        np.testing.assert_allclose(image.point(0), helix[0], atol=1e-9)
        np.testing.assert_allclose(image.point(19), helix[-1], atol=1e-9)

    def test_singular_fit(self, gl):
        """测试重复点导致配置矩阵奇异"""
        points = np.array([[0, 0, 0], [1, 0, 0], [1, 0, 0], [2, 0, 0], [3, 1, 0]], dtype=float)
        path = InterpolatedPath(points, parameterization="chord", gl=gl)
        with pytest.raises(InterpolationError):
            path.fit()

    def test_evaluate_before_fit(self, helix, gl):
        with pytest.raises(RuntimeError):
            InterpolatedPath(helix, gl=gl).evaluate(0.5)

    def test_evaluate_outside_domain(self, helix, gl):
        path = InterpolatedPath(helix, gl=gl).fit()
        with pytest.raises(ValueError):
            path.evaluate(1.5)

    def test_invalid_arguments(self, helix):
        with pytest.raises(ValueError):
            InterpolatedPath(helix, family="nurbs")
        with pytest.raises(ValueError):
            InterpolatedPath(helix, parameterization="foley")
        with pytest.raises(ValueError):
            InterpolatedPath(helix[:3], degree=3)
        with pytest.raises(ValueError):
            InterpolatedPath(helix[:, :2])

    def test_repr(self, helix, gl):
        path = InterpolatedPath(helix, gl=gl)
        assert "not fitted" in repr(path)
        path.fit()
        assert "fitted" in repr(path)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
