"""
derivatives 模块单元测试
"""

import copy

import numpy as np
import pytest

from blending_curves import Derivatives


class TestDerivatives:
    """Derivatives 测试"""

    def test_fixed_length(self):
        """测试长度为 order + 1"""
        d = Derivatives(3)
        assert len(d) == 4
        assert d.maximum_order == 3
        np.testing.assert_array_equal(np.asarray(d), np.zeros((4, 3)))

    def test_negative_order(self):
        with pytest.raises(ValueError):
            Derivatives(-1)

    def test_item_access(self):
        """测试按阶访问与写入"""
        d = Derivatives(1)
        d[1] = (1.0, 2.0, 3.0)
        np.testing.assert_array_equal(d[1], [1.0, 2.0, 3.0])
        d[0][2] = 5.0
        assert d.data[0, 2] == 5.0

    def test_out_of_range(self):
        """测试越界访问报错"""
        d = Derivatives(1)
        with pytest.raises(IndexError):
            d[2]
        with pytest.raises(IndexError):
            d[-1] = (0, 0, 0)

    def test_load_null_vectors(self):
        d = Derivatives.from_array(np.ones((3, 3)))
        d.load_null_vectors()
        np.testing.assert_array_equal(d.data, np.zeros((3, 3)))

    def test_from_array_shape(self):
        with pytest.raises(ValueError):
            Derivatives.from_array(np.zeros((2, 2)))

    def test_copy_is_independent(self):
        d = Derivatives.from_array([[1, 2, 3], [4, 5, 6]])
        d_copy = copy.copy(d)
        d_copy[0] = (0, 0, 0)
        np.testing.assert_array_equal(d[0], [1, 2, 3])

    def test_numpy_copy_is_independent(self):
        """测试 np.array 复制后修改不影响原导数组"""
        d = Derivatives(1)
        a = np.array(d)
        a[0, 0] = 42.0
        assert d[0][0] == 0.0
        np.testing.assert_array_equal(np.asarray(d), d.data)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
