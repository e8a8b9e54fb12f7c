"""Tests for Vec3 class."""

import pytest
import math
import numpy as np

from spheretracer.vec3 import Vec3, Point3, Color


class TestVec3Creation:
    """Test Vec3 construction."""

    def test_default_constructor(self):
        v = Vec3()
        assert v.x == 0.0
        assert v.y == 0.0
        assert v.z == 0.0

    def test_value_constructor(self):
        v = Vec3(1.0, 2.0, 3.0)
        assert v.x == 1.0
        assert v.y == 2.0
        assert v.z == 3.0

    def test_from_array(self):
        v = Vec3.from_array(np.array([1.0, 2.0, 3.0]))
        assert (v.x, v.y, v.z) == (1.0, 2.0, 3.0)

    def test_color_aliases(self):
        c = Color(0.5, 0.6, 0.7)
        assert c.r == 0.5
        assert c.g == 0.6
        assert c.b == 0.7

    def test_point_alias(self):
        assert Point3 is Vec3


class TestVec3Arithmetic:
    """Test Vec3 arithmetic operations."""

    def test_negation(self):
        assert -Vec3(1, -2, 3) == Vec3(-1, 2, -3)

    def test_addition(self):
        assert Vec3(1, 2, 3) + Vec3(4, 5, 6) == Vec3(5, 7, 9)

    def test_subtraction(self):
        assert Vec3(4, 5, 6) - Vec3(1, 2, 3) == Vec3(3, 3, 3)

    def test_scalar_multiplication(self):
        assert Vec3(1, 2, 3) * 2 == Vec3(2, 4, 6)
        assert 3 * Vec3(1, 2, 3) == Vec3(3, 6, 9)

    def test_componentwise_multiplication(self):
        assert Vec3(1, 2, 3) * Vec3(2, 3, 4) == Vec3(2, 6, 12)

    def test_division(self):
        assert Vec3(2, 4, 6) / 2 == Vec3(1, 2, 3)

    def test_tolerant_equality(self):
        assert Vec3(1, 2, 3) == Vec3(1, 2, 3 + 1e-12)
        assert Vec3(1, 2, 3) != Vec3(1, 2, 3.1)

    def test_unhashable(self):
        with pytest.raises(TypeError):
            hash(Vec3(1, 2, 3))

    def test_operations_do_not_mutate(self):
        v = Vec3(1, 2, 3)
        _ = v + Vec3(1, 1, 1)
        _ = v * 5
        assert v == Vec3(1, 2, 3)


class TestVec3Indexing:
    """Test indexed component access."""

    def test_index(self):
        v = Vec3(1, 2, 3)
        assert (v[0], v[1], v[2]) == (1.0, 2.0, 3.0)

    @pytest.mark.parametrize("index", [3, -1, 10])
    def test_index_out_of_range(self, index):
        with pytest.raises(IndexError):
            Vec3(1, 2, 3)[index]

    def test_unpacking(self):
        x, y, z = Vec3(1, 2, 3)
        assert (x, y, z) == (1.0, 2.0, 3.0)


class TestVec3VectorOps:
    """Test Vec3 vector operations."""

    def test_length(self):
        assert Vec3(3, 4, 0).length() == 5.0

    def test_length_squared(self):
        assert Vec3(1, 2, 3).length_squared() == 14.0

    def test_normalize(self):
        n = Vec3(3, 4, 0).normalize()
        assert abs(n.length() - 1.0) < 1e-12
        assert n == Vec3(0.6, 0.8, 0)

    def test_normalize_zero_vector_is_not_finite(self):
        n = Vec3(0, 0, 0).normalize()
        assert not n.is_finite()

    def test_dot_product(self):
        assert Vec3(1, 0, 0).dot(Vec3(0, 1, 0)) == 0.0
        assert Vec3(1, 2, 3).dot(Vec3(4, 5, 6)) == 32.0

    def test_cross_product(self):
        assert Vec3(1, 0, 0).cross(Vec3(0, 1, 0)) == Vec3(0, 0, 1)
        assert Vec3(0, 1, 0).cross(Vec3(1, 0, 0)) == Vec3(0, 0, -1)

    def test_near_zero(self):
        assert Vec3(1e-9, -1e-9, 0).near_zero()
        assert not Vec3(1e-3, 0, 0).near_zero()

    def test_clamp(self):
        assert Vec3(-0.5, 0.5, 1.5).clamp() == Vec3(0, 0.5, 1)


class TestReflectRefract:
    """Test reflection and refraction operators."""

    def test_reflect_normal_incidence(self):
        assert Vec3(0, 0, -1).reflect(Vec3(0, 0, 1)) == Vec3(0, 0, 1)

    def test_reflect_oblique(self):
        v = Vec3(1, -1, 0)
        assert v.reflect(Vec3(0, 1, 0)) == Vec3(1, 1, 0)

    def test_reflect_is_involution(self):
        v = Vec3(0.3, -0.8, 0.52)
        n = Vec3(0, 1, 0)
        assert v.reflect(n).reflect(n) == v

    def test_refract_normal_incidence_passes_straight(self):
        r = Vec3(0, 0, -1).refract(Vec3(0, 0, 1), 1 / 1.5)
        assert r == Vec3(0, 0, -1)

    def test_refract_matched_indices_is_identity(self):
        uv = Vec3(1, -1, 0).normalize()
        assert uv.refract(Vec3(0, 1, 0), 1.0) == uv

    def test_refract_obeys_snell(self):
        eta_ratio = 1 / 1.5
        uv = Vec3(math.sin(math.radians(30)), -math.cos(math.radians(30)), 0)
        r = uv.refract(Vec3(0, 1, 0), eta_ratio)

        assert abs(r.length() - 1.0) < 1e-9
        sin_out = r.x
        assert abs(sin_out - eta_ratio * math.sin(math.radians(30))) < 1e-9
        assert r.y < 0
