import math
import os
import sys

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

import pytest

from pyvecmath import Matrix4, Vector3, Vector4


def test_canonical_constructors():
    assert Vector3.zero() == Vector3(0, 0, 0)
    assert Vector3.one() == Vector3(1, 1, 1)
    assert Vector3.replicate(-2) == Vector3(-2, -2, -2)
    assert all(math.isinf(c) for c in Vector3.infinity())
    assert all(math.isnan(c) for c in Vector3.nan())
    assert Vector3.epsilon().z == 2.0 ** -23


def test_indexing():
    v = Vector3(1, 2, 3)
    assert (v[0], v[1], v[2], v[3]) == (1.0, 2.0, 3.0, 0.0)
    with pytest.raises(IndexError):
        v[4]
    with pytest.raises(TypeError):
        v[1.0]


def test_arithmetic():
    a = Vector3(1, 2, 3)
    b = Vector3(4, 5, 6)
    assert a + b == Vector3(5, 7, 9)
    assert a - b == Vector3(-3, -3, -3)
    assert a * b == Vector3(4, 10, 18)
    assert b / a == Vector3(4, 2.5, 2)
    assert a * 0.5 == Vector3(0.5, 1, 1.5)
    assert -a == Vector3(-1, -2, -3)


def test_operators_do_not_mutate_operands():
    a = Vector3(1, 2, 3)
    b = Vector3(4, 5, 6)
    a + b
    a.clamp(Vector3.zero(), Vector3.one())
    assert a == Vector3(1, 2, 3)
    assert b == Vector3(4, 5, 6)


def test_swizzle():
    v = Vector3(1, 2, 3)
    assert v.swizzle(2, 1, 0) == Vector3(3, 2, 1)
    assert v.swizzle(0, 0, 3, 7) == Vector3(1, 1, 0)
    with pytest.raises(IndexError):
        v.swizzle(0, 1, 4)


def test_permute():
    a = Vector3(1, 2, 3)
    b = Vector3(4, 5, 6)
    assert a.permute(b, 4, 1, 6) == Vector3(4, 2, 6)
    assert a.permute(b, 7, 3, 0) == Vector3(0, 0, 1)
    with pytest.raises(IndexError):
        a.permute(b, 0, 1, 8)


def test_transform_translates_points():
    v = Vector3(1, 2, 3)
    assert v.transform(Matrix4.identity()) == v
    assert v.transform(Matrix4.translation(1, 1, 1)) == Vector3(2, 3, 4)
    assert v.transform(Matrix4.scale(2, 3, 4)) == Vector3(2, 6, 12)


def test_transform_rotation_about_z():
    # row-vector convention: x axis maps onto row 0
    rotate = Matrix4(
        0, 1, 0, 0,
        -1, 0, 0, 0,
        0, 0, 1, 0,
        0, 0, 0, 1,
    )
    assert Vector3(1, 0, 0).transform(rotate) == Vector3(0, 1, 0)
    assert Vector3(0, 1, 0).transform(rotate) == Vector3(-1, 0, 0)


def test_transform_ignores_last_column():
    m = Matrix4(M14=5, M24=5, M34=5, M44=5)
    assert Vector3(1, 2, 3).transform(m) == Vector3(1, 2, 3)


def test_min_max_and_clamp():
    a = Vector3(1, 5, -2)
    b = Vector3(3, 2, -1)
    assert a.min(b) == Vector3(1, 2, -2)
    assert a.max(b) == Vector3(3, 5, -1)
    assert a.clamp(Vector3(0, 0, 0), Vector3(2, 2, 2)) == Vector3(1, 2, 0)
    with pytest.raises(ValueError):
        a.clamp(Vector3(0, 0, 2), Vector3(2, 2, 2))


def test_min_max_require_same_arity():
    with pytest.raises(TypeError):
        Vector3(1, 2, 3).min(Vector4(1, 2, 3, 4))


def test_rounding():
    v = Vector3(0.5, -0.5, 1.75)
    assert v.round() == Vector3(1, -1, 2)
    assert v.trunc() == Vector3(0, 0, 1)
    assert v.floor() == Vector3(0, -1, 1)
    assert v.ceil() == Vector3(1, 0, 2)


def test_multiply_add():
    result = Vector3(1, 2, 3).multiply_add(Vector3(2, 2, 2), Vector3(0.5, 0.5, 0.5))
    assert result == Vector3(2.5, 4.5, 6.5)


def test_splat():
    v = Vector3(1, 2, 3)
    assert v.splat_x() == Vector3(1, 1, 1)
    assert v.splat_y() == Vector3(2, 2, 2)
    assert v.splat_z() == Vector3(3, 3, 3)
    assert v.splat_w() == Vector3(0, 0, 0)


def test_bytes():
    v = Vector3(1, 2, 3)
    assert v.to_bytes().hex() == "0000803f0000004000004040"
    assert Vector3.from_bytes(v.to_bytes()) == v


def test_swizzle_and_permute_need_three_indices():
    v = Vector3(1, 2, 3)
    assert v.swizzle(2, 1, 0) == v.swizzle(2, 1, 0, 3)
    with pytest.raises(TypeError):
        v.swizzle(2, 1)
    with pytest.raises(TypeError):
        v.permute(v, 4, 5)
