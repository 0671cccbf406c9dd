import math

import pytest

from apeiron.position import (
    Position,
    Vector2D,
    Vector3D,
    calculate_distance,
    calculate_distance_2d,
    lerp_vector2d,
    rotate_vector2d,
    vector2d_from_to,
    vector3d_from_to,
)


def test_distance_three_four_five():
    assert calculate_distance(Position(0, 0, 0), Position(3, 0, 4)) == pytest.approx(5.0)


def test_distance_is_symmetric():
    a = Position(1.5, -2.0, 7.0)
    b = Position(-3.0, 4.0, 0.5)
    assert calculate_distance(a, b) == pytest.approx(calculate_distance(b, a))


def test_distance_2d_ignores_height():
    a = Position(1.0, 0.0, 2.0)
    b = Position(4.0, 0.0, 6.0)
    raised = Position(4.0, 100.0, 6.0)
    assert calculate_distance_2d(a, raised) == pytest.approx(calculate_distance(a, b))
    assert calculate_distance(a, raised) > calculate_distance_2d(a, raised)


def test_offset_and_add_offset_agree_and_keep_height():
    p = Position(1.0, 2.0, 3.0)
    assert p.offset(0.5, -1.0) == p.add_offset(0.5, -1.0)
    assert p.offset(0.5, -1.0).y == p.y


def test_approx_equals_tolerance():
    p = Position(1.0, 2.0, 3.0)
    assert p.approx_equals(Position(1.0005, 2.0, 3.0))
    assert not p.approx_equals(Position(1.01, 2.0, 3.0))


def test_sub_and_add_vector3d_round_trip():
    a = Position(1.0, 2.0, 3.0)
    b = Position(-4.0, 0.5, 9.0)
    assert b.add_vector3d(a.sub(b)).approx_equals(a)
    assert a.sub(b) == vector3d_from_to(b, a)


def test_sub2d_and_add_vector2d_keep_height():
    a = Position(1.0, 2.0, 3.0)
    b = Position(5.0, 7.0, -1.0)
    moved = b.add_vector2d(a.sub2d(b))
    assert moved.x == pytest.approx(a.x)
    assert moved.z == pytest.approx(a.z)
    assert moved.y == b.y


def test_to_vector2d():
    p = Position(1.0, 2.0, 3.0)
    assert p.to_vector2d() == Vector2D(p.x, p.z)


def test_lerp_endpoints_and_midpoint():
    a = Position(0.0, 0.0, 0.0)
    b = Position(2.0, 4.0, -6.0)
    assert a.lerp_to(b, 0.0) == a
    assert a.lerp_to(b, 1.0).approx_equals(b)
    mid = a.lerp_to(b, 0.5)
    assert calculate_distance(a, mid) == pytest.approx(calculate_distance(mid, b))


def test_random_within_radius_bounds():
    origin = Position(10.0, 3.0, -5.0)
    radius = 5.0
    for _ in range(200):
        p = origin.random_within_radius(radius)
        d = calculate_distance_2d(origin, p)
        assert radius * 0.6 - 1e-9 <= d <= radius + 1e-9
        assert p.y == origin.y


def test_vector2d_normalize_unit_and_zero():
    assert Vector2D(3.0, -7.0).normalize().magnitude() == pytest.approx(1.0)
    assert Vector2D().normalize() == Vector2D()


def test_vector2d_add_sub_round_trip():
    a = Vector2D(1.0, 2.0)
    b = Vector2D(-3.0, 0.5)
    assert a.add(b).sub(b) == a


def test_vector2d_perpendiculars():
    v = Vector2D(2.0, 5.0)
    assert v.dot(v.perp_left()) == pytest.approx(0.0)
    assert v.dot(v.perp_right()) == pytest.approx(0.0)
    assert v.perpendicular() == v.perp_left()
    assert v.perp_left().scale(-1) == v.perp_right()


def test_vector2d_scale_and_length():
    v = Vector2D(1.0, 1.0)
    assert v.scale(3.0) == v.multiply(3.0)
    assert v.scale(3.0).length() == pytest.approx(3.0 * v.length())


def test_rotate_quarter_turn_is_perp_left():
    v = Vector2D(2.0, 5.0)
    r = rotate_vector2d(v, math.pi / 2)
    assert r.x == pytest.approx(v.perp_left().x)
    assert r.z == pytest.approx(v.perp_left().z)
    assert r.magnitude() == pytest.approx(v.magnitude())


def test_lerp_vector2d_endpoints():
    a = Vector2D(1.0, 2.0)
    b = Vector2D(5.0, -2.0)
    assert lerp_vector2d(a, b, 0.0) == a
    assert lerp_vector2d(a, b, 1.0) == b


def test_vector2d_from_to_is_unit_and_points_right_way():
    a = Position(0.0, 0.0, 0.0)
    b = Position(3.0, 9.0, 4.0)
    d = vector2d_from_to(a, b)
    assert d.magnitude() == pytest.approx(1.0)
    assert d.dot(b.sub2d(a)) > 0
    assert vector2d_from_to(a, a) == Vector2D()


def test_vector3d_operations():
    a = Vector3D(1.0, 2.0, 3.0)
    b = Vector3D(4.0, -1.0, 0.5)
    assert a.add(b).sub(b) == a
    assert a.scale(2.0) == a.multiply(2.0)
    assert a.length() == pytest.approx(a.magnitude())
    assert a.normalize().magnitude() == pytest.approx(1.0)
    assert Vector3D().normalize() == Vector3D()
    assert a.to_vector2d() == Vector2D(a.x, a.z)