import math

import pytest

from apeiron.position import Position, Vector3D
from apeiron.steering import (
    SteeringBehaviors,
    SteeringOutput,
    arrive,
    avoid_obstacle,
    flee,
    seek,
    wander,
)

BEHAVIORS = SteeringBehaviors(max_acceleration=3.0, max_speed=6.0)


def test_seek_points_at_target_with_max_acceleration():
    out = seek(Position(), Position(0, 0, 10), BEHAVIORS)
    assert out.linear.magnitude() == pytest.approx(BEHAVIORS.max_acceleration)
    assert out.linear.z > 0
    assert out.linear.x == 0


def test_flee_is_opposite_of_seek():
    current, threat = Position(1, 0, 2), Position(4, 0, -3)
    a = seek(current, threat, BEHAVIORS).linear
    b = flee(current, threat, BEHAVIORS).linear
    assert a.add(b).magnitude() == pytest.approx(0.0)


def test_seek_on_target_is_zero():
    out = seek(Position(1, 1, 1), Position(1, 1, 1), BEHAVIORS)
    assert out.linear == Vector3D()


def test_arrive_inside_stop_radius_is_zero():
    out = arrive(Position(), Position(0.5, 0, 0), BEHAVIORS, 5.0, 1.0)
    assert out.linear == Vector3D()
    assert out.angular == 0.0


def test_arrive_outside_slow_radius_uses_max_speed():
    out = arrive(Position(), Position(20, 0, 0), BEHAVIORS, 5.0, 1.0)
    assert out.linear.magnitude() == pytest.approx(BEHAVIORS.max_speed)


def test_arrive_inside_slow_radius_scales_with_distance():
    near = arrive(Position(), Position(2, 0, 0), BEHAVIORS, 5.0, 1.0).linear
    far = arrive(Position(), Position(4, 0, 0), BEHAVIORS, 5.0, 1.0).linear
    assert far.magnitude() == pytest.approx(2 * near.magnitude())
    assert far.magnitude() < BEHAVIORS.max_speed


def test_apply_limits_clamps_to_smaller_limit():
    out = SteeringOutput(Vector3D(30, 0, 40))
    out.apply_limits(10, 5)
    assert out.linear.magnitude() == pytest.approx(5)
    assert out.linear.x / out.linear.z == pytest.approx(30 / 40)


def test_apply_limits_leaves_small_force():
    out = SteeringOutput(Vector3D(1, 0, 0))
    out.apply_limits(10, 5)
    assert out.linear == Vector3D(1, 0, 0)


def test_avoid_obstacle_pushes_away():
    out = avoid_obstacle(Position(), [Position(1, 0, 0)], BEHAVIORS, 2.0)
    assert out.linear.x < 0
    assert out.linear.magnitude() == pytest.approx(BEHAVIORS.max_acceleration)


def test_avoid_obstacle_ignores_far_and_coincident():
    out = avoid_obstacle(Position(), [Position(10, 0, 0), Position()], BEHAVIORS, 2.0)
    assert out.linear == Vector3D()


def test_wander_keeps_radius_and_plane():
    out = wander(Vector3D(0, 1, 0), 0.5, 2.0)
    assert out.linear.magnitude() == pytest.approx(2.0)
    assert out.linear.z == 0.0
    angle = math.atan2(out.linear.y, out.linear.x)
    assert abs(angle - math.pi / 2) <= 0.5 + 1e-9


def test_wander_without_jitter_keeps_heading():
    out = wander(Vector3D(1, 0, 0), 0.0, 3.0)
    assert out.linear.x == pytest.approx(3.0)
    assert out.linear.y == pytest.approx(0.0)