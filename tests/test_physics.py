from dataclasses import dataclass, field

import pytest

from apeiron.handle import EntityHandle
from apeiron.navmesh import NavMesh, Polygon, Vertex
from apeiron.physics import (
    InvincibilityData,
    StaggerData,
    apply_gravity,
    apply_physics,
    check_collision,
    push_target_from_wall,
)
from apeiron.position import Position, Vector2D, Vector3D, calculate_distance_2d


@dataclass
class _Body:
    handle: EntityHandle
    position: Position
    hitbox_radius: float = 0.5
    facing_direction: Vector2D = field(default_factory=Vector2D)
    alive: bool = True

    @property
    def last_position(self):
        return self.position

    def is_alive(self):
        return self.alive


def _mesh():
    return NavMesh(
        [
            Polygon(
                id=0,
                vertices=[Vertex(0, 0), Vertex(10, 0), Vertex(10, 10), Vertex(0, 10)],
            )
        ]
    )


def _body(name, x, z, **kwargs):
    return _Body(EntityHandle(name, 1), Position(x, 0, z), **kwargs)


def test_apply_gravity():
    assert apply_gravity(0.0, 1.0) == pytest.approx(-9.81)
    assert apply_gravity(3.0, 0.0) == 3.0


def test_apply_physics_moves_and_faces():
    mov = _body("me", 1, 1)
    start = mov.position
    accel = Vector3D(2, 0, 0)
    blocked, velocity = apply_physics(mov, accel, 0.5, True, _mesh(), [])
    assert blocked is False
    assert velocity == accel
    assert mov.position == start.add_vector3d(accel.scale(0.5))
    assert mov.facing_direction == accel.to_vector2d().normalize()


def test_apply_physics_zero_delta_does_nothing():
    mov = _body("me", 1, 1)
    start = mov.position
    assert apply_physics(mov, Vector3D(2, 0, 0), 0, True, _mesh(), []) == (False, None)
    assert mov.position == start


def test_apply_physics_blocked_by_mesh_edge():
    mov = _body("me", 9.5, 5)
    start = mov.position
    blocked, velocity = apply_physics(mov, Vector3D(4, 0, 0), 1.0, True, _mesh(), [])
    assert blocked is True
    assert velocity == Vector3D()
    assert mov.position == start


def test_apply_physics_without_collision_check_leaves_mesh():
    mov = _body("me", 9.5, 5)
    blocked, _ = apply_physics(mov, Vector3D(4, 0, 0), 1.0, False, _mesh(), [])
    assert blocked is False
    assert not _mesh().is_walkable(mov.position)


def test_check_collision_ignores_self_and_dead():
    me = _body("me", 5, 5)
    dead = _body("dead", 5, 5, alive=False)
    pos = Position(5, 0, 5)
    assert not check_collision(pos, 0.5, me.handle, _mesh(), [me, dead])
    assert check_collision(pos, 0.5, me.handle, _mesh(), [_body("x", 5.2, 5)])


def test_check_collision_without_mesh():
    me = _body("me", 0, 0)
    assert not check_collision(Position(-50, 0, -50), 0.5, me.handle, None, [])


def test_push_moves_toward_attacker():
    target = _body("t", 5, 5)
    attacker = _body("a", 8, 5)
    start = target.position
    result = push_target_from_wall(target, attacker, _mesh(), 1.0)
    assert result == target.position
    assert calculate_distance_2d(result, start) == pytest.approx(1.0)
    assert calculate_distance_2d(result, attacker.position) < calculate_distance_2d(
        start, attacker.position
    )


def test_push_falls_back_sideways():
    target = _body("t", 5, 9.8)
    attacker = _body("a", 5, 12)
    start = target.position
    result = push_target_from_wall(target, attacker, _mesh(), 1.0)
    assert result is not None
    assert _mesh().is_walkable(result)
    assert result.z == pytest.approx(start.z)
    assert calculate_distance_2d(result, start) == pytest.approx(0.5)


def test_push_blocked_everywhere():
    target = _body("t", 5, 5)
    attacker = _body("a", 8, 5)
    start = target.position
    assert push_target_from_wall(target, attacker, NavMesh(), 1.0) is None
    assert target.position == start


def test_data_records_defaults():
    assert StaggerData() == StaggerData(False, 0.0, 0)
    data = InvincibilityData(is_invincible=True, duration_sec=1.5, end_time_unix=100)
    assert data.is_invincible and data.duration_sec == 1.5 and data.end_time_unix == 100