"""Movement physics: collision, pushes and gravity."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Iterable

from apeiron.handle import EntityHandle
from apeiron.model import Movable, Targetable
from apeiron.navmesh import NavMesh
from apeiron.position import Position, Vector2D, Vector3D, vector3d_from_to

logger = logging.getLogger(__name__)

_GRAVITY_ACCELERATION = -9.81


@dataclass
class StaggerData:
    is_staggered: bool = False
    duration_sec: float = 0.0
    end_time_unix: int = 0


@dataclass
class InvincibilityData:
    is_invincible: bool = False
    duration_sec: float = 0.0
    end_time_unix: int = 0


def check_collision(
    new_pos: Position,
    radius: float,
    self_handle: EntityHandle,
    mesh: NavMesh | None,
    others: Iterable[Targetable],
) -> bool:
    """True if new_pos is off the mesh or overlaps another living entity."""
    if mesh is not None and not mesh.is_walkable(new_pos):
        logger.debug(
            "[PHYSICS] [%s] navmesh collision at (%.2f, %.2f)",
            self_handle.id, new_pos.x, new_pos.z,
        )
        return True

    for other in others:
        if other.handle == self_handle or not other.is_alive():
            continue
        last = other.last_position
        dist = math.hypot(new_pos.x - last.x, new_pos.z - last.z)
        if dist < radius + other.hitbox_radius:
            logger.debug(
                "[PHYSICS] [%s] collision with entity %s", self_handle.id, other.handle.id
            )
            return True
    return False


def apply_physics(
    mov: Movable,
    acceleration: Vector3D,
    delta_time: float,
    check_collision: bool,
    mesh: NavMesh | None,
    others: Iterable[Targetable],
) -> tuple[bool, Vector3D | None]:
    """Move mov one step with velocity equal to the acceleration.

    Returns (blocked, velocity). The velocity is zero when the step was
    blocked, and None when delta_time is not positive and nothing moved.
    """
    if delta_time <= 0:
        return False, None

    velocity = acceleration
    current = mov.position
    new_pos = Position(
        current.x + velocity.x * delta_time,
        current.y + velocity.y * delta_time,
        current.z + velocity.z * delta_time,
    )

    if check_collision and _collides(new_pos, mov, mesh, others):
        return True, Vector3D()

    mov.position = new_pos

    mag = math.hypot(velocity.x, velocity.z)
    if mag > 0:
        mov.facing_direction = Vector2D(velocity.x / mag, velocity.z / mag)
    return False, velocity


def _collides(
    new_pos: Position, mov: Movable, mesh: NavMesh | None, others: Iterable[Targetable]
) -> bool:
    return check_collision(new_pos, mov.hitbox_radius, mov.handle, mesh, others)


def push_target_from_wall(
    target: Targetable,
    attacker: Movable,
    navmesh: NavMesh,
    push_distance: float,
) -> Position | None:
    """Shift target along the line to the attacker, or sideways if that is blocked.

    Returns the target's new position, or None when no walkable spot was found.
    """
    origin = target.position
    direction = vector3d_from_to(origin, attacker.position).normalize()

    candidates = [("directly", origin.add_vector3d(direction.scale(push_distance)))]
    side = Vector3D(-direction.z, 0.0, direction.x).normalize()
    candidates.append(("sideways", origin.add_vector3d(side.scale(push_distance * 0.5))))
    candidates.append(("to the other side", origin.add_vector3d(side.scale(-push_distance * 0.5))))

    for how, pos in candidates:
        if navmesh.is_walkable(pos):
            target.position = pos
            logger.debug(
                "[PUSH] [%s] target pushed %s to (%.2f, %.2f)",
                target.handle.id, how, pos.x, pos.z,
            )
            return pos

    logger.debug("[PUSH] [%s] push blocked, no valid position", target.handle.id)
    return None


def apply_gravity(z: float, delta_time_sec: float) -> float:
    """Height after falling under gravity for the given time."""
    return z + _GRAVITY_ACCELERATION * delta_time_sec