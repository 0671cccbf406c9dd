"""Steering behaviours that produce a linear force towards or away from points."""

from __future__ import annotations

import math
import random
from dataclasses import dataclass, field
from typing import Iterable

from apeiron.position import Position, Vector3D, vector3d_from_to


@dataclass
class SteeringOutput:
    """The force a steering behaviour asks for."""

    linear: Vector3D = field(default_factory=Vector3D)
    angular: float = 0.0

    def apply_limits(self, max_accel: float, max_speed: float) -> None:
        """Clamp the linear force to the acceleration and speed limits."""
        mag = self.linear.magnitude()
        if mag > max_accel:
            self.linear = self.linear.normalize().scale(max_accel)
        if mag > max_speed:
            self.linear = self.linear.normalize().scale(max_speed)


@dataclass
class SteeringBehaviors:
    """Limits shared by the steering behaviours."""

    max_acceleration: float = 0.0
    max_speed: float = 0.0


def seek(current: Position, target: Position, behaviors: SteeringBehaviors) -> SteeringOutput:
    """Full acceleration towards the target."""
    direction = vector3d_from_to(current, target)
    return SteeringOutput(direction.normalize().scale(behaviors.max_acceleration))


def flee(current: Position, threat: Position, behaviors: SteeringBehaviors) -> SteeringOutput:
    """Full acceleration away from the threat."""
    direction = vector3d_from_to(threat, current)
    return SteeringOutput(direction.normalize().scale(behaviors.max_acceleration))


def arrive(
    current: Position,
    target: Position,
    behaviors: SteeringBehaviors,
    slow_radius: float,
    stop_radius: float,
) -> SteeringOutput:
    """Head for the target, slowing inside slow_radius and stopping inside stop_radius."""
    direction = vector3d_from_to(current, target)
    distance = direction.magnitude()
    if distance < stop_radius:
        return SteeringOutput()
    goal_speed = behaviors.max_speed
    if distance < slow_radius:
        goal_speed = behaviors.max_speed * (distance / slow_radius)
    return SteeringOutput(direction.normalize().scale(goal_speed))


def avoid_obstacle(
    current: Position,
    obstacles: Iterable[Position],
    behaviors: SteeringBehaviors,
    avoid_radius: float,
) -> SteeringOutput:
    """Push away from nearby obstacles, the closest ones counting most."""
    avoid = Vector3D()
    for obstacle in obstacles:
        direction = vector3d_from_to(current, obstacle)
        dist = direction.magnitude()
        if 0 < dist < avoid_radius:
            avoid = avoid.add(direction.normalize().scale(-1 / dist))
    if avoid.magnitude() > 0:
        avoid = avoid.normalize().scale(behaviors.max_acceleration)
    return SteeringOutput(avoid)


def wander(current_dir: Vector3D, jitter: float, radius: float) -> SteeringOutput:
    """Turn the current X-Y heading by a random angle within +-jitter."""
    offset = (random.random() * 2 - 1) * jitter
    angle = math.atan2(current_dir.y, current_dir.x) + offset
    return SteeringOutput(Vector3D(math.cos(angle) * radius, math.sin(angle) * radius, 0.0))