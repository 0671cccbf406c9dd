"""Path-following movement with sidesteps, repaths, impulses and short-lived plans."""

from __future__ import annotations

import math
import random
from dataclasses import dataclass, field
from datetime import datetime, timedelta

from apeiron.consts import MovementPlanType
from apeiron.handle import EntityHandle
from apeiron.model import Movable
from apeiron.navmesh import NavMesh
from apeiron.physics import apply_physics
from apeiron.position import (
    Position,
    Vector2D,
    Vector3D,
    calculate_distance,
    calculate_distance_2d,
)
from apeiron.spatial_index import SimpleSpatialIndex

_MAX_TARGET_RADIUS = 2.0
_SEARCH_BUFFER = 0.5
_REDUNDANT_POINT = 0.01
_SIDESTEP_LENGTH = 1.0


@dataclass
class MoveIntent:
    """A pending request to move somewhere, picked up on the next update."""

    target_position: Position = field(default_factory=Position)
    speed: float = 0.0
    stop_distance: float = 0.0
    has_intent: bool = False


@dataclass
class ImpulseMovementState:
    """A forced straight-line move over a fixed time, such as a dodge."""

    active: bool = False
    start: datetime = datetime.min
    duration: timedelta = timedelta()
    start_pos: Position = field(default_factory=Position)
    end_pos: Position = field(default_factory=Position)

    def progress(self, now: datetime) -> float:
        if self.duration <= timedelta():
            return 1.0
        return (now - self.start) / self.duration


@dataclass
class MovementPlan:
    """A tactical movement goal that expires at a given moment."""

    type: MovementPlanType = MovementPlanType.NONE
    target_handle: EntityHandle = field(default_factory=EntityHandle)
    desired_distance: float = 0.0
    expires_at: datetime = datetime.min

    def is_active(self) -> bool:
        return datetime.now() < self.expires_at

    def is_type(self, plan_type: MovementPlanType) -> bool:
        """True when the plan is of this type and has not expired."""
        return self.type == plan_type and self.is_active()


def new_movement_plan(
    plan_type: MovementPlanType,
    target: EntityHandle,
    distance: float,
    duration: timedelta,
) -> MovementPlan:
    """A plan that lasts for the given duration from now."""
    return MovementPlan(
        type=plan_type,
        target_handle=target,
        desired_distance=distance,
        expires_at=datetime.now() + duration,
    )


@dataclass
class MovementController:
    """Moves an entity along a path towards a target, one tick at a time."""

    target_handle: EntityHandle = field(default_factory=EntityHandle)
    target_position: Position = field(default_factory=Position)
    current_path: list[Position] = field(default_factory=list)
    path_index: int = 0
    speed: float = 0.0
    stop_distance: float = 0.0
    is_moving: bool = False
    velocity: Vector3D = field(default_factory=Vector3D)
    acceleration: Vector3D = field(default_factory=Vector3D)
    desired_direction: Vector2D = field(default_factory=Vector2D)
    repath_cooldown: timedelta = timedelta(seconds=1)
    last_repath: datetime = datetime.min
    last_update: datetime = datetime.min
    intent: MoveIntent = field(default_factory=MoveIntent)
    tried_sidestep: bool = False
    was_blocked: bool = False
    current_intent_dest: Position = field(default_factory=Position)
    impulse_state: ImpulseMovementState | None = None
    movement_plan: MovementPlan | None = None

    def set_move_intent(self, pos: Position, speed: float, stop_dist: float) -> None:
        self.intent = MoveIntent(pos, speed, stop_dist, True)
        self.current_intent_dest = pos

    def update_target_position(self, pos: Position) -> None:
        self.target_position = pos

    def set_target(self, pos: Position, speed: float, stop_dist: float) -> None:
        """Head straight for pos, dropping any path."""
        self.target_handle = EntityHandle()
        self.target_position = pos
        self.speed = speed
        self.stop_distance = stop_dist
        self.current_path = []
        self.path_index = 0
        self.is_moving = True
        self.tried_sidestep = False
        self.was_blocked = False

    def set_path(self, path: list[Position], mov: Movable) -> None:
        """Follow path, skipping leading points the entity already stands on."""
        points = list(path)
        while points and calculate_distance(mov.position, points[0]) < _REDUNDANT_POINT:
            points.pop(0)
        self.current_path = points
        self.path_index = 0
        self.is_moving = bool(points)
        self.tried_sidestep = False
        self.was_blocked = False

    def stop(self) -> None:
        self.is_moving = False
        self.current_path = []
        self.path_index = 0
        self.intent.has_intent = False

    def set_impulse_movement(
        self, current: Position, dest: Position, duration: timedelta
    ) -> None:
        """Replace normal movement with a straight move to dest over duration."""
        self.impulse_state = ImpulseMovementState(
            active=True,
            start=datetime.now(),
            duration=duration,
            start_pos=current,
            end_pos=dest,
        )
        self.is_moving = False
        self.current_path = []
        self.path_index = 0

    def _repath(self, mov: Movable, navmesh: NavMesh, empty_keeps_moving: bool) -> None:
        path = navmesh.find_path(mov.position, self.target_position)
        self.last_repath = datetime.now()
        if path:
            self.set_path(path, mov)
        else:
            self.is_moving = empty_keeps_moving

    def update(
        self,
        mov: Movable,
        delta_time: float,
        navmesh: NavMesh,
        spatial_index: SimpleSpatialIndex | None = None,
    ) -> bool:
        """Advance one tick; True when an impulse ran or the target was reached."""
        impulse = self.impulse_state
        if impulse is not None and impulse.active:
            t = impulse.progress(datetime.now())
            if t >= 1.0:
                mov.position = impulse.end_pos
                self.impulse_state = None
            else:
                mov.position = impulse.start_pos.lerp_to(impulse.end_pos, t)
            return True

        if self.intent.has_intent:
            self.set_target(
                self.intent.target_position, self.intent.speed, self.intent.stop_distance
            )
            self.intent.has_intent = False
            self._repath(mov, navmesh, empty_keeps_moving=True)

        if not self.is_moving:
            self.tried_sidestep = False
            return False

        on_path = bool(self.current_path) and self.path_index < len(self.current_path)
        dest = self.current_path[self.path_index] if on_path else self.target_position

        current = mov.position
        dx = dest.x - current.x
        dy = dest.y - current.y
        dz = dest.z - current.z
        dist = math.sqrt(dx * dx + dz * dz + dy * dy)

        if self.current_path and self.path_index < len(self.current_path) - 1:
            if dist <= self.stop_distance * 0.5:
                self.path_index += 1
                self.tried_sidestep = False
                return False
        elif dist <= self.stop_distance:
            self.is_moving = False
            self.tried_sidestep = False
            if dist > self.stop_distance * 0.5:
                if (
                    calculate_distance_2d(self.current_intent_dest, self.target_position)
                    > _REDUNDANT_POINT
                ):
                    self.set_move_intent(self.target_position, self.speed, self.stop_distance)
            return True

        direction = Vector3D(dx / dist, dy / dist, dz / dist)
        self.desired_direction = Vector2D(direction.x, direction.z)
        self.acceleration = direction.scale(self.speed)

        search_radius = mov.hitbox_radius + _MAX_TARGET_RADIUS + _SEARCH_BUFFER
        nearby = spatial_index.query(mov.position, search_radius) if spatial_index else []

        blocked, velocity = apply_physics(
            mov, self.acceleration, delta_time, True, navmesh, nearby
        )
        if velocity is not None:
            self.velocity = velocity
        self.was_blocked = blocked

        if blocked:
            if not self.tried_sidestep:
                angle = random.random() * math.pi
                side = Vector3D(math.cos(angle), 0.0, math.sin(angle)).scale(_SIDESTEP_LENGTH)
                new_pos = current.add_offset(side.x, side.z)
                if calculate_distance_2d(self.current_intent_dest, new_pos) > _REDUNDANT_POINT:
                    self.set_move_intent(new_pos, self.speed, self.stop_distance)
                self.tried_sidestep = True
                return False

            if datetime.now() - self.last_repath >= self.repath_cooldown:
                self._repath(mov, navmesh, empty_keeps_moving=False)
                self.tried_sidestep = False

        self.last_update = datetime.now()
        return False