"""Positions and vectors on the X-Z plane, with height on Y."""

from __future__ import annotations

import math
import random
from dataclasses import dataclass

_EPSILON = 0.001


@dataclass(frozen=True)
class Vector2D:
    """A vector on the X-Z plane."""

    x: float = 0.0
    z: float = 0.0

    def add(self, other: Vector2D) -> Vector2D:
        return Vector2D(self.x + other.x, self.z + other.z)

    def sub(self, other: Vector2D) -> Vector2D:
        return Vector2D(self.x - other.x, self.z - other.z)

    def magnitude(self) -> float:
        return math.sqrt(self.x * self.x + self.z * self.z)

    def length(self) -> float:
        return self.magnitude()

    def normalize(self) -> Vector2D:
        """Unit vector in the same direction; the zero vector stays zero."""
        mag = self.magnitude()
        if mag == 0:
            return Vector2D()
        return Vector2D(self.x / mag, self.z / mag)

    def dot(self, other: Vector2D) -> float:
        return self.x * other.x + self.z * other.z

    def perpendicular(self) -> Vector2D:
        """Perpendicular to the left."""
        return Vector2D(-self.z, self.x)

    def perp_left(self) -> Vector2D:
        """Rotated 90 degrees counter-clockwise."""
        return Vector2D(-self.z, self.x)

    def perp_right(self) -> Vector2D:
        """Rotated 90 degrees clockwise."""
        return Vector2D(self.z, -self.x)

    def multiply(self, scalar: float) -> Vector2D:
        return Vector2D(self.x * scalar, self.z * scalar)

    def scale(self, scalar: float) -> Vector2D:
        return self.multiply(scalar)


@dataclass(frozen=True)
class Vector3D:
    """A general 3D vector for velocity, acceleration and directions."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    def add(self, other: Vector3D) -> Vector3D:
        return Vector3D(self.x + other.x, self.y + other.y, self.z + other.z)

    def sub(self, other: Vector3D) -> Vector3D:
        return Vector3D(self.x - other.x, self.y - other.y, self.z - other.z)

    def scale(self, scalar: float) -> Vector3D:
        return Vector3D(self.x * scalar, self.y * scalar, self.z * scalar)

    def multiply(self, scalar: float) -> Vector3D:
        return self.scale(scalar)

    def magnitude(self) -> float:
        return math.sqrt(self.x * self.x + self.y * self.y + self.z * self.z)

    def length(self) -> float:
        return self.magnitude()

    def normalize(self) -> Vector3D:
        """Unit vector in the same direction; the zero vector stays zero."""
        mag = self.magnitude()
        if mag == 0:
            return Vector3D()
        return self.scale(1 / mag)

    def to_vector2d(self) -> Vector2D:
        """Drop the Y component."""
        return Vector2D(self.x, self.z)


@dataclass(frozen=True)
class Position:
    """A point in the world."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    def offset(self, dx: float, dz: float) -> Position:
        return Position(self.x + dx, self.y, self.z + dz)

    def add_offset(self, dx: float, dz: float) -> Position:
        return Position(self.x + dx, self.y, self.z + dz)

    def approx_equals(self, other: Position) -> bool:
        """True when every coordinate differs by less than 0.001."""
        return (
            abs(self.x - other.x) < _EPSILON
            and abs(self.z - other.z) < _EPSILON
            and abs(self.y - other.y) < _EPSILON
        )

    def random_within_radius(self, radius: float) -> Position:
        """A random point on the plane between 60% of the radius and the radius."""
        min_dist = min(radius * 0.6, radius - 0.1)
        dist = min_dist + random.random() * (radius - min_dist)
        angle = random.random() * 2 * math.pi
        return Position(
            self.x + dist * math.cos(angle),
            self.y,
            self.z + dist * math.sin(angle),
        )

    def add_vector3d(self, v: Vector3D) -> Position:
        return Position(self.x + v.x, self.y + v.y, self.z + v.z)

    def add_vector2d(self, v: Vector2D) -> Position:
        """Move on the plane, keeping the height."""
        return Position(self.x + v.x, self.y, self.z + v.z)

    def to_vector2d(self) -> Vector2D:
        return Vector2D(self.x, self.z)

    def sub(self, other: Position) -> Vector3D:
        return Vector3D(self.x - other.x, self.y - other.y, self.z - other.z)

    def sub2d(self, other: Position) -> Vector2D:
        return Vector2D(self.x - other.x, self.z - other.z)

    def lerp_to(self, dest: Position, t: float) -> Position:
        return Position(
            self.x + (dest.x - self.x) * t,
            self.y + (dest.y - self.y) * t,
            self.z + (dest.z - self.z) * t,
        )


def calculate_distance(a: Position, b: Position) -> float:
    """Distance in three dimensions."""
    dx = a.x - b.x
    dz = a.z - b.z
    dy = a.y - b.y
    return math.sqrt(dx * dx + dz * dz + dy * dy)


def calculate_distance_2d(a: Position, b: Position) -> float:
    """Distance on the X-Z plane."""
    dx = a.x - b.x
    dz = a.z - b.z
    return math.sqrt(dx * dx + dz * dz)


def lerp_vector2d(v1: Vector2D, v2: Vector2D, t: float) -> Vector2D:
    return Vector2D(v1.x + (v2.x - v1.x) * t, v1.z + (v2.z - v1.z) * t)


def rotate_vector2d(v: Vector2D, angle_rad: float) -> Vector2D:
    """Rotate counter-clockwise on the X-Z plane."""
    cos_a = math.cos(angle_rad)
    sin_a = math.sin(angle_rad)
    return Vector2D(v.x * cos_a - v.z * sin_a, v.x * sin_a + v.z * cos_a)


def vector2d_from_to(from_pos: Position, to_pos: Position) -> Vector2D:
    """Unit direction on the plane from one position to another."""
    return Vector2D(to_pos.x - from_pos.x, to_pos.z - from_pos.z).normalize()


def vector3d_from_to(a: Position, b: Position) -> Vector3D:
    """Vector from a to b, not normalized."""
    return Vector3D(b.x - a.x, b.y - a.y, b.z - a.z)