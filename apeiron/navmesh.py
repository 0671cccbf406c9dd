"""Navigation meshes on the X-Z plane and A* path finding over their polygons."""

from __future__ import annotations

import heapq
import itertools
import json
import logging
import math
import random
import sys
from dataclasses import dataclass, field
from os import PathLike
from typing import Any, Iterable, Mapping, Sequence

from apeiron.position import Position, calculate_distance, calculate_distance_2d

logger = logging.getLogger(__name__)

_RANDOM_POINT_ATTEMPTS = 5


@dataclass(frozen=True)
class Vertex:
    """A corner of a polygon on the X-Z plane."""

    x: float = 0.0
    z: float = 0.0


@dataclass
class Polygon:
    """A walkable polygon and the ids of the polygons next to it."""

    id: int = 0
    vertices: list[Vertex] = field(default_factory=list)
    neighbors: list[int] = field(default_factory=list)
    area_type: str = ""
    slope: float = 0.0
    y: float = 0.0

    def center_position(self) -> Position:
        """Mean of the vertices on the plane, at the polygon's height."""
        count = len(self.vertices)
        return Position(
            sum(v.x for v in self.vertices) / count,
            self.y,
            sum(v.z for v in self.vertices) / count,
        )


@dataclass
class PathSettings:
    """Options that restrict and weight path finding."""

    use_funnel: bool = False
    max_slope: float = 45.0
    avoid_areas: list[str] | None = None
    pref_areas: list[str] | None = None
    target_height: float = 0.0
    max_height_diff: float = 3.0
    cost_modifiers: dict[str, float] = field(default_factory=dict)
    consider_height: bool = False


@dataclass
class _PathNode:
    polygon_id: int
    pos: Position
    g_cost: float
    h_cost: float
    f_cost: float
    parent: _PathNode | None = None


def point_in_polygon_xz(pos: Position, poly: Polygon) -> bool:
    """Ray-casting test of whether a point lies inside a polygon on the X-Z plane."""
    inside = False
    vertices = poly.vertices
    for v1, v2 in zip(vertices, vertices[1:] + vertices[:1]):
        if (v1.z > pos.z) != (v2.z > pos.z) and pos.x < (v2.x - v1.x) * (
            pos.z - v1.z
        ) / (v2.z - v1.z) + v1.x:
            inside = not inside
    return inside


def _heuristic_cost(a: Position, b: Position, settings: PathSettings) -> float:
    dist = math.hypot(a.x - b.x, a.z - b.z)
    if settings.consider_height:
        dist = math.hypot(dist, a.y - b.y)
    return dist


def _is_poly_allowed(from_pos: Position, poly: Polygon, settings: PathSettings) -> bool:
    if settings.avoid_areas and poly.area_type in settings.avoid_areas:
        return False
    if settings.max_slope > 0 and poly.slope > settings.max_slope:
        return False
    if settings.consider_height:
        if abs(from_pos.y - poly.center_position().y) > settings.max_height_diff:
            return False
    return True


def _reconstruct_path(node: _PathNode, end: Position) -> list[Position]:
    path: list[Position] = []
    current: _PathNode | None = node
    while current is not None:
        path.append(current.pos)
        current = current.parent
    path.reverse()
    path.append(end)
    return path


@dataclass
class NavMesh:
    """A set of walkable polygons."""

    polygons: list[Polygon] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> NavMesh:
        """Build a mesh from its JSON document form."""
        polygons = [
            Polygon(
                id=int(raw.get("id", 0)),
                vertices=[
                    Vertex(float(v.get("x", 0.0)), float(v.get("z", 0.0)))
                    for v in raw.get("vertices") or []
                ],
                neighbors=[int(n) for n in raw.get("neighbors") or []],
                area_type=str(raw.get("areaType", "")),
                slope=float(raw.get("slope", 0.0)),
                y=float(raw.get("y", 0.0)),
            )
            for raw in data.get("polygons") or []
        ]
        return cls(polygons)

    def is_walkable(self, pos: Position) -> bool:
        return any(point_in_polygon_xz(pos, poly) for poly in self.polygons)

    def bounding_box(self) -> tuple[float, float, float, float]:
        """(min_x, max_x, min_z, max_z) over every vertex; zeros for an empty mesh."""
        if not self.polygons:
            return 0.0, 0.0, 0.0, 0.0
        big = sys.float_info.max
        min_x, max_x, min_z, max_z = big, -big, big, -big
        for poly in self.polygons:
            for v in poly.vertices:
                min_x = min(min_x, v.x)
                max_x = max(max_x, v.x)
                min_z = min(min_z, v.z)
                max_z = max(max_z, v.z)
        return min_x, max_x, min_z, max_z

    def find_closest_polygon(self, pos: Position) -> Polygon | None:
        """The polygon whose centre is nearest on the plane."""
        closest: Polygon | None = None
        min_dist = math.inf
        for poly in self.polygons:
            dist = calculate_distance_2d(pos, poly.center_position())
            if dist < min_dist:
                min_dist = dist
                closest = poly
        return closest

    def find_containing_polygon(self, pos: Position) -> Polygon | None:
        return next((p for p in self.polygons if point_in_polygon_xz(pos, p)), None)

    def polygon_by_id(self, polygon_id: int) -> Polygon | None:
        return next((p for p in self.polygons if p.id == polygon_id), None)

    def get_escape_point(
        self, current: Position, threats: Sequence[Position], distance: float
    ) -> Position:
        """A point the given distance away from the centre of the threats."""
        if not threats:
            return current
        center_x = sum(t.x for t in threats) / len(threats)
        center_z = sum(t.z for t in threats) / len(threats)

        dir_x = current.x - center_x
        dir_z = current.z - center_z
        mag = math.hypot(dir_x, dir_z)
        if mag == 0:
            angle = random.random() * 2 * math.pi
            dir_x, dir_z, mag = math.cos(angle), math.sin(angle), 1.0
        dir_x /= mag
        dir_z /= mag
        return Position(current.x + dir_x * distance, current.y, current.z + dir_z * distance)

    def get_random_walkable_point(
        self, origin: Position, min_dist: float, max_dist: float
    ) -> Position:
        """A random walkable point in the ring around origin, or origin itself."""
        for _ in range(_RANDOM_POINT_ATTEMPTS):
            distance = random.random() * (max_dist - min_dist) + min_dist
            angle = random.random() * 2 * math.pi
            dest = Position(
                origin.x + math.cos(angle) * distance,
                origin.y,
                origin.z + math.sin(angle) * distance,
            )
            if self.is_walkable(dest):
                return dest
        return origin

    def find_path(
        self, start: Position, end: Position, settings: PathSettings | None = None
    ) -> list[Position]:
        """Waypoints from start to end through polygon centres; empty if none."""
        settings = settings or PathSettings()

        start_poly = self.find_containing_polygon(start)
        end_poly = self.find_containing_polygon(end)
        if start_poly is None or end_poly is None:
            logger.info("[NAVMESH PATHFINDER] start or end outside the navmesh")
            return []

        counter = itertools.count()
        h_start = _heuristic_cost(start, end, settings)
        start_node = _PathNode(start_poly.id, start, 0.0, h_start, h_start)
        open_set: list[tuple[float, int, _PathNode]] = [
            (start_node.f_cost, next(counter), start_node)
        ]
        seen = {start_poly.id}

        while open_set:
            _, _, current = heapq.heappop(open_set)

            if current.polygon_id == end_poly.id:
                if settings.use_funnel:
                    logger.debug("[NAVMESH PATHFINDER] funnel smoothing requested")
                return _reconstruct_path(current, end)

            poly = self.polygon_by_id(current.polygon_id)
            for neighbor_id in poly.neighbors:
                if neighbor_id in seen:
                    continue
                neighbor = self.polygon_by_id(neighbor_id)
                if neighbor is None:
                    raise ValueError(
                        f"polygon {poly.id} names unknown neighbour {neighbor_id}"
                    )
                if not _is_poly_allowed(current.pos, neighbor, settings):
                    continue

                center = neighbor.center_position()
                g_cost = current.g_cost + _heuristic_cost(current.pos, center, settings)
                if neighbor.area_type in settings.cost_modifiers:
                    g_cost *= settings.cost_modifiers[neighbor.area_type]
                h_cost = _heuristic_cost(center, end, settings)
                node = _PathNode(neighbor_id, center, g_cost, h_cost, g_cost + h_cost, current)
                heapq.heappush(open_set, (node.f_cost, next(counter), node))
                seen.add(neighbor_id)

        logger.info("[NAVMESH PATHFINDER] no path found")
        return []


def load_navmesh(path: str | PathLike[str]) -> NavMesh:
    """Read a mesh from a JSON file."""
    with open(path, encoding="utf-8") as handle:
        data = json.load(handle)
    mesh = NavMesh.from_dict(data)
    logger.info("[NAVMESH LOADER] navmesh loaded with %d polygons", len(mesh.polygons))
    return mesh


def interpolate_path(path: Iterable[Position], max_segment: float) -> list[Position]:
    """Insert evenly spaced points so segments are about max_segment long."""
    points = list(path)
    if not points:
        return []
    refined: list[Position] = []
    for a, b in zip(points, points[1:]):
        refined.append(a)
        steps = int(calculate_distance(a, b) / max_segment)
        refined.extend(a.lerp_to(b, s / steps) for s in range(1, steps))
    refined.append(points[-1])
    return refined