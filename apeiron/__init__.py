"""Game-world building blocks: geometry, navigation meshes, physics, skills, combat and movement."""

__version__ = "0.1.0"

__all__ = [
    "combat",
    "consts",
    "handle",
    "model",
    "movement",
    "navmesh",
    "physics",
    "position",
    "skills",
    "spatial_index",
    "steering",
]