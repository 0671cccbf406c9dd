# apeiron

A small library for the server side of a role-playing game world. It has no
dependencies beyond the standard library.

## Modules

- `apeiron.position`: the frozen dataclasses `Position`, `Vector2D` (X-Z plane) and
  `Vector3D`, plus `calculate_distance`, `calculate_distance_2d`, `lerp_vector2d`,
  `rotate_vector2d`, `vector2d_from_to` (a unit direction) and `vector3d_from_to`.
- `apeiron.handle`: `EntityHandle` (an id and a respawn generation, with `is_valid()` and
  `is_empty()`) and `new_uuid()`.
- `apeiron.consts`: enums for effects (`EffectType`, with `is_dot()`, `is_debuff()`,
  `visual_effect_key()` and more), AI states, the `CombatState` flags, animations, combat
  actions, movement plan types, skill tags and actions, damage types, stances, emotes and
  needs, together with the `ActiveEffect` and `Need` records.
- `apeiron.model`: `Skill` and its configuration records (`MovementConfig`, `DOTConfig`,
  `AOEConfig`, `ProjectileConfig`, `ImpactEffect`, ...), `SkillTags`, `SkillState`
  (`can_be_cancelled(now)`), `SkillMovementState` (`is_complete(now, current_pos)`),
  `SkillResult`, `CombatDrive`, `CombatEvent`, `Creature`, `Player`, and the `Movable`,
  `Targetable` and `Attacker` protocols that your own entity classes implement.
- `apeiron.skills`: `init_skills()`, which fills `SKILL_REGISTRY` with the built-in skills
  (`SoldierSlash`, `Bite`, `Lacerate`, `Leap`, ...) and returns it.
- `apeiron.navmesh`: `NavMesh` built with `NavMesh.from_dict` or `load_navmesh(path)` from
  JSON, with `is_walkable`, `bounding_box`, `find_closest_polygon`, `get_escape_point`,
  `get_random_walkable_point` and A* `find_path`, which takes optional `PathSettings`
  (slope limit, avoided areas, cost modifiers, height checks). Also `point_in_polygon_xz`
  and `interpolate_path`.
- `apeiron.spatial_index`: `SimpleSpatialIndex`, which answers radius queries over living
  entities by their last position.
- `apeiron.physics`: `apply_physics` (one movement step; returns `(blocked, velocity)`),
  `check_collision`, `push_target_from_wall` (returns the new position or `None`),
  `apply_gravity`, and the `StaggerData` and `InvincibilityData` records.
- `apeiron.combat`: `use_skill`, `apply_direct_damage` (invulnerability, parry and
  directional blocking with doubled posture damage), `apply_aoe_damage`,
  `simulate_projectile` (hits after the travel time on a `threading.Timer`),
  `apply_skill_movement` and `update_skill_movement` for leaps and rushes, `is_behind`, and
  the formulas `calculate_physical_damage`, `calculate_magic_damage`,
  `calculate_poison_damage`, `calculate_burn_damage`, `calculate_healing` and
  `calculate_effective_cc_duration`.
- `apeiron.movement`: `MovementController`, which follows a path found on a `NavMesh`,
  sidesteps once when blocked, repaths after a cooldown and runs impulse moves; plus
  `MovementPlan` and `new_movement_plan`.
- `apeiron.steering`: `seek`, `flee`, `arrive`, `avoid_obstacle` and `wander`, returning a
  `SteeringOutput` that `apply_limits` can clamp.

## Installing

```
pip install .
```

For the tests:

```
pip install .[test]
pytest
```

## Example

```python
from apeiron.navmesh import NavMesh
from apeiron.position import Position, calculate_distance_2d

mesh = NavMesh.from_dict({
    "polygons": [
        {"id": 1, "vertices": [{"x": 0, "z": 0}, {"x": 10, "z": 0},
                               {"x": 10, "z": 10}, {"x": 0, "z": 10}],
         "neighbors": [2]},
        {"id": 2, "vertices": [{"x": 10, "z": 0}, {"x": 20, "z": 0},
                               {"x": 20, "z": 10}, {"x": 10, "z": 10}],
         "neighbors": [1]},
    ]
})

start, end = Position(1, 0, 1), Position(18, 0, 5)
path = mesh.find_path(start, end)
print(path)  # start, the centre of polygon 2, then end
print(calculate_distance_2d(start, end))
```

`NavMesh.find_path` returns the waypoints from the start, through the centres of the
polygons crossed, to the end. It returns an empty list when either point lies off the mesh
or when no route exists.

## What it does not do

This is a library of building blocks. It has no server, no command-line program and no
world loop that ticks entities. It ships no creature or player classes that implement the
`Targetable` and `Attacker` protocols, no spawning or zones, and no storage.