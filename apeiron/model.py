"""Combat entities, skill definitions and the runtime state of skills."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Protocol

from apeiron.consts import (
    ActiveEffect,
    EffectType,
    MovementStyle,
    SkillAction,
    SkillPushType,
    SkillTag,
    SkillType,
)
from apeiron.handle import EntityHandle
from apeiron.position import Position, Vector2D, Vector3D, calculate_distance_2d

_ARRIVAL_TOLERANCE = 0.1


class Movable(Protocol):
    """Anything the physics and movement code can move."""

    position: Position
    facing_direction: Vector2D
    hitbox_radius: float
    handle: EntityHandle


class Targetable(Protocol):
    """Anything that can be hit by a skill."""

    position: Position
    last_position: Position
    facing_direction: Vector2D
    hitbox_radius: float
    desired_buffer_distance: float
    handle: EntityHandle
    faction: str
    combat_drive: CombatDrive | None

    def is_alive(self) -> bool: ...

    def is_creature(self) -> bool: ...

    def is_hostile(self) -> bool: ...

    def is_pvp_enabled(self) -> bool: ...

    def is_hungry(self) -> bool: ...

    def is_blocking(self) -> bool: ...

    def is_invulnerable_now(self) -> bool: ...

    def is_in_parry_window(self) -> bool: ...

    def is_casting(self) -> bool: ...

    def has_tag(self, tag: str) -> bool: ...

    def take_damage(self, amount: int) -> None: ...

    def apply_effect(self, effect: ActiveEffect) -> None: ...

    def apply_posture_damage(self, amount: float) -> None: ...


class Attacker(Targetable, Protocol):
    """A target that can also use skills."""

    strength: int
    dexterity: int
    intelligence: int
    focus: int
    primary_type: str
    skill_movement_state: SkillMovementState | None


@dataclass
class CombatDrive:
    """How strongly a creature is driven to fight, with its components."""

    value: float = 0.0
    last_updated: datetime | None = None
    rage: float = 0.0
    caution: float = 0.0
    vengeance: float = 0.0
    termination: float = 0.0
    counter: float = 0.0


@dataclass
class CombatEvent:
    """An offensive or defensive action recorded during combat."""

    source_handle: EntityHandle = field(default_factory=EntityHandle)
    target_handle: EntityHandle = field(default_factory=EntityHandle)
    behavior_type: str = ""
    timestamp: datetime | None = None
    damage: float = 0.0
    expected_impact: datetime | None = None


@dataclass
class Creature:
    """Static description of a creature and where it spawns."""

    name: str = ""
    max_hp: int = 0
    spawn_point: Position = field(default_factory=Position)
    spawn_radius: float = 0.0
    respawn_time_sec: int = 0
    owner_player_id: str = ""
    faction: str = ""


@dataclass
class Player:
    """Basic player record."""

    id: str = ""
    name: str = ""
    max_hp: int = 0
    strength: int = 0
    dexterity: int = 0
    intelligence: int = 0
    focus: int = 0
    hostile: bool = False
    alive: bool = False
    faction: str = ""


@dataclass
class MovementConfig:
    """How a skill moves its user (leaps, rushes)."""

    speed: float = 0.0
    duration_sec: float = 0.0
    max_distance: float = 0.0
    extra_distance: float = 0.0
    direction_lock: bool = False
    micro_homing: bool = False
    target_lock: bool = False
    interruptible: bool = False
    push_type: SkillPushType | None = None
    style: MovementStyle | SkillPushType | None = None


@dataclass
class DOTConfig:
    duration_sec: int = 0
    tick_sec: int = 0
    tick_power: int = 0
    effect_type: EffectType = EffectType.BLEED


@dataclass
class AOEConfig:
    radius: float = 0.0
    shape: str = ""
    angle: float = 0.0


@dataclass
class ProjectileConfig:
    speed: float = 0.0
    has_arc: bool = False
    life_time_sec: int = 0


@dataclass
class TeleportConfig:
    to_back_of_target: bool = False
    distance_offset: float = 0.0


@dataclass
class BuffConfig:
    name: str = ""
    duration_sec: float = 0.0
    stat_modifiers: dict[str, float] = field(default_factory=dict)
    resistances: dict[str, float] = field(default_factory=dict)
    is_stackable: bool = False
    target_self: bool = False
    max_stacks: int = 0
    visual_effect_id: str = ""


@dataclass
class DebuffConfig:
    name: str = ""
    duration_sec: float = 0.0
    stat_modifiers: dict[str, float] = field(default_factory=dict)
    resistances: dict[str, float] = field(default_factory=dict)
    damage_per_sec: float = 0.0
    is_stackable: bool = False
    max_stacks: int = 0
    visual_effect_id: str = ""


@dataclass
class ImpactEffect:
    """Posture damage of a hit and the stat it scales with."""

    posture_damage: float = 0.0
    scaling_stat: str = ""
    scaling_multiplier: float = 0.0
    defense_stat: str = ""


@dataclass
class SkillCondition:
    required_states: list[str] = field(default_factory=list)
    facing_requirement: str = ""
    target_must_be_alive: bool = False
    only_if_parry_success: bool = False


@dataclass
class SkillResult:
    """Outcome of using a skill."""

    success: bool = False
    was_on_cooldown: bool = False
    damage_dealt: int = 0
    target_died: bool = False
    posture_broken: bool = False
    effect_applied: bool = False
    critical_hit: bool = False
    blocked: bool = False
    parried: bool = False
    interrupted: bool = False
    was_aoe_hit: bool = False


class SkillTags:
    """An immutable set of tag names attached to a skill."""

    def __init__(self, *args: str) -> None:
        self._values = frozenset(str(tag) for tag in args)

    def has(self, tag: SkillTag | str) -> bool:
        return str(tag) in self._values

    def __iter__(self):
        return iter(sorted(self._values))

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"SkillTags({', '.join(repr(t) for t in self)})"


@dataclass
class Skill:
    """Definition of a skill."""

    id: str = ""
    name: str = ""
    action: SkillAction | None = None
    skill_type: SkillType | None = None
    range: float = 0.0
    cooldown_sec: float = 0.0
    initial_multiplier: float = 0.0

    has_dot: bool = False
    dot: DOTConfig | None = None
    aoe: AOEConfig | None = None
    projectile: ProjectileConfig | None = None
    teleport: TeleportConfig | None = None
    impact: ImpactEffect | None = None
    conditions: SkillCondition | None = None

    target_lock: bool = False
    ground_targeted: bool = False
    rotation_lock: bool = False
    cast_time: float = 0.0
    wind_up_time: float = 0.0
    recovery_time: float = 0.0
    interruptible: bool = False

    score_base: float = 0.0

    movement: MovementConfig | None = None

    buff: BuffConfig | None = None
    debuff: DebuffConfig | None = None

    stamina_damage: float = 0.0
    can_cast_while_blocking: bool = False

    tags: SkillTags | None = None


@dataclass
class SkillState:
    """Runtime state of one skill on one entity."""

    skill: Skill | None = None
    started_at: datetime = datetime.min
    wind_up_until: datetime = datetime.min
    cast_until: datetime = datetime.min
    recovery_until: datetime = datetime.min
    cooldown_until: datetime = datetime.min
    in_use: bool = False

    charges_left: int = 0
    last_used_at: datetime = datetime.min

    effect_applied: bool = False
    wind_up_fired: bool = False
    cast_fired: bool = False
    recovery_fired: bool = False
    next_queued_skill: Skill | None = None
    was_interrupted: bool = False
    applied_buff_id: str = ""

    has_aggressive_intent_registered: bool = False

    def can_be_cancelled(self, now: datetime | None = None) -> bool:
        """Whether the running skill may be cancelled at this moment."""
        if self.skill is None or not self.in_use or not self.skill.interruptible:
            return False
        if now is None:
            now = datetime.now()
        if now < self.wind_up_until:
            return True
        if self.wind_up_until < now < self.cast_until:
            return self.skill.interruptible
        if self.cast_until < now < self.recovery_until:
            return self.recovery_fired
        return False


@dataclass
class SkillMovementState:
    """Progress of a moving skill such as a leap or a rush."""

    active: bool = False
    start_time: datetime = datetime.min
    duration: timedelta = timedelta()
    speed: float = 0.0
    direction: Vector3D = field(default_factory=Vector3D)
    target_pos: Position = field(default_factory=Position)
    config: MovementConfig | None = None
    damage_applied: bool = False
    skill: Skill | None = None

    def is_complete(self, now: datetime, current_pos: Position) -> bool:
        """True once inactive, arrived at the target, or out of time."""
        if not self.active:
            return True
        if calculate_distance_2d(current_pos, self.target_pos) < _ARRIVAL_TOLERANCE:
            return True
        return now - self.start_time >= self.duration