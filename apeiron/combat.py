"""Skill execution: damage, blocking, area hits, projectiles and leaps."""

from __future__ import annotations

import logging
import math
import threading
from datetime import datetime, timedelta
from typing import Iterable

from apeiron.consts import ActiveEffect
from apeiron.model import (
    Attacker,
    Movable,
    Skill,
    SkillMovementState,
    SkillResult,
    Targetable,
)
from apeiron.position import (
    Position,
    Vector2D,
    calculate_distance,
    calculate_distance_2d,
    vector2d_from_to,
    vector3d_from_to,
)

logger = logging.getLogger(__name__)

_FACING_THRESHOLD = 0.5
_MIN_CC_DURATION = 0.1
_SCALING_STATS = {
    "Strength": "strength",
    "Dexterity": "dexterity",
    "Intelligence": "intelligence",
    "Focus": "focus",
}


def _round_half_away(value: float) -> int:
    """Round to the nearest integer, halves away from zero."""
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


def use_skill(
    attacker: Attacker,
    target: Targetable | None,
    target_pos: Position,
    skill: Skill,
    creatures: Iterable[Targetable],
    players: Iterable[Targetable],
) -> SkillResult:
    """Use a skill: a leap, an area hit, a projectile or a direct hit."""
    result = SkillResult()

    if not skill.ground_targeted and target is not None:
        attacker.facing_direction = Vector2D(
            target.position.x - attacker.position.x,
            target.position.z - attacker.position.z,
        ).normalize()

    if skill.movement is not None:
        if target is not None:
            attacker.skill_movement_state = apply_skill_movement(attacker, target, skill)
        else:
            logger.warning(
                "[SkillExecutor] [%s] skill %s needs a target to move, but has none",
                attacker.handle.id, skill.name,
            )
    elif skill.ground_targeted and skill.aoe is not None:
        apply_aoe_damage(attacker, target_pos, skill, creatures, players)
        result.success = True
    elif skill.projectile is not None:
        simulate_projectile(attacker, target, target_pos, skill)
        result.success = True
    else:
        result = apply_direct_damage(attacker, target, skill)

    return result


def apply_skill_movement(
    attacker: Attacker, target: Targetable, skill: Skill
) -> SkillMovementState:
    """Start the movement of a skill towards the target and store it on the attacker."""
    config = skill.movement
    start = attacker.position
    direction = vector3d_from_to(start, target.position).normalize()

    if config.extra_distance != 0:
        target_pos = start.add_vector3d(direction.scale(config.extra_distance))
    else:
        distance = calculate_distance_2d(start, target.position)
        desired = (
            distance
            + attacker.hitbox_radius
            + target.hitbox_radius
            + target.desired_buffer_distance
        )
        desired = min(desired, config.max_distance)
        target_pos = start.add_vector3d(direction.scale(desired))

    final_dir = vector3d_from_to(start, target_pos).normalize()
    logger.debug(
        "[LEAP] [%s] direction=(%.2f,%.2f,%.2f) destination=%s",
        attacker.handle.id, final_dir.x, final_dir.y, final_dir.z, target_pos,
    )

    state = SkillMovementState(
        active=True,
        start_time=datetime.now(),
        duration=timedelta(seconds=config.duration_sec),
        speed=config.speed,
        direction=final_dir,
        target_pos=target_pos,
        config=config,
        skill=skill,
    )
    attacker.skill_movement_state = state
    return state


def update_skill_movement(
    mover: Attacker,
    state: SkillMovementState,
    target: Targetable,
    delta_time: float,
) -> bool:
    """Advance a skill movement by one step; True once it is complete."""
    current = mover.position
    remaining = calculate_distance_2d(current, state.target_pos)
    move_dist = min(state.speed * delta_time, remaining)
    new_pos = current.add_vector3d(state.direction.scale(move_dist))
    mover.position = new_pos

    real_dist = calculate_distance_2d(new_pos, target.position)
    logger.debug("[LEAP-REALDIST] distance after advance: %.2f", real_dist)

    if not state.damage_applied and real_dist <= state.config.max_distance:
        apply_direct_damage(mover, target, state.skill)
        state.damage_applied = True

    return state.is_complete(datetime.now(), new_pos)


def apply_direct_damage(
    attacker: Attacker, target: Targetable | None, skill: Skill
) -> SkillResult:
    """Hit the target directly, taking invulnerability, parry and block into account."""
    result = SkillResult()

    if target is None or _should_skip_target(attacker, target):
        return result

    if target.is_invulnerable_now():
        logger.debug(
            "[SkillExecutor] [%s] invulnerable, damage from [%s] avoided",
            target.handle.id, attacker.handle.id,
        )
        return result

    attacker.facing_direction = vector2d_from_to(attacker.position, target.position)

    damage = _calculate_damage_generic(attacker, target, skill.initial_multiplier)

    if target.is_blocking():
        attack_dir = vector2d_from_to(target.position, attacker.position)
        if target.facing_direction.dot(attack_dir) > _FACING_THRESHOLD:
            if target.is_in_parry_window():
                logger.debug(
                    "[PARRY] [%s] parried [%s]", target.handle.id, attacker.handle.id
                )
                return result

            logger.debug(
                "[BLOCK] [%s] blocked attack from [%s]",
                target.handle.id, attacker.handle.id,
            )
            if skill.impact is not None and skill.impact.posture_damage > 0:
                posture = skill.impact.posture_damage + _posture_scaling(attacker, skill)
                target.apply_posture_damage(posture * 2)
            return result

        logger.debug(
            "[BLOCK-FAILED] [%s] blocked in the wrong direction", target.handle.id
        )

    target.take_damage(damage)
    result.target_died = not target.is_alive()

    if skill.impact is not None and skill.impact.posture_damage > 0:
        posture = skill.impact.posture_damage + _posture_scaling(attacker, skill)
        target.apply_posture_damage(posture)

    if skill.has_dot and skill.dot is not None:
        ticks = int(skill.dot.duration_sec / skill.dot.tick_sec)
        target.apply_effect(
            ActiveEffect(
                type=skill.dot.effect_type,
                start_time=datetime.now(),
                duration=timedelta(seconds=skill.dot.duration_sec),
                tick_interval=timedelta(seconds=skill.dot.tick_sec),
                power=int(damage / ticks),
                is_dot=True,
                is_debuff=True,
            )
        )

    result.success = True
    return result


def apply_aoe_damage(
    attacker: Attacker,
    target_pos: Position,
    skill: Skill,
    creatures: Iterable[Targetable],
    players: Iterable[Targetable],
) -> None:
    """Hit every valid creature and player within the skill's radius of target_pos."""
    for group in (creatures, players):
        for target in group:
            if target.handle == attacker.handle:
                continue
            if _should_skip_target(attacker, target):
                continue
            if calculate_distance(target.position, target_pos) <= skill.aoe.radius:
                apply_direct_damage(attacker, target, skill)


def simulate_projectile(
    attacker: Attacker,
    target: Targetable | None,
    target_pos: Position,
    skill: Skill,
) -> threading.Timer | None:
    """Hit the target once the projectile has had time to fly there.

    Returns the started timer, or None when there is nothing to fire at.
    """
    if target is None or skill.projectile is None:
        logger.warning("[SkillExecutor] invalid projectile. Skill: %s", skill.name)
        return None

    travel_time = calculate_distance(attacker.position, target_pos) / skill.projectile.speed
    delay = int(travel_time * 1000) / 1000

    def arrive() -> None:
        apply_direct_damage(attacker, target, skill)
        logger.debug(
            "[SkillExecutor] projectile %s reached %s after %.2f seconds",
            skill.name, target.handle.id, travel_time,
        )

    timer = threading.Timer(delay, arrive)
    timer.daemon = True
    timer.start()
    return timer


def is_behind(attacker: Attacker, target: Targetable) -> bool:
    """True when the attacker lies within the cone the target faces."""
    to_attacker = Vector2D(
        attacker.position.x - target.position.x,
        attacker.position.z - target.position.z,
    ).normalize()
    return to_attacker.dot(target.facing_direction.normalize()) > _FACING_THRESHOLD


def _should_skip_target(attacker: Attacker | None, target: Targetable | None) -> bool:
    if attacker is None or target is None:
        return True
    if attacker.handle == target.handle:
        return True
    if not target.is_alive():
        return True
    if target.is_hostile():
        return False
    if attacker.is_hungry():
        return False
    return not target.is_pvp_enabled()


def _posture_scaling(attacker: Attacker, skill: Skill) -> float:
    if skill.impact is None:
        return 0.0
    attribute = _SCALING_STATS.get(skill.impact.scaling_stat)
    if attribute is None:
        return 0.0
    return float(getattr(attacker, attribute)) * skill.impact.scaling_multiplier


def _calculate_damage_generic(
    attacker: Attacker, target: Targetable, multiplier: float
) -> int:
    strength = float(attacker.strength)
    if hasattr(target, "strength"):
        defense = float(getattr(target, "physical_defense", 0.0))
        damage = int(strength * multiplier - defense * strength)
    else:
        damage = int(strength * multiplier)
    return max(damage, 1)


def calculate_physical_damage(
    attacker: Attacker, target: Targetable, skill_multiplier: float
) -> int:
    """Strength-based damage with a dexterity bonus, reduced by physical defense."""
    raw = (attacker.strength + attacker.dexterity * 0.1) * skill_multiplier
    defense = float(getattr(target, "physical_defense", 0.0))
    return _round_half_away(max(raw * (1 - defense), 1.0))


def calculate_magic_damage(
    attacker: Attacker, target: Targetable, skill_multiplier: float
) -> int:
    """Intelligence-based damage with a focus bonus, reduced by magic defense."""
    raw = (attacker.intelligence + attacker.focus * 0.05) * skill_multiplier
    defense = float(getattr(target, "magic_defense", 0.0))
    return _round_half_away(max(raw * (1 - defense), 1.0))


def calculate_poison_damage(attacker: Attacker, target: Targetable) -> int:
    """Poison tick damage, reduced by status resistance."""
    raw = 5.0 + attacker.strength * 0.2 + attacker.intelligence * 0.1
    resist = float(getattr(target, "status_resistance", 0.0))
    return _round_half_away(max(raw * (1 - resist), 1.0))


def calculate_burn_damage(attacker: Attacker, target: Targetable) -> int:
    """Burn tick damage, reduced by status resistance."""
    raw = 7.0 + attacker.intelligence * 0.3
    resist = float(getattr(target, "status_resistance", 0.0))
    return _round_half_away(max(raw * (1 - resist), 1.0))


def calculate_healing(attacker: Attacker, skill_multiplier: float) -> int:
    """Healing from focus and intelligence, at least 1."""
    base = float(attacker.focus * 2 + attacker.intelligence)
    return _round_half_away(max(base * skill_multiplier, 1.0))


def calculate_effective_cc_duration(base_duration: float, target: Targetable) -> float:
    """Crowd-control duration after the target's control resistance, at least 0.1s."""
    resist = float(getattr(target, "control_resistance", 0.0))
    return max(base_duration - base_duration * resist, _MIN_CC_DURATION)