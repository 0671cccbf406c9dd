"""The registry of known skills."""

from __future__ import annotations

import logging

from apeiron.consts import (
    EffectType,
    MovementStyle,
    SkillAction,
    SkillPushType,
    SkillType,
)
from apeiron.model import (
    AOEConfig,
    DOTConfig,
    ImpactEffect,
    MovementConfig,
    Skill,
    SkillTags,
)

logger = logging.getLogger(__name__)

SKILL_REGISTRY: dict[str, Skill] = {}

_CONTROL_RESISTANCE = "ControlResistance"


def _impact(posture: float, stat: str, multiplier: float) -> ImpactEffect:
    return ImpactEffect(
        posture_damage=posture,
        scaling_stat=stat,
        scaling_multiplier=multiplier,
        defense_stat=_CONTROL_RESISTANCE,
    )


def _build_skills() -> list[Skill]:
    return [
        Skill(
            id="SoldierSlash",
            name="SoldierSlash",
            tags=SkillTags("Burst"),
            action=SkillAction.BASIC,
            skill_type=SkillType.PHYSICAL,
            initial_multiplier=1.0,
            range=2.2,
            cooldown_sec=0.4,
            wind_up_time=0.1,
            cast_time=0.4,
            recovery_time=0.4,
            interruptible=True,
            impact=_impact(5, "Strength", 0.05),
            score_base=1.0,
        ),
        Skill(
            id="SoldierShieldBash",
            name="SoldierShieldBash",
            tags=SkillTags("Interrupt", "Burst"),
            action=SkillAction.SKILL1,
            skill_type=SkillType.PHYSICAL,
            initial_multiplier=0.8,
            range=2.0,
            cooldown_sec=3.0,
            wind_up_time=0.2,
            cast_time=0.2,
            recovery_time=0.2,
            interruptible=True,
            impact=_impact(10, "Strength", 0.1),
            score_base=2.0,
        ),
        Skill(
            id="SoldierGroundSlam",
            name="SoldierGroundSlam",
            tags=SkillTags("AOE", "Burst"),
            action=SkillAction.SKILL2,
            skill_type=SkillType.PHYSICAL,
            initial_multiplier=1.5,
            range=3.0,
            cooldown_sec=6.0,
            wind_up_time=0.4,
            cast_time=0.4,
            recovery_time=0.3,
            interruptible=False,
            aoe=AOEConfig(radius=3.0, shape="Circle"),
            impact=_impact(15, "Strength", 0.15),
            score_base=3.5,
        ),
        Skill(
            id="SoldierLongStep",
            name="SoldierLongStep",
            tags=SkillTags("Rush", "Burst"),
            action=SkillAction.SKILL3,
            skill_type=SkillType.PHYSICAL,
            initial_multiplier=1.3,
            range=3.0,
            cooldown_sec=4.0,
            wind_up_time=0.2,
            cast_time=0.3,
            recovery_time=0.2,
            interruptible=True,
            impact=_impact(6, "Strength", 0.1),
            score_base=5.0,
        ),
        Skill(
            id="SoldierShieldRush",
            name="SoldierShieldRush",
            tags=SkillTags("Rush", "Burst"),
            action=SkillAction.SKILL4,
            skill_type=SkillType.PHYSICAL,
            initial_multiplier=1.2,
            range=2.5,
            cooldown_sec=5.0,
            wind_up_time=0.3,
            cast_time=0.3,
            recovery_time=0.2,
            interruptible=False,
            impact=_impact(12, "Strength", 0.1),
            score_base=3.0,
            movement=MovementConfig(
                speed=4.0,
                duration_sec=0.3,
                max_distance=2.5,
                direction_lock=True,
                target_lock=False,
                interruptible=False,
                push_type=SkillPushType.ON_IMPACT,
                style=SkillPushType.MOVE_TO_IMPACT,
            ),
        ),
        Skill(
            id="SoldierRiposteStance",
            name="SoldierRiposteStance",
            tags=SkillTags("Utility"),
            action=SkillAction.COMBO1,
            skill_type=SkillType.PHYSICAL,
            initial_multiplier=1.0,
            range=1.5,
            cooldown_sec=8.0,
            wind_up_time=0.0,
            cast_time=3.0,
            recovery_time=0.5,
            interruptible=False,
            impact=_impact(15, "Strength", 0.2),
            score_base=4.0,
        ),
        Skill(
            id="Bite",
            name="Bite",
            tags=SkillTags("Interrupt"),
            action=SkillAction.BASIC,
            skill_type=SkillType.PHYSICAL,
            initial_multiplier=0.8,
            range=2.2,
            cooldown_sec=1.1,
            wind_up_time=1.0,
            cast_time=0.4,
            recovery_time=1.1,
            interruptible=True,
            impact=_impact(4, "Strength", 0.05),
            score_base=1.0,
            stamina_damage=5,
        ),
        Skill(
            id="Lacerate",
            name="Lacerate",
            tags=SkillTags("DOT", "Burst"),
            action=SkillAction.SKILL1,
            skill_type=SkillType.PHYSICAL,
            initial_multiplier=1.0,
            range=2.5,
            cooldown_sec=6.0,
            wind_up_time=0.6,
            cast_time=0.5,
            recovery_time=1.4,
            interruptible=True,
            has_dot=True,
            dot=DOTConfig(
                duration_sec=6,
                tick_sec=2,
                tick_power=3,
                effect_type=EffectType.POISON,
            ),
            impact=_impact(8, "Dexterity", 0.1),
            score_base=5.0,
            stamina_damage=10,
        ),
        Skill(
            id="Leap",
            name="Leap",
            tags=SkillTags("Rush", "Burst"),
            action=SkillAction.SKILL2,
            skill_type=SkillType.PHYSICAL,
            initial_multiplier=1.8,
            range=3.0,
            cooldown_sec=6.0,
            wind_up_time=0.3,
            cast_time=2,
            recovery_time=0.3,
            interruptible=False,
            impact=_impact(12, "Strength", 0.15),
            score_base=4.5,
            stamina_damage=15,
            movement=MovementConfig(
                speed=8.0,
                duration_sec=2,
                max_distance=3.0,
                direction_lock=True,
                micro_homing=True,
                target_lock=True,
                interruptible=False,
                extra_distance=0,
                push_type=SkillPushType.ON_END,
                style=MovementStyle.MOVE_THROUGH,
            ),
        ),
    ]


def init_skills() -> dict[str, Skill]:
    """Fill the skill registry with the built-in skills and return it."""
    logger.info("[Skill Registry] initializing skills...")
    SKILL_REGISTRY.update((skill.id, skill) for skill in _build_skills())
    logger.info("[Skill Registry] finishing system...")
    return SKILL_REGISTRY