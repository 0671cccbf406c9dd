"""Shared game enumerations and effect records."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import Enum, IntFlag


class _StrEnum(str, Enum):
    def __str__(self) -> str:
        return self.value


class EffectType(_StrEnum):
    # Damage over time
    BLEED = "Bleed"
    POISON = "Poison"
    BURN = "Burn"
    FREEZE = "Freeze"
    # Crowd control
    SLOW = "Slow"
    STUN = "Stun"
    INTERRUPT = "Interrupt"
    STAGGER = "Stagger"
    KNOCKBACK = "Knockback"
    FEAR = "Fear"
    # Buffs
    BERSERK = "Berserk"
    FOCUS = "Focus"
    INSANITY = "Insanity"
    SHIELD = "Shield"
    REGEN = "Regen"

    def is_aggressive_buff(self) -> bool:
        return self in (EffectType.BERSERK, EffectType.INSANITY)

    def is_defensive_buff(self) -> bool:
        return self in (EffectType.SHIELD, EffectType.REGEN)

    def is_debuff(self) -> bool:
        return self in (
            EffectType.STUN,
            EffectType.SLOW,
            EffectType.INTERRUPT,
            EffectType.STAGGER,
            EffectType.KNOCKBACK,
            EffectType.FEAR,
            EffectType.FREEZE,
        )

    def is_dot(self) -> bool:
        return self in (EffectType.BLEED, EffectType.POISON, EffectType.BURN)

    def visual_effect_key(self) -> str:
        """Key of the visual effect shown for this effect, or an empty string."""
        return _VISUAL_EFFECT_KEYS.get(self, "")


_VISUAL_EFFECT_KEYS = {
    EffectType.BLEED: "bleed_overlay",
    EffectType.POISON: "poison_green_cloud",
    EffectType.BURN: "burning_flames",
    EffectType.FREEZE: "freeze_ice_shards",
    EffectType.SLOW: "slow_blue_glow",
    EffectType.STUN: "stun_stars_above_head",
    EffectType.INTERRUPT: "interrupt_flash",
    EffectType.STAGGER: "stagger_shake",
    EffectType.KNOCKBACK: "knockback_dust",
    EffectType.FEAR: "fear_dark_aura",
    EffectType.BERSERK: "red_aura_pulse",
    EffectType.FOCUS: "focus_glow",
    EffectType.INSANITY: "insanity_distortion",
    EffectType.SHIELD: "shield_barrier_effect",
    EffectType.REGEN: "regen_green_particles",
}


@dataclass
class ActiveEffect:
    """An effect currently applied to an entity."""

    type: EffectType
    start_time: datetime | None = None
    duration: timedelta = timedelta()
    tick_interval: timedelta = timedelta()
    last_tick_time: datetime | None = None
    power: int = 0
    is_dot: bool = False
    is_debuff: bool = False
    is_cc: bool = False
    elapsed: float = 0.0
    last_tick_elapsed: float = 0.0


class AIState(_StrEnum):
    IDLE = "Idle"
    PATROLLING = "Patrolling"
    CHASING = "Chasing"
    FLEEING = "Fleeing"
    DEFENDING = "Defending"
    RETURNING = "ReturningHome"
    STAGGERED = "Staggered"
    AMBUSHING = "Ambushing"
    SUB_STEALTH = "SubStealth"
    STEALTH = "Stealth"
    ALERT = "Alert"
    ATTACK = "Attack"
    COMBAT = "Combat"
    DEAD = "Dead"
    POSTURE_BROKEN = "PostureBroken"
    SEARCH_FOOD = "SearchFood"
    SEARCH_WATER = "SearchWater"
    FEEDING = "Feeding"
    DROWSY = "Drowsy"
    SLEEPING = "Sleeping"
    SEEKING_SAFE_PLACE = "SeekingSafePlace"


class CombatState(IntFlag):
    IDLE = 0
    ATTACKING = 1 << 0
    PARRYING = 1 << 1
    BLOCKING = 1 << 2
    POSTURE_BROKEN = 1 << 3
    STAGGERED = 1 << 4
    EXECUTING_SKILL = 1 << 5
    RECOVERING = 1 << 6
    COMBO = 1 << 7
    TEAM_SKILL = 1 << 8
    DEAD = 1 << 9
    DODGING = 1 << 10
    FLEEING = 1 << 11
    AGGRESSIVE = 1 << 12
    DEFENSIVE = 1 << 13
    STRATEGIC = 1 << 14
    RAGING = 1 << 15
    CAUTIOUS = 1 << 16
    CASTING = 1 << 17
    MOVING = 1 << 18
    PLANNING = 1 << 19

    def __str__(self) -> str:
        return _COMBAT_STATE_NAMES.get(int(self), "Unknown")


_COMBAT_STATE_NAMES = {
    int(CombatState.IDLE): "Idle",
    int(CombatState.AGGRESSIVE): "Aggressive",
    int(CombatState.DEFENSIVE): "Defensive",
    int(CombatState.STRATEGIC): "Strategic",
    int(CombatState.FLEEING): "Fleeing",
    int(CombatState.RAGING): "Raging",
}


class AnimationState(_StrEnum):
    IDLE = "Idle"
    WALK = "Walk"
    RUN = "Run"
    CROUCH_WALK = "CrouchWalk"
    COMBAT_READY = "CombatReady"
    SNIFF = "Sniff"
    PARRY = "Parry"
    BLOCK = "Block"
    JUMP = "Jump"
    ATTACK = "Attack"
    SLEEP = "Sleep"
    DIE = "Die"
    VOCALIZE = "Vocalize"
    PLAY = "Play"
    THREAT = "Threat"
    CURIOUS = "Curious"
    LOOK_AROUND = "LookAround"
    SCRATCH = "Scratch"
    WAKE = "Wake"
    RECOVERY = "Recovery"
    WINDUP = "Windup"
    CAST = "Cast"


class CombatAction(_StrEnum):
    BLOCK_SUCCESS = "BlockSuccess"
    PARRY_SUCCESS = "ParrySuccess"
    DODGE_SUCCESS = "DodgeSuccess"
    MICRO_RETREAT = "MicroRetreat"
    CIRCLE_AROUND = "CircleAround"
    APPROACH = "Approach"
    CHASE = "Chase"
    ATTACK_SUCCESS = "AttackSuccess"
    ATTACK_MISSED = "AttackMissed"
    ATTACK_PREPARED = "AttackPrepared"
    SKILL_INTERRUPTED = "SkillInterrupted"
    COUNTER = "Counter"
    TOOK_DAMAGE = "TookDamage"


class MovementPlanType(_StrEnum):
    NONE = ""
    APPROACH = "Approach"
    CHASE = "Chase"
    MICRO_RETREAT = "MicroRetreat"
    CIRCLE = "Circle"
    COUNTER = "Counter"


class SkillTag(_StrEnum):
    BURST = "Burst"
    INTERRUPT = "Interrupt"
    RUSH = "Rush"
    AOE = "AOE"
    DOT = "DOT"
    UTILITY = "Utility"


class SkillAction(_StrEnum):
    BASIC = "Basic"
    SKILL1 = "Skill1"
    SKILL2 = "Skill2"
    SKILL3 = "Skill3"
    SKILL4 = "Skill4"
    SKILL5 = "Skill5"
    COMBO1 = "Combo1"
    COMBO2 = "Combo2"
    COMBO3 = "Combo3"
    TEAM_SKILL1 = "TeamSkill1"
    TEAM_SKILL2 = "TeamSkill2"
    TEAM_SKILL3 = "TeamSkill3"


class DamageType(_StrEnum):
    PHYSICAL = "Physical"
    MAGIC = "Magic"
    FIRE = "Fire"
    ICE = "Ice"
    POISON = "Poison"


class StanceState(_StrEnum):
    AGGRESSIVE = "Aggressive"
    DEFENSIVE = "Defensive"
    NEUTRAL = "Neutral"


class EmoteState(_StrEnum):
    GROWL = "Growl"
    SNARL = "Snarl"
    NONE = "None"


class NeedType(_StrEnum):
    HUNGER = "Hunger"
    THIRST = "Thirst"
    SLEEP = "Sleep"
    SOCIAL = "Social"
    FUCK = "Fuck"
    KILL = "Kill"
    DRINK = "Drink"
    ADVANCE = "Advance"
    GUARD = "Guard"
    RETREAT = "Retreat"
    PROVOKE = "Provoke"
    RECOVER = "Recover"
    PLAN = "Plan"
    FAKE = "Fake"
    RAGE = "Rage"
    COUNTER = "Rage"  # shares its value with RAGE, so it is an alias


@dataclass
class Need:
    """A creature need; it becomes urgent once the value reaches the threshold."""

    type: NeedType
    value: float = 0.0
    low_threshold: float = 0.0
    threshold: float = 0.0


class SkillPushType(_StrEnum):
    NONE = "None"
    ON_IMPACT = "OnImpact"
    MOVE_TO_IMPACT = "MoveToImpact"
    ON_END = "OnEnd"


class SkillType(_StrEnum):
    PHYSICAL = "Physical"
    MAGIC = "Magic"
    UTILITY = "Utility"
    EFFECT = "Effect"


class MovementStyle(_StrEnum):
    MOVE_TO_FRONT = "MoveToFront"
    MOVE_THROUGH = "MoveThrough"
    MOVE_TO_BACK = "MoveToBack"