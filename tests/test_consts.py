from datetime import timedelta

import pytest

from apeiron.consts import (
    ActiveEffect,
    AIState,
    CombatState,
    EffectType,
    MovementPlanType,
    Need,
    NeedType,
    SkillAction,
    SkillPushType,
)


def test_dot_effects():
    assert EffectType("Bleed").is_dot()
    assert EffectType("Poison").is_dot()
    assert EffectType("Burn").is_dot()
    assert not EffectType("Freeze").is_dot()
    assert not EffectType("Regen").is_dot()
    dots = {e for e in EffectType if e.is_dot()}
    assert dots == {EffectType.BLEED, EffectType.POISON, EffectType.BURN}


def test_debuff_effects():
    for name in ("Stun", "Slow", "Interrupt", "Stagger", "Knockback", "Fear", "Freeze"):
        assert EffectType(name).is_debuff()
    assert not EffectType("Bleed").is_debuff()
    assert not EffectType("Shield").is_debuff()
    debuffs = {e for e in EffectType if e.is_debuff()}
    assert debuffs == {
        EffectType.STUN,
        EffectType.SLOW,
        EffectType.INTERRUPT,
        EffectType.STAGGER,
        EffectType.KNOCKBACK,
        EffectType.FEAR,
        EffectType.FREEZE,
    }


def test_buff_categories():
    assert EffectType.BERSERK.is_aggressive_buff()
    assert EffectType.INSANITY.is_aggressive_buff()
    assert not EffectType.SHIELD.is_aggressive_buff()
    assert EffectType.SHIELD.is_defensive_buff()
    assert EffectType.REGEN.is_defensive_buff()
    assert not EffectType.FOCUS.is_defensive_buff()


@pytest.mark.parametrize(
    "effect, key",
    [
        (EffectType.BLEED, "bleed_overlay"),
        (EffectType.STUN, "stun_stars_above_head"),
        (EffectType.BERSERK, "red_aura_pulse"),
        (EffectType.REGEN, "regen_green_particles"),
    ],
)
def test_visual_effect_keys(effect, key):
    assert effect.visual_effect_key() == key


def test_every_effect_has_a_distinct_visual_key():
    assert EffectType("Fear").visual_effect_key() == "fear_dark_aura"
    assert EffectType("Shield").visual_effect_key() == "shield_barrier_effect"
    keys = [e.visual_effect_key() for e in EffectType]
    assert all(keys)
    assert len(set(keys)) == len(keys)


def test_effect_type_parses_from_value():
    assert EffectType("Poison") is EffectType.POISON
    with pytest.raises(ValueError):
        EffectType("Lightning")


def test_combat_state_names():
    assert str(CombatState(0)) == "Idle"
    assert str(CombatState(1 << 12)) == "Aggressive"
    assert str(CombatState(1 << 15)) == "Raging"
    assert str(CombatState(1 << 11)) == "Fleeing"
    assert str(CombatState(1 << 0)) == "Unknown"
    assert CombatState(1 << 13).__str__() == "Defensive"
    assert CombatState(1 << 14).__str__() == "Strategic"


def test_combat_state_flags_combine():
    state = CombatState((1 << 0) | (1 << 2))
    assert state == CombatState.ATTACKING | CombatState.BLOCKING
    assert CombatState(1 << 2) in state
    assert CombatState(1 << 1) not in state
    assert str(state) == "Unknown"
    assert CombatState(1 << 17) is CombatState.CASTING


def test_string_enums_render_as_values():
    assert str(AIState("ReturningHome")) == "ReturningHome"
    assert str(SkillAction("TeamSkill1")) == "TeamSkill1"
    assert SkillPushType("MoveToImpact") is SkillPushType.MOVE_TO_IMPACT
    assert MovementPlanType("") is MovementPlanType.NONE


def test_need_counter_aliases_rage():
    assert NeedType.COUNTER is NeedType.RAGE
    assert NeedType("Rage") is NeedType.RAGE


def test_active_effect_defaults():
    effect = ActiveEffect(EffectType.BURN)
    assert effect.duration == timedelta()
    assert effect.start_time is None
    assert not effect.is_dot and not effect.is_cc
    assert effect.elapsed == effect.last_tick_elapsed == 0


def test_need_record():
    need = Need(NeedType.HUNGER, value=10.0, low_threshold=20.0, threshold=80.0)
    assert need.type is NeedType.HUNGER
    assert need.value < need.low_threshold < need.threshold