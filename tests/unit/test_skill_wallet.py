"""Unit tests: skill progression and wallet."""
from decimal import Decimal

import pytest

from cadence.core.errors import InsufficientFunds, ValidationFailure
from cadence.game.constants import MAX_SKILL_LEVEL, SkillType
from cadence.game.formulas import level_for_xp, xp_required
from cadence.models import Skill, Wallet


def test_xp_curve():
    assert xp_required(0) == 0
    assert xp_required(1) == 100
    assert xp_required(2) == 282
    assert xp_required(4) == 800


def test_add_xp_reaches_level_one():
    skill = Skill(skill_type=SkillType.GUITAR)
    gained = skill.add_xp(100)
    assert gained == 1
    assert skill.current_level == 1
    assert skill.current_xp == 100


def test_add_xp_multiple_levels_at_once():
    skill = Skill(skill_type=SkillType.PIANO)
    skill.add_xp(800)
    assert skill.current_level == 4


def test_level_never_decreases_and_caps():
    skill = Skill(skill_type=SkillType.DRUMS)
    levels = []
    for _ in range(50):
        skill.add_xp(50_000)
        levels.append(skill.current_level)
    assert levels == sorted(levels)
    assert skill.current_level == MAX_SKILL_LEVEL
    assert skill.progress_to_next_level == 1.0
    assert skill.xp_to_next_level == 0


def test_negative_xp_rejected():
    skill = Skill(skill_type=SkillType.BASS)
    with pytest.raises(ValidationFailure):
        skill.add_xp(-1)
    assert skill.current_xp == 0


def test_progress_to_next_level():
    skill = Skill(skill_type=SkillType.GUITAR)
    skill.add_xp(100 + 91)  # level 1 spans 100..282
    assert skill.current_level == 1
    assert skill.progress_to_next_level == pytest.approx(0.5)
    assert skill.xp_to_next_level == 91


def test_level_for_xp_matches_curve():
    for level in (1, 5, 10, 50, 99):
        assert level_for_xp(xp_required(level)) == level
        assert level_for_xp(xp_required(level) - 1) == level - 1


def test_wallet_deduct_and_overdraw():
    wallet = Wallet.starting(500)
    wallet.deduct_expense(200)
    assert wallet.balance == 300
    assert wallet.lifetime_spending == 200

    with pytest.raises(InsufficientFunds) as exc_info:
        wallet.deduct_expense(1000)
    assert wallet.balance == 300
    assert wallet.lifetime_spending == 200
    assert exc_info.value.to_dict()["error"] == "insufficient_funds"
    assert exc_info.value.required == 1000


def test_wallet_conservation():
    wallet = Wallet.starting(500)
    wallet.add_income(150)
    wallet.deduct_expense(75.5)
    wallet.add_income(20.25)
    assert wallet.balance == wallet.lifetime_earnings - wallet.lifetime_spending
    assert wallet.lifetime_earnings == Decimal("670.25")
    assert wallet.balance == Decimal("594.75")


def test_wallet_rejects_negative_amounts():
    wallet = Wallet.starting(500)
    with pytest.raises(ValidationFailure):
        wallet.add_income(-5)
    with pytest.raises(ValidationFailure):
        wallet.deduct_expense(-5)
    assert wallet.balance == 500
