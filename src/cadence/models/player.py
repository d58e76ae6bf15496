"""Player, wallet and skill models."""
from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field

from cadence.core.errors import InsufficientFunds, ValidationFailure
from cadence.game.catalog import DEFAULT_CITY_ID
from cadence.game.constants import (
    ATTRIBUTE_MAX,
    MAX_SKILL_LEVEL,
    STARTING_HEALTH,
    STARTING_MOOD,
    STARTING_REPUTATION,
    SkillType,
)
from cadence.game.formulas import clamp, level_for_xp, round_money, xp_required


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Player(BaseModel):
    model_config = ConfigDict(validate_assignment=True)

    id: UUID = Field(default_factory=uuid4)
    name: str
    gender: str | None = None
    avatar_id: str | None = None
    current_city_id: str = DEFAULT_CITY_ID
    health: int = Field(STARTING_HEALTH, ge=0, le=ATTRIBUTE_MAX)
    mood: int = Field(STARTING_MOOD, ge=0, le=ATTRIBUTE_MAX)
    fame: int = Field(0, ge=0)
    reputation: int = Field(STARTING_REPUTATION, ge=0, le=ATTRIBUTE_MAX)
    fans: int = Field(0, ge=0)
    created_at: datetime = Field(default_factory=_utcnow)
    last_sync_at: datetime = Field(default_factory=_utcnow)

    def adjust_health(self, delta: int) -> int:
        """Apply delta clamped to [0, 100]; return the applied change."""
        before = self.health
        self.health = int(clamp(before + delta, 0, ATTRIBUTE_MAX))
        return self.health - before

    def adjust_mood(self, delta: int) -> int:
        before = self.mood
        self.mood = int(clamp(before + delta, 0, ATTRIBUTE_MAX))
        return self.mood - before

    def adjust_reputation(self, delta: int) -> int:
        before = self.reputation
        self.reputation = int(clamp(before + delta, 0, ATTRIBUTE_MAX))
        return self.reputation - before

    def add_fame(self, amount: int) -> None:
        self.fame = max(0, self.fame + amount)

    def add_fans(self, amount: int) -> None:
        self.fans = max(0, self.fans + amount)


class Wallet(BaseModel):
    """Player money. Balance only goes down through ``deduct_expense``."""

    balance: Decimal = Field(Decimal("500.00"), ge=0)
    lifetime_earnings: Decimal = Field(Decimal("500.00"), ge=0)
    lifetime_spending: Decimal = Field(Decimal("0.00"), ge=0)

    @classmethod
    def starting(cls, amount: Decimal | float) -> "Wallet":
        amount = round_money(amount)
        return cls(balance=amount, lifetime_earnings=amount, lifetime_spending=Decimal("0.00"))

    def can_afford(self, amount: Decimal) -> bool:
        return self.balance >= round_money(amount)

    def add_income(self, amount: Decimal) -> None:
        if amount < 0:
            raise ValidationFailure("income must be non-negative", amount=amount)
        amount = round_money(amount)
        self.balance = round_money(self.balance + amount)
        self.lifetime_earnings = round_money(self.lifetime_earnings + amount)

    def deduct_expense(self, amount: Decimal) -> None:
        if amount < 0:
            raise ValidationFailure("expense must be non-negative", amount=amount)
        amount = round_money(amount)
        if self.balance < amount:
            raise InsufficientFunds(amount, self.balance)
        self.balance = round_money(self.balance - amount)
        self.lifetime_spending = round_money(self.lifetime_spending + amount)


class Skill(BaseModel):
    skill_type: SkillType
    current_xp: int = Field(0, ge=0)
    current_level: int = Field(0, ge=0, le=MAX_SKILL_LEVEL)

    @property
    def is_maxed(self) -> bool:
        return self.current_level >= MAX_SKILL_LEVEL

    @property
    def xp_for_next_level(self) -> int:
        return xp_required(min(self.current_level + 1, MAX_SKILL_LEVEL))

    @property
    def xp_to_next_level(self) -> int:
        if self.is_maxed:
            return 0
        return max(0, self.xp_for_next_level - self.current_xp)

    @property
    def progress_to_next_level(self) -> float:
        if self.is_maxed:
            return 1.0
        floor = xp_required(self.current_level)
        span = self.xp_for_next_level - floor
        if span <= 0:
            return 1.0
        return min(1.0, max(0.0, (self.current_xp - floor) / span))

    def add_xp(self, amount: int) -> int:
        """Add XP and level up as far as it reaches. Returns levels gained."""
        if amount < 0:
            raise ValidationFailure("xp must be non-negative", amount=amount)
        self.current_xp += int(amount)
        before = self.current_level
        self.current_level = max(before, level_for_xp(self.current_xp))
        return self.current_level - before
