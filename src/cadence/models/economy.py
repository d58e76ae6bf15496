"""Job payments, equipment and housing."""
from __future__ import annotations

from datetime import datetime, timedelta, timezone
from decimal import Decimal
from uuid import UUID, uuid4

from pydantic import BaseModel, Field

from cadence.game.catalog import HOUSING_BY_TYPE, HousingSpec
from cadence.game.constants import (
    EQUIPMENT_SKILL,
    EQUIPMENT_TIER_BONUS,
    EVICTION_RISK_DAYS,
    MAX_DURABILITY,
    NEEDS_REPAIR_BELOW,
    RENT_DUE_SOON_DAYS,
    USABLE_DURABILITY_ABOVE,
    EquipmentTier,
    EquipmentType,
    HousingType,
    JobType,
    PaymentStatus,
    SkillType,
)
from cadence.game.formulas import current_value, equipment_bonus


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class JobPayment(BaseModel):
    id: UUID = Field(default_factory=uuid4)
    job_type: JobType
    amount: Decimal
    scheduled_date: datetime
    paid_date: datetime | None = None
    status: PaymentStatus = PaymentStatus.PENDING

    def is_due(self, now: datetime) -> bool:
        return self.status == PaymentStatus.PENDING and self.scheduled_date <= now


class Equipment(BaseModel):
    id: UUID = Field(default_factory=uuid4)
    catalog_id: str
    equipment_type: EquipmentType
    tier: EquipmentTier
    name: str
    base_price: Decimal
    durability: int = Field(MAX_DURABILITY, ge=0, le=MAX_DURABILITY)
    purchased_at: datetime = Field(default_factory=_utcnow)

    @property
    def related_skill(self) -> SkillType:
        return EQUIPMENT_SKILL[self.equipment_type]

    @property
    def is_usable(self) -> bool:
        return self.durability > USABLE_DURABILITY_ABOVE

    @property
    def needs_repair(self) -> bool:
        return self.durability < NEEDS_REPAIR_BELOW

    @property
    def performance_bonus(self) -> float:
        return equipment_bonus(EQUIPMENT_TIER_BONUS[self.tier], self.durability)

    @property
    def current_value(self) -> Decimal:
        return current_value(self.base_price, self.durability)

    def degrade(self, amount: int) -> None:
        self.durability = max(0, self.durability - amount)


class Housing(BaseModel):
    housing_type: HousingType
    city_id: str
    weekly_rent: Decimal
    rented_at: datetime
    last_rent_payment: datetime
    rent_paid_until: datetime

    @property
    def spec(self) -> HousingSpec:
        return HOUSING_BY_TYPE[self.housing_type]

    def days_until_rent_due(self, now: datetime) -> int:
        return max(0, int((self.rent_paid_until - now) / timedelta(days=1)))

    def is_overdue(self, now: datetime) -> bool:
        return now > self.rent_paid_until

    def days_overdue(self, now: datetime) -> int:
        if not self.is_overdue(now):
            return 0
        return int((now - self.rent_paid_until) / timedelta(days=1))

    def is_rent_due_soon(self, now: datetime) -> bool:
        return not self.is_overdue(now) and self.days_until_rent_due(now) <= RENT_DUE_SOON_DAYS

    def is_at_eviction_risk(self, now: datetime) -> bool:
        return self.days_overdue(now) >= EVICTION_RISK_DAYS

    def rent_warning(self, now: datetime) -> str | None:
        if self.is_at_eviction_risk(now):
            return f"Rent is {self.days_overdue(now)} days overdue. Pay now or you will be moved to a cheaper place."
        if self.is_overdue(now):
            return f"Rent is overdue by {self.days_overdue(now)} days."
        if self.is_rent_due_soon(now):
            days = self.days_until_rent_due(now)
            if days == 0:
                return "Rent is due today."
            return f"Rent is due in {days} days."
        return None
