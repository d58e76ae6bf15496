"""Pydantic schemas for API requests/responses."""
from datetime import datetime
from decimal import Decimal
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, Field

from cadence.game.constants import (
    HousingType,
    JobType,
    ReleaseType,
    SkillType,
    SongGenre,
    SongMood,
    StudioTier,
)
from cadence.models.activity import Activity


class BootstrapRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    city_id: Optional[str] = None


class ActivityRequest(BaseModel):
    activity: Activity


class StartJobRequest(BaseModel):
    job_type: JobType


class PurchaseEquipmentRequest(BaseModel):
    catalog_item_id: str


class RentHousingRequest(BaseModel):
    housing_type: HousingType
    city_id: str


class MoveHousingRequest(BaseModel):
    housing_type: HousingType


class PayRentRequest(BaseModel):
    weeks: int = Field(1, ge=1)


class CreateSongRequest(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)
    genre: SongGenre
    mood: SongMood
    primary_instrument: SkillType


class CreateSetlistRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    song_ids: List[UUID]


class RehearseRequest(BaseModel):
    hours: float = Field(..., gt=0)


class RecordSongRequest(BaseModel):
    song_id: UUID
    studio_tier: StudioTier
    hours: float


class PublishReleaseRequest(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)
    release_type: ReleaseType
    recording_ids: List[UUID]


class BookGigRequest(BaseModel):
    venue_id: str
    setlist_id: UUID
    scheduled_at: datetime
    ticket_price: Decimal = Field(..., ge=0)


class SetlistResponse(BaseModel):
    id: UUID
    name: str
    song_ids: List[UUID]
    quality: int
    rehearsal_hours: float
    song_count: int
    is_ready: bool
    readiness: str


class MoneyResponse(BaseModel):
    amount: Decimal
    balance: Decimal


class StatusResponse(BaseModel):
    health: int
    mood: int
    health_status: str
    mood_status: str
    xp_multiplier: float
    warnings: List[str]
    recommended_action: str
    current_job: Optional[JobType] = None
    next_payment_date: Optional[datetime] = None
    days_until_next_payment: Optional[int] = None
    hours_worked_this_week: float = 0.0
    total_earnings_from_current_job: Decimal = Decimal("0.00")
    rent_warning: Optional[str] = None
    equipment_value: Decimal = Decimal("0.00")
    release_revenue: Decimal = Decimal("0.00")
