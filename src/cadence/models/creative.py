"""Songs, setlists, recordings, releases and gigs."""
from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal
from uuid import UUID, uuid4

from pydantic import BaseModel, Field

from cadence.game.constants import (
    MIN_SETLIST_SONGS,
    SETLIST_READY_QUALITY,
    STUDIO_TIERS,
    GigStatus,
    QualityTier,
    ReleaseType,
    SkillType,
    SongGenre,
    SongMood,
    StudioTier,
)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def quality_tier(quality: int) -> QualityTier:
    if quality < 20:
        return QualityTier.POOR
    if quality < 40:
        return QualityTier.AVERAGE
    if quality < 60:
        return QualityTier.GOOD
    if quality < 80:
        return QualityTier.GREAT
    return QualityTier.MASTERPIECE


class Song(BaseModel):
    id: UUID = Field(default_factory=uuid4)
    title: str
    genre: SongGenre
    mood: SongMood
    primary_instrument: SkillType
    quality: int = Field(ge=0, le=100)
    created_at: datetime = Field(default_factory=_utcnow)
    recording_id: UUID | None = None
    is_released: bool = False

    @property
    def is_recorded(self) -> bool:
        return self.recording_id is not None

    @property
    def quality_tier(self) -> QualityTier:
        return quality_tier(self.quality)


class Setlist(BaseModel):
    id: UUID = Field(default_factory=uuid4)
    name: str
    song_ids: list[UUID] = Field(default_factory=list)
    quality: int = Field(0, ge=0, le=100)
    rehearsal_hours: float = Field(0.0, ge=0)
    created_at: datetime = Field(default_factory=_utcnow)

    @property
    def song_count(self) -> int:
        return len(self.song_ids)

    @property
    def is_ready(self) -> bool:
        return self.song_count >= MIN_SETLIST_SONGS and self.quality >= SETLIST_READY_QUALITY

    @property
    def readiness(self) -> str:
        if self.song_count < MIN_SETLIST_SONGS:
            return f"Add at least {MIN_SETLIST_SONGS} songs"
        if self.quality < 40:
            return "Needs more rehearsal"
        if self.quality < 60:
            return "Getting there"
        if self.quality < 80:
            return "Ready to perform"
        return "Polished and tight"


class Recording(BaseModel):
    id: UUID = Field(default_factory=uuid4)
    song_id: UUID
    studio_tier: StudioTier
    hours: float
    cost: Decimal
    quality: int = Field(ge=0, le=100)
    recorded_at: datetime = Field(default_factory=_utcnow)
    is_released: bool = False

    @property
    def quality_cap(self) -> int:
        return STUDIO_TIERS[self.studio_tier][1]


class Release(BaseModel):
    id: UUID = Field(default_factory=uuid4)
    title: str
    release_type: ReleaseType
    recording_ids: list[UUID]
    average_quality: int = 0
    released_at: datetime = Field(default_factory=_utcnow)
    total_plays: int = 0
    total_revenue: Decimal = Decimal("0.00")


class GigResult(BaseModel):
    attendance: int
    performance_quality: int
    gross_revenue: Decimal
    net_payout: Decimal
    fans_gained: int
    fame_gained: int
    mood_change: int = 0


class Gig(BaseModel):
    id: UUID = Field(default_factory=uuid4)
    venue_id: str
    setlist_id: UUID
    scheduled_at: datetime
    ticket_price: Decimal = Field(ge=0)
    booking_cost: Decimal = Field(ge=0)
    expected_attendance: int = 0
    status: GigStatus = GigStatus.BOOKED
    result: GigResult | None = None

    def is_due(self, now: datetime) -> bool:
        return self.status == GigStatus.BOOKED and self.scheduled_at <= now
