"""Aggregate game state.

``GameState`` owns every entity of one player. Lookups raise ``NotFound`` for
unknown identifiers; the derived views are read-only.
"""
from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal
from typing import Iterable, TypeVar
from uuid import UUID

from pydantic import BaseModel, Field

from cadence.core.errors import NotFound
from cadence.game.constants import (
    EQUIPMENT_SKILL,
    GigStatus,
    JobType,
    PaymentStatus,
    SkillType,
    SlotType,
)
from cadence.game.formulas import round_money
from cadence.models.activity import JobActivity, TimeSlot
from cadence.models.creative import Gig, Recording, Release, Setlist, Song
from cadence.models.economy import Equipment, Housing, JobPayment
from cadence.models.player import Player, Skill, Wallet

T = TypeVar("T")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _find(items: Iterable[T], item_id: UUID, kind: str) -> T:
    for item in items:
        if item.id == item_id:
            return item
    raise NotFound(kind, item_id)


def _default_skills() -> dict[SkillType, Skill]:
    return {skill_type: Skill(skill_type=skill_type) for skill_type in SkillType}


class GameState(BaseModel):
    player: Player
    wallet: Wallet = Field(default_factory=Wallet)
    skills: dict[SkillType, Skill] = Field(default_factory=_default_skills)

    primary_focus: TimeSlot = Field(default_factory=lambda: TimeSlot(slot_type=SlotType.PRIMARY_FOCUS))
    free_time: TimeSlot = Field(default_factory=lambda: TimeSlot(slot_type=SlotType.FREE_TIME))

    songs: list[Song] = Field(default_factory=list)
    setlists: list[Setlist] = Field(default_factory=list)
    recordings: list[Recording] = Field(default_factory=list)
    releases: list[Release] = Field(default_factory=list)
    gigs: list[Gig] = Field(default_factory=list)
    job_payments: list[JobPayment] = Field(default_factory=list)
    equipment_inventory: list[Equipment] = Field(default_factory=list)
    current_housing: Housing | None = None

    last_job_start_date: datetime | None = None
    last_housing_check_at: datetime | None = None
    last_streaming_update_at: datetime | None = None

    @classmethod
    def new(
        cls,
        name: str,
        city_id: str | None = None,
        starting_balance: Decimal = Decimal("500.00"),
        now: datetime | None = None,
    ) -> "GameState":
        now = now or _utcnow()
        player = Player(name=name, created_at=now, last_sync_at=now)
        if city_id:
            player.current_city_id = city_id
        return cls(
            player=player,
            wallet=Wallet.starting(starting_balance),
            last_housing_check_at=now,
            last_streaming_update_at=now,
        )

    # --- slots ---

    def slot(self, slot_type: SlotType) -> TimeSlot:
        if slot_type == SlotType.PRIMARY_FOCUS:
            return self.primary_focus
        return self.free_time

    @property
    def slots(self) -> tuple[TimeSlot, TimeSlot]:
        return (self.primary_focus, self.free_time)

    # --- lookups ---

    def get_skill(self, skill_type: SkillType) -> Skill:
        skill = self.skills.get(skill_type)
        if skill is None:
            raise NotFound("skill", skill_type.value)
        return skill

    def skill_level(self, skill_type: SkillType) -> int:
        skill = self.skills.get(skill_type)
        return skill.current_level if skill else 0

    def get_song(self, song_id: UUID) -> Song:
        return _find(self.songs, song_id, "song")

    def get_setlist(self, setlist_id: UUID) -> Setlist:
        return _find(self.setlists, setlist_id, "setlist")

    def get_recording(self, recording_id: UUID) -> Recording:
        return _find(self.recordings, recording_id, "recording")

    def get_release(self, release_id: UUID) -> Release:
        return _find(self.releases, release_id, "release")

    def get_gig(self, gig_id: UUID) -> Gig:
        return _find(self.gigs, gig_id, "gig")

    def get_equipment(self, equipment_id: UUID) -> Equipment:
        return _find(self.equipment_inventory, equipment_id, "equipment")

    # --- insert / remove ---

    def add_song(self, song: Song) -> None:
        self.songs.append(song)

    def add_setlist(self, setlist: Setlist) -> None:
        self.setlists.append(setlist)

    def add_recording(self, recording: Recording) -> None:
        self.recordings.append(recording)

    def add_release(self, release: Release) -> None:
        self.releases.append(release)

    def add_gig(self, gig: Gig) -> None:
        self.gigs.append(gig)

    def add_equipment(self, equipment: Equipment) -> None:
        self.equipment_inventory.append(equipment)

    def add_payment(self, payment: JobPayment) -> None:
        self.job_payments.append(payment)

    def remove_equipment(self, equipment_id: UUID) -> Equipment:
        item = self.get_equipment(equipment_id)
        self.equipment_inventory = [e for e in self.equipment_inventory if e.id != equipment_id]
        return item

    def remove_setlist(self, setlist_id: UUID) -> Setlist:
        setlist = self.get_setlist(setlist_id)
        self.setlists = [s for s in self.setlists if s.id != setlist_id]
        return setlist

    # --- views ---

    @property
    def current_job(self) -> JobType | None:
        activity = self.primary_focus.current_activity
        if isinstance(activity, JobActivity):
            return activity.job_type
        return None

    @property
    def unrecorded_songs(self) -> list[Song]:
        return [s for s in self.songs if s.recording_id is None]

    @property
    def unreleased_songs(self) -> list[Song]:
        return [s for s in self.songs if not s.is_released]

    @property
    def unreleased_recordings(self) -> list[Recording]:
        return [r for r in self.recordings if not r.is_released]

    @property
    def ready_setlists(self) -> list[Setlist]:
        return [s for s in self.setlists if s.is_ready]

    def due_payments(self, now: datetime) -> list[JobPayment]:
        return sorted(
            (p for p in self.job_payments if p.is_due(now)),
            key=lambda p: p.scheduled_date,
        )

    @property
    def pending_payments(self) -> list[JobPayment]:
        return [p for p in self.job_payments if p.status == PaymentStatus.PENDING]

    @property
    def paid_payments(self) -> list[JobPayment]:
        return [p for p in self.job_payments if p.status == PaymentStatus.PAID]

    def upcoming_gigs(self, now: datetime) -> list[Gig]:
        return sorted(
            (g for g in self.gigs if g.status == GigStatus.BOOKED and g.scheduled_at > now),
            key=lambda g: g.scheduled_at,
        )

    def due_gigs(self, now: datetime) -> list[Gig]:
        return sorted((g for g in self.gigs if g.is_due(now)), key=lambda g: g.scheduled_at)

    @property
    def completed_gigs(self) -> list[Gig]:
        return [g for g in self.gigs if g.status == GigStatus.COMPLETED]

    @property
    def equipment_needing_repair(self) -> list[Equipment]:
        return [e for e in self.equipment_inventory if e.needs_repair]

    @property
    def total_equipment_value(self) -> Decimal:
        return round_money(sum(e.current_value for e in self.equipment_inventory))

    def equipment_for_skill(self, skill_type: SkillType) -> list[Equipment]:
        return [e for e in self.equipment_inventory if EQUIPMENT_SKILL[e.equipment_type] == skill_type]

    def total_release_revenue(self) -> Decimal:
        return round_money(sum(r.total_revenue for r in self.releases))
