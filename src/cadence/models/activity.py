"""Activities and the two time slots they run in."""
from __future__ import annotations

from datetime import datetime
from typing import Annotated, Literal, Union
from uuid import UUID

from pydantic import BaseModel, Field, model_validator

from cadence.game.constants import JobType, SkillType, SlotType


class PracticeActivity(BaseModel):
    kind: Literal["practice"] = "practice"
    instrument: SkillType


class RestActivity(BaseModel):
    kind: Literal["rest"] = "rest"


class JobActivity(BaseModel):
    kind: Literal["job"] = "job"
    job_type: JobType


class RehearsalActivity(BaseModel):
    kind: Literal["rehearsal"] = "rehearsal"
    setlist_id: UUID


class GigActivity(BaseModel):
    kind: Literal["gig"] = "gig"
    gig_id: UUID


Activity = Annotated[
    Union[PracticeActivity, RestActivity, JobActivity, RehearsalActivity, GigActivity],
    Field(discriminator="kind"),
]


class TimeSlot(BaseModel):
    """A slot with at most one running activity.

    ``accrued_until`` marks how far the tick has already credited this
    session; the ``*_carry`` fields hold fractional remainders between ticks.
    """

    slot_type: SlotType
    current_activity: Activity | None = None
    started_at: datetime | None = None
    accrued_until: datetime | None = None
    xp_carry: float = 0.0
    health_carry: float = 0.0
    mood_carry: float = 0.0

    @model_validator(mode="after")
    def _started_iff_active(self) -> "TimeSlot":
        if (self.current_activity is None) != (self.started_at is None):
            raise ValueError("started_at must be set exactly when an activity is present")
        return self

    @property
    def is_active(self) -> bool:
        return self.current_activity is not None

    def start(self, activity, now: datetime) -> None:
        self.current_activity = activity
        self.started_at = now
        self.accrued_until = now
        self._reset_carry()

    def clear(self) -> None:
        self.current_activity = None
        self.started_at = None
        self.accrued_until = None
        self._reset_carry()

    def elapsed_seconds(self, now: datetime) -> float:
        if self.started_at is None:
            return 0.0
        return max(0.0, (now - self.started_at).total_seconds())

    def _reset_carry(self) -> None:
        self.xp_carry = 0.0
        self.health_carry = 0.0
        self.mood_carry = 0.0
