"""Starting and stopping activities in the two time slots."""
from __future__ import annotations

import logging
from datetime import datetime

from cadence.core.config import settings
from cadence.core.errors import InvalidTransition
from cadence.game.constants import GigStatus, SlotType
from cadence.models.activity import (
    Activity,
    GigActivity,
    JobActivity,
    PracticeActivity,
    RehearsalActivity,
    TimeSlot,
)
from cadence.models.state import GameState
from cadence.services.idle import IdleProgressionManager, TickReport
from cadence.services.jobs import JobPaymentManager

logger = logging.getLogger(__name__)


class ActivityManager:
    """Service for slot activities.

    ``settle_on_clear`` decides what happens to time elapsed since the last
    tick when a slot is cleared or replaced: settled up to ``now`` or dropped.
    """

    def __init__(
        self,
        idle: IdleProgressionManager | None = None,
        jobs: JobPaymentManager | None = None,
        settle_on_clear: bool | None = None,
    ):
        self.idle = idle or IdleProgressionManager()
        self.jobs = jobs or self.idle.jobs
        self.settle_on_clear = settings.settle_activity_on_clear if settle_on_clear is None else settle_on_clear

    def set_activity(self, state: GameState, slot_type: SlotType, activity: Activity, now: datetime) -> TimeSlot:
        self._validate(state, slot_type, activity)
        slot = state.slot(slot_type)
        current = slot.current_activity
        self._settle(state, slot, now)
        if isinstance(current, JobActivity) and current != activity:
            self.jobs.quit_job(state)
        if isinstance(activity, JobActivity):
            if current != activity:
                self.jobs.start_job(state, activity.job_type, now)
        else:
            slot.start(activity, now)
        logger.info("activity_set slot=%s kind=%s", slot_type.value, activity.kind)
        return slot

    def clear_activity(self, state: GameState, slot_type: SlotType, now: datetime) -> TimeSlot:
        slot = state.slot(slot_type)
        if slot.current_activity is None:
            return slot
        self._settle(state, slot, now)
        if isinstance(slot.current_activity, JobActivity):
            self.jobs.quit_job(state)
        else:
            slot.clear()
        logger.info("activity_cleared slot=%s", slot_type.value)
        return slot

    def _settle(self, state: GameState, slot: TimeSlot, now: datetime) -> None:
        if self.settle_on_clear and slot.current_activity is not None:
            self.idle.process_slot(state, slot, now, TickReport(now=now))

    @staticmethod
    def _validate(state: GameState, slot_type: SlotType, activity: Activity) -> None:
        if isinstance(activity, JobActivity) and slot_type != SlotType.PRIMARY_FOCUS:
            raise InvalidTransition("jobs can only run in the primary focus slot")
        if isinstance(activity, PracticeActivity):
            state.get_skill(activity.instrument)
        elif isinstance(activity, RehearsalActivity):
            state.get_setlist(activity.setlist_id)
        elif isinstance(activity, GigActivity):
            gig = state.get_gig(activity.gig_id)
            if gig.status != GigStatus.BOOKED:
                raise InvalidTransition(f"gig is {gig.status.value}", gig_id=str(gig.id))
