"""Idle progression: the tick.

Each tick credits only the part of a slot's session that earlier ticks have
not processed yet (``accrued_until`` to ``now``). Session length still decides
the fatigue thresholds, so four hours of practice spread over many ticks
costs the same as one long tick.
"""
from __future__ import annotations

import logging
from datetime import datetime, timedelta
from decimal import Decimal
from uuid import UUID

from pydantic import BaseModel, Field

from cadence.core.errors import GameError, NotFound
from cadence.game.constants import (
    OVERWORK_AFTER_HOURS,
    OVERWORK_HEALTH_PER_HOUR,
    OVERWORK_MOOD_PER_HOUR,
    PRACTICE_FATIGUE_AFTER_HOURS,
    PRACTICE_FATIGUE_HEALTH_PER_HOUR,
    PRACTICE_FATIGUE_MOOD_PER_HOUR,
    GigStatus,
    SkillType,
)
from cadence.game.formulas import overlap_beyond, practice_xp, round_money
from cadence.models.activity import JobActivity, PracticeActivity, RestActivity, TimeSlot
from cadence.models.creative import GigResult
from cadence.models.state import GameState
from cadence.services.equipment import EquipmentManager
from cadence.services.gigs import GigManager
from cadence.services.health_mood import HealthMoodManager
from cadence.services.housing import HousingManager
from cadence.services.jobs import JobPaymentManager

logger = logging.getLogger(__name__)


class LevelUp(BaseModel):
    skill: SkillType
    level: int


class CompletedGig(BaseModel):
    gig_id: UUID
    result: GigResult


class TickReport(BaseModel):
    """What one tick changed. Published as an event after commit."""

    now: datetime
    xp_gained: dict[SkillType, int] = Field(default_factory=dict)
    level_ups: list[LevelUp] = Field(default_factory=list)
    health_change: int = 0
    mood_change: int = 0
    payments_paid: Decimal = Decimal("0.00")
    payments_count: int = 0
    gigs_completed: list[CompletedGig] = Field(default_factory=list)
    gigs_cancelled: list[UUID] = Field(default_factory=list)
    rent_status: str | None = None
    streaming_revenue: Decimal = Decimal("0.00")
    warnings: list[str] = Field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not (
            self.xp_gained
            or self.health_change
            or self.mood_change
            or self.payments_count
            or self.gigs_completed
            or self.gigs_cancelled
            or self.rent_status
            or self.streaming_revenue
        )


def _take_whole(total: float) -> tuple[int, float]:
    whole = int(total)
    return whole, total - whole


class IdleProgressionManager:
    """Tick orchestrator: slots, then payments, then due gigs."""

    def __init__(
        self,
        equipment: EquipmentManager | None = None,
        jobs: JobPaymentManager | None = None,
        gigs: GigManager | None = None,
        housing: HousingManager | None = None,
        periodic=None,
    ):
        self.equipment = equipment or EquipmentManager()
        self.jobs = jobs or JobPaymentManager()
        self.gigs = gigs or GigManager()
        self.housing = housing or HousingManager()
        self.periodic = periodic

    def advance(self, state: GameState, now: datetime) -> tuple[GameState, TickReport]:
        """Run one tick on a copy of ``state`` and return the new snapshot."""
        draft = state.model_copy(deep=True)
        report = TickReport(now=now)
        health_before = draft.player.health
        mood_before = draft.player.mood

        for slot in draft.slots:
            try:
                self.process_slot(draft, slot, now, report)
            except GameError as exc:
                logger.warning("tick_slot_skipped slot=%s error=%s", slot.slot_type.value, exc.to_dict())
                slot.accrued_until = now

        paid = self.jobs.process_due_payments(draft, now)
        report.payments_count = len(paid)
        report.payments_paid = round_money(sum(p.amount for p in paid))

        self._run_due_gigs(draft, now, report)

        if self.periodic is not None:
            self.periodic.process(draft, now, report)

        draft.player.last_sync_at = now
        report.health_change = draft.player.health - health_before
        report.mood_change = draft.player.mood - mood_before
        report.warnings = HealthMoodManager.warnings(draft.player.health, draft.player.mood)
        if draft.current_housing is not None:
            rent_warning = draft.current_housing.rent_warning(now)
            if rent_warning:
                report.warnings.append(rent_warning)
        return draft, report

    def process_slot(self, state: GameState, slot: TimeSlot, now: datetime, report: TickReport) -> None:
        """Credit the unprocessed part of a slot's session up to ``now``."""
        activity = slot.current_activity
        if activity is None or slot.started_at is None:
            return
        window_start = max(slot.started_at, slot.accrued_until or slot.started_at)
        if now <= window_start:
            return
        seconds = (now - window_start).total_seconds()
        start_h = (window_start - slot.started_at) / timedelta(hours=1)
        end_h = (now - slot.started_at) / timedelta(hours=1)

        if isinstance(activity, PracticeActivity):
            self._practice(state, slot, activity, seconds, start_h, end_h, report)
        elif isinstance(activity, RestActivity):
            self._rest(state, slot, seconds / 3600)
        elif isinstance(activity, JobActivity):
            self._drain(
                state,
                slot,
                overlap_beyond(OVERWORK_AFTER_HOURS, start_h, end_h),
                OVERWORK_HEALTH_PER_HOUR,
                OVERWORK_MOOD_PER_HOUR,
            )
        # rehearsal and gig slots only mark time
        slot.accrued_until = now

    def _practice(
        self,
        state: GameState,
        slot: TimeSlot,
        activity: PracticeActivity,
        seconds: float,
        start_h: float,
        end_h: float,
        report: TickReport,
    ) -> None:
        skill = state.get_skill(activity.instrument)
        player = state.player
        bonus = self.equipment.best_equipment_bonus(state, activity.instrument)
        multiplier = HealthMoodManager.xp_multiplier(player.health, player.mood)
        xp, slot.xp_carry = _take_whole(practice_xp(seconds, player.mood, bonus, multiplier) + slot.xp_carry)
        if xp > 0:
            level_before = skill.current_level
            skill.add_xp(xp)
            report.xp_gained[skill.skill_type] = report.xp_gained.get(skill.skill_type, 0) + xp
            if skill.current_level > level_before:
                report.level_ups.append(LevelUp(skill=skill.skill_type, level=skill.current_level))
                logger.info("skill_level_up skill=%s level=%s", skill.skill_type.value, skill.current_level)
            self.equipment.degrade_after_use(state, activity.instrument)
        logger.debug(
            "practice skill=%s seconds=%s xp=%s bonus=%s mult=%s",
            activity.instrument.value,
            int(seconds),
            xp,
            bonus,
            multiplier,
        )
        self._drain(
            state,
            slot,
            overlap_beyond(PRACTICE_FATIGUE_AFTER_HOURS, start_h, end_h),
            PRACTICE_FATIGUE_HEALTH_PER_HOUR,
            PRACTICE_FATIGUE_MOOD_PER_HOUR,
        )

    def _rest(self, state: GameState, slot: TimeSlot, hours: float) -> None:
        player = state.player
        quality = self.housing.rest_multiplier(state)
        if player.health >= 100:
            slot.health_carry = 0.0
        else:
            gain, slot.health_carry = _take_whole(
                HealthMoodManager.rest_health_gain(hours, player.health, quality) + slot.health_carry
            )
            player.adjust_health(gain)
        if player.mood >= 100:
            slot.mood_carry = 0.0
        else:
            gain, slot.mood_carry = _take_whole(
                HealthMoodManager.rest_mood_gain(hours, player.mood, quality) + slot.mood_carry
            )
            player.adjust_mood(gain)
        logger.debug("rest hours=%.3f health=%s mood=%s", hours, player.health, player.mood)

    @staticmethod
    def _drain(state: GameState, slot: TimeSlot, excess_hours: float, health_rate: float, mood_rate: float) -> None:
        if excess_hours <= 0:
            return
        health_loss, slot.health_carry = _take_whole(excess_hours * health_rate + slot.health_carry)
        mood_loss, slot.mood_carry = _take_whole(excess_hours * mood_rate + slot.mood_carry)
        if health_loss:
            state.player.adjust_health(-health_loss)
        if mood_loss:
            state.player.adjust_mood(-mood_loss)
        logger.debug("fatigue excess_h=%.3f health=-%s mood=-%s", excess_hours, health_loss, mood_loss)

    def _run_due_gigs(self, state: GameState, now: datetime, report: TickReport) -> None:
        for gig in state.due_gigs(now):
            try:
                result = self.gigs.execute_gig(state, gig.id)
            except NotFound as exc:
                logger.warning("gig_cancelled id=%s error=%s", gig.id, exc.to_dict())
                gig.status = GigStatus.CANCELLED
                report.gigs_cancelled.append(gig.id)
                continue
            report.gigs_completed.append(CompletedGig(gig_id=gig.id, result=result))


def process_idle_progress(state: GameState, now: datetime) -> GameState:
    """Advance ``state`` to ``now`` with default managers and return the new snapshot."""
    new_state, _report = IdleProgressionManager().advance(state, now)
    return new_state
