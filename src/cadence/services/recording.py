"""Studio recording sessions."""
from __future__ import annotations

import logging
from datetime import datetime
from decimal import Decimal
from uuid import UUID

from cadence.core.errors import InvalidTransition, ValidationFailure
from cadence.game.constants import (
    MIN_RECORDING_HOURS,
    PRODUCTION_XP_PER_HOUR,
    RECORDING_FATIGUE_AFTER_HOURS,
    RECORDING_HIGH_QUALITY,
    RECORDING_LOW_QUALITY,
    RECORDING_MOOD_BOOST,
    RECORDING_MOOD_PENALTY,
    STUDIO_TIERS,
    SkillType,
    StudioTier,
)
from cadence.game.formulas import recording_quality, round_money
from cadence.models.creative import Recording
from cadence.models.state import GameState
from cadence.services.health_mood import HealthMoodManager

logger = logging.getLogger(__name__)


def session_cost(studio_tier: StudioTier, hours: float) -> Decimal:
    rate, _cap = STUDIO_TIERS[studio_tier]
    return round_money(rate * Decimal(str(hours)))


class RecordingManager:
    """Service for recording songs."""

    def record_song(
        self,
        state: GameState,
        song_id: UUID,
        studio_tier: StudioTier,
        hours: float,
        now: datetime,
    ) -> Recording:
        song = state.get_song(song_id)
        if song.recording_id is not None:
            raise InvalidTransition("song already recorded", song_id=str(song_id))
        if hours < MIN_RECORDING_HOURS:
            raise ValidationFailure(
                f"a session lasts at least {MIN_RECORDING_HOURS} hour",
                hours=hours,
            )
        performance = state.get_skill(SkillType.PERFORMANCE)
        production = state.get_skill(SkillType.PRODUCTION)
        cost = session_cost(studio_tier, hours)
        state.wallet.deduct_expense(cost)

        player = state.player
        _rate, cap = STUDIO_TIERS[studio_tier]
        quality = recording_quality(
            song.quality,
            performance.current_level,
            production.current_level,
            cap,
            HealthMoodManager.recording_quality_modifier(player.health, player.mood),
        )
        recording = Recording(
            song_id=song.id,
            studio_tier=studio_tier,
            hours=hours,
            cost=cost,
            quality=quality,
            recorded_at=now,
        )
        state.add_recording(recording)
        song.recording_id = recording.id

        production.add_xp(int(hours * PRODUCTION_XP_PER_HOUR))
        if hours > RECORDING_FATIGUE_AFTER_HOURS:
            player.adjust_health(-int(hours - RECORDING_FATIGUE_AFTER_HOURS))
        if quality >= RECORDING_HIGH_QUALITY:
            player.adjust_mood(RECORDING_MOOD_BOOST)
        elif quality < RECORDING_LOW_QUALITY:
            player.adjust_mood(-RECORDING_MOOD_PENALTY)
        logger.info(
            "song_recorded song=%s tier=%s hours=%s cost=%s quality=%s",
            song.id,
            studio_tier.value,
            hours,
            cost,
            quality,
        )
        return recording
