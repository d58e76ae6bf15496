"""Health and mood modifiers.

Pure functions over the player's health and mood; nothing here mutates state.
Bands are 0-20, 21-40, 41-60, 61-80, 81-100.
"""
from __future__ import annotations

from cadence.game.constants import (
    HEALTH_XP_MULTIPLIERS,
    LOW_ATTRIBUTE_WARNING,
    MOOD_XP_MULTIPLIERS,
    OVERWORK_AFTER_HOURS,
    OVERWORK_HEALTH_PER_HOUR,
    REST_HEALTH_PER_HOUR,
    REST_LOW_MULTIPLIER,
    REST_LOW_THRESHOLD,
    REST_MID_MULTIPLIER,
    REST_MID_THRESHOLD,
    REST_MOOD_PER_HOUR,
    SONG_QUALITY_MODIFIERS,
    HealthStatus,
    MoodStatus,
)
from cadence.game.formulas import gig_mood_boost, gig_mood_loss

_HEALTH_BANDS = (
    HealthStatus.CRITICAL,
    HealthStatus.POOR,
    HealthStatus.FAIR,
    HealthStatus.GOOD,
    HealthStatus.EXCELLENT,
)
_MOOD_BANDS = (
    MoodStatus.DEPRESSED,
    MoodStatus.SAD,
    MoodStatus.NEUTRAL,
    MoodStatus.HAPPY,
    MoodStatus.EUPHORIC,
)


def _band(value: float) -> int:
    if value <= 20:
        return 0
    if value <= 40:
        return 1
    if value <= 60:
        return 2
    if value <= 80:
        return 3
    return 4


class HealthMoodManager:
    """Modifier functions applied across practice, songwriting, recording and gigs."""

    @staticmethod
    def health_status(health: float) -> HealthStatus:
        return _HEALTH_BANDS[_band(health)]

    @staticmethod
    def mood_status(mood: float) -> MoodStatus:
        return _MOOD_BANDS[_band(mood)]

    @classmethod
    def xp_multiplier(cls, health: float, mood: float) -> float:
        health_mult = HEALTH_XP_MULTIPLIERS[cls.health_status(health)]
        mood_mult = MOOD_XP_MULTIPLIERS[cls.mood_status(mood)]
        return (health_mult + mood_mult) / 2

    @classmethod
    def song_quality_modifier(cls, mood: float) -> float:
        return SONG_QUALITY_MODIFIERS[cls.mood_status(mood)]

    @staticmethod
    def recording_quality_modifier(health: float, mood: float) -> float:
        return 0.5 + 0.8 * (0.4 * health / 100 + 0.6 * mood / 100)

    @staticmethod
    def performance_quality_modifier(health: float, mood: float) -> float:
        return 0.4 + 1.0 * (0.5 * health / 100 + 0.5 * mood / 100)

    @staticmethod
    def recovery_multiplier(current: float) -> float:
        """Recovery is more generous when the resource is already low."""
        if current < REST_LOW_THRESHOLD:
            return REST_LOW_MULTIPLIER
        if current < REST_MID_THRESHOLD:
            return REST_MID_MULTIPLIER
        return 1.0

    @classmethod
    def rest_health_gain(cls, hours: float, current_health: float, quality: float = 1.0) -> float:
        return hours * REST_HEALTH_PER_HOUR * cls.recovery_multiplier(current_health) * quality

    @classmethod
    def rest_mood_gain(cls, hours: float, current_mood: float, quality: float = 1.0) -> float:
        return hours * REST_MOOD_PER_HOUR * cls.recovery_multiplier(current_mood) * quality

    @staticmethod
    def overwork_health_loss(hours_worked: float) -> int:
        if hours_worked <= OVERWORK_AFTER_HOURS:
            return 0
        return int((hours_worked - OVERWORK_AFTER_HOURS) * OVERWORK_HEALTH_PER_HOUR)

    @staticmethod
    def gig_mood_boost(attendance: int, quality: int) -> int:
        return gig_mood_boost(attendance, quality)

    @staticmethod
    def failed_gig_mood_loss(attendance: int, expected_attendance: int) -> int:
        return gig_mood_loss(attendance, expected_attendance)

    @staticmethod
    def needs_health_warning(health: float) -> bool:
        return health < LOW_ATTRIBUTE_WARNING

    @staticmethod
    def needs_mood_warning(mood: float) -> bool:
        return mood < LOW_ATTRIBUTE_WARNING

    @classmethod
    def warnings(cls, health: float, mood: float) -> list[str]:
        messages = []
        if cls.needs_health_warning(health):
            messages.append(f"Your health is low ({int(health)}). Practice and performances will suffer.")
        if cls.needs_mood_warning(mood):
            messages.append(f"Your mood is low ({int(mood)}). Creative work will suffer.")
        return messages

    @classmethod
    def recommended_action(cls, health: float, mood: float) -> str:
        low_health = cls.needs_health_warning(health)
        low_mood = cls.needs_mood_warning(mood)
        if low_health and low_mood:
            return "You need to rest! Both your health and mood are low."
        if low_health:
            return "Rest to recover your health."
        if low_mood:
            return "Take a break to improve your mood."
        if health < 60 or mood < 60:
            return "Consider resting to optimize your performance."
        return "You're in good shape! Keep up the great work."
