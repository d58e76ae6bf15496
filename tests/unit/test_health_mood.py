"""Unit tests: health/mood modifiers."""
import pytest

from cadence.game.constants import HealthStatus, MoodStatus
from cadence.services.health_mood import HealthMoodManager as hm


@pytest.mark.parametrize(
    "value,health,mood",
    [
        (0, HealthStatus.CRITICAL, MoodStatus.DEPRESSED),
        (20, HealthStatus.CRITICAL, MoodStatus.DEPRESSED),
        (21, HealthStatus.POOR, MoodStatus.SAD),
        (60, HealthStatus.FAIR, MoodStatus.NEUTRAL),
        (80, HealthStatus.GOOD, MoodStatus.HAPPY),
        (81, HealthStatus.EXCELLENT, MoodStatus.EUPHORIC),
    ],
)
def test_bands(value, health, mood):
    assert hm.health_status(value) == health
    assert hm.mood_status(value) == mood


def test_xp_multiplier():
    assert hm.xp_multiplier(80, 70) == pytest.approx((1.0 + 1.15) / 2)
    assert hm.xp_multiplier(10, 10) == pytest.approx((0.5 + 0.6) / 2)
    assert hm.xp_multiplier(100, 100) == pytest.approx((1.2 + 1.3) / 2)


def test_quality_modifiers():
    assert hm.song_quality_modifier(50) == 1.0
    assert hm.song_quality_modifier(95) == 1.5
    assert hm.recording_quality_modifier(100, 100) == pytest.approx(1.3)
    assert hm.recording_quality_modifier(0, 0) == pytest.approx(0.5)
    assert hm.performance_quality_modifier(100, 100) == pytest.approx(1.4)
    assert hm.performance_quality_modifier(0, 0) == pytest.approx(0.4)


def test_rest_recovery_more_generous_when_low():
    assert hm.rest_health_gain(1, 20) == pytest.approx(15)
    assert hm.rest_health_gain(1, 40) == pytest.approx(12)
    assert hm.rest_health_gain(1, 70) == pytest.approx(10)
    assert hm.rest_mood_gain(2, 70, quality=1.8) == pytest.approx(18)


def test_overwork():
    assert hm.overwork_health_loss(8) == 0
    assert hm.overwork_health_loss(10.5) == 5


def test_gig_mood():
    assert hm.gig_mood_boost(250, 85) == 2 + 4
    assert hm.gig_mood_boost(900, 0) == 5
    assert hm.failed_gig_mood_loss(10, 50) == 15
    assert hm.failed_gig_mood_loss(20, 50) == 10
    assert hm.failed_gig_mood_loss(30, 50) == 5
    assert hm.failed_gig_mood_loss(40, 50) == 0


def test_recommended_action():
    assert hm.recommended_action(10, 10) == "You need to rest! Both your health and mood are low."
    assert hm.recommended_action(10, 90) == "Rest to recover your health."
    assert hm.recommended_action(90, 10) == "Take a break to improve your mood."
    assert hm.recommended_action(55, 90) == "Consider resting to optimize your performance."
    assert hm.recommended_action(90, 90) == "You're in good shape! Keep up the great work."
    assert len(hm.warnings(10, 10)) == 2
    assert hm.warnings(30, 30) == []
