from datetime import datetime, timezone

import pytest

from cadence.game.constants import SkillType, SongGenre, SongMood
from cadence.game.formulas import xp_required
from cadence.models import GameState, Song

NOW = datetime(2026, 3, 2, 12, 0, tzinfo=timezone.utc)


class FixedRandom:
    """Random source whose uniform() always returns the same value."""

    def __init__(self, value: float = 0.0):
        self.value = value

    def uniform(self, a: float, b: float) -> float:
        return self.value


@pytest.fixture
def now() -> datetime:
    return NOW


@pytest.fixture
def state() -> GameState:
    return GameState.new(name="Tester", city_id="los_angeles", starting_balance=500.0, now=NOW)


@pytest.fixture
def rich_state() -> GameState:
    return GameState.new(name="Tester", city_id="los_angeles", starting_balance=10000.0, now=NOW)


@pytest.fixture
def fixed_random():
    return FixedRandom


@pytest.fixture
def add_song():
    def _add(state: GameState, quality: int, title: str = "Song") -> Song:
        song = Song(
            title=title,
            genre=SongGenre.ROCK,
            mood=SongMood.ENERGETIC,
            primary_instrument=SkillType.GUITAR,
            quality=quality,
            created_at=NOW,
        )
        state.add_song(song)
        return song

    return _add


@pytest.fixture
def set_level():
    def _set(state: GameState, skill_type: SkillType, level: int) -> None:
        skill = state.get_skill(skill_type)
        skill.current_level = level
        skill.current_xp = xp_required(level)

    return _set
