"""Songwriting."""
from __future__ import annotations

import logging
import random
from datetime import datetime

from cadence.core.errors import ValidationFailure
from cadence.game.constants import (
    SONG_VARIANCE,
    SONGWRITING_MOOD_BONUS,
    SkillType,
    SongGenre,
    SongMood,
)
from cadence.game.formulas import song_quality
from cadence.models.creative import Song
from cadence.models.state import GameState
from cadence.services.health_mood import HealthMoodManager

logger = logging.getLogger(__name__)


class SongManager:
    """Service for writing songs."""

    def __init__(self, rng: random.Random | None = None):
        self.rng = rng or random.Random()

    def create_song(
        self,
        state: GameState,
        title: str,
        genre: SongGenre,
        mood: SongMood,
        primary_instrument: SkillType,
        now: datetime,
    ) -> Song:
        title = (title or "").strip()
        if not title:
            raise ValidationFailure("song title is required")
        songwriting = state.get_skill(SkillType.SONGWRITING)
        instrument = state.get_skill(primary_instrument)
        player = state.player

        variance = self.rng.uniform(-SONG_VARIANCE, SONG_VARIANCE)
        quality = song_quality(
            songwriting.current_level,
            instrument.current_level,
            player.mood,
            variance,
            HealthMoodManager.song_quality_modifier(player.mood),
        )
        song = Song(
            title=title,
            genre=genre,
            mood=mood,
            primary_instrument=primary_instrument,
            quality=quality,
            created_at=now,
        )
        state.add_song(song)
        songwriting.add_xp(20 + quality // 2)
        instrument.add_xp(5 + quality // 10)
        player.adjust_mood(SONGWRITING_MOOD_BONUS)
        logger.info("song_created title=%r quality=%s", title, quality)
        return song
