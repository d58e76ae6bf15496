"""Setlists and rehearsal."""
from __future__ import annotations

import logging
from uuid import UUID

from cadence.core.errors import ValidationFailure
from cadence.game.constants import MIN_SETLIST_SONGS, REHEARSAL_XP_PER_HOUR, SkillType
from cadence.game.formulas import setlist_quality
from cadence.models.creative import Setlist
from cadence.models.state import GameState

logger = logging.getLogger(__name__)


class SetlistManager:
    """Service for setlist operations."""

    def create_setlist(self, state: GameState, name: str, song_ids: list[UUID]) -> Setlist:
        if len(set(song_ids)) != len(song_ids):
            raise ValidationFailure("setlist songs must be distinct")
        if len(song_ids) < MIN_SETLIST_SONGS:
            raise ValidationFailure(
                f"a setlist needs at least {MIN_SETLIST_SONGS} songs",
                required=MIN_SETLIST_SONGS,
                have=len(song_ids),
            )
        for song_id in song_ids:
            state.get_song(song_id)
        setlist = Setlist(name=name, song_ids=list(song_ids))
        state.add_setlist(setlist)
        logger.info("setlist_created name=%r songs=%s", name, len(song_ids))
        return setlist

    def average_song_quality(self, state: GameState, setlist: Setlist) -> int:
        if not setlist.song_ids:
            return 0
        total = sum(state.get_song(song_id).quality for song_id in setlist.song_ids)
        return total // len(setlist.song_ids)

    def rehearse(self, state: GameState, setlist_id: UUID, hours: float) -> int:
        """Rehearse for ``hours``. Returns the new quality (never lower than before)."""
        if hours <= 0:
            raise ValidationFailure("rehearsal hours must be positive", hours=hours)
        setlist = state.get_setlist(setlist_id)
        average = self.average_song_quality(state, setlist)
        performance = state.get_skill(SkillType.PERFORMANCE)

        total_hours = setlist.rehearsal_hours + hours
        quality = setlist_quality(average, total_hours, performance.current_level)
        setlist.rehearsal_hours = total_hours
        setlist.quality = max(setlist.quality, quality)
        performance.add_xp(int(hours * REHEARSAL_XP_PER_HOUR))
        logger.info("setlist_rehearsed id=%s hours=%s quality=%s", setlist.id, hours, setlist.quality)
        return setlist.quality

    def add_song(self, state: GameState, setlist_id: UUID, song_id: UUID) -> Setlist:
        setlist = state.get_setlist(setlist_id)
        state.get_song(song_id)
        if song_id in setlist.song_ids:
            raise ValidationFailure("song already in setlist")
        setlist.song_ids.append(song_id)
        return setlist

    def remove_song(self, state: GameState, setlist_id: UUID, song_id: UUID) -> Setlist:
        setlist = state.get_setlist(setlist_id)
        if song_id not in setlist.song_ids:
            raise ValidationFailure("song not in setlist")
        setlist.song_ids = [s for s in setlist.song_ids if s != song_id]
        return setlist
