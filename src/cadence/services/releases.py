"""Publishing releases and streaming income."""
from __future__ import annotations

import logging
import random
from datetime import datetime
from decimal import Decimal
from uuid import UUID

from cadence.core.errors import InvalidTransition, ValidationFailure
from cadence.game.constants import (
    RELEASE_FAME_DIVISOR,
    RELEASE_MIN_TRACKS,
    STREAMING_VARIANCE,
    ReleaseType,
)
from cadence.game.formulas import release_fame, round_money, streaming_plays, streaming_revenue
from cadence.models.creative import Release
from cadence.models.state import GameState

logger = logging.getLogger(__name__)


class ReleaseManager:
    """Service for releases."""

    def __init__(self, rng: random.Random | None = None):
        self.rng = rng or random.Random()

    def publish_release(
        self,
        state: GameState,
        title: str,
        release_type: ReleaseType,
        recording_ids: list[UUID],
        now: datetime,
    ) -> Release:
        min_tracks = RELEASE_MIN_TRACKS[release_type]
        if len(recording_ids) < min_tracks:
            raise ValidationFailure(
                f"a {release_type.value} needs at least {min_tracks} tracks",
                required=min_tracks,
                have=len(recording_ids),
            )
        if len(set(recording_ids)) != len(recording_ids):
            raise ValidationFailure("release tracks must be distinct")
        recordings = [state.get_recording(rid) for rid in recording_ids]
        for recording in recordings:
            if recording.is_released:
                raise InvalidTransition("recording already released", recording_id=str(recording.id))
        songs = [state.get_song(r.song_id) for r in recordings]

        average = sum(r.quality for r in recordings) // len(recordings)
        release = Release(
            title=title,
            release_type=release_type,
            recording_ids=list(recording_ids),
            average_quality=average,
            released_at=now,
        )
        for recording in recordings:
            recording.is_released = True
        for song in songs:
            song.is_released = True
        state.add_release(release)
        fame = release_fame(average, RELEASE_FAME_DIVISOR[release_type])
        state.player.add_fame(fame)
        logger.info("release_published title=%r type=%s avg=%s fame=%s", title, release_type.value, average, fame)
        return release

    def process_weekly_streaming(self, state: GameState, weeks: int = 1) -> Decimal:
        """Accrue plays and revenue for every release. Returns revenue credited."""
        total = Decimal("0.00")
        fame = state.player.fame
        for _ in range(max(0, weeks)):
            for release in state.releases:
                variance = self.rng.uniform(*STREAMING_VARIANCE)
                plays = streaming_plays(fame, release.average_quality, variance)
                revenue = streaming_revenue(plays, release.average_quality)
                release.total_plays += plays
                release.total_revenue = round_money(release.total_revenue + revenue)
                total += revenue
        total = round_money(total)
        if total > 0:
            state.wallet.add_income(total)
        logger.debug("streaming_update releases=%s weeks=%s revenue=%s", len(state.releases), weeks, total)
        return total
