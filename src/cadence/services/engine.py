"""Single-writer game engine.

One ``GameEngine`` owns the canonical ``GameState`` of a player. Ticks and
commands are serialized behind one asyncio lock; each command runs against a
deep copy that replaces the canonical snapshot only if the command returns
normally and the commit hook succeeds, so a failed command leaves no trace.
"""
from __future__ import annotations

import asyncio
import logging
import random
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any, Awaitable, Callable
from uuid import UUID

from cadence.core.config import settings
from cadence.game.constants import HousingType, JobType, ReleaseType, SkillType, SlotType, SongGenre, SongMood, StudioTier
from cadence.models.activity import Activity
from cadence.models.state import GameState
from cadence.services.activity import ActivityManager
from cadence.services.equipment import EquipmentManager
from cadence.services.gigs import GigManager
from cadence.services.housing import HousingManager
from cadence.services.idle import IdleProgressionManager, TickReport
from cadence.services.jobs import JobPaymentManager
from cadence.services.periodic import PeriodicProcessor
from cadence.services.recording import RecordingManager
from cadence.services.releases import ReleaseManager
from cadence.services.setlists import SetlistManager
from cadence.services.songs import SongManager
from cadence.services.sse import publish_event

logger = logging.getLogger(__name__)

CommitHook = Callable[[GameState], Awaitable[None]]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class GameEngine:
    def __init__(
        self,
        state: GameState,
        rng: random.Random | None = None,
        redis=None,
        on_commit: CommitHook | None = None,
        settle_on_clear: bool | None = None,
        clock: Callable[[], datetime] = _utcnow,
    ):
        self._state = state
        self._lock = asyncio.Lock()
        self.redis = redis
        self.on_commit = on_commit
        self.clock = clock

        rng = rng or random.Random()
        self.equipment = EquipmentManager()
        self.housing = HousingManager()
        self.jobs = JobPaymentManager()
        self.songs = SongManager(rng)
        self.setlists = SetlistManager()
        self.recording = RecordingManager()
        self.releases = ReleaseManager(rng)
        self.gigs = GigManager()
        self.periodic = PeriodicProcessor(self.housing, self.releases)
        self.idle = IdleProgressionManager(
            equipment=self.equipment,
            jobs=self.jobs,
            gigs=self.gigs,
            housing=self.housing,
            periodic=self.periodic,
        )
        self.activities = ActivityManager(self.idle, self.jobs, settle_on_clear)

    @property
    def state(self) -> GameState:
        """Read-only view; callers must not mutate it."""
        return self._state

    @property
    def player_id(self) -> UUID:
        return self._state.player.id

    async def tick(self, now: datetime | None = None) -> TickReport:
        now = now or self.clock()
        async with self._lock:
            new_state, report = self.idle.advance(self._state, now)
            await self._committed(new_state)
            self._state = new_state
        if not report.is_empty:
            logger.debug(
                "tick player=%s xp=%s payments=%s gigs=%s",
                self.player_id,
                {k.value: v for k, v in report.xp_gained.items()},
                report.payments_count,
                len(report.gigs_completed),
            )
            await self._publish("tick", report.model_dump(mode="json"))
        return report

    async def execute(self, operation: Callable[..., Any], *args: Any, **kwargs: Any) -> Any:
        """Run ``operation(draft, *args, **kwargs)`` as one transaction."""
        async with self._lock:
            draft = self._state.model_copy(deep=True)
            result = operation(draft, *args, **kwargs)
            await self._committed(draft)
            self._state = draft
        return result

    async def run(self, interval: float | None = None, stop: asyncio.Event | None = None) -> None:
        """Tick every ``interval`` seconds until ``stop`` is set."""
        interval = interval if interval is not None else settings.tick_interval_seconds
        stop = stop or asyncio.Event()
        logger.info("engine_run player=%s interval=%s", self.player_id, interval)
        while not stop.is_set():
            await self.tick()
            try:
                await asyncio.wait_for(stop.wait(), timeout=interval)
            except asyncio.TimeoutError:
                continue

    # --- activities ---

    async def set_activity(self, slot_type: SlotType, activity: Activity, now: datetime | None = None):
        return await self.execute(self.activities.set_activity, slot_type, activity, now or self.clock())

    async def clear_activity(self, slot_type: SlotType, now: datetime | None = None):
        return await self.execute(self.activities.clear_activity, slot_type, now or self.clock())

    async def start_job(self, job_type: JobType, now: datetime | None = None):
        return await self.execute(self.jobs.start_job, job_type, now or self.clock())

    async def quit_job(self):
        return await self.execute(self.jobs.quit_job)

    # --- equipment ---

    async def purchase_equipment(self, catalog_item_id: str):
        return await self.execute(self.equipment.purchase, catalog_item_id)

    async def repair_equipment(self, equipment_id: UUID):
        return await self.execute(self.equipment.repair, equipment_id)

    async def sell_equipment(self, equipment_id: UUID):
        return await self.execute(self.equipment.sell, equipment_id)

    # --- housing ---

    async def rent_housing(self, housing_type: HousingType, city_id: str, now: datetime | None = None):
        return await self.execute(self.housing.rent_housing, housing_type, city_id, now or self.clock())

    async def upgrade_housing(self, housing_type: HousingType, now: datetime | None = None):
        return await self.execute(self.housing.upgrade, housing_type, now or self.clock())

    async def downgrade_housing(self, housing_type: HousingType, now: datetime | None = None):
        return await self.execute(self.housing.downgrade, housing_type, now or self.clock())

    async def pay_rent(self, weeks: int = 1, now: datetime | None = None):
        return await self.execute(self.housing.pay_rent, now or self.clock(), weeks)

    # --- creative pipeline ---

    async def create_song(
        self,
        title: str,
        genre: SongGenre,
        mood: SongMood,
        primary_instrument: SkillType,
        now: datetime | None = None,
    ):
        return await self.execute(
            self.songs.create_song, title, genre, mood, primary_instrument, now or self.clock()
        )

    async def create_setlist(self, name: str, song_ids: list[UUID]):
        return await self.execute(self.setlists.create_setlist, name, song_ids)

    async def rehearse_setlist(self, setlist_id: UUID, hours: float):
        return await self.execute(self.setlists.rehearse, setlist_id, hours)

    async def add_setlist_song(self, setlist_id: UUID, song_id: UUID):
        return await self.execute(self.setlists.add_song, setlist_id, song_id)

    async def remove_setlist_song(self, setlist_id: UUID, song_id: UUID):
        return await self.execute(self.setlists.remove_song, setlist_id, song_id)

    async def record_song(self, song_id: UUID, studio_tier: StudioTier, hours: float, now: datetime | None = None):
        return await self.execute(self.recording.record_song, song_id, studio_tier, hours, now or self.clock())

    async def publish_release(
        self, title: str, release_type: ReleaseType, recording_ids: list[UUID], now: datetime | None = None
    ):
        return await self.execute(
            self.releases.publish_release, title, release_type, recording_ids, now or self.clock()
        )

    async def book_gig(
        self,
        venue_id: str,
        setlist_id: UUID,
        scheduled_at: datetime,
        ticket_price: Decimal,
        now: datetime | None = None,
    ):
        return await self.execute(
            self.gigs.book_gig, venue_id, setlist_id, scheduled_at, ticket_price, now or self.clock()
        )

    async def cancel_gig(self, gig_id: UUID):
        return await self.execute(self.gigs.cancel_gig, gig_id)

    async def _committed(self, state: GameState) -> None:
        # runs before the swap; a failing hook leaves the canonical state untouched
        if self.on_commit is not None:
            await self.on_commit(state)

    async def _publish(self, event: str, payload: dict) -> None:
        if self.redis is None:
            return
        await publish_event(self.redis, self.player_id, {"event": event, "data": payload})
