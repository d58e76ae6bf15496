"""Daily housing processing and weekly streaming payouts.

Runs inside the tick but only fires once its interval has elapsed since the
timestamp stored on the state.
"""
from __future__ import annotations

import logging
from datetime import datetime, timedelta

from cadence.core.config import settings
from cadence.models.state import GameState
from cadence.services.housing import HousingManager
from cadence.services.releases import ReleaseManager

logger = logging.getLogger(__name__)


class PeriodicProcessor:
    def __init__(
        self,
        housing: HousingManager | None = None,
        releases: ReleaseManager | None = None,
        housing_interval: timedelta | None = None,
        streaming_interval: timedelta | None = None,
    ):
        self.housing = housing or HousingManager()
        self.releases = releases or ReleaseManager()
        self.housing_interval = housing_interval or timedelta(hours=settings.housing_check_interval_hours)
        self.streaming_interval = streaming_interval or timedelta(days=settings.streaming_interval_days)

    def process(self, state: GameState, now: datetime, report) -> None:
        self._housing(state, now, report)
        self._streaming(state, now, report)

    def _housing(self, state: GameState, now: datetime, report) -> None:
        last = state.last_housing_check_at
        if last is None:
            state.last_housing_check_at = now
            return
        periods = int((now - last) / self.housing_interval)
        if periods < 1:
            return
        report.rent_status = self.housing.process_automatic_rent(state, now)
        days = int(periods * self.housing_interval / timedelta(days=1))
        gained = self.housing.apply_daily_mood_bonus(state, days)
        state.last_housing_check_at = last + self.housing_interval * periods
        logger.debug("housing_check periods=%s rent=%s mood_bonus=%s", periods, report.rent_status, gained)

    def _streaming(self, state: GameState, now: datetime, report) -> None:
        last = state.last_streaming_update_at
        if last is None:
            state.last_streaming_update_at = now
            return
        weeks = int((now - last) / self.streaming_interval)
        if weeks < 1:
            return
        report.streaming_revenue = self.releases.process_weekly_streaming(state, weeks)
        state.last_streaming_update_at = last + self.streaming_interval * weeks
