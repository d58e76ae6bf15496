"""Housing: renting, moving between tiers and rent collection."""
from __future__ import annotations

import logging
from datetime import datetime, timedelta
from decimal import Decimal

from cadence.core.errors import InvalidTransition, NotFound, ValidationFailure
from cadence.game.catalog import CITIES_BY_ID, HOUSING_BY_TYPE, cheapest_housing, housing_rank
from cadence.game.constants import RENT_PERIOD_DAYS, HousingType
from cadence.game.formulas import prorated_rent, round_money
from cadence.models.economy import Housing
from cadence.models.state import GameState

logger = logging.getLogger(__name__)

RENT_PERIOD = timedelta(days=RENT_PERIOD_DAYS)


def weekly_rent(housing_type: HousingType, city_id: str) -> Decimal:
    """Base rent scaled by the city's housing multiplier."""
    city = CITIES_BY_ID.get(city_id)
    if city is None:
        raise NotFound("city", city_id)
    return round_money(HOUSING_BY_TYPE[housing_type].base_weekly_rent * city.housing_multiplier)


class HousingManager:
    """Service for housing operations."""

    def rent_housing(self, state: GameState, housing_type: HousingType, city_id: str, now: datetime) -> Housing:
        rent = weekly_rent(housing_type, city_id)
        state.wallet.deduct_expense(rent)
        previous = state.current_housing
        if previous is not None:
            state.player.adjust_reputation(-previous.spec.reputation_bonus)
        housing = Housing(
            housing_type=housing_type,
            city_id=city_id,
            weekly_rent=rent,
            rented_at=now,
            last_rent_payment=now,
            rent_paid_until=now + RENT_PERIOD,
        )
        state.current_housing = housing
        state.player.adjust_reputation(housing.spec.reputation_bonus)
        logger.info("housing_rent type=%s city=%s rent=%s", housing_type.value, city_id, rent)
        return housing

    def upgrade(self, state: GameState, housing_type: HousingType, now: datetime) -> Decimal:
        """Move to a higher tier. Returns the prorated amount charged."""
        housing = self._require_housing(state)
        if housing_rank(housing_type) <= housing_rank(housing.housing_type):
            raise InvalidTransition(
                f"{housing_type.value} is not an upgrade from {housing.housing_type.value}",
                current=housing.housing_type.value,
                requested=housing_type.value,
            )
        new_rent = weekly_rent(housing_type, housing.city_id)
        charge = prorated_rent(housing.weekly_rent, new_rent, housing.days_until_rent_due(now))
        state.wallet.deduct_expense(charge)
        self._move(state, housing, housing_type, new_rent)
        logger.info("housing_upgrade type=%s charge=%s", housing_type.value, charge)
        return charge

    def downgrade(self, state: GameState, housing_type: HousingType, now: datetime) -> Decimal:
        """Move to a lower tier. Returns the prorated amount credited."""
        housing = self._require_housing(state)
        if housing_rank(housing_type) >= housing_rank(housing.housing_type):
            raise InvalidTransition(
                f"{housing_type.value} is not a downgrade from {housing.housing_type.value}",
                current=housing.housing_type.value,
                requested=housing_type.value,
            )
        new_rent = weekly_rent(housing_type, housing.city_id)
        credit = -prorated_rent(housing.weekly_rent, new_rent, housing.days_until_rent_due(now))
        state.wallet.add_income(credit)
        self._move(state, housing, housing_type, new_rent)
        logger.info("housing_downgrade type=%s credit=%s", housing_type.value, credit)
        return credit

    def pay_rent(self, state: GameState, now: datetime, weeks: int = 1) -> datetime:
        """Pay rent for whole weeks. Returns the new paid-until date."""
        if weeks < 1:
            raise ValidationFailure("weeks must be at least 1", weeks=weeks)
        housing = self._require_housing(state)
        state.wallet.deduct_expense(housing.weekly_rent * weeks)
        # overdue rent restarts the period from now instead of stacking on the lapsed date
        start = now if housing.is_overdue(now) else housing.rent_paid_until
        housing.rent_paid_until = start + RENT_PERIOD * weeks
        housing.last_rent_payment = now
        logger.info("housing_pay_rent weeks=%s paid_until=%s", weeks, housing.rent_paid_until.isoformat())
        return housing.rent_paid_until

    def process_automatic_rent(self, state: GameState, now: datetime) -> str | None:
        """Collect overdue rent or fall back to the cheapest tier.

        Returns "paid", "downgraded" or None when nothing happened.
        """
        housing = state.current_housing
        if housing is None or not housing.is_overdue(now):
            return None
        if state.wallet.can_afford(housing.weekly_rent):
            self.pay_rent(state, now, weeks=1)
            return "paid"
        cheapest = cheapest_housing()
        if housing.is_at_eviction_risk(now) and housing.housing_type != cheapest.housing_type:
            days_overdue = housing.days_overdue(now)
            self._move(state, housing, cheapest.housing_type, weekly_rent(cheapest.housing_type, housing.city_id))
            housing.rented_at = now
            housing.rent_paid_until = now + RENT_PERIOD
            logger.warning("housing_forced_downgrade days_overdue=%s", days_overdue)
            return "downgraded"
        return None

    def apply_daily_mood_bonus(self, state: GameState, days: int) -> int:
        housing = state.current_housing
        if housing is None or days <= 0:
            return 0
        return state.player.adjust_mood(housing.spec.daily_mood_bonus * days)

    def rest_multiplier(self, state: GameState) -> float:
        if state.current_housing is None:
            return 1.0
        return state.current_housing.spec.rest_multiplier

    def can_record_at_home(self, state: GameState) -> bool:
        return state.current_housing is not None and state.current_housing.spec.home_recording

    def _move(self, state: GameState, housing: Housing, housing_type: HousingType, new_rent: Decimal) -> None:
        state.player.adjust_reputation(-housing.spec.reputation_bonus)
        housing.housing_type = housing_type
        housing.weekly_rent = new_rent
        state.player.adjust_reputation(housing.spec.reputation_bonus)

    @staticmethod
    def _require_housing(state: GameState) -> Housing:
        if state.current_housing is None:
            raise NotFound("housing", state.player.id)
        return state.current_housing
