"""Gig booking and performance."""
from __future__ import annotations

import logging
from datetime import datetime, timezone
from decimal import Decimal
from uuid import UUID

from cadence.core.errors import InsufficientFunds, InvalidTransition, NotFound, ValidationFailure
from cadence.game.catalog import VENUES_BY_ID, Venue
from cadence.game.constants import (
    GIG_GOOD_QUALITY,
    GIG_GREAT_QUALITY,
    GIG_HEALTH_COST,
    GigStatus,
    SkillType,
)
from cadence.game.formulas import (
    gig_attendance,
    gig_fame_gained,
    gig_fans_gained,
    gig_payout,
    gig_performance_quality,
    gig_reference_price,
    round_money,
)
from cadence.models.creative import Gig, GigResult
from cadence.models.state import GameState
from cadence.services.health_mood import HealthMoodManager

logger = logging.getLogger(__name__)


def _normalize_ts(ts: datetime) -> datetime:
    if ts.tzinfo is None:
        return ts.replace(tzinfo=timezone.utc)
    return ts


def get_venue(venue_id: str) -> Venue:
    venue = VENUES_BY_ID.get(venue_id)
    if venue is None:
        raise NotFound("venue", venue_id)
    return venue


class GigManager:
    """Service for gigs."""

    def projected_attendance(self, state: GameState, venue: Venue, ticket_price: Decimal) -> int:
        return gig_attendance(
            venue.capacity,
            state.player.fans,
            state.player.fame,
            ticket_price,
            gig_reference_price(venue.venue_type),
        )

    def book_gig(
        self,
        state: GameState,
        venue_id: str,
        setlist_id: UUID,
        scheduled_at: datetime,
        ticket_price: Decimal,
        now: datetime,
    ) -> Gig:
        """Book a gig; naive ``scheduled_at`` is taken as UTC."""
        scheduled_at = _normalize_ts(scheduled_at)
        venue = get_venue(venue_id)
        if state.player.fame < venue.min_fame:
            raise InvalidTransition(
                f"{venue.name} requires {venue.min_fame} fame",
                required=venue.min_fame,
                have=state.player.fame,
            )
        state.get_setlist(setlist_id)
        if ticket_price < 0:
            raise ValidationFailure("ticket price must be non-negative", ticket_price=ticket_price)
        ticket_price = round_money(ticket_price)
        if not state.wallet.can_afford(venue.booking_cost):
            raise InsufficientFunds(venue.booking_cost, state.wallet.balance)
        if scheduled_at <= now:
            raise InvalidTransition("gig must be scheduled in the future", scheduled_at=scheduled_at.isoformat())

        state.wallet.deduct_expense(venue.booking_cost)
        gig = Gig(
            venue_id=venue.id,
            setlist_id=setlist_id,
            scheduled_at=scheduled_at,
            ticket_price=ticket_price,
            booking_cost=venue.booking_cost,
            expected_attendance=venue.capacity // 2,
        )
        state.add_gig(gig)
        logger.info("gig_booked venue=%s at=%s price=%s", venue.id, scheduled_at.isoformat(), ticket_price)
        return gig

    def execute_gig(self, state: GameState, gig_id: UUID) -> GigResult:
        gig = state.get_gig(gig_id)
        if gig.status != GigStatus.BOOKED:
            raise InvalidTransition(f"gig is {gig.status.value}", gig_id=str(gig_id))
        venue = get_venue(gig.venue_id)
        setlist = state.get_setlist(gig.setlist_id)
        performance = state.get_skill(SkillType.PERFORMANCE)
        player = state.player

        attendance = self.projected_attendance(state, venue, gig.ticket_price)
        quality = gig_performance_quality(
            setlist.quality,
            performance.current_level,
            player.health,
            player.mood,
            HealthMoodManager.performance_quality_modifier(player.health, player.mood),
        )
        gross, net = gig_payout(attendance, gig.ticket_price)
        fans = gig_fans_gained(attendance, quality)
        fame = gig_fame_gained(quality)

        state.wallet.add_income(net)
        player.add_fans(fans)
        player.add_fame(fame)
        performance.add_xp(10 + quality // 5)
        player.adjust_health(-GIG_HEALTH_COST)

        boost = HealthMoodManager.gig_mood_boost(attendance, quality)
        if quality >= GIG_GREAT_QUALITY:
            mood_change = player.adjust_mood(boost)
        elif quality >= GIG_GOOD_QUALITY:
            mood_change = player.adjust_mood(boost // 2)
        else:
            expected = gig.expected_attendance or venue.capacity // 2
            mood_change = player.adjust_mood(-HealthMoodManager.failed_gig_mood_loss(attendance, expected))

        result = GigResult(
            attendance=attendance,
            performance_quality=quality,
            gross_revenue=gross,
            net_payout=net,
            fans_gained=fans,
            fame_gained=fame,
            mood_change=mood_change,
        )
        gig.result = result
        gig.status = GigStatus.COMPLETED
        logger.info(
            "gig_completed id=%s attendance=%s quality=%s net=%s",
            gig.id,
            attendance,
            quality,
            net,
        )
        return result

    def cancel_gig(self, state: GameState, gig_id: UUID) -> Gig:
        """Cancel a booked gig. The booking cost is not refunded."""
        gig = state.get_gig(gig_id)
        if gig.status != GigStatus.BOOKED:
            raise InvalidTransition(f"gig is {gig.status.value}", gig_id=str(gig_id))
        gig.status = GigStatus.CANCELLED
        return gig
