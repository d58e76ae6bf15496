"""Game formulas and calculations.

Money values are ``Decimal`` quantized to cents; everything else is int or float.
"""
import math
from decimal import ROUND_HALF_UP, Decimal

from cadence.game.constants import (
    GIG_BASE_DRAW,
    GIG_DISAPPOINTMENT,
    GIG_FAME_DIVISOR,
    GIG_FAME_FACTOR,
    GIG_FANS_DIVISOR,
    GIG_FANS_FACTOR,
    GIG_MAX_ATTENDANCE_MOOD,
    GIG_PAYOUT_SHARE,
    GIG_PRICE_SENSITIVITY,
    GIG_REFERENCE_PRICE,
    GIG_REFERENCE_PRICE_SMALL,
    MAX_DURABILITY,
    MAX_SKILL_LEVEL,
    PRACTICE_MOOD_BASE,
    PRACTICE_MOOD_WEIGHT,
    PRACTICE_XP_PER_SECOND,
    REHEARSAL_BONUS_CAP,
    REHEARSAL_BONUS_PER_HOUR,
    REHEARSAL_PERFORMANCE_WEIGHT,
    REPAIR_COST_FACTOR,
    SELL_PRICE_FACTOR,
    STREAMING_PLAYS_PER_FAME,
    STREAMING_PLAYS_PER_QUALITY,
    STREAMING_REVENUE_DIVISOR,
    XP_CURVE_BASE,
    XP_CURVE_EXPONENT,
    VenueType,
)


def clamp(value: float, low: float = 0, high: float = 100) -> float:
    return max(low, min(high, value))


CENT = Decimal("0.01")


def round_money(amount: Decimal | int | float | str) -> Decimal:
    """Quantize to cents, half up. Floats go through their repr."""
    if not isinstance(amount, Decimal):
        amount = Decimal(str(amount))
    return amount.quantize(CENT, rounding=ROUND_HALF_UP)


def xp_required(level: int) -> int:
    """Calculate cumulative XP for level: floor(100 * level^1.5)."""
    if level <= 0:
        return 0
    return int(XP_CURVE_BASE * math.pow(level, XP_CURVE_EXPONENT))


def level_for_xp(xp: int) -> int:
    """Largest level whose requirement is met, capped at max level."""
    level = 0
    while level < MAX_SKILL_LEVEL and xp >= xp_required(level + 1):
        level += 1
    return level


def practice_xp(seconds: float, mood: float, equipment_bonus: float, health_mood_multiplier: float) -> float:
    """Calculate practice XP (untruncated) for an elapsed window."""
    mood_factor = PRACTICE_MOOD_BASE + mood / 100 * PRACTICE_MOOD_WEIGHT
    return PRACTICE_XP_PER_SECOND * seconds * mood_factor * equipment_bonus * health_mood_multiplier


def overlap_beyond(threshold_hours: float, window_start_hours: float, window_end_hours: float) -> float:
    """Hours of [start, end] (session-relative) that lie beyond the threshold."""
    return max(0.0, window_end_hours - max(threshold_hours, window_start_hours))


def song_quality(songwriting: int, instrument: int, mood: float, variance: float, modifier: float) -> int:
    """Calculate song quality: (0.4*sw + 0.3*instr + 0.2*mood + variance*0.1) * modifier."""
    raw = 0.4 * songwriting + 0.3 * instrument + 0.2 * mood + variance * 0.1
    return int(clamp(raw * modifier))


def setlist_quality(average_quality: int, rehearsal_hours: float, performance_level: int) -> int:
    """Calculate setlist quality: avg + min(10*hours, 40) + 0.2*performance, capped at 100."""
    rehearsal_bonus = min(int(rehearsal_hours * REHEARSAL_BONUS_PER_HOUR), REHEARSAL_BONUS_CAP)
    performance_bonus = int(performance_level * REHEARSAL_PERFORMANCE_WEIGHT)
    return int(min(100, average_quality + rehearsal_bonus + performance_bonus))


def recording_quality(
    song_quality_value: int,
    performance_level: int,
    production_level: int,
    quality_cap: int,
    modifier: float,
) -> int:
    """Calculate recording quality, capped at the studio tier's quality cap."""
    raw = (
        0.4 * song_quality_value
        + 0.3 * performance_level
        + 0.2 * production_level
        + 0.1 * quality_cap
    )
    return int(clamp(raw * modifier, 0, quality_cap))


def release_fame(average_quality: int, divisor: int) -> int:
    return average_quality // divisor


def streaming_plays(fame: int, average_quality: int, variance: float) -> int:
    base = fame * STREAMING_PLAYS_PER_FAME + average_quality * STREAMING_PLAYS_PER_QUALITY
    return int(base * variance)


def streaming_revenue(plays: int, average_quality: int) -> Decimal:
    return round_money(Decimal(plays * average_quality) / STREAMING_REVENUE_DIVISOR)


def gig_reference_price(venue_type: VenueType) -> Decimal:
    if venue_type in (VenueType.STREET, VenueType.SMALL_CLUB):
        return GIG_REFERENCE_PRICE_SMALL
    return GIG_REFERENCE_PRICE


def gig_attendance(capacity: int, fans: int, fame: int, ticket_price: Decimal, reference_price: Decimal) -> int:
    """Calculate attendance: min(capacity, baseDraw * fameMultiplier * priceSensitivity)."""
    base_draw = GIG_BASE_DRAW + fans / GIG_FANS_DIVISOR
    fame_multiplier = 1 + fame / GIG_FAME_DIVISOR
    price_sensitivity = 1 - GIG_PRICE_SENSITIVITY * (float(ticket_price) / float(reference_price))
    return max(0, min(capacity, int(base_draw * fame_multiplier * price_sensitivity)))


def gig_performance_quality(
    setlist_quality_value: int, performance_level: int, health: float, mood: float, modifier: float
) -> int:
    raw = 0.5 * setlist_quality_value + 0.3 * performance_level + 0.1 * health + 0.1 * mood
    return int(clamp(raw * modifier))


def gig_payout(attendance: int, ticket_price: Decimal) -> tuple[Decimal, Decimal]:
    """Return (gross, net) ticket revenue."""
    gross = round_money(ticket_price) * attendance
    return round_money(gross), round_money(gross * GIG_PAYOUT_SHARE)


def gig_fans_gained(attendance: int, quality: int) -> int:
    return int(attendance * quality / 100 * GIG_FANS_FACTOR)


def gig_fame_gained(quality: int) -> int:
    return int(quality * GIG_FAME_FACTOR)


def gig_mood_boost(attendance: int, quality: int) -> int:
    """Mood boost after a gig: min(attendance // 100, 5) + quality // 20."""
    return min(attendance // 100, GIG_MAX_ATTENDANCE_MOOD) + quality // 20


def gig_mood_loss(attendance: int, expected: int) -> int:
    """Mood loss from attendance below expectation."""
    if expected <= 0:
        return 0
    ratio = attendance / expected
    for threshold, loss in GIG_DISAPPOINTMENT:
        if ratio < threshold:
            return loss
    return 0


def equipment_bonus(tier_bonus: float, durability: int) -> float:
    return tier_bonus * durability / MAX_DURABILITY


def repair_cost(base_price: Decimal, durability: int) -> Decimal:
    """Calculate repair cost: base * (100 - durability)/100 * 0.3."""
    return round_money(base_price * (MAX_DURABILITY - durability) / MAX_DURABILITY * REPAIR_COST_FACTOR)


def sell_price(base_price: Decimal, durability: int) -> Decimal:
    """Calculate sell price: base * 0.5 * durability/100."""
    return round_money(base_price * SELL_PRICE_FACTOR * durability / MAX_DURABILITY)


def current_value(base_price: Decimal, durability: int) -> Decimal:
    return round_money(base_price * durability / MAX_DURABILITY)


def prorated_rent(old_weekly: Decimal, new_weekly: Decimal, days_remaining: int) -> Decimal:
    """Prorated settlement: (new - old)/7 * days remaining in the period."""
    return round_money((new_weekly - old_weekly) / 7 * days_remaining)
