"""Game constants and configuration."""
from decimal import Decimal
from enum import Enum


class SkillType(str, Enum):
    GUITAR = "guitar"
    PIANO = "piano"
    DRUMS = "drums"
    BASS = "bass"
    SONGWRITING = "songwriting"
    PERFORMANCE = "performance"
    PRODUCTION = "production"


class EquipmentType(str, Enum):
    GUITAR = "guitar"
    PIANO = "piano"
    DRUMS = "drums"
    BASS = "bass"
    MICROPHONE = "microphone"
    PRODUCTION_GEAR = "production_gear"


class EquipmentTier(str, Enum):
    BASIC = "basic"
    PROFESSIONAL = "professional"
    LEGENDARY = "legendary"


class HousingType(str, Enum):
    """Ordered from cheapest to most expensive."""

    STUDIO = "studio"
    ONE_BEDROOM = "one_bedroom"
    TWO_BEDROOM = "two_bedroom"
    PENTHOUSE = "penthouse"


class StudioTier(str, Enum):
    BASIC = "basic"
    PROFESSIONAL = "professional"
    LEGENDARY = "legendary"


class ReleaseType(str, Enum):
    SINGLE = "single"
    ALBUM = "album"


class VenueType(str, Enum):
    STREET = "street"
    SMALL_CLUB = "small_club"
    MID_CLUB = "mid_club"
    CONCERT_HALL = "concert_hall"
    ARENA = "arena"


class GigStatus(str, Enum):
    BOOKED = "booked"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class PaymentStatus(str, Enum):
    PENDING = "pending"
    PAID = "paid"
    CANCELLED = "cancelled"


class JobType(str, Enum):
    CASHIER = "cashier"
    SALES_CLERK = "sales_clerk"
    BARISTA = "barista"
    WAITER = "waiter"


class SlotType(str, Enum):
    PRIMARY_FOCUS = "primary_focus"
    FREE_TIME = "free_time"


class SongGenre(str, Enum):
    POP = "pop"
    ROCK = "rock"
    JAZZ = "jazz"
    HIP_HOP = "hip_hop"
    ELECTRONIC = "electronic"
    FOLK = "folk"


class SongMood(str, Enum):
    UPBEAT = "upbeat"
    MELANCHOLIC = "melancholic"
    ENERGETIC = "energetic"
    CALM = "calm"


class HealthStatus(str, Enum):
    CRITICAL = "critical"
    POOR = "poor"
    FAIR = "fair"
    GOOD = "good"
    EXCELLENT = "excellent"


class MoodStatus(str, Enum):
    DEPRESSED = "depressed"
    SAD = "sad"
    NEUTRAL = "neutral"
    HAPPY = "happy"
    EUPHORIC = "euphoric"


class QualityTier(str, Enum):
    POOR = "poor"
    AVERAGE = "average"
    GOOD = "good"
    GREAT = "great"
    MASTERPIECE = "masterpiece"


# Player defaults
STARTING_HEALTH = 80
STARTING_MOOD = 70
STARTING_REPUTATION = 50
ATTRIBUTE_MAX = 100

# Skills
MAX_SKILL_LEVEL = 100
XP_CURVE_BASE = 100
XP_CURVE_EXPONENT = 1.5

# Practice: 10 xp per hour before modifiers
PRACTICE_XP_PER_SECOND = 10 / 3600
PRACTICE_MOOD_BASE = 0.7
PRACTICE_MOOD_WEIGHT = 0.5
PRACTICE_FATIGUE_AFTER_HOURS = 4
PRACTICE_FATIGUE_HEALTH_PER_HOUR = 1.0
PRACTICE_FATIGUE_MOOD_PER_HOUR = 0.5

# Rest
REST_HEALTH_PER_HOUR = 10
REST_MOOD_PER_HOUR = 5
REST_LOW_THRESHOLD = 30
REST_LOW_MULTIPLIER = 1.5
REST_MID_THRESHOLD = 50
REST_MID_MULTIPLIER = 1.2

# Jobs
OVERWORK_AFTER_HOURS = 8
OVERWORK_HEALTH_PER_HOUR = 2.0
OVERWORK_MOOD_PER_HOUR = 1.0
PAYMENT_INTERVAL_DAYS = 7
HOURS_PER_WEEK = 168

JOB_WEEKLY_SALARY = {
    JobType.CASHIER: Decimal("150"),
    JobType.SALES_CLERK: Decimal("150"),
    JobType.BARISTA: Decimal("175"),
    JobType.WAITER: Decimal("200"),
}

JOB_DISPLAY_NAMES = {
    JobType.CASHIER: "Cashier",
    JobType.SALES_CLERK: "Sales Clerk",
    JobType.BARISTA: "Barista",
    JobType.WAITER: "Waiter",
}

# Equipment
EQUIPMENT_TIER_BONUS = {
    EquipmentTier.BASIC: 1.0,
    EquipmentTier.PROFESSIONAL: 1.25,
    EquipmentTier.LEGENDARY: 1.5,
}

EQUIPMENT_SKILL = {
    EquipmentType.GUITAR: SkillType.GUITAR,
    EquipmentType.PIANO: SkillType.PIANO,
    EquipmentType.DRUMS: SkillType.DRUMS,
    EquipmentType.BASS: SkillType.BASS,
    EquipmentType.MICROPHONE: SkillType.PERFORMANCE,
    EquipmentType.PRODUCTION_GEAR: SkillType.PRODUCTION,
}

# songwriting has no related gear
SKILL_EQUIPMENT = {skill: eq_type for eq_type, skill in EQUIPMENT_SKILL.items()}

MAX_DURABILITY = 100
USABLE_DURABILITY_ABOVE = 10
NEEDS_REPAIR_BELOW = 50
DURABILITY_LOSS_PER_USE = 1
REPAIR_COST_FACTOR = Decimal("0.3")
SELL_PRICE_FACTOR = Decimal("0.5")

# Housing
RENT_PERIOD_DAYS = 7
RENT_DUE_SOON_DAYS = 2
EVICTION_RISK_DAYS = 7

# Studio: (hourly rate, quality cap)
STUDIO_TIERS = {
    StudioTier.BASIC: (Decimal("50"), 60),
    StudioTier.PROFESSIONAL: (Decimal("150"), 85),
    StudioTier.LEGENDARY: (Decimal("500"), 100),
}
MIN_RECORDING_HOURS = 1
RECORDING_FATIGUE_AFTER_HOURS = 4
PRODUCTION_XP_PER_HOUR = 10
RECORDING_MOOD_BOOST = 5
RECORDING_MOOD_PENALTY = 3
RECORDING_HIGH_QUALITY = 70
RECORDING_LOW_QUALITY = 40

# Songs
SONG_VARIANCE = 10
SONG_VARIANCE_WEIGHT = 0.1
SONGWRITING_MOOD_BONUS = 2

# Setlists
MIN_SETLIST_SONGS = 3
SETLIST_READY_QUALITY = 30
REHEARSAL_BONUS_PER_HOUR = 10
REHEARSAL_BONUS_CAP = 40
REHEARSAL_PERFORMANCE_WEIGHT = 0.2
REHEARSAL_XP_PER_HOUR = 5

# Releases
RELEASE_MIN_TRACKS = {
    ReleaseType.SINGLE: 1,
    ReleaseType.ALBUM: 5,
}
RELEASE_FAME_DIVISOR = {
    ReleaseType.SINGLE: 10,
    ReleaseType.ALBUM: 5,
}
STREAMING_PLAYS_PER_FAME = 10
STREAMING_PLAYS_PER_QUALITY = 5
STREAMING_VARIANCE = (0.8, 1.2)
STREAMING_REVENUE_DIVISOR = 1000

# Gigs
GIG_BASE_DRAW = 20
GIG_FANS_DIVISOR = 10
GIG_FAME_DIVISOR = 1000
GIG_PRICE_SENSITIVITY = 0.3
GIG_REFERENCE_PRICE_SMALL = Decimal("20")
GIG_REFERENCE_PRICE = Decimal("50")
GIG_PAYOUT_SHARE = Decimal("0.7")
GIG_FANS_FACTOR = 0.5
GIG_FAME_FACTOR = 0.1
GIG_HEALTH_COST = 5
GIG_GREAT_QUALITY = 70
GIG_GOOD_QUALITY = 50
GIG_MAX_ATTENDANCE_MOOD = 5

# attendance ratio -> mood loss, checked in order
GIG_DISAPPOINTMENT = (
    (0.3, 15),
    (0.5, 10),
    (0.7, 5),
)

# Health / mood
LOW_ATTRIBUTE_WARNING = 30
HEALTH_XP_MULTIPLIERS = {
    HealthStatus.CRITICAL: 0.5,
    HealthStatus.POOR: 0.7,
    HealthStatus.FAIR: 0.9,
    HealthStatus.GOOD: 1.0,
    HealthStatus.EXCELLENT: 1.2,
}
MOOD_XP_MULTIPLIERS = {
    MoodStatus.DEPRESSED: 0.6,
    MoodStatus.SAD: 0.8,
    MoodStatus.NEUTRAL: 1.0,
    MoodStatus.HAPPY: 1.15,
    MoodStatus.EUPHORIC: 1.3,
}
SONG_QUALITY_MODIFIERS = {
    MoodStatus.DEPRESSED: 0.5,
    MoodStatus.SAD: 0.75,
    MoodStatus.NEUTRAL: 1.0,
    MoodStatus.HAPPY: 1.2,
    MoodStatus.EUPHORIC: 1.5,
}
