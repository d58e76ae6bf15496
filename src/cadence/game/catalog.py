"""Static reference data: cities, venues, equipment and housing catalogs."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from cadence.game.constants import (
    EQUIPMENT_TIER_BONUS,
    EquipmentTier,
    EquipmentType,
    HousingType,
    VenueType,
)


@dataclass(frozen=True)
class City:
    id: str
    name: str
    country: str
    music_focus: tuple[str, ...]
    housing_multiplier: Decimal


@dataclass(frozen=True)
class Venue:
    id: str
    name: str
    city_id: str
    capacity: int
    booking_cost: Decimal
    min_fame: int
    venue_type: VenueType


@dataclass(frozen=True)
class EquipmentItem:
    id: str
    equipment_type: EquipmentType
    tier: EquipmentTier
    name: str
    base_price: Decimal

    @property
    def bonus(self) -> float:
        return EQUIPMENT_TIER_BONUS[self.tier]


@dataclass(frozen=True)
class HousingSpec:
    housing_type: HousingType
    name: str
    base_weekly_rent: Decimal
    storage_slots: int
    rest_multiplier: float
    reputation_bonus: int
    home_recording: bool
    home_recording_cap: int
    daily_mood_bonus: int


CITIES: list[City] = [
    City(id="los_angeles", name="Los Angeles", country="USA", music_focus=("Pop", "Hip-Hop", "Film Music"), housing_multiplier=Decimal("1.5")),
    City(id="new_york", name="New York", country="USA", music_focus=("Jazz", "Indie", "Hip-Hop"), housing_multiplier=Decimal("1.6")),
    City(id="london", name="London", country="UK", music_focus=("Rock", "Electronic", "Pop"), housing_multiplier=Decimal("1.4")),
    City(id="istanbul", name="Istanbul", country="Turkey", music_focus=("Pop", "Folk", "Fusion"), housing_multiplier=Decimal("0.7")),
    City(id="tokyo", name="Tokyo", country="Japan", music_focus=("J-Pop", "Electronic", "Idol"), housing_multiplier=Decimal("1.3")),
]

DEFAULT_CITY_ID = "los_angeles"

VENUES: list[Venue] = [
    Venue(id="the_troubadour", name="The Troubadour", city_id="los_angeles", capacity=100, booking_cost=Decimal("50"), min_fame=0, venue_type=VenueType.SMALL_CLUB),
    Venue(id="mercury_lounge", name="Mercury Lounge", city_id="new_york", capacity=80, booking_cost=Decimal("50"), min_fame=0, venue_type=VenueType.SMALL_CLUB),
    Venue(id="the_garage", name="The Garage", city_id="london", capacity=120, booking_cost=Decimal("50"), min_fame=0, venue_type=VenueType.SMALL_CLUB),
    Venue(id="babylon", name="Babylon", city_id="istanbul", capacity=90, booking_cost=Decimal("50"), min_fame=0, venue_type=VenueType.SMALL_CLUB),
    Venue(id="club_quattro", name="Club Quattro", city_id="tokyo", capacity=110, booking_cost=Decimal("50"), min_fame=0, venue_type=VenueType.SMALL_CLUB),
]

EQUIPMENT_CATALOG: list[EquipmentItem] = [
    # guitar
    EquipmentItem(id="guitar_basic", equipment_type=EquipmentType.GUITAR, tier=EquipmentTier.BASIC, name="Beginner's Acoustic", base_price=Decimal("150")),
    EquipmentItem(id="guitar_professional", equipment_type=EquipmentType.GUITAR, tier=EquipmentTier.PROFESSIONAL, name="Fender Stratocaster", base_price=Decimal("1200")),
    EquipmentItem(id="guitar_legendary", equipment_type=EquipmentType.GUITAR, tier=EquipmentTier.LEGENDARY, name="Gibson Les Paul Custom", base_price=Decimal("4500")),
    # piano
    EquipmentItem(id="piano_basic", equipment_type=EquipmentType.PIANO, tier=EquipmentTier.BASIC, name="Digital Keyboard", base_price=Decimal("200")),
    EquipmentItem(id="piano_professional", equipment_type=EquipmentType.PIANO, tier=EquipmentTier.PROFESSIONAL, name="Yamaha Digital Piano", base_price=Decimal("1500")),
    EquipmentItem(id="piano_legendary", equipment_type=EquipmentType.PIANO, tier=EquipmentTier.LEGENDARY, name="Steinway Grand Piano", base_price=Decimal("50000")),
    # drums
    EquipmentItem(id="drums_basic", equipment_type=EquipmentType.DRUMS, tier=EquipmentTier.BASIC, name="Entry Drum Kit", base_price=Decimal("300")),
    EquipmentItem(id="drums_professional", equipment_type=EquipmentType.DRUMS, tier=EquipmentTier.PROFESSIONAL, name="Pearl Export Series", base_price=Decimal("2000")),
    EquipmentItem(id="drums_legendary", equipment_type=EquipmentType.DRUMS, tier=EquipmentTier.LEGENDARY, name="DW Collector's Series", base_price=Decimal("8000")),
    # bass
    EquipmentItem(id="bass_basic", equipment_type=EquipmentType.BASS, tier=EquipmentTier.BASIC, name="Starter Bass Guitar", base_price=Decimal("180")),
    EquipmentItem(id="bass_professional", equipment_type=EquipmentType.BASS, tier=EquipmentTier.PROFESSIONAL, name="Fender Precision Bass", base_price=Decimal("1400")),
    EquipmentItem(id="bass_legendary", equipment_type=EquipmentType.BASS, tier=EquipmentTier.LEGENDARY, name="Music Man StingRay", base_price=Decimal("3500")),
    # microphone
    EquipmentItem(id="microphone_basic", equipment_type=EquipmentType.MICROPHONE, tier=EquipmentTier.BASIC, name="USB Microphone", base_price=Decimal("80")),
    EquipmentItem(id="microphone_professional", equipment_type=EquipmentType.MICROPHONE, tier=EquipmentTier.PROFESSIONAL, name="Shure SM7B", base_price=Decimal("400")),
    EquipmentItem(id="microphone_legendary", equipment_type=EquipmentType.MICROPHONE, tier=EquipmentTier.LEGENDARY, name="Neumann U87", base_price=Decimal("3500")),
    # production gear
    EquipmentItem(id="production_gear_basic", equipment_type=EquipmentType.PRODUCTION_GEAR, tier=EquipmentTier.BASIC, name="Basic Audio Interface", base_price=Decimal("100")),
    EquipmentItem(id="production_gear_professional", equipment_type=EquipmentType.PRODUCTION_GEAR, tier=EquipmentTier.PROFESSIONAL, name="Focusrite Scarlett 18i20", base_price=Decimal("550")),
    EquipmentItem(id="production_gear_legendary", equipment_type=EquipmentType.PRODUCTION_GEAR, tier=EquipmentTier.LEGENDARY, name="Universal Audio Apollo", base_price=Decimal("2500")),
]

# catalog order is the upgrade order
HOUSING_CATALOG: list[HousingSpec] = [
    HousingSpec(HousingType.STUDIO, "Studio Apartment", Decimal("200"), storage_slots=5, rest_multiplier=1.0, reputation_bonus=0, home_recording=False, home_recording_cap=0, daily_mood_bonus=0),
    HousingSpec(HousingType.ONE_BEDROOM, "One Bedroom", Decimal("400"), storage_slots=10, rest_multiplier=1.2, reputation_bonus=5, home_recording=False, home_recording_cap=0, daily_mood_bonus=1),
    HousingSpec(HousingType.TWO_BEDROOM, "Two Bedroom", Decimal("700"), storage_slots=20, rest_multiplier=1.4, reputation_bonus=10, home_recording=True, home_recording_cap=60, daily_mood_bonus=2),
    HousingSpec(HousingType.PENTHOUSE, "Penthouse", Decimal("1500"), storage_slots=50, rest_multiplier=1.8, reputation_bonus=25, home_recording=True, home_recording_cap=85, daily_mood_bonus=5),
]

CITIES_BY_ID = {c.id: c for c in CITIES}
VENUES_BY_ID = {v.id: v for v in VENUES}
EQUIPMENT_BY_ID = {e.id: e for e in EQUIPMENT_CATALOG}
HOUSING_BY_TYPE = {h.housing_type: h for h in HOUSING_CATALOG}


def housing_rank(housing_type: HousingType) -> int:
    return [h.housing_type for h in HOUSING_CATALOG].index(housing_type)


def cheapest_housing() -> HousingSpec:
    return HOUSING_CATALOG[0]


def venues_in_city(city_id: str) -> list[Venue]:
    return [v for v in VENUES if v.city_id == city_id]


def equipment_of_type(equipment_type: EquipmentType) -> list[EquipmentItem]:
    return [e for e in EQUIPMENT_CATALOG if e.equipment_type == equipment_type]
