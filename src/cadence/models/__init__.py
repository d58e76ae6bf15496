"""Domain models."""
from cadence.models.activity import (
    Activity,
    GigActivity,
    JobActivity,
    PracticeActivity,
    RehearsalActivity,
    RestActivity,
    TimeSlot,
)
from cadence.models.creative import Gig, GigResult, Recording, Release, Setlist, Song
from cadence.models.economy import Equipment, Housing, JobPayment
from cadence.models.player import Player, Skill, Wallet
from cadence.models.state import GameState

__all__ = [
    "Activity",
    "GigActivity",
    "JobActivity",
    "PracticeActivity",
    "RehearsalActivity",
    "RestActivity",
    "TimeSlot",
    "Gig",
    "GigResult",
    "Recording",
    "Release",
    "Setlist",
    "Song",
    "Equipment",
    "Housing",
    "JobPayment",
    "Player",
    "Skill",
    "Wallet",
    "GameState",
]
