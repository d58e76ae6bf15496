"""Unit tests: idle progression tick."""
from datetime import timedelta
from decimal import Decimal

import pytest

from cadence.game.constants import GigStatus, HousingType, JobType, ReleaseType, SkillType, SlotType, StudioTier
from cadence.models import PracticeActivity, Recording, RestActivity
from cadence.services.equipment import EquipmentManager
from cadence.services.gigs import GigManager
from cadence.services.housing import HousingManager
from cadence.services.idle import IdleProgressionManager, process_idle_progress
from cadence.services.jobs import JobPaymentManager
from cadence.services.periodic import PeriodicProcessor
from cadence.services.releases import ReleaseManager
from cadence.services.setlists import SetlistManager

idle = IdleProgressionManager()


def _practice(state, now, skill=SkillType.GUITAR):
    state.slot(SlotType.FREE_TIME).start(PracticeActivity(instrument=skill), now)


def test_practice_one_hour(state, now):
    _practice(state, now)
    new_state, report = idle.advance(state, now + timedelta(hours=1))
    # 10 xp/h * (0.7 + 0.35) * ((1.0 + 1.15) / 2)
    assert new_state.get_skill(SkillType.GUITAR).current_xp == 11
    assert report.xp_gained == {SkillType.GUITAR: 11}
    assert new_state.player.last_sync_at == now + timedelta(hours=1)


def test_tick_does_not_mutate_input(state, now):
    _practice(state, now)
    idle.advance(state, now + timedelta(hours=1))
    assert state.get_skill(SkillType.GUITAR).current_xp == 0
    assert state.player.last_sync_at == now


def test_split_ticks_match_single_tick(state, now):
    _practice(state, now)
    half, _ = idle.advance(state, now + timedelta(minutes=30))
    full, _ = idle.advance(half, now + timedelta(hours=1))
    assert full.get_skill(SkillType.GUITAR).current_xp == 11


def test_no_double_credit(state, now):
    _practice(state, now)
    later = now + timedelta(hours=1)
    once, _ = idle.advance(state, later)
    twice, report = idle.advance(once, later)
    assert twice.get_skill(SkillType.GUITAR).current_xp == 11
    assert report.xp_gained == {}


def test_many_small_ticks_accumulate(state, now):
    _practice(state, now)
    current = state
    for minute in range(1, 61):
        current, _ = idle.advance(current, now + timedelta(minutes=minute))
    assert current.get_skill(SkillType.GUITAR).current_xp == 11


def test_practice_fatigue_after_four_hours(state, now):
    _practice(state, now)
    new_state, _ = idle.advance(state, now + timedelta(hours=6))
    assert new_state.player.health == 78
    assert new_state.player.mood == 69


def test_practice_fatigue_split_across_ticks(state, now):
    _practice(state, now)
    mid, _ = idle.advance(state, now + timedelta(hours=3))
    assert mid.player.health == 80
    end, _ = idle.advance(mid, now + timedelta(hours=6))
    assert end.player.health == 78
    assert end.player.mood == 69


def test_practice_wears_best_equipment(state, now):
    guitar = EquipmentManager().purchase(state, "guitar_basic")
    _practice(state, now)
    new_state, _ = idle.advance(state, now + timedelta(hours=1))
    assert new_state.get_equipment(guitar.id).durability == 99
    assert state.get_equipment(guitar.id).durability == 100


def test_rest_recovers_faster_when_low(state, now):
    state.player.health = 20
    state.slot(SlotType.FREE_TIME).start(RestActivity(), now)
    new_state, report = idle.advance(state, now + timedelta(hours=1))
    assert new_state.player.health == 35
    assert new_state.player.mood == 75
    assert report.health_change == 15


def test_rest_clamped_at_100(state, now):
    state.player.health = 95
    state.player.mood = 99
    state.slot(SlotType.FREE_TIME).start(RestActivity(), now)
    new_state, _ = idle.advance(state, now + timedelta(hours=3))
    assert new_state.player.health == 100
    assert new_state.player.mood == 100


def test_rest_uses_housing_quality(rich_state, now):
    HousingManager().rent_housing(rich_state, HousingType.PENTHOUSE, "istanbul", now)
    rich_state.player.health = 60
    rich_state.slot(SlotType.FREE_TIME).start(RestActivity(), now)
    new_state, _ = idle.advance(rich_state, now + timedelta(hours=1))
    assert new_state.player.health == 78


def test_job_overwork(state, now):
    JobPaymentManager().start_job(state, JobType.BARISTA, now)
    new_state, _ = idle.advance(state, now + timedelta(hours=10))
    assert new_state.player.health == 76
    assert new_state.player.mood == 68


def test_tick_pays_due_wages(state, now):
    JobPaymentManager().start_job(state, JobType.WAITER, now)
    state.primary_focus.accrued_until = now + timedelta(days=7)
    new_state, report = idle.advance(state, now + timedelta(days=7))
    assert report.payments_count == 1
    assert new_state.wallet.balance == 700


def test_tick_runs_due_gigs(state, now, add_song):
    ids = [add_song(state, 60).id for _ in range(3)]
    setlist = SetlistManager().create_setlist(state, "Set", ids)
    gig = GigManager().book_gig(state, "babylon", setlist.id, now + timedelta(hours=1), 5, now)
    early, report = idle.advance(state, now + timedelta(minutes=30))
    assert early.get_gig(gig.id).status == GigStatus.BOOKED
    later, report = idle.advance(early, now + timedelta(hours=2))
    assert later.get_gig(gig.id).status == GigStatus.COMPLETED
    assert report.gigs_completed[0].gig_id == gig.id
    assert later.get_gig(gig.id).result is not None


def test_gig_with_missing_setlist_is_cancelled(state, now, add_song):
    ids = [add_song(state, 60).id for _ in range(3)]
    setlist = SetlistManager().create_setlist(state, "Set", ids)
    gig = GigManager().book_gig(state, "babylon", setlist.id, now + timedelta(hours=1), 5, now)
    state.remove_setlist(setlist.id)
    new_state, report = idle.advance(state, now + timedelta(hours=2))
    assert new_state.get_gig(gig.id).status == GigStatus.CANCELLED
    assert report.gigs_cancelled == [gig.id]


def test_missing_skill_skips_slot(state, now):
    _practice(state, now)
    del state.skills[SkillType.GUITAR]
    state.slot(SlotType.PRIMARY_FOCUS).start(RestActivity(), now)
    state.player.mood = 50
    new_state, _ = idle.advance(state, now + timedelta(hours=1))
    assert new_state.player.mood == 55


def test_periodic_streaming_and_rent(rich_state, now, add_song, fixed_random):
    releases = ReleaseManager(fixed_random(1.0))
    housing = HousingManager()
    manager = IdleProgressionManager(periodic=PeriodicProcessor(housing, releases))
    song = add_song(rich_state, 80)
    rec = Recording(song_id=song.id, studio_tier=StudioTier.LEGENDARY, hours=1, cost=0, quality=80)
    rich_state.add_recording(rec)
    releases.publish_release(rich_state, "Hit", ReleaseType.SINGLE, [rec.id], now)
    housing.rent_housing(rich_state, HousingType.STUDIO, "istanbul", now)
    balance = rich_state.wallet.balance

    new_state, report = manager.advance(rich_state, now + timedelta(days=8))
    assert report.streaming_revenue == Decimal("38.40")
    assert report.rent_status == "paid"
    assert new_state.wallet.balance == balance + Decimal("38.40") - 140
    assert new_state.last_streaming_update_at == now + timedelta(days=7)


def test_process_idle_progress_returns_snapshot(state, now):
    _practice(state, now)
    new_state = process_idle_progress(state, now + timedelta(hours=1))
    assert new_state is not state
    assert new_state.get_skill(SkillType.GUITAR).current_xp == 11
