"""Unit tests: songs, setlists, recordings and releases."""
from decimal import Decimal

import pytest

from cadence.core.errors import InsufficientFunds, InvalidTransition, NotFound, ValidationFailure
from cadence.game.constants import ReleaseType, SkillType, SongGenre, SongMood, StudioTier
from cadence.models import Recording
from cadence.services.recording import RecordingManager
from cadence.services.releases import ReleaseManager
from cadence.services.setlists import SetlistManager
from cadence.services.songs import SongManager

setlists = SetlistManager()
recording_manager = RecordingManager()


def _recording(state, song, quality):
    recording = Recording(song_id=song.id, studio_tier=StudioTier.LEGENDARY, hours=1, cost=0, quality=quality)
    state.add_recording(recording)
    song.recording_id = recording.id
    return recording


# --- songs ---


def test_create_song_quality_and_rewards(state, now, fixed_random):
    songs = SongManager(fixed_random(0.0))
    song = songs.create_song(state, "First Light", SongGenre.FOLK, SongMood.CALM, SkillType.GUITAR, now)
    # (0.2 * mood 70) * happy modifier 1.2
    assert song.quality == 16
    assert state.get_skill(SkillType.SONGWRITING).current_xp == 20 + 8
    assert state.get_skill(SkillType.GUITAR).current_xp == 5 + 1
    assert state.player.mood == 72
    assert state.songs == [song]
    assert song.recording_id is None and not song.is_released


def test_song_quality_clamped(state, now, fixed_random, set_level):
    set_level(state, SkillType.SONGWRITING, 100)
    set_level(state, SkillType.PIANO, 100)
    state.player.mood = 100
    song = SongManager(fixed_random(10.0)).create_song(
        state, "Anthem", SongGenre.POP, SongMood.UPBEAT, SkillType.PIANO, now
    )
    assert song.quality == 100


def test_song_requires_title(state, now):
    with pytest.raises(ValidationFailure):
        SongManager().create_song(state, "  ", SongGenre.POP, SongMood.UPBEAT, SkillType.PIANO, now)
    assert state.songs == []


# --- setlists ---


def test_setlist_scenario(state, add_song, set_level):
    ids = [add_song(state, q).id for q in (40, 60, 80)]
    set_level(state, SkillType.PERFORMANCE, 10)
    setlist = setlists.create_setlist(state, "Main set", ids)
    assert setlist.quality == 0
    assert not setlist.is_ready
    assert setlist.readiness == "Needs more rehearsal"

    quality = setlists.rehearse(state, setlist.id, 2)
    assert quality == 82
    assert setlist.rehearsal_hours == 2
    assert setlist.is_ready
    assert setlist.readiness == "Polished and tight"
    perf = state.get_skill(SkillType.PERFORMANCE)
    assert perf.current_xp == 3162 + 10


def test_setlist_quality_never_drops(state, add_song):
    ids = [add_song(state, 10).id for _ in range(3)]
    setlist = setlists.create_setlist(state, "Low", ids)
    setlist.quality = 95
    assert setlists.rehearse(state, setlist.id, 1) == 95


def test_rehearsal_bonus_capped(state, add_song):
    ids = [add_song(state, 50).id for _ in range(3)]
    setlist = setlists.create_setlist(state, "Long", ids)
    assert setlists.rehearse(state, setlist.id, 10) == 90


def test_setlist_validation(state, add_song):
    a = add_song(state, 50)
    b = add_song(state, 50)
    with pytest.raises(ValidationFailure):
        setlists.create_setlist(state, "Short", [a.id, b.id])
    with pytest.raises(ValidationFailure):
        setlists.create_setlist(state, "Dupes", [a.id, a.id, b.id])
    missing = add_song(state, 50)
    state.songs.remove(missing)
    with pytest.raises(NotFound):
        setlists.create_setlist(state, "Ghost", [a.id, b.id, missing.id])
    assert state.setlists == []


def test_edit_setlist_songs(state, add_song):
    ids = [add_song(state, 50).id for _ in range(3)]
    setlist = setlists.create_setlist(state, "Set", ids)
    extra = add_song(state, 70)

    setlists.add_song(state, setlist.id, extra.id)
    assert setlist.song_ids == ids + [extra.id]
    with pytest.raises(ValidationFailure):
        setlists.add_song(state, setlist.id, extra.id)

    setlists.remove_song(state, setlist.id, ids[0])
    assert setlist.song_ids == ids[1:] + [extra.id]
    with pytest.raises(ValidationFailure):
        setlists.remove_song(state, setlist.id, ids[0])


def test_rehearse_requires_positive_hours(state, add_song):
    ids = [add_song(state, 50).id for _ in range(3)]
    setlist = setlists.create_setlist(state, "Set", ids)
    with pytest.raises(ValidationFailure):
        setlists.rehearse(state, setlist.id, 0)


# --- recordings ---


def test_record_song(state, now, add_song):
    song = add_song(state, 80)
    recording = recording_manager.record_song(state, song.id, StudioTier.BASIC, 2, now)
    # (0.4*80 + 0.1*60) * (0.5 + 0.8 * (0.32 + 0.42))
    assert recording.quality == 41
    assert recording.cost == 100
    assert state.wallet.balance == 400
    assert song.recording_id == recording.id
    assert state.get_skill(SkillType.PRODUCTION).current_xp == 20
    assert state.player.mood == 70


def test_recording_capped_by_studio(state, now, add_song, set_level):
    set_level(state, SkillType.PERFORMANCE, 100)
    set_level(state, SkillType.PRODUCTION, 100)
    song = add_song(state, 100)
    recording = recording_manager.record_song(state, song.id, StudioTier.BASIC, 1, now)
    assert recording.quality == 60
    assert state.player.mood == 70


def test_long_session_costs_health(rich_state, now, add_song):
    song = add_song(rich_state, 80)
    recording_manager.record_song(rich_state, song.id, StudioTier.BASIC, 6, now)
    assert rich_state.player.health == 78


def test_record_twice_rejected(state, now, add_song):
    song = add_song(state, 80)
    recording_manager.record_song(state, song.id, StudioTier.BASIC, 1, now)
    balance = state.wallet.balance
    with pytest.raises(InvalidTransition):
        recording_manager.record_song(state, song.id, StudioTier.BASIC, 1, now)
    assert state.wallet.balance == balance
    assert len(state.recordings) == 1


def test_record_validation(state, now, add_song):
    song = add_song(state, 80)
    with pytest.raises(ValidationFailure):
        recording_manager.record_song(state, song.id, StudioTier.BASIC, 0.5, now)
    with pytest.raises(InsufficientFunds):
        recording_manager.record_song(state, song.id, StudioTier.LEGENDARY, 2, now)
    assert song.recording_id is None
    assert state.wallet.balance == 500


# --- releases ---


def test_single_release_grants_fame(state, now, add_song):
    song = add_song(state, 80)
    recording = _recording(state, song, 80)
    release = ReleaseManager().publish_release(state, "Debut", ReleaseType.SINGLE, [recording.id], now)
    assert state.player.fame == 8
    assert release.average_quality == 80
    assert recording.is_released and song.is_released
    assert state.unreleased_recordings == []


def test_album_fame_and_minimum(state, now, add_song):
    manager = ReleaseManager()
    recs = [_recording(state, add_song(state, 70), 70) for _ in range(5)]
    with pytest.raises(ValidationFailure):
        manager.publish_release(state, "EP", ReleaseType.ALBUM, [r.id for r in recs[:4]], now)
    manager.publish_release(state, "LP", ReleaseType.ALBUM, [r.id for r in recs], now)
    assert state.player.fame == 14


def test_release_rejects_rereleased_recordings(state, now, add_song):
    manager = ReleaseManager()
    first = _recording(state, add_song(state, 80), 80)
    second = _recording(state, add_song(state, 60), 60)
    manager.publish_release(state, "One", ReleaseType.SINGLE, [first.id], now)
    with pytest.raises(InvalidTransition):
        manager.publish_release(state, "Two", ReleaseType.SINGLE, [second.id, first.id], now)
    assert not second.is_released
    assert state.player.fame == 8
    assert len(state.releases) == 1


def test_release_duplicates_and_missing(state, now, add_song):
    manager = ReleaseManager()
    rec = _recording(state, add_song(state, 80), 80)
    with pytest.raises(ValidationFailure):
        manager.publish_release(state, "Dup", ReleaseType.SINGLE, [rec.id, rec.id], now)
    state.recordings.clear()
    with pytest.raises(NotFound):
        manager.publish_release(state, "Gone", ReleaseType.SINGLE, [rec.id], now)


def test_weekly_streaming(state, now, add_song, fixed_random):
    manager = ReleaseManager(fixed_random(1.0))
    rec = _recording(state, add_song(state, 80), 80)
    release = manager.publish_release(state, "Hit", ReleaseType.SINGLE, [rec.id], now)
    revenue = manager.process_weekly_streaming(state)
    # (fame 8 * 10 + 80 * 5) plays at 0.08 each
    assert release.total_plays == 480
    assert revenue == Decimal("38.40")
    assert state.wallet.balance == Decimal("538.40")
    assert state.get_release(release.id) is release
    assert state.total_release_revenue() == Decimal("38.40")
