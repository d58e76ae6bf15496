"""Unit tests: single-writer engine."""
import asyncio
from datetime import timedelta

import pytest

from cadence.core.errors import InsufficientFunds, ValidationFailure
from cadence.game.constants import SkillType, SlotType, SongGenre, SongMood
from cadence.models import PracticeActivity
from cadence.services.engine import GameEngine


@pytest.mark.asyncio
async def test_failed_command_leaves_state_untouched(state):
    engine = GameEngine(state)
    before = engine.state.model_dump()
    with pytest.raises(InsufficientFunds):
        await engine.purchase_equipment("piano_legendary")
    assert engine.state.model_dump() == before


@pytest.mark.asyncio
async def test_command_swaps_snapshot(state):
    engine = GameEngine(state)
    item = await engine.purchase_equipment("microphone_basic")
    assert engine.state.wallet.balance == 420
    assert engine.state.get_equipment(item.id).name == "USB Microphone"
    # the caller's original object is never written to
    assert state.wallet.balance == 500


@pytest.mark.asyncio
async def test_concurrent_purchases_never_overdraw(state):
    engine = GameEngine(state)
    results = await asyncio.gather(
        *(engine.purchase_equipment("microphone_basic") for _ in range(8)),
        return_exceptions=True,
    )
    ok = [r for r in results if not isinstance(r, Exception)]
    failed = [r for r in results if isinstance(r, InsufficientFunds)]
    assert len(ok) == 6
    assert len(failed) == 2
    assert engine.state.wallet.balance == 20
    assert len(engine.state.equipment_inventory) == 6


@pytest.mark.asyncio
async def test_tick_and_commit_hook(state, now):
    saved = []

    async def on_commit(committed):
        saved.append(committed.player.last_sync_at)

    engine = GameEngine(state, on_commit=on_commit, settle_on_clear=False)
    await engine.set_activity(SlotType.FREE_TIME, PracticeActivity(instrument=SkillType.BASS), now)
    report = await engine.tick(now + timedelta(hours=1))
    assert report.xp_gained == {SkillType.BASS: 11}
    assert engine.state.get_skill(SkillType.BASS).current_xp == 11
    assert saved[-1] == now + timedelta(hours=1)
    assert len(saved) == 2


@pytest.mark.asyncio
async def test_validation_error_propagates(state, now):
    engine = GameEngine(state)
    with pytest.raises(ValidationFailure):
        await engine.create_setlist("Empty", [])
    song = await engine.create_song("Tune", SongGenre.JAZZ, SongMood.CALM, SkillType.PIANO, now)
    assert engine.state.get_song(song.id).title == "Tune"


@pytest.mark.asyncio
async def test_run_stops_on_event(state):
    engine = GameEngine(state)
    stop = asyncio.Event()
    task = asyncio.create_task(engine.run(interval=0.01, stop=stop))
    await asyncio.sleep(0.05)
    stop.set()
    await asyncio.wait_for(task, timeout=1)
    assert engine.state.player.last_sync_at > state.player.last_sync_at


@pytest.mark.asyncio
async def test_failing_commit_hook_discards_the_change(state, now):
    async def on_commit(committed):
        raise RuntimeError("save failed")

    engine = GameEngine(state, on_commit=on_commit)
    with pytest.raises(RuntimeError):
        await engine.purchase_equipment("guitar_basic")
    assert engine.state.wallet.balance == 500
    assert engine.state.equipment_inventory == []

    with pytest.raises(RuntimeError):
        await engine.tick(now + timedelta(hours=1))
    assert engine.state.player.last_sync_at == now
