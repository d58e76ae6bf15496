import logging
from dataclasses import asdict
from typing import Any, Awaitable, List
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from cadence.api import schemas
from cadence.api.deps import (
    engine_lock,
    get_db,
    get_engine,
    get_player_token,
    get_redis,
    http_error,
    register_engine,
    registered_engine,
    repository,
)
from cadence.core.errors import GameError
from cadence.game import catalog
from cadence.game.constants import SlotType
from cadence.models.creative import Setlist
from cadence.services import sse as sse_service
from cadence.services.engine import GameEngine
from cadence.services.health_mood import HealthMoodManager

logger = logging.getLogger(__name__)

router = APIRouter()


async def _command(call: Awaitable[Any]) -> Any:
    try:
        return await call
    except GameError as exc:
        raise http_error(exc) from exc


def _state_out(engine: GameEngine) -> dict:
    return engine.state.model_dump(mode="json")


def _setlist_out(setlist: Setlist) -> schemas.SetlistResponse:
    return schemas.SetlistResponse(
        **setlist.model_dump(include={"id", "name", "song_ids", "quality", "rehearsal_hours"}),
        song_count=setlist.song_count,
        is_ready=setlist.is_ready,
        readiness=setlist.readiness,
    )


# --- infra ---


@router.get("/sse/stream", tags=["sse"])
async def sse_stream(engine: GameEngine = Depends(get_engine), redis=Depends(get_redis)):
    if redis is None:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail="events disabled")
    return sse_service.sse_response(redis, sse_service.channel_for(engine.player_id))


@router.get("/catalog", tags=["catalog"])
async def get_catalog() -> dict:
    return {
        "cities": [asdict(c) for c in catalog.CITIES],
        "venues": [asdict(v) for v in catalog.VENUES],
        "equipment": [asdict(e) for e in catalog.EQUIPMENT_CATALOG],
        "housing": [asdict(h) for h in catalog.HOUSING_CATALOG],
    }


# --- profile/bootstrap ---


@router.post("/bootstrap", tags=["profile"])
async def bootstrap(
    payload: schemas.BootstrapRequest,
    token: str = Depends(get_player_token),
    session: AsyncSession = Depends(get_db),
    redis=Depends(get_redis),
) -> dict:
    async with engine_lock(token):
        live = registered_engine(token)
        if live is not None:
            return {"created": False, "state": _state_out(live)}
        try:
            state, created = await repository.find_or_create(session, token, payload.name, payload.city_id)
        except GameError as exc:
            raise http_error(exc) from exc
        engine = register_engine(token, state, redis)
    return {"created": created, "state": _state_out(engine)}


@router.get("/state", tags=["profile"])
async def get_state(engine: GameEngine = Depends(get_engine)) -> dict:
    await engine.tick()
    return _state_out(engine)


@router.post("/tick", tags=["profile"])
async def tick(engine: GameEngine = Depends(get_engine)) -> dict:
    report = await engine.tick()
    return report.model_dump(mode="json")


@router.get("/status", response_model=schemas.StatusResponse, tags=["profile"])
async def get_status(engine: GameEngine = Depends(get_engine)):
    await engine.tick()
    state = engine.state
    now = engine.clock()
    player = state.player
    return schemas.StatusResponse(
        health=player.health,
        mood=player.mood,
        health_status=HealthMoodManager.health_status(player.health).value,
        mood_status=HealthMoodManager.mood_status(player.mood).value,
        xp_multiplier=HealthMoodManager.xp_multiplier(player.health, player.mood),
        warnings=HealthMoodManager.warnings(player.health, player.mood),
        recommended_action=HealthMoodManager.recommended_action(player.health, player.mood),
        current_job=state.current_job,
        next_payment_date=engine.jobs.next_payment_date(state),
        days_until_next_payment=engine.jobs.days_until_next_payment(state, now),
        hours_worked_this_week=engine.jobs.hours_worked_this_week(state, now),
        total_earnings_from_current_job=engine.jobs.total_earnings_from_current_job(state),
        rent_warning=state.current_housing.rent_warning(now) if state.current_housing else None,
        equipment_value=state.total_equipment_value,
        release_revenue=state.total_release_revenue(),
    )


# --- activities / jobs ---


@router.put("/slots/{slot_type}", tags=["activity"])
async def set_activity(slot_type: SlotType, payload: schemas.ActivityRequest, engine: GameEngine = Depends(get_engine)):
    slot = await _command(engine.set_activity(slot_type, payload.activity))
    return slot.model_dump(mode="json")


@router.delete("/slots/{slot_type}", tags=["activity"])
async def clear_activity(slot_type: SlotType, engine: GameEngine = Depends(get_engine)):
    slot = await _command(engine.clear_activity(slot_type))
    return slot.model_dump(mode="json")


@router.post("/job/start", tags=["job"])
async def start_job(payload: schemas.StartJobRequest, engine: GameEngine = Depends(get_engine)):
    payment = await _command(engine.start_job(payload.job_type))
    return payment.model_dump(mode="json")


@router.post("/job/quit", tags=["job"])
async def quit_job(engine: GameEngine = Depends(get_engine)) -> dict:
    cancelled = await _command(engine.quit_job())
    return {"cancelled_payments": cancelled}


# --- equipment ---


@router.post("/equipment", tags=["equipment"])
async def purchase_equipment(payload: schemas.PurchaseEquipmentRequest, engine: GameEngine = Depends(get_engine)):
    item = await _command(engine.purchase_equipment(payload.catalog_item_id))
    return item.model_dump(mode="json")


@router.post("/equipment/{equipment_id}/repair", response_model=schemas.MoneyResponse, tags=["equipment"])
async def repair_equipment(equipment_id: UUID, engine: GameEngine = Depends(get_engine)):
    cost = await _command(engine.repair_equipment(equipment_id))
    return schemas.MoneyResponse(amount=cost, balance=engine.state.wallet.balance)


@router.delete("/equipment/{equipment_id}", response_model=schemas.MoneyResponse, tags=["equipment"])
async def sell_equipment(equipment_id: UUID, engine: GameEngine = Depends(get_engine)):
    price = await _command(engine.sell_equipment(equipment_id))
    return schemas.MoneyResponse(amount=price, balance=engine.state.wallet.balance)


# --- housing ---


@router.post("/housing", tags=["housing"])
async def rent_housing(payload: schemas.RentHousingRequest, engine: GameEngine = Depends(get_engine)):
    housing = await _command(engine.rent_housing(payload.housing_type, payload.city_id))
    return housing.model_dump(mode="json")


@router.post("/housing/upgrade", response_model=schemas.MoneyResponse, tags=["housing"])
async def upgrade_housing(payload: schemas.MoveHousingRequest, engine: GameEngine = Depends(get_engine)):
    charge = await _command(engine.upgrade_housing(payload.housing_type))
    return schemas.MoneyResponse(amount=charge, balance=engine.state.wallet.balance)


@router.post("/housing/downgrade", response_model=schemas.MoneyResponse, tags=["housing"])
async def downgrade_housing(payload: schemas.MoveHousingRequest, engine: GameEngine = Depends(get_engine)):
    credit = await _command(engine.downgrade_housing(payload.housing_type))
    return schemas.MoneyResponse(amount=credit, balance=engine.state.wallet.balance)


@router.post("/housing/rent", tags=["housing"])
async def pay_rent(payload: schemas.PayRentRequest, engine: GameEngine = Depends(get_engine)) -> dict:
    paid_until = await _command(engine.pay_rent(payload.weeks))
    return {"rent_paid_until": paid_until.isoformat(), "balance": engine.state.wallet.balance}


# --- creative pipeline ---


@router.post("/songs", tags=["music"])
async def create_song(payload: schemas.CreateSongRequest, engine: GameEngine = Depends(get_engine)):
    song = await _command(
        engine.create_song(payload.title, payload.genre, payload.mood, payload.primary_instrument)
    )
    return song.model_dump(mode="json")


@router.post("/setlists", tags=["music"])
async def create_setlist(payload: schemas.CreateSetlistRequest, engine: GameEngine = Depends(get_engine)):
    setlist = await _command(engine.create_setlist(payload.name, payload.song_ids))
    return setlist.model_dump(mode="json")


@router.get("/setlists", response_model=List[schemas.SetlistResponse], tags=["music"])
async def list_setlists(engine: GameEngine = Depends(get_engine)):
    return [_setlist_out(s) for s in engine.state.setlists]


@router.post("/setlists/{setlist_id}/rehearse", tags=["music"])
async def rehearse_setlist(
    setlist_id: UUID, payload: schemas.RehearseRequest, engine: GameEngine = Depends(get_engine)
) -> dict:
    quality = await _command(engine.rehearse_setlist(setlist_id, payload.hours))
    return {"quality": quality}


@router.put("/setlists/{setlist_id}/songs/{song_id}", response_model=schemas.SetlistResponse, tags=["music"])
async def add_setlist_song(setlist_id: UUID, song_id: UUID, engine: GameEngine = Depends(get_engine)):
    setlist = await _command(engine.add_setlist_song(setlist_id, song_id))
    return _setlist_out(setlist)


@router.delete("/setlists/{setlist_id}/songs/{song_id}", response_model=schemas.SetlistResponse, tags=["music"])
async def remove_setlist_song(setlist_id: UUID, song_id: UUID, engine: GameEngine = Depends(get_engine)):
    setlist = await _command(engine.remove_setlist_song(setlist_id, song_id))
    return _setlist_out(setlist)


@router.post("/recordings", tags=["music"])
async def record_song(payload: schemas.RecordSongRequest, engine: GameEngine = Depends(get_engine)):
    recording = await _command(engine.record_song(payload.song_id, payload.studio_tier, payload.hours))
    return recording.model_dump(mode="json")


@router.post("/releases", tags=["music"])
async def publish_release(payload: schemas.PublishReleaseRequest, engine: GameEngine = Depends(get_engine)):
    release = await _command(engine.publish_release(payload.title, payload.release_type, payload.recording_ids))
    return release.model_dump(mode="json")


@router.get("/releases/{release_id}", tags=["music"])
async def get_release(release_id: UUID, engine: GameEngine = Depends(get_engine)) -> dict:
    try:
        release = engine.state.get_release(release_id)
    except GameError as exc:
        raise http_error(exc) from exc
    return release.model_dump(mode="json")


@router.post("/gigs", tags=["gigs"])
async def book_gig(payload: schemas.BookGigRequest, engine: GameEngine = Depends(get_engine)):
    gig = await _command(
        engine.book_gig(payload.venue_id, payload.setlist_id, payload.scheduled_at, payload.ticket_price)
    )
    return gig.model_dump(mode="json")


@router.delete("/gigs/{gig_id}", tags=["gigs"])
async def cancel_gig(gig_id: UUID, engine: GameEngine = Depends(get_engine)):
    gig = await _command(engine.cancel_gig(gig_id))
    return gig.model_dump(mode="json")
