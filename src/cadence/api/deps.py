"""FastAPI dependencies."""
import asyncio
import logging

from fastapi import Depends, Header, HTTPException, status
from fastapi.encoders import jsonable_encoder
from sqlalchemy.ext.asyncio import AsyncSession

from cadence.core import redis as redis_core
from cadence.core.config import settings
from cadence.core.errors import (
    AuthenticationError,
    GameError,
    InsufficientFunds,
    InvalidTransition,
    NotFound,
    ValidationFailure,
)
from cadence.db.session import get_session
from cadence.models.state import GameState
from cadence.services.auth import authenticate
from cadence.services.engine import GameEngine
from cadence.services.repository import GameStateRepository

logger = logging.getLogger(__name__)

repository = GameStateRepository()

# player token -> engine; one writer per player
_engines: dict[str, GameEngine] = {}
# guards the load-then-register step so one token never gets two engines
_engine_locks: dict[str, asyncio.Lock] = {}

_STATUS_BY_ERROR = {
    InsufficientFunds: status.HTTP_402_PAYMENT_REQUIRED,
    NotFound: status.HTTP_404_NOT_FOUND,
    InvalidTransition: status.HTTP_409_CONFLICT,
    ValidationFailure: status.HTTP_422_UNPROCESSABLE_ENTITY,
    AuthenticationError: status.HTTP_401_UNAUTHORIZED,
}


def http_error(exc: GameError) -> HTTPException:
    code = _STATUS_BY_ERROR.get(type(exc), status.HTTP_400_BAD_REQUEST)
    return HTTPException(status_code=code, detail=jsonable_encoder(exc.to_dict()))


async def get_db() -> AsyncSession:
    """Provide DB session for request lifecycle."""
    async for session in get_session():
        yield session


def get_redis():
    """Provide Redis client (singleton), None when not configured."""
    return redis_core.get_redis()


async def get_player_token(
    init_data: str | None = Header(None, alias="X-Cadence-Init-Data"),
    x_player_token: str | None = Header(None, alias="X-Player-Token"),
) -> str:
    """
    Resolve the external player token from signed init data.

    For dev convenience (environment=dev) can fallback to X-Player-Token.
    """
    if init_data:
        try:
            return authenticate(init_data, settings.auth_secret, settings.auth_max_age_sec)
        except AuthenticationError as exc:
            raise http_error(exc) from exc

    if settings.environment == "dev" and x_player_token:
        return x_player_token

    raise HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Missing or invalid init data",
    )


async def _persist(token: str, state: GameState) -> None:
    async for session in get_session():
        await repository.save(session, state, external_token=token)


def register_engine(token: str, state: GameState, redis=None) -> GameEngine:
    async def on_commit(committed: GameState) -> None:
        await _persist(token, committed)

    engine = GameEngine(state, redis=redis, on_commit=on_commit)
    _engines[token] = engine
    return engine


def engine_lock(token: str) -> asyncio.Lock:
    return _engine_locks.setdefault(token, asyncio.Lock())


def registered_engine(token: str) -> GameEngine | None:
    return _engines.get(token)


def reset_engines() -> None:
    _engines.clear()
    _engine_locks.clear()


async def get_engine(
    token: str = Depends(get_player_token),
    session: AsyncSession = Depends(get_db),
    redis=Depends(get_redis),
) -> GameEngine:
    engine = _engines.get(token)
    if engine is not None:
        return engine
    async with engine_lock(token):
        engine = _engines.get(token)
        if engine is not None:
            return engine
        state = await repository.find_by_token(session, token)
        if state is None:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail={"error": "not_found", "kind": "player", "message": "call /bootstrap first"},
            )
        logger.info("engine_loaded player=%s", state.player.id)
        return register_engine(token, state, redis)
