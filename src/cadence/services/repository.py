"""Loading and saving game state."""
from __future__ import annotations

import logging
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from cadence.core.config import settings
from cadence.core.errors import NotFound
from cadence.db.models import PlayerSave
from cadence.game.catalog import CITIES_BY_ID, DEFAULT_CITY_ID
from cadence.models.state import GameState

logger = logging.getLogger(__name__)


class GameStateRepository:
    """Service for persisting GameState snapshots."""

    async def load_player_state(self, session: AsyncSession, player_id: UUID) -> GameState:
        row = await session.get(PlayerSave, str(player_id))
        if row is None:
            raise NotFound("player", player_id)
        return GameState.model_validate(row.state)

    async def save(self, session: AsyncSession, state: GameState, external_token: str | None = None) -> None:
        player_id = str(state.player.id)
        payload = state.model_dump(mode="json")
        row = await session.get(PlayerSave, player_id)
        if row is None:
            row = PlayerSave(id=player_id, name=state.player.name, state=payload, external_token=external_token)
            session.add(row)
        else:
            row.state = payload
            row.name = state.player.name
            if external_token is not None:
                row.external_token = external_token
        await session.commit()
        logger.debug("state_saved player=%s", player_id)

    async def find_by_token(self, session: AsyncSession, external_token: str) -> GameState | None:
        row = await session.scalar(select(PlayerSave).where(PlayerSave.external_token == external_token))
        if row is None:
            return None
        return GameState.model_validate(row.state)

    async def find_or_create(
        self,
        session: AsyncSession,
        external_token: str,
        name: str,
        city_id: str | None = None,
    ) -> tuple[GameState, bool]:
        """Return (state, created) for the player behind ``external_token``."""
        existing = await self.find_by_token(session, external_token)
        if existing is not None:
            return existing, False
        city_id = city_id or DEFAULT_CITY_ID
        if city_id not in CITIES_BY_ID:
            raise NotFound("city", city_id)
        state = GameState.new(name=name, city_id=city_id, starting_balance=settings.starting_balance)
        await self.save(session, state, external_token=external_token)
        logger.info("player_created player=%s city=%s", state.player.id, city_id)
        return state, True
