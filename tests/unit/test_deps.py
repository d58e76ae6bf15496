"""Unit tests: per-player engine registry."""
import asyncio

import pytest
from fastapi import HTTPException

from cadence.api import deps


@pytest.fixture
def registry():
    deps.reset_engines()
    yield deps
    deps.reset_engines()


@pytest.mark.asyncio
async def test_concurrent_first_requests_share_one_engine(registry, state, monkeypatch):
    lookups = []

    async def find_by_token(session, token):
        lookups.append(token)
        await asyncio.sleep(0.01)
        return state.model_copy(deep=True)

    monkeypatch.setattr(registry.repository, "find_by_token", find_by_token)
    engines = await asyncio.gather(
        *(registry.get_engine(token="tok-race", session=None, redis=None) for _ in range(5))
    )
    assert all(engine is engines[0] for engine in engines)
    assert registry.registered_engine("tok-race") is engines[0]
    assert lookups == ["tok-race"]


@pytest.mark.asyncio
async def test_unknown_token_is_not_registered(registry, monkeypatch):
    async def find_by_token(session, token):
        return None

    monkeypatch.setattr(registry.repository, "find_by_token", find_by_token)
    with pytest.raises(HTTPException) as exc_info:
        await registry.get_engine(token="tok-missing", session=None, redis=None)
    assert exc_info.value.status_code == 404
    assert registry.registered_engine("tok-missing") is None
