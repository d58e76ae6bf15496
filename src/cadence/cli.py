"""CLI utilities for Cadence."""
import asyncio
import json

import typer
from alembic import command
from alembic.config import Config

from cadence.core.config import settings
from cadence.core.errors import GameError
from cadence.core.logging import setup_logging
from cadence.core import redis as redis_core
from cadence.db.session import dispose_engine, get_session
from cadence.services.engine import GameEngine
from cadence.services.health_mood import HealthMoodManager
from cadence.services.repository import GameStateRepository

app = typer.Typer(help="Cadence CLI")

repository = GameStateRepository()


async def _load_engine(token: str) -> GameEngine:
    async for session in get_session():
        state = await repository.find_by_token(session, token)
    if state is None:
        raise typer.BadParameter(f"no save for token {token!r}; run new-game first")

    async def on_commit(committed) -> None:
        async for session in get_session():
            await repository.save(session, committed, external_token=token)

    return GameEngine(state, redis=redis_core.get_redis(), on_commit=on_commit)


@app.command()
def serve(reload: bool = False):
    """Run the HTTP API."""
    import uvicorn

    uvicorn.run("cadence.main:app", host=settings.host, port=settings.port, reload=reload)


@app.command()
def migrate(revision: str = "head"):
    """Run Alembic migrations."""
    cfg = Config("alembic.ini")
    command.upgrade(cfg, revision)


@app.command("new-game")
def new_game(token: str, name: str, city: str = typer.Option(None, help="city id, e.g. london")):
    """Create (or find) the save for an external player token."""
    setup_logging()

    async def _run() -> None:
        try:
            async for session in get_session():
                state, created = await repository.find_or_create(session, token, name, city)
        except GameError as exc:
            raise typer.BadParameter(exc.message) from exc
        finally:
            await dispose_engine()
        verb = "created" if created else "found"
        typer.echo(f"{verb} player {state.player.id} in {state.player.current_city_id}")

    asyncio.run(_run())


@app.command()
def tick(token: str):
    """Advance a save to now and print the tick report."""
    setup_logging()

    async def _run() -> None:
        try:
            engine = await _load_engine(token)
            report = await engine.tick()
        finally:
            await dispose_engine()
        typer.echo(json.dumps(report.model_dump(mode="json"), indent=2))

    asyncio.run(_run())


@app.command()
def run(token: str, interval: float = typer.Option(None, help="seconds between ticks")):
    """Drive the tick loop for a save until interrupted."""
    setup_logging()

    async def _run() -> None:
        engine = await _load_engine(token)
        try:
            await engine.run(interval if interval is not None else settings.tick_interval_seconds)
        finally:
            await dispose_engine()

    try:
        asyncio.run(_run())
    except KeyboardInterrupt:
        typer.echo("stopped")


@app.command()
def show(token: str):
    """Print a short summary of a save."""

    async def _run() -> None:
        try:
            engine = await _load_engine(token)
        finally:
            await dispose_engine()
        state = engine.state
        player = state.player
        typer.echo(f"{player.name} ({player.current_city_id})")
        typer.echo(f"balance={state.wallet.balance:.2f} fame={player.fame} fans={player.fans}")
        typer.echo(f"health={player.health} mood={player.mood} reputation={player.reputation}")
        for skill in state.skills.values():
            typer.echo(f"  {skill.skill_type.value:<12} lvl {skill.current_level:>3}  xp {skill.current_xp}")
        typer.echo(HealthMoodManager.recommended_action(player.health, player.mood))

    asyncio.run(_run())


if __name__ == "__main__":
    app()
