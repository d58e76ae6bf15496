from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from cadence.api.routes import router as api_router
from cadence.core.config import settings
from cadence.core.logging import setup_logging
from cadence.db.session import create_all, dispose_engine


@asynccontextmanager
async def lifespan(app: FastAPI):
    # outside dev the schema comes from `cadence migrate`
    if settings.environment == "dev":
        await create_all()
    yield
    await dispose_engine()


def create_app() -> FastAPI:
    setup_logging()

    app = FastAPI(
        title="Cadence",
        version="0.1.0",
        docs_url="/api/docs",
        redoc_url="/api/redoc",
        openapi_url="/api/openapi.json",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(api_router, prefix="/api")

    @app.get("/health", tags=["infra"])
    async def health() -> dict:
        return {"status": "ok"}

    return app


app = create_app()
