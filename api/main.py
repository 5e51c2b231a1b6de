import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from characters import router as characters_router
from core import config
from core.db import Database, PersistenceGateway, PostgresGateway
from core.errors import install_exception_handlers
from droids import router as droids_router

logging.basicConfig(level=config.log_level())


def create_app(gateway: PersistenceGateway | None = None) -> FastAPI:
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # An injected gateway (tests) is used as-is; otherwise open the pool once per process.
        if gateway is not None:
            yield
            return

        database = Database.from_env()
        await database.connect()
        app.state.gateway = PostgresGateway(database)
        try:
            yield
        finally:
            app.state.gateway = None
            await database.close()

    app = FastAPI(title="star-wars-api", lifespan=lifespan)
    app.state.gateway = gateway

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins(),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    install_exception_handlers(app)

    app.include_router(characters_router.router, tags=["characters"])
    app.include_router(droids_router.router, tags=["droids"])

    @app.get("/health")
    def health() -> dict:
        return {"status": "ok"}

    @app.get("/")
    def root() -> dict:
        return {"message": "star-wars api"}

    return app


app = create_app()
