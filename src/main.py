"""
Application factory and process entrypoint.

python -m src.main   (host/port/log level from SKIRMISH_* environment variables)
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from src.api.websocket import WebSocketSink, router
from src.core.config import Settings
from src.services.registry import SessionRegistry

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """One registry per app. It lives on app.state and is cleared on shutdown."""
    settings = settings or Settings.from_env()
    sink = WebSocketSink()
    registry = SessionRegistry(sink)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        registry.close()

    app = FastAPI(
        title="Skirmish Server",
        description="Authoritative game server for the 5x5 hero skirmish board game",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.state.settings = settings
    app.state.sink = sink
    app.state.registry = registry
    app.include_router(router)

    @app.get("/health")
    def health_check() -> dict[str, object]:
        return {"status": "ok", "rooms": len(registry)}

    return app


def main() -> None:
    settings = Settings.from_env()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    logger.info("Listening on %s:%d", settings.host, settings.port)
    uvicorn.run(
        create_app(settings),
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
