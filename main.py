"""
Posts service — application entry point.
"""

from __future__ import annotations

import logging
import sys
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.error_handlers import register_exception_handlers
from api.middleware import register_middleware
from api.posts import router as posts_router
from auth.routes import router as auth_router
from config.settings import config
from database.store import DocumentStore, JsonFileStore

logging.basicConfig(
    level=logging.DEBUG if config.debug else logging.INFO,
    format="%(asctime)s  %(levelname)-8s  %(name)s — %(message)s",
    stream=sys.stdout,
)
for _noisy in ("httpcore", "httpx", "urllib3"):
    logging.getLogger(_noisy).setLevel(logging.WARNING)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    app.state.store.initialize()
    logger.info("Application ready to accept requests.")
    yield


def create_app(store: Optional[DocumentStore] = None) -> FastAPI:
    app = FastAPI(
        title="Posts Service",
        version="1.0.0",
        description="User accounts and posts over a JSON document store.",
        lifespan=lifespan,
    )
    app.state.store = store if store is not None else JsonFileStore(config.db_file)

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_middleware(app)
    register_exception_handlers(app)

    # Routes
    app.include_router(auth_router)
    app.include_router(posts_router)

    @app.get("/health")
    async def health():
        return {"status": "ok"}

    return app


app = create_app()

if __name__ == "__main__":
    logger.info("Server is running on http://%s:%d", config.host, config.port)
    uvicorn.run(
        "main:app",
        host=config.host,
        port=config.port,
        reload=config.debug,
        log_level="debug" if config.debug else "info",
    )
