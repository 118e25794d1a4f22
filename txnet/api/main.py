"""
txnet API server.

Serves the business/transaction REST endpoints and the /ws push channel.
Both stores are opened in the lifespan handler; with SYNC_ON_STARTUP the
graph is wiped and the relational store reseeded before serving.
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI

from ..services import run_startup_sync
from ..utils.exceptions import GraphDatabaseError
from ..utils.logging_config import setup_logging
from .config import config
from .middleware import setup_cors, setup_error_handlers
from .routers import businesses, health, live, transactions
from .state import AppState

logger = logging.getLogger(__name__)


def create_app(state: Optional[AppState] = None, run_sync: Optional[bool] = None) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        state: Pre-built state; when None it is built from config at startup
            and closed at shutdown.
        run_sync: Whether to run the startup synchronization; defaults to
            config.SYNC_ON_STARTUP.

    Returns:
        The configured application.
    """
    sync_enabled = config.SYNC_ON_STARTUP if run_sync is None else run_sync

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Open the stores, synchronize them, and clean up on shutdown."""
        logger.info("Starting txnet API")

        owned = state is None
        app_state = AppState.from_config(config) if owned else state
        if app_state.db and not app_state.db.is_initialized:
            app_state.db.initialize()
        app.state.txnet = app_state

        try:
            await app_state.graph.verify_connectivity()
        except GraphDatabaseError as e:
            logger.warning(f"Graph store unavailable at startup: {e}")

        if sync_enabled:
            await run_startup_sync(app_state.sync_routine())
        else:
            logger.info("Startup synchronization disabled")

        yield

        logger.info("Shutting down txnet API")
        if owned:
            await app_state.close()

    app = FastAPI(
        title="txnet API",
        description="Business transaction network: graph queries and live updates",
        version="1.0.0",
        lifespan=lifespan,
    )

    setup_cors(app, config.ALLOWED_ORIGINS)
    setup_error_handlers(app)

    @app.get("/")
    async def root():
        return {"success": True, "data": "Business transaction network API"}

    app.include_router(health.router)
    app.include_router(businesses.router)
    app.include_router(transactions.router)
    app.include_router(live.router)

    return app


app = create_app()


def run() -> None:
    """Run the API server with uvicorn."""
    import uvicorn

    setup_logging(level=config.LOG_LEVEL)
    config.validate()
    config.log_summary()
    uvicorn.run(app, host=config.HOST, port=config.PORT)


if __name__ == "__main__":
    run()
