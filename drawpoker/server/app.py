"""
FastAPI Application Entry Point for DrawPoker.

This module creates and configures the FastAPI application with:
- HTTP routes for session play and hand evaluation
- An in-memory session store
- CORS middleware for development
"""

from typing import Optional
import logging
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from drawpoker import __version__
from drawpoker.config import GameConfig
from drawpoker.server.routes import router, SessionStore

logger = logging.getLogger(__name__)


def configure_logging(level: Optional[str] = None) -> None:
    """Configure root logging once, at an entry point."""
    logging.basicConfig(
        level=getattr(logging, (level or "INFO").upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )


def create_app(config: Optional[GameConfig] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        config: Server settings; read from the environment if omitted

    Returns:
        Configured FastAPI application instance
    """
    config = config or GameConfig.from_env()

    app = FastAPI(
        title="DrawPoker",
        description="Five-card draw coin game over HTTP",
        version=__version__,
    )
    app.state.config = config
    app.state.sessions = SessionStore(max_sessions=config.max_sessions)

    # CORS middleware for development
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],  # Configure appropriately for production
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(router)

    logger.info(f"DrawPoker app created (starting coins {config.starting_coins})")
    return app


def main(config: Optional[GameConfig] = None):
    """Run the server (for use as entry point)."""
    import uvicorn

    config = config or GameConfig.from_env()
    configure_logging(config.log_level)
    uvicorn.run(
        create_app(config),
        host=config.host,
        port=config.port,
    )


if __name__ == "__main__":
    main()
