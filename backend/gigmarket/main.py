"""Gig Marketplace API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery — ExMA anti-pattern)
    - Global error handlers map MarketplaceError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Record store loaded and admin provisioned when the app is built;
      every collection flushed again on shutdown via the lifespan

Design Decisions:
    - create_app() factory: tests build isolated apps over a temp data dir
    - Store loaded in create_app, not in lifespan: ASGI test transports that skip
      lifespan still see a ready marketplace
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
"""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from gigmarket.api.error_handlers import register_error_handlers
from gigmarket.api.routes import accounts, admin, disputes, gigs, health, messages, orders
from gigmarket.config import Settings, get_settings
from gigmarket.core.protocols import CredentialVerifier
from gigmarket.core.session_registry import SessionRegistry
from gigmarket.infrastructure.credentials import PlaintextCredentialVerifier
from gigmarket.infrastructure.observability import setup_logging
from gigmarket.infrastructure.record_store import RecordStore
from gigmarket.services.marketplace import Marketplace

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings: Settings = app.state.settings
    setup_logging(settings.log_level, settings.log_format)
    logger.info(f"Marketplace API started, data in {settings.data_dir}")
    yield
    app.state.marketplace.shutdown()
    logger.info("Marketplace API shutting down")


def create_app(
    settings: Settings | None = None,
    verifier: CredentialVerifier | None = None,
    sessions: SessionRegistry | None = None,
) -> FastAPI:
    """Build a fully wired app over settings.data_dir."""
    settings = settings or get_settings()
    marketplace = Marketplace(
        RecordStore(settings.data_dir),
        sessions or SessionRegistry(),
        verifier or PlaintextCredentialVerifier(),
    )
    marketplace.bootstrap(settings)

    app = FastAPI(title="Gig Marketplace API", version="1.0.0", lifespan=lifespan)
    app.state.settings = settings
    app.state.marketplace = marketplace

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["GET", "POST", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
    )

    # Explicit registration (ExMA: no convention-over-config)
    prefix = settings.api_prefix
    app.include_router(health.router, prefix=prefix)
    app.include_router(accounts.router, prefix=prefix)
    app.include_router(gigs.router, prefix=prefix)
    app.include_router(orders.router, prefix=prefix)
    app.include_router(messages.router, prefix=prefix)
    app.include_router(disputes.router, prefix=prefix)
    app.include_router(admin.router, prefix=prefix)

    register_error_handlers(app)
    return app


def run() -> None:
    settings = get_settings()
    uvicorn.run(
        "gigmarket.main:create_app", factory=True,
        host=settings.host, port=settings.port,
    )


if __name__ == "__main__":
    run()
