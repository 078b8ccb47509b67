"""CRM back office FastAPI application.

Serves the identity, catalogue and ordering routers under ``/api``.

Usage:
    uvicorn app:app --app-dir src --host 0.0.0.0 --port 8000 --reload
"""

from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from catalogue.api import product_router
from identity.api import auth_router, setup_router, user_router
from identity.user.seeding import seed_initial_admin
from ordering.api import cart_router, order_router
from shared.api import register_domain_context, register_exception_handlers, register_request_context
from shared.config import get_settings
from shared.db import setup_db
from shared.domain import crm, init_domain
from shared.logging import configure_logging

logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Configure logging, create the schema and seed the initial admin."""
    configure_logging()
    setup_db(crm)

    with crm.domain_context():
        seed_initial_admin()

    logger.info("application_started", env=get_settings().env)
    yield
    logger.info("application_stopped")


def create_app() -> FastAPI:
    settings = get_settings()
    init_domain(settings)

    app = FastAPI(
        title="CRM Back Office API",
        description="Users, products, carts and orders",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_domain_context(app)
    register_request_context(app)
    register_exception_handlers(app)

    # -----------------------------------------------------------------------
    # Routers
    # -----------------------------------------------------------------------
    app.include_router(auth_router)
    app.include_router(user_router)
    app.include_router(setup_router)
    app.include_router(product_router)
    app.include_router(cart_router)
    app.include_router(order_router)

    @app.get("/health")
    async def health():
        return {"status": "ok", "env": settings.env}

    return app


app = create_app()
