"""Domain initialization and configuration.

Users, products, carts and orders are registered with a single ``crm``
domain, so one unit of work can span all of them (order placement touches
customers, products and orders at once).
"""

import importlib

import structlog
from protean.domain import Domain

from shared.config import Settings, get_settings

logger = structlog.get_logger(__name__)

# Domain Composition Root
crm = Domain(name="crm")

# Modules that register aggregates, entities, repositories, commands and handlers
ELEMENT_MODULES = (
    "identity.user.user",
    "identity.user.repository",
    "identity.user.registration",
    "identity.user.management",
    "catalogue.product.product",
    "catalogue.product.repository",
    "catalogue.product.creation",
    "catalogue.product.details",
    "ordering.cart.cart",
    "ordering.cart.repository",
    "ordering.cart.items",
    "ordering.cart.management",
    "ordering.order.order",
    "ordering.order.repository",
    "ordering.order.placement",
)

_initialized = False


def database_config(database_url: str) -> dict:
    """Translate a database URL into a Protean provider configuration."""
    if database_url.startswith("memory"):
        return {"provider": "memory"}
    if database_url.startswith("sqlite"):
        return {"provider": "sqlite", "database_uri": database_url}
    if database_url.startswith("postgresql"):
        return {"provider": "postgresql", "database_uri": database_url}
    raise ValueError(f"Unsupported database URL: {database_url!r}")


def init_domain(settings: Settings | None = None) -> Domain:
    """Point the domain at the configured database and initialize it once per process."""
    global _initialized

    if _initialized:
        return crm

    settings = settings or get_settings()
    crm.config["databases"]["default"] = database_config(settings.database_url)

    for module in ELEMENT_MODULES:
        importlib.import_module(module)

    crm.init(traverse=False)
    _initialized = True

    logger.debug("domain_initialized", domain=crm.name, provider=crm.config["databases"]["default"]["provider"])
    return crm
