"""Identity domain API package."""

from identity.api.routes import auth_router, setup_router, user_router

__all__ = ["auth_router", "user_router", "setup_router"]
