"""Initial admin account, created from configuration at startup."""

import structlog
from protean.utils.globals import current_domain

from identity.auth.passwords import hash_password
from identity.user.registration import RegisterUser
from identity.user.user import User, UserRole
from shared.config import Settings, get_settings

logger = structlog.get_logger(__name__)


def seed_initial_admin(settings: Settings | None = None) -> User | None:
    """Create the configured admin unless it already exists or no password is configured."""
    settings = settings or get_settings()

    if not settings.admin_password:
        logger.warning("admin_seed_skipped", reason="no admin password configured")
        return None

    repo = current_domain.repository_for(User)
    if repo.email_exists(settings.admin_email):
        logger.info("admin_seed_skipped", reason="admin already exists", email=settings.admin_email)
        return None

    command = RegisterUser(
        name=settings.admin_name,
        email=settings.admin_email,
        password_hash=hash_password(settings.admin_password, rounds=settings.bcrypt_rounds),
        role=UserRole.ADMIN.value,
    )
    admin = repo.get_user(current_domain.process(command, asynchronous=False))
    logger.info("admin_seeded", email=admin.email)
    return admin
