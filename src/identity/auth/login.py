"""Login and logout."""

import structlog
from protean.exceptions import ValidationError
from protean.utils.globals import current_domain
from pydantic import BaseModel

from identity.auth.blacklist import TokenBlacklist
from identity.auth.passwords import verify_password
from identity.auth.tokens import TokenClaims, TokenService
from identity.user.user import User
from shared.exceptions import AuthenticationError

logger = structlog.get_logger(__name__)


class Login(BaseModel):
    email: str
    password: str


def login(command: Login, tokens: TokenService) -> tuple[str, User]:
    """Verify credentials and issue a token for the user."""
    if not command.email.strip() or not command.password:
        raise ValidationError({"credentials": ["Email and password are required"]})

    user = current_domain.repository_for(User).find_by_email(command.email)
    if user is None:
        logger.warning("login_unknown_email", email=command.email)
        raise AuthenticationError("Invalid email or password")

    if not verify_password(command.password, user.password_hash):
        logger.warning("login_wrong_password", email=command.email)
        raise AuthenticationError("Invalid email or password")

    token = tokens.generate_token(str(user.id), user.email, user.name, user.role)
    logger.info("user_logged_in", user_id=str(user.id), email=user.email)
    return token, user


def logout(claims: TokenClaims, blacklist: TokenBlacklist) -> None:
    """Revoke the presented token until it expires."""
    blacklist.blacklist(claims.jti, claims.expires_at)
    logger.info("user_logged_out", user_id=claims.user_id, email=claims.email)
