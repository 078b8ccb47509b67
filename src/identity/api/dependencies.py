"""FastAPI dependencies for authentication and authorization."""

from typing import Annotated

import structlog
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from identity.auth.blacklist import TokenBlacklist, get_token_blacklist
from identity.auth.tokens import TokenClaims, TokenService
from shared.exceptions import AuthenticationError, PermissionDeniedError
from shared.logging import add_context

logger = structlog.get_logger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


def get_token_service() -> TokenService:
    return TokenService()


def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
    tokens: Annotated[TokenService, Depends(get_token_service)],
    blacklist: Annotated[TokenBlacklist, Depends(get_token_blacklist)],
) -> TokenClaims:
    """Resolve the bearer token into claims, rejecting missing, invalid and revoked tokens."""
    if credentials is None or not credentials.credentials:
        raise AuthenticationError("Authentication required")

    claims = tokens.decode_token(credentials.credentials)
    if blacklist.is_blacklisted(claims.jti):
        logger.warning("blacklisted_token_used", jti=claims.jti, user_id=claims.user_id)
        raise AuthenticationError("Token has been invalidated")

    add_context(user_id=claims.user_id)
    return claims


def require_admin(claims: Annotated[TokenClaims, Depends(get_current_user)]) -> TokenClaims:
    if not claims.is_admin:
        logger.warning("admin_required", user_id=claims.user_id)
        raise PermissionDeniedError("Admin role required")
    return claims


def ensure_owner_or_admin(claims: TokenClaims, user_id: str | None) -> None:
    """Allow admins everywhere and everyone else only on their own resources."""
    if claims.is_admin or (user_id is not None and claims.user_id == str(user_id)):
        return
    logger.warning("access_denied", user_id=claims.user_id, target_user_id=user_id)
    raise PermissionDeniedError("You don't have permission to access this resource")


CurrentUser = Annotated[TokenClaims, Depends(get_current_user)]
AdminUser = Annotated[TokenClaims, Depends(require_admin)]
