"""JWT issuance and validation.

Tokens are HS256-signed and carry the user id (``sub``), email, name and
role, plus a random ``jti`` that logout uses to blacklist the token.
"""

from datetime import UTC, datetime, timedelta
from uuid import uuid4

import jwt
import structlog
from pydantic import BaseModel

from shared.config import Settings, get_settings
from shared.exceptions import AuthenticationError

logger = structlog.get_logger(__name__)


class TokenClaims(BaseModel):
    """The authenticated principal carried by a validated token."""

    user_id: str
    email: str
    name: str
    role: str
    jti: str
    expires_at: datetime

    @property
    def is_admin(self) -> bool:
        return self.role == "Admin"


class TokenService:
    def __init__(self, settings: Settings | None = None):
        self.settings = settings or get_settings()

    def generate_token(self, user_id: str, email: str, name: str, role: str) -> str:
        now = datetime.now(UTC)
        payload = {
            "sub": str(user_id),
            "email": email,
            "name": name,
            "role": role,
            "jti": str(uuid4()),
            "iss": self.settings.jwt_issuer,
            "aud": self.settings.jwt_audience,
            "iat": now,
            "nbf": now,
            "exp": now + timedelta(minutes=self.settings.jwt_expiry_minutes),
        }
        token = jwt.encode(payload, self.settings.jwt_secret_key, algorithm=self.settings.jwt_algorithm)
        logger.info("token_generated", user_id=user_id, email=email, role=role)
        return token

    def decode_token(self, token: str) -> TokenClaims:
        """Validate signature, expiry, issuer and audience; raise ``AuthenticationError`` otherwise."""
        try:
            payload = jwt.decode(
                token,
                self.settings.jwt_secret_key,
                algorithms=[self.settings.jwt_algorithm],
                audience=self.settings.jwt_audience,
                issuer=self.settings.jwt_issuer,
                options={"require": ["sub", "jti", "exp", "iss", "aud"]},
            )
        except jwt.ExpiredSignatureError:
            raise AuthenticationError("Token has expired") from None
        except jwt.InvalidTokenError as exc:
            logger.warning("invalid_token", reason=str(exc))
            raise AuthenticationError("Invalid token") from None

        try:
            return TokenClaims(
                user_id=payload["sub"],
                email=payload.get("email", ""),
                name=payload.get("name", ""),
                role=payload.get("role", ""),
                jti=payload["jti"],
                expires_at=datetime.fromtimestamp(payload["exp"], UTC),
            )
        except (TypeError, ValueError):
            raise AuthenticationError("Invalid token") from None
