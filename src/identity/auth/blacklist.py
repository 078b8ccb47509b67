"""In-memory token blacklist.

Revoked token ids (JTIs) are kept until the token would have expired anyway.
Entries live in process memory and are lost on restart.
"""

import threading
from datetime import UTC, datetime

import structlog

logger = structlog.get_logger(__name__)


class TokenBlacklist:
    def __init__(self):
        self._tokens: dict[str, datetime] = {}
        self._lock = threading.Lock()

    def blacklist(self, jti: str, expires_at: datetime) -> None:
        with self._lock:
            self._tokens.setdefault(jti, expires_at)
        logger.info("token_blacklisted", jti=jti, expires_at=expires_at.isoformat())
        self.cleanup_expired()

    def is_blacklisted(self, jti: str) -> bool:
        with self._lock:
            return jti in self._tokens

    def cleanup_expired(self, now: datetime | None = None) -> int:
        now = now or datetime.now(UTC)
        with self._lock:
            expired = [jti for jti, expires_at in self._tokens.items() if expires_at < now]
            for jti in expired:
                del self._tokens[jti]
        if expired:
            logger.info("blacklist_cleaned_up", removed=len(expired))
        return len(expired)

    def clear(self) -> None:
        with self._lock:
            self._tokens.clear()

    def __len__(self):
        with self._lock:
            return len(self._tokens)


token_blacklist = TokenBlacklist()


def get_token_blacklist() -> TokenBlacklist:
    return token_blacklist
