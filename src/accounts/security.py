from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from typing import Optional, Union
from uuid import UUID, uuid4

import bcrypt
from jose import jwt, JWTError

from src.accounts.config import Settings
from src.accounts.exceptions import ConfigurationError, HashingError

logger = logging.getLogger(__name__)

ALGORITHM = "HS256"

# bcrypt ignores everything past the first 72 bytes of a secret; newer
# releases of the library raise instead, so the cut is made here.
_BCRYPT_MAX_BYTES = 72


def _encode_secret(plaintext: str) -> bytes:
    return plaintext.encode("utf-8")[:_BCRYPT_MAX_BYTES]


class CredentialHasher:
    """Salted, adaptive-cost password hashing backed by bcrypt."""

    def __init__(self, rounds: int = 10) -> None:
        self._rounds = rounds

    def hash(self, plaintext: str) -> str:
        try:
            hashed = bcrypt.hashpw(_encode_secret(plaintext), bcrypt.gensalt(rounds=self._rounds))
        except (ValueError, TypeError) as exc:
            raise HashingError("Failed to hash password") from exc
        return hashed.decode("utf-8")

    def verify(self, plaintext: str, hashed: str) -> bool:
        """Return True if ``plaintext`` matches ``hashed``.

        A mismatch is a plain False. Only a stored hash bcrypt cannot parse
        raises :class:`HashingError`.
        """

        try:
            return bcrypt.checkpw(_encode_secret(plaintext), hashed.encode("utf-8"))
        except (ValueError, TypeError) as exc:
            raise HashingError("Stored password hash is malformed") from exc


class TokenIssuer:
    """Signs bearer tokens bound to a user id.

    Built once at startup from :class:`Settings` and read-only afterwards.
    Tokens carry the subject as the ``userId`` claim and expire after
    ``expires_in`` (30 days by default). Verification is not handled here.
    """

    def __init__(self, secret: Optional[str], *, expires_in: timedelta = timedelta(days=30)) -> None:
        self._secret = secret
        self._expires_in = expires_in

    @classmethod
    def from_settings(cls, settings: Settings) -> "TokenIssuer":
        if not settings.jwt_secret:
            logger.warning("JWT_SECRET is not set; token issuance will fail")
        return cls(settings.jwt_secret, expires_in=timedelta(days=settings.token_expire_days))

    @property
    def expires_in(self) -> timedelta:
        return self._expires_in

    def issue(self, subject_id: Union[UUID, str]) -> str:
        if not self._secret:
            raise ConfigurationError("Token signing secret is not configured")

        now = datetime.now(timezone.utc)
        payload = {
            "userId": str(subject_id),
            "iat": int(now.timestamp()),
            "exp": int((now + self._expires_in).timestamp()),
            # Keeps tokens issued within the same second distinct.
            "jti": uuid4().hex,
        }
        try:
            return jwt.encode(payload, self._secret, algorithm=ALGORITHM)
        except JWTError as exc:
            raise ConfigurationError("Failed to sign token") from exc
