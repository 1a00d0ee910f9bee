"""Identity Tokens: sign and verify short-lived bearer tokens with a shared secret.

Invariants:
    - Exactly one signing algorithm is accepted (settings.jwt_algorithm, HS256)
    - Tokens carry sub (user id), iat and exp; sub and exp are essential
    - Every verification failure becomes the same UnauthorizedError, whatever the cause

Design Decisions:
    - authlib's JsonWebToken restricted to one algorithm: alg confusion ("none", RS/HS swap) is
      rejected at decode time, not by a post-hoc header check
    - `now` is injectable on issue/verify so expiry is testable without sleeping
"""

import logging
import time
from uuid import UUID

from authlib.jose import JoseError, JsonWebToken

from userposts.config import Settings
from userposts.core.errors import UnauthorizedError
from userposts.core.validation import coerce_identifier

logger = logging.getLogger(__name__)

_CLAIMS_OPTIONS = {
    "sub": {"essential": True},
    "exp": {"essential": True},
}


class TokenService:
    """Issues and verifies identity tokens for the Authorization Gate."""

    def __init__(self, secret: str, algorithm: str = "HS256", ttl_seconds: int = 3600):
        self._secret = secret
        self._algorithm = algorithm
        self._ttl_seconds = ttl_seconds
        self._jwt = JsonWebToken([algorithm])

    @classmethod
    def from_settings(cls, settings: Settings) -> "TokenService":
        return cls(
            settings.jwt_secret,
            settings.jwt_algorithm,
            settings.access_token_ttl_seconds,
        )

    @property
    def ttl_seconds(self) -> int:
        return self._ttl_seconds

    def issue(self, user_id: UUID, now: int | None = None) -> str:
        """Sign a token for user_id that expires ttl_seconds after `now`."""
        issued_at = int(time.time()) if now is None else now
        payload = {
            "sub": str(user_id),
            "iat": issued_at,
            "exp": issued_at + self._ttl_seconds,
        }
        header = {"alg": self._algorithm, "typ": "JWT"}
        token = self._jwt.encode(header, payload, self._secret)
        return token.decode() if isinstance(token, bytes) else token

    def verify(self, token: str, now: int | None = None) -> UUID:
        """Return the caller identity embedded in a valid token."""
        try:
            claims = self._jwt.decode(token, self._secret, claims_options=_CLAIMS_OPTIONS)
            claims.validate(now=now)
        except (JoseError, ValueError) as exc:
            logger.info(f"Rejected bearer token: {type(exc).__name__}")
            raise UnauthorizedError() from exc

        user_id = coerce_identifier(claims.get("sub"))
        if user_id is None:
            logger.info("Rejected bearer token: subject is not a user id")
            raise UnauthorizedError()
        return user_id
