import jwt
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional

from ...exceptions import ExpiredOrInvalid

DEFAULT_TOKEN_TTL = timedelta(hours=24)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class TokenClaims:
    phone: str
    issued_at: datetime
    expires_at: datetime


class TokenIssuer:
    """Signs and verifies bearer tokens for phones that passed OTP verification."""

    def __init__(self, secret: str, algorithm: str = "HS256",
                 ttl: timedelta = DEFAULT_TOKEN_TTL,
                 clock: Optional[Callable[[], datetime]] = None):
        if not secret:
            raise ValueError("Token signing secret must not be empty")
        self._secret = secret
        self._algorithm = algorithm
        self._ttl = ttl
        self._clock = clock or _utcnow

    def issue(self, phone: str) -> str:
        now = self._clock()
        payload = {
            "phone": phone,
            "iat": now,
            "exp": now + self._ttl,
        }
        return jwt.encode(payload, self._secret, algorithm=self._algorithm)

    def verify(self, token: str) -> TokenClaims:
        # Signature and claim presence are checked by PyJWT; expiry is
        # measured against the issuer's clock so issue and verify agree.
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                options={"require": ["exp", "iat"], "verify_exp": False, "verify_iat": False},
            )
        except jwt.InvalidTokenError:
            raise ExpiredOrInvalid()

        phone = payload.get("phone")
        exp = payload["exp"]
        iat = payload["iat"]
        if not phone or not isinstance(exp, (int, float)) or not isinstance(iat, (int, float)):
            raise ExpiredOrInvalid()

        expires_at = datetime.fromtimestamp(exp, tz=timezone.utc)
        if expires_at <= self._clock():
            raise ExpiredOrInvalid()

        return TokenClaims(
            phone=phone,
            issued_at=datetime.fromtimestamp(iat, tz=timezone.utc),
            expires_at=expires_at,
        )
