"""Issuing and verifying signed bearer tokens."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Callable

import jwt

from ...domain.errors import InvalidCredential

logger = logging.getLogger(__name__)

TOKEN_LIFETIME = timedelta(hours=1)


@dataclass(frozen=True, slots=True)
class TokenClaims:
    subject_id: str
    subject_email: str


def _utcnow() -> datetime:
    return datetime.now(tz=timezone.utc)


class TokenService:
    """Stateless HS256 tokens carrying the subject id and email.

    Verification does not consult the user store, so a token stays valid for
    its whole lifetime even if the account is deleted.
    """

    def __init__(
        self,
        secret_key: str,
        algorithm: str = "HS256",
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        if not secret_key:
            raise RuntimeError("JWT_SECRET is not configured.")
        self._secret_key = secret_key
        self._algorithm = algorithm
        self._clock = clock

    def issue(self, subject_id: str, subject_email: str) -> str:
        now = self._clock()
        payload = {
            "sub": subject_id,
            "email": subject_email,
            "iat": now,
            "exp": now + TOKEN_LIFETIME,
        }
        return jwt.encode(payload, self._secret_key, algorithm=self._algorithm)

    def verify(self, token: str) -> TokenClaims:
        try:
            payload = jwt.decode(
                token,
                self._secret_key,
                algorithms=[self._algorithm],
                options={"require": ["exp", "sub"]},
            )
        except jwt.PyJWTError as exc:
            logger.debug("Token rejected: %s", exc)
            raise InvalidCredential(detail=str(exc)) from exc

        subject_id = payload.get("sub")
        subject_email = payload.get("email")
        if not isinstance(subject_id, str) or not isinstance(subject_email, str):
            raise InvalidCredential(detail="Token is missing subject claims")
        return TokenClaims(subject_id=subject_id, subject_email=subject_email)
