"""One-time password reset codes with a checked expiry window."""

from __future__ import annotations

import hmac
import logging
import secrets
from datetime import datetime, timedelta, timezone
from typing import Callable

from ...domain.errors import NotFound
from ...domain.models import User
from ...infrastructure.repositories.user_repository import UserRepository
from .account_service import normalize_email

logger = logging.getLogger(__name__)

RESET_CODE_WINDOW = timedelta(minutes=10)


def _utcnow() -> datetime:
    return datetime.now(tz=timezone.utc)


def generate_reset_code() -> str:
    return secrets.token_hex(4).upper()


class PasswordResetService:
    """Issues reset codes; expiry is judged from the stored issue time, not by a timer."""

    def __init__(self, users: UserRepository, clock: Callable[[], datetime] = _utcnow) -> None:
        self.users = users
        self._clock = clock

    @property
    def window_minutes(self) -> int:
        return int(RESET_CODE_WINDOW.total_seconds() // 60)

    def request_reset(self, email: str) -> tuple[User, str]:
        """
        Generate and store a fresh code for ``email``, replacing any earlier one.

        Delivery is left to the caller so it can run after the response.

        Raises:
            NotFound: If no account uses the email
        """
        user = self.users.get_by_email(normalize_email(email))
        if not user:
            raise NotFound("User with this email does not exist")

        code = generate_reset_code()
        self.users.set_reset_code(user.id, code, self._clock())
        logger.info("Issued password reset code for user %s", user.id)
        return user, code

    def is_code_valid(self, email: str, code: str) -> bool:
        user = self.users.get_by_email(normalize_email(email))
        if not user or not user.reset_code or not user.reset_code_issued_at:
            return False
        if not hmac.compare_digest(user.reset_code.encode(), code.strip().upper().encode()):
            return False
        return self._clock() - user.reset_code_issued_at < RESET_CODE_WINDOW
