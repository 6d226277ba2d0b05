from __future__ import annotations

import logging
from abc import ABC, abstractmethod

from src.accounts.domain.models.user import User

logger = logging.getLogger(__name__)


class PasswordResetNotifier(ABC):
    """Delivers a password reset token to a user.

    ``implemented`` is False for notifiers that accept the request without
    delivering anything, so callers can tell a stub from a working channel.
    """

    implemented: bool = True

    @abstractmethod
    def send_reset(self, user: User) -> None:
        raise NotImplementedError


class UnimplementedPasswordResetNotifier(PasswordResetNotifier):
    """Placeholder until reset token generation and email delivery exist.

    Generates no token and sends nothing; every request is logged at WARNING
    level so the gap is visible in operations.
    """

    implemented = False

    def send_reset(self, user: User) -> None:
        logger.warning("Password reset requested for user %s but reset delivery is not implemented", user.id)
