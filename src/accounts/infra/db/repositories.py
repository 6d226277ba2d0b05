from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from src.accounts.domain.models.user import User


class UserRepository(ABC):
    @abstractmethod
    def get(self, user_id: UUID) -> Optional[User]:
        raise NotImplementedError

    @abstractmethod
    def get_by_email(self, email: str) -> Optional[User]:
        """Exact, case-sensitive lookup."""
        raise NotImplementedError

    @abstractmethod
    def find_supervisor_for_company(self, company_name: str) -> Optional[User]:
        """Return the supervisor whose company name matches case-insensitively."""
        raise NotImplementedError

    @abstractmethod
    def add(self, user: User) -> None:
        """Insert a new user.

        Implementations enforce both uniqueness rules atomically and raise
        DuplicateEmailError or DuplicateSupervisorError on conflict.
        """
        raise NotImplementedError
