from __future__ import annotations

from threading import Lock
from typing import Dict, Optional
from uuid import UUID

from src.accounts.domain.models.user import User, UserRole
from src.accounts.exceptions import DuplicateEmailError, DuplicateSupervisorError
from src.accounts.infra.db.repositories import UserRepository


class InMemoryUserRepository(UserRepository):
    """Dict-backed user store for development and tests.

    Inserts are serialized by a lock so the uniqueness checks in ``add`` and
    the write that follows them happen as one step.
    """

    def __init__(self) -> None:
        self._users: Dict[UUID, User] = {}
        self._lock = Lock()

    def get(self, user_id: UUID) -> Optional[User]:
        return self._users.get(user_id)

    def get_by_email(self, email: str) -> Optional[User]:
        for user in self._users.values():
            if user.email == email:
                return user
        return None

    def find_supervisor_for_company(self, company_name: str) -> Optional[User]:
        wanted = company_name.lower()
        for user in self._users.values():
            if user.role == UserRole.SUPERVISOR and user.company_name.lower() == wanted:
                return user
        return None

    def add(self, user: User) -> None:
        with self._lock:
            if self.get_by_email(user.email) is not None:
                raise DuplicateEmailError()
            if user.role == UserRole.SUPERVISOR and self.find_supervisor_for_company(user.company_name) is not None:
                raise DuplicateSupervisorError()
            self._users[user.id] = user

    def __len__(self) -> int:
        return len(self._users)
