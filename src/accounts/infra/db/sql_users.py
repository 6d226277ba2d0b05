from __future__ import annotations

from typing import Optional
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from src.accounts.domain.models.user import User, UserRole
from src.accounts.exceptions import DuplicateEmailError, DuplicateSupervisorError, StoreError
from src.accounts.infra.db.models import UserORM
from src.accounts.infra.db.repositories import UserRepository
from src.accounts.infra.db.session import SessionFactory


class SqlUserRepository(UserRepository):
    """SQL-backed UserRepository.

    Uniqueness of email and of the supervisor per company is enforced by the
    indexes declared on :class:`UserORM`; an IntegrityError on insert is the
    authoritative conflict signal.
    """

    def __init__(self, session_factory: SessionFactory) -> None:
        self._session_factory = session_factory

    def get(self, user_id: UUID) -> Optional[User]:
        session = self._session_factory()
        try:
            orm = session.get(UserORM, user_id)
            return orm.to_domain() if orm is not None else None
        except SQLAlchemyError as exc:
            raise StoreError("Failed to load user") from exc
        finally:
            session.close()

    def get_by_email(self, email: str) -> Optional[User]:
        session = self._session_factory()
        try:
            orm = session.scalars(select(UserORM).where(UserORM.email == email)).first()
            return orm.to_domain() if orm is not None else None
        except SQLAlchemyError as exc:
            raise StoreError("Failed to look up user by email") from exc
        finally:
            session.close()

    def find_supervisor_for_company(self, company_name: str) -> Optional[User]:
        session = self._session_factory()
        try:
            query = select(UserORM).where(
                UserORM.role == UserRole.SUPERVISOR.value,
                func.lower(UserORM.company_name) == company_name.lower(),
            )
            orm = session.scalars(query).first()
            return orm.to_domain() if orm is not None else None
        except SQLAlchemyError as exc:
            raise StoreError("Failed to look up company supervisor") from exc
        finally:
            session.close()

    def add(self, user: User) -> None:
        session = self._session_factory()
        try:
            session.add(UserORM.from_domain(user))
            session.commit()
        except IntegrityError as exc:
            session.rollback()
            # The insert lost a race; report whichever rule it broke.
            if self.get_by_email(user.email) is not None:
                raise DuplicateEmailError() from exc
            if user.role == UserRole.SUPERVISOR:
                raise DuplicateSupervisorError() from exc
            raise StoreError("Failed to insert user") from exc
        except SQLAlchemyError as exc:
            session.rollback()
            raise StoreError("Failed to insert user") from exc
        finally:
            session.close()
