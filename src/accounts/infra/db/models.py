from __future__ import annotations

from datetime import datetime
from uuid import UUID

from sqlalchemy import DateTime, Index, String, Uuid, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from src.accounts.domain.models.user import User, UserRole


class Base(DeclarativeBase):
    pass


class UserORM(Base):
    __tablename__ = "users"

    id: Mapped[UUID] = mapped_column(Uuid(as_uuid=True), primary_key=True)
    full_name: Mapped[str] = mapped_column(String, nullable=False)
    email: Mapped[str] = mapped_column(String, nullable=False, unique=True, index=True)
    password: Mapped[str] = mapped_column(String, nullable=False)
    role: Mapped[str] = mapped_column(String, nullable=False)
    company_name: Mapped[str] = mapped_column(String, nullable=False)
    profile_pic: Mapped[str] = mapped_column(String, nullable=False, default="")
    profession: Mapped[str] = mapped_column(String, nullable=False, default="")
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    @classmethod
    def from_domain(cls, user: User) -> "UserORM":
        return cls(
            id=user.id,
            full_name=user.full_name,
            email=user.email,
            password=user.password,
            role=user.role.value,
            company_name=user.company_name,
            profile_pic=user.profile_pic,
            profession=user.profession,
            created_at=user.created_at,
        )

    def to_domain(self) -> User:
        return User(
            id=self.id,
            full_name=self.full_name,
            email=self.email,
            password=self.password,
            role=UserRole(self.role),
            company_name=self.company_name,
            profile_pic=self.profile_pic,
            profession=self.profession,
            created_at=self.created_at,
        )


# At most one supervisor per company, compared case-insensitively.
Index(
    "uq_users_supervisor_company",
    func.lower(UserORM.company_name),
    unique=True,
    postgresql_where=UserORM.role == UserRole.SUPERVISOR.value,
    sqlite_where=UserORM.role == UserRole.SUPERVISOR.value,
)
