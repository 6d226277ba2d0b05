from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any, Dict
from uuid import UUID

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class UserRole(str, Enum):
    SUPERVISOR = "supervisor"
    MEMBER = "member"


class User(BaseModel):
    """An account as held by the user store.

    ``password`` is the bcrypt hash and must never leave the service; use
    :func:`strip_password` to build anything that is returned to a caller.
    Serialized field names are camelCase (``fullName``, ``companyName``...).
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: UUID
    full_name: str
    email: str
    password: str
    role: UserRole
    company_name: str
    profile_pic: str = ""
    # Set by profile flows outside account creation.
    profession: str = ""
    created_at: datetime


def strip_password(user: User) -> Dict[str, Any]:
    """Return the JSON-ready public view of ``user`` without its password hash."""

    return user.model_dump(mode="json", by_alias=True, exclude={"password"})
