from __future__ import annotations

import re

from src.accounts.domain.models.user import UserRole
from src.accounts.exceptions import ValidationError

# local@domain.tld: word characters, dots and hyphens; 2-7 letter TLD.
EMAIL_PATTERN = re.compile(r"^[\w-]+(\.[\w-]+)*@([\w-]+\.)+[a-zA-Z]{2,7}$", re.ASCII)

# At least 8 characters with an ASCII digit, a lowercase and an uppercase letter.
PASSWORD_PATTERN = re.compile(r"^(?=.*\d)(?=.*[a-z])(?=.*[A-Z]).{8,}$", re.ASCII)

PASSWORD_POLICY_MESSAGE = (
    "Password must be at least 8 characters long and contain at least one "
    "lowercase letter, one uppercase letter, and one number"
)


def validate_email(email: str) -> None:
    if not EMAIL_PATTERN.fullmatch(email):
        raise ValidationError(f"{email} is not a valid email address")


def validate_password(password: str) -> None:
    if not PASSWORD_PATTERN.fullmatch(password):
        raise ValidationError(PASSWORD_POLICY_MESSAGE)


def parse_role(role: str) -> UserRole:
    try:
        return UserRole(role)
    except ValueError:
        raise ValidationError(f"{role} is not a valid role") from None
