import pytest

from src.accounts.domain.models.user import UserRole
from src.accounts.exceptions import ValidationError
from src.accounts.services.accounts.validators import (
    PASSWORD_POLICY_MESSAGE,
    parse_role,
    validate_email,
    validate_password,
)


@pytest.mark.parametrize(
    "email",
    ["a@b.com", "first.last@example.co.uk", "x-y_z@sub-domain.example.museum"],
)
def test_valid_emails_pass(email):
    validate_email(email)


@pytest.mark.parametrize(
    "email",
    ["plainaddress", "a@b", "a@b.c", "a@b.toolongtld", "a b@c.com", "a@b.com\n", "é@b.com"],
)
def test_invalid_emails_are_rejected_with_templated_message(email):
    with pytest.raises(ValidationError) as excinfo:
        validate_email(email)
    assert excinfo.value.message == f"{email} is not a valid email address"


@pytest.mark.parametrize("password", ["abcdefgh", "ABCDEFG1", "abcdefg1", "Abc1234", "Abcdefg\u0661"])
def test_weak_passwords_are_rejected(password):
    with pytest.raises(ValidationError) as excinfo:
        validate_password(password)
    assert excinfo.value.message == PASSWORD_POLICY_MESSAGE


def test_policy_compliant_password_passes():
    validate_password("Abc12345")


def test_parse_role():
    assert parse_role("supervisor") is UserRole.SUPERVISOR
    assert parse_role("member") is UserRole.MEMBER
    with pytest.raises(ValidationError) as excinfo:
        parse_role("owner")
    assert excinfo.value.message == "owner is not a valid role"
