from __future__ import annotations

import hashlib
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional
from uuid import uuid4

from src.accounts.config import settings
from src.accounts.domain.models.user import User, UserRole
from src.accounts.exceptions import (
    AuthenticationError,
    DuplicateEmailError,
    DuplicateSupervisorError,
    NotFoundError,
    ValidationError,
)
from src.accounts.infra.db.inmemory import InMemoryUserRepository
from src.accounts.infra.db.repositories import UserRepository
from src.accounts.infra.storage.profile_pics import ProfilePicStorageBackend, profile_pic_storage_backend
from src.accounts.security import CredentialHasher, TokenIssuer
from src.accounts.services.accounts.password_reset import PasswordResetNotifier, UnimplementedPasswordResetNotifier
from src.accounts.services.accounts.validators import parse_role, validate_email, validate_password
from src.accounts.services.audit.service import AuditService, audit_service

RESET_REQUESTED_MESSAGE = "Password reset token sent successfully"


def email_subject(email: str) -> str:
    """Stable, non-reversible audit subject for the account an email names.

    Lets audit events for the same address be correlated (including failed
    logins for unknown accounts) without writing the address to the log.
    """

    return "email:" + hashlib.sha256(email.encode("utf-8")).hexdigest()[:16]


@dataclass
class ProfilePicUpload:
    filename: str
    content_type: Optional[str]
    content: bytes


@dataclass
class AuthResult:
    user: User
    token: str


class AccountService:
    """Login, signup and password-reset requests over a user store.

    Each operation is a linear run of guard checks. A failed guard raises an
    :class:`~src.accounts.exceptions.AccountError` carrying the message for
    the caller; infrastructure failures propagate unchanged for the HTTP
    layer to log and hide.
    """

    def __init__(
        self,
        users: UserRepository,
        hasher: CredentialHasher,
        tokens: TokenIssuer,
        *,
        reset_notifier: Optional[PasswordResetNotifier] = None,
        storage: ProfilePicStorageBackend = profile_pic_storage_backend,
        audit: AuditService = audit_service,
        max_upload_bytes: int = settings.max_upload_bytes,
    ) -> None:
        self.users = users
        self._hasher = hasher
        self._tokens = tokens
        self._reset_notifier = reset_notifier or UnimplementedPasswordResetNotifier()
        self._storage = storage
        self._audit = audit
        self._max_upload_bytes = max_upload_bytes

    def login(self, *, email: str, password: str) -> AuthResult:
        validate_email(email)
        subject = email_subject(email)

        user = self.users.get_by_email(email)
        if user is None:
            self._audit.log_event(
                action="login_failed",
                resource_type="user",
                subject=subject,
                extra={"reason": "user_not_found"},
            )
            raise NotFoundError("User not found")

        # TODO: unify "User not found" and "Invalid password" once product signs off on the enumeration fix.
        if not self._hasher.verify(password, user.password):
            self._audit.log_event(
                action="login_failed",
                resource_type="user",
                resource_id=str(user.id),
                subject=subject,
                extra={"reason": "invalid_password"},
            )
            raise AuthenticationError("Invalid password")

        token = self._tokens.issue(user.id)
        self._audit.log_event(action="login", resource_type="user", resource_id=str(user.id), subject=subject)
        return AuthResult(user=user, token=token)

    def signup(
        self,
        *,
        full_name: str,
        email: str,
        password: str,
        role: str,
        company_name: str,
        profile_pic: Optional[ProfilePicUpload] = None,
    ) -> AuthResult:
        if self.users.get_by_email(email) is not None:
            raise DuplicateEmailError()

        user_role = parse_role(role)
        if user_role == UserRole.SUPERVISOR and self.users.find_supervisor_for_company(company_name) is not None:
            raise DuplicateSupervisorError()

        validate_password(password)
        if profile_pic is not None:
            self._check_profile_pic(profile_pic)
        hashed_password = self._hasher.hash(password)

        stored_filename: Optional[str] = None
        if profile_pic is not None:
            stored_filename = self._storage.save_file(profile_pic.content, original_filename=profile_pic.filename)

        user = User(
            id=uuid4(),
            full_name=full_name,
            email=email,
            password=hashed_password,
            role=user_role,
            company_name=company_name,
            profile_pic=self._storage.public_path(stored_filename) if stored_filename else "",
            profession="",
            created_at=datetime.now(timezone.utc),
        )
        # The store re-checks both uniqueness rules atomically; the reads above
        # only decide which message a caller sees first.
        try:
            self.users.add(user)
        except Exception:
            if stored_filename is not None:
                self._storage.delete_file(stored_filename)
            raise

        token = self._tokens.issue(user.id)
        self._audit.log_event(
            action="signup",
            resource_type="user",
            resource_id=str(user.id),
            subject=email_subject(email),
            extra={"role": user.role.value, "has_profile_pic": stored_filename is not None},
        )
        return AuthResult(user=user, token=token)

    def forgot_password(self, *, email: str) -> str:
        user = self.users.get_by_email(email)
        if user is None:
            raise NotFoundError("User with this email does not exist")

        self._reset_notifier.send_reset(user)
        self._audit.log_event(
            action="forgot_password",
            resource_type="user",
            resource_id=str(user.id),
            subject=email_subject(email),
            extra={"delivered": self._reset_notifier.implemented},
        )
        return RESET_REQUESTED_MESSAGE

    def _check_profile_pic(self, upload: ProfilePicUpload) -> None:
        if upload.content_type and not upload.content_type.startswith("image/"):
            raise ValidationError("Profile picture must be an image")
        if len(upload.content) > self._max_upload_bytes:
            raise ValidationError("Profile picture is too large")


account_service = AccountService(
    InMemoryUserRepository(),
    CredentialHasher(rounds=settings.bcrypt_rounds),
    TokenIssuer.from_settings(settings),
)


def get_account_service() -> AccountService:
    """FastAPI dependency returning the process-wide AccountService."""
    return account_service
