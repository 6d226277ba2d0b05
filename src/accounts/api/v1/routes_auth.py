from __future__ import annotations

import logging
from typing import Optional, Tuple

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict
from pydantic import ValidationError as PydanticValidationError
from pydantic.alias_generators import to_camel
from starlette.datastructures import UploadFile

from src.accounts.api.v1.envelopes import AccountResponse, describe_validation_errors, envelope, internal_error
from src.accounts.domain.models.user import strip_password
from src.accounts.exceptions import AccountError, ValidationError
from src.accounts.services.accounts.service import (
    AccountService,
    AuthResult,
    ProfilePicUpload,
    get_account_service,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


class LoginRequest(BaseModel):
    email: str
    password: str


class ForgotPasswordRequest(BaseModel):
    email: str


class SignupRequest(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    full_name: str
    email: str
    password: str
    role: str
    company_name: str


def _error(exc: AccountError) -> JSONResponse:
    return envelope(exc.status_code, success=False, message=exc.message)


def _authenticated(result: AuthResult) -> JSONResponse:
    return envelope(
        status.HTTP_200_OK,
        success=True,
        user={"token": result.token, **strip_password(result.user)},
    )


@router.post("/login", response_model=AccountResponse, response_model_exclude_none=True)
async def login(
    payload: LoginRequest,
    service: AccountService = Depends(get_account_service),
) -> JSONResponse:
    try:
        result = service.login(email=payload.email, password=payload.password)
    except AccountError as exc:
        return _error(exc)
    except Exception:
        logger.exception("Error during login")
        return internal_error()
    return _authenticated(result)


async def _read_signup_request(request: Request) -> Tuple[SignupRequest, Optional[ProfilePicUpload]]:
    """Parse a signup body sent as JSON or as a multipart/urlencoded form.

    Only the form variant can carry the ``profilePic`` file.
    """

    upload: Optional[ProfilePicUpload] = None
    if request.headers.get("content-type", "").startswith("application/json"):
        try:
            data = await request.json()
        except ValueError:
            raise ValidationError("Request body is not valid JSON") from None
    else:
        form = await request.form()
        data = {key: value for key, value in form.items() if isinstance(value, str)}
        profile_pic = form.get("profilePic")
        # Browsers send an empty, nameless part when no file was chosen.
        if isinstance(profile_pic, UploadFile) and profile_pic.filename:
            upload = ProfilePicUpload(
                filename=profile_pic.filename,
                content_type=profile_pic.content_type,
                content=await profile_pic.read(),
            )

    try:
        payload = SignupRequest.model_validate(data)
    except PydanticValidationError as exc:
        raise ValidationError(describe_validation_errors(exc.errors())) from None
    return payload, upload


@router.post("/signup", response_model=AccountResponse, response_model_exclude_none=True)
async def signup(
    request: Request,
    service: AccountService = Depends(get_account_service),
) -> JSONResponse:
    """Create an account from a JSON body or a multipart/urlencoded form.

    ``profilePic`` is an optional image upload; the stored file is served
    under the configured uploads prefix and its path recorded on the user.
    """

    try:
        payload, upload = await _read_signup_request(request)
        result = service.signup(
            full_name=payload.full_name,
            email=payload.email,
            password=payload.password,
            role=payload.role,
            company_name=payload.company_name,
            profile_pic=upload,
        )
    except AccountError as exc:
        return _error(exc)
    except Exception:
        logger.exception("Error during signup")
        return internal_error()
    return _authenticated(result)


@router.post("/forgot-password", response_model=AccountResponse, response_model_exclude_none=True)
async def forgot_password(
    payload: ForgotPasswordRequest,
    service: AccountService = Depends(get_account_service),
) -> JSONResponse:
    try:
        message = service.forgot_password(email=payload.email)
    except AccountError as exc:
        return _error(exc)
    except Exception:
        logger.exception("Error during forgot password")
        return internal_error()
    return envelope(status.HTTP_200_OK, success=True, message=message)
