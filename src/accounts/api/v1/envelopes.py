from __future__ import annotations

from typing import Any, Dict, Optional, Sequence

from fastapi import status
from fastapi.responses import JSONResponse
from pydantic import BaseModel

INTERNAL_ERROR_MESSAGE = "Internal server error"


class AccountResponse(BaseModel):
    """Uniform ``{success, message?, user?}`` body of every auth endpoint."""

    success: bool
    message: Optional[str] = None
    user: Optional[Dict[str, Any]] = None


def envelope(
    status_code: int,
    *,
    success: bool,
    message: Optional[str] = None,
    user: Optional[Dict[str, Any]] = None,
) -> JSONResponse:
    # Absent keys are omitted rather than sent as null.
    body = AccountResponse(success=success, message=message, user=user).model_dump(exclude_none=True)
    return JSONResponse(status_code=status_code, content=body)


def internal_error() -> JSONResponse:
    return envelope(status.HTTP_500_INTERNAL_SERVER_ERROR, success=False, message=INTERNAL_ERROR_MESSAGE)


def describe_validation_errors(errors: Sequence[Dict[str, Any]]) -> str:
    """Turn pydantic/FastAPI error dicts into one caller-facing sentence."""

    if not errors:
        return "Invalid request"

    first = errors[0]
    # Drop the "body"/"query" prefix FastAPI puts in front of field names.
    loc = [str(part) for part in first.get("loc", ()) if part not in ("body", "query", "form")]
    field = ".".join(loc)
    if first.get("type") == "missing":
        return f"{field} is required" if field else "Request body is required"
    if field:
        return f"{field}: {first.get('msg', 'invalid value')}"
    return first.get("msg", "Invalid request")
