"""Auth Routes: email-only login returning a 1 hour bearer token."""

from typing import Any

from fastapi import APIRouter, Body, Depends

from userposts.api.deps import get_auth_service
from userposts.core.validation import unwrap
from userposts.schemas.auth import TokenResponse, validate_login
from userposts.schemas.common import envelope
from userposts.services.auth_service import AuthService

router = APIRouter(prefix="/api/v1/auth", tags=["auth"])


@router.post("/login")
async def login(
    payload: dict[str, Any] = Body(...),
    service: AuthService = Depends(get_auth_service),
):
    credentials = unwrap(validate_login(payload))
    token = await service.login(credentials.email)
    return envelope(TokenResponse(token=token).model_dump())
