# routers/password_reset.py

from typing import Optional

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from core.config import settings
from core.errors import ErrorKind, ServiceError
from core.rate_limiter import check_rate_limit, get_rate_limit_identifier
from core.response_formatter import format_error
from dependencies.auth import get_bearer_token, get_language
from dependencies.services import get_password_reset_service
from models.password_reset import ResetPasswordRequest, ResetPasswordResponse
from services.password_reset import PasswordResetService


router = APIRouter(
    tags=["Admin Password Control"],
)


# --------------------------------------------------------------
# POST /reset-user-password
# Developer / admin: anyone except other developers and admins.
# Company admin / owner: managers, drivers and clients of their company.
# --------------------------------------------------------------
@router.post(
    "/reset-user-password",
    response_model=ResetPasswordResponse,
    summary="Admin: Reset a user's password",
    responses={400: {"model": ResetPasswordResponse}},
)
def reset_user_password(
    request: Request,
    payload: Optional[ResetPasswordRequest] = None,
    token: Optional[str] = Depends(get_bearer_token),
    language: str = Depends(get_language),
    service: PasswordResetService = Depends(get_password_reset_service),
):
    identifier = get_rate_limit_identifier(request, "reset-user-password")
    allowed, _ = check_rate_limit(
        identifier,
        max_requests=settings.RESET_RATE_LIMIT,
        window_seconds=settings.RATE_LIMIT_WINDOW_SECONDS,
    )
    if not allowed:
        return JSONResponse(
            status_code=400,
            content=format_error(ServiceError(ErrorKind.RATE_LIMITED), language),
        )

    payload = payload or ResetPasswordRequest()
    result = service.handle(token, payload.target_user_id, payload.new_password, language)

    return JSONResponse(status_code=200 if result["success"] else 400, content=result)
