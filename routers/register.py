# routers/register.py

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from core.config import settings
from core.errors import ErrorKind, ServiceError
from core.rate_limiter import check_rate_limit, get_rate_limit_identifier
from core.response_formatter import format_error
from dependencies.auth import get_language
from dependencies.services import get_registration_service
from models.registration import RegisterRequest, RegisterResponse
from services.registration import RegistrationService


router = APIRouter(
    tags=["Registration"],
)


# -----------------------------------------------------
# PUBLIC: Register client / driver / manager / company admin
# -----------------------------------------------------
@router.post(
    "/auth-register",
    response_model=RegisterResponse,
    response_model_by_alias=True,
    summary="Public: Register a new account",
    responses={400: {"model": RegisterResponse}},
)
def register(
    payload: RegisterRequest,
    request: Request,
    language: str = Depends(get_language),
    service: RegistrationService = Depends(get_registration_service),
):
    identifier = get_rate_limit_identifier(request, "auth-register")
    allowed, _ = check_rate_limit(
        identifier,
        max_requests=settings.REGISTER_RATE_LIMIT,
        window_seconds=settings.RATE_LIMIT_WINDOW_SECONDS,
    )
    if not allowed:
        return JSONResponse(
            status_code=400,
            content=format_error(ServiceError(ErrorKind.RATE_LIMITED), language),
        )

    result = service.handle(payload, language)

    return JSONResponse(status_code=200 if result["success"] else 400, content=result)
