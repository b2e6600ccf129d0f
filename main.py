from fastapi import FastAPI, Request
from fastapi.exception_handlers import request_validation_exception_handler
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

# Core
from core.config import settings
from core.config_validator import validate_config_on_startup
from core.errors import ErrorKind, ServiceError
from core.logging_config import logger
from core.messages import resolve_language
from core.response_formatter import format_error


# Backend functions answer malformed bodies in their own
# {success, error} shape instead of FastAPI's 422
BODY_VALIDATION_ERRORS = {
    "/reset-user-password": ErrorKind.INVALID_INPUT,
    "/auth-register": ErrorKind.MISSING_FIELDS,
}

# -------------------------------------------------
# Routers: backend functions called by the mobile app and web console
# -------------------------------------------------
from routers import api_router


# -------------------------------------------------
# Create the Application
# -------------------------------------------------
def create_app() -> FastAPI:
    app = FastAPI(
        title=settings.PROJECT_NAME,
        version="1.0.0",
        description="EcoPlanina API: registration, password resets and account migration on Supabase",
    )

    # -------------------------------------------------
    # CORS
    # -------------------------------------------------
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.BACKEND_CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["POST", "GET", "OPTIONS"],
        allow_headers=["authorization", "x-client-info", "apikey", "content-type", "accept-language"],
    )

    # -------------------------------------------------
    # Startup
    # -------------------------------------------------
    @app.on_event("startup")
    async def on_startup():
        logger.info("🚀 Starting EcoPlanina API")
        validate_config_on_startup()

    # -------------------------------------------------
    # Error handling
    # -------------------------------------------------
    @app.exception_handler(StarletteHTTPException)
    async def handle_http(request: Request, exc: StarletteHTTPException):
        if exc.status_code in (401, 403, 500):
            logger.warning(
                f"HTTP {exc.status_code} at {request.url}: {exc.detail}"
            )
        return JSONResponse(
            status_code=exc.status_code,
            content={"detail": exc.detail},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def handle_validation(request: Request, exc: RequestValidationError):
        kind = BODY_VALIDATION_ERRORS.get(request.url.path)
        if kind is None:
            return await request_validation_exception_handler(request, exc)

        # Locations only: the inputs may hold a password
        fields = [".".join(str(p) for p in e.get("loc", ())) for e in exc.errors()]
        logger.warning(f"Malformed body at {request.url.path}: {fields}")
        language = resolve_language(request.headers.get("accept-language"))
        return JSONResponse(
            status_code=400,
            content=format_error(ServiceError(kind), language),
        )

    @app.exception_handler(Exception)
    async def handle_unhandled(request: Request, exc: Exception):
        logger.error("Unhandled error at %s", request.url, exc_info=exc)
        return JSONResponse(
            status_code=500,
            content={"detail": "Internal server error"},
        )

    # -------------------------------------------------
    # Register Routers
    # -------------------------------------------------
    app.include_router(api_router)

    return app


# Create the global FastAPI instance
app = create_app()
