# routers/health.py

from fastapi import APIRouter

from core.config import settings
from core.config_validator import validate_required_config
from core.supabase_client import ping_supabase

router = APIRouter(
    prefix="/health",
    tags=["Health"],
)


# -----------------------------------------------------
# GET /health/app
# Process is up; also lists missing required settings
# -----------------------------------------------------
@router.get("/app", summary="App health check")
def health_app():
    missing = validate_required_config()
    return {
        "service": settings.PROJECT_NAME,
        "status": "ok",
        "env": settings.ENV,
        "missing_config": missing,
    }


# -----------------------------------------------------
# GET /health/db
# One small read per table the backend functions use
# -----------------------------------------------------
@router.get("/db", summary="Supabase health check")
def health_db():
    result = ping_supabase()
    return {"service": "Supabase", **result}
