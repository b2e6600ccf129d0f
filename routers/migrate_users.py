# routers/migrate_users.py

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from core.errors import ErrorKind, ServiceError
from core.logging_config import logger
from core.response_formatter import format_error, format_success
from dependencies.auth import get_language, require_platform_admin
from dependencies.services import get_user_migration_service
from models.user import UserRecord
from services.user_migration import UserMigrationService


router = APIRouter(
    tags=["Admin Migration"],
)


# --------------------------------------------------------------
# POST /migrate-users
# Links legacy users (no auth_id) to Supabase Auth accounts.
# Developer / admin only. Safe to re-run: linked users are skipped.
# --------------------------------------------------------------
@router.post("/migrate-users", summary="Admin: Migrate legacy users to Supabase Auth")
def migrate_users(
    current_user: UserRecord = Depends(require_platform_admin),
    language: str = Depends(get_language),
    service: UserMigrationService = Depends(get_user_migration_service),
):
    logger.info(f"User migration started by {current_user.id}")

    try:
        results = service.migrate()
    except Exception as e:
        logger.error("Migration error", exc_info=True)
        return JSONResponse(
            status_code=500,
            content=format_error(ServiceError(ErrorKind.MIGRATION_FAILED, detail=str(e)), language),
        )

    if results.total == 0:
        return format_success("No users to migrate", migrated=0)

    return format_success("Migration complete", results=results.model_dump())
