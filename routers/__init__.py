# routers/__init__.py

from fastapi import APIRouter

from .password_reset import router as password_reset_router
from .register import router as register_router
from .migrate_users import router as migrate_users_router
from .health import router as health_router


# Master router
api_router = APIRouter()

# Backend functions
api_router.include_router(register_router)
api_router.include_router(password_reset_router)
api_router.include_router(migrate_users_router)

# Health
api_router.include_router(health_router)

__all__ = ["api_router"]
