from typing import Optional
from fastapi import Depends, Header, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from core.messages import resolve_language
from core.roles import is_platform_admin
from dependencies.services import get_identity_verifier, get_user_directory
from models.user import UserRecord


# auto_error=False: a missing token is reported by the endpoint itself
bearer_scheme = HTTPBearer(auto_error=False)


# ============================================================
# RAW BEARER TOKEN (may be None)
# ============================================================
def get_bearer_token(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> Optional[str]:
    if not credentials or not credentials.credentials:
        return None
    return credentials.credentials


# ============================================================
# MESSAGE LANGUAGE (Accept-Language → sr | en)
# ============================================================
def get_language(accept_language: Optional[str] = Header(None)) -> str:
    return resolve_language(accept_language)


# ============================================================
# CURRENT USER (Supabase token → public.users profile)
# ============================================================
def get_current_user(
    token: Optional[str] = Depends(get_bearer_token),
    identity=Depends(get_identity_verifier),
    directory=Depends(get_user_directory),
) -> UserRecord:

    unauthorized = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Invalid or expired authentication token",
        headers={"WWW-Authenticate": "Bearer"},
    )

    if not token:
        raise unauthorized

    auth_id = identity.verify(token)
    if not auth_id:
        raise unauthorized

    user = directory.find_active_by_auth_id(auth_id)
    if user is None:
        raise unauthorized

    return user


# ============================================================
# ROLE CHECKER: developer / admin only
# ============================================================
def require_platform_admin(current_user: UserRecord = Depends(get_current_user)) -> UserRecord:
    if not is_platform_admin(current_user.role):
        raise HTTPException(
            status_code=403,
            detail="Developer or admin role required",
        )
    return current_user
