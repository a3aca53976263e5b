# =============================================================================
# app/auth/__init__.py - Authentication Module
# =============================================================================
# Provides JWT-based authentication using Supabase Auth, plus the
# single-address admin gate.
#
# Usage:
#   from app.auth import get_current_admin, AuthUser
#
#   @router.delete("/projects/{id}")
#   async def delete(user: AuthUser = Depends(get_current_admin)):
#       ...
# =============================================================================

from app.auth.dependencies import get_current_admin, get_current_user
from app.auth.models import AuthUser, UserResponse

__all__ = [
    "get_current_admin",
    "get_current_user",
    "AuthUser",
    "UserResponse",
]
