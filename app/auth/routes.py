# =============================================================================
# app/auth/routes.py - Authentication Routes
# =============================================================================
# API endpoints for authentication-related operations.
#
# Note: Actual sign-in is handled by Supabase Auth client-side.
# These routes confirm the admin identity and end its session.
# =============================================================================

import logging

from fastapi import APIRouter, Depends

from app.auth.dependencies import get_current_admin
from app.auth.models import AuthUser, SignOutResponse, UserResponse
from app.dependencies import IdentityServiceDep

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/me", response_model=UserResponse)
async def get_current_admin_info(
    user: AuthUser = Depends(get_current_admin)
) -> UserResponse:
    """
    Get the signed-in admin's identity.

    The frontend calls this right after the sign-in popup completes.
    A non-admin account is signed out and gets 403.

    Raises:
        401: If not authenticated
        403: If the email is not the admin address
    """
    return UserResponse(
        id=user.id,
        email=user.email,
        display_name=user.display_name,
    )


@router.post("/sign-out", response_model=SignOutResponse)
async def sign_out(
    identity: IdentityServiceDep,
    user: AuthUser = Depends(get_current_admin),
) -> SignOutResponse:
    """
    Sign the admin out everywhere.

    Returns:
        signed_out: False if the revoke call failed
    """
    signed_out = await identity.sign_out(user.access_token)
    return SignOutResponse(signed_out=signed_out)
