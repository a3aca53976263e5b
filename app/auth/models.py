# =============================================================================
# app/auth/models.py - Authentication Models
# =============================================================================
# Pydantic models for authentication data.
# =============================================================================

from pydantic import BaseModel, ConfigDict
from uuid import UUID
from typing import Optional


class AuthUser(BaseModel):
    """
    Authenticated user extracted from a Supabase JWT.

    This is the minimal user info available from the token itself.
    The raw token is kept so a rejected session can be revoked.
    """
    model_config = ConfigDict(frozen=True)

    id: UUID
    email: Optional[str] = None
    display_name: Optional[str] = None
    access_token: str = ""


class UserResponse(BaseModel):
    """Identity of the signed-in admin, as returned by /auth/me."""
    id: UUID
    email: Optional[str] = None
    display_name: Optional[str] = None


class SignOutResponse(BaseModel):
    """Result of POST /auth/sign-out."""
    signed_out: bool
