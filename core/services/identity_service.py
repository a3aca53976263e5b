# =============================================================================
# core/services/identity_service.py - Admin Identity Checks
# =============================================================================
# Decides whether a signed-in account is the portfolio admin and revokes the
# session of any account that is not.
#
# The check compares one configured email address. It gates this API's admin
# routes only; the store has no row-level rules behind it.
# =============================================================================

import asyncio
import logging

from supabase import Client

from app.config import settings

logger = logging.getLogger(__name__)


def normalize_email(email: str | None) -> str:
    """Lowercase and trim an email address for comparison."""
    return (email or "").strip().lower()


class IdentityService:
    """Service for the single-admin allowlist and session revocation."""

    def __init__(self, client: Client, admin_email: str | None = None):
        self.client = client
        self.admin_email = normalize_email(
            admin_email if admin_email is not None else settings.ADMIN_EMAIL
        )

    def is_admin(self, email: str | None) -> bool:
        """Check an email against the configured admin address."""
        return bool(self.admin_email) and normalize_email(email) == self.admin_email

    async def sign_out(self, access_token: str) -> bool:
        """
        Revoke every session belonging to the token's user.

        Failures are logged and reported as False, never raised.
        """
        try:
            await asyncio.to_thread(
                self.client.auth.admin.sign_out,
                access_token,
                "global",
            )
        except Exception as e:
            logger.warning(f"Failed to revoke session: {e}")
            return False

        logger.info("Revoked session")
        return True
