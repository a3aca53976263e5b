# =============================================================================
# lib/utils.py - Shared Utilities
# =============================================================================
# Common utilities used across the application.
# =============================================================================

from datetime import datetime, timezone
from uuid import UUID


# =============================================================================
# UUID Utilities
# =============================================================================

def normalize_uuid(value: str | UUID) -> str:
    """
    Normalize a UUID to string format.

    Handles both string and UUID objects, ensuring consistent string output.

    Example:
        project_id = normalize_uuid(uuid_obj)  # "550e8400-..."
        project_id = normalize_uuid("550e8400-...")  # "550e8400-..."
    """
    return str(value) if isinstance(value, UUID) else value


# =============================================================================
# Time Utilities
# =============================================================================

def utc_now_iso() -> str:
    """Current UTC time as an ISO 8601 string, the format PostgREST accepts."""
    return datetime.now(timezone.utc).isoformat()


def epoch_millis() -> int:
    """Milliseconds since the Unix epoch."""
    return int(datetime.now(timezone.utc).timestamp() * 1000)
