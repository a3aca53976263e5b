# =============================================================================
# core/services/__init__.py - Service Layer Exports
# =============================================================================

from .media_service import MediaService
from .project_service import ProjectService
from .identity_service import IdentityService

__all__ = [
    "MediaService",
    "ProjectService",
    "IdentityService",
]
