# =============================================================================
# core/models/ - Pydantic Data Models
# =============================================================================
# This package contains Pydantic schemas for data validation:
# - project.py: Project and ProjectFormData schemas
#
# These models define the "contract" between API and clients.
# =============================================================================

from .project import (
    Project,
    ProjectFormData,
)

__all__ = [
    "Project",
    "ProjectFormData",
]
