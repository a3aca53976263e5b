# =============================================================================
# app/routers/projects.py - Project CRUD Endpoints
# =============================================================================
# Public reads for the landing page, admin-only writes for the admin panel.
# =============================================================================

import logging
from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Path, status
from pydantic import BaseModel, Field

from app.auth import get_current_admin, AuthUser
from app.dependencies import MediaServiceDep, ProjectServiceDep
from core.models.project import Project, ProjectFormData
from lib.utils import utc_now_iso

logger = logging.getLogger(__name__)

router = APIRouter()


# =============================================================================
# Response Models
# =============================================================================

class ProjectList(BaseModel):
    """All projects, in store order."""
    projects: list[Project] = Field(default_factory=list)
    total: int = Field(default=0, ge=0)


class ProjectDeleteResponse(BaseModel):
    """Response when deleting a project."""
    project_id: str
    message: str = Field(default="Project deleted successfully")


# =============================================================================
# Public Endpoints
# =============================================================================

@router.get("", response_model=ProjectList)
async def list_projects(projects: ProjectServiceDep):
    """
    List every project.

    Backs the public landing page. No filtering or pagination.
    """
    items = await projects.list_projects()
    return ProjectList(projects=items, total=len(items))


@router.get("/{project_id}", response_model=Project)
async def get_project(
    project_id: Annotated[UUID, Path(description="Project UUID")],
    projects: ProjectServiceDep,
):
    """Get one project."""
    return await projects.get_project(project_id)


# =============================================================================
# Admin Endpoints
# =============================================================================

@router.post("", response_model=Project, status_code=status.HTTP_201_CREATED)
async def create_project(
    data: ProjectFormData,
    projects: ProjectServiceDep,
    user: AuthUser = Depends(get_current_admin),
):
    """
    Create a project.

    Screenshots should already be uploaded via POST /uploads/images.
    """
    return await projects.create_project(data)


@router.put("/{project_id}", response_model=Project)
async def update_project(
    project_id: Annotated[UUID, Path(description="Project UUID")],
    data: ProjectFormData,
    projects: ProjectServiceDep,
    media: MediaServiceDep,
    user: AuthUser = Depends(get_current_admin),
):
    """
    Replace a project's fields.

    Screenshots the new data no longer references are deleted from storage
    once the update has succeeded, best effort.
    """
    current = await projects.get_project(project_id)
    updated_at = utc_now_iso()
    await projects.update_project(project_id, data, updated_at=updated_at)

    dropped = [url for url in current.screenshots if url not in data.screenshots]
    if dropped:
        await media.delete_images(dropped)

    return current.merged_with(data, updated_at=updated_at)


@router.delete("/{project_id}", response_model=ProjectDeleteResponse)
async def delete_project(
    project_id: Annotated[UUID, Path(description="Project UUID")],
    projects: ProjectServiceDep,
    user: AuthUser = Depends(get_current_admin),
):
    """
    Delete a project and its screenshots.

    A screenshot that cannot be deleted does not stop the project delete.
    """
    current = await projects.get_project(project_id)
    await projects.delete_project(current.id, current.screenshots)

    return ProjectDeleteResponse(project_id=current.id)
