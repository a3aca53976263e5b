# =============================================================================
# core/services/project_service.py - Project Business Logic
# =============================================================================
# CRUD for portfolio projects over the Supabase project table.
#
# There is no local cache. Callers hold their own list and update it only
# after an operation here returns successfully.
# =============================================================================

import asyncio
import logging
from uuid import UUID

from pydantic import ValidationError
from supabase import Client

from app.config import settings
from app.exceptions import ProjectNotFoundError, StoreUnavailableError
from core.models.project import Project, ProjectFormData
from core.services.media_service import MediaService
from lib.utils import normalize_uuid, utc_now_iso

logger = logging.getLogger(__name__)

LOAD_FAILED = "Failed to load projects. Please try again later."
SAVE_FAILED = "Failed to save project. Please try again."
DELETE_FAILED = "Failed to delete project. Please try again."


class ProjectService:
    """
    Service for project records.

    Every method is async and runs the blocking supabase-py call in a worker
    thread, so each store round-trip is a suspension point.
    """

    def __init__(
        self,
        client: Client,
        media: MediaService,
        table: str | None = None,
    ):
        self.client = client
        self.media = media
        self.table = table or settings.PROJECTS_TABLE

    async def list_projects(self) -> list[Project]:
        """
        Fetch every project.

        No filter, no pagination, and no ordering beyond what the store
        returns. Rows that fail validation are logged and left out.

        Raises:
            StoreUnavailableError: If the query fails
        """
        try:
            response = await asyncio.to_thread(
                self.client.table(self.table).select("*").execute
            )
        except Exception as e:
            logger.error(f"Failed to list projects: {e}")
            raise StoreUnavailableError(LOAD_FAILED, operation="list_projects")

        rows = response.data or []
        logger.debug(f"Fetched {len(rows)} projects")

        # One malformed row must not take down the whole list
        projects: list[Project] = []
        for row in rows:
            try:
                projects.append(Project.from_record(row))
            except ValidationError as e:
                logger.warning(
                    f"Skipping malformed project row {row.get('id')!r}: "
                    f"{e.error_count()} validation errors"
                )
        return projects

    async def get_project(self, project_id: str | UUID) -> Project:
        """
        Fetch one project by ID.

        Raises:
            ProjectNotFoundError: If no row has this ID
            StoreUnavailableError: If the query fails or the row is malformed
        """
        project_id = normalize_uuid(project_id)

        try:
            response = await asyncio.to_thread(
                self.client.table(self.table)
                .select("*")
                .eq("id", project_id)
                .limit(1)
                .execute
            )
        except Exception as e:
            logger.error(f"Failed to fetch project {project_id}: {e}")
            raise StoreUnavailableError(LOAD_FAILED, operation="get_project")

        if not response.data:
            raise ProjectNotFoundError(project_id)

        try:
            return Project.from_record(response.data[0])
        except ValidationError as e:
            logger.error(f"Project {project_id} has a malformed row: {e}")
            raise StoreUnavailableError(LOAD_FAILED, operation="get_project")

    async def create_project(self, data: ProjectFormData) -> Project:
        """
        Insert a new project.

        created_at and updated_at come from column defaults. The returned
        Project is the input plus the store-assigned ID; timestamps are
        filled in only if the insert echoed them back.

        Raises:
            StoreUnavailableError: If the insert fails or returns no row
        """
        try:
            response = await asyncio.to_thread(
                self.client.table(self.table).insert(data.to_record()).execute
            )
        except Exception as e:
            logger.error(f"Failed to create project: {e}")
            raise StoreUnavailableError(SAVE_FAILED, operation="create_project")

        if not response.data or not response.data[0].get("id"):
            logger.error("Project insert returned no row")
            raise StoreUnavailableError(SAVE_FAILED, operation="create_project")

        row = response.data[0]
        project = Project(
            id=str(row["id"]),
            created_at=row.get("created_at"),
            updated_at=row.get("updated_at"),
            **data.to_record(),
        )

        logger.info(f"Created project: {project.id}")
        return project

    async def update_project(
        self,
        project_id: str | UUID,
        data: ProjectFormData,
        updated_at: str | None = None,
    ) -> None:
        """
        Replace every mutable field of a project and refresh updated_at.

        Does not return the record; callers merge `data` into their own copy.
        Pass `updated_at` to know the exact stamp that was written.

        Raises:
            ProjectNotFoundError: If no row has this ID
            StoreUnavailableError: If the update fails
        """
        project_id = normalize_uuid(project_id)
        record = data.to_record()
        record["updated_at"] = updated_at or utc_now_iso()

        try:
            response = await asyncio.to_thread(
                self.client.table(self.table)
                .update(record)
                .eq("id", project_id)
                .execute
            )
        except Exception as e:
            logger.error(f"Failed to update project {project_id}: {e}")
            raise StoreUnavailableError(SAVE_FAILED, operation="update_project")

        if not response.data:
            raise ProjectNotFoundError(project_id)

        logger.info(f"Updated project: {project_id}")

    async def find_image_owner(self, url: str) -> str | None:
        """
        Find a project whose screenshots include `url`.

        Returns:
            The ID of one such project, or None if no project uses the image

        Raises:
            StoreUnavailableError: If the query fails
        """
        try:
            response = await asyncio.to_thread(
                self.client.table(self.table)
                .select("id")
                .contains("screenshots", [url])
                .limit(1)
                .execute
            )
        except Exception as e:
            logger.error(f"Failed to look up image references: {e}")
            raise StoreUnavailableError(LOAD_FAILED, operation="find_image_owner")

        if not response.data:
            return None
        return str(response.data[0]["id"])

    async def delete_project(self, project_id: str | UUID, screenshots: list[str]) -> None:
        """
        Delete a project and its screenshots.

        All screenshot deletes are issued together and awaited before the
        row delete starts. Their failures are logged only. Screenshots already
        deleted stay deleted if the row delete then fails.

        Raises:
            StoreUnavailableError: If the row delete fails
        """
        project_id = normalize_uuid(project_id)

        cleanup = await self.media.delete_images(list(screenshots))
        if not cleanup.all_succeeded:
            logger.warning(
                f"Project {project_id}: {len(cleanup.failed)} of {cleanup.total} "
                f"screenshots could not be deleted"
            )

        try:
            await asyncio.to_thread(
                self.client.table(self.table)
                .delete()
                .eq("id", project_id)
                .execute
            )
        except Exception as e:
            logger.error(f"Failed to delete project {project_id}: {e}")
            raise StoreUnavailableError(DELETE_FAILED, operation="delete_project")

        logger.info(f"Deleted project: {project_id}")
