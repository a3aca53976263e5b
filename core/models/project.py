# =============================================================================
# core/models/project.py - Project Schemas
# =============================================================================
# These models define the contract for portfolio project entries:
# - ProjectFormData: Input for creating or fully replacing a project
# - Project: A stored project, as returned to clients
#
# The project table is schemaless from the client's point of view (PostgREST
# returns plain dicts), so rows are always mapped through Project.from_record
# instead of being trusted as-is.
# =============================================================================

from datetime import datetime
from typing import Any
from urllib.parse import urlparse

from pydantic import BaseModel, Field, field_validator


def _clean_optional_url(value: Any) -> str | None:
    """Empty or blank URL inputs mean "not provided"."""
    if value is None:
        return None
    value = str(value).strip()
    if not value:
        return None
    parsed = urlparse(value)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise ValueError("Invalid URL")
    return value


class ProjectFormData(BaseModel):
    """
    Schema for creating or replacing a project.

    Mirrors the admin editing form: title and description are required,
    at least one technology label is required, links are optional.

    Example:
        {
            "title": "Ray Tracer",
            "description": "A small path tracer",
            "tech_stack": ["Rust", "WGPU"],
            "github_url": "https://github.com/me/tracer",
            "live_url": "",
            "screenshots": []
        }
    """

    title: str = Field(
        ...,
        min_length=1,
        description="Project title"
    )

    description: str = Field(
        ...,
        min_length=1,
        description="Project description"
    )

    # The form requires one label; the store itself does not
    tech_stack: list[str] = Field(
        ...,
        min_length=1,
        description="Technologies used, in display order"
    )

    github_url: str | None = Field(
        default=None,
        description="Source repository link"
    )

    live_url: str | None = Field(
        default=None,
        description="Live deployment link"
    )

    # Order is carousel order and must survive updates
    screenshots: list[str] = Field(
        default_factory=list,
        description="Public screenshot URLs, in display order"
    )

    @field_validator("title", "description", mode="before")
    @classmethod
    def strip_text(cls, value: Any) -> Any:
        return value.strip() if isinstance(value, str) else value

    @field_validator("tech_stack", mode="before")
    @classmethod
    def clean_tech_stack(cls, value: Any) -> Any:
        """Strip labels, drop blanks and drop repeats keeping the first one."""
        if not isinstance(value, list):
            return value
        labels: list[str] = []
        for label in value:
            if not isinstance(label, str):
                labels.append(label)
                continue
            label = label.strip()
            if label and label not in labels:
                labels.append(label)
        return labels

    @field_validator("github_url", "live_url", mode="before")
    @classmethod
    def clean_links(cls, value: Any) -> str | None:
        return _clean_optional_url(value)

    def to_record(self) -> dict[str, Any]:
        """
        Build the row written to the project table.

        Every mutable column is present, so an update with this dict is a
        full replace (absent links are written as null).
        """
        return {
            "title": self.title,
            "description": self.description,
            "tech_stack": list(self.tech_stack),
            "github_url": self.github_url,
            "live_url": self.live_url,
            "screenshots": list(self.screenshots),
        }


class Project(BaseModel):
    """
    A stored portfolio project.

    Returned by every read endpoint and by project creation.
    """

    id: str = Field(
        ...,
        min_length=1,
        description="Store-assigned identifier"
    )

    title: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1)

    tech_stack: list[str] = Field(default_factory=list)
    github_url: str | None = None
    live_url: str | None = None
    screenshots: list[str] = Field(default_factory=list)

    # Server assigned, opaque to clients
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_record(cls, record: dict[str, Any]) -> "Project":
        """
        Map a raw project row to a Project.

        List columns default to empty lists and optional columns to None.
        A row missing id, title or description fails validation.
        """
        return cls(
            id=str(record["id"]) if record.get("id") is not None else "",
            title=record.get("title") or "",
            description=record.get("description") or "",
            tech_stack=record.get("tech_stack") or [],
            github_url=record.get("github_url") or None,
            live_url=record.get("live_url") or None,
            screenshots=record.get("screenshots") or [],
            created_at=record.get("created_at"),
            updated_at=record.get("updated_at"),
        )

    def merged_with(
        self,
        data: ProjectFormData,
        updated_at: datetime | str | None = None,
    ) -> "Project":
        """
        Copy of this project with every mutable field replaced by `data`.

        `updated_at`, if given, replaces the stored timestamp as well.
        """
        update = data.to_record()
        if updated_at is not None:
            if isinstance(updated_at, str):
                updated_at = datetime.fromisoformat(updated_at)
            update["updated_at"] = updated_at
        return self.model_copy(update=update)
