# =============================================================================
# app/dependencies.py - Shared Dependencies
# =============================================================================
# FastAPI dependency injection for shared resources.
# These are injected into route handlers using Depends().
#
# Tests replace any of these through app.dependency_overrides.
# =============================================================================

from typing import Annotated

from fastapi import Depends
from supabase import Client

from core.services import IdentityService, MediaService, ProjectService
from lib.supabase_client import SupabaseClient


def get_supabase_client() -> Client:
    """Return the process-wide Supabase client."""
    return SupabaseClient.get_client()


def get_media_service(
    client: Client = Depends(get_supabase_client),
) -> MediaService:
    return MediaService(client)


def get_project_service(
    client: Client = Depends(get_supabase_client),
    media: MediaService = Depends(get_media_service),
) -> ProjectService:
    return ProjectService(client, media)


def get_identity_service(
    client: Client = Depends(get_supabase_client),
) -> IdentityService:
    return IdentityService(client)


# Type aliases for dependency injection
SupabaseDep = Annotated[Client, Depends(get_supabase_client)]
MediaServiceDep = Annotated[MediaService, Depends(get_media_service)]
ProjectServiceDep = Annotated[ProjectService, Depends(get_project_service)]
IdentityServiceDep = Annotated[IdentityService, Depends(get_identity_service)]
