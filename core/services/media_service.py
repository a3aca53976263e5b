# =============================================================================
# core/services/media_service.py - Screenshot Storage Operations
# =============================================================================
# Uploads and deletes project screenshots in Supabase Storage.
#
# Objects live at {STORAGE_FOLDER}/{epoch_millis}-{original_name} inside the
# public bucket and are addressed by their public URL everywhere else in the
# app. Two uploads of the same name within one millisecond land on the same
# path; that race is accepted.
# =============================================================================

import asyncio
import logging
import mimetypes
import posixpath
from urllib.parse import unquote, urlparse

from supabase import Client

from app.config import settings
from app.exceptions import UploadFailedError
from lib.batch import BatchResult, run_best_effort
from lib.utils import epoch_millis

logger = logging.getLogger(__name__)


class MediaService:
    """
    Service for screenshot blobs.

    Uploads fail loudly. Deletes never raise, because they only run as
    cleanup next to some other operation.
    """

    def __init__(
        self,
        client: Client,
        bucket: str | None = None,
        folder: str | None = None,
    ):
        self.client = client
        self.bucket = bucket or settings.STORAGE_BUCKET
        self.folder = (folder if folder is not None else settings.STORAGE_FOLDER).strip("/")

    # -------------------------------------------------------------------------
    # Paths
    # -------------------------------------------------------------------------

    def build_path(self, original_name: str, timestamp_ms: int | None = None) -> str:
        """
        Build the object path for a new upload.

        Only the base name of `original_name` is kept, so a client cannot
        write outside the folder.
        """
        name = posixpath.basename(original_name.replace("\\", "/")).strip() or "image"
        stamp = timestamp_ms if timestamp_ms is not None else epoch_millis()
        filename = f"{stamp}-{name}"
        return f"{self.folder}/{filename}" if self.folder else filename

    def path_from_url(self, url: str) -> str | None:
        """
        Map a public URL back to its object path in this bucket.

        Public URLs look like
        {SUPABASE_URL}/storage/v1/object/public/{bucket}/{path}.

        Returns:
            The object path, or None if the URL does not point into the bucket
        """
        if not isinstance(url, str) or not url.strip():
            return None

        parsed = urlparse(url.strip())
        if not parsed.scheme or not parsed.netloc:
            return None

        marker = f"/object/public/{self.bucket}/"
        _, found, path = parsed.path.partition(marker)
        if not found:
            return None

        path = unquote(path).strip("/")
        return path or None

    # -------------------------------------------------------------------------
    # Upload
    # -------------------------------------------------------------------------

    async def upload_image(
        self,
        content: bytes,
        original_name: str,
        content_type: str | None = None,
    ) -> str:
        """
        Store an image and return its public URL.

        Args:
            content: Image bytes
            original_name: Filename supplied by the uploader
            content_type: MIME type (guessed from the name if omitted)

        Returns:
            Public URL of the stored object

        Raises:
            UploadFailedError: If the write or URL lookup fails
        """
        path = self.build_path(original_name)
        if content_type is None:
            content_type = mimetypes.guess_type(original_name)[0] or "application/octet-stream"

        try:
            bucket = self.client.storage.from_(self.bucket)
            await asyncio.to_thread(
                bucket.upload,
                path=path,
                file=content,
                file_options={"content-type": content_type, "upsert": "false"},
            )
            url = await asyncio.to_thread(bucket.get_public_url, path)

        except Exception as e:
            logger.error(f"Storage upload failed for {path}: {e}")
            raise UploadFailedError(original_name)

        logger.info(f"Uploaded image to storage: {path} ({len(content)} bytes)")
        return url

    # -------------------------------------------------------------------------
    # Delete
    # -------------------------------------------------------------------------

    async def delete_image(self, url: str) -> bool:
        """
        Delete the object behind a public URL, best effort.

        Never raises. Malformed or foreign URLs and backend errors are logged.

        Returns:
            True if the delete call went through, False otherwise
        """
        path = self.path_from_url(url)
        if path is None:
            logger.warning(f"Skipping delete of unrecognized image URL: {url!r}")
            return False

        try:
            removed = await asyncio.to_thread(
                self.client.storage.from_(self.bucket).remove,
                [path],
            )
        except Exception as e:
            logger.warning(f"Failed to delete image {path}: {e}")
            return False

        # An empty result means nothing was at that path
        if not removed:
            logger.info(f"Image already gone from storage: {path}")
        else:
            logger.info(f"Deleted image from storage: {path}")
        return True

    async def delete_images(self, urls: list[str]) -> BatchResult[str]:
        """Delete several images concurrently, best effort."""
        return await run_best_effort(urls, self.delete_image, label="image delete")
