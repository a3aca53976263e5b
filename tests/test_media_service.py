# =============================================================================
# tests/test_media_service.py - Screenshot Storage Tests
# =============================================================================
# Tests use the in-memory bucket from conftest.py instead of Supabase.
# =============================================================================

import asyncio
from unittest.mock import patch

import pytest

from app.exceptions import UploadFailedError
from core.services.media_service import MediaService
from tests.conftest import PUBLIC_PREFIX


def run(coro):
    return asyncio.run(coro)


@pytest.fixture
def media(fake_client):
    return MediaService(fake_client, bucket="portfolio", folder="projects")


# =============================================================================
# Path Tests
# =============================================================================

class TestPaths:
    """Tests for object path building and URL parsing."""

    def test_build_path_uses_timestamp_and_name(self, media):
        assert media.build_path("shot.png", timestamp_ms=1700000000000) == "projects/1700000000000-shot.png"

    def test_build_path_strips_directories(self, media):
        assert media.build_path("../../etc/shot.png", timestamp_ms=1) == "projects/1-shot.png"
        assert media.build_path("C:\\Users\\me\\shot.png", timestamp_ms=1) == "projects/1-shot.png"

    def test_build_path_without_folder(self, fake_client):
        media = MediaService(fake_client, bucket="portfolio", folder="")
        assert media.build_path("a.png", timestamp_ms=5) == "5-a.png"

    def test_path_from_url(self, media):
        url = PUBLIC_PREFIX + "projects/1700000000000-shot.png"
        assert media.path_from_url(url) == "projects/1700000000000-shot.png"

    def test_path_from_url_unquotes_and_drops_query(self, media):
        url = PUBLIC_PREFIX + "projects/1-my%20shot.png?"
        assert media.path_from_url(url) == "projects/1-my shot.png"

    @pytest.mark.parametrize("url", [
        "",
        "not a url",
        "https://elsewhere.com/image.png",
        "https://test-project.supabase.co/storage/v1/object/public/other-bucket/projects/1-a.png",
        PUBLIC_PREFIX,
        None,
    ])
    def test_path_from_url_rejects_foreign_or_malformed(self, media, url):
        assert media.path_from_url(url) is None


# =============================================================================
# Upload Tests
# =============================================================================

class TestUploadImage:
    """Tests for upload_image."""

    def test_upload_returns_public_url(self, media, fake_bucket):
        with patch("core.services.media_service.epoch_millis", return_value=1700000000000):
            url = run(media.upload_image(b"png-bytes", "shot.png"))

        assert url == PUBLIC_PREFIX + "projects/1700000000000-shot.png"
        assert fake_bucket.objects["projects/1700000000000-shot.png"] == b"png-bytes"

    def test_sequential_uploads_get_distinct_urls(self, media):
        """Test N uploads with different names or timestamps give N URLs."""
        with patch("core.services.media_service.epoch_millis", side_effect=[1, 1, 2]):
            urls = [
                run(media.upload_image(b"1", "a.png")),
                run(media.upload_image(b"2", "b.png")),
                run(media.upload_image(b"3", "a.png")),
            ]

        assert len(set(urls)) == 3

    def test_upload_guesses_content_type(self, media, fake_bucket):
        calls = []
        original = fake_bucket.upload

        def recording_upload(path, file, file_options=None):
            calls.append(file_options)
            return original(path, file, file_options)

        fake_bucket.upload = recording_upload
        run(media.upload_image(b"x", "photo.jpg"))

        assert calls[0]["content-type"] == "image/jpeg"
        assert calls[0]["upsert"] == "false"

    def test_upload_failure_raises(self, media, fake_bucket):
        fake_bucket.fail_upload = True

        with pytest.raises(UploadFailedError):
            run(media.upload_image(b"x", "a.png"))

        assert fake_bucket.objects == {}


# =============================================================================
# Delete Tests
# =============================================================================

class TestDeleteImage:
    """Tests for delete_image and delete_images."""

    def test_delete_existing(self, media, fake_bucket):
        fake_bucket.objects["projects/1-a.png"] = b"x"

        assert run(media.delete_image(PUBLIC_PREFIX + "projects/1-a.png")) is True
        assert "projects/1-a.png" not in fake_bucket.objects

    def test_delete_already_deleted_does_not_raise(self, media):
        assert run(media.delete_image(PUBLIC_PREFIX + "projects/gone.png")) is True

    def test_delete_malformed_url_does_not_raise(self, media, fake_bucket):
        assert run(media.delete_image("::::not-a-url")) is False
        assert fake_bucket.removed_calls == []

    def test_delete_backend_error_swallowed(self, media, fake_bucket):
        fake_bucket.fail_remove_paths.add("projects/1-a.png")

        assert run(media.delete_image(PUBLIC_PREFIX + "projects/1-a.png")) is False

    def test_delete_images_tolerates_one_failure(self, media, fake_bucket):
        fake_bucket.objects["projects/a.png"] = b"a"
        fake_bucket.objects["projects/b.png"] = b"b"
        fake_bucket.fail_remove_paths.add("projects/a.png")
        url_a = PUBLIC_PREFIX + "projects/a.png"
        url_b = PUBLIC_PREFIX + "projects/b.png"

        result = run(media.delete_images([url_a, url_b]))

        assert result.succeeded == [url_b]
        assert [f.item for f in result.failed] == [url_a]
        assert "projects/b.png" not in fake_bucket.objects
