"""
Tests for the upload pipeline
"""
import re
import pytest
from fastapi import status

from atlantic_cms.apps.blog.models import BlogPost
from atlantic_cms.apps.cms.models import Page, Section
from atlantic_cms.apps.portfolio.models import PortfolioItem
from atlantic_cms.apps.uploads.services.upload_pipeline import UploadFailed, upload_media
from atlantic_cms.apps.uploads.utils.validation import (
    CALL_SITE_LIMITS,
    MB,
    CallSite,
    MediaKind,
    UploadRejected,
    build_storage_path,
    validate_for_call_site,
    validate_upload,
)

# Call site -> (media kind, ceiling); every call site keeps its own limit
CALL_SITE_TABLE = [
    (CallSite.GENERIC_IMAGE, MediaKind.IMAGE, 5 * MB),
    (CallSite.SECTION_IMAGE, MediaKind.IMAGE, 10 * MB),
    (CallSite.SECTION_VIDEO, MediaKind.VIDEO, 50 * MB),
    (CallSite.CREATOR_APPLICATION, MediaKind.BOTH, 50 * MB),
    (CallSite.LEGACY_VIDEO, MediaKind.VIDEO, 100 * MB),
]

SAMPLE_TYPES = ["image/jpeg", "image/png", "image/gif", "image/webp", "video/mp4", "video/webm", "video/quicktime", "application/pdf", "text/html", None]

IMAGE_TYPES = {"image/jpeg", "image/png", "image/gif", "image/webp"}
VIDEO_TYPES = {"video/mp4", "video/webm", "video/quicktime"}


def _expected_allowed(media_kind, content_type):
    if media_kind == MediaKind.IMAGE:
        return content_type in IMAGE_TYPES
    if media_kind == MediaKind.VIDEO:
        return content_type in VIDEO_TYPES
    return content_type in IMAGE_TYPES | VIDEO_TYPES


class TestCallSiteTable:

    def test_table_matches_fixture(self):
        assert CALL_SITE_LIMITS == {site: (kind, ceiling) for site, kind, ceiling in CALL_SITE_TABLE}

    def test_ceilings_differ_by_call_site(self):
        assert len({ceiling for _, _, ceiling in CALL_SITE_TABLE}) == 4


class TestValidateUpload:
    """Rejection iff type outside the allow-list or size above the call site ceiling"""

    @pytest.mark.parametrize("call_site,media_kind,ceiling", CALL_SITE_TABLE)
    @pytest.mark.parametrize("content_type", SAMPLE_TYPES)
    @pytest.mark.parametrize("size_offset", [-1, 0, 1])
    def test_validation_grid(self, call_site, media_kind, ceiling, content_type, size_offset):
        size = ceiling + size_offset
        type_ok = _expected_allowed(media_kind, content_type)
        size_ok = size <= ceiling

        if type_ok and size_ok:
            assert validate_for_call_site(content_type, size, call_site) == media_kind
            return

        with pytest.raises(UploadRejected) as exc_info:
            validate_for_call_site(content_type, size, call_site)

        expected_reason = UploadRejected.INVALID_TYPE if not type_ok else UploadRejected.TOO_LARGE
        assert exc_info.value.reason == expected_reason

    def test_size_message_mentions_limit(self):
        with pytest.raises(UploadRejected) as exc_info:
            validate_upload("image/png", 6 * MB, MediaKind.IMAGE, 5 * MB)

        assert exc_info.value.reason == "too-large"
        assert "5MB" in exc_info.value.detail


class TestStoragePath:

    def test_path_format(self):
        path = build_storage_path("sections", "Hero Shot.JPG")

        assert re.fullmatch(r"sections/\d{13}-[0-9a-z]{8}\.jpg", path)

    def test_paths_do_not_collide(self):
        paths = {build_storage_path("blog", "a.png") for _ in range(50)}

        assert len(paths) == 50

    def test_missing_extension(self):
        assert build_storage_path("images/", "noext").endswith(".bin")


class TestUploadMedia:

    @pytest.mark.asyncio
    async def test_rejection_makes_no_storage_call(self, fake_storage):
        storage = fake_storage

        with pytest.raises(UploadRejected):
            await upload_media(storage, b"x" * (6 * MB), "big.png", "image/png", "images", MediaKind.IMAGE, 5 * MB)

        assert storage.calls == 0

    @pytest.mark.asyncio
    async def test_success_returns_public_url(self, fake_storage):
        storage = fake_storage

        uploaded = await upload_media(storage, b"data", "a.png", "image/png", "images", MediaKind.IMAGE, 5 * MB)

        assert uploaded.url == f"https://storage.test/cms-uploads/{uploaded.path}"
        assert uploaded.path.startswith("images/")
        assert storage.uploads[0]["content_type"] == "image/png"

    @pytest.mark.asyncio
    async def test_storage_failure_raises(self, fake_storage):
        storage = fake_storage
        storage.fail_uploads = True

        with pytest.raises(UploadFailed):
            await upload_media(storage, b"data", "a.png", "image/png", "images", MediaKind.IMAGE, 5 * MB)


class TestUploadEndpoints:
    """Tests for /api/uploads"""

    @pytest.mark.asyncio
    async def test_six_mb_against_five_mb_ceiling(self, admin_client, fake_storage):
        response = await admin_client.post(
            "/api/uploads",
            params={"folder": "images", "call_site": "generic_image"},
            files={"file": ("big.png", b"x" * (6 * MB), "image/png")},
        )

        assert response.status_code == status.HTTP_413_REQUEST_ENTITY_TOO_LARGE
        assert response.json()["detail"]["reason"] == "too-large"
        assert fake_storage.calls == 0

    @pytest.mark.asyncio
    async def test_wrong_type_rejected(self, admin_client, fake_storage):
        response = await admin_client.post(
            "/api/uploads",
            params={"folder": "images"},
            files={"file": ("doc.pdf", b"%PDF", "application/pdf")},
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["detail"]["reason"] == "invalid-type"
        assert fake_storage.calls == 0

    @pytest.mark.asyncio
    async def test_storage_failure_is_bad_gateway(self, admin_client, fake_storage):
        fake_storage.fail_uploads = True

        response = await admin_client.post(
            "/api/uploads",
            params={"folder": "images"},
            files={"file": ("a.png", b"png", "image/png")},
        )

        assert response.status_code == status.HTTP_502_BAD_GATEWAY

    @pytest.mark.asyncio
    async def test_generic_upload(self, admin_client, fake_storage):
        response = await admin_client.post(
            "/api/uploads",
            params={"folder": "sections", "call_site": "section_video", "media_kind": "video"},
            files={"file": ("clip.mp4", b"mp4", "video/mp4")},
        )

        assert response.status_code == status.HTTP_201_CREATED
        assert response.json()["path"].startswith("sections/")
        assert response.json()["path"].endswith(".mp4")

    @pytest.mark.asyncio
    @pytest.mark.parametrize("folder", ["../x", "a/../../b", "sections/../..", "private", ""])
    async def test_unknown_folder_rejected(self, admin_client, fake_storage, folder):
        response = await admin_client.post(
            "/api/uploads",
            params={"folder": folder},
            files={"file": ("a.png", b"png", "image/png")},
        )

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
        assert fake_storage.calls == 0

    @pytest.mark.asyncio
    async def test_default_folder(self, admin_client, fake_storage):
        response = await admin_client.post(
            "/api/uploads",
            files={"file": ("a.png", b"png", "image/png")},
        )

        assert response.status_code == status.HTTP_201_CREATED
        assert response.json()["path"].startswith("uploads/")

    @pytest.mark.asyncio
    async def test_section_media_written_back(self, admin_client, test_session, fake_storage):
        page = Page(title="Home", slug="home")
        test_session.add(page)
        await test_session.flush()
        section = Section(page_id=page.id, name="hero", content={"heading": "Hello"})
        test_session.add(section)
        await test_session.flush()

        response = await admin_client.post(
            f"/api/uploads/sections/{section.id}/media",
            params={"field": "videoUrl", "media_kind": "video"},
            files={"file": ("reel.webm", b"webm", "video/webm")},
        )

        assert response.status_code == status.HTTP_200_OK
        content = response.json()["content"]
        assert content["heading"] == "Hello"
        assert content["videoUrl"].startswith("https://storage.test/cms-uploads/sections/")

    @pytest.mark.asyncio
    async def test_section_image_allows_ten_mb(self, admin_client, test_session, fake_storage):
        page = Page(title="Home", slug="home")
        test_session.add(page)
        await test_session.flush()
        section = Section(page_id=page.id, name="hero", content={})
        test_session.add(section)
        await test_session.flush()

        response = await admin_client.post(
            f"/api/uploads/sections/{section.id}/media",
            params={"field": "backgroundImage"},
            files={"file": ("bg.jpg", b"x" * (6 * MB), "image/jpeg")},
        )

        assert response.status_code == status.HTTP_200_OK
        assert len(fake_storage.uploads) == 1

    @pytest.mark.asyncio
    async def test_portfolio_thumbnail_written_back(self, admin_client, test_session):
        item = PortfolioItem(title="Resort", category="Tourism")
        test_session.add(item)
        await test_session.flush()

        response = await admin_client.post(
            f"/api/uploads/portfolio/{item.id}/thumbnail",
            files={"file": ("thumb.webp", b"webp", "image/webp")},
        )

        assert response.status_code == status.HTTP_200_OK
        assert item.thumbnail_image == response.json()["url"]

    @pytest.mark.asyncio
    async def test_blog_cover_for_missing_post(self, admin_client, test_session, fake_storage):
        post = BlogPost(title="Gone", slug="gone", is_deleted=True)
        test_session.add(post)
        await test_session.flush()

        response = await admin_client.post(
            f"/api/uploads/blog/{post.id}/cover",
            files={"file": ("cover.png", b"png", "image/png")},
        )

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert fake_storage.calls == 0

    @pytest.mark.asyncio
    async def test_uploads_require_admin(self, client, fake_storage):
        response = await client.post(
            "/api/uploads",
            files={"file": ("a.png", b"png", "image/png")},
        )

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert fake_storage.calls == 0
