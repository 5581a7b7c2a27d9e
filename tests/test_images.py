"""
Tests for the image library
"""
import pytest
from fastapi import status

from atlantic_cms.apps.images.models import ImageAsset
from atlantic_cms.apps.images.router import alt_text_from_filename
from atlantic_cms.apps.uploads.utils.validation import MB


class TestImageLibrary:
    """Tests for /api/images"""

    def test_alt_text_from_filename(self):
        assert alt_text_from_filename("studio-front.webp") == "studio-front"
        assert alt_text_from_filename(None) == "Image"

    @pytest.mark.asyncio
    async def test_batch_upload_records_assets(self, admin_client, test_session, fake_storage):
        response = await admin_client.post(
            "/api/images",
            files=[
                ("files", ("one.png", b"png", "image/png")),
                ("files", ("two.jpg", b"jpg", "image/jpeg")),
            ],
        )

        assert response.status_code == status.HTTP_201_CREATED
        assert sorted(asset["alt_text"] for asset in response.json()) == ["one", "two"]
        assert all(upload["path"].startswith("images/") for upload in fake_storage.uploads)

        listed = (await admin_client.get("/api/images")).json()
        assert len(listed) == 2

    @pytest.mark.asyncio
    async def test_one_bad_file_rejects_whole_batch(self, admin_client, test_session, fake_storage):
        response = await admin_client.post(
            "/api/images",
            files=[
                ("files", ("ok.png", b"png", "image/png")),
                ("files", ("big.png", b"x" * (5 * MB + 1), "image/png")),
            ],
        )

        assert response.status_code == status.HTTP_413_REQUEST_ENTITY_TOO_LARGE
        assert fake_storage.calls == 0
        assert (await admin_client.get("/api/images")).json() == []

    @pytest.mark.asyncio
    async def test_update_alt_text_and_delete(self, admin_client, test_session):
        image = ImageAsset(file_path="https://storage.test/cms-uploads/images/1-abc.png", alt_text="old")
        test_session.add(image)
        await test_session.flush()

        response = await admin_client.put(f"/api/images/{image.id}", json={"alt_text": "Studio front"})
        assert response.status_code == status.HTTP_200_OK
        assert response.json()["alt_text"] == "Studio front"

        response = await admin_client.delete(f"/api/images/{image.id}")
        assert response.status_code == status.HTTP_200_OK
        assert (await admin_client.get("/api/images")).json() == []

        response = await admin_client.put(f"/api/images/{image.id}", json={"alt_text": "again"})
        assert response.status_code == status.HTTP_404_NOT_FOUND
