"""
Tests for the recycle bin coordinator and endpoints
"""
import pytest
from datetime import datetime, timedelta
from fastapi import status
from sqlalchemy import select

from atlantic_cms.apps.blog.models import BlogPost
from atlantic_cms.apps.cms.models import Page, Section
from atlantic_cms.apps.images.models import ImageAsset
from atlantic_cms.apps.portfolio.models import PortfolioItem
from atlantic_cms.apps.recycle_bin.utils import recycle_bin
from atlantic_cms.apps.recycle_bin.utils.recycle_bin import (
    DELETED_SOURCES,
    ItemNotFound,
    image_title,
    list_deleted,
    purge_item,
    restore_item,
)
from atlantic_cms.common.soft_delete import set_deleted_flag


async def _seed(session):
    """One live row of each of the five types"""
    page = Page(title="About", slug="about")
    session.add(page)
    await session.flush()
    section = Section(page_id=page.id, name="team", content={"heading": "Team"}, sort_order=2)
    portfolio = PortfolioItem(title="Resort Film", category="Tourism", client="Coastal", sort_order=4)
    blog = BlogPost(title="Behind the Lens", slug="behind-the-lens", tags=["bts"], is_published=True)
    session.add_all([section, portfolio, blog])
    await session.flush()
    image = ImageAsset(section_id=section.id, file_path="https://storage.test/images/1-abc.png", alt_text="Studio")
    session.add(image)
    await session.flush()
    return {"page": page, "section": section, "portfolio": portfolio, "blog": blog, "image": image}


def _snapshot(row):
    data = row.model_dump()
    data.pop("is_deleted")
    data.pop("updated_at")
    return data


async def _live_ids(session, model):
    result = await session.execute(select(model.id).where(model.is_deleted == False))
    return set(result.scalars().all())


async def _deleted_ids(session, model):
    result = await session.execute(select(model.id).where(model.is_deleted == True))
    return set(result.scalars().all())


class TestRecycleBinCoordinator:
    """Unit tests for list/restore/purge"""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("item_type", ["page", "section", "image", "portfolio", "blog"])
    async def test_soft_delete_then_restore_round_trip(self, test_session, item_type):
        rows = await _seed(test_session)
        row = rows[item_type]
        model = type(row)
        before = _snapshot(row)

        await set_deleted_flag(test_session, model, row.id, True)
        await test_session.commit()
        assert row.id not in await _live_ids(test_session, model)
        assert [(i.id, i.type) for i in await list_deleted(test_session)] == [(row.id, item_type)]

        await restore_item(test_session, row.id, item_type)

        assert row.id in await _live_ids(test_session, model)
        assert await list_deleted(test_session) == []
        restored = await test_session.get(model, row.id)
        assert _snapshot(restored) == before

    @pytest.mark.asyncio
    @pytest.mark.parametrize("item_type", ["page", "section", "image", "portfolio", "blog"])
    async def test_purge_removes_row_everywhere(self, test_session, item_type):
        rows = await _seed(test_session)
        row = rows[item_type]
        model = type(row)
        row_id = row.id

        await set_deleted_flag(test_session, model, row_id, True)
        await test_session.commit()
        await purge_item(test_session, row_id, item_type)

        assert row_id not in await _live_ids(test_session, model)
        assert row_id not in await _deleted_ids(test_session, model)

    @pytest.mark.asyncio
    async def test_titles_per_type(self, test_session):
        rows = await _seed(test_session)
        for item_type, row in rows.items():
            await set_deleted_flag(test_session, type(row), row.id, True)
        await test_session.commit()

        titles = {item.type: item.title for item in await list_deleted(test_session)}

        assert titles == {
            "page": "About",
            "section": "team",
            "portfolio": "Resort Film",
            "blog": "Behind the Lens",
            "image": "Studio",
        }

    def test_image_title_falls_back_to_file_name(self):
        assert image_title(ImageAsset(file_path="https://storage.test/images/1-abc.png")) == "1-abc.png"
        assert image_title(ImageAsset(file_path="")) == "Image"

    @pytest.mark.asyncio
    async def test_listing_sorted_by_deletion_time(self, test_session):
        rows = await _seed(test_session)
        base = datetime(2026, 1, 1, 12, 0, 0)
        order = ["blog", "page", "image", "section", "portfolio"]
        for minutes, item_type in enumerate(order):
            row = rows[item_type]
            row.is_deleted = True
            row.updated_at = base + timedelta(minutes=minutes)
            test_session.add(row)
        await test_session.commit()

        items = await list_deleted(test_session)

        assert [item.type for item in items] == list(reversed(order))

    @pytest.mark.asyncio
    async def test_failing_table_degrades_to_empty(self, test_session, monkeypatch):
        rows = await _seed(test_session)
        ids = {item_type: row.id for item_type, row in rows.items()}
        for item_type, row in rows.items():
            await set_deleted_flag(test_session, type(row), row.id, True)
        await test_session.commit()

        def broken_title(row):
            raise RuntimeError("blog table unavailable")

        sources = [
            (item_type, model, broken_title if item_type == "blog" else title_of)
            for item_type, model, title_of in DELETED_SOURCES
        ]
        monkeypatch.setattr(recycle_bin, "DELETED_SOURCES", sources)

        items = await list_deleted(test_session)

        assert {item.type for item in items} == {"page", "section", "portfolio", "image"}
        assert ids["blog"] not in {item.id for item in items}

    @pytest.mark.asyncio
    async def test_restore_missing_row_raises(self, test_session):
        rows = await _seed(test_session)

        with pytest.raises(ItemNotFound):
            await restore_item(test_session, rows["section"].id, "page")

    @pytest.mark.asyncio
    async def test_purge_missing_row_raises(self, test_session):
        rows = await _seed(test_session)

        with pytest.raises(ItemNotFound):
            await purge_item(test_session, rows["blog"].id, "portfolio")


class TestRecycleBinEndpoints:
    """Tests for /api/recycle-bin"""

    @pytest.mark.asyncio
    async def test_deleted_page_round_trip(self, admin_client, test_session):
        page = Page(title="Services", slug="services")
        test_session.add(page)
        await test_session.flush()

        response = await admin_client.delete(f"/api/cms/pages/{page.id}")
        assert response.status_code == status.HTTP_200_OK

        response = await admin_client.get("/api/recycle-bin")
        assert response.status_code == status.HTTP_200_OK
        listed = response.json()
        assert [(item["id"], item["type"], item["title"]) for item in listed] == [(str(page.id), "page", "Services")]

        response = await admin_client.get("/api/content/pages")
        assert response.json() == []

        response = await admin_client.post(f"/api/recycle-bin/page/{page.id}/restore")
        assert response.status_code == status.HTTP_200_OK

        response = await admin_client.get("/api/recycle-bin")
        assert response.json() == []

        response = await admin_client.get("/api/content/pages")
        assert [p["slug"] for p in response.json()] == ["services"]

    @pytest.mark.asyncio
    async def test_permanent_delete(self, admin_client, test_session):
        post = BlogPost(title="Draft", slug="draft", is_deleted=True)
        test_session.add(post)
        await test_session.flush()

        response = await admin_client.delete(f"/api/recycle-bin/blog/{post.id}")

        assert response.status_code == status.HTTP_200_OK
        assert (await admin_client.get("/api/recycle-bin")).json() == []

    @pytest.mark.asyncio
    async def test_missing_item_is_not_found(self, admin_client, test_session):
        response = await admin_client.post(
            "/api/recycle-bin/section/3fa85f64-5717-4562-b3fc-2c963f66afa6/restore"
        )

        assert response.status_code == status.HTTP_404_NOT_FOUND

    @pytest.mark.asyncio
    async def test_unknown_type_rejected(self, admin_client, test_session):
        response = await admin_client.delete(
            "/api/recycle-bin/video/3fa85f64-5717-4562-b3fc-2c963f66afa6"
        )

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY

    @pytest.mark.asyncio
    async def test_dashboard_counts(self, admin_client, test_session):
        rows = await _seed(test_session)
        await set_deleted_flag(test_session, BlogPost, rows["blog"].id, True)
        await set_deleted_flag(test_session, ImageAsset, rows["image"].id, True)
        await test_session.commit()

        response = await admin_client.get("/api/dashboard/stats")

        assert response.status_code == status.HTTP_200_OK
        assert response.json() == {
            "live": {"page": 1, "section": 1, "portfolio": 1, "blog": 0, "image": 0},
            "deleted": 2,
        }
