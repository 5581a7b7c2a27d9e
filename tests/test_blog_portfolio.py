"""
Tests for blog posts and portfolio items
"""
import pytest
from datetime import datetime
from fastapi import status

from atlantic_cms.apps.blog.models import BlogPost
from atlantic_cms.apps.blog.schemas import BlogPostCreate, normalize_tags
from atlantic_cms.apps.blog.utils.publishing import apply_publish_state
from atlantic_cms.apps.portfolio.models import PortfolioItem


class TestPublishState:
    """published_at only moves on a draft -> published transition"""

    def test_publishing_stamps_published_at(self):
        post = BlogPost(title="Post", slug="post", is_published=False)
        now = datetime(2026, 5, 1, 9, 30)

        apply_publish_state(post, True, now=now)

        assert post.is_published is True
        assert post.published_at == now

    def test_unpublishing_keeps_published_at(self):
        published_at = datetime(2026, 5, 1, 9, 30)
        post = BlogPost(title="Post", slug="post", is_published=True, published_at=published_at)

        apply_publish_state(post, False, now=datetime(2026, 6, 1))

        assert post.is_published is False
        assert post.published_at == published_at

    def test_republishing_already_published_keeps_timestamp(self):
        published_at = datetime(2026, 5, 1, 9, 30)
        post = BlogPost(title="Post", slug="post", is_published=True, published_at=published_at)

        apply_publish_state(post, True, now=datetime(2026, 6, 1))

        assert post.published_at == published_at

    @pytest.mark.parametrize("raw,expected", [
        ("video, photo,, ", ["video", "photo"]),
        (["a", " ", "b "], ["a", "b"]),
        (None, None),
    ])
    def test_normalize_tags(self, raw, expected):
        assert normalize_tags(raw) == expected

    def test_create_schema_accepts_comma_tags(self):
        assert BlogPostCreate(title="T", tags="one, two").tags == ["one", "two"]


class TestBlogEndpoints:
    """Tests for /api/blog"""

    @pytest.mark.asyncio
    async def test_toggle_publish_keeps_first_timestamp(self, admin_client, test_session):
        response = await admin_client.post("/api/blog/admin/posts", json={"title": "Studio Day"})
        assert response.status_code == status.HTTP_201_CREATED
        post = response.json()
        assert post["slug"] == "studio-day"
        assert post["published_at"] is None

        published = (await admin_client.post(f"/api/blog/admin/posts/{post['id']}/toggle-publish")).json()
        assert published["is_published"] is True
        assert published["published_at"] is not None

        unpublished = (await admin_client.post(f"/api/blog/admin/posts/{post['id']}/toggle-publish")).json()
        assert unpublished["is_published"] is False
        assert unpublished["published_at"] == published["published_at"]

    @pytest.mark.asyncio
    async def test_public_list_only_shows_published(self, client, test_session):
        test_session.add_all([
            BlogPost(title="Live", slug="live", is_published=True, published_at=datetime(2026, 1, 1)),
            BlogPost(title="Draft", slug="draft"),
            BlogPost(title="Binned", slug="binned", is_published=True, is_deleted=True),
        ])
        await test_session.flush()

        response = await client.get("/api/blog/posts")

        assert response.status_code == status.HTTP_200_OK
        assert [p["slug"] for p in response.json()] == ["live"]
        assert (await client.get("/api/blog/posts/draft")).status_code == status.HTTP_404_NOT_FOUND

    @pytest.mark.asyncio
    async def test_admin_routes_require_admin(self, client, test_session):
        response = await client.get("/api/blog/admin/posts")

        assert response.status_code == status.HTTP_401_UNAUTHORIZED


class TestPortfolioEndpoints:
    """Tests for /api/portfolio"""

    @pytest.mark.asyncio
    async def test_unknown_category_rejected(self, admin_client, test_session):
        response = await admin_client.post(
            "/api/portfolio/items",
            json={"title": "Wedding", "category": "Weddings"},
        )

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY

    @pytest.mark.asyncio
    async def test_category_filter(self, client, test_session):
        test_session.add_all([
            PortfolioItem(title="Resort", category="Tourism", sort_order=1),
            PortfolioItem(title="Summit", category="Events", sort_order=0),
            PortfolioItem(title="Old", category="Events", sort_order=2, is_deleted=True),
        ])
        await test_session.flush()

        everything = (await client.get("/api/portfolio/items", params={"category": "All"})).json()
        events = (await client.get("/api/portfolio/items", params={"category": "Events"})).json()

        assert [item["title"] for item in everything] == ["Summit", "Resort"]
        assert [item["title"] for item in events] == ["Summit"]

    @pytest.mark.asyncio
    async def test_toggle_featured(self, admin_client, test_session):
        item = PortfolioItem(title="Resort", category="Tourism")
        test_session.add(item)
        await test_session.flush()

        response = await admin_client.post(f"/api/portfolio/items/{item.id}/toggle-featured")

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["is_featured"] is True

    @pytest.mark.asyncio
    async def test_delete_moves_item_to_recycle_bin(self, admin_client, test_session):
        item = PortfolioItem(title="Resort", category="Tourism")
        test_session.add(item)
        await test_session.flush()

        await admin_client.delete(f"/api/portfolio/items/{item.id}")
        listed = (await admin_client.get("/api/recycle-bin")).json()

        assert [(entry["type"], entry["title"]) for entry in listed] == [("portfolio", "Resort")]
