"""
Shared pytest fixtures and configuration
"""
import pytest
from typing import AsyncGenerator, Dict, List, Optional
from uuid import uuid4
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.pool import StaticPool
from sqlalchemy.dialects.sqlite import base as sqlite_base
from sqlmodel import SQLModel

from atlantic_cms.main import app
from atlantic_cms.database import get_async_session
from atlantic_cms.apps.authentication.dependencies import get_current_admin
from atlantic_cms.apps.authentication.schemas import AdminUser
from atlantic_cms.apps.uploads.services.storage_service import get_storage_service
from atlantic_cms.apps.forms.services.form_relay_service import get_form_relay_service
from atlantic_cms.apps.forms.services.notification_service import get_notification_service


# Patch SQLite dialect to handle JSONB (PostgreSQL-specific type)
# SQLite doesn't support JSONB, so we map it to JSON
def visit_jsonb(self, type_, **kw):
    """Map JSONB to JSON for SQLite compatibility"""
    return self.visit_JSON(type_, **kw)

# Monkey patch the SQLite type compiler to handle JSONB
sqlite_base.SQLiteTypeCompiler.visit_JSONB = visit_jsonb


# Create in-memory SQLite database for testing
# Note: aiosqlite must be installed for async SQLite support
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

test_engine = create_async_engine(
    TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

TestSessionLocal = async_sessionmaker(
    test_engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autocommit=False,
    autoflush=False,
)


@pytest.fixture(scope="function")
async def test_session() -> AsyncGenerator[AsyncSession, None]:
    """
    Create a test database session for each test on a freshly created schema.
    """
    async with test_engine.begin() as conn:
        # Import all models to create tables
        from atlantic_cms.apps.authentication.models import UserRole
        from atlantic_cms.apps.cms.models import Page, Section
        from atlantic_cms.apps.blog.models import BlogPost
        from atlantic_cms.apps.portfolio.models import PortfolioItem
        from atlantic_cms.apps.images.models import ImageAsset
        from atlantic_cms.apps.forms.models import CreatorApplication

        await conn.run_sync(SQLModel.metadata.drop_all)
        await conn.run_sync(SQLModel.metadata.create_all)

    async with TestSessionLocal() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()
            async with test_engine.begin() as conn:
                await conn.run_sync(SQLModel.metadata.drop_all)


class FakeStorage:
    """In-memory stand-in for the Supabase storage service"""

    def __init__(self, fail_uploads: bool = False):
        self.fail_uploads = fail_uploads
        self.uploads: List[Dict] = []
        self.url_requests: List[str] = []
        self.removed: List[str] = []

    def upload_file(self, file_path, file_content, content_type="application/octet-stream"):
        if self.fail_uploads:
            return {"success": False, "error": "storage unavailable"}
        self.uploads.append({"path": file_path, "size": len(file_content), "content_type": content_type})
        return {"success": True, "data": {"path": file_path}}

    def get_public_url(self, file_path):
        self.url_requests.append(file_path)
        return f"https://storage.test/cms-uploads/{file_path}"

    def remove_files(self, file_paths):
        self.removed.extend(file_paths)
        return {"success": True, "data": file_paths}

    @property
    def calls(self) -> int:
        return len(self.uploads) + len(self.url_requests) + len(self.removed)


class FakeFormRelay:
    def __init__(self, error: Optional[Exception] = None):
        self.error = error
        self.submissions: List[Dict] = []

    async def submit(self, fields):
        if self.error:
            raise self.error
        self.submissions.append(fields)


class FakeNotifier:
    """Records notify() calls; send_error makes the underlying send fail"""

    def __init__(self, send_error: Optional[Exception] = None):
        self.send_error = send_error
        self.payloads: List[Dict] = []

    async def notify(self, payload):
        self.payloads.append(payload)
        return self.send_error is None


@pytest.fixture
def fake_storage() -> FakeStorage:
    return FakeStorage()


@pytest.fixture
def fake_relay() -> FakeFormRelay:
    return FakeFormRelay()


@pytest.fixture
def fake_notifier() -> FakeNotifier:
    return FakeNotifier()


@pytest.fixture(scope="function")
async def client(test_session: AsyncSession, fake_storage, fake_relay, fake_notifier) -> AsyncGenerator[AsyncClient, None]:
    """
    Async HTTP client over the app with the database and outbound services overridden.
    """
    async def override_get_async_session():
        yield test_session

    app.dependency_overrides[get_async_session] = override_get_async_session
    app.dependency_overrides[get_storage_service] = lambda: fake_storage
    app.dependency_overrides[get_form_relay_service] = lambda: fake_relay
    app.dependency_overrides[get_notification_service] = lambda: fake_notifier

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as test_client:
        yield test_client

    # Cleanup
    app.dependency_overrides.clear()


@pytest.fixture
def admin_user() -> AdminUser:
    return AdminUser(id=uuid4(), email="admin@example.com", role="admin")


@pytest.fixture
async def admin_client(client: AsyncClient, admin_user: AdminUser):
    """
    Client with the admin gate satisfied.
    """
    app.dependency_overrides[get_current_admin] = lambda: admin_user

    yield client

    if get_current_admin in app.dependency_overrides:
        del app.dependency_overrides[get_current_admin]
