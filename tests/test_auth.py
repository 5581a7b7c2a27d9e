"""
Tests for the admin auth gate
"""
import pytest
from uuid import uuid4
from fastapi import status
from unittest.mock import MagicMock, patch

from atlantic_cms.apps.authentication.models import UserRole

SUPABASE_CLIENT = "atlantic_cms.apps.authentication.dependencies.get_supabase_client"


def _supabase_with_user(user_id, email="someone@example.com"):
    supabase = MagicMock()
    supabase.auth.get_user.return_value = MagicMock(user=MagicMock(id=str(user_id), email=email))
    return supabase


class TestAdminGate:
    """Tests for get_current_admin through GET /api/auth/me"""

    @pytest.mark.asyncio
    async def test_missing_token(self, client, test_session):
        response = await client.get("/api/auth/me")

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    @pytest.mark.asyncio
    async def test_invalid_token(self, client, test_session):
        supabase = MagicMock()
        supabase.auth.get_user.side_effect = Exception("invalid JWT")

        with patch(SUPABASE_CLIENT, return_value=supabase):
            response = await client.get("/api/auth/me", headers={"Authorization": "Bearer bad-token"})

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert supabase.auth.get_user.call_count == 1

    @pytest.mark.asyncio
    async def test_authenticated_non_admin_is_forbidden(self, client, test_session):
        user_id = uuid4()
        test_session.add(UserRole(user_id=user_id, role="editor"))
        await test_session.flush()

        with patch(SUPABASE_CLIENT, return_value=_supabase_with_user(user_id)):
            response = await client.get("/api/auth/me", headers={"Authorization": "Bearer token"})

        assert response.status_code == status.HTTP_403_FORBIDDEN

    @pytest.mark.asyncio
    async def test_admin_from_cookie(self, client, test_session):
        user_id = uuid4()
        test_session.add(UserRole(user_id=user_id, role="admin"))
        await test_session.flush()

        with patch(SUPABASE_CLIENT, return_value=_supabase_with_user(user_id, "admin@example.com")):
            client.cookies.set("access_token", "cookie-token")
            response = await client.get("/api/auth/me")

        assert response.status_code == status.HTTP_200_OK
        assert response.json() == {"id": str(user_id), "email": "admin@example.com", "role": "admin"}

    @pytest.mark.asyncio
    async def test_admin_routes_are_gated(self, client, test_session):
        for method, url in [
            ("get", "/api/cms/pages"),
            ("get", "/api/recycle-bin"),
            ("get", "/api/images"),
            ("get", "/api/dashboard/stats"),
        ]:
            response = await getattr(client, method)(url)
            assert response.status_code == status.HTTP_401_UNAUTHORIZED, url
