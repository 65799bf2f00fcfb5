"""
Tests for the FastAPI privilege dependencies and decorator.
"""

import pytest
from httpx import ASGITransport, AsyncClient

from privileged import PrivilegeBuilder, StaticPrivilegeContextProvider
from privileged.auth import FAILURE_MESSAGE, require_policy, require_privilege

from .conftest import build_app


@pytest.mark.asyncio
async def test_allowed_route(client: AsyncClient, auth_headers):
    """Test an allowed privilege passes."""
    response = await client.get("/posts", headers=auth_headers)

    assert response.status_code == 200
    assert response.json() == {"posts": []}


@pytest.mark.asyncio
async def test_unauthenticated_route(client: AsyncClient):
    """Test anonymous requests are challenged."""
    response = await client.get("/posts")

    assert response.status_code == 401
    assert response.headers["WWW-Authenticate"] == "Bearer"


@pytest.mark.asyncio
async def test_forbidden_route(client: AsyncClient, auth_headers):
    """Test a forbidden privilege is rejected."""
    response = await client.delete("/posts/1", headers=auth_headers)

    assert response.status_code == 403
    assert response.json()["detail"] == FAILURE_MESSAGE


@pytest.mark.asyncio
async def test_policy_with_qualifier(client: AsyncClient, auth_headers):
    """Test policy names with a qualifier."""
    allowed = await client.put("/posts/1/title", headers=auth_headers)
    denied = await client.put("/posts/1/author", headers=auth_headers)

    assert allowed.status_code == 200
    assert denied.status_code == 403


@pytest.mark.asyncio
async def test_privilege_context_dependency(client: AsyncClient, auth_headers):
    response = await client.get("/menu", headers=auth_headers)

    assert response.status_code == 200
    assert response.json() == {"read": True, "delete": False}


@pytest.mark.asyncio
async def test_privilege_context_anonymous(client: AsyncClient):
    """Test anonymous principals get the empty context."""
    response = await client.get("/menu")

    assert response.status_code == 200
    assert response.json() == {"read": False, "delete": False}


@pytest.mark.asyncio
async def test_decorator_allows(client: AsyncClient, auth_headers):
    response = await client.post("/posts/1/archive", headers=auth_headers)

    assert response.status_code == 200
    assert response.json() == {"archived": 1}


@pytest.mark.asyncio
async def test_decorator_denies(client: AsyncClient, auth_headers):
    response = await client.post("/posts/1/publish", headers=auth_headers)

    assert response.status_code == 403
    assert response.json()["detail"] == FAILURE_MESSAGE


def test_decorator_metadata(app):
    route = next(r for r in app.routes if getattr(r, "path", None) == "/posts/{post_id}/archive")

    requirement = route.endpoint._privilege_requirement

    assert (requirement.action, requirement.subject) == ("update", "Post")


@pytest.mark.asyncio
async def test_context_is_cached_per_app(auth_headers):
    """Test a replaced static context is only seen once the cache is cleared."""
    provider = StaticPrivilegeContextProvider(
        context=PrivilegeBuilder().allow("read", "Post").build()
    )
    app = build_app(provider)

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        assert (await ac.get("/posts", headers=auth_headers)).status_code == 200

        provider.set_context(PrivilegeBuilder().build())
        assert (await ac.get("/posts", headers=auth_headers)).status_code == 200

        app.state.privilege_cache.clear()
        assert (await ac.get("/posts", headers=auth_headers)).status_code == 403


def test_require_policy_rejects_unknown_name():
    with pytest.raises(ValueError):
        require_policy("Admin")


def test_require_privilege_rejects_blank():
    with pytest.raises(ValueError):
        require_privilege("", "Post")


def test_require_privilege_exposes_requirement():
    dependency = require_policy("Privilege:update:Post:title")

    assert dependency.requirement.qualifier == "title"
