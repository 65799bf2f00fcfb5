"""
Pytest fixtures for testing.

Provides:
- Sample privilege context (posts: read, update title, no delete)
- FastAPI app with header-based authentication
- Async test client
"""

from typing import AsyncGenerator

import pytest
import pytest_asyncio
from fastapi import Depends, FastAPI
from httpx import ASGITransport, AsyncClient
from starlette.authentication import (
    AuthCredentials,
    AuthenticationBackend,
    SimpleUser,
)
from starlette.middleware.authentication import AuthenticationMiddleware

from privileged import PrivilegeBuilder, PrivilegeContext, StaticPrivilegeContextProvider
from privileged.auth import (
    PrivilegeCtx,
    add_privilege_authorization,
    privilege,
    require_policy,
    require_privilege,
)


class HeaderAuthBackend(AuthenticationBackend):
    """Authenticates whoever is named in the X-User header."""

    async def authenticate(self, conn):
        username = conn.headers.get("X-User")
        if not username:
            return None
        return AuthCredentials(["authenticated"]), SimpleUser(username)


def build_app(provider) -> FastAPI:
    app = FastAPI()
    app.add_middleware(AuthenticationMiddleware, backend=HeaderAuthBackend())
    add_privilege_authorization(app, provider)

    @app.get("/posts", dependencies=[Depends(require_privilege("read", "Post"))])
    async def list_posts():
        return {"posts": []}

    @app.put("/posts/{post_id}/title", dependencies=[Depends(require_policy("Privilege:update:Post:title"))])
    async def update_title(post_id: int):
        return {"id": post_id}

    @app.put("/posts/{post_id}/author", dependencies=[Depends(require_policy("Privilege:update:Post:author"))])
    async def update_author(post_id: int):
        return {"id": post_id}

    @app.delete("/posts/{post_id}", dependencies=[Depends(require_privilege("delete", "Post"))])
    async def delete_post(post_id: int):
        return {"deleted": post_id}

    @app.get("/menu")
    async def menu(privileges: PrivilegeCtx):
        return {
            "read": privileges.allowed("read", "Post"),
            "delete": privileges.allowed("delete", "Post"),
        }

    @app.post("/posts/{post_id}/archive")
    @privilege("update", "Post")
    async def archive_post(post_id: int, privileges: PrivilegeCtx):
        return {"archived": post_id}

    @app.post("/posts/{post_id}/publish")
    @privilege("publish", "Post")
    async def publish_post(post_id: int, privileges: PrivilegeCtx):
        return {"published": post_id}

    return app


@pytest.fixture
def post_context() -> PrivilegeContext:
    """Read posts, update only the title, never delete."""
    return (
        PrivilegeBuilder()
        .allow("read", "Post")
        .allow("update", "Post", ["title"])
        .forbid("delete", "Post")
        .build()
    )


@pytest.fixture
def provider(post_context: PrivilegeContext) -> StaticPrivilegeContextProvider:
    return StaticPrivilegeContextProvider(context=post_context)


@pytest.fixture
def app(provider: StaticPrivilegeContextProvider) -> FastAPI:
    return build_app(provider)


@pytest_asyncio.fixture(scope="function")
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    """Test client without credentials."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac


@pytest.fixture
def auth_headers() -> dict:
    return {"X-User": "alice"}
