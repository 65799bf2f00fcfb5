"""
FastAPI dependencies for privilege authorization.

The principal is whatever Starlette's AuthenticationMiddleware put in
scope["user"]; it must expose is_authenticated and display_name.

Usage:
    from privileged.auth import (
        PrivilegeCtx,
        add_privilege_authorization,
        require_policy,
        require_privilege,
    )

    app = FastAPI()
    app.add_middleware(AuthenticationMiddleware, backend=MyBackend())
    add_privilege_authorization(app, MyPrivilegeContextProvider())

    @app.get("/posts", dependencies=[Depends(require_privilege("read", "Post"))])
    async def list_posts():
        ...

    @app.put("/posts/{id}/title", dependencies=[Depends(require_policy("Privilege:update:Post:title"))])
    async def update_title(id: int):
        ...

    @app.get("/menu")
    async def menu(privileges: PrivilegeCtx):
        return {"can_delete": privileges.allowed("delete", "Post")}
"""

from functools import lru_cache
from typing import Annotated, Any, Callable

from fastapi import Depends, FastAPI, HTTPException, Request, status

from ..core.comparers import get_comparer
from ..core.config import settings
from ..core.context import PrivilegeContext
from ..core.interfaces import PolicyDecision, PrivilegeContextProvider
from ..core.registry import ProviderRegistry
from .handler import ContextCache, PrivilegeRequirementHandler
from .policy import PrivilegePolicyProvider, PrivilegeRequirement

# Import to register default implementations
from .. import providers  # noqa: F401


# ============================================================
# COMPONENT FACTORIES
# ============================================================

@lru_cache
def get_default_provider() -> PrivilegeContextProvider:
    """
    Get the configured context provider.

    Reads from PRIVILEGE_PROVIDER environment variable.
    Default: "static" (empty context, denies everything)
    """
    return ProviderRegistry.get_provider(
        settings.provider,
        case_sensitive=settings.case_sensitive,
    )


@lru_cache
def get_default_cache() -> ContextCache:
    """Process-wide context cache for apps without their own."""
    return ContextCache(ttl=settings.context_cache_ttl)


@lru_cache
def get_policy_provider() -> PrivilegePolicyProvider:
    """Shared policy name parser."""
    return PrivilegePolicyProvider()


def add_privilege_authorization(
    app: FastAPI,
    provider: PrivilegeContextProvider | None = None,
    cache_ttl: int | None = None,
) -> FastAPI:
    """
    Attach a context provider and a context cache to an application.

    Args:
        app: The FastAPI application
        provider: Context provider (default: the configured one)
        cache_ttl: Context cache TTL in seconds (default: settings)
    """
    app.state.privilege_provider = provider if provider is not None else get_default_provider()
    app.state.privilege_cache = ContextCache(
        ttl=settings.context_cache_ttl if cache_ttl is None else cache_ttl
    )
    return app


# ============================================================
# REQUEST DEPENDENCIES
# ============================================================

def get_principal(request: Request) -> Any | None:
    """Current principal, or None when no authentication middleware ran."""
    return request.scope.get("user")


def get_context_provider(request: Request) -> PrivilegeContextProvider:
    """Provider attached to the app, falling back to the configured one."""
    provider = getattr(request.app.state, "privilege_provider", None)
    if provider is None:
        return get_default_provider()
    return provider


def get_context_cache(request: Request) -> ContextCache:
    """Cache attached to the app, falling back to the process-wide one."""
    cache = getattr(request.app.state, "privilege_cache", None)
    if cache is None:
        return get_default_cache()
    return cache


def get_requirement_handler(
    provider: PrivilegeContextProvider = Depends(get_context_provider),
    cache: ContextCache = Depends(get_context_cache),
) -> PrivilegeRequirementHandler:
    """Requirement handler for the current request."""
    return PrivilegeRequirementHandler(provider, cache=cache)


async def get_privilege_context(
    principal: Any = Depends(get_principal),
    handler: PrivilegeRequirementHandler = Depends(get_requirement_handler),
) -> PrivilegeContext:
    """
    Privilege context for the current principal.

    Anonymous principals get the empty context, so every check is denied.
    """
    context = await handler.resolve_context(principal)
    if context is None:
        return PrivilegeContext.empty(get_comparer(settings.case_sensitive))
    return context


# ============================================================
# REQUIREMENT DEPENDENCIES
# ============================================================

def require_privilege(
    action: str,
    subject: str,
    qualifier: str | None = None,
) -> Callable:
    """
    Dependency factory requiring a privilege.

    Raises (at request time):
        HTTPException 401: If the principal is not authenticated
        HTTPException 403: If the privilege is not allowed

    Raises (at declaration time):
        ValueError: If action or subject is empty
    """
    requirement = PrivilegeRequirement(action, subject, qualifier)

    async def dependency(
        principal: Any = Depends(get_principal),
        handler: PrivilegeRequirementHandler = Depends(get_requirement_handler),
    ) -> PolicyDecision:
        decision = await handler.handle(principal, requirement)
        if decision.allowed:
            return decision

        if decision.metadata.get("challenge"):
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Not authenticated",
                headers={"WWW-Authenticate": "Bearer"},
            )

        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=decision.reason,
        )

    dependency.requirement = requirement
    return dependency


def require_policy(policy_name: str) -> Callable:
    """
    Dependency factory requiring a privilege given as a policy name.

    Usage:
        Depends(require_policy("Privilege:read:Post"))

    Raises:
        ValueError: If policy_name is not a privilege policy name
    """
    requirement = get_policy_provider().get_requirement(policy_name)
    if requirement is None:
        raise ValueError(f"Unknown privilege policy: '{policy_name}'")

    return require_privilege(requirement.action, requirement.subject, requirement.qualifier)


# ============================================================
# TYPE ALIASES FOR CLEAN SIGNATURES
# ============================================================

# Privilege context for the current principal
PrivilegeCtx = Annotated[PrivilegeContext, Depends(get_privilege_context)]
