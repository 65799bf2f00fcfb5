"""
Privilege decorators for route handlers.

Usage:
    from privileged.auth import PrivilegeCtx, privilege

    @router.delete("/posts/{id}")
    @privilege("delete", "Post")
    async def delete_post(id: int, privileges: PrivilegeCtx):
        ...

The route must take a PrivilegeCtx parameter; without one the request is
denied.
"""

from functools import wraps
from typing import Any, Callable

from fastapi import HTTPException, status

from ..core.context import PrivilegeContext
from .handler import FAILURE_MESSAGE
from .policy import PrivilegeRequirement


def privilege(action: str, subject: str, qualifier: str | None = None) -> Callable:
    """
    Decorator to require a privilege.

    Args:
        action: Action to check
        subject: Subject to check
        qualifier: Optional qualifier

    Raises:
        ValueError: If action or subject is empty (at decoration time)
    """
    requirement = PrivilegeRequirement(action, subject, qualifier)

    def decorator(func: Callable) -> Callable:
        @wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> Any:
            context = _find_context(args, kwargs)

            if context is None or not context.allowed(
                requirement.action, requirement.subject, requirement.qualifier
            ):
                raise HTTPException(
                    status_code=status.HTTP_403_FORBIDDEN,
                    detail=FAILURE_MESSAGE,
                )

            return await func(*args, **kwargs)

        # Metadata for introspection
        wrapper._privilege_requirement = requirement
        return wrapper
    return decorator


def _find_context(args: tuple, kwargs: dict[str, Any]) -> PrivilegeContext | None:
    for value in kwargs.values():
        if isinstance(value, PrivilegeContext):
            return value
    for value in args:
        if isinstance(value, PrivilegeContext):
            return value
    return None
