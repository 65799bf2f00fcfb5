"""
Factory context provider.

Builds a context per principal with a user-supplied callable, sync or async.
This is where rules fetched from a database or an identity service belong.

Usage:
    PRIVILEGE_PROVIDER=factory

    async def load_privileges(principal) -> PrivilegeContext:
        rows = await repo.privileges_for(principal.display_name)
        builder = PrivilegeBuilder()
        for row in rows:
            builder.allow(row.action, row.subject, row.qualifiers)
        return builder.build()

    provider = FactoryPrivilegeContextProvider(factory=load_privileges)
"""

import inspect
from typing import Any, Awaitable, Callable

import structlog

from ..core.comparers import get_comparer
from ..core.context import PrivilegeContext
from ..core.interfaces import PrivilegeContextProvider, principal_name
from ..core.registry import ProviderRegistry

logger = structlog.get_logger()

ContextFactory = Callable[[Any], PrivilegeContext | None | Awaitable[PrivilegeContext | None]]


@ProviderRegistry.provider("factory")
class FactoryPrivilegeContextProvider(PrivilegeContextProvider):
    """
    Delegates context creation to a callable.

    A factory returning None yields the empty context (default-deny).

    Configuration:
        factory: Callable taking the principal, returning a context or awaitable
        case_sensitive: Comparer for the fallback empty context (default: False)
    """

    def __init__(
        self,
        factory: ContextFactory | None = None,
        case_sensitive: bool = False,
        **kwargs: Any,
    ):
        if factory is None:
            raise ValueError("FactoryPrivilegeContextProvider requires a factory callable")
        self.factory = factory
        self._empty = PrivilegeContext.empty(get_comparer(case_sensitive))

    async def get_context(self, principal: Any | None = None) -> PrivilegeContext:
        result = self.factory(principal)
        if inspect.isawaitable(result):
            result = await result

        if result is None:
            logger.debug("Privilege factory returned no context", principal=principal_name(principal))
            return self._empty

        return result
