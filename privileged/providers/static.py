"""
Static context provider - DEFAULT implementation.

Every principal gets the same context. Good for development, tests and
applications whose privileges don't depend on the user.

Usage:
    PRIVILEGE_PROVIDER=static

    provider = StaticPrivilegeContextProvider(
        context=PrivilegeBuilder().allow("read", "Post").build()
    )
"""

from typing import Any

import structlog

from ..core.comparers import get_comparer
from ..core.context import PrivilegeContext
from ..core.interfaces import PrivilegeContextProvider
from ..core.registry import ProviderRegistry

logger = structlog.get_logger()


@ProviderRegistry.provider("static")
class StaticPrivilegeContextProvider(PrivilegeContextProvider):
    """
    Returns one shared context for every principal.

    Configuration:
        context: The context to serve (default: empty, denies everything)
        case_sensitive: Comparer for the default empty context (default: False)
    """

    def __init__(
        self,
        context: PrivilegeContext | None = None,
        case_sensitive: bool = False,
        **kwargs: Any,
    ):
        self._context = context or PrivilegeContext.empty(get_comparer(case_sensitive))

    async def get_context(self, principal: Any | None = None) -> PrivilegeContext:
        return self._context

    def set_context(self, context: PrivilegeContext) -> None:
        """Replace the served context. Readers keep whatever they already hold."""
        self._context = context
        logger.info("Static privilege context replaced", rules=len(context.rules))
