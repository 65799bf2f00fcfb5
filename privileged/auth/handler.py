"""
Privilege requirement handler.

Resolves the principal's context through the configured provider (with a
per-principal TTL cache) and evaluates a requirement against it.

Decision outcomes:
- No principal / not authenticated -> deny, metadata["challenge"] = True
- Context allows the requirement   -> allow
- Context denies it or is missing  -> deny with FAILURE_MESSAGE
"""

import time
from typing import Any

import structlog

from ..core.context import PrivilegeContext
from ..core.interfaces import (
    PolicyDecision,
    PrivilegeContextProvider,
    is_authenticated,
    principal_name,
)
from .policy import PrivilegeRequirement

logger = structlog.get_logger()

FAILURE_MESSAGE = "User does not have the required privilege"


class ContextCache:
    """
    Resolved contexts keyed by principal.

    Configuration:
        ttl: Seconds an entry stays valid (0 disables caching)
    """

    def __init__(self, ttl: int = 300):
        self.ttl = ttl
        self._entries: dict[str, tuple[PrivilegeContext | None, float]] = {}

    def get(self, key: str) -> tuple[bool, PrivilegeContext | None]:
        """Return (hit, context)."""
        entry = self._entries.get(key)
        if entry is None:
            return False, None

        context, cached_at = entry
        if time.monotonic() - cached_at >= self.ttl:
            self._entries.pop(key, None)
            return False, None

        return True, context

    def set(self, key: str, context: PrivilegeContext | None) -> None:
        if self.ttl <= 0:
            return
        now = time.monotonic()
        self._cleanup_expired(now)
        self._entries[key] = (context, now)

    def clear(self, key: str | None = None) -> None:
        """Clear one principal's entry or the whole cache."""
        if key:
            self._entries.pop(key, None)
        else:
            self._entries.clear()

    def _cleanup_expired(self, now: float) -> None:
        """Remove expired entries."""
        expired = [k for k, (_, cached_at) in self._entries.items() if now - cached_at >= self.ttl]
        for key in expired:
            del self._entries[key]

    def __len__(self) -> int:
        return len(self._entries)


def principal_key(principal: Any) -> str:
    """Cache key for a principal."""
    return f"privilege:{principal_name(principal)}"


class PrivilegeRequirementHandler:
    """
    Evaluates PrivilegeRequirement instances for a principal.

    Usage:
        handler = PrivilegeRequirementHandler(provider)
        decision = await handler.handle(request.user, PrivilegeRequirement("read", "Post"))
        if not decision.allowed:
            ...
    """

    def __init__(
        self,
        provider: PrivilegeContextProvider,
        cache: ContextCache | None = None,
    ):
        if provider is None:
            raise ValueError("provider cannot be None")
        self.provider = provider
        self.cache = cache if cache is not None else ContextCache()

    async def resolve_context(self, principal: Any | None) -> PrivilegeContext | None:
        """
        Get the context for an authenticated principal.

        Returns None for anonymous principals.
        """
        if not is_authenticated(principal):
            return None

        key = principal_key(principal)
        hit, context = self.cache.get(key)
        if hit:
            return context

        context = await self.provider.get_context(principal)
        self.cache.set(key, context)

        logger.debug(
            "Privilege context resolved",
            principal=key,
            rules=len(context.rules) if context is not None else 0,
        )
        return context

    async def handle(
        self,
        principal: Any | None,
        requirement: PrivilegeRequirement,
    ) -> PolicyDecision:
        """Evaluate requirement for principal."""
        if not is_authenticated(principal):
            return PolicyDecision.deny("Not authenticated", challenge=True)

        context = await self.resolve_context(principal)

        if context is not None and context.allowed(
            requirement.action, requirement.subject, requirement.qualifier
        ):
            return PolicyDecision.allow(f"Has privilege: {requirement.policy_name}")

        logger.info(
            "Privilege denied",
            principal=principal_key(principal),
            action=requirement.action,
            subject=requirement.subject,
            qualifier=requirement.qualifier,
        )
        return PolicyDecision.deny(FAILURE_MESSAGE)
