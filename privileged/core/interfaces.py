"""
Privilege interfaces - Core abstractions.

The engine itself is synchronous and does no I/O. Anything that has to fetch
rules (per user, per tenant, from a database) does it behind a
PrivilegeContextProvider and hands back an immutable PrivilegeContext.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any

from .context import PrivilegeContext


# ============================================================
# POLICY DECISION
# ============================================================

@dataclass
class PolicyDecision:
    """
    Result of a privilege requirement evaluation.

    Attributes:
        allowed: Whether the requirement is satisfied
        reason: Human-readable explanation (for errors/logging)
        metadata: Additional data (challenge flag, cache info, etc.)
    """
    allowed: bool
    reason: str | None = None
    metadata: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def allow(cls, reason: str | None = None) -> "PolicyDecision":
        return cls(allowed=True, reason=reason)

    @classmethod
    def deny(cls, reason: str = "Permission denied", **metadata: Any) -> "PolicyDecision":
        return cls(allowed=False, reason=reason, metadata=metadata)


# ============================================================
# CONTEXT PROVIDER
# ============================================================

class PrivilegeContextProvider(ABC):
    """
    Supplies the privilege context for a principal.

    Called once per logical session; the result is queried synchronously.

    Implementations:
    - StaticPrivilegeContextProvider: one shared context (default)
    - FactoryPrivilegeContextProvider: context built by a callable per principal
    """

    @abstractmethod
    async def get_context(self, principal: Any | None = None) -> PrivilegeContext:
        """
        Get the privilege context for a principal.

        Args:
            principal: The authenticated user/service, if any

        Returns:
            PrivilegeContext to evaluate requirements against
        """
        pass


# ============================================================
# PRINCIPAL HELPERS
# ============================================================

def principal_name(principal: Any | None) -> str:
    """
    Name of a principal, or "" when it has none.

    Starlette's BaseUser raises NotImplementedError for properties a
    subclass does not define; that counts as no name.
    """
    if principal is None:
        return ""
    try:
        return getattr(principal, "display_name", None) or ""
    except NotImplementedError:
        return ""


def is_authenticated(principal: Any | None) -> bool:
    """Whether principal is present and authenticated."""
    if principal is None:
        return False
    try:
        return bool(getattr(principal, "is_authenticated", False))
    except NotImplementedError:
        return False
