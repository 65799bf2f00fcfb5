"""
Privilege engine core.

Modules:
- models: Rule, alias and model records plus reserved wildcard tokens
- comparers: Case-sensitivity policies
- builder: Fluent builder producing immutable contexts
- context: The matching engine
- interfaces: Provider abstraction and policy decisions
- registry: Named provider registration
"""

from .models import (
    PrivilegeActions,
    PrivilegeAlias,
    PrivilegeMatch,
    PrivilegeModel,
    PrivilegeRule,
    PrivilegeSubjects,
)
from .comparers import StringComparer, get_comparer
from .context import PrivilegeContext
from .builder import PrivilegeBuilder
from .interfaces import PolicyDecision, PrivilegeContextProvider
from .registry import ProviderRegistry

__all__ = [
    "PrivilegeActions",
    "PrivilegeAlias",
    "PrivilegeMatch",
    "PrivilegeModel",
    "PrivilegeRule",
    "PrivilegeSubjects",
    "StringComparer",
    "get_comparer",
    "PrivilegeContext",
    "PrivilegeBuilder",
    "PolicyDecision",
    "PrivilegeContextProvider",
    "ProviderRegistry",
]
