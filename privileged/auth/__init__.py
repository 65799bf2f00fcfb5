"""
FastAPI adapter for privilege authorization.

Routes declare requirements either directly or as policy names of the form
"Privilege:<action>:<subject>[:<qualifier>]". The requirement is checked
against the principal's context from the configured provider.
"""

from .policy import (
    PRIVILEGE_POLICY_PREFIX,
    PrivilegePolicyProvider,
    PrivilegeRequirement,
    format_policy_name,
    parse_policy_name,
)
from .handler import FAILURE_MESSAGE, ContextCache, PrivilegeRequirementHandler
from .dependencies import (
    PrivilegeCtx,
    add_privilege_authorization,
    get_context_cache,
    get_context_provider,
    get_default_provider,
    get_principal,
    get_privilege_context,
    get_requirement_handler,
    require_policy,
    require_privilege,
)
from .decorators import privilege

__all__ = [
    # Policy names
    "PRIVILEGE_POLICY_PREFIX",
    "PrivilegePolicyProvider",
    "PrivilegeRequirement",
    "format_policy_name",
    "parse_policy_name",
    # Handler
    "FAILURE_MESSAGE",
    "ContextCache",
    "PrivilegeRequirementHandler",
    # Dependencies
    "PrivilegeCtx",
    "add_privilege_authorization",
    "get_context_cache",
    "get_context_provider",
    "get_default_provider",
    "get_principal",
    "get_privilege_context",
    "get_requirement_handler",
    "require_policy",
    "require_privilege",
    # Decorators
    "privilege",
]
