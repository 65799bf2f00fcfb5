"""
Privileged - Attribute-based privilege evaluation.

Rules say which actions may be performed on which subjects, optionally
restricted to qualifiers (e.g. fields). The last matching rule wins and
nothing matching means denied.

Usage levels:

1. Engine only:
    from privileged import PrivilegeBuilder

    context = (
        PrivilegeBuilder()
        .allow("read", "Post")
        .allow("update", "Post", ["title"])
        .forbid("delete", "Post")
        .build()
    )
    context.allowed("update", "Post", "title")   # True

2. Serialized rules:
    from privileged import PrivilegeModelSchema

    context = PrivilegeModelSchema.model_validate_json(payload).to_context()

3. FastAPI routes:
    from privileged.auth import add_privilege_authorization, require_privilege

    add_privilege_authorization(app, StaticPrivilegeContextProvider(context))

    @app.get("/posts", dependencies=[Depends(require_privilege("read", "Post"))])
    async def list_posts():
        ...
"""

from .core import (
    PolicyDecision,
    PrivilegeActions,
    PrivilegeAlias,
    PrivilegeBuilder,
    PrivilegeContext,
    PrivilegeContextProvider,
    PrivilegeMatch,
    PrivilegeModel,
    PrivilegeRule,
    PrivilegeSubjects,
    ProviderRegistry,
    StringComparer,
    get_comparer,
)
from .providers import FactoryPrivilegeContextProvider, StaticPrivilegeContextProvider
from .schemas import PrivilegeAliasSchema, PrivilegeModelSchema, PrivilegeRuleSchema

__version__ = "0.1.0"

__all__ = [
    "PolicyDecision",
    "PrivilegeActions",
    "PrivilegeAlias",
    "PrivilegeBuilder",
    "PrivilegeContext",
    "PrivilegeContextProvider",
    "PrivilegeMatch",
    "PrivilegeModel",
    "PrivilegeRule",
    "PrivilegeSubjects",
    "ProviderRegistry",
    "StringComparer",
    "get_comparer",
    "FactoryPrivilegeContextProvider",
    "StaticPrivilegeContextProvider",
    "PrivilegeAliasSchema",
    "PrivilegeModelSchema",
    "PrivilegeRuleSchema",
]
