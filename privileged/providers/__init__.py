"""
Privilege context providers.

Available providers:
- static: one shared context (default)
- factory: context built by a callable per principal
"""

from .static import StaticPrivilegeContextProvider
from .factory import FactoryPrivilegeContextProvider

__all__ = ["StaticPrivilegeContextProvider", "FactoryPrivilegeContextProvider"]
