"""
Context provider registry.

Providers register themselves by name so the configured one can be picked
from settings without touching factory code.

Usage:
    @ProviderRegistry.provider("database")
    class DatabasePrivilegeContextProvider(PrivilegeContextProvider):
        ...

    # Later, get by name:
    provider = ProviderRegistry.get_provider("database")
"""

from typing import Any, Callable, Type

from .interfaces import PrivilegeContextProvider


class ProviderRegistry:
    """Central registry for privilege context providers."""

    _providers: dict[str, Type[PrivilegeContextProvider]] = {}

    @classmethod
    def provider(
        cls, name: str
    ) -> Callable[[Type[PrivilegeContextProvider]], Type[PrivilegeContextProvider]]:
        """
        Decorator to register a context provider.

        Usage:
            @ProviderRegistry.provider("static")
            class StaticPrivilegeContextProvider(PrivilegeContextProvider):
                ...
        """
        def decorator(provider_class: Type[PrivilegeContextProvider]) -> Type[PrivilegeContextProvider]:
            cls._providers[name] = provider_class
            return provider_class
        return decorator

    @classmethod
    def get_provider(cls, name: str, **kwargs: Any) -> PrivilegeContextProvider:
        """
        Get a context provider by name.

        Args:
            name: Registered name of the provider
            **kwargs: Arguments to pass to provider constructor

        Raises:
            ValueError: If provider not found
        """
        provider_class = cls._providers.get(name)
        if not provider_class:
            available = list(cls._providers.keys())
            raise ValueError(
                f"Unknown privilege context provider: '{name}'. "
                f"Available: {available}"
            )
        return provider_class(**kwargs)

    @classmethod
    def list_providers(cls) -> list[str]:
        """List all registered provider names."""
        return list(cls._providers.keys())

    @classmethod
    def has_provider(cls, name: str) -> bool:
        """Check if a provider is registered."""
        return name in cls._providers
