"""
Provider registry.

Features:
- Simple dict-based registry for LLM providers and upload transports
- Decorator for auto-registration
- Cached instances with async cleanup on shutdown
"""

from typing import Dict, Optional, List, Any
import logging

from liora.core.protocols import LLMProvider, UploadTransport, LLMConfig
from liora.core.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

PROVIDER_TYPES = ("llm", "upload")


class Registry:
    """
    Simple provider registry using dictionaries.
    """

    def __init__(self):
        self._providers: Dict[str, Dict[str, type]] = {
            t: {} for t in PROVIDER_TYPES}
        self._instances: Dict[str, Dict[str, Any]] = {
            t: {} for t in PROVIDER_TYPES}

    def register(self, provider_type: str, name: str, cls: type) -> None:
        """Register a provider class."""
        if provider_type not in self._providers:
            raise ValueError(f"Unknown provider type: {provider_type}")

        self._providers[provider_type][name.lower()] = cls
        logger.info(f"Registered {provider_type} provider: {name}")

    def get_class(self, provider_type: str, name: str) -> Optional[type]:
        """Get a provider class by type and name."""
        return self._providers.get(provider_type, {}).get(name.lower())

    def get_instance(self, provider_type: str, name: str) -> Optional[Any]:
        """Get a cached provider instance."""
        return self._instances.get(provider_type, {}).get(name.lower())

    def set_instance(self, provider_type: str, name: str, instance: Any) -> None:
        """Cache a provider instance."""
        self._instances[provider_type][name.lower()] = instance

    def list_providers(self, provider_type: str) -> List[str]:
        """List all registered providers of a type."""
        return list(self._providers.get(provider_type, {}).keys())

    async def cleanup_all(self) -> None:
        """Cleanup all cached instances."""
        for provider_type, instances in self._instances.items():
            for name, instance in instances.items():
                if hasattr(instance, 'cleanup'):
                    try:
                        await instance.cleanup()
                    except Exception as e:
                        logger.error(
                            f"Error cleaning up {provider_type}/{name}: {e}")

        self._instances = {t: {} for t in PROVIDER_TYPES}
        logger.info("All provider instances cleaned up")


# Global registry instance
registry = Registry()


# ============================================================================
# Registration Decorator
# ============================================================================

def register(provider_type: str, name: str):
    """
    Decorator to register a provider class.

    Usage:
        @register("llm", "gemini")
        class GeminiProvider:
            ...
    """
    def decorator(cls: type) -> type:
        registry.register(provider_type, name, cls)

        cls._provider_type = provider_type
        cls._provider_name = name

        return cls
    return decorator


# ============================================================================
# Factory Functions
# ============================================================================

async def get_llm(
    name: str,
    config: LLMConfig,
    cache: bool = True
) -> LLMProvider:
    """
    Get or create an LLM provider instance.

    Args:
        name: Provider name (e.g., 'gemini', 'openai')
        config: LLM configuration
        cache: Whether to cache the instance

    Returns:
        LLM provider instance
    """
    cache_key = f"{name}:{config.model_name}"

    if cache:
        cached = registry.get_instance("llm", cache_key)
        if cached:
            return cached

    cls = registry.get_class("llm", name)
    if not cls:
        available = registry.list_providers("llm")
        raise ConfigurationError(
            f"LLM provider '{name}' not found. Available: {available}"
        )

    instance = cls(config)

    if hasattr(instance, 'initialize'):
        await instance.initialize()

    if cache:
        registry.set_instance("llm", cache_key, instance)

    return instance


async def get_upload_transport(
    name: str,
    cache: bool = True,
    **kwargs
) -> UploadTransport:
    """Get or create an upload transport instance."""
    if cache:
        cached = registry.get_instance("upload", name)
        if cached:
            return cached

    cls = registry.get_class("upload", name)
    if not cls:
        available = registry.list_providers("upload")
        raise ConfigurationError(
            f"Upload transport '{name}' not found. Available: {available}"
        )

    instance = cls(**kwargs)

    if hasattr(instance, 'initialize'):
        await instance.initialize()

    if cache:
        registry.set_instance("upload", name, instance)

    return instance
