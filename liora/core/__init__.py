"""
Core module containing protocols, providers, and shared components.
"""

# Events
from liora.core.events import EventBus, Event, EventType, event_bus

# Exceptions
from liora.core.exceptions import (
    AppException,
    ConfigurationError,
    LLMProviderError,
    ValidationError,
    AuthenticationError,
    ResourceNotFoundError,
    SessionNotFoundError,
    CallFlowError,
    UploadError,
)

# Protocols (type definitions)
from liora.core.protocols import (
    LLMProvider,
    UploadTransport,
    SessionStore,
    StateStorage,
    LLMConfig,
    ProviderState,
    ProviderMixin,
    managed_provider,
)

# Registry and factory functions
from liora.core.providers import (
    registry,
    register,
    get_llm,
    get_upload_transport,
)

__all__ = [
    # Protocols
    "LLMProvider",
    "UploadTransport",
    "SessionStore",
    "StateStorage",
    "LLMConfig",
    "ProviderState",
    "ProviderMixin",
    "managed_provider",
    # Registry
    "registry",
    "register",
    "get_llm",
    "get_upload_transport",
    # Exceptions
    "AppException",
    "ConfigurationError",
    "LLMProviderError",
    "ValidationError",
    "AuthenticationError",
    "ResourceNotFoundError",
    "SessionNotFoundError",
    "CallFlowError",
    "UploadError",
    # Events
    "EventBus",
    "Event",
    "EventType",
    "event_bus",
]
