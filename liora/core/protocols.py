"""
Protocol-based interfaces for the application.
Uses Python's Protocol for structural subtyping, so stores, transports
and LLM providers can be swapped without inheritance.
"""

from typing import (
    Optional, Dict, Any, Callable, Awaitable,
    Protocol, runtime_checkable
)
from dataclasses import dataclass, field
from contextlib import asynccontextmanager
from datetime import datetime


# ============================================================================
# Configuration Dataclasses
# ============================================================================

@dataclass(frozen=True)
class LLMConfig:
    """Immutable configuration for LLM providers."""
    model_name: str
    temperature: float = 0.7
    max_tokens: int = 512
    system_prompt: Optional[str] = None
    extra_params: Dict[str, Any] = field(default_factory=dict)


@dataclass
class ProviderState:
    """Mutable state for providers."""
    initialized: bool = False
    last_used: Optional[datetime] = None
    request_count: int = 0
    error_count: int = 0


# Progress callback used by upload transports: receives a percentage.
ProgressCallback = Callable[[float], Awaitable[None]]


# ============================================================================
# Provider Protocols (Structural Subtyping)
# ============================================================================

@runtime_checkable
class LLMProvider(Protocol):
    """
    Protocol for Language Model providers.

    Usage:
        async def rephrase(provider: LLMProvider):
            return await provider.generate_response(prompt)
    """

    @property
    def name(self) -> str:
        """Provider name (e.g., 'gemini', 'openai')."""
        ...

    @property
    def config(self) -> LLMConfig:
        """Provider configuration."""
        ...

    async def generate_response(
        self,
        prompt: str,
        context: Optional[Dict[str, Any]] = None
    ) -> str:
        """Generate a single completion for the prompt."""
        ...


@runtime_checkable
class UploadTransport(Protocol):
    """Moves one file somewhere and reports progress while doing it."""

    @property
    def name(self) -> str:
        ...

    async def upload(
        self,
        file_id: str,
        filename: str,
        content: bytes,
        content_type: Optional[str],
        on_progress: ProgressCallback
    ) -> str:
        """Transfer the file and return its URL. Raises UploadError."""
        ...


@runtime_checkable
class SessionStore(Protocol):
    """
    Keyed storage for volatile per-session objects.
    Implementations decide the expiry policy.
    """

    def get(self, key: str) -> Optional[Any]:
        ...

    def set(self, key: str, value: Any) -> None:
        ...

    def delete(self, key: str) -> bool:
        ...


@runtime_checkable
class StateStorage(Protocol):
    """Named JSON blob storage for persisted stores."""

    def read(self, name: str) -> Optional[Dict[str, Any]]:
        ...

    def write(self, name: str, data: Dict[str, Any]) -> None:
        ...

    def remove(self, name: str) -> None:
        ...


@runtime_checkable
class Initializable(Protocol):
    """Protocol for providers that need initialization."""

    async def initialize(self) -> None:
        """Initialize the provider."""
        ...

    async def cleanup(self) -> None:
        """Cleanup resources."""
        ...


# ============================================================================
# Base Implementation Mixin (Optional helpers)
# ============================================================================

class ProviderMixin:
    """
    Mixin providing common functionality for providers.
    """

    def __init__(self):
        self._state = ProviderState()

    @property
    def state(self) -> ProviderState:
        return self._state

    @property
    def is_initialized(self) -> bool:
        return self._state.initialized

    def mark_initialized(self) -> None:
        self._state.initialized = True
        self._state.last_used = datetime.utcnow()

    def record_request(self) -> None:
        self._state.request_count += 1
        self._state.last_used = datetime.utcnow()

    def record_error(self) -> None:
        self._state.error_count += 1

    async def health_check(self) -> bool:
        return self._state.initialized


# ============================================================================
# Context Managers for Resource Management
# ============================================================================

@asynccontextmanager
async def managed_provider(provider: Initializable):
    """
    Async context manager for provider lifecycle.

    Usage:
        async with managed_provider(HttpxUploadTransport(...)) as transport:
            url = await transport.upload(...)
    """
    try:
        await provider.initialize()
        yield provider
    finally:
        await provider.cleanup()
