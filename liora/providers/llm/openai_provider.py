"""
OpenAI LLM Provider implementation.
"""

from typing import Optional, Dict, Any, List
import logging

from openai import AsyncOpenAI

from liora.core.protocols import LLMConfig, ProviderMixin
from liora.core.providers import register
from liora.core.exceptions import LLMProviderError, ConfigurationError
from liora.config import get_settings

logger = logging.getLogger(__name__)


@register("llm", "openai")
class OpenAIProvider(ProviderMixin):
    """
    OpenAI LLM provider implementation.

    To use this provider:
    1. Set OPENAI_API_KEY in .env
    2. Set DEFAULT_LLM_PROVIDER=openai
    """

    DEFAULT_SYSTEM_PROMPT = (
        "You interview startup founders for an investment committee. "
        "Reply with exactly one concise question and nothing else."
    )

    def __init__(self, config: LLMConfig):
        super().__init__()
        self._config = config
        self._client: Optional[AsyncOpenAI] = None

    @property
    def name(self) -> str:
        return "openai"

    @property
    def config(self) -> LLMConfig:
        return self._config

    async def initialize(self) -> None:
        """Initialize OpenAI client."""
        if self.is_initialized:
            return

        api_key = get_settings().openai_api_key
        if not api_key:
            raise ConfigurationError(
                "OPENAI_API_KEY not found in environment variables"
            )

        self._client = AsyncOpenAI(api_key=api_key)
        self.mark_initialized()
        logger.info(
            f"OpenAI provider initialized with model: {self._config.model_name}")

    def _build_messages(
        self,
        prompt: str,
        context: Optional[Dict[str, Any]] = None
    ) -> List[Dict[str, str]]:
        """Build OpenAI message format."""
        messages = [{
            "role": "system",
            "content": self._config.system_prompt or self.DEFAULT_SYSTEM_PROMPT,
        }]

        for entry in (context or {}).get("memory", []):
            messages.append({"role": "assistant", "content": entry["question"]})
            messages.append({"role": "user", "content": entry["answer"]})

        messages.append({"role": "user", "content": prompt})
        return messages

    async def generate_response(
        self,
        prompt: str,
        context: Optional[Dict[str, Any]] = None
    ) -> str:
        """Generate a response from OpenAI."""
        if not self.is_initialized:
            raise LLMProviderError(
                message="Provider not initialized",
                provider="openai"
            )

        try:
            self.record_request()
            response = await self._client.chat.completions.create(
                model=self._config.model_name,
                messages=self._build_messages(prompt, context),
                temperature=self._config.temperature,
                max_tokens=self._config.max_tokens,
            )
            return (response.choices[0].message.content or "").strip()

        except Exception as e:
            self.record_error()
            logger.error(f"OpenAI generation error: {e}")
            raise LLMProviderError(
                message=f"Generation failed: {str(e)}",
                provider="openai",
                original_error=e
            )

    async def cleanup(self) -> None:
        """Close the HTTP client."""
        if self._client is not None:
            await self._client.close()
            self._client = None
        self._state.initialized = False
        logger.info("OpenAI provider cleaned up")
