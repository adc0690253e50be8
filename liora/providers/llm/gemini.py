"""
Gemini LLM Provider implementation.
"""

import google.generativeai as genai
from typing import Optional, Dict, Any
import logging

from liora.core.protocols import LLMConfig, ProviderMixin
from liora.core.providers import register
from liora.core.exceptions import LLMProviderError
from liora.config import get_settings

logger = logging.getLogger(__name__)


@register("llm", "gemini")
class GeminiProvider(ProviderMixin):
    """
    Google Gemini LLM provider implementation.

    Implements the LLMProvider protocol without inheritance.
    Uses ProviderMixin for common functionality.
    """

    DEFAULT_SYSTEM_PROMPT = """You are a friendly analyst interviewing a startup founder on behalf of an investment committee.

Rules:
- Ask exactly one question.
- Keep it under 40 words.
- Build on what the founder already said when it helps.
- Never add commentary before or after the question.
"""

    def __init__(self, config: LLMConfig):
        super().__init__()
        self._config = config
        self._model = None

    @property
    def name(self) -> str:
        """Provider name for Protocol compliance."""
        return "gemini"

    @property
    def config(self) -> LLMConfig:
        return self._config

    async def initialize(self) -> None:
        """Initialize Gemini API."""
        try:
            settings = get_settings()
            genai.configure(api_key=settings.gemini_api_key)

            model_name = self._config.model_name or settings.gemini_model
            self._model = genai.GenerativeModel(
                model_name,
                system_instruction=self._config.system_prompt or self.DEFAULT_SYSTEM_PROMPT,
            )

            self.mark_initialized()
            logger.info(
                f"Gemini provider initialized with model: {model_name}")

        except Exception as e:
            self.record_error()
            raise LLMProviderError(
                message=f"Failed to initialize Gemini: {str(e)}",
                provider="gemini",
                original_error=e
            )

    def _build_prompt(self, prompt: str, context: Optional[Dict[str, Any]]) -> str:
        """Prefix the prompt with recent interview memory, if any."""
        if not context or not context.get("memory"):
            return prompt

        lines = ["Recent answers from the founder:"]
        for entry in context["memory"]:
            lines.append(f"Q: {entry['question']}\nA: {entry['answer']}")
        lines.append("")
        lines.append(prompt)
        return "\n".join(lines)

    async def generate_response(
        self,
        prompt: str,
        context: Optional[Dict[str, Any]] = None
    ) -> str:
        """Generate a response from Gemini."""
        if not self.is_initialized:
            raise LLMProviderError(
                message="Provider not initialized",
                provider="gemini"
            )

        try:
            self.record_request()
            response = await self._model.generate_content_async(
                self._build_prompt(prompt, context),
                generation_config={
                    "temperature": self._config.temperature,
                    "max_output_tokens": self._config.max_tokens,
                },
            )
            return response.text.strip()

        except Exception as e:
            self.record_error()
            logger.error(f"Gemini generation error: {e}")
            raise LLMProviderError(
                message=f"Generation failed: {str(e)}",
                provider="gemini",
                original_error=e
            )

    async def cleanup(self) -> None:
        """Cleanup resources."""
        self._model = None
        self._state.initialized = False
        logger.info("Gemini provider cleaned up")
