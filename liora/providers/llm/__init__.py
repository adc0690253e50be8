"""
LLM Providers package.
Import all providers here to register them with the registry.
"""

from liora.providers.llm.gemini import GeminiProvider
from liora.providers.llm.openai_provider import OpenAIProvider

__all__ = ["GeminiProvider", "OpenAIProvider"]
