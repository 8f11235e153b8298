"""
LLM provider implementations.

Concrete text-generation clients for different backends.
"""

from strict_output.llm.providers.mock import MockProvider
from strict_output.llm.providers.azure_openai import AzureOpenAIProvider
from strict_output.llm.providers.gemini import GeminiProvider

__all__ = [
    "MockProvider",
    "AzureOpenAIProvider",
    "GeminiProvider",
]
