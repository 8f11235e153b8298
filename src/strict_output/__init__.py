"""
strict-output - Structured JSON output from generative-text APIs.

Ask a model for records of a given shape, repair and validate its reply,
and retry with error feedback until the output fits.
"""

__version__ = "0.1.0"

# Core components
from strict_output.core.requester import StructuredOutputRequester, strict_output
from strict_output.core.config import RequestConfig
from strict_output.core.state import AttemptState, AttemptResult
from strict_output.core.exceptions import (
    StrictOutputError,
    AttemptError,
    ProviderCallError,
    NoJsonFoundError,
    JsonParseError,
    SchemaValidationError,
    RetriesExhaustedError,
)

# Output shapes
from strict_output.llm.schemas import OutputShape, LiteralField, EnumField
from strict_output.llm.client import LLMClient

# Validation
from strict_output.validation.sanitize import sanitize

# LLM Providers
from strict_output.llm.providers.mock import MockProvider
from strict_output.llm.providers.azure_openai import AzureOpenAIProvider
from strict_output.llm.providers.gemini import GeminiProvider

__all__ = [
    # Version
    "__version__",
    # Core
    "StructuredOutputRequester",
    "strict_output",
    "RequestConfig",
    "AttemptState",
    "AttemptResult",
    "StrictOutputError",
    "AttemptError",
    "ProviderCallError",
    "NoJsonFoundError",
    "JsonParseError",
    "SchemaValidationError",
    "RetriesExhaustedError",
    # Shapes
    "OutputShape",
    "LiteralField",
    "EnumField",
    "LLMClient",
    # Validation
    "sanitize",
    # LLM Providers
    "MockProvider",
    "AzureOpenAIProvider",
    "GeminiProvider",
]
