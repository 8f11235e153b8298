"""
Core components of strict-output.

Includes the requester, its configuration, retry state and exceptions.
"""

from strict_output.core.exceptions import (
    StrictOutputError,
    AttemptError,
    ProviderCallError,
    NoJsonFoundError,
    JsonParseError,
    SchemaValidationError,
    RetriesExhaustedError,
)
from strict_output.core.config import RequestConfig
from strict_output.core.state import AttemptState, AttemptResult
from strict_output.core.requester import StructuredOutputRequester, strict_output

__all__ = [
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
]
