"""
LLM client abstraction and output shape definitions.
"""

from strict_output.llm.client import LLMClient
from strict_output.llm.schemas import OutputShape, LiteralField, EnumField

__all__ = [
    "LLMClient",
    "OutputShape",
    "LiteralField",
    "EnumField",
]
