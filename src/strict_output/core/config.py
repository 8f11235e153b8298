"""
RequestConfig - immutable configuration for one structured-output request.
"""

from typing import Any, Optional, Union

from pydantic import BaseModel, Field, field_validator

from strict_output.llm.schemas import OutputShape


class RequestConfig(BaseModel):
    """
    Everything a single call to StructuredOutputRequester.request() needs.

    Plain {name: description | allowed_values} mappings are accepted for
    output_format and converted to an OutputShape.

    Example:
        >>> config = RequestConfig(
        ...     system_prompt="You write quiz questions.",
        ...     user_prompt=["photosynthesis", "mitosis"],
        ...     output_format={
        ...         "question": "a question about the topic",
        ...         "answer": "the answer, under 15 words",
        ...     },
        ... )
        >>> config.is_list_input
        True
        >>> config.num_tries
        3
    """

    system_prompt: str = Field(..., description="Instructions placed before the format rules")
    user_prompt: Union[str, tuple[str, ...]] = Field(
        ..., description="One input, or several inputs producing one record each"
    )
    output_format: OutputShape = Field(..., description="Shape of each output record")
    default_category: str = Field(
        default="", description="Replacement for enum values outside the allowed set"
    )
    output_value_only: bool = Field(
        default=False, description="Return bare values instead of keyed records"
    )
    model: Optional[str] = Field(
        default=None, description="Provider model identifier (None = provider default)"
    )
    temperature: float = Field(default=0.7, description="Sampling temperature, passed to the provider as-is")
    num_tries: int = Field(default=3, ge=1, description="Maximum number of attempts")
    verbose: bool = Field(default=False, description="Log raw output and failures at INFO")

    model_config = {"frozen": True}

    @field_validator("output_format", mode="before")
    @classmethod
    def coerce_output_format(cls, v: Any) -> Any:
        """Accept plain mappings as shorthand for an OutputShape."""
        if isinstance(v, dict):
            return OutputShape.from_mapping(v)
        return v

    @field_validator("user_prompt", mode="before")
    @classmethod
    def coerce_user_prompt(cls, v: Any) -> Any:
        if isinstance(v, list):
            return tuple(v)
        return v

    @property
    def is_list_input(self) -> bool:
        return isinstance(self.user_prompt, tuple)

    @property
    def inputs(self) -> list[str]:
        """Input items as a list, whether one or many were given."""
        if self.is_list_input:
            return list(self.user_prompt)
        return [self.user_prompt]
