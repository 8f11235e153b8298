"""
Custom exceptions for strict-output.

Attempt-level errors are recovered inside a request and fed back to the model
on the next attempt. Only RetriesExhaustedError reaches the caller.
"""

from typing import Optional


class StrictOutputError(Exception):
    """
    Base exception for all strict-output errors.

    Example:
        >>> try:
        ...     records = requester.request(config)
        ... except StrictOutputError as e:
        ...     print(f"Structured output failed: {e}")
    """

    pass


class AttemptError(StrictOutputError):
    """
    Base class for errors that fail a single attempt.

    These never escape StructuredOutputRequester.request(); their message is
    appended to the feedback text of the next attempt.
    """

    pass


class ProviderCallError(AttemptError):
    """
    Raised when the generation call itself fails or times out.

    Attributes:
        original_error: The exception raised by the provider
    """

    def __init__(self, original_error: Exception):
        self.original_error = original_error
        super().__init__(f"{type(original_error).__name__}: {original_error}")

    def __repr__(self) -> str:
        return f"ProviderCallError(original_error={self.original_error!r})"


class NoJsonFoundError(AttemptError):
    """Raised when the sanitized response holds no JSON object or array."""

    def __init__(self, message: str = "No valid JSON object found."):
        super().__init__(message)


class JsonParseError(AttemptError):
    """
    Raised when the located JSON text cannot be parsed.

    Attributes:
        content: The candidate JSON text that failed to parse
    """

    def __init__(self, message: str, content: str):
        self.content = content
        super().__init__(message)


class SchemaValidationError(AttemptError):
    """
    Raised when a parsed record does not fit the OutputShape.

    Covers missing required keys, records that are not JSON objects, and a
    record count that does not match the number of inputs.

    Example:
        >>> raise SchemaValidationError(
        ...     "Missing key 'answer' in item: {\"question\": \"Why?\"}"
        ... )
    """

    pass


class RetriesExhaustedError(StrictOutputError):
    """
    Raised when every attempt of a request has failed.

    Attributes:
        attempts: Number of attempts made
        errors: Error message of each failed attempt, in order
        last_error: The error of the final attempt, if any

    Example:
        >>> raise RetriesExhaustedError(
        ...     attempts=3,
        ...     errors=["No valid JSON object found."] * 3,
        ... )
    """

    def __init__(
        self,
        attempts: int,
        errors: list[str],
        last_error: Optional[AttemptError] = None,
    ):
        self.attempts = attempts
        self.errors = errors
        self.last_error = last_error

        errors_str = "; ".join(errors)
        message = (
            f"All {attempts} attempts failed to produce valid structured output. "
            f"Errors: {errors_str}"
        )
        super().__init__(message)

    def __repr__(self) -> str:
        return (
            f"RetriesExhaustedError(attempts={self.attempts}, "
            f"errors={self.errors!r})"
        )
