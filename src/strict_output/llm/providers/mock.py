"""Mock LLM provider for testing without API calls."""

from typing import Optional

from strict_output.llm.client import LLMClient


INVALID_RESPONSE = "Sorry, I cannot help with that."


class MockProvider(LLMClient):
    """
    Mock LLM client that returns predefined text.

    Responses are consumed in order; once they run out, default_response is
    returned on every call. Supports simulating malformed output and provider
    errors to exercise retry logic. Every call is recorded in `calls`.
    """

    default_model = "mock-model"

    def __init__(
        self,
        responses: Optional[list[str]] = None,
        default_response: Optional[str] = None,
        fail_times: int = 0,
        error: Optional[Exception] = None,
    ):
        """
        Initialize mock provider.

        Args:
            responses: Raw texts to return, one per call, in order
            default_response: Fallback text once responses are exhausted
            fail_times: Return text without any JSON this many times before
                        returning configured responses
            error: If set, raise this exception on every call
        """
        self.responses = list(responses or [])
        self.default_response = default_response
        self.fail_times = fail_times
        self.error = error
        self.calls: list[dict] = []
        self._failure_count = 0

    def add_response(self, response: str) -> None:
        """Queue another response after the existing ones."""
        self.responses.append(response)

    @property
    def call_count(self) -> int:
        return len(self.calls)

    @property
    def prompts(self) -> list[str]:
        return [call["prompt"] for call in self.calls]

    def generate(self, prompt: str, model: str, temperature: float) -> str:
        """
        Return the next mock response.

        Raises:
            ValueError: If no response is left and no default is configured
            Exception: The configured `error`, if any
        """
        self.calls.append({"prompt": prompt, "model": model, "temperature": temperature})

        if self.error is not None:
            raise self.error

        if self._failure_count < self.fail_times:
            self._failure_count += 1
            return INVALID_RESPONSE

        if self.responses:
            return self.responses.pop(0)
        if self.default_response is not None:
            return self.default_response

        raise ValueError(
            "No mock response left. Use add_response() or provide default_response."
        )
