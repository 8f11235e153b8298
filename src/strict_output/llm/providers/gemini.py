"""Google Gemini provider built on the google-genai SDK."""

import logging
import os
import time
from typing import Optional

from google import genai
from google.genai import errors, types

from strict_output.llm.client import LLMClient, backoff_delay


logger = logging.getLogger(__name__)

DEFAULT_GEMINI_MODEL = "gemini-1.5-flash"
RETRYABLE_STATUS_CODES = (429, 500, 502, 503, 504)


class GeminiProvider(LLMClient):
    """
    Gemini text generation client.

    The API key is passed explicitly or read from GEMINI_API_KEY when the
    provider is constructed. Rate limits (429) and 5xx errors are retried
    with exponential backoff.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        default_model: str = DEFAULT_GEMINI_MODEL,
        max_retries: int = 3,
    ):
        """
        Initialize Gemini provider.

        Args:
            api_key: Gemini API key (reads from GEMINI_API_KEY if None)
            default_model: Model used when a request does not name one
            max_retries: Retries on rate limits and server errors

        Raises:
            ValueError: If no API key is available
        """
        self.api_key = api_key or os.getenv("GEMINI_API_KEY")
        if not self.api_key:
            raise ValueError(
                "Missing required Gemini configuration: GEMINI_API_KEY. "
                "Please set the environment variable or pass api_key to constructor."
            )

        self.default_model = default_model
        self.max_retries = max_retries
        self.client = genai.Client(api_key=self.api_key)

        logger.info(f"Initialized GeminiProvider: default_model={self.default_model}")

    def generate(self, prompt: str, model: str, temperature: float) -> str:
        """
        Generate text for a prompt.

        Returns:
            The response text ("" if the model returned no text)

        Raises:
            google.genai.errors.APIError: If the error is not retryable or
                persists after all retries
        """
        for attempt in range(self.max_retries + 1):
            try:
                response = self.client.models.generate_content(
                    model=model,
                    contents=prompt,
                    config=types.GenerateContentConfig(temperature=temperature),
                )
                return response.text or ""

            except errors.APIError as e:
                if attempt < self.max_retries and e.code in RETRYABLE_STATUS_CODES:
                    delay = backoff_delay(attempt)
                    logger.warning(
                        f"Gemini error {e.code} on attempt {attempt + 1}/{self.max_retries + 1}. "
                        f"Retrying in {delay:.2f}s... Error: {str(e)}"
                    )
                    time.sleep(delay)
                else:
                    logger.error(f"Gemini call failed: {type(e).__name__}: {str(e)}")
                    raise
