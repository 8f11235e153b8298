"""Azure OpenAI chat-completions provider."""

import logging
import os
import time
from typing import Optional

from openai import APIConnectionError, APIError, APITimeoutError, AzureOpenAI, RateLimitError

from strict_output.llm.client import LLMClient, backoff_delay


logger = logging.getLogger(__name__)

DEFAULT_API_VERSION = "2024-02-15-preview"
RETRYABLE_STATUS_CODES = (500, 502, 503, 504)

# constructor argument -> environment variable
_REQUIRED_SETTINGS = {
    "endpoint": "AZURE_OPENAI_ENDPOINT",
    "api_key": "AZURE_OPENAI_API_KEY",
    "deployment": "AZURE_OPENAI_DEPLOYMENT",
}


class AzureOpenAIProvider(LLMClient):
    """
    Sends the whole prompt as one user message to an Azure deployment.

    The deployment doubles as the default model. Rate limits, 5xx responses,
    connection failures and timeouts are retried with backoff before the
    error is handed to the requester.
    """

    def __init__(
        self,
        endpoint: Optional[str] = None,
        api_key: Optional[str] = None,
        deployment: Optional[str] = None,
        api_version: Optional[str] = None,
        timeout: float = 60.0,
        max_tokens: int = 4096,
        max_retries: int = 5,
    ):
        """
        Args:
            endpoint: Resource endpoint (AZURE_OPENAI_ENDPOINT if None)
            api_key: API key (AZURE_OPENAI_API_KEY if None)
            deployment: Deployment name (AZURE_OPENAI_DEPLOYMENT if None)
            api_version: API version (AZURE_OPENAI_API_VERSION if None)
            timeout: Per-request timeout in seconds
            max_tokens: Completion token cap
            max_retries: Extra tries on retryable errors

        Raises:
            ValueError: If endpoint, key or deployment cannot be resolved
        """
        given = {"endpoint": endpoint, "api_key": api_key, "deployment": deployment}
        settings = {
            name: given[name] or os.getenv(env_var)
            for name, env_var in _REQUIRED_SETTINGS.items()
        }
        missing = [_REQUIRED_SETTINGS[name] for name, value in settings.items() if not value]
        if missing:
            raise ValueError(
                f"Missing required Azure OpenAI configuration: {', '.join(missing)}. "
                f"Pass the values to the constructor or set the environment variables."
            )

        self.endpoint = settings["endpoint"]
        self.api_key = settings["api_key"]
        self.deployment = settings["deployment"]
        self.api_version = api_version or os.getenv("AZURE_OPENAI_API_VERSION", DEFAULT_API_VERSION)
        self.timeout = timeout
        self.max_tokens = max_tokens
        self.max_retries = max_retries
        self.default_model = self.deployment

        self.client = AzureOpenAI(
            azure_endpoint=self.endpoint,
            api_key=self.api_key,
            api_version=self.api_version,
            timeout=self.timeout,
        )
        logger.info(f"Initialized AzureOpenAIProvider: deployment={self.deployment}")

    def generate(self, prompt: str, model: str, temperature: float) -> str:
        """
        Returns:
            Content of the first choice ("" if the model sent none)

        Raises:
            openai.APIError: If the error is not retryable or outlasts max_retries
        """
        for attempt in range(self.max_retries + 1):
            try:
                completion = self.client.chat.completions.create(
                    model=model,
                    messages=[{"role": "user", "content": prompt}],
                    temperature=temperature,
                    max_tokens=self.max_tokens,
                )
                return completion.choices[0].message.content or ""

            except APIError as e:
                if attempt >= self.max_retries or not is_retryable(e):
                    logger.error(f"Azure OpenAI call failed: {type(e).__name__}: {e}")
                    raise
                delay = backoff_delay(attempt)
                logger.warning(
                    f"{type(e).__name__} from {model} (try {attempt + 1}/{self.max_retries + 1}), "
                    f"sleeping {delay:.2f}s"
                )
                time.sleep(delay)


def is_retryable(error: APIError) -> bool:
    """Rate limits, transport failures and 5xx responses are worth another try."""
    if isinstance(error, (RateLimitError, APIConnectionError, APITimeoutError)):
        return True
    return getattr(error, "status_code", None) in RETRYABLE_STATUS_CODES
