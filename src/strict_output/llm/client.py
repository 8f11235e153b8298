"""LLM client abstraction: the provider boundary of strict-output."""

import random
from abc import ABC, abstractmethod


class LLMClient(ABC):
    """
    Abstract base class for text-generation providers.

    Implementations take a prompt and return free-form text. They may raise
    any exception on network, auth, quota or request errors; the requester
    only captures the message text for feedback.
    """

    #: Model used when a request does not name one
    default_model: str = ""

    @abstractmethod
    def generate(self, prompt: str, model: str, temperature: float) -> str:
        """
        Send a prompt to the provider and return the generated text.

        Args:
            prompt: Complete prompt text
            model: Provider model identifier
            temperature: Sampling temperature

        Returns:
            Raw text produced by the model

        Raises:
            Exception: For provider API errors
        """
        pass


def backoff_delay(attempt: int, base_delay: float = 1.0) -> float:
    """Exponential delay with up to one second of jitter for a 0-based attempt."""
    return base_delay * (2 ** attempt) + random.uniform(0, 1)
