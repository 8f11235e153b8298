"""Structured-output requester with sanitization, validation and retry."""

import json
import logging
import time
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional, Union

from strict_output.core.config import RequestConfig
from strict_output.core.exceptions import (
    AttemptError,
    NoJsonFoundError,
    ProviderCallError,
    RetriesExhaustedError,
)
from strict_output.core.prompts import build_prompt
from strict_output.core.state import AttemptResult, AttemptState
from strict_output.llm.client import LLMClient
from strict_output.llm.schemas import OutputShape
from strict_output.validation.records import parse_records, validate_records
from strict_output.validation.sanitize import sanitize


logger = logging.getLogger(__name__)


class StructuredOutputRequester:
    """
    Requests JSON records of a given shape from an LLMClient.

    Each attempt builds a prompt, calls the provider, sanitizes the reply and
    validates it against the OutputShape. A failed attempt appends its error
    to the prompt of the next one. Attempts run strictly one after another.

    Example:
        >>> requester = StructuredOutputRequester(GeminiProvider())
        >>> records = requester.request(RequestConfig(
        ...     system_prompt="You are a helpful AI that answers questions.",
        ...     user_prompt="What is the capital of France?",
        ...     output_format={"answer": "a short answer"},
        ...     output_value_only=True,
        ... ))
        >>> records
        ['Paris']
    """

    def __init__(self, client: LLMClient, log_dir: Optional[str] = None):
        """
        Initialize the requester.

        Args:
            client: Provider used for text generation
            log_dir: Directory for the JSONL payload log (None disables it)
        """
        self.client = client
        self.log_dir = Path(log_dir) if log_dir else None
        if self.log_dir is not None:
            self.log_dir.mkdir(parents=True, exist_ok=True)

    def request(self, config: RequestConfig) -> list[Any]:
        """
        Run up to config.num_tries attempts and return the first valid result.

        Args:
            config: Request configuration

        Returns:
            Validated records, one per input item when a list of inputs was
            given

        Raises:
            RetriesExhaustedError: If every attempt failed
        """
        model = config.model or self.client.default_model
        state = AttemptState()

        for attempt in range(config.num_tries):
            prompt = build_prompt(config, state.feedback)
            result = self._run_attempt(config, model, prompt)

            self._log_payload(
                model=model,
                prompt=prompt,
                result=result,
                attempt=attempt,
            )

            if result.ok:
                state.record_success()
                logger.debug(
                    f"Attempt {attempt + 1}/{config.num_tries} succeeded with "
                    f"{len(result.records)} records in {result.latency_ms}ms"
                )
                return result.records

            state.record_failure(result.error)
            message = (
                f"Attempt {attempt + 1}/{config.num_tries} failed with model "
                f"[{model}]: {result.error}"
            )
            if config.verbose:
                logger.warning(message)
            else:
                logger.debug(message)

        logger.error(
            f"All {config.num_tries} attempts failed to produce valid structured output"
        )
        raise RetriesExhaustedError(
            attempts=state.attempts,
            errors=state.errors,
            last_error=state.last_error,
        )

    def _run_attempt(self, config: RequestConfig, model: str, prompt: str) -> AttemptResult:
        """Run one call -> sanitize -> parse -> validate cycle for a built prompt."""
        start_time = time.time()
        raw_text = None

        try:
            try:
                raw_text = self.client.generate(prompt, model, config.temperature)
            except Exception as e:
                raise ProviderCallError(e) from e

            raw_text = (raw_text or "").strip()
            if config.verbose:
                logger.info(f"==== RAW OUTPUT FROM {model} ====\n{raw_text}")
            else:
                logger.debug(f"Raw output from {model}: {raw_text}")

            candidate = sanitize(raw_text)
            if candidate is None:
                raise NoJsonFoundError()

            records = validate_records(
                parse_records(candidate),
                config.output_format,
                default_category=config.default_category,
                output_value_only=config.output_value_only,
                expected_count=len(config.inputs) if config.is_list_input else None,
            )

        except AttemptError as e:
            return AttemptResult.failure(
                e,
                raw_text=raw_text,
                latency_ms=int((time.time() - start_time) * 1000),
            )

        return AttemptResult.success(
            records,
            raw_text=raw_text,
            latency_ms=int((time.time() - start_time) * 1000),
        )

    def _log_payload(
        self,
        model: str,
        prompt: str,
        result: AttemptResult,
        attempt: int,
    ) -> None:
        """
        Append one attempt to the JSONL payload log, if enabled.

        Args:
            model: Model identifier used for the attempt
            prompt: Prompt sent to the provider
            result: Outcome of the attempt
            attempt: Which attempt this was (0-indexed)
        """
        if self.log_dir is None:
            return

        log_entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "model": model,
            "request": {"prompt": prompt},
            "response": result.raw_text,
            "attempt": attempt,
            "latency_ms": result.latency_ms,
            "error": str(result.error) if result.error else None,
        }

        log_file = self.log_dir / "llm_payloads.jsonl"

        # Each write is a single line, which is atomic on most filesystems
        with open(log_file, "a", encoding="utf-8") as f:
            f.write(json.dumps(log_entry, ensure_ascii=False) + "\n")


def strict_output(
    client: LLMClient,
    system_prompt: str,
    user_prompt: Union[str, list[str]],
    output_format: Union[OutputShape, dict[str, Union[str, list[str]]]],
    default_category: str = "",
    output_value_only: bool = False,
    model: Optional[str] = None,
    temperature: float = 0.7,
    num_tries: int = 3,
    verbose: bool = False,
) -> list[Any]:
    """
    Request structured output in one call.

    Builds a RequestConfig from the arguments and runs it through a
    StructuredOutputRequester.

    Example:
        >>> strict_output(
        ...     GeminiProvider(api_key="..."),
        ...     system_prompt="You generate quiz questions.",
        ...     user_prompt=["photosynthesis", "mitosis"],
        ...     output_format={"question": "question", "answer": "answer"},
        ... )
        [{'question': '...', 'answer': '...'}, {'question': '...', 'answer': '...'}]

    Raises:
        RetriesExhaustedError: If every attempt failed
    """
    config = RequestConfig(
        system_prompt=system_prompt,
        user_prompt=user_prompt,
        output_format=output_format,
        default_category=default_category,
        output_value_only=output_value_only,
        model=model,
        temperature=temperature,
        num_tries=num_tries,
        verbose=verbose,
    )
    return StructuredOutputRequester(client).request(config)
