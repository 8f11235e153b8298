"""
Per-request retry state and per-attempt outcomes.

An AttemptState is created empty when a request starts, updated after every
failed attempt, and dropped when the request returns or gives up. Each
attempt produces an AttemptResult that the retry loop inspects.
"""

from dataclasses import dataclass, field
from typing import Any, Optional

from strict_output.core.exceptions import AttemptError


FEEDBACK_TEMPLATE = "\n\n[PREVIOUS ATTEMPT FAILED: {message}]"


@dataclass
class AttemptResult:
    """
    Outcome of a single attempt.

    Exactly one of `records` and `error` is set.

    Attributes:
        records: Validated records on success
        error: The attempt error on failure
        raw_text: Text returned by the provider (None if the call failed)
        latency_ms: Time spent in the attempt, in milliseconds
    """

    records: Optional[list[Any]] = None
    error: Optional[AttemptError] = None
    raw_text: Optional[str] = None
    latency_ms: int = 0

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, records: list[Any], raw_text: str, latency_ms: int = 0) -> "AttemptResult":
        return cls(records=records, raw_text=raw_text, latency_ms=latency_ms)

    @classmethod
    def failure(
        cls,
        error: AttemptError,
        raw_text: Optional[str] = None,
        latency_ms: int = 0,
    ) -> "AttemptResult":
        return cls(error=error, raw_text=raw_text, latency_ms=latency_ms)


@dataclass
class AttemptState:
    """
    Mutable retry state owned by one in-flight request.

    Example:
        >>> from strict_output.core.exceptions import NoJsonFoundError
        >>> state = AttemptState()
        >>> state.feedback
        ''
        >>> state.record_failure(NoJsonFoundError())
        >>> state.feedback
        '\\n\\n[PREVIOUS ATTEMPT FAILED: No valid JSON object found.]'
        >>> state.attempts
        1
    """

    feedback: str = ""
    attempts: int = 0
    errors: list[str] = field(default_factory=list)
    last_error: Optional[AttemptError] = None

    def record_success(self) -> None:
        self.attempts += 1

    def record_failure(self, error: AttemptError) -> None:
        """Count the attempt and append its error to the feedback text."""
        message = str(error)
        self.attempts += 1
        self.errors.append(message)
        self.last_error = error
        self.feedback += FEEDBACK_TEMPLATE.format(message=message)

    def to_dict(self) -> dict[str, Any]:
        return {
            "feedback": self.feedback,
            "attempts": self.attempts,
            "errors": list(self.errors),
        }

    def __repr__(self) -> str:
        return f"AttemptState(attempts={self.attempts}, errors={self.errors})"
