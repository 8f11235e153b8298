"""
Sanitization of raw model text into a candidate JSON string.

Models often wrap JSON in markdown fences, use single quotes, leave trailing
commas or surround the payload with prose. sanitize() repairs the first three
and then cuts out the first balanced JSON object or array.
"""

import re
from typing import Optional


FENCE_PATTERN = re.compile(r"```(?:json)?")
TRAILING_COMMA_PATTERN = re.compile(r"(?:,\s*)+([}\]])")
OPENER_PATTERN = re.compile(r"[{\[]")

_CLOSERS = {"{": "}", "[": "]"}


def strip_code_fences(text: str) -> str:
    """Remove ```json and ``` markers anywhere in the text."""
    while "```" in text:
        text = FENCE_PATTERN.sub("", text)
    return text.strip()


def normalize_quotes(text: str) -> str:
    """Replace every single quote with a double quote."""
    return text.replace("'", '"')


def remove_trailing_commas(text: str) -> str:
    """Drop commas (and any run of them) directly before a closing } or ]."""
    return TRAILING_COMMA_PATTERN.sub(r"\1", text)


def extract_json_span(text: str) -> Optional[str]:
    """
    Return the first balanced {...} or [...] substring, or None.

    Brackets inside string literals are ignored. An opener that never balances
    is skipped, so a stray "{" in prose does not hide a complete object later
    in the text. A failed scan also settles every opener it passed, so a run
    of stray openers is not rescanned once per opener.

    Example:
        >>> extract_json_span('Sure! {"a": [1, 2]} Hope this helps.')
        '{"a": [1, 2]}'
        >>> extract_json_span("no json here") is None
        True
    """
    # opener index -> index of its matching closer, None if it never balances
    outcomes: dict[int, Optional[int]] = {}
    for match in OPENER_PATTERN.finditer(text):
        begin = match.start()
        if begin not in outcomes:
            outcomes.update(_scan_from(text, begin))
        end = outcomes[begin]
        if end is not None:
            return text[begin:end + 1]
    return None


def _scan_from(text: str, begin: int) -> dict[int, Optional[int]]:
    """
    Scan from the opener at begin and record where each opener it meets closes.

    The scan stops when begin's bracket closes, at a mismatched closer, or at
    the end of the text. Openers still on the stack map to None: a scan started
    at any of them would meet the same mismatch or run out of text too.
    """
    outcomes: dict[int, Optional[int]] = {}
    stack: list[tuple[int, str]] = []
    in_string = False
    escaped = False

    for i in range(begin, len(text)):
        char = text[i]

        if in_string:
            if escaped:
                escaped = False
            elif char == "\\":
                escaped = True
            elif char == '"':
                in_string = False
            continue

        if char == '"':
            in_string = True
        elif char in _CLOSERS:
            stack.append((i, _CLOSERS[char]))
            outcomes[i] = None
        elif char in ("}", "]"):
            if stack[-1][1] != char:
                break
            opened_at, _ = stack.pop()
            outcomes[opened_at] = i
            if not stack:
                break

    return outcomes


def clean_response(text: str) -> str:
    """Apply the fence, quote and trailing-comma repairs, in that order."""
    text = strip_code_fences(text)
    text = normalize_quotes(text)
    return remove_trailing_commas(text)


def sanitize(text: str) -> Optional[str]:
    """
    Turn raw model output into candidate JSON text.

    Pure function that never raises on arbitrary input. Clean JSON comes back
    unchanged unless it contains a single quote: every "'" becomes a double
    quote, apostrophes inside string values included, which can break an
    otherwise valid reply.

    Args:
        text: Raw text returned by the provider

    Returns:
        The first balanced JSON object/array after repairs, or None if the
        text contains no such span

    Example:
        >>> sanitize("```json\\n{'a': 1,}\\n```")
        '{"a": 1}'
    """
    return extract_json_span(clean_response(text or ""))
