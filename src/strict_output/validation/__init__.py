"""
Sanitization and validation of model output.

Turns free-form provider text into validated records matching an OutputShape.
"""

from strict_output.validation.sanitize import sanitize, extract_json_span, clean_response
from strict_output.validation.records import parse_records, validate_records

__all__ = [
    "sanitize",
    "extract_json_span",
    "clean_response",
    "parse_records",
    "validate_records",
]
