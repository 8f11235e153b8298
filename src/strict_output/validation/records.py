"""Parsing and shape validation of sanitized model output."""

import json
import logging
from typing import Any, Optional

from strict_output.core.exceptions import JsonParseError, SchemaValidationError
from strict_output.llm.schemas import EnumField, OutputShape, is_placeholder_key


logger = logging.getLogger(__name__)


def parse_records(candidate: str) -> list[Any]:
    """
    Parse candidate JSON text into an ordered list of records.

    A single JSON object is wrapped in a one-element list.

    Raises:
        JsonParseError: If the text is not valid JSON or nests too deeply to decode
    """
    try:
        parsed = json.loads(candidate)
    except json.JSONDecodeError as e:
        logger.debug(f"JSON parse failed: {e}. Content was: {candidate}")
        raise JsonParseError(f"JSON parse failed: {e}", content=candidate) from e
    except RecursionError as e:
        logger.debug(f"JSON nesting too deep to decode ({len(candidate)} chars)")
        raise JsonParseError("JSON parse failed: nesting too deep", content=candidate) from e

    return parsed if isinstance(parsed, list) else [parsed]


def validate_records(
    records: list[Any],
    shape: OutputShape,
    default_category: str = "",
    output_value_only: bool = False,
    expected_count: Optional[int] = None,
) -> list[Any]:
    """
    Check each record against the shape and apply enum defaulting.

    Args:
        records: Parsed records, in model output order
        shape: The requested OutputShape
        default_category: Replacement for enum values outside the allowed set
            (empty string disables replacement)
        output_value_only: Unwrap each record into its value(s)
        expected_count: Required number of records (one per input item), or
            None to accept any count

    Returns:
        New list of validated records; the input list is left untouched

    Raises:
        SchemaValidationError: If a record is not an object, a required key is
            missing, or the record count differs from expected_count
    """
    if expected_count is not None and len(records) != expected_count:
        raise SchemaValidationError(
            f"Expected {expected_count} items (one per input) but got {len(records)}"
        )

    validated = []
    for item in records:
        if not isinstance(item, dict):
            raise SchemaValidationError(
                f"Expected a JSON object but got {type(item).__name__}: "
                f"{json.dumps(item, ensure_ascii=False)}"
            )
        record = _validate_record(dict(item), shape, default_category)
        if output_value_only:
            record = _values_only(record, shape)
        validated.append(record)

    return validated


def _validate_record(
    record: dict[str, Any],
    shape: OutputShape,
    default_category: str,
) -> dict[str, Any]:
    for field in shape.entries:
        key = field.name

        if key not in record:
            # Dynamic keys are substituted by the model, so their absence is fine
            if not is_placeholder_key(key):
                raise SchemaValidationError(
                    f"Missing key '{key}' in item: {json.dumps(record, ensure_ascii=False)}"
                )
            continue

        if isinstance(field, EnumField):
            value = record[key]
            if isinstance(value, list):
                value = value[0] if value else None

            if value not in field.allowed_values:
                if default_category:
                    logger.debug(
                        f"Value {value!r} for '{key}' not in {list(field.allowed_values)}; "
                        f"using default category {default_category!r}"
                    )
                    value = default_category
                else:
                    logger.warning(
                        f"Value {value!r} for '{key}' not in {list(field.allowed_values)} "
                        f"and no default category configured; keeping it"
                    )
            record[key] = value

    return record


def _values_only(record: dict[str, Any], shape: OutputShape) -> Any:
    values = [record[key] for key in shape.keys if key in record]
    if any(is_placeholder_key(key) for key in shape.keys):
        # Values under keys the model substituted for placeholders
        values.extend(v for k, v in record.items() if k not in shape.keys)

    if len(shape) == 1:
        return values[0] if values else None
    return values
