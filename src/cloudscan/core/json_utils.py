"""JSON parsing with Pydantic schema validation.

Functions return a result object rather than raising, so callers decide
whether a bad document is fatal. The snapshot cache treats any failure as a
cache miss.

Example usage:
    result = parse_json_with_schema(raw_json, SnapshotModel, context=str(path))
    if result.success:
        snapshot = result.value  # Type: SnapshotModel
    else:
        logger.warning("Parse failed: %s", result.error)
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Generic, TypeVar

from pydantic import BaseModel, ValidationError

T = TypeVar("T")
M = TypeVar("M", bound=BaseModel)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class JsonParseResult(Generic[T]):
    """Result of a JSON parsing operation.

    Attributes:
        success: True if parsing succeeded, False otherwise.
        value: The parsed value if successful, None otherwise.
        error: Error message if parsing failed, None otherwise.
    """

    success: bool
    value: T | None
    error: str | None = None


def _failure(context: str, message: str) -> JsonParseResult:
    context_prefix = f"{context}: " if context else ""
    error_msg = f"{context_prefix}{message}"
    logger.warning(error_msg)
    return JsonParseResult(success=False, value=None, error=error_msg)


def parse_json_with_schema(
    raw: str | None,
    schema: type[M],
    *,
    context: str = "",
) -> JsonParseResult[M]:
    """Parse JSON and validate it against a Pydantic schema.

    Args:
        raw: JSON string to parse. None or empty is a failure.
        schema: Pydantic model class for validation.
        context: Context string for error messages (e.g. the file path).

    Returns:
        JsonParseResult with the validated model instance or error details.
    """
    if not raw:
        return _failure(context, "Empty document")

    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        return _failure(context, f"Invalid JSON at position {e.pos}: {e.msg}")

    try:
        validated = schema.model_validate(data)
    except ValidationError as e:
        errors = e.errors()
        first_error = errors[0] if errors else {}
        field = ".".join(str(loc) for loc in first_error.get("loc", []))
        msg = first_error.get("msg", "validation error")
        return _failure(
            context,
            f"Schema validation failed ({len(errors)} error(s)): {field}: {msg}",
        )
    return JsonParseResult(success=True, value=validated, error=None)
