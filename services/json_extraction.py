"""
JSON extraction for free-form model output.

The model is asked for a bare JSON array but often wraps it in prose or
markdown fences, and sometimes emits invalid JSON. Extraction takes the text
between the first "[" and the last "]"; it is not a real parser, so a stray
bracket inside a string value can still break it.
"""

import json
import logging
import re
from typing import Any, List

from json_repair import repair_json

from app.errors import ModelMalformedResponse, PlanJsonError

logger = logging.getLogger(__name__)

_NULL_NOTES = re.compile(r'"notes":\s*null', re.IGNORECASE)


def extract_json_array(text: str) -> str:
    start = text.find("[")
    end = text.rfind("]")
    if start == -1 or end < start:
        raise ModelMalformedResponse(raw=text)
    return text[start : end + 1]


def normalize_null_notes(text: str) -> str:
    return _NULL_NOTES.sub('"notes": ""', text)


def _reject_constant(name: str):
    # NaN and Infinity are not JSON and cannot be sent back to the caller
    raise ValueError(f"invalid JSON constant {name}")


def _loads(text: str) -> Any:
    return json.loads(text, parse_constant=_reject_constant)


def parse_plan_json(text: str) -> List[Any]:
    """Strict parse, then a single repair pass; anything else is a PlanJsonError."""
    try:
        plan = _loads(text)
    except ValueError as strict_error:
        logger.warning("Model JSON is invalid (%s), trying repair", strict_error)
        try:
            plan = _loads(repair_json(text))
        except (ValueError, TypeError) as repair_error:
            raise PlanJsonError(raw=text, error=str(repair_error)) from repair_error

    if not isinstance(plan, list):
        raise PlanJsonError(
            raw=text, error=f"expected a JSON array, got {type(plan).__name__}"
        )
    return plan


def extract_plan(completion: str) -> List[Any]:
    """Full chain used on model completions: slice, clean up nulls, parse."""
    return parse_plan_json(normalize_null_notes(extract_json_array(completion)))
