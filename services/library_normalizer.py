"""
Library Normalizer - keeps saved plans and templates in sync with the exercise library.

Saved plans store a snapshot of each exercise. When a plan is loaded again, items
that reference a library exercise (``exerciseId``) and lack complete info get
the current library metadata merged in, and every item is given the defaults
the renderer expects.
"""

import copy
import decimal
import json
import logging
from typing import Any, Dict, Iterable, List, Mapping, Optional

from boto3.dynamodb.types import TypeDeserializer

from .exercise_matcher import ensure_number, is_reps_value
from .identifiers import next_id
from .plan_enricher import DEFAULT_REPS, DEFAULT_REST, DEFAULT_SETS, SUPERSET_NAME

logger = logging.getLogger(__name__)

MEDIA_FIELDS = ("thumbnail", "preview_url", "youtube_url")
REQUIRED_FIELDS = ("name", "equipment")

# Plan-specific values that must survive a library merge
PLAN_FIELDS = (
    "id",
    "exerciseId",
    "sets",
    "reps",
    "rest",
    "notes",
    "selected",
    "isGroup",
    "children",
    "parentGroupId",
    "supersetId",
    "supersetLabel",
    "supersetOrder",
    "supersetSize",
)

_DYNAMO_TYPES = frozenset({"S", "N", "B", "BOOL", "NULL", "L", "M", "SS", "NS", "BS"})
_deserializer = TypeDeserializer()


# ---------- DynamoDB items ----------
def _plain(value: Any) -> Any:
    if isinstance(value, decimal.Decimal):
        return int(value) if value == value.to_integral_value() else float(value)
    if isinstance(value, (set, frozenset)):
        return sorted(_plain(v) for v in value)
    if isinstance(value, list):
        return [_plain(v) for v in value]
    if isinstance(value, dict):
        return {k: _plain(v) for k, v in value.items()}
    return value


def _is_attribute_value(value: Any) -> bool:
    return isinstance(value, dict) and len(value) == 1 and next(iter(value)) in _DYNAMO_TYPES


def flatten_dynamo_item(raw: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
    """Turn a low-level DynamoDB item into plain Python values."""
    flattened = {}
    for key, value in (raw or {}).items():
        if _is_attribute_value(value):
            try:
                flattened[key] = _plain(_deserializer.deserialize(value))
            except (TypeError, decimal.InvalidOperation):
                flattened[key] = value
        else:
            flattened[key] = value
    return flattened


def build_library_map(items: Iterable[Mapping[str, Any]]) -> Dict[str, Dict[str, Any]]:
    library = {}
    for item in items:
        exercise = flatten_dynamo_item(item)
        if exercise.get("id"):
            library[str(exercise["id"])] = exercise
    return library


# ---------- sessions ----------
def parse_plan_sessions(raw: Any) -> List[Dict[str, Any]]:
    """Accept a JSON string, a list of sessions or a ``{"sessions": [...]}`` body."""
    if isinstance(raw, str):
        try:
            raw = json.loads(raw)
        except json.JSONDecodeError:
            logger.warning("Saved plan sessions are not valid JSON")
            return []
    if isinstance(raw, dict):
        raw = raw.get("sessions")
    if not isinstance(raw, list):
        return []

    sessions = []
    for idx, session in enumerate(raw):
        if not isinstance(session, dict):
            continue
        items = session.get("items")
        if not isinstance(items, list):
            items = session.get("exercises") if isinstance(session.get("exercises"), list) else []
        parsed = dict(session)
        parsed["id"] = session.get("id") if session.get("id") is not None else idx + 1
        parsed["name"] = session.get("name") or session.get("day") or f"Día {idx + 1}"
        parsed["items"] = [item for item in items if isinstance(item, dict)]
        sessions.append(parsed)
    return sessions


def has_complete_info(item: Mapping[str, Any]) -> bool:
    return bool(item.get("name")) and any(item.get(field) for field in MEDIA_FIELDS)


def needs_enrichment(item: Mapping[str, Any]) -> bool:
    if has_complete_info(item):
        return False
    return bool(item.get("exerciseId")) or any(not item.get(f) for f in REQUIRED_FIELDS)


def enrich_item_from_library(
    item: Dict[str, Any], library: Mapping[str, Mapping[str, Any]]
) -> Dict[str, Any]:
    enriched = dict(item)
    if isinstance(item.get("children"), list):
        enriched["children"] = [
            enrich_item_from_library(child, library)
            for child in item["children"]
            if isinstance(child, dict)
        ]
        return enriched

    if not needs_enrichment(item):
        return enriched

    key = item.get("exerciseId") or item.get("id")
    exercise = library.get(str(key)) if key else None
    if exercise is None:
        return enriched

    merged = copy.deepcopy(dict(exercise))
    merged.pop("id", None)
    merged.update({k: item[k] for k in PLAN_FIELDS if k in item})
    merged.setdefault("exerciseId", exercise.get("id", key))
    return merged


def enrich_plan_sessions_from_library(
    sessions: List[Dict[str, Any]], library: Mapping[str, Mapping[str, Any]]
) -> List[Dict[str, Any]]:
    if not library:
        return sessions
    return [
        {
            **session,
            "items": [enrich_item_from_library(item, library) for item in session.get("items", [])],
        }
        for session in sessions
    ]


# ---------- render defaults ----------
def _normalize_item(item: Dict[str, Any]) -> Dict[str, Any]:
    normalized = dict(item)
    if not (isinstance(item.get("id"), str) and item["id"].strip()):
        normalized["id"] = next_id("item")
    normalized["sets"] = ensure_number(item.get("sets"), DEFAULT_SETS)
    normalized["reps"] = item["reps"] if is_reps_value(item.get("reps")) else DEFAULT_REPS
    normalized["rest"] = ensure_number(item.get("rest"), DEFAULT_REST)
    normalized["notes"] = item["notes"] if isinstance(item.get("notes"), str) else ""
    return normalized


def _normalize_group(group: Dict[str, Any]) -> Optional[Dict[str, Any]]:
    children = [
        _normalize_item(child) for child in group.get("children") or [] if isinstance(child, dict)
    ]
    if not children:
        return None
    normalized = _normalize_item(group)
    if not (isinstance(group.get("id"), str) and group["id"].strip()):
        normalized["id"] = next_id("superset")
    normalized.update(
        name=group.get("name") or SUPERSET_NAME,
        isGroup=True,
        groupSize=len(children),
        displayName=group.get("displayName")
        or f"{SUPERSET_NAME}: " + " + ".join(str(c.get("name", "")) for c in children),
    )
    normalized["sets"] = ensure_number(group.get("sets"), children[0]["sets"])
    normalized["rest"] = ensure_number(group.get("rest"), children[0]["rest"])
    if not is_reps_value(group.get("reps")):
        normalized["reps"] = children[0]["reps"]
    for order, child in enumerate(children, start=1):
        child.update(
            parentGroupId=normalized["id"], supersetOrder=order, supersetSize=len(children)
        )
    normalized["children"] = children
    return normalized


def normalize_plan_sessions_for_render(sessions: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    rendered = []
    for session in sessions:
        items = []
        for item in session.get("items", []):
            if item.get("isGroup") or isinstance(item.get("children"), list):
                group = _normalize_group(item)
                if group is not None:
                    items.append(group)
            else:
                items.append(_normalize_item(item))
        rendered.append({**session, "items": items})
    return rendered
