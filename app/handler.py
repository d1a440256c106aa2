"""
AWS Lambda entry point (API Gateway proxy integration or direct invoke)
"""

import json
import logging
from typing import Any, Dict, Optional

from services.plan_generator import PlanGeneratorService

from .config import Settings
from .errors import internal_error_body
from .factory import build_plan_generator
from .logging_config import setup_logging

logger = logging.getLogger(__name__)

_service: Optional[PlanGeneratorService] = None


# ---------- CORS ----------
def request_origin(headers: Any) -> str:
    if not isinstance(headers, dict):
        return ""
    origin = headers.get("origin") or headers.get("Origin") or ""
    return origin if isinstance(origin, str) else ""


def cors_headers(origin: str) -> Dict[str, str]:
    return {
        "Access-Control-Allow-Origin": origin,
        "Access-Control-Allow-Headers": "Content-Type",
        "Access-Control-Allow-Methods": "POST, OPTIONS",
        "Vary": "Origin",
    }


def cors_response(status: int, body: Any, event: Any) -> Dict[str, Any]:
    headers = event.get("headers") if isinstance(event, dict) else None
    return {
        "statusCode": status,
        "headers": cors_headers(request_origin(headers)),
        "body": json.dumps(body, ensure_ascii=False),
    }


def request_body(event: Any) -> Any:
    """Proxy events carry the payload in "body"; direct invokes are the payload."""
    if not isinstance(event, dict):
        return {}
    body = event.get("body")
    if body:
        return json.loads(body) if isinstance(body, str) else body
    return event


def get_service() -> PlanGeneratorService:
    global _service
    if _service is None:
        settings = Settings.from_env()
        setup_logging(settings.log_level)
        _service = build_plan_generator(settings)
    return _service


def handle_event(event: Any, service: PlanGeneratorService) -> Dict[str, Any]:
    if isinstance(event, dict) and event.get("httpMethod") == "OPTIONS":
        return cors_response(200, {"ok": True}, event)

    try:
        body = request_body(event)
    except ValueError as e:
        logger.warning("Request body is not valid JSON: %s", e)
        return cors_response(500, internal_error_body(e), event)

    status, payload = service.respond(body)
    return cors_response(status, payload, event)


def handler(event, context):
    try:
        return handle_event(event, get_service())
    except Exception as e:
        logger.exception("Lambda invocation failed")
        return cors_response(500, internal_error_body(e), event)
