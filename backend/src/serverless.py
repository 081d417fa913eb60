# backend/src/serverless.py
"""
Function-style entry point for event-based hosting.

The platform hands over ``{"httpMethod": ..., "body": "<json string>"}`` and
expects ``{"statusCode": ..., "headers": ..., "body": "<json string>"}`` back.
"""

import asyncio, json, logging
from typing import Any, Dict

from src.core import Settings, load_settings, handle_quiz_request
from src.core.gemini_qg import UpstreamCall

logger = logging.getLogger("quiz.serverless")

JSON_HEADERS = {"Content-Type": "application/json"}


async def handle_event(
    event: Dict[str, Any],
    settings: Settings | None = None,
    call_upstream: UpstreamCall | None = None,
) -> Dict[str, Any]:
    settings = settings or load_settings()
    method = event.get("httpMethod") or ""
    logger.info(f"Incoming {method} event")

    result = await handle_quiz_request(
        method=method,
        body=event.get("body"),
        settings=settings,
        call_upstream=call_upstream,
    )
    return {
        "statusCode": result.status_code,
        "headers": dict(JSON_HEADERS),
        "body": json.dumps(result.body),
    }


def handler(event: Dict[str, Any], context: Any = None) -> Dict[str, Any]:
    return asyncio.run(handle_event(event))
