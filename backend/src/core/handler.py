# backend/src/core/handler.py

import json, logging
from typing import Any, Mapping, NamedTuple

from .config import Settings
from .errors import (
    QuizError,
    MethodNotAllowed,
    ServerMisconfigured,
    InvalidDifficulty,
    InvalidTopic,
    UpstreamCallFailed,
    InternalError,
)
from .gemini_qg import UpstreamCall, build_payload, extract_text, parse_quiz, make_upstream_call
from .schemas import QuizRequest, VALID_DIFFICULTIES

logger = logging.getLogger("quiz.handler")


class HandlerResponse(NamedTuple):
    status_code: int
    body: Any


# ------------------------------------------------------------
# Validation
# ------------------------------------------------------------
def parse_body(body: Any) -> Mapping[str, Any]:
    """Accept a raw JSON body or an already-parsed one; parsed non-objects become {}."""
    if body is None:
        raise ValueError("Request body is missing.")
    if isinstance(body, (bytes, bytearray)):
        body = body.decode("utf-8")
    if isinstance(body, str):
        body = json.loads(body)
    if not isinstance(body, Mapping):
        return {}
    return body


def validate_request(data: Mapping[str, Any]) -> QuizRequest:
    difficulty = data.get("difficulty")
    topic = data.get("topic")

    if not isinstance(difficulty, str) or difficulty not in VALID_DIFFICULTIES:
        raise InvalidDifficulty(difficulty)

    if not isinstance(topic, str) or not topic.strip():
        raise InvalidTopic()

    return QuizRequest(difficulty=difficulty, topic=topic)


# ------------------------------------------------------------
# Main handler
# ------------------------------------------------------------
async def generate_quiz(
    body: Any,
    settings: Settings,
    call_upstream: UpstreamCall,
) -> Any:
    if not settings.has_api_key:
        logger.error("GEMINI_API_KEY environment variable not found.")
        raise ServerMisconfigured()

    req = validate_request(parse_body(body))
    payload = build_payload(topic=req.topic, difficulty=req.difficulty)

    resp = await call_upstream(payload)
    if not resp.is_success:
        raise UpstreamCallFailed(resp.status_code, resp.text)

    text = extract_text(resp.json())
    questions = parse_quiz(text)
    logger.info(f"Generated quiz topic={req.topic!r} difficulty={req.difficulty}")
    return questions


async def handle_quiz_request(
    method: str,
    body: Any,
    settings: Settings,
    call_upstream: UpstreamCall | None = None,
) -> HandlerResponse:
    """
    Validate one quiz request, call Gemini once and map the outcome to a
    status code and JSON-ready body. Never raises.
    """
    if method != "POST":
        err = MethodNotAllowed()
        return HandlerResponse(err.status_code, err.to_body())

    if call_upstream is None:
        call_upstream = make_upstream_call(settings)

    try:
        questions = await generate_quiz(body, settings, call_upstream)
    except UpstreamCallFailed as e:
        logger.error(f"Error from Gemini API (status={e.status_code}): {e.detail}")
        return HandlerResponse(e.status_code, e.to_body())
    except (ServerMisconfigured, InvalidDifficulty, InvalidTopic) as e:
        return HandlerResponse(e.status_code, e.to_body())
    except QuizError as e:
        logger.error(f"Internal server error in handler: {e}", exc_info=True)
        return HandlerResponse(e.status_code, e.to_body())
    except Exception as e:
        logger.error(f"Internal server error in handler: {e}", exc_info=True)
        err = InternalError()
        return HandlerResponse(err.status_code, err.to_body())

    return HandlerResponse(200, questions)
