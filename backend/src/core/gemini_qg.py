# backend/src/core/gemini_qg.py

import json, logging
from functools import partial
from typing import Any, Awaitable, Callable, Dict, List
import httpx

from .config import Settings
from .errors import UpstreamResponseMalformed

logger = logging.getLogger("quiz.gemini")

# Narrow seam for the outbound call: generateContent payload in, raw HTTP response out.
UpstreamCall = Callable[[Dict[str, Any]], Awaitable[httpx.Response]]

# ------------------------------------------------------------
# Prompt template
# ------------------------------------------------------------
QG_SYSTEM_PROMPT = (
    "You are an expert quiz master. You must generate a complete quiz of 5 unique "
    "questions based on the topic and difficulty provided by the user. Your response "
    "must be a JSON array of 5 objects, matching the provided schema. Do not wrap the "
    "array in any other object."
)

QG_USER_TEMPLATE = (
    'Generate an array of 5 unique trivia questions on the topic of "{topic}" '
    "suitable for a {difficulty} difficulty level."
)

QUIZ_RESPONSE_SCHEMA: Dict[str, Any] = {
    "type": "ARRAY",
    "items": {
        "type": "OBJECT",
        "properties": {
            "question": {"type": "STRING"},
            "options": {"type": "ARRAY", "items": {"type": "STRING"}},
            "correctAnswer": {"type": "STRING"},
        },
        "required": ["question", "options", "correctAnswer"],
    },
}

# ------------------------------------------------------------
# Payload helpers
# ------------------------------------------------------------
def build_user_query(topic: str, difficulty: str) -> str:
    return QG_USER_TEMPLATE.format(topic=topic, difficulty=difficulty)


def build_payload(topic: str, difficulty: str) -> Dict[str, Any]:
    """Assemble the generateContent request body for one quiz."""
    return {
        "contents": [{"parts": [{"text": build_user_query(topic, difficulty)}]}],
        "systemInstruction": {"parts": [{"text": QG_SYSTEM_PROMPT}]},
        "generationConfig": {
            "responseMimeType": "application/json",
            "responseSchema": QUIZ_RESPONSE_SCHEMA,
        },
    }


def generate_content_url(settings: Settings) -> str:
    return f"{settings.gemini_api_base}/models/{settings.gemini_model}:generateContent"


def extract_text(data: Any) -> str:
    """Pull candidates[0].content.parts[0].text out of a generateContent response."""
    try:
        text = data["candidates"][0]["content"]["parts"][0]["text"]
    except (KeyError, IndexError, TypeError):
        text = None
    if not text or not isinstance(text, str):
        raise UpstreamResponseMalformed()
    return text


def _reject_constant(token: str):
    raise ValueError(f"Non-standard JSON constant in model output: {token}")


def parse_quiz(text: str) -> List[Dict[str, Any]]:
    # trusted pass-through: no count or shape checks on the questions
    return json.loads(text, parse_constant=_reject_constant)

# ------------------------------------------------------------
# Outbound call
# ------------------------------------------------------------
async def post_generate_content(
    payload: Dict[str, Any],
    settings: Settings,
    client: httpx.AsyncClient | None = None,
) -> httpx.Response:
    """POST one generateContent request; the API key travels as the `key` query param."""
    url = generate_content_url(settings)
    params = {"key": settings.gemini_api_key or ""}
    logger.debug(f"POST {url} model={settings.gemini_model}")

    if client is not None:
        return await client.post(url, params=params, json=payload)

    async with httpx.AsyncClient(timeout=settings.gemini_timeout) as owned:
        return await owned.post(url, params=params, json=payload)


def make_upstream_call(settings: Settings) -> UpstreamCall:
    return partial(post_generate_content, settings=settings)
