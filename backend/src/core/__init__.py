# backend/src/core/__init__.py
"""
Core package for the quiz generation backend.
Exposes the hosting-independent handler, its settings and the request/response models.
"""

from .config import Settings, load_settings
from .handler import HandlerResponse, handle_quiz_request
from .schemas import (
    QuizRequest,
    QuizQuestion,
    ErrorResponse,
)

__all__ = [
    "Settings",
    "load_settings",
    "HandlerResponse",
    "handle_quiz_request",
    "QuizRequest",
    "QuizQuestion",
    "ErrorResponse",
]
