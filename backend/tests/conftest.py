import json
import socket
from typing import Any, Callable, Dict, List

import httpx
import pytest

from src.core import Settings


class NetworkBlockedError(RuntimeError):
    pass


def _blocked(*_args: Any, **_kwargs: Any) -> Any:
    raise NetworkBlockedError("Network access is disabled during tests.")


@pytest.fixture(autouse=True)
def _disable_network(monkeypatch: pytest.MonkeyPatch) -> None:
    """Prevent accidental outbound calls to Gemini."""
    monkeypatch.setattr(socket, "create_connection", _blocked)
    monkeypatch.setattr(socket, "getaddrinfo", _blocked)


SAMPLE_QUIZ: List[Dict[str, Any]] = [
    {
        "question": f"Question {i} about the Roman Empire?",
        "options": ["A", "B", "C", "D"],
        "correctAnswer": "A",
    }
    for i in range(1, 6)
]


def gemini_body(text: str) -> Dict[str, Any]:
    return {"candidates": [{"content": {"parts": [{"text": text}], "role": "model"}}]}


class FakeUpstream:
    """Records payloads and replays a canned httpx.Response (or raises)."""

    def __init__(self, response: httpx.Response | None = None, exc: Exception | None = None):
        self.response = response
        self.exc = exc
        self.payloads: List[Dict[str, Any]] = []

    async def __call__(self, payload: Dict[str, Any]) -> httpx.Response:
        self.payloads.append(payload)
        if self.exc is not None:
            raise self.exc
        return self.response

    @property
    def called(self) -> bool:
        return bool(self.payloads)


@pytest.fixture
def settings() -> Settings:
    return Settings(gemini_api_key="test-key", gemini_model="gemini-test")


@pytest.fixture
def healthy_upstream() -> FakeUpstream:
    return FakeUpstream(httpx.Response(200, json=gemini_body(json.dumps(SAMPLE_QUIZ))))


@pytest.fixture
def make_upstream() -> Callable[..., FakeUpstream]:
    return FakeUpstream


class RecordingTransport:
    """Stands in for httpx.AsyncClient construction; routes every client through a MockTransport."""

    def __init__(self, response: httpx.Response):
        self.response = response
        self.requests: List[httpx.Request] = []
        self.client_kwargs: List[Dict[str, Any]] = []
        self.clients: List[httpx.AsyncClient] = []
        self._real_client = httpx.AsyncClient

    def _respond(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.response

    def __call__(self, **kwargs: Any) -> httpx.AsyncClient:
        self.client_kwargs.append(kwargs)
        client = self._real_client(transport=httpx.MockTransport(self._respond), **kwargs)
        self.clients.append(client)
        return client


@pytest.fixture
def gemini_transport(monkeypatch: pytest.MonkeyPatch) -> RecordingTransport:
    transport = RecordingTransport(httpx.Response(200, json=gemini_body(json.dumps(SAMPLE_QUIZ))))
    monkeypatch.setattr(httpx, "AsyncClient", transport)
    return transport
