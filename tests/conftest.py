import json
from typing import Any, Callable, Dict, List

import httpx
import pytest
from fastapi.testclient import TestClient

from grocery_compare.app.main import app, get_comparison_service
from grocery_compare.app.settings import Settings
from grocery_compare.services.comparison import ComparisonService

COMPARISON = {
    "comparison_summary": "s",
    "reasoning": "r",
    "items": [],
    "unit_comparisons": [],
}


def gemini_body(text: str) -> Dict[str, Any]:
    return {"candidates": [{"content": {"parts": [{"text": text}], "role": "model"}}]}


class FakeGemini:
    """Records outbound requests and answers with a canned response."""

    def __init__(self, handler: Callable[[httpx.Request], httpx.Response] | None = None):
        self.requests: List[httpx.Request] = []
        self.handler = handler or (lambda request: httpx.Response(200, json=gemini_body(json.dumps(COMPARISON))))

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.handler(request)

    @property
    def payloads(self) -> List[Dict[str, Any]]:
        return [json.loads(r.content) for r in self.requests]

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)


@pytest.fixture
def test_settings() -> Settings:
    return Settings(
        _env_file=None,
        gemini_api_key="test-key",
        gemini_model="gemini-test",
        gemini_api_base="https://gemini.test/v1beta",
    )


@pytest.fixture
def fake_gemini() -> FakeGemini:
    return FakeGemini()


@pytest.fixture
def client(test_settings, fake_gemini):
    app.dependency_overrides[get_comparison_service] = lambda: ComparisonService(
        test_settings, transport=fake_gemini.transport()
    )
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
