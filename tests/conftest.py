"""
Shared fixtures for the CRO Audit Relay test suite.

Gemini is never contacted: requests.post is replaced with a recorder that
returns canned generateContent responses.
"""

import json

import pytest
from fastapi.testclient import TestClient

from config import Settings, get_settings
from main import app

# Plain landing page: no sticky hints, no CTA words, no trust words, long hero
PLAIN_HTML = (
    "<html><body><h1>Welcome to our wonderful little corner of the internet today</h1>"
    "<p>We make handmade ceramics in small batches.</p></body></html>"
)


class FakeResponse:
    def __init__(self, status_code=200, payload=None, text=""):
        self.status_code = status_code
        self._payload = payload
        self.text = text or (json.dumps(payload) if payload is not None else "")

    @property
    def ok(self):
        return 200 <= self.status_code < 300

    def json(self):
        if self._payload is None:
            raise ValueError("No JSON object could be decoded")
        return self._payload


def gemini_payload(text: str) -> dict:
    """Wrap model text the way generateContent returns it."""
    return {"candidates": [{"content": {"role": "model", "parts": [{"text": text}]}}]}


def make_findings(count: int) -> list:
    return [
        {
            "title": f"Model finding {i}",
            "category": "CTA",
            "impact": "high",
            "effort": "low",
            "confidence": 0.9,
            "selector_hint": ".btn-primary",
            "recommendation_html": "",
            "example_snippet": "Say what happens after the click.",
            "how_to_test": "A/B; track CTR.",
        }
        for i in range(1, count + 1)
    ]


@pytest.fixture
def gemini(monkeypatch):
    """
    Replace requests.post. Set `gemini.response` to a FakeResponse or an
    exception instance; every call is recorded in `gemini.calls`.
    """

    class Recorder:
        def __init__(self):
            self.calls = []
            self.response = FakeResponse(200, gemini_payload('{"score": 0, "findings": []}'))

        def __call__(self, url, **kwargs):
            self.calls.append({"url": url, **kwargs})
            if isinstance(self.response, Exception):
                raise self.response
            return self.response

        def reply(self, text: str):
            self.response = FakeResponse(200, gemini_payload(text))

    recorder = Recorder()
    monkeypatch.setattr("utils.gemini_client.requests.post", recorder)
    return recorder


@pytest.fixture
def settings():
    return Settings(GEMINI_API_KEY="", GEMINI_MODEL="gemini-2.5-flash")


@pytest.fixture
def llm_settings():
    return Settings(GEMINI_API_KEY="test-key", GEMINI_MODEL="gemini-2.5-flash")


def _client_for(settings):
    app.dependency_overrides[get_settings] = lambda: settings
    return TestClient(app)


@pytest.fixture
def client(settings):
    with _client_for(settings) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def llm_client(llm_settings):
    with _client_for(llm_settings) as test_client:
        yield test_client
    app.dependency_overrides.clear()
