"""Shared test fixtures for SDK tests."""

import json

import httpx
import pytest

from freeplay_lite.api import FreeplayAPI
from freeplay_lite.client import HTTPClient
from freeplay_lite.config import Configuration


class RecordingService:
    """Fake Freeplay service that records requests and replies with a canned response."""

    def __init__(self, status_code=200, body=None):
        self.status_code = status_code
        self.body = {} if body is None else body
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return httpx.Response(self.status_code, json=self.body)

    @property
    def last_request(self) -> httpx.Request:
        return self.requests[-1]

    @property
    def last_payload(self) -> dict:
        return json.loads(self.last_request.content)


@pytest.fixture
def config():
    return Configuration(
        api_key="test-key",
        project_id="proj-123",
        api_url="https://freeplay.test/api/v2",
    )


@pytest.fixture
def service():
    return RecordingService(status_code=201, body={"id": "ok"})


@pytest.fixture
def api(config, service):
    """API wired to the fake service."""
    http_client = HTTPClient(config.api_key, transport=httpx.MockTransport(service))
    return FreeplayAPI(config, http_client)


@pytest.fixture
def template_body():
    """A fetch response body as sent by the service."""
    return {
        "prompt_template_id": "tmpl-1",
        "prompt_template_version_id": "ver-1",
        "prompt_template_name": "greeting",
        "format_version": 2,
        "metadata": {
            "model": "claude-sonnet-4.5",
            "provider": "anthropic",
            "flavor": "anthropic_chat",
            "params": {"temperature": 0.2, "max_tokens": 512},
        },
        "content": [
            {"role": "system", "content": "Reply in {{language}}."},
            {"kind": "history"},
            {
                "role": "user",
                "content": "Say hello to {{ name }}.",
                "media_slots": [{"type": "image", "placeholder_name": "avatar"}],
            },
        ],
        "tool_schema": [{"name": "lookup", "description": "Look up a user", "parameters": {}}],
        "output_schema": None,
    }
