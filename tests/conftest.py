"""Shared fixtures: a config, a fake GitHub token endpoint and a test client."""

import json

import httpx
import pytest
from fastapi.testclient import TestClient

from config import Config
from server import create_app

CLIENT_ID = "test-client-id"
CLIENT_SECRET = "test-client-secret"
SITE_ORIGIN = "https://editor.example.com"


class FakeGitHub:
    """Records token requests and answers with a canned response."""

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self.payload = {"access_token": "T", "token_type": "bearer"}
        self.status_code = 200
        self.error: Exception = None

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        if isinstance(self.payload, (dict, list)):
            return httpx.Response(self.status_code, json=self.payload)
        return httpx.Response(self.status_code, text=self.payload)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    def last_body(self) -> dict:
        return json.loads(self.requests[-1].content)


def make_config(**overrides) -> Config:
    data = {
        "GITHUB_CLIENT_ID": CLIENT_ID,
        "GITHUB_CLIENT_SECRET": CLIENT_SECRET,
        "ALLOWED_ORIGINS": SITE_ORIGIN,
    }
    data.update(overrides)
    return Config(data)


@pytest.fixture
def fake_github():
    return FakeGitHub()


@pytest.fixture
def config():
    return make_config()


@pytest.fixture
def client(config, fake_github):
    app = create_app(config, transport=fake_github.transport)
    with TestClient(app) as test_client:
        yield test_client
