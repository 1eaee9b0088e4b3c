import json

import httpx
import pytest
from fastapi.testclient import TestClient

from ytthumbs.config import Settings
from ytthumbs.main import create_app


class FakeYouTube:
    """Stands in for the search.list endpoint and records every request."""

    def __init__(self):
        self.requests = []
        self.status_code = 200
        self.body = json.dumps({"items": []})
        self.error = None

    def reply(self, status_code=200, payload=None, body=None):
        self.status_code = status_code
        self.body = body if body is not None else json.dumps(payload)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        return httpx.Response(self.status_code, text=self.body)


@pytest.fixture
def settings():
    return Settings(api_key="test-key")


@pytest.fixture
def youtube():
    return FakeYouTube()


@pytest.fixture
def client(settings, youtube):
    app = create_app(settings, transport=httpx.MockTransport(youtube.handler))
    with TestClient(app) as c:
        yield c
