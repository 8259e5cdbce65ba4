"""Pytest configuration and shared fixtures."""
import json
import os

import httpx
import pytest

from tabbytui.core.client import ServerClient

BASE_URL = "http://tabby.test"


@pytest.fixture(scope="session")
def server_url():
    """Base URL of a real server for integration tests, if configured."""
    return os.getenv("TABBY_TEST_URL")


@pytest.fixture
def health_payload():
    """Return a complete /v1/health response body."""
    return {
        "model": "TabbyML/StarCoder-1B",
        "chat_model": "TabbyML/Mistral-7B",
        "device": "cuda",
        "arch": "x86_64",
        "cpu_info": "AMD Ryzen 9 7950X",
        "cpu_count": 32,
        "cuda_devices": ["NVIDIA GeForce RTX 4090"],
        "version": {
            "build_date": "2024-01-20",
            "build_timestamp": "2024-01-20T10:00:00Z",
            "git_sha": "4a7ef2c",
            "git_describe": "v0.8.0",
        },
    }


def ndjson(*contents: str) -> bytes:
    """Encode contents as a newline-delimited JSON completion body."""
    return b"".join(
        json.dumps({"content": c}).encode("utf-8") + b"\n" for c in contents
    )


def stream_response(*frames: bytes, error: Exception | None = None) -> httpx.Response:
    """A 200 response whose body arrives as the given frames.

    If ``error`` is set it is raised after the last frame, as a dropped
    connection would be.
    """
    async def body():
        for frame in frames:
            yield frame
        if error is not None:
            raise error

    return httpx.Response(200, content=body())


def make_client(handler) -> ServerClient:
    """ServerClient whose requests are answered by ``handler``."""
    return ServerClient(BASE_URL, timeout=5.0, transport=httpx.MockTransport(handler))


class Router:
    """Mock server routing by path, recording every request it sees."""

    def __init__(self, health=None, chat=None):
        self.health = health
        self.chat = chat
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.url.path == "/v1/health" and self.health is not None:
            return self.health(request)
        if request.url.path == "/v1beta/chat/completions" and self.chat is not None:
            return self.chat(request)
        return httpx.Response(404, json={"error": "not found"})

    def chat_bodies(self) -> list[dict]:
        return [
            json.loads(r.content)
            for r in self.requests
            if r.url.path == "/v1beta/chat/completions"
        ]
