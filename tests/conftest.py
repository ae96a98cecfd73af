"""
Shared fixtures for summarize-docs-ai tests.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import httpx
import pytest

from summarize_docs_ai.config import HistoryConfig, Settings
from summarize_docs_ai.llm import ProviderAdapter, UpstreamRequest, register_adapter, unregister_adapter


@pytest.fixture(autouse=True)
def clear_api_key_env(monkeypatch):
    """Keep developer API keys out of the tests."""
    for name in ("SUMMARIZE_API_KEY", "OPENAI_API_KEY", "MISTRAL_API_KEY", "ANTHROPIC_API_KEY"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def temp_dir(tmp_path) -> Path:
    return tmp_path


@pytest.fixture
def settings(temp_dir) -> Settings:
    """Settings with history files under the test's temp directory."""
    return Settings(
        history=HistoryConfig(
            path=temp_dir / "history.json",
            api_settings_path=temp_dir / "api_settings.json",
        )
    )


def chat_completion(content: str) -> dict:
    return {"choices": [{"index": 0, "message": {"role": "assistant", "content": content}}]}


def anthropic_message(text: str) -> dict:
    return {"content": [{"type": "text", "text": text}]}


class RecordingTransport(httpx.MockTransport):
    """MockTransport that keeps every request it served."""

    def __init__(self, handler):
        self.requests: list[httpx.Request] = []

        def record(request: httpx.Request):
            self.requests.append(request)
            return handler(request)

        super().__init__(record)

    @property
    def last_json(self) -> dict:
        return json.loads(self.requests[-1].content)


@pytest.fixture
def chat_transport() -> RecordingTransport:
    """Answers every call with an OpenAI-style completion."""
    return RecordingTransport(lambda request: httpx.Response(200, json=chat_completion("A short summary.")))


class EchoAdapter(ProviderAdapter):
    """Sends the prompt upstream and reads it straight back."""

    DEFAULT_URL = "https://echo.invalid/v1/echo"
    DEFAULT_MODEL = "echo-1"

    @property
    def name(self) -> str:
        return "echo"

    def build_request(self, prompt, *, system, max_tokens, temperature=None) -> UpstreamRequest:
        return UpstreamRequest(url=self.endpoint, headers={}, json={"prompt": prompt})

    def extract_result(self, body: Any) -> str:
        return body["echo"]


def echo_handler(request: httpx.Request) -> httpx.Response:
    return httpx.Response(200, json={"echo": json.loads(request.content)["prompt"]})


@pytest.fixture
def echo_provider():
    """Registers the echo adapter for the duration of a test."""
    register_adapter("echo", EchoAdapter)
    yield "echo"
    unregister_adapter("echo")
