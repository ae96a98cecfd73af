"""
Tests for the HTTP API.
"""

from __future__ import annotations

import io

import httpx
import pytest
from docx import Document
from fastapi.testclient import TestClient
from starlette.datastructures import UploadFile

from summarize_docs_ai.config import ExtractionConfig
from summarize_docs_ai.server import create_app

from tests.conftest import RecordingTransport, chat_completion, echo_handler


@pytest.fixture
def make_client(settings):
    clients = []

    def factory(handler) -> tuple[TestClient, RecordingTransport]:
        transport = handler if isinstance(handler, RecordingTransport) else RecordingTransport(handler)
        client = TestClient(create_app(settings, transport=transport))
        client.__enter__()
        clients.append(client)
        return client, transport

    yield factory

    for client in clients:
        client.__exit__(None, None, None)


@pytest.fixture
def client(make_client, chat_transport):
    test_client, _ = make_client(chat_transport)
    return test_client


def summarize_body(**overrides) -> dict:
    body = {
        "text": "The quick brown fox jumps over the lazy dog. It was fast.",
        "mode": "paragraph",
        "length": 0.5,
        "apiSettings": {"provider": "openai", "apiKey": "sk-test"},
    }
    body.update(overrides)
    return body


class TestHealth:
    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json()["ok"] is True

    def test_providers(self, client):
        ids = [p["id"] for p in client.get("/providers").json()]
        assert {"openai", "mistral", "anthropic"} <= set(ids)


class TestSummarize:
    def test_success(self, client, chat_transport):
        response = client.post("/summarize", json=summarize_body())

        assert response.status_code == 200
        assert response.json() == {"summary": "A short summary."}
        assert len(chat_transport.requests) == 1

    def test_echo_scenario(self, make_client, echo_provider):
        client, _ = make_client(echo_handler)
        body = summarize_body(
            text="The cat sat.",
            mode="bullet",
            length=0.25,
            apiSettings={"provider": echo_provider, "apiKey": "k"},
        )

        summary = client.post("/summarize", json=body).json()["summary"]

        assert "few key points" in summary
        assert "The cat sat." in summary

    def test_quick_action_fills_instructions(self, make_client, echo_provider):
        client, _ = make_client(echo_handler)
        body = summarize_body(
            mode="custom",
            quickAction="title",
            apiSettings={"provider": echo_provider, "apiKey": "k"},
        )

        summary = client.post("/summarize", json=body).json()["summary"]

        assert summary.startswith("Generate an appropriate title for this text.")

    def test_unknown_quick_action(self, client):
        response = client.post("/summarize", json=summarize_body(mode="custom", quickAction="poem"))
        assert response.status_code == 400

    @pytest.mark.parametrize(
        "api_settings",
        [None, {"provider": "openai", "apiKey": ""}, {"provider": "openai"}],
    )
    def test_missing_key(self, client, chat_transport, api_settings):
        body = summarize_body()
        body["apiSettings"] = api_settings

        response = client.post("/summarize", json=body)

        assert response.status_code == 400
        assert response.json() == {"error": "API key is required"}
        assert chat_transport.requests == []

    def test_invalid_mode(self, client):
        response = client.post("/summarize", json=summarize_body(mode="haiku"))
        assert response.status_code == 400
        assert response.json() == {"error": "Invalid mode specified"}

    def test_invalid_provider(self, client):
        body = summarize_body(apiSettings={"provider": "cohere", "apiKey": "k"})
        response = client.post("/summarize", json=body)
        assert response.status_code == 400
        assert response.json() == {"error": "Invalid AI provider selected"}

    def test_empty_text(self, client):
        response = client.post("/summarize", json=summarize_body(text="  "))
        assert response.status_code == 400
        assert response.json() == {"error": "No text provided"}

    def test_upstream_status_propagated(self, make_client):
        client, _ = make_client(
            lambda request: httpx.Response(429, json={"error": {"message": "Rate limit reached"}})
        )

        response = client.post("/summarize", json=summarize_body())

        assert response.status_code == 429
        assert "Rate limit reached" in response.json()["error"]

    def test_malformed_upstream(self, make_client):
        client, _ = make_client(lambda request: httpx.Response(200, json={"choices": []}))

        response = client.post("/summarize", json=summarize_body())

        assert response.status_code == 500
        assert response.json() == {"error": "Invalid response format from AI provider"}

    def test_upstream_redirect_without_location(self, make_client):
        client, _ = make_client(lambda request: httpx.Response(302))

        response = client.post("/summarize", json=summarize_body())

        assert response.status_code == 502
        assert "location" not in response.headers
        assert response.json()["error"].startswith("Failed to get response from openai")

    def test_quick_action_switches_to_custom(self, make_client, echo_provider):
        client, _ = make_client(echo_handler)
        body = summarize_body(
            mode="paragraph",
            quickAction="conclusion",
            apiSettings={"provider": echo_provider, "apiKey": "k"},
        )

        summary = client.post("/summarize", json=body).json()["summary"]

        assert summary.startswith("Generate a concise conclusion for this text.")

    def test_bad_body(self, client):
        response = client.post("/summarize", json=summarize_body(length="long"))
        assert response.status_code == 400
        assert "error" in response.json()


class TestGrammarCheck:
    def test_success(self, make_client):
        client, transport = make_client(
            lambda request: httpx.Response(200, json=chat_completion("No issues found."))
        )

        response = client.post(
            "/grammar-check",
            json={"text": "Their going home.", "apiKey": "k", "provider": "mistral"},
        )

        assert response.status_code == 200
        assert response.json() == {"result": "No issues found."}
        assert transport.last_json["max_tokens"] == 1024
        assert "temperature" not in transport.last_json

    def test_no_text(self, client):
        response = client.post("/grammar-check", json={"text": "", "apiKey": "k", "provider": "openai"})
        assert response.status_code == 400
        assert response.json() == {"error": "No text provided"}

    def test_no_key(self, client):
        response = client.post("/grammar-check", json={"text": "Hi.", "provider": "openai"})
        assert response.status_code == 400
        assert response.json() == {"error": "No API key provided"}

    def test_upstream_failure(self, make_client):
        client, _ = make_client(lambda request: httpx.Response(401, json={"error": "bad key"}))

        response = client.post(
            "/grammar-check", json={"text": "Hi.", "apiKey": "k", "provider": "openai"}
        )

        assert response.status_code == 500
        assert response.json() == {"error": "Failed to check grammar"}


class TestExtractText:
    def test_txt(self, client):
        response = client.post("/extract-text", files={"file": ("a.txt", b"hello", "text/plain")})
        assert response.status_code == 200
        assert response.json() == {"text": "hello"}

    def test_docx(self, client):
        doc = Document()
        doc.add_paragraph("Uploaded paragraph.")
        buffer = io.BytesIO()
        doc.save(buffer)

        response = client.post(
            "/extract-text",
            files={
                "file": (
                    "report.docx",
                    buffer.getvalue(),
                    "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
                )
            },
        )

        assert response.status_code == 200
        assert "Uploaded paragraph." in response.json()["text"]

    def test_no_file(self, client):
        response = client.post("/extract-text", data={"note": "nothing attached"})
        assert response.status_code == 400
        assert response.json() == {"error": "No file provided"}

    def test_unsupported_type(self, client):
        response = client.post(
            "/extract-text", files={"file": ("x.xyz", b"data", "application/octet-stream")}
        )
        assert response.status_code == 500
        assert response.json() == {"error": "Unsupported file type: x.xyz"}

    def test_corrupt_pdf(self, client):
        response = client.post(
            "/extract-text", files={"file": ("bad.pdf", b"not a pdf", "application/pdf")}
        )
        assert response.status_code == 500
        assert response.json()["error"].startswith("Failed to parse PDF file")

    def test_empty_document(self, client):
        response = client.post("/extract-text", files={"file": ("blank.txt", b"   ", "text/plain")})
        assert response.status_code == 500
        assert response.json() == {"error": "No text could be extracted from the document"}

    def test_oversized_upload_rejected_before_read(
        self, settings, make_client, chat_transport, monkeypatch
    ):
        async def fail_read(self, size=-1):
            raise AssertionError("upload body should not be read")

        settings.extraction = ExtractionConfig(max_upload_mb=1)
        client, _ = make_client(chat_transport)
        monkeypatch.setattr(UploadFile, "read", fail_read)

        response = client.post(
            "/extract-text", files={"file": ("a.txt", b"x" * (1024 * 1024 + 1), "text/plain")}
        )

        assert response.status_code == 413
        assert response.json() == {
            "error": "File 'a.txt' size (1048577 bytes) exceeds maximum (1048576 bytes)"
        }
