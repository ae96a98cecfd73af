"""
Anthropic Messages API adapter.

Auth goes in ``x-api-key`` plus an ``anthropic-version`` header, the system
instruction is a top-level field, and the text comes back at
``content[0].text``.
"""

from __future__ import annotations

from typing import Any

from summarize_docs_ai.llm.base import ProviderAdapter, UpstreamRequest


class AnthropicAdapter(ProviderAdapter):
    """Anthropic messages endpoint."""

    DEFAULT_URL = "https://api.anthropic.com/v1/messages"
    DEFAULT_MODEL = "claude-3-5-haiku-latest"
    DEFAULT_API_VERSION = "2023-06-01"

    @property
    def name(self) -> str:
        return "anthropic"

    def build_request(
        self,
        prompt: str,
        *,
        system: str,
        max_tokens: int,
        temperature: float | None = None,
    ) -> UpstreamRequest:
        body: dict[str, Any] = {
            "model": self.model,
            "max_tokens": max_tokens,
            "system": system,
            "messages": [{"role": "user", "content": prompt}],
        }
        if temperature is not None:
            body["temperature"] = temperature

        return UpstreamRequest(
            url=self.endpoint,
            headers={
                "Content-Type": "application/json",
                "x-api-key": self._api_key,
                "anthropic-version": self._api_version or self.DEFAULT_API_VERSION,
            },
            json=body,
        )

    def extract_result(self, body: Any) -> str:
        if not isinstance(body, dict):
            raise self.malformed("response body is not a JSON object")

        content = body.get("content")
        if not isinstance(content, list) or not content:
            raise self.malformed("empty or missing 'content' list")

        first = content[0]
        text = first.get("text") if isinstance(first, dict) else None
        if not isinstance(text, str) or not text.strip():
            raise self.malformed("missing 'content[0].text'")

        return text.strip()
