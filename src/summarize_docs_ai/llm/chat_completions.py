"""
OpenAI-style chat completions adapters (OpenAI and Mistral).

Both vendors use bearer auth, a message list that starts with a system
role, and return the text at ``choices[0].message.content``.
"""

from __future__ import annotations

from typing import Any

from summarize_docs_ai.llm.base import ProviderAdapter, UpstreamRequest


class ChatCompletionsAdapter(ProviderAdapter):
    """Shared wire mapping for OpenAI-compatible chat completion endpoints."""

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
            "messages": [
                {"role": "system", "content": system},
                {"role": "user", "content": prompt},
            ],
            "max_tokens": max_tokens,
        }
        if temperature is not None:
            body["temperature"] = temperature

        return UpstreamRequest(
            url=self.endpoint,
            headers={
                "Content-Type": "application/json",
                "Authorization": f"Bearer {self._api_key}",
            },
            json=body,
        )

    def extract_result(self, body: Any) -> str:
        if not isinstance(body, dict):
            raise self.malformed("response body is not a JSON object")

        choices = body.get("choices")
        if not isinstance(choices, list) or not choices:
            raise self.malformed("empty or missing 'choices' list")

        first = choices[0]
        message = first.get("message") if isinstance(first, dict) else None
        if not isinstance(message, dict):
            raise self.malformed("missing 'choices[0].message'")

        content = message.get("content")
        if not isinstance(content, str) or not content.strip():
            raise self.malformed("missing 'choices[0].message.content'")

        return content.strip()


class OpenAIAdapter(ChatCompletionsAdapter):
    """OpenAI chat completions."""

    DEFAULT_URL = "https://api.openai.com/v1/chat/completions"
    DEFAULT_MODEL = "gpt-4o-mini"

    @property
    def name(self) -> str:
        return "openai"


class MistralAdapter(ChatCompletionsAdapter):
    """Mistral chat completions."""

    DEFAULT_URL = "https://api.mistral.ai/v1/chat/completions"
    DEFAULT_MODEL = "mistral-small-latest"

    @property
    def name(self) -> str:
        return "mistral"
