"""
Base classes for provider adapters.

An adapter is a fixed, pure mapping between a normalized prompt and one
vendor's wire format. It never performs I/O itself: the router sends the
UpstreamRequest an adapter builds and hands the decoded body back to the
adapter for result extraction.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any

from summarize_docs_ai.errors import MalformedUpstreamResponse


@dataclass
class UpstreamRequest:
    """Vendor-specific HTTP request produced by an adapter."""

    url: str
    headers: dict[str, str]
    json: dict[str, Any]
    method: str = "POST"


class ProviderAdapter(ABC):
    """
    Abstract base class for provider adapters.

    Subclasses declare their default endpoint and model and implement the
    {build_request, extract_result} pair.
    """

    DEFAULT_URL: str = ""
    DEFAULT_MODEL: str = ""

    def __init__(
        self,
        api_key: str,
        *,
        model: str | None = None,
        base_url: str | None = None,
        temperature: float | None = None,
        api_version: str | None = None,
    ):
        """
        Initialize the adapter.

        Args:
            api_key: Caller-supplied API key. Only placed in request headers.
            model: Model name. Falls back to DEFAULT_MODEL.
            base_url: Full endpoint URL. Falls back to DEFAULT_URL.
            temperature: Sampling temperature for summaries, omitted if None.
            api_version: Vendor API version header value, where applicable.
        """
        self._api_key = api_key
        self._model = model or self.DEFAULT_MODEL
        self._endpoint = base_url or self.DEFAULT_URL
        self._temperature = temperature
        self._api_version = api_version

    @property
    @abstractmethod
    def name(self) -> str:
        """Provider id used for registration, logging and error messages."""
        ...

    @property
    def model(self) -> str:
        return self._model

    @property
    def endpoint(self) -> str:
        return self._endpoint

    @property
    def temperature(self) -> float | None:
        return self._temperature

    @abstractmethod
    def build_request(
        self,
        prompt: str,
        *,
        system: str,
        max_tokens: int,
        temperature: float | None = None,
    ) -> UpstreamRequest:
        """
        Build the vendor HTTP request for a normalized prompt.

        Args:
            prompt: Normalized prompt (user message).
            system: System instruction.
            max_tokens: Output token budget.
            temperature: Sampling temperature, omitted from the body if None.

        Returns:
            UpstreamRequest ready to be sent.
        """
        ...

    @abstractmethod
    def extract_result(self, body: Any) -> str:
        """
        Pull the result text out of a successful response body.

        Raises:
            MalformedUpstreamResponse: If the expected fields are missing or empty.
        """
        ...

    def extract_error(self, body: Any) -> str | None:
        """Best-effort provider error message from a failed response body."""
        if isinstance(body, dict):
            error = body.get("error")
            if isinstance(error, dict) and isinstance(error.get("message"), str):
                return error["message"]
            if isinstance(error, str):
                return error
            for key in ("message", "detail"):
                if isinstance(body.get(key), str):
                    return body[key]
        if isinstance(body, str) and body.strip():
            return body.strip()[:500]
        return None

    def malformed(self, reason: str) -> MalformedUpstreamResponse:
        return MalformedUpstreamResponse(self.name, reason)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(model={self._model!r}, endpoint={self._endpoint!r})"
