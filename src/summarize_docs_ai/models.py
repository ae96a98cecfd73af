"""
Request-scoped data types shared by the normalizer, router and HTTP layer.

All of these are constructed per call and discarded after the upstream
round trip; nothing here is persisted.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from summarize_docs_ai.errors import (
    InvalidLengthFactor,
    InvalidMode,
    MissingCredentials,
    MissingText,
    UnsupportedProvider,
)


class Mode(str, Enum):
    """Summarization style selected by the user."""

    PARAGRAPH = "paragraph"
    BULLET = "bullet"
    CUSTOM = "custom"
    GRAMMAR = "grammar"

    @classmethod
    def parse(cls, value: Mode | str | None) -> Mode:
        """Return the matching member or raise InvalidMode."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                pass
        raise InvalidMode(value)


class ProviderType(str, Enum):
    """Supported upstream LLM vendors."""

    OPENAI = "openai"
    MISTRAL = "mistral"
    ANTHROPIC = "anthropic"

    @classmethod
    def parse(cls, value: ProviderType | str | None) -> ProviderType:
        """Return the matching member or raise UnsupportedProvider."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(normalize_provider_id(value))
            except ValueError:
                pass
        raise UnsupportedProvider(value)


def normalize_provider_id(value: str) -> str:
    """Lower-case, trim and turn underscores into dashes."""
    return value.strip().lower().replace("_", "-")


@dataclass
class SummarizationRequest:
    """A user-facing summarization or grammar-check request."""

    text: str
    mode: Mode | str = Mode.PARAGRAPH
    length_factor: float = 0.5
    custom_instructions: str | None = None

    def validate(self) -> None:
        """
        Check the request invariants.

        Raises:
            MissingText: If text is empty or whitespace only.
            InvalidMode: If mode is not recognized.
            InvalidLengthFactor: If length_factor is outside (0, 1].
        """
        if not self.text or not self.text.strip():
            raise MissingText()
        mode = Mode.parse(self.mode)
        if mode is not Mode.GRAMMAR:
            factor = self.length_factor
            if isinstance(factor, bool) or not isinstance(factor, (int, float)):
                raise InvalidLengthFactor(factor)
            if not 0 < factor <= 1:
                raise InvalidLengthFactor(factor)

    @property
    def resolved_mode(self) -> Mode:
        return Mode.parse(self.mode)


@dataclass
class ProviderCredentials:
    """Provider selection plus the caller's API key. Never persisted by the core."""

    provider: ProviderType | str
    api_key: str

    def validate(self) -> None:
        if not self.api_key or not self.api_key.strip():
            raise MissingCredentials()

    def __repr__(self) -> str:
        provider = getattr(self.provider, "value", self.provider)
        return f"ProviderCredentials(provider={provider!r}, api_key={mask_secret(self.api_key)!r})"


@dataclass
class ProviderResult:
    """Normalized successful result of one upstream call."""

    text: str
    provider: str
    model: str = ""
    max_tokens: int = 0
    latency_ms: float = 0.0
    metadata: dict[str, Any] = field(default_factory=dict)


_SENTENCE_SPLIT = re.compile(r"[.!?]+")


@dataclass(frozen=True)
class TextStats:
    """Word and sentence counts displayed next to the input pane."""

    words: int
    sentences: int

    @classmethod
    def of(cls, text: str | None) -> TextStats:
        stripped = (text or "").strip()
        if not stripped:
            return cls(words=0, sentences=0)
        words = len(stripped.split())
        sentences = len([s for s in _SENTENCE_SPLIT.split(stripped) if s])
        return cls(words=words, sentences=sentences)


def mask_secret(secret: str | None, visible: int = 4) -> str:
    """Mask a secret for logging, keeping only the last few characters."""
    if not secret:
        return ""
    if len(secret) <= visible * 2:
        return "***"
    return f"***{secret[-visible:]}"
