"""
Base classes and interfaces for document text extractors.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import PurePath
from typing import Any


@dataclass
class ExtractionResult:
    """Plain text pulled out of an uploaded document."""

    text: str
    extractor: str
    pages: int = 1
    metadata: dict[str, Any] = field(default_factory=dict)

    @property
    def is_empty(self) -> bool:
        """Check if text is empty or whitespace only."""
        return not self.text or not self.text.strip()

    @property
    def word_count(self) -> int:
        return len(self.text.split()) if self.text else 0


class DocumentExtractor(ABC):
    """Abstract base class for per-format extractors."""

    SUPPORTED_EXTENSIONS: frozenset[str] = frozenset()
    MIME_TYPES: frozenset[str] = frozenset()

    @property
    @abstractmethod
    def name(self) -> str:
        """Extractor name."""
        ...

    def can_handle(self, filename: str) -> bool:
        """Check if this extractor can handle the given file name."""
        name = PurePath(filename).name.lower()
        return any(name.endswith(ext) for ext in self.SUPPORTED_EXTENSIONS)

    def can_handle_mime(self, mime_type: str | None) -> bool:
        if not mime_type:
            return False
        return mime_type.split(";")[0].strip().lower() in self.MIME_TYPES

    @abstractmethod
    async def extract(self, data: bytes, filename: str) -> ExtractionResult:
        """
        Extract plain text from raw file bytes.

        Args:
            data: File contents.
            filename: Declared file name, used in error messages.

        Returns:
            ExtractionResult with the document text.

        Raises:
            ExtractionFailed: If the underlying library cannot read the document.
        """
        ...
