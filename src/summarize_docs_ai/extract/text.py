"""
Direct text extraction for plain text files.

No parsing needed - the bytes are decoded as UTF-8.
"""

from __future__ import annotations

from summarize_docs_ai.extract.base import DocumentExtractor, ExtractionResult


class PlainTextExtractor(DocumentExtractor):
    """
    Extract text from .txt uploads.

    Decoding is verbatim: no stripping or newline normalization. Invalid
    byte sequences become U+FFFD rather than failing the upload.
    """

    SUPPORTED_EXTENSIONS = frozenset({".txt"})
    MIME_TYPES = frozenset({"text/plain"})

    @property
    def name(self) -> str:
        return "text_direct"

    async def extract(self, data: bytes, filename: str) -> ExtractionResult:
        text = data.decode("utf-8", errors="replace")
        return ExtractionResult(
            text=text,
            extractor=self.name,
            metadata={"file_size": len(data)},
        )
