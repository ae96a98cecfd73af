"""
PyMuPDF-based text extraction for PDFs.
"""

from __future__ import annotations

import asyncio

import fitz  # PyMuPDF

from summarize_docs_ai.errors import ExtractionFailed
from summarize_docs_ai.extract.base import DocumentExtractor, ExtractionResult


class PdfExtractor(DocumentExtractor):
    """
    Extract the embedded text layer of a PDF using PyMuPDF.

    Scanned PDFs without a text layer come back empty; the dispatcher turns
    that into EmptyExtraction.
    """

    SUPPORTED_EXTENSIONS = frozenset({".pdf"})
    MIME_TYPES = frozenset({"application/pdf"})

    @property
    def name(self) -> str:
        return "pymupdf"

    async def extract(self, data: bytes, filename: str) -> ExtractionResult:
        return await asyncio.to_thread(self._extract_sync, data, filename)

    def _extract_sync(self, data: bytes, filename: str) -> ExtractionResult:
        try:
            with fitz.open(stream=data, filetype="pdf") as doc:
                pages = [page.get_text("text") for page in doc]
                metadata = {
                    "title": (doc.metadata or {}).get("title", "") or "",
                    "author": (doc.metadata or {}).get("author", "") or "",
                }
        except Exception as e:
            raise ExtractionFailed(filename, f"Failed to parse PDF file: {e}") from e

        if not pages:
            raise ExtractionFailed(filename, "Failed to parse PDF file: document has no pages")

        return ExtractionResult(
            text="\n".join(pages),
            extractor=self.name,
            pages=len(pages),
            metadata=metadata,
        )
