"""
Document text extraction for uploads.

Provides one extractor per supported format:
- PlainTextExtractor for .txt (UTF-8 decode, no parsing)
- PdfExtractor for .pdf (PyMuPDF)
- DocxExtractor for .doc/.docx (python-docx)
"""

from __future__ import annotations

import logging
from pathlib import PurePath

from summarize_docs_ai.errors import EmptyExtraction, FileTooLarge, UnsupportedFileType
from summarize_docs_ai.extract.base import DocumentExtractor, ExtractionResult
from summarize_docs_ai.extract.docx import DocxExtractor
from summarize_docs_ai.extract.pdf import PdfExtractor
from summarize_docs_ai.extract.text import PlainTextExtractor

logger = logging.getLogger(__name__)

EXTRACTORS: tuple[DocumentExtractor, ...] = (
    PlainTextExtractor(),
    PdfExtractor(),
    DocxExtractor(),
)


def select_extractor(filename: str, mime_type: str | None = None) -> DocumentExtractor:
    """
    Pick the extractor for an upload.

    The file-name suffix decides. The declared MIME type is only consulted
    when the name has no suffix at all.

    Raises:
        UnsupportedFileType: If no extractor handles the file.
    """
    has_suffix = "." in PurePath(filename or "").name
    for extractor in EXTRACTORS:
        if has_suffix and extractor.can_handle(filename):
            return extractor
        if not has_suffix and extractor.can_handle_mime(mime_type):
            return extractor
    raise UnsupportedFileType(filename or "<unnamed>")


async def extract_text(
    data: bytes,
    filename: str,
    mime_type: str | None = None,
    *,
    max_bytes: int | None = None,
) -> ExtractionResult:
    """
    Extract plain text from an uploaded document.

    Args:
        data: Raw file bytes.
        filename: Declared file name.
        mime_type: Declared MIME type.
        max_bytes: Optional upload size limit.

    Returns:
        ExtractionResult with non-blank text.

    Raises:
        FileTooLarge: If data exceeds max_bytes.
        UnsupportedFileType: If the suffix is not .txt, .pdf, .doc or .docx.
        ExtractionFailed: If the parsing library fails.
        EmptyExtraction: If the document yields only whitespace.
    """
    if max_bytes is not None and len(data) > max_bytes:
        raise FileTooLarge(filename, len(data), max_bytes)

    extractor = select_extractor(filename, mime_type)
    logger.debug(
        "Extracting %s (%s, %d bytes) with %s", filename, mime_type, len(data), extractor.name
    )

    result = await extractor.extract(data, filename)
    if result.is_empty:
        raise EmptyExtraction(filename)

    logger.info("Extracted %d words from %s", result.word_count, filename)
    return result


__all__ = [
    "DocumentExtractor",
    "ExtractionResult",
    "PlainTextExtractor",
    "PdfExtractor",
    "DocxExtractor",
    "EXTRACTORS",
    "select_extractor",
    "extract_text",
]
