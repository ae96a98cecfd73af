"""
Direct text extraction for Word documents.

Uses python-docx, so only the Office Open XML format is readable. Legacy
binary .doc uploads are accepted by name but fail with ExtractionFailed.
"""

from __future__ import annotations

import asyncio
import io

from docx import Document
from docx.document import Document as DocumentObject
from docx.opc.exceptions import PackageNotFoundError
from docx.table import Table

from summarize_docs_ai.errors import ExtractionFailed
from summarize_docs_ai.extract.base import DocumentExtractor, ExtractionResult

INVALID_DOCX_MESSAGE = "Failed to parse Word document. Please ensure it is a valid .docx file."


class DocxExtractor(DocumentExtractor):
    """
    Extract raw text from DOCX files using python-docx.

    Paragraphs and tables are emitted in document order, paragraphs separated
    by blank lines and table cells by tabs.
    """

    SUPPORTED_EXTENSIONS = frozenset({".docx", ".doc"})
    MIME_TYPES = frozenset(
        {
            "application/msword",
            "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
        }
    )

    @property
    def name(self) -> str:
        return "docx_direct"

    async def extract(self, data: bytes, filename: str) -> ExtractionResult:
        return await asyncio.to_thread(self._extract_sync, data, filename)

    def _extract_sync(self, data: bytes, filename: str) -> ExtractionResult:
        try:
            doc = Document(io.BytesIO(data))
            text = self._extract_raw_text(doc)
        except PackageNotFoundError as e:
            raise ExtractionFailed(filename, INVALID_DOCX_MESSAGE) from e
        except Exception as e:
            raise ExtractionFailed(filename, f"{INVALID_DOCX_MESSAGE} ({e})") from e

        core_props = doc.core_properties
        return ExtractionResult(
            text=text,
            extractor=self.name,
            metadata={
                "title": core_props.title or "",
                "author": core_props.author or "",
                "paragraph_count": len(doc.paragraphs),
                "table_count": len(doc.tables),
            },
        )

    def _table_to_text(self, table: Table) -> str:
        rows = []
        for row in table.rows:
            cells = [cell.text.strip().replace("\n", " ") for cell in row.cells]
            rows.append("\t".join(cells))
        return "\n".join(rows)

    def _extract_raw_text(self, doc: DocumentObject) -> str:
        paragraphs = {para._element: para for para in doc.paragraphs}
        tables = {table._element: table for table in doc.tables}

        parts: list[str] = []
        for element in doc.element.body.iterchildren():
            if element in paragraphs:
                text = paragraphs[element].text.strip()
                if text:
                    parts.append(text)
            elif element in tables:
                table_text = self._table_to_text(tables[element])
                if table_text.strip():
                    parts.append(table_text)

        return "\n\n".join(parts)
