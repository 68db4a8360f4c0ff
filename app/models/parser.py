"""
Document Parser Module.

Extraction adapter that turns raw DOCX and PDF bytes into plain text.
DOCX files go through python-docx, PDF files through pdfminer.six. Every
library failure is converted into an `ExtractionFailure` value here, so
nothing untyped leaks out to the routers.
"""

import asyncio
import io
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, List, Optional, Union

from docx import Document
from docx.table import Table
from pdfminer.high_level import extract_text as pdf_extract_text

from config import SUPPORTED_TYPES

logger = logging.getLogger(__name__)


class DocumentKind(Enum):
    DOCX = ".docx"
    PDF = ".pdf"

    @property
    def label(self) -> str:
        return self.name

    @classmethod
    def from_filename(cls, filename: str) -> Optional["DocumentKind"]:
        """Resolve the kind from the case-insensitive filename suffix."""
        lowered = (filename or "").lower()
        for kind in cls:
            if lowered.endswith(kind.value):
                return kind
        return None


class ExtractionErrorKind(str, Enum):
    DOCX_FAILURE = "DocxFailure"
    PDF_FAILURE = "PdfFailure"
    UNSUPPORTED_TYPE = "UnsupportedType"


@dataclass(frozen=True)
class ExtractionSuccess:
    text: str
    kind: DocumentKind


@dataclass(frozen=True)
class ExtractionFailure:
    kind: ExtractionErrorKind
    message: str = ""
    supported_types: List[str] = field(default_factory=list)


ExtractionOutcome = Union[ExtractionSuccess, ExtractionFailure]


def _block_lines(container) -> Iterator[str]:
    """Paragraph texts of a document or table cell, tables inlined in order."""
    for block in container.iter_inner_content():
        if isinstance(block, Table):
            yield from _table_lines(block)
        else:
            yield block.text


def _table_lines(table: Table) -> Iterator[str]:
    # A merged cell is returned once per grid column or row it spans.
    seen = set()
    for row in table.rows:
        for cell in row.cells:
            if cell._tc in seen:
                continue
            seen.add(cell._tc)
            yield from _block_lines(cell)


def _read_docx(buffer: bytes) -> str:
    return "\n".join(_block_lines(Document(io.BytesIO(buffer))))


def _read_pdf(buffer: bytes) -> str:
    return pdf_extract_text(io.BytesIO(buffer))


_READERS = {
    DocumentKind.DOCX: (_read_docx, ExtractionErrorKind.DOCX_FAILURE),
    DocumentKind.PDF: (_read_pdf, ExtractionErrorKind.PDF_FAILURE),
}


def extract(buffer: bytes, filename: str) -> ExtractionOutcome:
    """
    Extract plain text from an in-memory document.

    Args:
        buffer (bytes): Raw file contents.
        filename (str): Original filename; only its suffix is inspected.

    Returns:
        ExtractionOutcome: `ExtractionSuccess` with the raw (untrimmed) text,
        or `ExtractionFailure` describing why nothing could be extracted.
    """
    kind = DocumentKind.from_filename(filename)
    if kind is None:
        logger.warning("Rejected unsupported file type: %s", filename)
        return ExtractionFailure(
            kind=ExtractionErrorKind.UNSUPPORTED_TYPE,
            message="Unsupported file type.",
            supported_types=list(SUPPORTED_TYPES),
        )

    reader, failure_kind = _READERS[kind]
    try:
        text = reader(buffer)
    except Exception as e:
        logger.error(
            "%s extraction failed for %s (%d bytes): %s",
            kind.label, filename, len(buffer), e,
        )
        return ExtractionFailure(kind=failure_kind, message=str(e) or type(e).__name__)

    return ExtractionSuccess(text=text or "", kind=kind)


async def extract_async(buffer: bytes, filename: str) -> ExtractionOutcome:
    """Run `extract` in a worker thread so the event loop stays responsive."""
    return await asyncio.to_thread(extract, buffer, filename)
