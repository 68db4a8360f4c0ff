# Unit tests for the document extraction adapter

import asyncio
import io

import pytest
from docx import Document

import app.models.parser as parser
from app.models.parser import (
    DocumentKind,
    ExtractionErrorKind,
    ExtractionFailure,
    ExtractionSuccess,
    extract,
    extract_async,
)
from conftest import build_docx, build_pdf


@pytest.mark.parametrize(
    "filename, expected",
    [
        ("plan.docx", DocumentKind.DOCX),
        ("PLAN.DOCX", DocumentKind.DOCX),
        ("iep.pdf", DocumentKind.PDF),
        ("Scan.Pdf", DocumentKind.PDF),
        ("notes.txt", None),
        ("archive.pdf.zip", None),
        ("docx", None),
        ("", None),
    ],
)
def test_document_kind_from_filename(filename, expected):
    assert DocumentKind.from_filename(filename) is expected


def test_extract_docx_paragraphs_and_tables():
    data = build_docx(
        "Accommodations",
        "Preferential seating",
        table=[["Subject", "Support"], ["Math", "Calculator"]],
    )

    outcome = extract(data, "iep.docx")

    assert isinstance(outcome, ExtractionSuccess)
    assert outcome.kind is DocumentKind.DOCX
    assert "Accommodations\nPreferential seating" in outcome.text
    assert "Calculator" in outcome.text


def test_extract_pdf_text():
    outcome = extract(build_pdf("Reading goals"), "goals.PDF")

    assert isinstance(outcome, ExtractionSuccess)
    assert outcome.kind is DocumentKind.PDF
    assert "Reading goals" in outcome.text


def test_extract_unsupported_type_skips_libraries(monkeypatch):
    def explode(*args, **kwargs):
        raise AssertionError("library should not be called")

    monkeypatch.setattr(parser, "Document", explode)
    monkeypatch.setattr(parser, "pdf_extract_text", explode)

    outcome = extract(b"%PDF-1.4 looks like a pdf", "plan.txt")

    assert isinstance(outcome, ExtractionFailure)
    assert outcome.kind is ExtractionErrorKind.UNSUPPORTED_TYPE
    assert outcome.supported_types == [".docx", ".pdf"]


def test_extract_corrupt_docx_returns_failure():
    outcome = extract(b"definitely not a zip archive", "broken.docx")

    assert isinstance(outcome, ExtractionFailure)
    assert outcome.kind is ExtractionErrorKind.DOCX_FAILURE
    assert outcome.message


def test_extract_pdf_library_error_returns_failure(monkeypatch):
    def boom(stream):
        raise ValueError("bad xref table")

    monkeypatch.setattr(parser, "pdf_extract_text", boom)

    outcome = extract(b"%PDF-1.4", "broken.pdf")

    assert outcome == ExtractionFailure(
        kind=ExtractionErrorKind.PDF_FAILURE, message="bad xref table"
    )


def test_extract_failure_without_message_uses_exception_name(monkeypatch):
    def boom(stream):
        raise KeyError()

    monkeypatch.setattr(parser, "pdf_extract_text", boom)

    outcome = extract(b"%PDF-1.4", "broken.pdf")

    assert outcome.message == "KeyError"


def test_extract_async_matches_sync():
    data = build_docx("Same text either way")

    outcome = asyncio.run(extract_async(data, "same.docx"))

    assert outcome == extract(data, "same.docx")


def test_extract_docx_keeps_document_order_and_merged_cells_once():
    document = Document()
    document.add_paragraph("Intro")
    table = document.add_table(rows=1, cols=2)
    table.cell(0, 0).merge(table.cell(0, 1)).text = "MergedCell"
    document.add_paragraph("Outro")
    stream = io.BytesIO()
    document.save(stream)

    outcome = extract(stream.getvalue(), "order.docx")

    assert isinstance(outcome, ExtractionSuccess)
    assert outcome.text.strip() == "Intro\nMergedCell\nOutro"
