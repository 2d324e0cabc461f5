import io

import pytest

from legalease.config import FeatureFlags
from legalease.core.exceptions import DocumentProcessingError
from legalease.services.document_processor import DocumentProcessor

from conftest import LEASE_TEXT


def test_plain_text_is_decoded():
    result = DocumentProcessor().process(LEASE_TEXT.encode("utf-8"), "lease.txt")

    assert result.content == LEASE_TEXT
    assert result.page_count == 1
    assert result.warnings == []


def test_invalid_utf8_bytes_are_ignored():
    result = DocumentProcessor().process(b"Tenant \xff\xfeshall pay rent on the first day of every month.", "lease.md")
    assert result.content.startswith("Tenant shall pay")


def test_unknown_extension_is_read_as_text_with_warning():
    result = DocumentProcessor().process(LEASE_TEXT.encode(), "lease.rtf")
    assert any("Processed as plain text" in w for w in result.warnings)


def test_short_text_gets_quality_warning():
    result = DocumentProcessor().process(b"Too short.", "note.txt")
    assert any("Low quality" in w for w in result.warnings)


def test_docx_paragraphs_and_tables():
    from docx import Document

    document = Document()
    document.add_paragraph("The Tenant shall pay rent monthly.")
    table = document.add_table(rows=1, cols=2)
    table.rows[0].cells[0].text = "Deposit"
    table.rows[0].cells[1].text = "$1,000"
    buffer = io.BytesIO()
    document.save(buffer)

    result = DocumentProcessor().process(buffer.getvalue(), "lease.docx")

    assert "The Tenant shall pay rent monthly." in result.content
    assert "Deposit\t$1,000" in result.content


def test_pdf_text_is_extracted():
    import fitz

    pdf = fitz.open()
    page = pdf.new_page()
    page.insert_text((72, 72), "The Landlord may terminate this lease without notice.")
    content = pdf.tobytes()
    pdf.close()

    result = DocumentProcessor().process(content, "lease.pdf")

    assert "terminate this lease" in result.content
    assert result.page_count == 1


def test_broken_pdf_raises():
    with pytest.raises(DocumentProcessingError):
        DocumentProcessor().process(b"%PDF-1.4 this is not really a pdf", "broken.pdf")


def test_docx_without_library(monkeypatch):
    monkeypatch.setattr(FeatureFlags, "DOCX_AVAILABLE", False)
    with pytest.raises(DocumentProcessingError):
        DocumentProcessor().process(b"PK...", "lease.docx")
