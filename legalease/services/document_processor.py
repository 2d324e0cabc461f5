"""
Text extraction for uploaded legal documents, one handler per file type.
"""
import os
import io
import logging
from typing import List, Dict, Callable

from pydantic import BaseModel, Field

from ..config import FeatureFlags, MIN_CONTENT_LENGTH
from ..core.exceptions import DocumentProcessingError

logger = logging.getLogger(__name__)


class ProcessingResult(BaseModel):
    """Structured result of a document processing operation."""
    content: str
    page_count: int = Field(..., ge=0)
    warnings: List[str] = Field(default_factory=list)


class DocumentProcessor:
    """
    Extracts plain text from uploaded files.

    Usage:
        processor = DocumentProcessor()
        try:
            result = processor.process(file_content, "lease.pdf")
        except DocumentProcessingError as e:
            ...
    """
    def __init__(self):
        self.handlers: Dict[str, Callable] = {
            '.txt': self._process_text,
            '.md': self._process_text,
            '.pdf': self._process_pdf,
            '.docx': self._process_docx,
        }
        # PDF strategies in order of preference
        self.pdf_strategies = [
            ("pymupdf", self._pdf_handler_pymupdf, FeatureFlags.PYMUPDF_AVAILABLE),
            ("pdfplumber", self._pdf_handler_pdfplumber, FeatureFlags.PDFPLUMBER_AVAILABLE),
        ]

    def process(self, file_content: bytes, filename: str) -> ProcessingResult:
        """Processes a document from its content bytes and filename."""
        logger.info(f"Starting extraction for '{filename}', size: {len(file_content)} bytes")
        file_ext = os.path.splitext(filename)[1].lower()
        handler = self.handlers.get(file_ext, self._process_unsupported_as_text)

        try:
            result = handler(file_content, filename)
        except DocumentProcessingError:
            raise
        except Exception as e:
            logger.error(f"Failed to process '{filename}': {e}", exc_info=True)
            raise DocumentProcessingError(f"Handler for '{file_ext}' failed: {e}") from e

        if not self._validate_extraction(result.content):
            result.warnings.append("Low quality extraction detected - may need manual review.")
            logger.warning(f"Low quality extraction for '{filename}'")

        logger.info(f"Extracted '{filename}': {len(result.content)} chars, "
                    f"{result.page_count} pages, {len(result.warnings)} warnings.")
        return result

    # --- Handler Methods ---

    def _process_text(self, content_bytes: bytes, filename: str) -> ProcessingResult:
        content = content_bytes.decode('utf-8', errors='ignore')
        return ProcessingResult(content=content, page_count=self._estimate_pages_from_text(content))

    def _process_docx(self, content_bytes: bytes, filename: str) -> ProcessingResult:
        if not FeatureFlags.DOCX_AVAILABLE:
            raise DocumentProcessingError("python-docx is not installed. Cannot process .docx files.")

        from docx import Document
        doc = Document(io.BytesIO(content_bytes))

        text_content = [para.text for para in doc.paragraphs]
        for table in doc.tables:
            for row in table.rows:
                text_content.append("\t".join(cell.text for cell in row.cells))

        content = "\n".join(text_content)
        return ProcessingResult(content=content, page_count=self._estimate_pages_from_text(content))

    def _process_pdf(self, content_bytes: bytes, filename: str) -> ProcessingResult:
        """Iterates through PDF processing strategies until one succeeds."""
        warnings = []
        for name, method, is_available in self.pdf_strategies:
            if not is_available:
                logger.debug(f"Skipping PDF processing with '{name}' (not available).")
                continue
            try:
                result = method(content_bytes)
                if result.content.strip():
                    logger.info(f"✅ Processed PDF '{filename}' with '{name}'.")
                    result.warnings.extend(warnings)
                    return result
                warnings.append(f"Method '{name}' produced no content.")
            except Exception as e:
                logger.warning(f"PDF processing with '{name}' failed for '{filename}': {e}")
                warnings.append(f"Method '{name}' failed: {e}")

        raise DocumentProcessingError(f"All available PDF processing methods failed for '{filename}'.")

    def _process_unsupported_as_text(self, content_bytes: bytes, filename: str) -> ProcessingResult:
        file_ext = os.path.splitext(filename)[1].lower()
        result = self._process_text(content_bytes, filename)
        result.warnings.append(f"Unsupported file type '{file_ext}'. Processed as plain text.")
        return result

    # --- PDF Strategy Implementations ---

    def _pdf_handler_pymupdf(self, content_bytes: bytes) -> ProcessingResult:
        import fitz  # PyMuPDF
        with fitz.open(stream=content_bytes, filetype="pdf") as doc:
            content = "\n\n".join(page.get_text() for page in doc)
            page_count = len(doc)
        return ProcessingResult(content=content, page_count=page_count)

    def _pdf_handler_pdfplumber(self, content_bytes: bytes) -> ProcessingResult:
        import pdfplumber
        with pdfplumber.open(io.BytesIO(content_bytes)) as pdf:
            all_text = [page.extract_text() or "" for page in pdf.pages]
            page_count = len(pdf.pages)
        return ProcessingResult(content="\n".join(all_text), page_count=page_count)

    # --- Private Helper Methods ---

    def _validate_extraction(self, text: str) -> bool:
        """Performs basic checks on the quality of extracted text."""
        if not text or len(text.strip()) < MIN_CONTENT_LENGTH:
            return False
        # A high ratio of replacement characters signals encoding errors
        if text.count('�') / len(text) > 0.01:
            return False
        return True

    def _estimate_pages_from_text(self, text: str) -> int:
        if not text.strip():
            return 0
        # ~2500 characters per page
        return max(1, len(text) // 2500)
