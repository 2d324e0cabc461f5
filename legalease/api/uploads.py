"""Validation and text extraction shared by the upload endpoints"""
import os
import re
import logging
from typing import Optional

from fastapi import HTTPException, UploadFile

from ..config import MAX_FILE_SIZE, LEGAL_EXTENSIONS
from ..core.exceptions import DocumentProcessingError
from ..services.document_processor import DocumentProcessor, ProcessingResult

logger = logging.getLogger(__name__)

SUSPICIOUS_FILENAME_PATTERNS = [r'\.\.', r'[<>:"|?*/\\]', r'^[.\s]*$']


class ExtractedUpload:
    def __init__(self, filename: str, size: int, result: ProcessingResult):
        self.filename = filename
        self.size = size
        self.result = result


def validate_filename(filename: Optional[str]) -> str:
    """Return the cleaned filename or raise a 400"""
    if not filename or not filename.strip():
        raise HTTPException(status_code=400, detail="Filename is required")

    filename = filename.strip()
    if any(re.search(pattern, filename) for pattern in SUSPICIOUS_FILENAME_PATTERNS):
        raise HTTPException(status_code=400, detail="Invalid filename characters")

    file_ext = os.path.splitext(filename)[1].lower()
    if file_ext not in LEGAL_EXTENSIONS:
        raise HTTPException(
            status_code=400,
            detail=f"Unsupported file type '{file_ext}'. Supported types: {', '.join(sorted(LEGAL_EXTENSIONS))}"
        )
    return filename


async def read_upload(
    file: UploadFile,
    processor: DocumentProcessor,
    filename: Optional[str] = None
) -> ExtractedUpload:
    """Validate an uploaded file and extract its text"""
    name = validate_filename(filename or file.filename)

    file_content = await file.read()
    file_size = len(file_content)
    if file_size == 0:
        raise HTTPException(status_code=400, detail="File is empty")
    if file_size > MAX_FILE_SIZE:
        raise HTTPException(
            status_code=413,
            detail=f"File too large: {file_size // 1024 // 1024}MB. Maximum size is {MAX_FILE_SIZE // 1024 // 1024}MB"
        )

    logger.info(f"📄 Processing upload: {name} ({file_size} bytes)")
    try:
        result = processor.process(file_content, name)
    except DocumentProcessingError as e:
        logger.warning(f"Extraction failed for {name}: {e}")
        raise HTTPException(status_code=422, detail=f"Could not extract text from document: {e}")

    if not result.content.strip():
        raise HTTPException(status_code=422, detail="Document appears to be empty or unreadable")

    return ExtractedUpload(filename=name, size=file_size, result=result)
