"""
Text processing utilities for splitting legal documents into clauses.
"""
import re
import logging
from dataclasses import dataclass
from typing import List, Tuple

logger = logging.getLogger(__name__)

MIN_CLAUSE_LENGTH = 25
MAX_CLAUSES = 40
SENTENCE_SPLIT_THRESHOLD = 600


@dataclass
class TextSpan:
    """A slice of the source text with its character offsets"""
    text: str
    start: int
    end: int


class TextProcessor:
    """
    Splits legal text into clause-sized spans that keep their offsets into
    the original document.

    Usage:
        processor = TextProcessor()
        spans = processor.split_into_clauses(document_text)
    """
    def __init__(self, min_clause_length: int = MIN_CLAUSE_LENGTH, max_clauses: int = MAX_CLAUSES):
        self.min_clause_length = min_clause_length
        self.max_clauses = max_clauses

        self._block_separator = re.compile(r'\n[ \t]*\n')
        self._numbered_line = re.compile(
            r'^[ \t]*(?:(?:\d+(?:\.\d+)*[.)]|\d+(?:\.\d+)+)[ \t]|\([a-z0-9]{1,3}\)[ \t]|(?:section|article|clause)[ \t]+\d+)',
            re.IGNORECASE | re.MULTILINE
        )
        self._sentence_end = re.compile(r'(?<=[.?!;])\s+')

    def split_into_clauses(self, text: str) -> List[TextSpan]:
        """Paragraphs first, then numbered sections, then sentences for one long block."""
        if not text or not text.strip():
            return []

        spans: List[Tuple[int, int]] = []
        for start, end in self._split_on(self._block_separator, text, 0, len(text)):
            spans.extend(self._split_numbered(text, start, end))

        if len(spans) == 1 and spans[0][1] - spans[0][0] > SENTENCE_SPLIT_THRESHOLD:
            spans = self._split_on(self._sentence_end, text, spans[0][0], spans[0][1])

        clauses = []
        for start, end in spans:
            span = self._trim(text, start, end)
            if span and len(span.text) >= self.min_clause_length:
                clauses.append(span)

        if len(clauses) > self.max_clauses:
            logger.info(f"Clause split produced {len(clauses)} spans, keeping first {self.max_clauses}")
            clauses = clauses[:self.max_clauses]
        return clauses

    def split_into_paragraphs(self, text: str) -> List[TextSpan]:
        spans = self._split_on(self._block_separator, text, 0, len(text))
        return [s for s in (self._trim(text, a, b) for a, b in spans) if s]

    def find_keywords(self, text: str, keywords: List[str]) -> List[str]:
        lowered = text.lower()
        return [keyword for keyword in keywords if keyword in lowered]

    # --- Private Helper Methods ---

    def _split_on(self, pattern: re.Pattern, text: str, start: int, end: int) -> List[Tuple[int, int]]:
        spans = []
        cursor = start
        for match in pattern.finditer(text, start, end):
            if match.start() > cursor:
                spans.append((cursor, match.start()))
            cursor = match.end()
        if cursor < end:
            spans.append((cursor, end))
        return spans

    def _split_numbered(self, text: str, start: int, end: int) -> List[Tuple[int, int]]:
        boundaries = [m.start() for m in self._numbered_line.finditer(text, start, end)]
        # A leading heading stays attached to the first numbered item
        boundaries = [b for b in boundaries if b > start]
        if not boundaries:
            return [(start, end)]

        spans = []
        cursor = start
        for boundary in boundaries:
            spans.append((cursor, boundary))
            cursor = boundary
        spans.append((cursor, end))
        return spans

    def _trim(self, text: str, start: int, end: int):
        segment = text[start:end]
        stripped = segment.strip()
        if not stripped:
            return None
        offset = start + (len(segment) - len(segment.lstrip()))
        return TextSpan(text=stripped, start=offset, end=offset + len(stripped))
