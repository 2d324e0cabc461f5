"""Detection of legal text in arbitrary web pages for the browser extension"""
import logging
from typing import List, Optional

from bs4 import BeautifulSoup

from ..config import LEGAL_KEYWORDS, MIN_LEGAL_SEGMENT_LENGTH
from ..models import LegalDetectionResponse, LegalSegment
from ..utils import TextProcessor, mean_rounded
from .clause_rules import RuleBasedAnalyzer

logger = logging.getLogger(__name__)

MAX_SEGMENTS = 50


class LegalContentDetector:
    """Finds text blocks that look like legal terms and scores them"""

    def __init__(self, keywords: Optional[List[str]] = None,
                 rules: Optional[RuleBasedAnalyzer] = None,
                 text_processor: Optional[TextProcessor] = None):
        self.keywords = [k.lower() for k in (keywords or LEGAL_KEYWORDS)]
        self.rules = rules or RuleBasedAnalyzer()
        self.text_processor = text_processor or TextProcessor()

    def detect(self, text: Optional[str] = None, html: Optional[str] = None) -> LegalDetectionResponse:
        blocks = self._blocks_from_html(html) if html else []
        if text:
            blocks.extend(span.text for span in self.text_processor.split_into_paragraphs(text))

        segments = []
        seen = set()
        for block in blocks:
            if len(block) <= MIN_LEGAL_SEGMENT_LENGTH or block in seen:
                continue
            found = self.text_processor.find_keywords(block, self.keywords)
            if not found:
                continue
            seen.add(block)
            assessment = self.rules.assess(block)
            segments.append(LegalSegment(
                text=block,
                keywords=found,
                risk_score=assessment.score,
                risk_level=assessment.risk_level
            ))
            if len(segments) >= MAX_SEGMENTS:
                break

        logger.info(f"Legal detection: {len(segments)} segments in {len(blocks)} blocks")
        return LegalDetectionResponse(
            has_legal_content=bool(segments),
            clause_count=len(segments),
            avg_risk_score=mean_rounded(s.risk_score for s in segments),
            segments=segments
        )

    def _blocks_from_html(self, html: str) -> List[str]:
        soup = BeautifulSoup(html, 'html.parser')
        for tag in soup(['script', 'style', 'noscript', 'template']):
            tag.decompose()
        blocks = []
        for node in soup.find_all(string=True):
            stripped = " ".join(node.split())
            if stripped:
                blocks.append(stripped)
        return blocks
