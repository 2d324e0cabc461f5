"""
Clause analysis: the text -> structured analysis function behind the pipeline.
"""
import time
import logging
from typing import Dict, List, Any, Optional, Tuple

from pydantic import ValidationError

from ..config import MAX_ANALYSIS_CHARS, HIGH_RISK_THRESHOLD
from ..core.exceptions import AnalysisError
from ..models import (
    DocumentAnalysis, ClauseExplanation, DocumentComparison, CommonClause,
    UniqueClauses, RiskComparison, LegalDocument
)
from ..utils import truncate_for_prompt
from .ai_service import GenerativeAIService, get_ai_service
from .clause_rules import RuleBasedAnalyzer

logger = logging.getLogger(__name__)

ANALYSIS_PROMPT = """You are a legal expert AI. Analyze the following legal document and provide a comprehensive analysis.

Document: {filename}
Content:
{content}

Please provide your analysis in the following JSON format:
{{
  "overallRiskScore": number (0-100),
  "riskLevel": "low" | "medium" | "high",
  "summary": "Brief summary of the document",
  "recommendations": ["recommendation1", "recommendation2"],
  "clauses": [
    {{
      "text": "exact clause text",
      "category": "category name",
      "riskScore": number (0-100),
      "riskLevel": "low" | "medium" | "high",
      "explanation": "detailed explanation",
      "plainLanguage": "simple explanation",
      "analogy": "helpful analogy",
      "recommendations": ["specific recommendations"],
      "position": {{"start": number, "end": number}}
    }}
  ]
}}

Focus on:
1. Identifying potentially problematic clauses
2. Explaining complex legal terms in plain language
3. Providing risk assessments
4. Offering practical recommendations
5. Using analogies to make concepts clear
"""

EXPLAIN_PROMPT = """Explain this legal clause in detail:
"{clause}"

Provide response in JSON format:
{{
  "explanation": "detailed legal explanation",
  "plainLanguage": "simple, everyday language explanation",
  "analogy": "helpful real-world analogy",
  "risks": ["potential risk 1", "potential risk 2"]
}}
"""


class ClauseAnalyzer:
    """
    Produces DocumentAnalysis objects from document text.

    Uses the generative AI endpoint when an API key is configured and the
    rule-based analyzer otherwise. Calls are blocking; the pipeline runs them
    in a worker thread.
    """

    def __init__(self, ai_service: Optional[GenerativeAIService] = None,
                 rules: Optional[RuleBasedAnalyzer] = None):
        self.ai_service = ai_service if ai_service is not None else get_ai_service()
        self.rules = rules or RuleBasedAnalyzer()

    @property
    def use_ai(self) -> bool:
        return self.ai_service.configured

    @property
    def mode(self) -> str:
        return "ai" if self.use_ai else "rule-based"

    def analyze_document(self, text: str, filename: str) -> DocumentAnalysis:
        if not text or not text.strip():
            raise AnalysisError("Document has no text to analyze")

        start_time = time.perf_counter()
        if self.use_ai:
            prompt = ANALYSIS_PROMPT.format(
                filename=filename,
                content=truncate_for_prompt(text, MAX_ANALYSIS_CHARS)
            )
            data, model = self.ai_service.complete_json(prompt)
            analysis = self._build_analysis(data, text, model)
        else:
            analysis = self.rules.analyze_document(text, filename)

        analysis.analysis_time = int((time.perf_counter() - start_time) * 1000)
        logger.info(f"Analysis of '{filename}' finished in {analysis.analysis_time}ms "
                    f"({len(analysis.clauses)} clauses, risk {analysis.overall_risk_score})")
        return analysis

    def explain_clause(self, clause_text: str) -> ClauseExplanation:
        if not self.use_ai:
            return self.rules.explain_clause(clause_text)

        data, _ = self.ai_service.complete_json(EXPLAIN_PROMPT.format(clause=clause_text))
        try:
            return ClauseExplanation.model_validate(data)
        except ValidationError as e:
            raise AnalysisError(f"Clause explanation has an unexpected shape: {e}") from e

    def compare_documents(
        self, entries: List[Tuple[LegalDocument, Optional[DocumentAnalysis]]]
    ) -> DocumentComparison:
        """Side-by-side comparison of already analyzed documents"""
        if len(entries) < 2:
            raise AnalysisError("Need at least 2 documents to compare")

        highest = entries[0]
        lowest = entries[0]
        for entry in entries[1:]:
            if _score_or(entry, 0) > _score_or(highest, 0):
                highest = entry
            if _score_or(entry, 100) < _score_or(lowest, 100):
                lowest = entry

        highest_name, lowest_name = highest[0].filename, lowest[0].filename
        risk_text = (
            f"{highest_name} carries the highest overall risk ({_score_or(highest, 0)}/100); "
            f"{lowest_name} the lowest ({_score_or(lowest, 100)}/100)."
        )

        recommendations = ["Review high-risk clauses", "Consider standardizing terms"]
        if _score_or(highest, 0) >= HIGH_RISK_THRESHOLD:
            recommendations.append(f"Prioritize review of {highest_name}")

        return DocumentComparison(
            summary=f"Compared {len(entries)} documents",
            common_clauses=self._common_clauses(entries),
            unique_clauses=[
                UniqueClauses(
                    document=document.filename,
                    clauses=[c.text for c in analysis.clauses] if analysis else []
                )
                for document, analysis in entries
            ],
            risk_comparison=RiskComparison(highest=highest_name, lowest=lowest_name, analysis=risk_text),
            recommendations=recommendations
        )

    # --- Private Helper Methods ---

    def _build_analysis(self, data: Dict[str, Any], source_text: str, model: str) -> DocumentAnalysis:
        raw_clauses = data.get('clauses') or []
        if not isinstance(raw_clauses, list):
            raise AnalysisError("AI analysis 'clauses' is not a list")

        clauses = []
        for raw in raw_clauses:
            if not isinstance(raw, dict) or not isinstance(raw.get('text'), str) or not raw['text'].strip():
                logger.warning("Skipping clause without text in AI response")
                continue
            clause = {k: v for k, v in raw.items() if k != 'id'}
            clause['position'] = _locate(clause['text'], source_text, clause.get('position'))
            clauses.append(clause)

        payload = {k: v for k, v in data.items() if k not in ('id', 'documentId', 'clauses')}
        payload['clauses'] = clauses
        payload['model'] = model
        try:
            return DocumentAnalysis.model_validate(payload)
        except ValidationError as e:
            raise AnalysisError(f"AI analysis has an unexpected shape: {e}") from e

    def _common_clauses(self, entries) -> List[CommonClause]:
        analyses = [analysis for _, analysis in entries]
        if not all(analyses):
            return []

        shared = set.intersection(*({c.category for c in a.clauses} for a in analyses))
        common = []
        for category in sorted(shared):
            differences = []
            for document, analysis in entries:
                worst = max((c for c in analysis.clauses if c.category == category),
                            key=lambda c: c.risk_score)
                differences.append(
                    f"{document.filename}: {worst.risk_level.value} risk ({worst.risk_score}/100)"
                )
            common.append(CommonClause(clause=category, differences=differences))
        return common


def _score_or(entry, default: int) -> int:
    analysis = entry[1]
    return analysis.overall_risk_score if analysis else default


def _locate(clause_text: str, source_text: str, position: Any) -> Dict[str, int]:
    """Trust the model's offsets only when they point at the clause"""
    if isinstance(position, dict):
        try:
            start, end = int(position.get('start', -1)), int(position.get('end', -1))
        except (TypeError, ValueError):
            start, end = -1, -1
        if 0 <= start < end <= len(source_text) and source_text[start:end].strip() == clause_text.strip():
            return {'start': start, 'end': end}

    found = source_text.find(clause_text)
    if found >= 0:
        return {'start': found, 'end': found + len(clause_text)}
    return {'start': 0, 'end': 0}
