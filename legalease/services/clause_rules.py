"""
Rule-based clause analysis used when no generative AI endpoint is configured.

Categories come from keyword tables and risk from weighted phrases; every
clause keeps its character offsets into the source document.
"""
import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from ..models import (
    Clause, ClausePosition, ClauseExplanation, DocumentAnalysis,
    ClauseCategory, RiskLevel, clamp_score, risk_level_for_score
)
from ..utils import TextProcessor, mean_rounded

logger = logging.getLogger(__name__)

BASE_RISK_SCORE = 15

CATEGORY_KEYWORDS: Dict[ClauseCategory, List[str]] = {
    ClauseCategory.TERMINATION: ["terminat", "cancel", "end this agreement", "suspend"],
    ClauseCategory.LIABILITY: ["liabilit", "indemnif", "indemnify", "hold harmless", "damages"],
    ClauseCategory.PAYMENT: ["payment", "fee", "price", "invoice", "refund", "charge", "deposit", "rent"],
    ClauseCategory.CONFIDENTIALITY: ["confidential", "non-disclosure", "proprietary information", "trade secret"],
    ClauseCategory.INTELLECTUAL_PROPERTY: ["intellectual property", "copyright", "trademark", "patent", "license", "ownership of"],
    ClauseCategory.DISPUTE_RESOLUTION: ["arbitration", "governing law", "jurisdiction", "dispute", "class action", "venue"],
    ClauseCategory.PRIVACY: ["personal data", "privacy", "personal information", "cookies", "third parties"],
    ClauseCategory.WARRANTY: ["warrant", "as is", "as-is", "guarantee", "merchantability"],
    ClauseCategory.RENEWAL: ["renew", "auto-renew", "subsequent term", "extension of the term"],
}

CATEGORY_RISK_BONUS: Dict[ClauseCategory, int] = {
    ClauseCategory.LIABILITY: 15,
    ClauseCategory.TERMINATION: 10,
    ClauseCategory.DISPUTE_RESOLUTION: 10,
    ClauseCategory.PAYMENT: 5,
    ClauseCategory.RENEWAL: 5,
    ClauseCategory.INTELLECTUAL_PROPERTY: 5,
    ClauseCategory.PRIVACY: 5,
}


@dataclass(frozen=True)
class RiskPhrase:
    phrase: str
    weight: int
    meaning: str
    recommendation: str


RISK_PHRASES: List[RiskPhrase] = [
    RiskPhrase("unlimited liability", 35, "there is no cap on what you could owe",
               "Ask for a cap on liability, for example the fees paid in the last 12 months."),
    RiskPhrase("personal guarantee", 30, "you are personally on the hook, not just your business",
               "Avoid personal guarantees or limit them in amount and time."),
    RiskPhrase("liquidated damages", 25, "a fixed penalty is owed if you break the agreement",
               "Check that the fixed damages are proportionate to the real loss."),
    RiskPhrase("indemnify", 25, "you must cover the other side's legal costs and losses",
               "Limit the indemnity to claims caused by your own breach or negligence."),
    RiskPhrase("hold harmless", 20, "you give up claims against the other side",
               "Make the hold-harmless obligation mutual."),
    RiskPhrase("without cause", 20, "the other side can act without giving a reason",
               "Ask for termination only for cause, or a longer notice period."),
    RiskPhrase("without notice", 20, "changes or actions can happen without telling you first",
               "Require written notice before any change or termination."),
    RiskPhrase("non-compete", 20, "you are restricted from working with competitors",
               "Narrow the non-compete in scope, geography and duration."),
    RiskPhrase("sole discretion", 15, "one side alone decides, with no check on that decision",
               "Replace 'sole discretion' with a reasonableness standard."),
    RiskPhrase("automatically renew", 15, "the agreement continues unless you actively cancel",
               "Diarize the cancellation deadline or ask for opt-in renewal."),
    RiskPhrase("auto-renew", 15, "the agreement continues unless you actively cancel",
               "Diarize the cancellation deadline or ask for opt-in renewal."),
    RiskPhrase("non-refundable", 15, "money paid will not be returned",
               "Negotiate refunds for services not delivered."),
    RiskPhrase("waive", 15, "you give up a right you would otherwise have",
               "Check exactly which rights are waived and whether that is acceptable."),
    RiskPhrase("binding arbitration", 15, "disputes go to a private arbitrator instead of a court",
               "Consider whether you can opt out of arbitration."),
    RiskPhrase("class action", 15, "you cannot join other users in a group lawsuit",
               "Be aware that individual claims may be uneconomic to bring."),
    RiskPhrase("irrevocable", 15, "the permission cannot be taken back later",
               "Ask for a license you can revoke when the agreement ends."),
    RiskPhrase("termination for convenience", 15, "the agreement can be ended simply because it suits the other side",
               "Ask for a matching right to terminate for convenience."),
    RiskPhrase("penalty", 15, "extra charges apply if you miss an obligation",
               "Confirm how penalties are calculated and capped."),
    RiskPhrase("late fee", 10, "missing a payment deadline costs extra",
               "Ask for a grace period before late fees apply."),
    RiskPhrase("at any time", 10, "something can happen whenever the other side chooses",
               "Ask for defined notice periods."),
    RiskPhrase("perpetual", 10, "the obligation never expires",
               "Ask for a fixed term."),
    RiskPhrase("as is", 10, "no promises are made about quality",
               "Seek at least a basic warranty of fitness for purpose."),
    RiskPhrase("exclusive jurisdiction", 10, "disputes must be heard in one chosen court",
               "Check the court is somewhere you could realistically attend."),
    RiskPhrase("third parties", 10, "information may be shared outside the company",
               "Check which third parties receive your data and why."),
]

MITIGATING_PHRASES: Dict[str, int] = {
    "mutual": -10,
    "reasonable": -5,
    "written notice": -5,
    "not to exceed": -5,
}

CATEGORY_SUMMARIES: Dict[ClauseCategory, str] = {
    ClauseCategory.TERMINATION: "This clause explains how and when the agreement can be ended.",
    ClauseCategory.LIABILITY: "This clause decides who pays when something goes wrong.",
    ClauseCategory.PAYMENT: "This clause sets out what you pay, when, and what happens if you pay late.",
    ClauseCategory.CONFIDENTIALITY: "This clause says what information must be kept secret.",
    ClauseCategory.INTELLECTUAL_PROPERTY: "This clause decides who owns and may use creative work or content.",
    ClauseCategory.DISPUTE_RESOLUTION: "This clause explains where and how disagreements are settled.",
    ClauseCategory.PRIVACY: "This clause explains how your personal information is collected and used.",
    ClauseCategory.WARRANTY: "This clause describes what promises are, or are not, made about the product or service.",
    ClauseCategory.RENEWAL: "This clause explains whether and how the agreement continues after its term.",
    ClauseCategory.GENERAL: "This clause sets out general terms of the agreement.",
}

CATEGORY_ANALOGIES: Dict[ClauseCategory, str] = {
    ClauseCategory.TERMINATION: "Like a landlord who can ask you to move out with a month's notice, even if you've been a good tenant.",
    ClauseCategory.LIABILITY: "Like agreeing to pay for any damage if you borrow someone's car, even if the accident wasn't entirely your fault.",
    ClauseCategory.PAYMENT: "Like a gym membership: the fee keeps coming out of your account on schedule, and missing it costs extra.",
    ClauseCategory.CONFIDENTIALITY: "Like being handed a house key with a promise not to tell anyone the alarm code.",
    ClauseCategory.INTELLECTUAL_PROPERTY: "Like painting a mural on a rented wall: the landlord may end up owning the wall and the picture.",
    ClauseCategory.DISPUTE_RESOLUTION: "Like agreeing in advance which referee settles any argument, and where the match is played.",
    ClauseCategory.PRIVACY: "Like giving a shop your address for delivery and letting them decide who else may see it.",
    ClauseCategory.WARRANTY: "Like buying a used car 'as seen': if it breaks down on the drive home, that's your problem.",
    ClauseCategory.RENEWAL: "Like a magazine subscription that keeps arriving, and billing you, until you call to cancel.",
    ClauseCategory.GENERAL: "Like the fine print on a ticket: rarely read, but it still sets the rules.",
}

CATEGORY_RECOMMENDATIONS: Dict[ClauseCategory, str] = {
    ClauseCategory.TERMINATION: "Check the notice period and what happens to prepaid fees on termination.",
    ClauseCategory.LIABILITY: "Make sure liability is capped and shared fairly between the parties.",
    ClauseCategory.PAYMENT: "Confirm amounts, due dates and any fees for late payment.",
    ClauseCategory.CONFIDENTIALITY: "Confirm how long the confidentiality obligation lasts.",
    ClauseCategory.INTELLECTUAL_PROPERTY: "Confirm you keep ownership of content you create.",
    ClauseCategory.DISPUTE_RESOLUTION: "Check where disputes would be heard and who pays the costs.",
    ClauseCategory.PRIVACY: "Check what data is collected and whether you can opt out of sharing.",
    ClauseCategory.WARRANTY: "Ask what remedy you get if the product or service fails.",
    ClauseCategory.RENEWAL: "Note the renewal date and how to cancel in time.",
    ClauseCategory.GENERAL: "Read this clause carefully to confirm it matches your understanding.",
}


@dataclass
class ClauseAssessment:
    category: ClauseCategory
    score: int
    risk_level: RiskLevel
    matched: List[RiskPhrase] = field(default_factory=list)


class RuleBasedAnalyzer:
    """Keyword and phrase based stand-in for the AI analysis"""

    def __init__(self, text_processor: Optional[TextProcessor] = None):
        self.text_processor = text_processor or TextProcessor()

    def categorize(self, text: str) -> ClauseCategory:
        lowered = text.lower()
        best: Tuple[int, ClauseCategory] = (0, ClauseCategory.GENERAL)
        for category, keywords in CATEGORY_KEYWORDS.items():
            hits = sum(lowered.count(keyword) for keyword in keywords)
            if hits > best[0]:
                best = (hits, category)
        return best[1]

    def assess(self, text: str) -> ClauseAssessment:
        lowered = text.lower()
        category = self.categorize(text)
        matched = [phrase for phrase in RISK_PHRASES if phrase.phrase in lowered]
        # "auto-renew" and "automatically renew" describe one risk
        seen_meanings = set()
        unique = []
        for phrase in matched:
            if phrase.meaning not in seen_meanings:
                seen_meanings.add(phrase.meaning)
                unique.append(phrase)

        score = BASE_RISK_SCORE + CATEGORY_RISK_BONUS.get(category, 0)
        score += sum(phrase.weight for phrase in unique)
        score += sum(weight for term, weight in MITIGATING_PHRASES.items() if term in lowered)
        score = clamp_score(score)
        return ClauseAssessment(category=category, score=score,
                                risk_level=risk_level_for_score(score), matched=unique)

    def analyze_clause(self, text: str, start: int = 0, end: Optional[int] = None) -> Clause:
        assessment = self.assess(text)
        return Clause(
            text=text,
            category=assessment.category.value,
            risk_score=assessment.score,
            risk_level=assessment.risk_level,
            explanation=self._explanation(assessment),
            plain_language=self._plain_language(assessment),
            analogy=CATEGORY_ANALOGIES[assessment.category],
            recommendations=self._recommendations(assessment),
            position=ClausePosition(start=start, end=end if end is not None else start + len(text))
        )

    def analyze_document(self, text: str, filename: str) -> DocumentAnalysis:
        spans = self.text_processor.split_into_clauses(text)
        clauses = [self.analyze_clause(span.text, span.start, span.end) for span in spans]

        overall = mean_rounded(clause.risk_score for clause in clauses)
        high = [c for c in clauses if c.risk_level == RiskLevel.HIGH]
        medium = [c for c in clauses if c.risk_level == RiskLevel.MEDIUM]

        recommendations: List[str] = []
        for clause in sorted(clauses, key=lambda c: c.risk_score, reverse=True):
            for recommendation in clause.recommendations:
                if recommendation not in recommendations:
                    recommendations.append(recommendation)
        recommendations = recommendations[:5]
        if high:
            recommendations.append("Have a qualified lawyer review the high-risk clauses before signing.")

        summary = (
            f"{filename} contains {len(clauses)} clauses: {len(high)} high-risk, "
            f"{len(medium)} medium-risk and {len(clauses) - len(high) - len(medium)} low-risk."
        )
        if high:
            categories = sorted({c.category for c in high})
            summary += f" The main concerns are in: {', '.join(categories)}."

        logger.info(f"Rule-based analysis of '{filename}': {len(clauses)} clauses, overall risk {overall}")
        return DocumentAnalysis(
            overall_risk_score=overall,
            clauses=clauses,
            summary=summary,
            recommendations=recommendations,
            model="rule-based"
        )

    def explain_clause(self, text: str) -> ClauseExplanation:
        assessment = self.assess(text)
        risks = [f"{phrase.phrase.capitalize()}: {phrase.meaning}." for phrase in assessment.matched]
        if not risks and assessment.risk_level != RiskLevel.LOW:
            risks.append(f"{assessment.category.value} clauses often shift risk onto the weaker party.")
        return ClauseExplanation(
            explanation=self._explanation(assessment),
            plain_language=self._plain_language(assessment),
            analogy=CATEGORY_ANALOGIES[assessment.category],
            risks=risks
        )

    # --- Private Helper Methods ---

    def _explanation(self, assessment: ClauseAssessment) -> str:
        explanation = (
            f"Categorized as a {assessment.category.value} clause with a "
            f"{assessment.risk_level.value} risk score of {assessment.score}/100."
        )
        if assessment.matched:
            terms = ", ".join(f'"{phrase.phrase}"' for phrase in assessment.matched)
            explanation += f" Flagged terms: {terms}."
        return explanation

    def _plain_language(self, assessment: ClauseAssessment) -> str:
        parts = [CATEGORY_SUMMARIES[assessment.category]]
        for phrase in assessment.matched[:3]:
            parts.append(f"It means {phrase.meaning}.")
        return " ".join(parts)

    def _recommendations(self, assessment: ClauseAssessment) -> List[str]:
        recommendations = [phrase.recommendation for phrase in assessment.matched]
        general = CATEGORY_RECOMMENDATIONS[assessment.category]
        if general not in recommendations:
            recommendations.append(general)
        return recommendations
