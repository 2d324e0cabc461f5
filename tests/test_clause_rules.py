from legalease.models import ClauseCategory, RiskLevel
from legalease.services.clause_rules import RuleBasedAnalyzer

from conftest import LEASE_TEXT

INDEMNITY = ("The Tenant shall indemnify and hold harmless the Landlord against all claims, "
             "with unlimited liability.")
TERMINATION = "Either party may terminate this Agreement by giving thirty days written notice to the other party."
ENTIRE_AGREEMENT = "This Agreement constitutes the entire agreement between the parties hereto."


def test_categorize_by_keyword_hits():
    rules = RuleBasedAnalyzer()
    assert rules.categorize(INDEMNITY) == ClauseCategory.LIABILITY
    assert rules.categorize(TERMINATION) == ClauseCategory.TERMINATION
    assert rules.categorize(ENTIRE_AGREEMENT) == ClauseCategory.GENERAL


def test_risky_phrases_push_score_to_high():
    assessment = RuleBasedAnalyzer().assess(INDEMNITY)

    assert assessment.score == 100
    assert assessment.risk_level == RiskLevel.HIGH
    assert [p.phrase for p in assessment.matched] == ["unlimited liability", "indemnify", "hold harmless"]


def test_mitigating_phrases_lower_score():
    assessment = RuleBasedAnalyzer().assess(TERMINATION)
    # base 15 + termination 10 - written notice 5
    assert assessment.score == 20
    assert assessment.risk_level == RiskLevel.LOW


def test_duplicate_meanings_count_once():
    text = "This subscription will automatically renew and auto-renew each year."
    assessment = RuleBasedAnalyzer().assess(text)
    assert len(assessment.matched) == 1


def test_analyze_clause_fills_every_field():
    clause = RuleBasedAnalyzer().analyze_clause(INDEMNITY, start=10)

    assert clause.category == "Liability"
    assert clause.plain_language.startswith("This clause decides who pays")
    assert "borrow someone's car" in clause.analogy
    assert clause.recommendations[-1] == "Make sure liability is capped and shared fairly between the parties."
    assert clause.position.start == 10
    assert clause.position.end == 10 + len(INDEMNITY)


def test_analyze_document():
    analysis = RuleBasedAnalyzer().analyze_document(LEASE_TEXT, "lease.txt")

    assert [c.risk_score for c in analysis.clauses] == [100, 20, 15]
    assert analysis.overall_risk_score == 45
    assert analysis.risk_level == RiskLevel.MEDIUM
    assert analysis.model == "rule-based"
    assert analysis.summary.startswith("lease.txt contains 3 clauses: 1 high-risk")
    assert "Liability" in analysis.summary
    assert analysis.recommendations[-1].startswith("Have a qualified lawyer review")


def test_explain_clause_lists_flagged_risks():
    explanation = RuleBasedAnalyzer().explain_clause(INDEMNITY)

    assert explanation.risks[0] == "Unlimited liability: there is no cap on what you could owe."
    assert "Liability clause" in explanation.explanation
    assert explanation.analogy


def test_explain_low_risk_clause_has_no_risks():
    assert RuleBasedAnalyzer().explain_clause(ENTIRE_AGREEMENT).risks == []
