"""LegalComplianceChecker -- Lei 13.185 scoring, bands, violations and summary."""

import pytest

from conftest import CLEAN_TRANSCRIPT, HYPOCRISY_TRANSCRIPT
from lesson_rigor.detectors.legal import (
    CLEAN_RECOMMENDATION,
    GRAVE_VIOLATION,
    RECOMMENDATION_TEMPLATES,
    VIOLATION_TEMPLATES,
    LegalComplianceChecker,
    aggregate,
    score_to_compliance,
    score_to_risk,
)
from lesson_rigor.models import ComplianceLevel, Lei13185Result, RiskLevel

CONSTRUCTIVE_LESSON = (
    "Today's lesson is about bullying prevention. Everyone has responsibility. "
    "If you see it, report it to a teacher."
)


@pytest.fixture
def checker():
    return LegalComplianceChecker()


class TestBands:
    @pytest.mark.parametrize(
        "score,compliance,risk",
        [
            (100, ComplianceLevel.FULL, RiskLevel.LOW),
            (80, ComplianceLevel.FULL, RiskLevel.LOW),
            (79, ComplianceLevel.PARTIAL, RiskLevel.MEDIUM),
            (60, ComplianceLevel.PARTIAL, RiskLevel.MEDIUM),
            (59, ComplianceLevel.MINIMAL, RiskLevel.HIGH),
            (30, ComplianceLevel.MINIMAL, RiskLevel.HIGH),
            (29, ComplianceLevel.NONE, RiskLevel.CRITICAL),
            (0, ComplianceLevel.NONE, RiskLevel.CRITICAL),
        ],
    )
    def test_band_edges(self, score, compliance, risk):
        assert score_to_compliance(score) == compliance
        assert score_to_risk(score) == risk


class TestLei13185:
    def test_omission_is_not_a_violation(self, checker):
        report = checker.check_compliance(CLEAN_TRANSCRIPT)
        lei = report.lei_13185
        assert lei.score == 10
        assert lei.compliance_level == ComplianceLevel.NONE
        assert lei.risk_level == RiskLevel.LOW
        assert lei.violations == []
        assert lei.recommendations == [CLEAN_RECOMMENDATION]
        assert report.combined_score == 10
        assert report.overall_risk == RiskLevel.LOW
        assert "no violations" in report.legal_summary

    def test_constructive_lesson_scores_full(self, checker):
        lei = checker.check_compliance(CONSTRUCTIVE_LESSON).lei_13185
        assert lei.constructive_elements == ["prevention", "responsibility", "reporting"]
        assert lei.score == 100
        assert lei.compliance_level == ComplianceLevel.FULL
        assert lei.risk_level == RiskLevel.LOW
        assert lei.recommendations == [CLEAN_RECOMMENDATION]

    def test_grave_violation(self, checker):
        report = checker.check_compliance(HYPOCRISY_TRANSCRIPT)
        lei = report.lei_13185
        assert lei.score == 0
        assert lei.risk_level == RiskLevel.CRITICAL
        assert lei.violations == [GRAVE_VIOLATION, VIOLATION_TEMPLATES["sarcasm"]]
        assert lei.recommendations[0] == RECOMMENDATION_TEMPLATES["grave"]
        # missing constructive elements are recommended when bullying is taught
        for name in ("prevention", "responsibility", "reporting"):
            assert RECOMMENDATION_TEMPLATES[name] in lei.recommendations
        assert lei.bullying_types_mentioned == ["Cyberbullying"]
        assert lei.bullying_types_practiced == ["Verbal"]
        assert lei.preventive_approach is True
        assert report.overall_compliance == ComplianceLevel.NONE
        assert report.overall_risk == RiskLevel.CRITICAL
        assert report.high_risk
        assert GRAVE_VIOLATION in report.legal_summary

    def test_school_obligations_reported(self, checker):
        lei = checker.check_compliance(
            "A escola mantém um programa de prevenção, oferece apoio psicológico "
            "e vai envolver a família."
        ).lei_13185
        assert lei.obligations_mentioned == [
            "prevention_programs",
            "psychological_assistance",
            "family_involvement",
        ]

    def test_obligations_do_not_change_score(self, checker):
        plain = checker.check_compliance("We talk about the weekend.").lei_13185
        lei = checker.check_compliance("We run awareness campaigns and involve parents.").lei_13185
        assert lei.obligations_mentioned == ["educational_campaigns", "family_involvement"]
        assert lei.score == plain.score

    def test_no_obligations_in_hypocrisy_case(self, checker):
        assert checker.check_compliance(HYPOCRISY_TRANSCRIPT).lei_13185.obligations_mentioned == []

    def test_violation_without_topic(self, checker):
        lei = checker.check_compliance(
            "We prevent conflicts and take responsibility. Report it. Shut up."
        ).lei_13185
        # 100 constructive points, minus 20 for aggression
        assert lei.score == 80
        assert lei.violations == [VIOLATION_TEMPLATES["aggression"]]
        assert lei.risk_level == RiskLevel.LOW
        assert GRAVE_VIOLATION not in lei.violations

    def test_inclusion_gap_escalates_risk(self, checker):
        lei = checker.check_compliance("Cadê? Abram o livro na página 12.").lei_13185
        assert lei.inclusion_gap is True
        assert lei.violations == []
        assert lei.risk_level == RiskLevel.MEDIUM
        assert RECOMMENDATION_TEMPLATES["inclusion_gap"] in lei.recommendations

    def test_punitive_approach(self, checker):
        lei = checker.check_compliance(
            "Anyone who does this gets detention and will be suspended."
        ).lei_13185
        assert lei.preventive_approach is False
        assert RECOMMENDATION_TEMPLATES["punitive"] in lei.recommendations

    def test_recommendations_deduplicated(self, checker):
        lei = checker.check_compliance("Only you? Shut up.").lei_13185
        shared = RECOMMENDATION_TEMPLATES["sarcasm"]
        assert lei.recommendations.count(shared) == 1

    def test_none_transcript(self, checker):
        assert checker.check_compliance(None).combined_score == 10


class TestAggregate:
    def test_no_dimensions(self):
        assert aggregate({}) == (100, ComplianceLevel.FULL, RiskLevel.LOW)

    def test_mean_and_worst_risk(self):
        dims = {
            "a": Lei13185Result(score=50, risk_level=RiskLevel.HIGH),
            "b": Lei13185Result(score=81, risk_level=RiskLevel.LOW),
        }
        assert aggregate(dims) == (66, ComplianceLevel.PARTIAL, RiskLevel.HIGH)
