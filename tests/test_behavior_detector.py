"""BehaviorDetector -- category detection, severity, evidence and safety score."""

import pytest

from conftest import BEHAVIOR_TRIGGERS, CLEAN_TRANSCRIPT, FIVE_SARCASM_TRANSCRIPT
from lesson_rigor.detectors.behavior import (
    NO_ISSUES_SUMMARY,
    SAFETY_DEDUCTIONS,
    BehaviorDetector,
    category_severity,
)
from lesson_rigor.models import BEHAVIOR_CATEGORIES, Severity


@pytest.fixture
def detector():
    return BehaviorDetector()


class TestCleanLesson:
    def test_no_detections(self, detector):
        report = detector.analyze(CLEAN_TRANSCRIPT)
        assert report.detected_categories() == []
        assert report.safety_score == 100
        assert report.summary == NO_ISSUES_SUMMARY

    @pytest.mark.parametrize("transcript", ["", None])
    def test_empty_transcript_is_clean(self, detector, transcript):
        report = detector.analyze(transcript)
        assert report.safety_score == 100
        for detection in report.detections().values():
            assert detection.detected is False
            assert detection.severity is None
            assert detection.evidence == []


class TestCategories:
    @pytest.mark.parametrize("category", BEHAVIOR_CATEGORIES)
    def test_single_trigger_fires_only_its_category(self, detector, category):
        report = detector.analyze(BEHAVIOR_TRIGGERS[category])
        assert report.detected_categories() == [category]
        assert report.safety_score == 100 - SAFETY_DEDUCTIONS[category]

    def test_sarcasm_evidence_is_verbatim(self, detector):
        report = detector.analyze("Let's discuss cyberbullying today. Only you, Pedro?")
        assert report.sarcasm.detected
        assert report.sarcasm.evidence == ["Only you, Pedro?"]
        assert report.sarcasm.severity == Severity.MEDIUM

    def test_matching_is_case_insensitive(self, detector):
        assert detector.analyze("SHUT UP").aggression.detected
        assert detector.analyze("cala a boca").aggression.detected

    def test_portuguese_patterns(self, detector):
        report = detector.analyze("Só isso? Você tem essa mania. Cadê o João?")
        assert report.sarcasm.detected
        assert report.disengagement.detected

    def test_aggression_evidence(self, detector):
        report = detector.analyze("Shut up, you idiot.")
        assert report.aggression.evidence == ["Shut up", "idiot"]
        assert report.aggression.severity == Severity.CRITICAL
        assert report.safety_score == 70


class TestEvidenceCap:
    def test_at_most_three_snippets_in_order(self, detector):
        report = detector.analyze(FIVE_SARCASM_TRANSCRIPT)
        assert report.sarcasm.evidence == ["Only you?", "What a surprise", "Yeah, right"]

    def test_repeated_phrase_counted_once(self, detector):
        report = detector.analyze("Shut up. Shut up. Shut up.")
        assert report.aggression.evidence == ["Shut up"]

    def test_custom_evidence_limit(self):
        report = BehaviorDetector(evidence_limit=1).analyze(FIVE_SARCASM_TRANSCRIPT)
        assert report.sarcasm.evidence == ["Only you?"]

    def test_limit_above_three_is_capped(self):
        report = BehaviorDetector(evidence_limit=5).analyze(FIVE_SARCASM_TRANSCRIPT)
        assert len(report.sarcasm.evidence) == 3


class TestSeverity:
    def test_public_shame_escalates_with_aggression(self):
        assert category_severity("public_shame", {"public_shame"}) == Severity.HIGH
        assert (
            category_severity("public_shame", {"public_shame", "aggression"})
            == Severity.CRITICAL
        )

    def test_sarcasm_escalates_with_public_shame(self, detector):
        report = detector.analyze("Only you? Wrong again.")
        assert report.sarcasm.severity == Severity.HIGH
        assert report.public_shame.severity == Severity.HIGH
        assert report.safety_score == 65

    def test_shame_and_aggression(self, detector):
        report = detector.analyze("Everyone, look at what Ana did. You are so stupid.")
        assert report.public_shame.severity == Severity.CRITICAL
        assert report.aggression.severity == Severity.CRITICAL
        assert report.safety_score == 50

    @pytest.mark.parametrize("category", ["exclusion", "disengagement"])
    def test_fixed_high(self, category):
        assert category_severity(category, {category}) == Severity.HIGH


class TestSafetyScore:
    def test_floor_at_zero(self, detector):
        report = detector.analyze(" ".join(BEHAVIOR_TRIGGERS.values()))
        assert report.detected_categories() == list(BEHAVIOR_CATEGORIES)
        assert report.safety_score == 0

    def test_summary_lists_categories_with_severity(self, detector):
        report = detector.analyze("Only you?")
        assert report.summary == "Detected: sarcasm (medium)"

    def test_deterministic(self, detector):
        text = " ".join(BEHAVIOR_TRIGGERS.values())
        assert detector.analyze(text).to_dict() == detector.analyze(text).to_dict()


class TestInjectedLexicon:
    def test_small_pattern_set(self, tiny_lexicon):
        report = BehaviorDetector(lexicon=tiny_lexicon).analyze("ugh, again")
        assert report.sarcasm.evidence == ["ugh"]
        # categories absent from the lexicon never fire
        assert not report.exclusion.detected
        assert report.safety_score == 85
