"""ContextDetector -- topic classification and the hypocrisy cross-check."""

import pytest

from conftest import CLEAN_TRANSCRIPT, HYPOCRISY_TRANSCRIPT
from lesson_rigor.detectors.context import (
    CONTRADICTION_RECOMMENDATION,
    NO_ISSUE_RECOMMENDATION,
    PRACTICE_ONLY_RECOMMENDATION,
    ContextDetector,
)
from lesson_rigor.models import ContextReport


@pytest.fixture
def detector():
    return ContextDetector()


class TestTopics:
    def test_no_topic(self, detector):
        assert detector.detect_topics(CLEAN_TRANSCRIPT) == []

    def test_cyberbullying_tags_bullying_and_digital_safety(self, detector):
        assert detector.detect_topics(HYPOCRISY_TRANSCRIPT) == ["bullying", "digital_safety"]

    def test_respect(self, detector):
        assert detector.detect_topics("Today we talk about respect and empathy.") == ["respect"]

    def test_portuguese_topics(self, detector):
        topics = detector.detect_topics("Aula sobre a Lei 13.185 e cidadania.")
        assert topics == ["bullying", "citizenship"]


class TestHypocrisy:
    def test_baseline(self, detector):
        report = detector.analyze(CLEAN_TRANSCRIPT)
        assert report.teaching_about_bullying is False
        assert report.practicing_bullying is False
        assert report.contradictions == []
        assert report.hypocrisy_score == 90
        assert report.recommendation == NO_ISSUE_RECOMMENDATION

    def test_teaching_without_practice_stays_at_baseline(self, detector):
        report = detector.analyze("Let's discuss cyberbullying and how to report it.")
        assert report.teaching_about_bullying is True
        assert report.practicing_bullying is False
        assert report.hypocrisy_score == 90

    def test_practice_without_topic(self, detector):
        report = detector.analyze("Only you? Open your books.")
        assert report.teaching_about_bullying is False
        assert report.practicing_bullying is True
        assert report.contradictions == []
        assert report.hypocrisy_score == 55
        assert report.recommendation == PRACTICE_ONLY_RECOMMENDATION

    def test_contradiction(self, detector):
        report = detector.analyze(HYPOCRISY_TRANSCRIPT)
        assert report.teaching_about_bullying is True
        assert report.practicing_bullying is True
        assert report.hypocrisy_score == 20
        assert report.recommendation == CONTRADICTION_RECOMMENDATION
        assert len(report.contradictions) == 1
        contradiction = report.contradictions[0]
        assert contradiction.topic == "bullying"
        assert contradiction.behavior == "sarcasm"
        assert contradiction.evidence == ["Only you, Pedro?"]

    def test_one_contradiction_per_practiced_family(self, detector):
        report = detector.analyze("This lesson is about bullying. Only you? Shut up.")
        assert [c.behavior for c in report.contradictions] == ["sarcasm", "aggression"]

    def test_reads_patterns_not_behavior_report(self, tiny_lexicon):
        report = ContextDetector(lexicon=tiny_lexicon).analyze("no bully talk, ugh")
        assert report.detected_topics == ["bullying"]
        assert report.has_contradiction
        assert report.hypocrisy_score == 20


class TestSafeDefault:
    def test_safe_default_is_full_marks(self):
        report = ContextReport.safe_default()
        assert report.hypocrisy_score == 90
        assert report.contradictions == []
        assert report.recommendation == NO_ISSUE_RECOMMENDATION
