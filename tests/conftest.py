"""Shared fixtures -- sample transcripts, a small injected lexicon, stub leaves."""

import pytest

from lesson_rigor.lexicon import Lexicon
from lesson_rigor.models import BehaviorReport, ComplianceReport, ContextReport

CLEAN_TRANSCRIPT = "Today we are learning fractions. Please open your books to page 12."
HYPOCRISY_TRANSCRIPT = "Let's discuss cyberbullying today. Only you, Pedro?"
FIVE_SARCASM_TRANSCRIPT = (
    "Only you? What a surprise. Yeah, right. Is that all? Well done, genius."
)

# One trigger per behavior category, none of them constructive or topical
BEHAVIOR_TRIGGERS = {
    "sarcasm": "Only you?",
    "disengagement": "Lucas is asleep.",
    "public_shame": "Wrong again.",
    "exclusion": "Nobody wants you.",
    "aggression": "Shut up.",
}


@pytest.fixture
def clean_transcript():
    return CLEAN_TRANSCRIPT


@pytest.fixture
def hypocrisy_transcript():
    return HYPOCRISY_TRANSCRIPT


@pytest.fixture
def tiny_lexicon():
    """Short patterns so unit tests don't need full trigger phrases."""
    return Lexicon.build(
        behaviors={"sarcasm": [r"\bugh\b"], "aggression": [r"\bgrr\b"]},
        topics={"bullying": [r"\bbully\b"]},
        constructive={"prevention": [r"\bprevent\b"]},
    )


def analysis_with_score(score):
    return {"summary": {"conformidade_geral": score}, "model": "mock-model"}


class StubBehaviorDetector:
    def __init__(self, score=100):
        self.score = score

    def analyze(self, transcript):
        return BehaviorReport(safety_score=self.score)


class StubContextDetector:
    def __init__(self, score=90):
        self.score = score

    def analyze(self, transcript):
        return ContextReport(hypocrisy_score=self.score)


class StubComplianceChecker:
    def __init__(self, score=10):
        self.score = score

    def check_compliance(self, transcript):
        return ComplianceReport(combined_score=self.score)


class ExplodingDetector:
    """Leaf that crashes on every call."""

    def analyze(self, transcript):
        raise RuntimeError("detector crashed")

    def check_compliance(self, transcript):
        raise RuntimeError("checker crashed")
