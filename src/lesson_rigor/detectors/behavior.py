"""
BehaviorDetector -- scans a lesson transcript for classroom-climate red flags.

Categories:
  - sarcasm:        dismissive questions, mock agreement, habitual criticism
  - disengagement:  students asleep, missing, silent or refusing
  - public_shame:   exposing a student's mistake or body to the group
  - exclusion:      isolating a student from the group (Lei 13.185, Art. 2 VII)
  - aggression:     insults, hostile commands, threats (Lei 13.185, Art. 2 IV)

Each category yields a Detection; the safety score starts at 100 and loses a
fixed amount per detected category, clamped at 0.
"""

import logging

from ..lexicon import DEFAULT_LEXICON, Lexicon, find_snippets
from ..models import BEHAVIOR_CATEGORIES, BehaviorReport, Detection, Severity

logger = logging.getLogger(__name__)

EVIDENCE_LIMIT = 3
BASE_SAFETY_SCORE = 100

SAFETY_DEDUCTIONS: dict[str, int] = {
    "aggression": 30,
    "exclusion": 25,
    "public_shame": 20,
    "sarcasm": 15,
    "disengagement": 20,
}

NO_ISSUES_SUMMARY = "No problematic behaviors detected"


def category_severity(category: str, fired: set[str]) -> str:
    """Fixed per-category severity, given every category that fired."""
    if category == "aggression":
        return Severity.CRITICAL
    if category == "public_shame":
        return Severity.CRITICAL if "aggression" in fired else Severity.HIGH
    if category == "sarcasm":
        return Severity.HIGH if "public_shame" in fired else Severity.MEDIUM
    # exclusion, disengagement: any occurrence is significant
    return Severity.HIGH


def safety_score(report: BehaviorReport) -> int:
    """100 minus the deduction of every detected category, never below 0."""
    deduction = sum(SAFETY_DEDUCTIONS.get(name, 0) for name in report.detected_categories())
    return max(0, min(BASE_SAFETY_SCORE, BASE_SAFETY_SCORE - deduction))


def build_summary(report: BehaviorReport) -> str:
    fired = [f"{name} ({d.severity})" for name, d in report.detections().items() if d.detected]
    if not fired:
        return NO_ISSUES_SUMMARY
    return f"Detected: {', '.join(fired)}"


class BehaviorDetector:
    """Pattern-based behavior analysis of a transcript.

    Usage:
        detector = BehaviorDetector()
        report = detector.analyze("Só isso? Você tem essa mania.")
        # report.sarcasm.detected is True, report.safety_score == 85
    """

    def __init__(self, lexicon: Lexicon | None = None, evidence_limit: int = EVIDENCE_LIMIT):
        self._lexicon = lexicon or DEFAULT_LEXICON
        # evidence never exceeds three snippets per category
        self._evidence_limit = max(1, min(evidence_limit, EVIDENCE_LIMIT))

    def analyze(self, transcript: str | None) -> BehaviorReport:
        """Run every category against the transcript. None/empty is a clean lesson."""
        text = transcript or ""

        evidence = {
            name: find_snippets(text, self._lexicon.behavior(name), self._evidence_limit)
            for name in BEHAVIOR_CATEGORIES
        }
        fired = {name for name, snippets in evidence.items() if snippets}

        detections = {
            name: (
                Detection(
                    detected=True,
                    severity=category_severity(name, fired),
                    evidence=evidence[name],
                )
                if name in fired
                else Detection.clear()
            )
            for name in BEHAVIOR_CATEGORIES
        }

        report = BehaviorReport(**detections)
        report.safety_score = safety_score(report)
        report.summary = build_summary(report)

        if fired:
            logger.debug(
                f"[BehaviorDetector] {len(fired)} categories fired, "
                f"safety_score={report.safety_score}"
            )
        return report
