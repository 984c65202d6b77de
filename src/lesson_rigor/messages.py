"""
Human-readable discrepancy messages.

Everything here is a pure function of a list of issue tags, so messages can be
tested without running any detector.

Issue tags:
  - one per detected behavior category (sarcasm, disengagement, ...)
  - "hypocrisy" when the lesson teaches about bullying while practicing it
  - "legal_risk" when the overall legal risk is high or critical
"""

from typing import Iterable, Mapping

from .models import BehaviorReport, ComplianceReport, ContextReport

HYPOCRISY = "hypocrisy"
LEGAL_RISK = "legal_risk"

ISSUE_LABELS: dict[str, str] = {
    "sarcasm": "sarcasm patterns",
    "disengagement": "student disengagement",
    "public_shame": "public shaming of students",
    "exclusion": "exclusion of students",
    "aggression": "verbal aggression",
    HYPOCRISY: "teaching-behavior contradiction (hypocrisy)",
    LEGAL_RISK: "Lei 13.185 legal risk",
}

REMEDIATIONS: dict[str, str] = {
    "sarcasm": "replace sarcastic remarks with direct, respectful feedback",
    "disengagement": "re-engage sleeping, silent or absent students",
    "public_shame": "address mistakes privately instead of in front of the class",
    "exclusion": "include every student in group activities",
    "aggression": "remove insults and threats from classroom language",
    HYPOCRISY: "align classroom conduct with the anti-bullying message being taught",
    LEGAL_RISK: "review the lesson against Lei 13.185 obligations",
}

NO_MARKERS_REASON = (
    "Score gap with no specific markers detected by the rigor checks; "
    "the external score may be inflated"
)
NO_MARKERS_RECOMMENDATION = "Maintain current practices and review the external score manually"


def compose_message(
    issues: Iterable[str],
    templates: Mapping[str, str],
    fallback: str,
    single: str = "Detected {}",
    multiple: str = "Multiple issues: {}",
    separator: str = ", ",
) -> str:
    """Format issue tags as one sentence. Unknown tags are shown as-is."""
    parts = [templates.get(tag, tag) for tag in dict.fromkeys(issues)]
    if not parts:
        return fallback
    if len(parts) == 1:
        return single.format(parts[0])
    return multiple.format(separator.join(parts))


def build_reason(issues: Iterable[str]) -> str:
    return compose_message(issues, ISSUE_LABELS, NO_MARKERS_REASON)


def build_recommendation(issues: Iterable[str]) -> str:
    return compose_message(
        issues,
        REMEDIATIONS,
        NO_MARKERS_RECOMMENDATION,
        single="Recommended: {}",
        multiple="Recommended actions: {}",
        separator="; ",
    )


def collect_issues(
    behavior: BehaviorReport, context: ContextReport, compliance: ComplianceReport
) -> list[str]:
    """Issue tags in fixed order: behavior categories, hypocrisy, legal risk."""
    issues = behavior.detected_categories()
    if context.teaching_about_bullying and context.practicing_bullying:
        issues.append(HYPOCRISY)
    if compliance.high_risk:
        issues.append(LEGAL_RISK)
    return issues
