"""
LegalComplianceChecker -- evaluates a transcript against Lei 13.185/2015
(Programa de Combate à Intimidação Sistemática).

The lei_13185 check combines three independent signals:
  - constructive content (prevention, responsibility, reporting) raises the score
  - bullying markers in the classroom are violations and lower it
  - inclusion gaps (students missing or asleep) escalate the risk level

Omission is never a violation: a lesson with no constructive content keeps a
floor score and, without violations, a low risk. Art. 4 school obligations
mentioned in the lesson are reported but do not change the score.
"""

import logging

from ..lexicon import DEFAULT_LEXICON, Lexicon, any_match, count_matching, matching_names
from ..models import ComplianceLevel, ComplianceReport, Lei13185Result, RiskLevel
from ..scoring import round_half_up

logger = logging.getLogger(__name__)

LEI_13185 = "lei_13185"
BULLYING_TOPIC = "bullying"

CONSTRUCTIVE_POINTS: dict[str, int] = {
    "prevention": 30,
    "responsibility": 30,
    "reporting": 40,
}
CONSTRUCTIVE_FLOOR = 10
MAX_SCORE = 100

# Ordered from most to least severe; the first violation is the dominant one.
VIOLATION_PENALTIES: dict[str, int] = {
    "aggression": 20,
    "public_shame": 20,
    "exclusion": 20,
    "sarcasm": 15,
    "disengagement": 15,
}
GRAVE_VIOLATION_PENALTY = 30

GRAVE_VIOLATION = (
    "Grave violation: bullying-adjacent behavior during a lesson about bullying "
    "(pedagogical contradiction)"
)
VIOLATION_TEMPLATES: dict[str, str] = {
    "aggression": "Verbal aggression toward students (Art. 2, IV - Verbal)",
    "public_shame": "Public exposure of a student (Art. 2, II - Psychological)",
    "exclusion": "Exclusion of a student from the group (Art. 2, VII - Social)",
    "sarcasm": "Sarcasm directed at students (Art. 2, IV - Verbal)",
    "disengagement": "Disengaged or absent students left unaddressed (Art. 4 - inclusion of all students)",
}

RECOMMENDATION_TEMPLATES: dict[str, str] = {
    "grave": "Urgent: review the pedagogical approach, as classroom conduct contradicts the topic being taught",
    "aggression": "Replace sarcasm and aggressive language with assertive, respectful communication",
    "sarcasm": "Replace sarcasm and aggressive language with assertive, respectful communication",
    "public_shame": "Address individual issues privately, never exposing students in front of the class",
    "exclusion": "Ensure every student is included in class activities",
    "disengagement": "Re-engage disengaged or absent students individually",
    "inclusion_gap": "Follow up on students who are missing or asleep so the whole class takes part",
    "punitive": "Prefer a preventive, educational approach over punishment (Art. 4)",
    "prevention": "Include explicit bullying-prevention guidance (Art. 4)",
    "responsibility": "Frame individual responsibility and the consequences of bullying",
    "reporting": "Tell students which channels they can use to report bullying",
}
CLEAN_RECOMMENDATION = "Maintain current practices and continue preventive work"

PRACTICED_TYPES: dict[str, str] = {
    "sarcasm": "Verbal",
    "aggression": "Verbal",
    "public_shame": "Psychological",
    "exclusion": "Social",
}


def score_to_compliance(score: int) -> str:
    if score >= 80:
        return ComplianceLevel.FULL
    if score >= 60:
        return ComplianceLevel.PARTIAL
    if score >= 30:
        return ComplianceLevel.MINIMAL
    return ComplianceLevel.NONE


def score_to_risk(score: int) -> str:
    if score >= 80:
        return RiskLevel.LOW
    if score >= 60:
        return RiskLevel.MEDIUM
    if score >= 30:
        return RiskLevel.HIGH
    return RiskLevel.CRITICAL


def _dedupe(items: list[str]) -> list[str]:
    return list(dict.fromkeys(items))


class LegalComplianceChecker:
    """Deterministic statutory compliance check.

    Usage:
        report = LegalComplianceChecker().check_compliance(transcript)
        report.lei_13185.violations   # fixed template strings
        report.overall_risk           # worst risk across dimensions
    """

    def __init__(self, lexicon: Lexicon | None = None):
        self._lexicon = lexicon or DEFAULT_LEXICON

    def check_compliance(self, transcript: str | None) -> ComplianceReport:
        text = transcript or ""
        dimensions = {LEI_13185: self.check_lei_13185(text)}
        combined, overall_compliance, overall_risk = aggregate(dimensions)
        lei = dimensions[LEI_13185]

        if lei.violations:
            logger.debug(
                f"[LegalComplianceChecker] {len(lei.violations)} violations, "
                f"risk={lei.risk_level}"
            )

        return ComplianceReport(
            lei_13185=lei,
            overall_compliance=overall_compliance,
            overall_risk=overall_risk,
            combined_score=combined,
            legal_summary=build_legal_summary(lei, overall_compliance, overall_risk),
        )

    def check_lei_13185(self, text: str) -> Lei13185Result:
        lexicon = self._lexicon

        constructive = matching_names(text, lexicon.constructive)
        practiced = [
            family for family in VIOLATION_PENALTIES if any_match(text, lexicon.behavior(family))
        ]
        teaching_bullying = any_match(text, lexicon.topics.get(BULLYING_TOPIC, ()))
        grave = teaching_bullying and bool(practiced)
        inclusion_gap = any_match(text, lexicon.inclusion_gaps)

        preventive_count = count_matching(text, lexicon.preventive)
        punitive_count = count_matching(text, lexicon.punitive)

        # Score: constructive points with a floor, minus violation penalties
        points = sum(CONSTRUCTIVE_POINTS.get(name, 0) for name in constructive)
        base = max(CONSTRUCTIVE_FLOOR, min(MAX_SCORE, points))
        penalty = sum(VIOLATION_PENALTIES[f] for f in practiced)
        if grave:
            penalty += GRAVE_VIOLATION_PENALTY
        score = max(0, min(MAX_SCORE, base - penalty))

        violations = ([GRAVE_VIOLATION] if grave else []) + [
            VIOLATION_TEMPLATES[f] for f in practiced
        ]
        violations = _dedupe(violations)

        risk = score_to_risk(score) if violations else RiskLevel.LOW
        if inclusion_gap:
            risk = RiskLevel.escalate(risk)
        if grave:
            risk = RiskLevel.CRITICAL

        recommendations = ["grave"] if grave else []
        recommendations += practiced
        if inclusion_gap:
            recommendations.append("inclusion_gap")
        if punitive_count > preventive_count:
            recommendations.append("punitive")
        if teaching_bullying:
            recommendations += [name for name in CONSTRUCTIVE_POINTS if name not in constructive]
        recommendation_texts = _dedupe([RECOMMENDATION_TEMPLATES[r] for r in recommendations])

        return Lei13185Result(
            compliance_level=score_to_compliance(score),
            score=score,
            risk_level=risk,
            violations=violations,
            recommendations=recommendation_texts or [CLEAN_RECOMMENDATION],
            constructive_elements=constructive,
            bullying_types_mentioned=matching_names(text, lexicon.bullying_types),
            bullying_types_practiced=_dedupe(
                [PRACTICED_TYPES[f] for f in practiced if f in PRACTICED_TYPES]
            ),
            inclusion_gap=inclusion_gap,
            preventive_approach=preventive_count > punitive_count,
            obligations_mentioned=matching_names(text, lexicon.obligations),
        )


def aggregate(dimensions: dict[str, Lei13185Result]) -> tuple[int, str, str]:
    """(combined_score, overall_compliance, overall_risk) across statutory dimensions."""
    if not dimensions:
        return MAX_SCORE, ComplianceLevel.FULL, RiskLevel.LOW
    scores = [d.score for d in dimensions.values()]
    combined = round_half_up(sum(scores), len(scores))
    overall_risk = RiskLevel.worst([d.risk_level for d in dimensions.values()])
    return combined, score_to_compliance(combined), overall_risk


def build_legal_summary(lei: Lei13185Result, overall_compliance: str, overall_risk: str) -> str:
    if not lei.violations:
        return (
            f"Lei 13.185/2015: no violations detected "
            f"({overall_compliance} compliance on constructive content, {overall_risk} risk)."
        )
    summary = (
        f"Lei 13.185/2015: {overall_compliance} compliance, {overall_risk} risk. "
        f"Main violation: {lei.violations[0]}."
    )
    if len(lei.violations) > 1:
        summary += f" {len(lei.violations)} violations identified."
    return summary
