"""Data models for the rigor-validation pipeline.

All reports are plain dataclasses rendered with ``to_dict()`` so the
validator can attach them to the caller's analysis record as JSON-ready
sub-records.
"""

from dataclasses import asdict, dataclass, field
from typing import Any


# =============================================================================
# ENUMERATIONS (string constants)
# =============================================================================


class Severity:
    """Severity of a behavior detection."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class ComplianceLevel:
    """Banded statutory compliance."""

    FULL = "full"
    PARTIAL = "partial"
    MINIMAL = "minimal"
    NONE = "none"


class RiskLevel:
    """Banded legal risk, ordered from least to most severe."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"

    ORDER = (LOW, MEDIUM, HIGH, CRITICAL)

    @classmethod
    def rank(cls, level: str) -> int:
        return cls.ORDER.index(level)

    @classmethod
    def escalate(cls, level: str) -> str:
        """One step more severe, saturating at critical."""
        return cls.ORDER[min(cls.rank(level) + 1, len(cls.ORDER) - 1)]

    @classmethod
    def worst(cls, levels: list[str]) -> str:
        if not levels:
            return cls.LOW
        return max(levels, key=cls.rank)


BEHAVIOR_CATEGORIES = ("sarcasm", "disengagement", "public_shame", "exclusion", "aggression")


# =============================================================================
# BEHAVIOR
# =============================================================================


@dataclass
class Detection:
    """One behavior category's verdict.

    Attributes:
        detected: True when at least one pattern of the category matched.
        severity: One of Severity constants, or None when not detected.
        evidence: Up to three verbatim snippets, in order of first occurrence.
    """

    detected: bool = False
    severity: str | None = None
    evidence: list[str] = field(default_factory=list)

    @classmethod
    def clear(cls) -> "Detection":
        return cls(detected=False, severity=None, evidence=[])

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass
class BehaviorReport:
    """Classroom-climate red flags found in a transcript."""

    sarcasm: Detection = field(default_factory=Detection.clear)
    disengagement: Detection = field(default_factory=Detection.clear)
    public_shame: Detection = field(default_factory=Detection.clear)
    exclusion: Detection = field(default_factory=Detection.clear)
    aggression: Detection = field(default_factory=Detection.clear)
    safety_score: int = 100
    summary: str = "No problematic behaviors detected"

    @classmethod
    def safe_default(cls) -> "BehaviorReport":
        return cls()

    def detections(self) -> dict[str, Detection]:
        """Category name -> Detection, in fixed category order."""
        return {name: getattr(self, name) for name in BEHAVIOR_CATEGORIES}

    def detected_categories(self) -> list[str]:
        return [name for name, d in self.detections().items() if d.detected]

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


# =============================================================================
# CONTEXT
# =============================================================================


@dataclass
class Contradiction:
    """A lesson topic contradicted by observed behavior."""

    topic: str
    behavior: str
    description: str
    evidence: list[str] = field(default_factory=list)


@dataclass
class ContextReport:
    """Lesson topics and the teaching-versus-practice cross-check."""

    detected_topics: list[str] = field(default_factory=list)
    teaching_about_bullying: bool = False
    practicing_bullying: bool = False
    contradictions: list[Contradiction] = field(default_factory=list)
    hypocrisy_score: int = 90
    recommendation: str = ""

    @classmethod
    def safe_default(cls) -> "ContextReport":
        from .detectors.context import NO_ISSUE_RECOMMENDATION

        return cls(recommendation=NO_ISSUE_RECOMMENDATION)

    @property
    def has_contradiction(self) -> bool:
        return bool(self.contradictions)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


# =============================================================================
# COMPLIANCE
# =============================================================================


@dataclass
class Lei13185Result:
    """Anti-bullying law (Lei 13.185/2015) evaluation of one transcript."""

    compliance_level: str = ComplianceLevel.FULL
    score: int = 100
    risk_level: str = RiskLevel.LOW
    violations: list[str] = field(default_factory=list)
    recommendations: list[str] = field(default_factory=list)
    constructive_elements: list[str] = field(default_factory=list)
    bullying_types_mentioned: list[str] = field(default_factory=list)
    bullying_types_practiced: list[str] = field(default_factory=list)
    inclusion_gap: bool = False
    preventive_approach: bool = False
    obligations_mentioned: list[str] = field(default_factory=list)


@dataclass
class ComplianceReport:
    """Statutory compliance aggregated across every evaluated dimension."""

    lei_13185: Lei13185Result = field(default_factory=Lei13185Result)
    overall_compliance: str = ComplianceLevel.FULL
    overall_risk: str = RiskLevel.LOW
    combined_score: int = 100
    legal_summary: str = ""

    @classmethod
    def safe_default(cls) -> "ComplianceReport":
        return cls(legal_summary="Compliance check unavailable; no violations recorded.")

    @property
    def high_risk(self) -> bool:
        return self.overall_risk in (RiskLevel.HIGH, RiskLevel.CRITICAL)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


# =============================================================================
# VALIDATION OUTPUT
# =============================================================================


@dataclass
class ScoreBreakdown:
    """Each leaf's weighted contribution to the rigorous score."""

    behavior_component: int
    context_component: int
    legal_component: int


@dataclass
class ValidationReport:
    """Always attached to the validated record."""

    behavior_score: int
    context_score: int
    legal_score: int
    rigorous_score: int
    rigorous_score_normalized: float
    score_breakdown: ScoreBreakdown
    detected_issues_count: int

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass
class DiscrepancyWarning:
    """Attached only when the external score exceeds the rigorous one by too much."""

    current_score: float
    rigorous_score: int
    delta: float
    lei_13185_risk: str
    overall_risk: str
    reason: str
    recommendation: str
    type: str = "inflated_score"

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.type,
            "current_score": self.current_score,
            "rigorous_score": self.rigorous_score,
            "delta": self.delta,
            "lei_13185_risk": self.lei_13185_risk,
            "overall_risk": self.overall_risk,
            "reason": self.reason,
            "recommendation": self.recommendation,
        }
