"""
lesson_rigor -- deterministic rigor validation for AI-generated lesson analyses.

Combines behavior, context and Lei 13.185 compliance checks into a rigorous
score and flags external scores that look inflated.
"""

from .config import ValidatorConfig
from .detectors import BehaviorDetector, ContextDetector, LegalComplianceChecker
from .lexicon import DEFAULT_LEXICON, Lexicon
from .models import (
    BehaviorReport,
    ComplianceReport,
    ContextReport,
    DiscrepancyWarning,
    ValidationReport,
)
from .scoring import DISCREPANCY_THRESHOLD, rigorous_score
from .validator import AnalysisValidator, InputValidationError, validate_analysis

__version__ = "0.1.0"

__all__ = [
    "AnalysisValidator",
    "BehaviorDetector",
    "BehaviorReport",
    "ComplianceReport",
    "ContextDetector",
    "ContextReport",
    "DEFAULT_LEXICON",
    "DISCREPANCY_THRESHOLD",
    "DiscrepancyWarning",
    "InputValidationError",
    "LegalComplianceChecker",
    "Lexicon",
    "ValidationReport",
    "ValidatorConfig",
    "rigorous_score",
    "validate_analysis",
]
