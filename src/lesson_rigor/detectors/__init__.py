"""Leaf detectors. Each one reads a transcript and nothing else."""

from .behavior import BehaviorDetector
from .context import ContextDetector
from .legal import LegalComplianceChecker

__all__ = ["BehaviorDetector", "ContextDetector", "LegalComplianceChecker"]
