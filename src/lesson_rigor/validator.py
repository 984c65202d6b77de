"""
AnalysisValidator -- cross-checks an externally produced lesson score against
three deterministic detectors.

Pipeline:
  1. Parse inputs at the boundary (malformed input -> input returned unchanged)
  2. Run the leaves: BehaviorDetector, ContextDetector, LegalComplianceChecker
  3. Combine them into the rigorous score (40/30/30)
  4. Extract the external score and flag inflation above the threshold
  5. Return a deep copy of the record with the validation keys added

The validator never raises across its public boundary. A leaf that fails is
logged and replaced by its safe default, so one broken detector cannot block
delivery of an analysis. If the record itself cannot be augmented (e.g. it
holds uncopyable values) the input is returned unchanged.

Usage:
    validator = AnalysisValidator()
    result = validator.validate(transcript, analysis_result)
    result["rigorous_score"]        # 0..100
    result.get("validation_warning")  # present only when the score looks inflated
"""

import asyncio
import copy
import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Callable, Mapping

from .config import ValidatorConfig
from .detectors import BehaviorDetector, ContextDetector, LegalComplianceChecker
from .extractors import extract_current_score
from .lexicon import Lexicon
from .messages import build_reason, build_recommendation, collect_issues
from .models import (
    BehaviorReport,
    ComplianceReport,
    ContextReport,
    DiscrepancyWarning,
    ScoreBreakdown,
    ValidationReport,
)
from .scoring import WEIGHT_SCALE, is_inflated, rigorous_score, weighted_components

logger = logging.getLogger(__name__)


class InputValidationError(ValueError):
    """Raised when the validator's inputs have the wrong shape."""

    pass


def ensure_inputs(transcript: Any, analysis_result: Any) -> tuple[str, Mapping[str, Any]]:
    """Type-check both inputs. None is accepted as an empty transcript."""
    if transcript is None:
        transcript = ""
    if not isinstance(transcript, str):
        raise InputValidationError(
            f"transcript must be text, got {type(transcript).__name__}"
        )
    if not isinstance(analysis_result, Mapping):
        raise InputValidationError(
            f"analysis_result must be a mapping, got {type(analysis_result).__name__}"
        )
    return transcript, analysis_result


# (name, leaf callable, safe default factory)
Leaf = tuple[str, Callable[[str], Any], Callable[[], Any]]


class AnalysisValidator:
    """Orchestrates the three leaves and attaches the rigor verdict to a record.

    Leaves can be injected (any object with the same method) for testing.
    """

    def __init__(
        self,
        lexicon: Lexicon | None = None,
        config: ValidatorConfig | None = None,
        behavior_detector: BehaviorDetector | None = None,
        context_detector: ContextDetector | None = None,
        compliance_checker: LegalComplianceChecker | None = None,
    ):
        self.config = config or ValidatorConfig()
        self.behavior_detector = behavior_detector or BehaviorDetector(
            lexicon=lexicon, evidence_limit=self.config.evidence_limit
        )
        self.context_detector = context_detector or ContextDetector(lexicon=lexicon)
        self.compliance_checker = compliance_checker or LegalComplianceChecker(lexicon=lexicon)

    # =========================================================================
    # PUBLIC API
    # =========================================================================

    def validate(self, transcript: Any, analysis_result: Any) -> Any:
        """Return a validated copy of analysis_result, or the input itself if malformed."""
        try:
            text, record = ensure_inputs(transcript, analysis_result)
        except InputValidationError as e:
            logger.warning(f"[AnalysisValidator] Skipping validation: {e}")
            return analysis_result

        if self.config.parallel_leaves:
            reports = self._run_threaded(text)
        else:
            reports = [self._run_guarded(leaf, text) for leaf in self._leaves()]
        return self._finish(analysis_result, record, reports)

    async def validate_async(self, transcript: Any, analysis_result: Any) -> Any:
        """Same result as validate(), with the leaves run concurrently off the event loop."""
        try:
            text, record = ensure_inputs(transcript, analysis_result)
        except InputValidationError as e:
            logger.warning(f"[AnalysisValidator] Skipping validation: {e}")
            return analysis_result

        leaves = self._leaves()
        results = await asyncio.gather(
            *[asyncio.to_thread(run, text) for _, run, _ in leaves],
            return_exceptions=True,
        )
        reports = []
        for (name, _, fallback), r in zip(leaves, results):
            if isinstance(r, Exception):
                logger.error(f"[AnalysisValidator] {name} failed: {r}")
                r = fallback()
            reports.append(r)
        return self._finish(analysis_result, record, reports)

    # =========================================================================
    # LEAVES
    # =========================================================================

    def _leaves(self) -> list[Leaf]:
        return [
            ("BehaviorDetector", self.behavior_detector.analyze, BehaviorReport.safe_default),
            ("ContextDetector", self.context_detector.analyze, ContextReport.safe_default),
            (
                "LegalComplianceChecker",
                self.compliance_checker.check_compliance,
                ComplianceReport.safe_default,
            ),
        ]

    def _run_guarded(self, leaf: Leaf, text: str) -> Any:
        name, run, fallback = leaf
        try:
            return run(text)
        except Exception as e:
            logger.error(f"[AnalysisValidator] {name} failed: {e}")
            return fallback()

    def _run_threaded(self, text: str) -> list[Any]:
        leaves = self._leaves()
        with ThreadPoolExecutor(max_workers=len(leaves)) as pool:
            futures = [pool.submit(self._run_guarded, leaf, text) for leaf in leaves]
            return [f.result() for f in futures]

    # =========================================================================
    # ASSEMBLY
    # =========================================================================

    def _finish(self, analysis_result: Any, record: Mapping[str, Any], reports: list[Any]) -> Any:
        try:
            return self._assemble(record, *reports)
        except Exception as e:
            logger.error(f"[AnalysisValidator] Assembly failed, returning input unchanged: {e}")
            return analysis_result

    def _assemble(
        self,
        record: Mapping[str, Any],
        behavior: BehaviorReport,
        context: ContextReport,
        compliance: ComplianceReport,
    ) -> dict[str, Any]:
        behavior_score = behavior.safety_score
        context_score = context.hypocrisy_score
        legal_score = compliance.combined_score

        rigorous = rigorous_score(behavior_score, context_score, legal_score)
        normalized = rigorous / WEIGHT_SCALE
        issues = collect_issues(behavior, context, compliance)

        report = ValidationReport(
            behavior_score=behavior_score,
            context_score=context_score,
            legal_score=legal_score,
            rigorous_score=rigorous,
            rigorous_score_normalized=normalized,
            score_breakdown=ScoreBreakdown(
                *weighted_components(behavior_score, context_score, legal_score)
            ),
            detected_issues_count=len(issues),
        )

        result = copy.deepcopy(dict(record))
        result["rigorous_score"] = rigorous
        result["rigorous_score_normalized"] = normalized
        result["behavior_analysis"] = {
            "behavior": behavior.to_dict(),
            "context": context.to_dict(),
            "compliance": compliance.to_dict(),
            "scores": {
                "behavior": behavior_score,
                "context": context_score,
                "legal": legal_score,
                "rigorous": rigorous,
            },
        }
        result["validation_report"] = report.to_dict()

        current, source = extract_current_score(record)
        if source is None:
            logger.warning(f"[AnalysisValidator] No external score found; using {current}")
        delta = current - rigorous
        if is_inflated(current, rigorous):
            warning = DiscrepancyWarning(
                current_score=current,
                rigorous_score=rigorous,
                delta=delta,
                lei_13185_risk=compliance.lei_13185.risk_level,
                overall_risk=compliance.overall_risk,
                reason=build_reason(issues),
                recommendation=build_recommendation(issues),
            )
            result["validation_warning"] = warning.to_dict()
            logger.info(
                f"[AnalysisValidator] Inflated score: current={current} "
                f"(from {source or 'default'}), rigorous={rigorous}, delta={delta}"
            )
        return result


_default_validator: AnalysisValidator | None = None


def validate_analysis(transcript: Any, analysis_result: Any) -> Any:
    """Validate with a shared, default-configured AnalysisValidator."""
    global _default_validator
    if _default_validator is None:
        _default_validator = AnalysisValidator()
    return _default_validator.validate(transcript, analysis_result)
