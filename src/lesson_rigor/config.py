"""
Runtime configuration for the validator.

Only operational knobs live here. Scoring weights and the discrepancy
threshold are fixed constants in scoring.py and are not configurable.

Configuration via environment:
    LESSON_RIGOR_EVIDENCE_LIMIT=3      (1..3)
    LESSON_RIGOR_PARALLEL_LEAVES=false
"""

import logging
import os
from dataclasses import dataclass

logger = logging.getLogger(__name__)

DEFAULT_EVIDENCE_LIMIT = 3
MAX_EVIDENCE_LIMIT = 3


@dataclass(frozen=True)
class ValidatorConfig:
    """Configuration for an AnalysisValidator."""

    evidence_limit: int = DEFAULT_EVIDENCE_LIMIT  # snippets kept per behavior category
    parallel_leaves: bool = False  # run detectors in a thread pool from validate()

    def __post_init__(self):
        if not _valid_evidence_limit(self.evidence_limit):
            logger.warning(
                f"[Config] evidence_limit must be 1..{MAX_EVIDENCE_LIMIT} "
                f"(got {self.evidence_limit!r}), using default {DEFAULT_EVIDENCE_LIMIT}"
            )
            object.__setattr__(self, "evidence_limit", DEFAULT_EVIDENCE_LIMIT)

    @classmethod
    def from_env(cls) -> "ValidatorConfig":
        """Load configuration from environment variables, falling back to defaults."""
        return cls(
            evidence_limit=_env_int(
                "LESSON_RIGOR_EVIDENCE_LIMIT", DEFAULT_EVIDENCE_LIMIT, MAX_EVIDENCE_LIMIT
            ),
            parallel_leaves=_env_bool("LESSON_RIGOR_PARALLEL_LEAVES", False),
        )


def _valid_evidence_limit(value) -> bool:
    return (
        isinstance(value, int)
        and not isinstance(value, bool)
        and 1 <= value <= MAX_EVIDENCE_LIMIT
    )


def _env_bool(name: str, default: bool) -> bool:
    raw = os.environ.get(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("true", "1", "yes", "on")


def _env_int(name: str, default: int, max_value: int) -> int:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.warning(f"[Config] Invalid {name}={raw!r}, using default {default}")
        return default
    if not 1 <= value <= max_value:
        logger.warning(
            f"[Config] {name} must be 1..{max_value} (got {value}), using default {default}"
        )
        return default
    return value
