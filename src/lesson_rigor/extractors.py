"""
Score extraction from an externally produced analysis record.

The record's shape belongs to the model adapter, so the "current" score may
live under different keys. Extractors are tried in order; the first one that
returns a number wins. Fields injected by the validator itself (e.g.
rigorous_score) are never read here, so re-validating a record is stable.
"""

import math
from typing import Any, Callable, Mapping

ScoreExtractor = Callable[[Mapping[str, Any]], float | None]

DEFAULT_CURRENT_SCORE = 0


def _dig(record: Any, *path: str) -> Any:
    node = record
    for key in path:
        if not isinstance(node, Mapping):
            return None
        node = node.get(key)
    return node


def _numeric(value: Any) -> float | None:
    # bool is an int subclass but never a score
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    try:
        finite = math.isfinite(value)
    except OverflowError:
        # int too large for a float
        return None
    return value if finite else None


def from_summary(record: Mapping[str, Any]) -> float | None:
    """summary.conformidade_geral"""
    return _numeric(_dig(record, "summary", "conformidade_geral"))


def from_core_metadata(record: Mapping[str, Any]) -> float | None:
    """core_analysis.structured.metadata.conformidade_geral_percent"""
    return _numeric(
        _dig(record, "core_analysis", "structured", "metadata", "conformidade_geral_percent")
    )


SCORE_EXTRACTORS: tuple[ScoreExtractor, ...] = (from_summary, from_core_metadata)


def extract_current_score(
    record: Mapping[str, Any],
    extractors: tuple[ScoreExtractor, ...] = SCORE_EXTRACTORS,
) -> tuple[float, str | None]:
    """Return (score, extractor name). Falls back to (0, None) when no path has a number.

    The value is assumed to already be on a 0-100 scale; no rescaling happens here.
    """
    for extractor in extractors:
        value = extractor(record)
        if value is not None:
            return value, extractor.__name__
    return DEFAULT_CURRENT_SCORE, None
