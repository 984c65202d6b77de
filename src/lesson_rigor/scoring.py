"""
Scoring constants and arithmetic for the rigorous score.

Weights are integer percents so the combination is exact; rounding is
half-up on non-negative values.
"""

BEHAVIOR_WEIGHT = 40
CONTEXT_WEIGHT = 30
LEGAL_WEIGHT = 30
WEIGHT_SCALE = 100

DISCREPANCY_THRESHOLD = 30


def round_half_up(numerator: int, denominator: int = 1) -> int:
    """numerator / denominator rounded half-up, for numerator >= 0."""
    return (2 * numerator + denominator) // (2 * denominator)


def clamp_score(value: int) -> int:
    return max(0, min(100, int(value)))


def weighted_components(behavior: int, context: int, legal: int) -> tuple[int, int, int]:
    """Each leaf score times its weight, individually rounded."""
    return (
        round_half_up(clamp_score(behavior) * BEHAVIOR_WEIGHT, WEIGHT_SCALE),
        round_half_up(clamp_score(context) * CONTEXT_WEIGHT, WEIGHT_SCALE),
        round_half_up(clamp_score(legal) * LEGAL_WEIGHT, WEIGHT_SCALE),
    )


def rigorous_score(behavior: int, context: int, legal: int) -> int:
    """round(behavior*0.40 + context*0.30 + legal*0.30), always within 0..100."""
    total = (
        clamp_score(behavior) * BEHAVIOR_WEIGHT
        + clamp_score(context) * CONTEXT_WEIGHT
        + clamp_score(legal) * LEGAL_WEIGHT
    )
    return clamp_score(round_half_up(total, WEIGHT_SCALE))


def is_inflated(current_score: float, rigorous: int) -> bool:
    """True when the external score exceeds the rigorous one by more than the threshold."""
    return current_score - rigorous > DISCREPANCY_THRESHOLD
