from typing import Iterable, NamedTuple, Optional, Tuple

from scoring_app.choices import ScoreZone
from scoring_app.conf import scoring_setting
from scoring_app.records import Measurable
from scoring_app.services.numeric import to_finite_number

ZERO_SCORE = 0.0
FLOOR_SCORE = 80.0
TARGET_SCORE = 100.0
MAX_SCORE = 120.0


class Thresholds(NamedTuple):
    min: float
    target: float
    max: float


def resolve_thresholds(
    target,
    threshold_min=None,
    threshold_max=None,
    is_inverse: bool = False,
) -> Thresholds:
    """
    Fill in the missing thresholds of a target.

    ``min`` is always the boundary scoring 80 and ``max`` the one scoring 120.
    For normal measurables the defaults are target*0.8 / target*1.2; for
    inverse ones (lower is better) they are mirrored, target*1.2 / target*0.8.
    """
    target = to_finite_number(target, 0.0)
    low_ratio = float(scoring_setting("THRESHOLD_MIN_RATIO"))
    high_ratio = float(scoring_setting("THRESHOLD_MAX_RATIO"))
    if is_inverse:
        low_ratio, high_ratio = high_ratio, low_ratio

    t_min = to_finite_number(threshold_min, None)
    t_max = to_finite_number(threshold_max, None)
    return Thresholds(
        min=target * low_ratio if t_min is None else t_min,
        target=target,
        max=target * high_ratio if t_max is None else t_max,
    )


def measurable_thresholds(measurable: Measurable) -> Thresholds:
    return resolve_thresholds(
        measurable.target,
        measurable.threshold_min,
        measurable.threshold_max,
        measurable.is_inverse,
    )


def score(value, threshold_min, target, threshold_max, is_inverse: bool = False) -> float:
    """
    Map a value onto the 0..120 score scale.

    Zones (normal measurables):
        value <  min            -> 0
        min    <= value < target -> 80..100
        target <= value < max    -> 100..120
        value >= max            -> 120

    Inverse measurables walk the same zones in the opposite direction:
    ``min`` is the worst boundary and ``max`` the best one. Missing
    thresholds take the defaults of ``resolve_thresholds``.
    """
    t = to_finite_number(target, 0.0)
    if t <= 0:
        return ZERO_SCORE

    v = to_finite_number(value, 0.0)
    t_min, t, t_max = resolve_thresholds(t, threshold_min, threshold_max, is_inverse)

    if is_inverse:
        if v >= t_min:
            return ZERO_SCORE
        if v <= t_max:
            return MAX_SCORE
        if v <= t:
            if t == t_max:
                return MAX_SCORE
            return TARGET_SCORE + (t - v) / (t - t_max) * 20
        if t_min == t:
            return ZERO_SCORE
        return FLOOR_SCORE + (t_min - v) / (t_min - t) * 20

    if v < t_min:
        return ZERO_SCORE
    if v >= t_max:
        return MAX_SCORE
    if v >= t:
        if t_max == t:
            return MAX_SCORE
        return TARGET_SCORE + (v - t) / (t_max - t) * 20
    if t_min == t:
        return ZERO_SCORE
    return FLOOR_SCORE + (v - t_min) / (t - t_min) * 20


def measurable_score(measurable: Measurable, value) -> float:
    """Score ``value`` against the measurable's target and resolved thresholds."""
    thresholds = measurable_thresholds(measurable)
    return score(value, thresholds.min, thresholds.target, thresholds.max, measurable.is_inverse)


def score_zone(value: Optional[float]) -> ScoreZone:
    if value is None:
        return ScoreZone.NO_DATA
    if value >= MAX_SCORE:
        return ScoreZone.EXCEEDED
    if value >= TARGET_SCORE:
        return ScoreZone.ON_TARGET
    if value >= FLOOR_SCORE:
        return ScoreZone.AT_RISK
    return ScoreZone.ZEROED


def scaled_thresholds(measurable: Measurable, reference) -> Thresholds:
    """
    Thresholds around ``reference`` (a planned or monthly target) keeping the
    proportions the measurable's thresholds hold to its final target.
    """
    reference = to_finite_number(reference, 0.0)
    if measurable.target > 0:
        thresholds = measurable_thresholds(measurable)
        low = thresholds.min / measurable.target
        high = thresholds.max / measurable.target
        return Thresholds(min=reference * low, target=reference, max=reference * high)
    return resolve_thresholds(reference, is_inverse=measurable.is_inverse)


def is_at_risk(value: Optional[float]) -> bool:
    """Below the 80 floor. Not measured is not at risk."""
    return value is not None and value < FLOOR_SCORE


def sort_by_score(scored: Iterable[Tuple[Measurable, Optional[float]]], ascending: bool = True):
    """
    Order (measurable, score) pairs by score, worst first by default.
    Not measured entries always go last.
    """
    scored = list(scored)
    measured = [item for item in scored if item[1] is not None]
    unmeasured = [item for item in scored if item[1] is None]
    measured.sort(key=lambda item: item[1], reverse=not ascending)
    return measured + unmeasured
