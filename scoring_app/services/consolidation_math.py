import logging
from typing import Iterable, Mapping, Optional, Sequence

from scoring_app.choices import AccumulationMethod
from scoring_app.conf import scoring_setting
from scoring_app.records import AccumulatedProgress, ConsolidatedValue, Measurable, Measurement
from scoring_app.services.numeric import _round0, coerce_choice, to_finite_number
from scoring_app.services.period_math import planned_months, realized_months
from scoring_app.services.score_math import scaled_thresholds, score

logger = logging.getLogger(__name__)


def _method(method) -> str:
    return coerce_choice(method, AccumulationMethod, scoring_setting("DEFAULT_ACCUMULATION_METHOD"))


def accumulate(
    measurements: Iterable[Measurement],
    method,
    months: Iterable[int],
    year: Optional[int] = None,
) -> ConsolidatedValue:
    """
    Fold the check-ins that fall inside ``months`` into one period-to-date value.

    sum -> total, average -> mean, last_value/manual -> latest check-in.
    Check-ins are ordered by month with a stable sort, so duplicates for the
    same month resolve to the one listed last. ``has_data`` is what tells
    "not measured" apart from a real zero.
    """
    window = set(months)
    relevant = sorted(
        (m for m in measurements
         if m.month in window and (year is None or m.year == year)),
        key=lambda m: m.month,
    )
    if not relevant:
        return ConsolidatedValue(value=0.0, has_data=False)

    values = [to_finite_number(m.value, 0.0) for m in relevant]
    method = _method(method)
    if method == AccumulationMethod.SUM:
        value = sum(values)
    elif method == AccumulationMethod.AVERAGE:
        value = sum(values) / len(values)
    else:
        value = values[-1]
    return ConsolidatedValue(value=value, has_data=True)


def accumulate_planned(
    monthly_targets: Optional[Mapping[int, float]],
    default_target,
    method,
    months: Iterable[int],
) -> float:
    """
    Planned value to date: the sum of the monthly targets for ``sum``, the
    target of the latest month for every other method.
    """
    targets = monthly_targets or {}
    default = to_finite_number(default_target, 0.0)
    method = _method(method)

    planned = 0.0
    for month in sorted(months):
        month_target = to_finite_number(targets.get(month), None)
        if month_target is None:
            month_target = default
        if method == AccumulationMethod.SUM:
            planned += month_target
        else:
            planned = month_target
    return planned


def pace_progress(realized, planned, is_inverse: bool = False, has_data: bool = True) -> Optional[float]:
    """Realized vs planned to date as a whole 0..100 percentage; None when not measured."""
    if not has_data:
        return None
    realized = to_finite_number(realized, 0.0)
    planned = to_finite_number(planned, 0.0)
    if planned == 0:
        return None if realized == 0 else 0.0

    if is_inverse:
        if realized <= planned:
            return 100.0
        ratio = planned / realized
    else:
        ratio = realized / planned
    return _round0(max(0.0, min(1.0, ratio)) * 100)


def target_progress(realized, target, is_inverse: bool = False, has_data: bool = True) -> Optional[float]:
    """
    Realized vs the final target as a whole percentage. Not capped above 100 so that
    overshooting the target stays visible.
    """
    if not has_data:
        return None
    realized = to_finite_number(realized, 0.0)
    target = to_finite_number(target, 0.0)
    if target == 0:
        return None if realized == 0 else 0.0

    if is_inverse:
        if realized <= target:
            return 100.0
        return _round0(max(target / realized, 0.0) * 100)
    return _round0(realized / target * 100)


def accumulated_progress(
    measurable: Measurable,
    measurements: Sequence[Measurement],
    current_month: int,
    year: Optional[int] = None,
) -> AccumulatedProgress:
    """
    Planned and realized values of a measurable up to ``current_month`` and the
    resulting pace score.

    Thresholds are scaled to the planned value in the same proportion they
    hold to the final target. The score is None when nothing is planned yet
    or no check-in falls inside the window.
    """
    planned = accumulate_planned(
        measurable.monthly_targets,
        measurable.target,
        measurable.accumulation_method,
        planned_months(measurable, current_month),
    )
    consolidated = accumulate(
        measurements,
        measurable.accumulation_method,
        realized_months(measurable.cycle, current_month),
        year=year,
    )
    if (not consolidated.has_data
            and measurable.accumulation_method == AccumulationMethod.MANUAL
            and measurable.current_value is not None):
        consolidated = ConsolidatedValue(value=measurable.current_value, has_data=True)

    progress = AccumulatedProgress(
        planned=planned,
        realized=consolidated.value,
        has_data=consolidated.has_data,
    )
    if planned > 0 and consolidated.has_data:
        thresholds = scaled_thresholds(measurable, planned)
        progress.score = score(
            consolidated.value,
            thresholds.min,
            thresholds.target,
            thresholds.max,
            measurable.is_inverse,
        )
    else:
        logger.debug(
            "Measurable %r not scored (planned=%s, has_data=%s)",
            measurable.name, planned, consolidated.has_data,
        )
    return progress
