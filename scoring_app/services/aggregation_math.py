import logging
from decimal import Decimal
from typing import Iterable, List, Optional, Sequence, Tuple

from scoring_app.records import AggregateNode, Measurable, Measurement, MonthlyScore, WeightedChild
from scoring_app.services.consolidation_math import accumulated_progress, pace_progress, target_progress
from scoring_app.services.numeric import _d, _round2, to_finite_number
from scoring_app.services.period_math import month_range_for_cycle
from scoring_app.services.score_math import scaled_thresholds, score

logger = logging.getLogger(__name__)

MeasurableHistory = Tuple[Measurable, Sequence[Measurement]]


def weighted_score(children: Iterable[WeightedChild]) -> Optional[float]:
    """
    Weighted average of the measured children.

    Children with ``score=None`` are not measured: they are left out of both
    the numerator and the weight total. A zero weight disables a child.
    Returns None when nothing measured with a positive weight remains.
    """
    weighted_sum = Decimal("0")
    total_weight = Decimal("0")
    for child in children:
        if child.score is None:
            continue
        weight = to_finite_number(child.weight, 0.0)
        if weight <= 0:
            continue
        child_score = to_finite_number(child.score, None)
        if child_score is None:
            continue
        weighted_sum += _d(child_score) * _d(weight)
        total_weight += _d(weight)

    if total_weight == 0:
        return None
    return _round2(weighted_sum / total_weight)


def indicator_score(
    measurable: Measurable,
    measurements: Sequence[Measurement],
    current_month: int,
    year: Optional[int] = None,
) -> Optional[float]:
    """Accumulated (pace) score of one indicator, or None when not measured."""
    return accumulated_progress(measurable, measurements, current_month, year).score


def person_score(
    indicators: Sequence[MeasurableHistory],
    current_month: int,
    year: Optional[int] = None,
) -> Optional[float]:
    children: List[WeightedChild] = []
    for measurable, measurements in indicators:
        try:
            logger.info(f"Calculating score for indicator {measurable.name!r}")
            children.append(WeightedChild(
                score=indicator_score(measurable, measurements, current_month, year),
                weight=measurable.weight,
                label=measurable.name,
            ))
        except (TypeError, ValueError) as e:
            logger.error(f"Error calculating score for indicator {measurable.name!r}: {e}")
            continue
    return weighted_score(children)


def monthly_person_scores(
    indicators: Sequence[MeasurableHistory],
    cycle,
    year: int,
) -> List[MonthlyScore]:
    """
    Person score month by month: each check-in is scored against the target
    of its own month (the monthly target, or the annual one when unset).
    """
    start, end = month_range_for_cycle(cycle)
    results = []
    for month in range(start, end + 1):
        children = []
        for measurable, measurements in indicators:
            month_values = [m for m in measurements if m.month == month and m.year == year]
            if not month_values:
                continue
            target = measurable.monthly_targets.get(month) or measurable.target
            if not target:
                continue
            thresholds = scaled_thresholds(measurable, target)
            children.append(WeightedChild(
                score=score(
                    month_values[-1].value,
                    thresholds.min,
                    thresholds.target,
                    thresholds.max,
                    measurable.is_inverse,
                ),
                weight=measurable.weight,
                label=measurable.name,
            ))
        month_score = weighted_score(children)
        results.append(MonthlyScore(month=month, score=month_score, has_data=month_score is not None))
    return results


def objective_progress(
    key_results: Sequence[MeasurableHistory],
    current_month: int,
    year: Optional[int] = None,
    *,
    label: str = "",
    weight: float = 100.0,
) -> AggregateNode:
    """
    Roll key results up into their objective.

    Two independent passes over the same KR weights:
        pace     -> realized to date vs planned to date (0..100)
        progress -> realized to date vs the KR's final target (may exceed 100)
    """
    node = AggregateNode(label=label, weight=weight)
    for kr, measurements in key_results:
        acc = accumulated_progress(kr, measurements, current_month, year)
        node.pace_children.append(WeightedChild(
            score=pace_progress(acc.realized, acc.planned, kr.is_inverse, acc.has_data),
            weight=kr.weight,
            label=kr.name,
        ))
        node.progress_children.append(WeightedChild(
            score=target_progress(acc.realized, kr.target, kr.is_inverse, acc.has_data),
            weight=kr.weight,
            label=kr.name,
        ))
    node.pace = weighted_score(node.pace_children)
    node.progress = weighted_score(node.progress_children)
    return node


def sector_progress(objectives: Sequence[AggregateNode], *, label: str = "", weight: float = 100.0) -> AggregateNode:
    """Roll objectives up into a sector (or sectors into the company)."""
    node = AggregateNode(label=label, weight=weight)
    node.pace_children = [obj.as_child("pace") for obj in objectives]
    node.progress_children = [obj.as_child("progress") for obj in objectives]
    node.pace = weighted_score(node.pace_children)
    node.progress = weighted_score(node.progress_children)
    return node
