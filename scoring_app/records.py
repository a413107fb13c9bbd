"""
In-memory records consumed and produced by the scoring services.

These are snapshots assembled by the caller (API or persistence layer); the
services never mutate them.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Optional

from scoring_app.choices import AccumulationMethod, Cycle, Frequency, MetricType, QUARTERS
from scoring_app.conf import scoring_setting
from scoring_app.services.numeric import coerce_choice, to_finite_number


def _all_quarters_on() -> Dict[str, bool]:
    return {q.value: True for q in QUARTERS}


def normalize_active_quarters(active_quarters: Optional[Mapping]) -> Dict[str, bool]:
    """Missing quarters default to enabled; truthy values (1, "true") count as enabled."""
    result = _all_quarters_on()
    for key, enabled in (active_quarters or {}).items():
        key = str(key).lower()
        if key in result:
            result[key] = enabled not in (False, 0, None, "false", "0", "")
    return result


def normalize_monthly_targets(monthly_targets: Optional[Mapping]) -> Dict[int, float]:
    """Keep only entries whose month is 1..12 and whose target is numeric."""
    result: Dict[int, float] = {}
    for month, target in (monthly_targets or {}).items():
        try:
            month = int(month)
        except (TypeError, ValueError):
            continue
        value = to_finite_number(target, None)
        if 1 <= month <= 12 and value is not None:
            result[month] = value
    return result


@dataclass
class Measurement:
    """A single check-in."""

    month: int
    year: int
    value: float = 0.0

    def __post_init__(self) -> None:
        self.month = int(self.month)
        self.year = int(self.year)
        self.value = to_finite_number(self.value, 0.0)


@dataclass
class Measurable:
    """An indicator or a key result."""

    target: float = 0.0
    threshold_min: Optional[float] = None
    threshold_max: Optional[float] = None
    is_inverse: bool = False
    weight: float = 1.0
    accumulation_method: str = AccumulationMethod.LAST_VALUE
    monthly_targets: Dict[int, float] = field(default_factory=dict)
    active_quarters: Dict[str, bool] = field(default_factory=_all_quarters_on)
    start_month: int = 1
    frequency: str = Frequency.MENSAL
    cycle: str = Cycle.ANUAL
    metric_type: str = MetricType.NUMBER
    current_value: Optional[float] = None
    name: str = ""

    def __post_init__(self) -> None:
        self.target = to_finite_number(self.target, 0.0)
        self.threshold_min = to_finite_number(self.threshold_min, None)
        self.threshold_max = to_finite_number(self.threshold_max, None)
        self.current_value = to_finite_number(self.current_value, None)
        self.is_inverse = bool(self.is_inverse)
        self.weight = to_finite_number(self.weight, 0.0)
        self.accumulation_method = coerce_choice(
            self.accumulation_method, AccumulationMethod,
            scoring_setting("DEFAULT_ACCUMULATION_METHOD"),
        )
        self.frequency = coerce_choice(self.frequency, Frequency, scoring_setting("DEFAULT_FREQUENCY"))
        self.cycle = coerce_choice(self.cycle, Cycle, scoring_setting("DEFAULT_CYCLE"))
        self.metric_type = coerce_choice(self.metric_type, MetricType, MetricType.NUMBER)
        self.monthly_targets = normalize_monthly_targets(self.monthly_targets)
        self.active_quarters = normalize_active_quarters(self.active_quarters)
        start = int(to_finite_number(self.start_month, 1) or 1)
        self.start_month = min(max(start, 1), 12)


@dataclass
class ConsolidatedValue:
    value: float = 0.0
    has_data: bool = False


@dataclass
class AccumulatedProgress:
    planned: float = 0.0
    realized: float = 0.0
    has_data: bool = False
    score: Optional[float] = None


@dataclass
class MonthlyScore:
    month: int
    score: Optional[float] = None
    has_data: bool = False


@dataclass
class WeightedChild:
    """A child score with its weight. ``score=None`` means not measured."""

    score: Optional[float]
    weight: float = 1.0
    label: str = ""


@dataclass
class AggregateNode:
    """
    A person, objective or sector with its weighted children.

    ``pace`` aggregates realized-vs-planned scores, ``progress`` aggregates
    realized-vs-final-target scores. Both are computed over the same weights
    but in independent passes.
    """

    label: str = ""
    weight: float = 1.0
    pace_children: List[WeightedChild] = field(default_factory=list)
    progress_children: List[WeightedChild] = field(default_factory=list)
    pace: Optional[float] = None
    progress: Optional[float] = None

    def as_child(self, kind: str = "pace") -> WeightedChild:
        score = self.pace if kind == "pace" else self.progress
        return WeightedChild(score=score, weight=self.weight, label=self.label)
