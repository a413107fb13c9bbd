from datetime import date
from typing import FrozenSet, List, Mapping, NamedTuple, Optional

from scoring_app.choices import Cycle, Frequency
from scoring_app.records import Measurable, normalize_active_quarters


class MonthRange(NamedTuple):
    start: int
    end: int


CYCLE_MONTHS = {
    Cycle.Q1.value: MonthRange(1, 3),
    Cycle.Q2.value: MonthRange(4, 6),
    Cycle.Q3.value: MonthRange(7, 9),
    Cycle.Q4.value: MonthRange(10, 12),
    Cycle.ANUAL.value: MonthRange(1, 12),
}

FREQUENCY_MONTHS = {
    Frequency.MENSAL.value: frozenset(range(1, 13)),
    Frequency.TRIMESTRAL.value: frozenset({3, 6, 9, 12}),
    Frequency.SEMESTRAL.value: frozenset({6, 12}),
    Frequency.ANUAL.value: frozenset({12}),
}


def month_range_for_cycle(cycle) -> MonthRange:
    """Unknown cycles resolve to the whole year."""
    return CYCLE_MONTHS.get(str(cycle), CYCLE_MONTHS[Cycle.ANUAL.value])


def measurement_months(frequency) -> FrozenSet[int]:
    return FREQUENCY_MONTHS.get(str(frequency), FREQUENCY_MONTHS[Frequency.MENSAL.value])


def quarter_for_month(month: int) -> str:
    return f"q{(int(month) - 1) // 3 + 1}"


def current_cycle(today: Optional[date] = None) -> str:
    today = today or date.today()
    return quarter_for_month(today.month)


def is_month_active(month: int, active_quarters: Optional[Mapping], start_month: int = 1) -> bool:
    if month < start_month:
        return False
    quarters = normalize_active_quarters(active_quarters)
    return quarters.get(quarter_for_month(month), False)


def active_months(
    active_quarters: Optional[Mapping],
    start_month: int = 1,
    frequency=Frequency.MENSAL,
) -> List[int]:
    """Months (ascending) that are both enabled and expected to receive a check-in."""
    visible = measurement_months(frequency)
    return [
        m for m in range(1, 13)
        if m in visible and is_month_active(m, active_quarters, start_month)
    ]


def has_active_months_in_cycle(measurable: Measurable, cycle) -> bool:
    """
    Whether the measurable expects at least one check-in inside ``cycle``.
    Used to hide semestral/annual indicators in quarters without measurement.
    """
    if cycle == Cycle.ANUAL:
        return True
    quarters = normalize_active_quarters(measurable.active_quarters)
    # annual measurables show up in every enabled quarter
    if measurable.cycle == Cycle.ANUAL:
        return quarters.get(str(cycle), True)

    start, end = month_range_for_cycle(cycle)
    visible = measurement_months(measurable.frequency)
    for m in range(start, end + 1):
        if m in visible and is_month_active(m, quarters, measurable.start_month):
            return True
    return False


def realized_months(cycle, current_month: int) -> List[int]:
    """Cycle start through min(current_month, cycle end); empty before the cycle starts."""
    start, end = month_range_for_cycle(cycle)
    return list(range(start, min(current_month, end) + 1))


def planned_months(measurable: Measurable, current_month: int) -> List[int]:
    """
    Active measurement months from the cycle start up to the current month.
    A cycle that has not started yet still plans its first month.
    """
    start, end = month_range_for_cycle(measurable.cycle)
    effective = min(max(current_month, start), end)
    visible = measurement_months(measurable.frequency)
    return [
        m for m in range(start, effective + 1)
        if m in visible and is_month_active(m, measurable.active_quarters, measurable.start_month)
    ]
