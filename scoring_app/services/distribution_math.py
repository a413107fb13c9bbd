from decimal import Decimal, ROUND_FLOOR, ROUND_HALF_UP
from typing import Dict, Mapping, Optional

from scoring_app.choices import AccumulationMethod, Frequency, MetricType
from scoring_app.conf import scoring_setting
from scoring_app.services.numeric import CENT, _d, coerce_choice, to_finite_number
from scoring_app.services.period_math import active_months

ONE = Decimal('1')


def _as_number(value: Decimal, metric_type: str):
    if metric_type == MetricType.INTEGER and value == value.to_integral_value():
        return int(value)
    return float(value)


def distribute(
    annual_target,
    method,
    active_quarters: Optional[Mapping] = None,
    start_month: int = 1,
    metric_type=MetricType.NUMBER,
    frequency=Frequency.MENSAL,
) -> Dict[int, float]:
    """
    Split an annual accumulated target into monthly targets.

    - manual: nothing is generated, targets are entered by hand.
    - average / last_value: every active month gets the annual target itself.
    - sum: the target is spread evenly and re-summing the months gives back
      exactly the annual target. For integer metrics the base is floored and
      the remainder adds +1 to the last active months; for other metrics the
      base is rounded to 2dp and the last active month absorbs the leftover.
    """
    method = coerce_choice(method, AccumulationMethod, scoring_setting("DEFAULT_ACCUMULATION_METHOD"))
    metric_type = coerce_choice(metric_type, MetricType, MetricType.NUMBER)
    months = active_months(active_quarters, int(start_month or 1), frequency)
    total = _d(to_finite_number(annual_target, 0.0))

    if method == AccumulationMethod.MANUAL or not months:
        return {}

    if method != AccumulationMethod.SUM:
        return {m: _as_number(total, metric_type) for m in months}

    count = len(months)
    is_integer = metric_type == MetricType.INTEGER
    if is_integer:
        base = (total / count).to_integral_value(rounding=ROUND_FLOOR)
        remainder = total - base * count
        extra_start = count - remainder
    else:
        base = (total / count).quantize(CENT, rounding=ROUND_HALF_UP)

    # First n-1 months get the base; the last gets what is left so the sum is exact
    result: Dict[int, float] = {}
    used = Decimal('0')
    for index, month in enumerate(months[:-1]):
        value = base
        if is_integer and index >= extra_start:
            value = base + ONE
        result[month] = _as_number(value, metric_type)
        used += value

    leftover = total - used
    if not is_integer:
        leftover = leftover.quantize(CENT, rounding=ROUND_HALF_UP)
    result[months[-1]] = _as_number(leftover, metric_type)
    return result
