import logging
import math
from decimal import Decimal, ROUND_HALF_UP, InvalidOperation
from typing import Optional

logger = logging.getLogger(__name__)

CENT = Decimal('0.01')


def _d(x) -> Decimal:
    return Decimal(str(x))

def _round2(x: float | Decimal) -> float:
    return float(_d(x).quantize(CENT, rounding=ROUND_HALF_UP))

def _round0(x: float | Decimal) -> float:
    return float(_d(x).quantize(Decimal('1'), rounding=ROUND_HALF_UP))


def to_finite_number(value, default: Optional[float] = 0.0) -> Optional[float]:
    """
    Normalize an input value to a finite float.

    None, empty strings, non-numeric text, NaN and infinities all return
    ``default``. Strings using a decimal comma ("12,5") are accepted.
    """
    if value is None or isinstance(value, bool):
        return default if value is None else float(value)
    if isinstance(value, str):
        value = value.strip().replace(',', '.')
        if not value:
            return default
    try:
        number = float(value)
    except (TypeError, ValueError, InvalidOperation):
        logger.debug("Non-numeric value %r replaced by %r", value, default)
        return default
    if not math.isfinite(number):
        return default
    return number


def coerce_choice(value, choices, default: str) -> str:
    """Return ``value`` when it is one of ``choices``, otherwise ``default``."""
    if value in choices.values:
        return str(value)
    if value is not None:
        logger.debug("Unknown %s %r, falling back to %r", choices.__name__, value, default)
    return default
