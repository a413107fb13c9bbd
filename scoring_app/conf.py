"""
Scoring configuration.

Projects override any of these keys through a ``SCORING`` dict in their Django
settings, e.g.::

    SCORING = {"THRESHOLD_MIN_RATIO": 0.9}

When Django settings are not configured (plain library use) the defaults apply.
"""
from django.conf import settings

DEFAULTS = {
    "THRESHOLD_MIN_RATIO": 0.8,
    "THRESHOLD_MAX_RATIO": 1.2,
    "DEFAULT_CYCLE": "anual",
    "DEFAULT_FREQUENCY": "mensal",
    "DEFAULT_ACCUMULATION_METHOD": "last_value",
}


def scoring_setting(name: str):
    if name not in DEFAULTS:
        raise KeyError(f"Unknown scoring setting: {name}")
    if not settings.configured:
        return DEFAULTS[name]
    overrides = getattr(settings, "SCORING", None) or {}
    return overrides.get(name, DEFAULTS[name])
